from __future__ import annotations

from fastapi import APIRouter

from certtools.api.v1 import qr, tokens

api_router = APIRouter()
api_router.include_router(tokens.router, tags=["jwt"])
api_router.include_router(qr.router, tags=["qr"])
