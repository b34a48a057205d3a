from __future__ import annotations

from fastapi import HTTPException, status

from certtools.core.config import settings
from certtools.core.errors import MissingSecret
from certtools.services.qrcode import QRCodeRenderer, default_options
from certtools.services.tokens import TokenService


def get_token_service() -> TokenService:
    try:
        return TokenService.from_settings(settings)
    except MissingSecret as exc:
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Signing secret is not configured",
        ) from exc


def get_qr_renderer() -> QRCodeRenderer:
    return QRCodeRenderer(default_options(settings))
