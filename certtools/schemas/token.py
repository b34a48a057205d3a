from __future__ import annotations

from typing import Any

from pydantic import BaseModel

from certtools.core.errors import TokenErrorKind


class GeneratedToken(BaseModel):
    jwt: str
    payload: dict[str, Any]


class GenerateResponse(GeneratedToken):
    success: bool = True


class VerifyRequest(BaseModel):
    jwt: str | None = None


class VerificationResponse(BaseModel):
    """Результат проверки токена для транспортного слоя"""
    verified: bool
    jwt: str
    payload: dict[str, Any] | None = None
    error: TokenErrorKind | None = None
    message: str | None = None


class VerifyResponse(VerificationResponse):
    success: bool = True


class JWTInfo(BaseModel):
    algorithm: str
    issuer: str
    note: str
