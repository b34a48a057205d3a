from __future__ import annotations

import logging
from typing import Any

from certtools.core import jwt
from certtools.core.config import Settings, settings as default_settings
from certtools.core.secrets import resolve_secret
from certtools.schemas.token import GeneratedToken, VerificationResponse

logger = logging.getLogger(__name__)


class InvalidClaims(ValueError):
    pass


class TokenService:
    """Сервис выпуска и проверки токенов сертификатов"""

    def __init__(
        self,
        secret: bytes,
        *,
        issuer: str | None = None,
        expires_in: str | None = None,
        algorithms: list[str] | None = None,
    ):
        self.secret = secret
        self.issuer = issuer
        self.expires_in = expires_in
        self.algorithms = algorithms

    @classmethod
    def from_settings(
        cls,
        config: Settings | None = None,
        *,
        secret: bytes | str | None = None,
    ) -> TokenService:
        """Секрет разрешается один раз, на границе приложения"""
        config = config or default_settings
        return cls(
            resolve_secret(secret, config),
            issuer=config.jwt_issuer,
            expires_in=config.jwt_expires_in,
            algorithms=[config.jwt_algorithm],
        )

    def generate(self, claims: Any, *, now: int | None = None) -> GeneratedToken:
        """
        Подписывает произвольные claims и возвращает токен

        Args:
            claims: JSON-объект с данными сертификата
            now: Текущее время в секундах (для тестов)

        Returns:
            Токен и итоговый payload (с iat, jti, iss, exp)
        """
        if not isinstance(claims, dict):
            raise InvalidClaims("Invalid JSON payload")

        token = jwt.sign(
            claims,
            self.secret,
            issuer=self.issuer,
            expires_in=self.expires_in,
            now=now,
        )
        payload = jwt.decode_unsafe(token).payload
        logger.info(f"Issued token jti={payload['jti']} certificate={payload.get('certificateId')}")
        return GeneratedToken(jwt=token, payload=payload)

    def verify(self, token: str, *, now: int | None = None) -> VerificationResponse:
        """Проверяет токен, ошибки проверки возвращаются в ответе"""
        result = jwt.check(
            token,
            self.secret,
            issuer=self.issuer,
            algorithms=self.algorithms,
            now=now,
        )
        if not result.ok:
            logger.warning(f"Token rejected: {result.error.value}")
            return VerificationResponse(
                verified=False,
                jwt=token,
                error=result.error,
                message=result.message,
            )
        logger.debug(f"Token verified jti={result.payload.get('jti')}")
        return VerificationResponse(verified=True, jwt=token, payload=result.payload)
