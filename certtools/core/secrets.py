from __future__ import annotations

from certtools.core.config import Settings, get_settings
from certtools.core.errors import MissingSecret


def get_default_secret(config: Settings | None = None) -> bytes:
    """Возвращает общий секрет из настроек (JWT_SECRET)"""
    config = config or get_settings()
    if not config.jwt_secret:
        raise MissingSecret("JWT_SECRET environment variable is required")
    return config.jwt_secret.encode("utf-8")


def resolve_secret(secret: bytes | str | None, config: Settings | None = None) -> bytes:
    """Явно переданный секрет имеет приоритет над секретом из настроек"""
    if secret:
        return secret.encode("utf-8") if isinstance(secret, str) else secret
    return get_default_secret(config)
