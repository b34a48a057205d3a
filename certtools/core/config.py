from __future__ import annotations

from functools import lru_cache
from typing import Literal

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore"  # Игнорировать лишние переменные окружения (для Docker)
    )

    app_name: str = "cert-tools"
    app_version: str = "0.1.0"
    log_level: str = "INFO"
    jwt_secret: str | None = None
    jwt_algorithm: str = "HS256"
    jwt_issuer: str = "cert-tools"
    jwt_expires_in: str = "24h"
    qr_width: int = 300
    qr_margin: int = 4
    qr_dark_color: str = "#000000"
    qr_light_color: str = "#FFFFFF"
    qr_error_correction: Literal["L", "M", "Q", "H"] = "M"


@lru_cache
def get_settings() -> Settings:
    return Settings()


settings = get_settings()
