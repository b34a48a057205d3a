from __future__ import annotations

from typing import Literal

from pydantic import BaseModel, Field

ErrorCorrection = Literal["L", "M", "Q", "H"]


class QRCodeOptions(BaseModel):
    width: int = Field(default=300, gt=0)
    margin: int = Field(default=4, ge=0)
    dark_color: str = "#000000"
    light_color: str = "#FFFFFF"
    error_correction: ErrorCorrection = "M"


class QRCodeRequest(BaseModel):
    """Параметры, не переданные в запросе, берутся из настроек"""
    jwt: str
    format: Literal["png", "svg"] = "png"
    width: int | None = Field(default=None, gt=0)
    margin: int | None = Field(default=None, ge=0)
    dark_color: str | None = None
    light_color: str | None = None
    error_correction: ErrorCorrection | None = None
