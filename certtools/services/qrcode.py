from __future__ import annotations

import base64
import io
import logging
from dataclasses import dataclass, field
from typing import Any, Protocol

import segno

from certtools.core.config import Settings, settings as default_settings
from certtools.core.errors import MalformedToken
from certtools.schemas.qrcode import QRCodeOptions

logger = logging.getLogger(__name__)


class QRCodeError(Exception):
    """Не удалось построить QR-код"""


class QRDecodeError(Exception):
    """Сканер не нашёл QR-код на изображении"""


def is_valid_token_format(text: str) -> bool:
    """Проверка формата: три непустых сегмента через точку"""
    parts = text.split(".")
    return len(parts) == 3 and all(parts)


def default_options(config: Settings | None = None) -> QRCodeOptions:
    config = config or default_settings
    return QRCodeOptions(
        width=config.qr_width,
        margin=config.qr_margin,
        dark_color=config.qr_dark_color,
        light_color=config.qr_light_color,
        error_correction=config.qr_error_correction,
    )


class QRCodeRenderer:
    """Рендер токена в QR-код (PNG или SVG). Содержимое токена не разбирается"""

    def __init__(self, options: QRCodeOptions | None = None):
        self.options = options or QRCodeOptions()

    def _make(self, token: str, options: QRCodeOptions) -> tuple[segno.QRCode, int]:
        try:
            qr = segno.make(token, error=options.error_correction.lower(), micro=False, boost_error=False)
        except segno.DataOverflowError as exc:
            raise QRCodeError(f"Token is too long for a QR code: {exc}") from exc
        width, _ = qr.symbol_size(scale=1, border=options.margin)
        # Масштаб подбирается под ширину, минимум 1 пиксель на модуль
        scale = max(1, options.width // width)
        return qr, scale

    def render_png(self, token: str, options: QRCodeOptions | None = None) -> bytes:
        options = options or self.options
        qr, scale = self._make(token, options)
        buffer = io.BytesIO()
        try:
            qr.save(
                buffer,
                kind="png",
                scale=scale,
                border=options.margin,
                dark=options.dark_color,
                light=options.light_color,
            )
        except ValueError as exc:
            # segno проверяет цвета только при записи
            raise QRCodeError(f"Invalid QR code options: {exc}") from exc
        logger.debug(f"Rendered PNG QR code version={qr.version} scale={scale}")
        return buffer.getvalue()

    def render_png_base64(self, token: str, options: QRCodeOptions | None = None) -> str:
        """PNG в base64 без префикса data URL"""
        return base64.b64encode(self.render_png(token, options)).decode("ascii")

    def render_svg(self, token: str, options: QRCodeOptions | None = None) -> str:
        options = options or self.options
        qr, scale = self._make(token, options)
        try:
            return qr.svg_inline(
                scale=scale,
                border=options.margin,
                dark=options.dark_color,
                light=options.light_color,
            )
        except ValueError as exc:
            raise QRCodeError(f"Invalid QR code options: {exc}") from exc


@dataclass(frozen=True)
class ScanResult:
    text: str
    location: dict[str, Any] = field(default_factory=dict)


class QRScanner(Protocol):
    def scan(self, image: bytes) -> ScanResult | None:
        """Пытается распознать QR-код; None если ничего не найдено"""
        ...


def read_token_from_image(scanner: QRScanner, image: bytes) -> ScanResult:
    """
    Извлекает токен из изображения с QR-кодом

    Args:
        scanner: Внешний сканер QR-кодов
        image: Байты изображения

    Returns:
        Распознанный текст и координаты кода

    Raises:
        QRDecodeError: сканер ничего не распознал
        MalformedToken: распознанный текст не похож на токен
    """
    result = scanner.scan(image)
    if result is None or not result.text:
        raise QRDecodeError("No QR code found in image")
    text = result.text.strip()
    if not is_valid_token_format(text):
        raise MalformedToken("QR code does not contain a valid JWT")
    return ScanResult(text=text, location=result.location)
