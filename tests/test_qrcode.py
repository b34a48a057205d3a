from __future__ import annotations

import base64

import pytest

pytest.importorskip("pydantic")
pytest.importorskip("segno")

from certtools.core import jwt
from certtools.core.errors import MalformedToken
from certtools.schemas.qrcode import QRCodeOptions
from certtools.services.qrcode import (
    QRCodeError,
    QRCodeRenderer,
    QRDecodeError,
    ScanResult,
    is_valid_token_format,
    read_token_from_image,
)

PNG_MAGIC = b"\x89PNG\r\n\x1a\n"


class FakeScanner:
    def __init__(self, result: ScanResult | None):
        self.result = result
        self.calls: list[bytes] = []

    def scan(self, image: bytes) -> ScanResult | None:
        self.calls.append(image)
        return self.result


@pytest.fixture
def token() -> str:
    return jwt.sign({"certificateId": "CERT-1"}, b"k", issuer="cert-tools", expires_in="24h")


def test_is_valid_token_format(token: str) -> None:
    assert is_valid_token_format(token)
    assert not is_valid_token_format("")
    assert not is_valid_token_format("a.b")
    assert not is_valid_token_format("a..c")
    assert not is_valid_token_format("a.b.c.d")


def test_render_png(token: str) -> None:
    data = QRCodeRenderer().render_png(token)
    assert data.startswith(PNG_MAGIC)


def test_render_png_base64(token: str) -> None:
    encoded = QRCodeRenderer().render_png_base64(token)
    assert not encoded.startswith("data:")
    assert base64.b64decode(encoded).startswith(PNG_MAGIC)


def test_render_svg_uses_colors(token: str) -> None:
    options = QRCodeOptions(dark_color="#112233", light_color="#ffeedd", error_correction="H")
    svg = QRCodeRenderer().render_svg(token, options)
    assert "<svg" in svg
    assert "#123" in svg or "#112233" in svg


def test_render_rejects_oversized_payload() -> None:
    with pytest.raises(QRCodeError):
        QRCodeRenderer(QRCodeOptions(error_correction="H")).render_png("a" * 5000)


def test_read_token_from_image(token: str) -> None:
    scanner = FakeScanner(ScanResult(text=f"  {token}\n", location={"x": 10, "y": 20}))
    result = read_token_from_image(scanner, b"image-bytes")
    assert result.text == token
    assert result.location == {"x": 10, "y": 20}
    assert scanner.calls == [b"image-bytes"]


def test_read_token_scanner_failure() -> None:
    with pytest.raises(QRDecodeError):
        read_token_from_image(FakeScanner(None), b"image-bytes")


def test_read_token_malformed_content() -> None:
    with pytest.raises(MalformedToken):
        read_token_from_image(FakeScanner(ScanResult(text="https://example.com")), b"image-bytes")


def test_render_rejects_invalid_colors(token: str) -> None:
    renderer = QRCodeRenderer()
    with pytest.raises(QRCodeError):
        renderer.render_png(token, QRCodeOptions(dark_color="not-a-color"))
    with pytest.raises(QRCodeError):
        renderer.render_svg(token, QRCodeOptions(light_color="not-a-color"))
