from __future__ import annotations

import base64
import binascii
import json
import re
from typing import Any

from certtools.core.errors import MalformedSegment

_BASE64URL_RE = re.compile(r"[A-Za-z0-9_-]*")


def base64url_encode(data: bytes) -> str:
    return base64.urlsafe_b64encode(data).rstrip(b"=").decode("ascii")


def base64url_decode(data: str) -> bytes:
    """Декодирует base64url без паддинга, при ошибке - ValueError"""
    if not _BASE64URL_RE.fullmatch(data):
        raise ValueError("Invalid base64url characters")
    if len(data) % 4 == 1:
        raise ValueError("Invalid base64url length")
    padding = "=" * (-len(data) % 4)
    try:
        return base64.urlsafe_b64decode(data + padding)
    except binascii.Error as exc:
        raise ValueError(str(exc)) from exc


def encode_segment(value: Any) -> str:
    # Компактный JSON в порядке вставки ключей
    text = json.dumps(value, separators=(",", ":"), ensure_ascii=False)
    return base64url_encode(text.encode("utf-8"))


def decode_segment(text: str) -> Any:
    if not text:
        raise MalformedSegment("Empty segment")
    try:
        raw = base64url_decode(text)
    except ValueError as exc:
        raise MalformedSegment(f"Segment is not valid base64url: {exc}") from exc
    try:
        return json.loads(raw.decode("utf-8"))
    except UnicodeDecodeError as exc:
        raise MalformedSegment("Segment is not valid UTF-8") from exc
    except json.JSONDecodeError as exc:
        raise MalformedSegment(f"Segment is not valid JSON: {exc.msg}") from exc


def build_signing_input(header_text: str, payload_text: str) -> str:
    return f"{header_text}.{payload_text}"
