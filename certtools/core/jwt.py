from __future__ import annotations

import hashlib
import hmac
import math
import re
import time
from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any
from uuid import uuid4

from certtools.core.codec import (
    base64url_decode,
    base64url_encode,
    build_signing_input,
    decode_segment,
    encode_segment,
)
from certtools.core.errors import (
    AlgorithmNotAllowed,
    AudienceMismatch,
    InvalidDuration,
    InvalidSignature,
    IssuerMismatch,
    MalformedSegment,
    MalformedToken,
    MissingSecret,
    TokenExpired,
    TokenNotYetValid,
    UnsupportedAlgorithm,
    VerificationError,
    VerificationResult,
)

ALGORITHM = "HS256"

_DURATION_RE = re.compile(r"(\d+)([smhd])")
_DURATION_UNITS = {"s": 1, "m": 60, "h": 3600, "d": 86400}


@dataclass(frozen=True)
class DecodedToken:
    header: dict[str, Any]
    payload: dict[str, Any]
    signature: str


def _now(now: int | None) -> int:
    return int(time.time()) if now is None else now


def _secret_bytes(secret: bytes | str | None) -> bytes:
    if not secret:
        raise MissingSecret("A signing secret is required")
    if isinstance(secret, str):
        return secret.encode("utf-8")
    return secret


def _mac(secret: bytes, signing_input: str) -> bytes:
    return hmac.new(secret, signing_input.encode("utf-8"), hashlib.sha256).digest()


def _time_claim(payload: dict[str, Any], name: str) -> int | float | None:
    value = payload.get(name)
    if value is None:
        return None
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise MalformedSegment(f"Claim '{name}' must be a number")
    if isinstance(value, float) and not math.isfinite(value):
        raise MalformedSegment(f"Claim '{name}' must be a finite number")
    return value


def parse_duration(value: str) -> int:
    """Переводит строку вида "<число><s|m|h|d>" в секунды"""
    match = _DURATION_RE.fullmatch(value) if isinstance(value, str) else None
    if match is None:
        raise InvalidDuration(f"Invalid expiration time format: {value!r}")
    amount, unit = match.groups()
    return int(amount) * _DURATION_UNITS[unit]


def sign(
    payload: Mapping[str, Any],
    secret: bytes | str | None,
    *,
    issuer: str | None = None,
    audience: str | None = None,
    subject: str | None = None,
    expires_in: str | None = None,
    now: int | None = None,
) -> str:
    if not isinstance(payload, Mapping):
        raise TypeError("Token payload must be a mapping")
    key = _secret_bytes(secret)
    issued_at = _now(now)

    claims: dict[str, Any] = dict(payload)
    # iat и jti всегда выставляются здесь, значения вызывающего затираются
    claims["iat"] = issued_at
    claims["jti"] = uuid4().hex
    if issuer:
        claims["iss"] = issuer
    if audience:
        claims["aud"] = audience
    if subject:
        claims["sub"] = subject
    if expires_in:
        claims["exp"] = issued_at + parse_duration(expires_in)

    header = {"alg": ALGORITHM, "typ": "JWT"}
    signing_input = build_signing_input(encode_segment(header), encode_segment(claims))
    signature_segment = base64url_encode(_mac(key, signing_input))
    return f"{signing_input}.{signature_segment}"


def _split(token: str) -> tuple[str, str, str]:
    if not isinstance(token, str):
        raise MalformedToken("Token must be a string")
    parts = token.split(".")
    if len(parts) != 3 or not all(parts):
        raise MalformedToken("Invalid JWT format")
    header_segment, payload_segment, signature_segment = parts
    return header_segment, payload_segment, signature_segment


def _decode_object(segment: str, name: str) -> dict[str, Any]:
    value = decode_segment(segment)
    if not isinstance(value, dict):
        raise MalformedSegment(f"Token {name} must be a JSON object")
    return value


def decode_unsafe(token: str) -> DecodedToken:
    """
    Декодирует токен БЕЗ проверки подписи и claims

    Только для отображения и отладки, не для решений о доверии
    """
    header_segment, payload_segment, signature_segment = _split(token)
    return DecodedToken(
        header=_decode_object(header_segment, "header"),
        payload=_decode_object(payload_segment, "payload"),
        signature=signature_segment,
    )


def is_expired(token: str, *, now: int | None = None) -> bool:
    payload = decode_unsafe(token).payload
    exp = _time_claim(payload, "exp")
    if exp is None:
        return False
    return exp < _now(now)


def verify(
    token: str,
    secret: bytes | str | None,
    *,
    issuer: str | None = None,
    audience: str | None = None,
    algorithms: list[str] | None = None,
    now: int | None = None,
) -> dict[str, Any]:
    header_segment, payload_segment, signature_segment = _split(token)
    header = _decode_object(header_segment, "header")
    payload = _decode_object(payload_segment, "payload")

    alg = header.get("alg")
    if alg != ALGORITHM:
        raise UnsupportedAlgorithm(f"Unsupported algorithm: {alg}")
    if algorithms is not None and alg not in algorithms:
        raise AlgorithmNotAllowed(f"Algorithm {alg} not allowed")

    key = _secret_bytes(secret)
    # Подпись считается по исходным сегментам, без повторного кодирования
    expected_signature = _mac(key, build_signing_input(header_segment, payload_segment))
    try:
        actual_signature = base64url_decode(signature_segment)
    except ValueError as exc:
        raise InvalidSignature("Invalid JWT signature") from exc
    if base64url_encode(actual_signature) != signature_segment:
        raise InvalidSignature("Invalid JWT signature")
    if not hmac.compare_digest(expected_signature, actual_signature):
        raise InvalidSignature("Invalid JWT signature")

    current = _now(now)
    exp = _time_claim(payload, "exp")
    if exp is not None and exp < current:
        raise TokenExpired("JWT has expired")
    nbf = _time_claim(payload, "nbf")
    if nbf is not None and nbf > current:
        raise TokenNotYetValid("JWT not yet valid")

    if issuer and payload.get("iss") != issuer:
        raise IssuerMismatch(f"Expected issuer {issuer}, got {payload.get('iss')}")
    if audience and payload.get("aud") != audience:
        raise AudienceMismatch(f"Expected audience {audience}, got {payload.get('aud')}")

    return payload


def check(
    token: str,
    secret: bytes | str | None,
    *,
    issuer: str | None = None,
    audience: str | None = None,
    algorithms: list[str] | None = None,
    now: int | None = None,
) -> VerificationResult:
    """
    То же, что verify(), но ошибки проверки возвращаются как результат

    Ошибки конфигурации (например, MissingSecret) по-прежнему выбрасываются
    """
    try:
        payload = verify(
            token,
            secret,
            issuer=issuer,
            audience=audience,
            algorithms=algorithms,
            now=now,
        )
    except VerificationError as exc:
        return VerificationResult.failure(exc)
    return VerificationResult.success(payload)
