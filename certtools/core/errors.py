from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any


class TokenErrorKind(str, Enum):
    MISSING_SECRET = "MissingSecret"
    MALFORMED_TOKEN = "MalformedToken"
    MALFORMED_SEGMENT = "MalformedSegment"
    UNSUPPORTED_ALGORITHM = "UnsupportedAlgorithm"
    ALGORITHM_NOT_ALLOWED = "AlgorithmNotAllowed"
    INVALID_SIGNATURE = "InvalidSignature"
    TOKEN_EXPIRED = "TokenExpired"
    TOKEN_NOT_YET_VALID = "TokenNotYetValid"
    ISSUER_MISMATCH = "IssuerMismatch"
    AUDIENCE_MISMATCH = "AudienceMismatch"
    INVALID_DURATION = "InvalidDuration"


class TokenError(Exception):
    """Базовая ошибка работы с токенами"""

    kind: TokenErrorKind


class ConfigurationError(TokenError):
    """Ошибка конфигурации: нет ключа или неверные параметры подписи"""


class VerificationError(TokenError):
    """Токен не прошёл проверку"""


class MissingSecret(ConfigurationError):
    kind = TokenErrorKind.MISSING_SECRET


class InvalidDuration(ConfigurationError):
    kind = TokenErrorKind.INVALID_DURATION


class MalformedToken(VerificationError):
    kind = TokenErrorKind.MALFORMED_TOKEN


class MalformedSegment(VerificationError):
    kind = TokenErrorKind.MALFORMED_SEGMENT


class UnsupportedAlgorithm(VerificationError):
    kind = TokenErrorKind.UNSUPPORTED_ALGORITHM


class AlgorithmNotAllowed(VerificationError):
    kind = TokenErrorKind.ALGORITHM_NOT_ALLOWED


class InvalidSignature(VerificationError):
    kind = TokenErrorKind.INVALID_SIGNATURE


class TokenExpired(VerificationError):
    kind = TokenErrorKind.TOKEN_EXPIRED


class TokenNotYetValid(VerificationError):
    kind = TokenErrorKind.TOKEN_NOT_YET_VALID


class IssuerMismatch(VerificationError):
    kind = TokenErrorKind.ISSUER_MISMATCH


class AudienceMismatch(VerificationError):
    kind = TokenErrorKind.AUDIENCE_MISMATCH


@dataclass(frozen=True)
class VerificationResult:
    """Результат проверки: либо payload, либо вид ошибки"""

    payload: dict[str, Any] | None = None
    error: TokenErrorKind | None = None
    message: str | None = None

    @property
    def ok(self) -> bool:
        return self.error is None

    @classmethod
    def success(cls, payload: dict[str, Any]) -> VerificationResult:
        return cls(payload=payload)

    @classmethod
    def failure(cls, exc: VerificationError) -> VerificationResult:
        return cls(error=exc.kind, message=str(exc))
