from __future__ import annotations

from datetime import datetime, timezone
from typing import Any


def _iso_utc(value: datetime) -> str:
    # Наивное время считается UTC; формат как у JS toISOString()
    if value.tzinfo is None:
        value = value.replace(tzinfo=timezone.utc)
    value = value.astimezone(timezone.utc)
    return value.isoformat(timespec="milliseconds").replace("+00:00", "Z")


def create_certificate_payload(
    *,
    certificate_id: str,
    recipient_name: str,
    course_name: str,
    issuer_name: str,
    issue_date: datetime,
    recipient_email: str | None = None,
    expiration_date: datetime | None = None,
    metadata: dict[str, Any] | None = None,
) -> dict[str, Any]:
    """Собирает стандартный набор claims для сертификата"""
    payload: dict[str, Any] = {
        "certificateId": certificate_id,
        "recipientName": recipient_name,
        "courseName": course_name,
        "issuerName": issuer_name,
        "issueDate": _iso_utc(issue_date),
        "type": "certificate",
    }
    if recipient_email:
        payload["recipientEmail"] = recipient_email
    if expiration_date:
        payload["expirationDate"] = _iso_utc(expiration_date)
    if metadata:
        payload["metadata"] = metadata
    return payload
