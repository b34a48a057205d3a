from __future__ import annotations

from datetime import datetime
from typing import Any

from pydantic import BaseModel


class CertificateCreate(BaseModel):
    certificate_id: str
    recipient_name: str
    course_name: str
    issuer_name: str
    issue_date: datetime
    recipient_email: str | None = None
    expiration_date: datetime | None = None
    metadata: dict[str, Any] | None = None
