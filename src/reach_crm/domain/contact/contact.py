"""Contact card shown in the CRM directory."""

from dataclasses import dataclass, field
from datetime import datetime
from typing import Any
from uuid import UUID, uuid4

from reach_identity.domain.shared.time import utc_now


@dataclass(frozen=True)
class Contact:
    """One contact card per user. Read-only for the API."""

    user_id: UUID
    name: str
    email: str | None = None
    phone: str | None = None
    company: str | None = None
    job_title: str | None = None
    notes: str | None = None
    id: UUID = field(default_factory=uuid4)
    created_at: datetime = field(default_factory=utc_now)
    updated_at: datetime = field(default_factory=utc_now)

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": str(self.id),
            "userId": str(self.user_id),
            "name": self.name,
            "email": self.email,
            "phone": self.phone,
            "company": self.company,
            "jobTitle": self.job_title,
            "notes": self.notes,
            "createdAt": self.created_at.isoformat(),
            "updatedAt": self.updated_at.isoformat(),
        }
