"""Email value object.

Addresses are the login identifier for local accounts and the linking key
for OAuth identities, so two spellings of one mailbox must compare equal.
Normalization lowercases the whole address and strips surrounding
whitespace before validation.
"""

import re
from dataclasses import dataclass

from reach_identity.domain.user.exceptions import InvalidEmailError

MAX_EMAIL_LENGTH = 254

_LOCAL_PART = re.compile(r"^[a-z0-9._%+-]+$")
_DOMAIN = re.compile(r"^(?:[a-z0-9-]+\.)+[a-z]{2,}$")


def normalize_email(raw: str) -> str:
    """Lowercased, stripped form of ``raw`` used for storage and lookup."""
    return raw.strip().lower()


@dataclass(frozen=True)
class Email:
    """Validated, normalized email address."""

    value: str

    def __post_init__(self) -> None:
        normalized = normalize_email(self.value or "")
        if not normalized:
            raise InvalidEmailError("Email cannot be empty")
        if len(normalized) > MAX_EMAIL_LENGTH:
            raise InvalidEmailError("Email address too long")

        local, sep, domain = normalized.rpartition("@")
        if not sep or not _LOCAL_PART.match(local) or not _DOMAIN.match(domain):
            raise InvalidEmailError(f"Invalid email format: {self.value}")

        object.__setattr__(self, "value", normalized)

    def __str__(self) -> str:
        return self.value
