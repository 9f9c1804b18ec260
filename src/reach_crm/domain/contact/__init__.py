"""Contact directory domain."""

from reach_crm.domain.contact.contact import Contact
from reach_crm.domain.contact.exceptions import ContactNotFoundError
from reach_crm.domain.contact.repository import ContactRepository

__all__ = [
    "Contact",
    "ContactNotFoundError",
    "ContactRepository",
]
