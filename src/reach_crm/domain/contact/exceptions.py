"""Contact domain exceptions."""

from reach_identity.domain.shared.exceptions import EntityNotFoundError, ErrorCode


class ContactNotFoundError(EntityNotFoundError):
    """No contact card exists for the user."""

    def __init__(self, user_id: str | None = None) -> None:
        self.user_id = user_id
        super().__init__(
            "Contact not found",
            code=ErrorCode.CONTACT_NOT_FOUND,
            details={"user_id": user_id} if user_id else None,
        )
