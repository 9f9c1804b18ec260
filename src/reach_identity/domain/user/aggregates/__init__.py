from reach_identity.domain.user.aggregates.user import DEFAULT_DISPLAY_NAME, User

__all__ = ["DEFAULT_DISPLAY_NAME", "User"]
