"""Request and response schemas for the Reach API."""

from reach_crm.presentation.api.schemas.auth import (
    AuthResponse,
    ChangePasswordRequest,
    ForgotPasswordRequest,
    LoginRequest,
    MeResponse,
    MessageResponse,
    ResetPasswordRequest,
    SendActivationEmailRequest,
    SignupRequest,
    SignupResponse,
    UserResponse,
)
from reach_crm.presentation.api.schemas.directory import (
    ContactDetailResponse,
    ContactListResponse,
    ContactResponse,
    PageMeta,
    UserDetailResponse,
    UserListResponse,
)

__all__ = [
    "AuthResponse",
    "ChangePasswordRequest",
    "ContactDetailResponse",
    "ContactListResponse",
    "ContactResponse",
    "ForgotPasswordRequest",
    "LoginRequest",
    "MeResponse",
    "MessageResponse",
    "PageMeta",
    "ResetPasswordRequest",
    "SendActivationEmailRequest",
    "SignupRequest",
    "SignupResponse",
    "UserDetailResponse",
    "UserListResponse",
    "UserResponse",
]
