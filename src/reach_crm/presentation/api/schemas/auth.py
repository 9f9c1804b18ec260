"""Authentication schemas for request/response models.

Request fields are optional at the schema level; the services decide
which are required and answer with INVALID_BODY. Field names accept both
camelCase and snake_case.
"""

from typing import Any

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class _CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class UserResponse(_CamelModel):
    """Sanitized user record (no password hash or reset fields)."""

    id: str
    email: str | None = None
    mobile: str | None = None
    name: str
    avatar_url: str | None = None
    google_id: str | None = None
    github_id: str | None = None
    facebook_id: str | None = None
    is_active: bool
    email_verified: bool
    last_login_at: str | None = None
    created_at: str | None = None

    @classmethod
    def from_public_dict(cls, data: dict[str, Any]) -> "UserResponse":
        return cls.model_validate(data)


class SignupRequest(_CamelModel):
    """Request schema for local signup."""

    email: str | None = None
    password: str | None = None
    name: str | None = None
    mobile: str | None = None

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "email": "user@example.com",
                "password": "Pw1!",
                "name": "Ada",
            },
        },
    )


class LoginRequest(_CamelModel):
    """Request schema for login with email or mobile."""

    email: str | None = None
    mobile: str | None = None
    password: str | None = None


class ForgotPasswordRequest(_CamelModel):
    email: str | None = None


class ResetPasswordRequest(_CamelModel):
    token: str | None = None
    new_password: str | None = None


class ChangePasswordRequest(_CamelModel):
    current_password: str | None = None
    new_password: str | None = None


class SendActivationEmailRequest(_CamelModel):
    email: str | None = None


class SignupResponse(BaseModel):
    success: bool = True
    message: str
    user: UserResponse


class AuthResponse(BaseModel):
    """Session token plus the sanitized user."""

    token: str
    user: UserResponse


class MeResponse(BaseModel):
    user: UserResponse


class MessageResponse(BaseModel):
    success: bool = True
    message: str = Field(..., description="Human-readable outcome")
