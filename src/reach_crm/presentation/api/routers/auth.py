"""Authentication router for signup, login, activation and password flows."""

from fastapi import APIRouter, status

from reach_crm.presentation.api.dependencies import (
    AuthService,
    CurrentPayload,
    DBSession,
    ResetService,
)
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

router = APIRouter()

SIGNUP_MESSAGE = "User registered successfully. Activation email sent."


@router.post(
    "/signup",
    status_code=status.HTTP_201_CREATED,
    summary="Register a new user",
    responses={
        201: {"description": "User registered, activation email sent"},
        400: {"description": "Invalid body or email/mobile already registered"},
    },
)
async def signup(
    request: SignupRequest,
    auth_service: AuthService,
    session: DBSession,
) -> SignupResponse:
    try:
        user = await auth_service.signup(
            email=request.email,
            password=request.password,
            name=request.name,
            mobile=request.mobile,
        )
        await session.commit()
    except Exception:
        await session.rollback()
        raise

    return SignupResponse(
        message=SIGNUP_MESSAGE,
        user=UserResponse.from_public_dict(user.to_public_dict()),
    )


@router.post(
    "/login",
    summary="Authenticate user",
    responses={
        200: {"description": "Login successful"},
        401: {"description": "Invalid credentials"},
        403: {"description": "Account not activated"},
    },
)
async def login(
    request: LoginRequest,
    auth_service: AuthService,
    session: DBSession,
) -> AuthResponse:
    """
    Authenticate with email or mobile and password.

    Wrong passwords and unknown identifiers get the same 401 response.
    """
    try:
        token, user = await auth_service.login(
            password=request.password,
            email=request.email,
            mobile=request.mobile,
        )
        await session.commit()
    except Exception:
        await session.rollback()
        raise

    return AuthResponse(
        token=token,
        user=UserResponse.from_public_dict(user.to_public_dict()),
    )


@router.post(
    "/forgot-password",
    summary="Request password reset",
    responses={
        200: {"description": "If the email exists, a reset link has been sent"},
    },
)
async def forgot_password(
    request: ForgotPasswordRequest,
    reset_service: ResetService,
    session: DBSession,
) -> MessageResponse:
    """
    Request a password reset email.

    The response is identical whether or not the address is registered.
    """
    try:
        message = await reset_service.request_reset(request.email)
        await session.commit()
    except Exception:
        await session.rollback()
        raise

    return MessageResponse(message=message)


@router.post(
    "/reset-password",
    summary="Reset password with a reset token",
    responses={
        200: {"description": "Password reset"},
        400: {"description": "Invalid or expired token"},
    },
)
async def reset_password(
    request: ResetPasswordRequest,
    reset_service: ResetService,
    session: DBSession,
) -> MessageResponse:
    try:
        await reset_service.reset_password(request.token, request.new_password)
        await session.commit()
    except Exception:
        await session.rollback()
        raise

    return MessageResponse(message="Password reset successful.")


@router.post(
    "/change-password",
    summary="Change password",
    responses={
        200: {"description": "Password changed"},
        400: {"description": "Missing fields or social-login account"},
        401: {"description": "Current password incorrect or not authenticated"},
        404: {"description": "User no longer exists"},
    },
)
async def change_password(
    request: ChangePasswordRequest,
    payload: CurrentPayload,
    auth_service: AuthService,
    session: DBSession,
) -> MessageResponse:
    try:
        await auth_service.change_password(
            user_id=payload.user_id,
            current_password=request.current_password,
            new_password=request.new_password,
        )
        await session.commit()
    except Exception:
        await session.rollback()
        raise

    return MessageResponse(message="Password updated")


@router.get(
    "/activate/{token}",
    summary="Activate account",
    responses={
        200: {"description": "Account activated (or already active)"},
        400: {"description": "Invalid or expired token"},
        404: {"description": "User not found"},
    },
)
async def activate_account(
    token: str,
    auth_service: AuthService,
    session: DBSession,
) -> MessageResponse:
    try:
        message = await auth_service.activate_account(token)
        await session.commit()
    except Exception:
        await session.rollback()
        raise

    return MessageResponse(message=message)


@router.post(
    "/send-activation-email",
    summary="Resend activation email",
    responses={
        200: {"description": "Activation email sent (or account already active)"},
        404: {"description": "User not found"},
    },
)
async def send_activation_email(
    request: SendActivationEmailRequest,
    auth_service: AuthService,
) -> MessageResponse:
    message = await auth_service.resend_activation_email(request.email)
    return MessageResponse(message=message)


@router.get(
    "/me",
    summary="Get current user",
    responses={
        200: {"description": "User embedded in the session token"},
        401: {"description": "Not authenticated"},
    },
)
async def get_me(payload: CurrentPayload) -> MeResponse:
    return MeResponse(user=UserResponse.from_public_dict(payload.user))
