"""Authentication exceptions.

These exceptions are raised by the reach_auth package and should be
caught and handled by the application layer (AuthenticationService) or
mapped to HTTP responses by the API exception handlers.
"""


class AuthError(Exception):
    """Base exception for all authentication infrastructure errors."""

    code = "AUTH_ERROR"

    def __init__(self, message: str = "Authentication error"):
        self.message = message
        super().__init__(self.message)


class InvalidTokenError(AuthError):
    """Raised when a signed token cannot be accepted."""

    code = "TOKEN_INVALID"

    def __init__(self, message: str = "Invalid or expired token"):
        super().__init__(message)


class TokenInvalidError(InvalidTokenError):
    """Raised when a token is malformed, forged or of the wrong type."""

    def __init__(self, message: str = "Token is invalid"):
        super().__init__(message)


class TokenExpiredError(InvalidTokenError):
    """Raised when a token's signature is valid but its lifetime has ended."""

    code = "TOKEN_EXPIRED"

    def __init__(self, message: str = "Token has expired"):
        super().__init__(message)


class WeakPasswordError(AuthError):
    """Raised when a password cannot be hashed safely."""

    code = "PASSWORD_TOO_WEAK"

    def __init__(self, message: str = "Password does not meet requirements"):
        super().__init__(message)
