from abc import ABC


class UserError(ABC, Exception):
    """Base class for user-related errors.

    All errors that inherit from UserError will have their messages
    displayed to the user. These errors should not contain any
    sensitive information.
    """


class ValidationError(UserError):
    """Raised when user input fails validation."""


class NotFoundError(UserError):
    """Raised when a requested resource is not found."""

    def __init__(self, message: str = "Resource not found") -> None:
        super().__init__(message)


class AuthenticationError(UserError):
    """Raised when authentication fails."""

    def __init__(self, message: str = "Authentication failed") -> None:
        super().__init__(message)


class AuthenticationRequiredError(AuthenticationError):
    """Raised when a protected endpoint is called without a bearer credential."""

    def __init__(self, message: str = "Authentication required") -> None:
        super().__init__(message)


class LoginFailedError(AuthenticationError):
    """Raised when a wallet login attempt is rejected.

    Subclasses name the failed check for logging and tests, but all of them
    carry the same public message so callers cannot tell which check failed.
    """

    public_message = "Invalid wallet signature or nonce"

    def __init__(self) -> None:
        super().__init__(self.public_message)


class UnknownIdentityError(LoginFailedError):
    """No user record exists for the wallet address."""


class NonceMismatchError(LoginFailedError):
    """The submitted nonce is not the user's current pending nonce."""


class InvalidSignatureError(LoginFailedError):
    """The signature does not recover to the claimed wallet address."""


class InvalidTokenError(UserError):
    """Raised when a session token is malformed, tampered with, or expired."""

    def __init__(self, message: str = "Invalid or expired token") -> None:
        super().__init__(message)


class AccessDeniedError(UserError):
    """Raised when a user tries to access a resource they do not have permission for."""

    def __init__(self, message: str = "Access denied") -> None:
        super().__init__(message)


class AdminAccessRequiredError(AccessDeniedError):
    """Raised when a non-admin user calls an admin-scoped operation."""

    def __init__(self, message: str = "Admin access required") -> None:
        super().__init__(message)


class UpstreamStorageError(UserError):
    """Raised when the pinning service fails to store uploaded content."""

    def __init__(self, message: str = "Upload to storage network failed") -> None:
        super().__init__(message)
