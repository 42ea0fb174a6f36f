"""Exceptions raised by the account services."""


class AccountError(Exception):
    """Base class for account service errors."""

    message = "Account error"

    def __init__(self, message: str | None = None):
        super().__init__(message or self.message)

    @property
    def detail(self) -> str:
        return str(self)


class ValidationError(AccountError):
    """The request conflicts with existing data."""


class NotFoundError(AccountError):
    """The requested record does not exist."""


class AuthError(AccountError):
    """Credentials or tokens could not be verified."""


class UnexpectedError(AccountError):
    """A collaborator failed in a way the caller cannot recover from."""


class DuplicateUsername(ValidationError):
    message = "Username already exists"


class UnsupportedPassword(ValidationError):
    message = "Password cannot be hashed"


class UserNotFound(NotFoundError):
    message = "User not found"


class InvalidPassword(AuthError):
    message = "Invalid password"


class InvalidTokenError(AuthError):
    message = "Invalid authentication credentials"


class CredentialStoreError(UnexpectedError):
    """The credential store failed; carries the driver's message."""
