"""Domain layer errors.

Every error the core raises to its callers is a ``DomainError``. Store-specific
errors are translated into these at the persistence boundary.
"""


class DomainError(Exception):
    """Base domain error."""

    pass


class ValidationError(DomainError):
    """Malformed input (e.g. a refresh token without a user id)."""

    pass


class NotFoundError(DomainError):
    """Raised when a requested resource is not found."""

    def __init__(self, resource: str, identifier: str):
        self.resource = resource
        self.identifier = identifier
        super().__init__(f"{resource} not found: {identifier}")


class InvalidOTPError(DomainError):
    """Raised when a one-time code does not match the given email."""

    def __init__(self, message: str = "Invalid OTP code"):
        super().__init__(message)


class UniqueViolationError(DomainError):
    """Raised when an insert collides with a unique constraint.

    Concurrent sign-ups for the same email end here; the caller may retry.
    """

    retryable = True

    def __init__(self, message: str = "Unique constraint violated"):
        super().__init__(message)


class UnauthorizedError(DomainError):
    """Raised when a token is invalid, expired or malformed."""

    pass


class InternalServerError(DomainError):
    """Store or infrastructure failure not otherwise classified."""

    pass


class EmailDeliveryError(InternalServerError):
    """Raised when the OTP email could not be sent after the code was committed.

    The stored code stays valid; requesting a new code supersedes it.
    """

    def __init__(self, email: str, is_new_user: bool):
        self.email = email
        self.is_new_user = is_new_user
        super().__init__(f"OTP created but failed to send email to {email}")
