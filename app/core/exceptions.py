class DomainError(Exception):
    """Base exception for business rule violations."""

    def __init__(self, detail: str):
        super().__init__(detail)
        self.detail = detail


class ValidationError(DomainError):
    """Raised when input data is invalid or violates domain rules."""


class NotFoundError(DomainError):
    """Raised when the targeted entity does not exist."""


class AccessDenied(DomainError):
    """Raised when a user lacks the role or ownership for an action."""


class ConflictError(DomainError):
    """Raised when an operation would break a business invariant."""
