# core/exceptions.py

class DomainError(Exception):
    """Base class for domain-level errors."""
    def __init__(self, message: str, *, code: str | None = None):
        super().__init__(message)
        self.code = code or self.__class__.__name__


class ValidationError(DomainError):
    """Raised when loaded or submitted data violates field constraints."""


class NotFoundError(DomainError):
    """Raised when a project, user or role is not found."""


class BusinessRuleError(DomainError):
    """Raised when a business rule is violated (e.g., permission denied)."""
