# core/exceptions.py

class DomainError(Exception):
    """Base class for domain-level errors."""
    def __init__(self, message: str, *, code: str | None = None):
        super().__init__(message)
        self.code = code or self.__class__.__name__


class ValidationError(DomainError):
    """Raised when configuration or input data is invalid."""


class NotFoundError(DomainError):
    """Raised when a project or related entity is not found."""


class BusinessRuleError(DomainError):
    """Raised when a request violates a business rule (e.g., no budget envelope to report on)."""
