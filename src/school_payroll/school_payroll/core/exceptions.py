class DomainError(Exception):
    """Base exception for business rule violations."""


class ValidationError(DomainError):
    """Raised when input data is invalid or violates domain rules."""


class NotFoundError(DomainError):
    """Raised when a referenced record does not exist."""


class SetupError(DomainError):
    """Raised when a payroll run cannot start (no school context, failing setup queries)."""


class PayrollRunError(DomainError):
    """Raised when every employee attempted in a payroll run failed."""

    def __init__(self, message: str, result=None):
        super().__init__(message)
        self.result = result
