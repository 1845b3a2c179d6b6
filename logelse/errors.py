"""Exceptions raised by the Logelse SDK."""


class LogelseError(Exception):
    """Base class for every error the SDK raises."""


class ValidationError(LogelseError):
    """A log entry failed structural or format checks. Never retried."""

    def __init__(self, message: str, field: str | None = None):
        super().__init__(message)
        self.message = message
        self.field = field


class BatchValidationError(ValidationError):
    """An entry inside a batch failed validation before anything was sent."""

    def __init__(self, index: int, error: ValidationError):
        super().__init__(f"Invalid log entry at index {index}: {error.message}", field=error.field)
        self.index = index
        self.error = error


class RetryExhaustedError(LogelseError):
    """Every attempt to deliver an entry failed."""

    def __init__(self, attempts: int, last_error: str):
        super().__init__(f"Failed to send log after {attempts} attempts: {last_error}")
        self.attempts = attempts
        self.last_error = last_error
