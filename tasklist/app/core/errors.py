from typing import Optional


class TodoValidationError(Exception):
    """Raised when a submitted todo fails input validation before any storage access."""

    def __init__(self, message: str, *, field: Optional[str] = None):
        super().__init__(message)
        self.message = message
        self.field = field
