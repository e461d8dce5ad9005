from typing import Optional


class TaskStoreError(Exception):
    """Raised when a task store backend fails to read or write."""

    def __init__(self, message: str, *, cause: Optional[BaseException] = None):
        super().__init__(message)
        self.message = message
        self.cause = cause


class TaskValidationError(ValueError):
    """Raised when submitted task fields are rejected before reaching the store."""

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message
