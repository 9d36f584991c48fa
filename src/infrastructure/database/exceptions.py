"""Exceptions for database operations."""


class PersistenceError(Exception):
    """Raised when the backing store fails.

    The message is safe to log but is never returned to API clients.
    """

    def __init__(self, operation: str, reason: str) -> None:
        self.operation = operation
        self.reason = reason
        super().__init__(f"Database operation '{operation}' failed: {reason}")
