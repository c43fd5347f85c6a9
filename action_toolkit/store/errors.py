"""Exceptions for the TTL store layer."""


class StoreError(Exception):
    """Base exception for all TTL store errors.

    Raised for infrastructure failures: the store could not be initialized,
    read, or written.
    """


class StoreConnectionError(StoreError):
    """Raised when the backing store is not reachable or not connected."""

    def __init__(self, message: str = "Store not connected") -> None:
        """Initialize the connection error.

        Args:
            message: Human-readable error message.
        """
        super().__init__(message)
