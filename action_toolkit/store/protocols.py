"""Protocol interface for TTL key/value stores."""

from typing import Protocol, runtime_checkable

from action_toolkit.store.models import StoredValue


@runtime_checkable
class TtlStore(Protocol):
    """Key/value store where every entry expires after its TTL.

    Implementations are responsible for expiry; callers only read and write.
    """

    def get(self, key: str) -> StoredValue | None:
        """Read a live entry.

        Args:
            key: Entry key.

        Returns:
            The stored value, or None when absent or expired.

        Raises:
            StoreError: If the backing store cannot be read.
        """
        ...

    def put(self, key: str, value: str, ttl: int) -> None:
        """Write an entry, replacing any previous value under the same key.

        Args:
            key: Entry key.
            value: String value to store.
            ttl: Time-to-live in seconds.

        Raises:
            StoreError: If the backing store cannot be written.
        """
        ...
