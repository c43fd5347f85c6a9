"""In-process TTL store."""

import threading
import time
from collections.abc import Callable

from action_toolkit.store.models import StoredValue


class MemoryTtlStore:
    """TTL store backed by a dictionary.

    Useful for tests and for single-process tools. Entries are evicted
    lazily on read.
    """

    def __init__(self, clock: Callable[[], float] = time.time) -> None:
        """Initialize an empty store.

        Args:
            clock: Returns the current Unix time in seconds.
        """
        self._clock = clock
        self._entries: dict[str, StoredValue] = {}
        self._lock = threading.Lock()

    def get(self, key: str) -> StoredValue | None:
        """Return the live entry for ``key`` or None."""
        with self._lock:
            entry = self._entries.get(key)
            if entry is None:
                return None
            if entry.expires_at <= self._clock():
                del self._entries[key]
                return None
            return entry

    def put(self, key: str, value: str, ttl: int) -> None:
        """Store ``value`` under ``key`` for ``ttl`` seconds."""
        with self._lock:
            self._entries[key] = StoredValue(
                value=value, expires_at=self._clock() + ttl
            )

    def __len__(self) -> int:
        with self._lock:
            now = self._clock()
            return sum(1 for entry in self._entries.values() if entry.expires_at > now)
