"""TTL key/value stores used for credential caching and loop detection.

Entries carry a time-to-live after which the store stops returning them.
Callers never delete entries explicitly.
"""

from action_toolkit.store.errors import StoreConnectionError, StoreError
from action_toolkit.store.memory import MemoryTtlStore
from action_toolkit.store.models import StoredValue
from action_toolkit.store.protocols import TtlStore
from action_toolkit.store.sqlite import SqliteTtlStore


__all__ = [
    "MemoryTtlStore",
    "SqliteTtlStore",
    "StoreConnectionError",
    "StoreError",
    "StoredValue",
    "TtlStore",
]
