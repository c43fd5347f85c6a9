"""Credential value object and the TTL-backed token cache."""

from collections.abc import Callable

import structlog
from pydantic import BaseModel, ConfigDict, Field

from action_toolkit.store.errors import StoreError
from action_toolkit.store.protocols import TtlStore


logger = structlog.get_logger()

DEFAULT_CREDENTIAL_TTL_SECONDS = 3600


class Credential(BaseModel):
    """An issued credential and its declared lifetime."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    value: str | None = Field(description="Token value, None when issuance failed")
    expires_in_seconds: int = Field(default=DEFAULT_CREDENTIAL_TTL_SECONDS, gt=0)


class TokenCache:
    """Best-effort credential cache over a TTL store.

    Store failures never propagate: an unreachable store behaves like an
    empty cache and writes are dropped. The store is opened lazily through
    ``store_factory`` on first use; a factory that raises disables the cache
    for the lifetime of this instance.
    """

    def __init__(
        self,
        store: TtlStore | None = None,
        store_factory: Callable[[], TtlStore] | None = None,
        log: structlog.stdlib.BoundLogger | None = None,
    ) -> None:
        """Initialize the cache.

        Args:
            store: Ready-to-use store.
            store_factory: Lazily creates the store when ``store`` is None.
            log: Logger to use; defaults to the module logger.
        """
        self._store = store
        self._store_factory = store_factory
        self._store_failed = False
        self._log = (log or logger).bind(component="store")

    def get(self, key: str) -> str | None:
        """Return the cached value for ``key``, or None on miss or failure."""
        store = self._resolve_store()
        if store is None:
            return None
        try:
            entry = store.get(key)
        except StoreError as e:
            self._log.warning("token_cache_read_failed", key=key, error=str(e))
            return None
        return entry.value if entry is not None else None

    def put(self, key: str, credential: Credential) -> None:
        """Cache a credential for its declared lifetime.

        Credentials without a value are not cached.
        """
        if credential.value is None:
            return
        store = self._resolve_store()
        if store is None:
            return
        try:
            store.put(key, credential.value, credential.expires_in_seconds)
        except StoreError as e:
            self._log.warning("token_cache_write_failed", key=key, error=str(e))

    def _resolve_store(self) -> TtlStore | None:
        if self._store is not None:
            return self._store
        if self._store_factory is None or self._store_failed:
            return None
        try:
            self._store = self._store_factory()
        except Exception as e:  # noqa: BLE001
            self._store_failed = True
            self._log.warning("token_cache_unavailable", error=str(e))
            return None
        return self._store
