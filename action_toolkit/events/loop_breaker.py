"""Detect events that an action itself produced.

Before emitting an event, an action stores a fingerprint of the payload under
a key. When the echo of that event arrives, ``check`` recomputes the
fingerprint and reports a match so the action can skip it.

Store failures propagate: a missing store must stop processing rather than
risk an infinite event loop.
"""

import hashlib
import json
from collections.abc import Callable, Iterable
from typing import Any, TypeVar

import structlog

from action_toolkit.store.protocols import TtlStore


logger = structlog.get_logger()

DEFAULT_FINGERPRINT_TTL_SECONDS = 60

T = TypeVar("T")

Lazy = T | Callable[[], T]


def fingerprint(data: Any) -> str:
    """Return the SHA-256 hex digest of the canonical JSON form of ``data``.

    Keys are sorted, non-ASCII characters are escaped and no whitespace is
    emitted, so logically equal payloads produce the same fingerprint.
    """
    canonical = json.dumps(data, sort_keys=True, separators=(",", ":"))
    return hashlib.sha256(canonical.encode("ascii")).hexdigest()


def _resolve(value: Any) -> Any:
    return value() if callable(value) else value


class LoopBreaker:
    """Stores and compares event fingerprints in a TTL store."""

    def __init__(
        self,
        store: TtlStore,
        log: structlog.stdlib.BoundLogger | None = None,
    ) -> None:
        """Initialize the loop breaker.

        Args:
            store: TTL store holding fingerprints.
            log: Logger to use; defaults to the module logger.
        """
        self._store = store
        self._log = (log or logger).bind(component="loop_breaker")

    def check(
        self,
        key: Lazy[str],
        event_types: Iterable[str],
        current_event_type: str,
        fingerprint_input: Lazy[Any],
    ) -> bool:
        """Report whether the current event repeats a stored one.

        ``key`` and ``fingerprint_input`` may be zero-argument callables;
        they are only evaluated when the event type is protected.

        Args:
            key: Store key, or a callable returning it.
            event_types: Event types this check applies to.
            current_event_type: Type of the event being processed.
            fingerprint_input: Payload to fingerprint, or a callable returning it.

        Returns:
            True when a fingerprint is stored under ``key`` and equals the
            fingerprint of ``fingerprint_input``.

        Raises:
            StoreError: If the store cannot be read.
        """
        if current_event_type not in set(event_types):
            return False

        resolved_key = _resolve(key)
        stored = self._store.get(resolved_key)
        if stored is None:
            self._log.debug("loop_breaker_checked", key=resolved_key, found=False)
            return False

        matched = stored.value == fingerprint(_resolve(fingerprint_input))
        self._log.debug(
            "loop_breaker_checked", key=resolved_key, found=True, matched=matched
        )
        return matched

    def store(
        self,
        key: Lazy[str],
        fingerprint_input: Lazy[Any],
        ttl_seconds: int = DEFAULT_FINGERPRINT_TTL_SECONDS,
    ) -> None:
        """Write the fingerprint of ``fingerprint_input`` under ``key``.

        Any previous fingerprint under the same key is replaced.

        Raises:
            StoreError: If the store cannot be written.
        """
        resolved_key = _resolve(key)
        self._store.put(resolved_key, fingerprint(_resolve(fingerprint_input)), ttl_seconds)
        self._log.debug("loop_breaker_stored", key=resolved_key, ttl=ttl_seconds)
