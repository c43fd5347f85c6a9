"""Event-handling helpers."""

from action_toolkit.events.loop_breaker import (
    DEFAULT_FINGERPRINT_TTL_SECONDS,
    LoopBreaker,
    fingerprint,
)


__all__ = ["DEFAULT_FINGERPRINT_TTL_SECONDS", "LoopBreaker", "fingerprint"]
