"""Process-wide counters for ResilientHttpClient calls."""

from dataclasses import dataclass, field
from typing import Any, ClassVar


@dataclass
class ClientMetrics:
    """Counters shared by every ResilientHttpClient in the process.

    A call is one ``request()`` invocation; it may span several attempts,
    each of which records its response status.
    """

    responses_by_status: dict[int, int] = field(default_factory=dict)
    failures_by_class: dict[str, int] = field(default_factory=dict)
    retries_total: int = 0
    calls_total: int = 0
    call_duration_ms_total: float = 0.0

    _instance: ClassVar["ClientMetrics | None"] = None

    @classmethod
    def get_instance(cls) -> "ClientMetrics":
        """Get singleton metrics instance."""
        if cls._instance is None:
            cls._instance = cls()
        return cls._instance

    @classmethod
    def reset(cls) -> None:
        """Drop the singleton so the next call starts from zero."""
        cls._instance = None

    def record_response(self, status_code: int) -> None:
        """Count one received response by status."""
        self.responses_by_status[status_code] = self.responses_by_status.get(status_code, 0) + 1

    def record_retry(self) -> None:
        self.retries_total += 1

    def record_failure(self, failure_class: str) -> None:
        """Count a call that ended in a FailureResult.

        Args:
            failure_class: TransportErrorClass value, or ``HTTP_<status>``.
        """
        self.failures_by_class[failure_class] = self.failures_by_class.get(failure_class, 0) + 1

    def record_call(self, duration_ms: float) -> None:
        """Count a finished call and its wall time across all attempts."""
        self.calls_total += 1
        self.call_duration_ms_total += duration_ms

    @property
    def failures_total(self) -> int:
        return sum(self.failures_by_class.values())

    @property
    def avg_call_ms(self) -> float:
        """Mean wall time per call, 0.0 before the first call."""
        return self.call_duration_ms_total / self.calls_total if self.calls_total else 0.0

    def snapshot(self) -> dict[str, Any]:
        """Return a copy of the counters, suitable for a log event."""
        return {
            "responses_by_status": dict(self.responses_by_status),
            "failures_by_class": dict(self.failures_by_class),
            "failures_total": self.failures_total,
            "retries_total": self.retries_total,
            "calls_total": self.calls_total,
            "avg_call_ms": round(self.avg_call_ms, 2),
        }
