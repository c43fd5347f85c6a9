"""Data models for the HTTP client layer."""

import random
from enum import Enum
from typing import Annotated, Any, Literal

from pydantic import BaseModel, ConfigDict, Field


class TransportErrorClass(str, Enum):
    """Classification of failures where no HTTP response was received.

    - NETWORK_TIMEOUT: Request timed out
    - CONNECTION_ERROR: Could not establish or keep a connection
    - PROTOCOL_ERROR: Malformed exchange at the HTTP protocol level
    - UNKNOWN: Unclassified transport error
    """

    NETWORK_TIMEOUT = "NETWORK_TIMEOUT"
    CONNECTION_ERROR = "CONNECTION_ERROR"
    PROTOCOL_ERROR = "PROTOCOL_ERROR"
    UNKNOWN = "UNKNOWN"


class SuccessResult(BaseModel):
    """Successful call; ``message`` holds the parsed response body."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    success: Literal[True] = True
    message: Any = Field(default=None, description="Parsed response body")

    @property
    def payload(self) -> Any:
        """Alias for the parsed response body."""
        return self.message


class FailureResult(BaseModel):
    """Failed call with a status code and diagnostics."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    success: Literal[False] = False
    status_code: int = Field(description="HTTP status, or 500 when none was received")
    message: str = Field(description="Human-readable failure description")
    body: Any = Field(default=None, description="Error response body, if any")


NormalizedResult = Annotated[
    SuccessResult | FailureResult, Field(discriminator="success")
]


class RetryPolicy(BaseModel):
    """Configuration for retry behavior.

    Defaults mirror a conservative transport policy: two retries for
    idempotent methods on transport failures and a fixed set of status
    codes. Uses exponential backoff:
    delay = base_delay_ms * (exponential_base ^ attempt)
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    max_retries: Annotated[int, Field(ge=0, le=10)] = 2
    base_delay_ms: Annotated[int, Field(ge=0, le=60000)] = 1000
    max_delay_ms: Annotated[int, Field(ge=0, le=300000)] = 30000
    exponential_base: Annotated[float, Field(ge=1.0, le=5.0)] = 2.0
    jitter_factor: Annotated[float, Field(ge=0.0, le=1.0)] = 0.1
    methods: frozenset[str] = frozenset(
        {"GET", "PUT", "HEAD", "DELETE", "OPTIONS", "TRACE"}
    )
    status_codes: frozenset[int] = frozenset(
        {408, 413, 429, 500, 502, 503, 504, 521, 522, 524}
    )

    def should_retry(
        self,
        method: str,
        attempt: int,
        status_code: int | None = None,
    ) -> bool:
        """Determine if a request should be retried.

        Args:
            method: HTTP method of the request.
            attempt: Current attempt number (0-indexed).
            status_code: Response status, or None for a transport failure.

        Returns:
            True if the request should be retried.
        """
        if attempt >= self.max_retries:
            return False

        if method.upper() not in self.methods:
            return False

        return status_code is None or status_code in self.status_codes

    def get_delay_ms(self, attempt: int) -> int:
        """Calculate delay before the next retry attempt.

        Args:
            attempt: Current attempt number (0-indexed).

        Returns:
            Delay in milliseconds.
        """
        delay = self.base_delay_ms * (self.exponential_base**attempt)
        delay = min(delay, self.max_delay_ms)

        jitter = delay * self.jitter_factor * random.random()  # noqa: S311
        return int(delay + jitter)
