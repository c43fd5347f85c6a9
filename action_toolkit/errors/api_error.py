"""ApiError exception and machine-readable error codes."""

from enum import Enum
from typing import Any


class ErrorCode(str, Enum):
    """Machine-readable classification carried by ApiError.

    - VALIDATION_ERROR: Caller-supplied data is malformed (400)
    - PARSE_ERROR: Response body was not the expected JSON shape (500)
    - TIMEOUT_ERROR: Transport timed out (408)
    - NETWORK_ERROR: No HTTP response was received (500)
    - CONFLICT_ERROR: Resource already exists (409)
    - UNEXPECTED_ERROR: Anything else (500)
    """

    VALIDATION_ERROR = "VALIDATION_ERROR"
    PARSE_ERROR = "PARSE_ERROR"
    TIMEOUT_ERROR = "TIMEOUT_ERROR"
    NETWORK_ERROR = "NETWORK_ERROR"
    CONFLICT_ERROR = "CONFLICT_ERROR"
    UNEXPECTED_ERROR = "UNEXPECTED_ERROR"


class ApiError(Exception):
    """Normalized error from a remote API call.

    Carries enough information to build a user-facing diagnostic without
    exposing the raw transport exception.
    """

    def __init__(
        self,
        message: str,
        status_code: int,
        error_code: ErrorCode | str | None = None,
        details: Any = None,
    ) -> None:
        """Initialize the API error.

        Args:
            message: Human-readable error message.
            status_code: HTTP-style status code.
            error_code: Machine-readable error classification.
            details: Additional structured details from the remote API.
        """
        super().__init__(message)
        self.message = message
        self.status_code = status_code
        self.error_code = (
            error_code.value if isinstance(error_code, ErrorCode) else error_code
        )
        self.details = details

    def to_dict(self) -> dict[str, Any]:
        """Convert error to dictionary for logging/serialization.

        Returns:
            Dictionary representation of the error.
        """
        return {
            "message": self.message,
            "status_code": self.status_code,
            "error_code": self.error_code,
            "details": self.details,
        }

    def __repr__(self) -> str:
        return (
            f"ApiError(status_code={self.status_code}, "
            f"error_code={self.error_code!r}, message={self.message!r})"
        )
