"""Typed API errors and the normalizer that produces them.

Every failure leaving the client layer is an ApiError with a stable
status_code / error_code pair and a human-readable message.
"""

from action_toolkit.errors.api_error import ApiError, ErrorCode
from action_toolkit.errors.normalizer import (
    CONFLICTING_ID_HEADER,
    DEFAULT_VALIDATION_MARKERS,
    ErrorNormalizer,
    StatusMessages,
    extract_status_code,
)


__all__ = [
    "CONFLICTING_ID_HEADER",
    "DEFAULT_VALIDATION_MARKERS",
    "ApiError",
    "ErrorCode",
    "ErrorNormalizer",
    "StatusMessages",
    "extract_status_code",
]
