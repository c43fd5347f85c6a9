"""HTTP constants for the client layer.

Centralizes all HTTP-related constants to avoid duplication across modules.
"""

from typing import Final


# HTTP Status Codes
HTTP_STATUS_OK_MIN = 200
HTTP_STATUS_OK_MAX = 300
HTTP_STATUS_NO_CONTENT = 204
HTTP_STATUS_BAD_REQUEST = 400
HTTP_STATUS_UNAUTHORIZED = 401
HTTP_STATUS_FORBIDDEN = 403
HTTP_STATUS_NOT_FOUND = 404
HTTP_STATUS_REQUEST_TIMEOUT = 408
HTTP_STATUS_CONFLICT = 409
HTTP_STATUS_INTERNAL_SERVER_ERROR = 500

# Content types parsed as JSON
JSON_CONTENT_TYPES: Final[tuple[str, ...]] = (
    "application/json",
    "application/hal+json",
)
HAL_JSON = "application/hal+json"

DEFAULT_TIMEOUT_SECONDS = 30.0
