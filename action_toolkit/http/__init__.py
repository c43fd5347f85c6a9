"""HTTP layer: resilient authenticated client, REST transport, pagination."""

from action_toolkit.http.constants import HAL_JSON, JSON_CONTENT_TYPES
from action_toolkit.http.errors import (
    HttpError,
    HttpStatusError,
    ResponseParseError,
    TransportError,
)
from action_toolkit.http.hooks import RequestHooks, attach_response_body, logging_hooks
from action_toolkit.http.metrics import ClientMetrics
from action_toolkit.http.models import (
    FailureResult,
    NormalizedResult,
    RetryPolicy,
    SuccessResult,
    TransportErrorClass,
)
from action_toolkit.http.rest_client import RestClient
from action_toolkit.http.client import ResilientHttpClient  # noqa: I001
from action_toolkit.http.pagination import (
    PaginatedCollectionFetcher,
    PaginationLimitError,
)


__all__ = [
    "HAL_JSON",
    "JSON_CONTENT_TYPES",
    "ClientMetrics",
    "FailureResult",
    "HttpError",
    "HttpStatusError",
    "NormalizedResult",
    "PaginatedCollectionFetcher",
    "PaginationLimitError",
    "RequestHooks",
    "ResilientHttpClient",
    "ResponseParseError",
    "RestClient",
    "RetryPolicy",
    "SuccessResult",
    "TransportError",
    "TransportErrorClass",
    "attach_response_body",
    "logging_hooks",
]
