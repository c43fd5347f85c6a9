"""Map arbitrary failures onto ApiError.

The decision order is fixed; the first matching rule wins:

1. Already an ApiError: returned unchanged.
2. Validation markers in the message: 400 VALIDATION_ERROR, message verbatim.
3. ``HTTP error! status: <n>`` from RestClient: status ``<n>`` (500 if not
   parsable) with the resource-specific wording.
4. An error carrying a ``response`` object: status and message from it.
5. Timeouts: 408 with the resource-specific timeout wording.
6. JSON/parse failures: 500 PARSE_ERROR.
7. Anything else: 500 ``Network error: <message>``.
"""

import json
import re
from collections.abc import Mapping
from typing import Any, Final, NoReturn

import httpx
from pydantic import BaseModel, ConfigDict

from action_toolkit.errors.api_error import ApiError, ErrorCode
from action_toolkit.http.constants import (
    HTTP_STATUS_BAD_REQUEST,
    HTTP_STATUS_CONFLICT,
    HTTP_STATUS_FORBIDDEN,
    HTTP_STATUS_INTERNAL_SERVER_ERROR,
    HTTP_STATUS_NOT_FOUND,
    HTTP_STATUS_REQUEST_TIMEOUT,
    HTTP_STATUS_UNAUTHORIZED,
)


CONFLICTING_ID_HEADER: Final = "x-conflicting-id"

DEFAULT_VALIDATION_MARKERS: Final[tuple[str, ...]] = (
    "is required",
    "cannot exceed",
    "contains invalid characters",
    "Cannot specify both",
    "must be a valid JSON object",
    "is too large",
)

_HTTP_ERROR_MARKER = "HTTP error! status:"
_HTTP_ERROR_PATTERN = re.compile(r"HTTP error! status:\s*(\d+)")


def extract_status_code(message: str) -> int:
    """Extract the status code from a RestClient error message.

    Args:
        message: Message like ``"HTTP error! status: 404"``.

    Returns:
        The parsed status code, or 500 when none can be read.
    """
    match = _HTTP_ERROR_PATTERN.search(message)
    return int(match.group(1)) if match else HTTP_STATUS_INTERNAL_SERVER_ERROR


class StatusMessages(BaseModel):
    """Resource-specific wording for each failure kind.

    ``default`` is formatted with ``status_code``.
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    resource_label: str
    bad_request: str
    unauthorized: str
    forbidden: str
    not_found: str
    conflict: str
    internal_error: str
    timeout: str
    parse_error: str = "Invalid response format from Adobe I/O Events API"
    default: str = "API Error: HTTP {status_code}"

    def for_status(self, status_code: int) -> str:
        """Return the wording for an HTTP status code."""
        table = {
            HTTP_STATUS_BAD_REQUEST: self.bad_request,
            HTTP_STATUS_UNAUTHORIZED: self.unauthorized,
            HTTP_STATUS_FORBIDDEN: self.forbidden,
            HTTP_STATUS_NOT_FOUND: self.not_found,
            HTTP_STATUS_CONFLICT: self.conflict,
            HTTP_STATUS_INTERNAL_SERVER_ERROR: self.internal_error,
        }
        return table.get(status_code, self.default.format(status_code=status_code))


class ErrorNormalizer:
    """Converts any exception into an ApiError using one wording table.

    One instance exists per resource (providers, event metadata,
    registrations); the algorithm is shared.
    """

    def __init__(
        self,
        messages: StatusMessages,
        validation_markers: tuple[str, ...] = DEFAULT_VALIDATION_MARKERS,
    ) -> None:
        """Initialize the normalizer.

        Args:
            messages: Wording table for this resource.
            validation_markers: Message fragments that identify validation errors.
        """
        self._messages = messages
        self._validation_markers = validation_markers

    @property
    def messages(self) -> StatusMessages:
        """Get the wording table."""
        return self._messages

    def to_api_error(self, error: BaseException) -> ApiError:
        """Normalize an exception.

        Args:
            error: Any exception raised while calling the remote API.

        Returns:
            The normalized ApiError.
        """
        if isinstance(error, ApiError):
            return error

        message = str(error)

        if any(marker in message for marker in self._validation_markers):
            return ApiError(message, HTTP_STATUS_BAD_REQUEST, ErrorCode.VALIDATION_ERROR)

        if _HTTP_ERROR_MARKER in message:
            status_code = extract_status_code(message)
            conflict = self._conflict_error(status_code, getattr(error, "headers", None))
            if conflict is not None:
                return conflict
            return ApiError(self._messages.for_status(status_code), status_code)

        response = getattr(error, "response", None)
        if response is not None:
            return self._from_response(response)

        if self._is_timeout(error, message):
            return ApiError(
                self._messages.timeout,
                HTTP_STATUS_REQUEST_TIMEOUT,
                ErrorCode.TIMEOUT_ERROR,
            )

        if isinstance(error, json.JSONDecodeError) or "JSON" in message or "parse" in message:
            return ApiError(
                self._messages.parse_error,
                HTTP_STATUS_INTERNAL_SERVER_ERROR,
                ErrorCode.PARSE_ERROR,
            )

        return ApiError(
            f"Network error: {message}",
            HTTP_STATUS_INTERNAL_SERVER_ERROR,
            ErrorCode.NETWORK_ERROR,
        )

    def raise_api_error(self, error: BaseException) -> NoReturn:
        """Normalize ``error`` and raise the result chained to it.

        Raises:
            ApiError: Always.
        """
        api_error = self.to_api_error(error)
        if api_error is error:
            raise api_error
        raise api_error from error

    def _from_response(self, response: Any) -> ApiError:
        """Build an ApiError from an error's attached response object."""
        status_code = _response_status(response)
        body = _response_body(response)

        conflict = self._conflict_error(status_code, _field(response, "headers"))
        if conflict is not None:
            return conflict

        if isinstance(body, Mapping):
            message = body.get("message") or body.get("error")
            return ApiError(
                message or self._messages.for_status(status_code),
                status_code,
                body.get("error_code"),
                body.get("details"),
            )

        return ApiError(self._messages.for_status(status_code), status_code)

    def _conflict_error(self, status_code: int, headers: Any) -> ApiError | None:
        """Return a CONFLICT_ERROR when a 409 names the conflicting resource."""
        if status_code != HTTP_STATUS_CONFLICT or not headers:
            return None

        conflicting_id = _header(headers, CONFLICTING_ID_HEADER)
        if not conflicting_id:
            return None

        label = self._messages.resource_label
        return ApiError(
            f"{label} already exists with conflicting ID: {conflicting_id}",
            status_code,
            ErrorCode.CONFLICT_ERROR,
            f"Conflicting {label.lower()} ID: {conflicting_id}",
        )

    @staticmethod
    def _is_timeout(error: BaseException, message: str) -> bool:
        if isinstance(error, httpx.TimeoutException | TimeoutError):
            return True
        if getattr(error, "code", None) == "ETIMEDOUT":
            return True
        return "timeout" in message.lower() or "ETIMEDOUT" in message


def _field(obj: Any, name: str) -> Any:
    """Read ``name`` from a mapping key or an attribute."""
    if isinstance(obj, Mapping):
        return obj.get(name)
    return getattr(obj, name, None)


def _response_status(response: Any) -> int:
    for name in ("status", "status_code", "statusCode"):
        value = _field(response, name)
        if isinstance(value, int) and value > 0:
            return value
    return HTTP_STATUS_INTERNAL_SERVER_ERROR


def _response_body(response: Any) -> Any:
    body = _field(response, "body")
    if body is not None:
        return body
    if isinstance(response, httpx.Response):
        try:
            return response.json()
        except ValueError:
            return None
    return None


def _header(headers: Any, name: str) -> str | None:
    if isinstance(headers, httpx.Headers):
        return headers.get(name)
    if isinstance(headers, Mapping):
        for key, value in headers.items():
            if str(key).lower() == name:
                return str(value)
    return None
