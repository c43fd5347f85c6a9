"""Exceptions raised inside the HTTP layer.

RestClient raises HttpError to its callers. TransportError, HttpStatusError
and ResponseParseError are raised while ResilientHttpClient sends a request
and are always converted into a FailureResult before leaving it.
"""

from typing import Any

import httpx

from action_toolkit.http.models import TransportErrorClass


class HttpError(Exception):
    """Non-2xx response from RestClient.

    The message is always ``"HTTP error! status: <code>"``.
    """

    def __init__(self, status_code: int, headers: httpx.Headers | None = None) -> None:
        """Initialize the error.

        Args:
            status_code: HTTP status code of the response.
            headers: Response headers, kept for conflict diagnostics.
        """
        self.status_code = status_code
        self.headers = headers
        super().__init__(f"HTTP error! status: {status_code}")


class TransportError(Exception):
    """No HTTP response was received (DNS failure, refused or reset connection)."""

    def __init__(self, message: str, error_class: TransportErrorClass) -> None:
        """Initialize the error.

        Args:
            message: Description of the underlying failure.
            error_class: Discriminator for the kind of transport failure.
        """
        self.error_class = error_class
        super().__init__(message)


class HttpStatusError(Exception):
    """A response was received with a non-2xx status.

    ``response_body`` is attached by the before-error hook so it can be
    copied into the FailureResult.
    """

    def __init__(self, response: httpx.Response) -> None:
        """Initialize the error from the offending response.

        Args:
            response: The HTTP response.
        """
        self.response = response
        self.status_code = response.status_code
        self.response_body: Any = None
        super().__init__(
            f"Response code {response.status_code} ({response.reason_phrase})"
        )


class ResponseParseError(Exception):
    """A 2xx response body could not be decoded as JSON."""
