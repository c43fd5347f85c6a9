"""Plain JSON REST transport without authentication or retries."""

from typing import Any

import httpx
import structlog

from action_toolkit.http.constants import (
    DEFAULT_TIMEOUT_SECONDS,
    HTTP_STATUS_NO_CONTENT,
    JSON_CONTENT_TYPES,
)
from action_toolkit.http.errors import HttpError
from action_toolkit.http.redact import redact_url_credentials


logger = structlog.get_logger()


class RestClient:
    """Minimal REST client used by the resource managers and token exchange.

    Non-2xx responses raise HttpError with the message
    ``"HTTP error! status: <code>"``. Callers that need a non-raising
    contract use ResilientHttpClient instead.
    """

    def __init__(
        self,
        timeout: float = DEFAULT_TIMEOUT_SECONDS,
        transport: httpx.BaseTransport | None = None,
        log: structlog.stdlib.BoundLogger | None = None,
    ) -> None:
        """Initialize the client.

        Args:
            timeout: Request timeout in seconds.
            transport: Optional httpx transport (used by tests).
            log: Logger to use; defaults to the module logger.
        """
        self._timeout = timeout
        self._transport = transport
        self._log = (log or logger).bind(component="rest")

    def get(self, url: str, headers: dict[str, str] | None = None) -> Any:
        """GET a URL and return the decoded body."""
        return self.api_call(url, "GET", headers)

    def post(
        self,
        url: str,
        headers: dict[str, str] | None = None,
        payload: Any = None,
    ) -> Any:
        """POST a JSON payload and return the decoded body."""
        return self.api_call(url, "POST", headers, payload)

    def put(
        self,
        url: str,
        headers: dict[str, str] | None = None,
        payload: Any = None,
    ) -> Any:
        """PUT a JSON payload and return the decoded body."""
        return self.api_call(url, "PUT", headers, payload)

    def delete(self, url: str, headers: dict[str, str] | None = None) -> Any:
        """DELETE a URL and return the decoded body (usually None)."""
        return self.api_call(url, "DELETE", headers)

    def api_call(
        self,
        url: str,
        method: str = "GET",
        headers: dict[str, str] | None = None,
        payload: Any = None,
    ) -> Any:
        """Perform one HTTP call.

        Args:
            url: Absolute URL.
            method: HTTP method.
            headers: Request headers.
            payload: JSON-serializable body, or None for no body.

        Returns:
            Decoded JSON, raw text for non-JSON content types, or None for
            empty responses.

        Raises:
            HttpError: If the response status is not 2xx.
            httpx.TransportError: If no response was received.
        """
        request_headers = dict(headers or {})
        if payload is not None and not _has_header(request_headers, "content-type"):
            request_headers["Content-Type"] = "application/json"

        with httpx.Client(
            timeout=self._timeout,
            transport=self._transport,
            follow_redirects=True,
        ) as client:
            response = client.request(
                method.upper(),
                url,
                headers=request_headers,
                json=payload,
            )

        self._log.debug(
            "rest_call",
            method=method.upper(),
            url=redact_url_credentials(url),
            status_code=response.status_code,
        )

        if not response.is_success:
            raise HttpError(response.status_code, response.headers)

        if (
            response.status_code == HTTP_STATUS_NO_CONTENT
            or response.headers.get("content-length") == "0"
        ):
            return None

        content_type = response.headers.get("content-type")
        if content_type is None or _media_type(content_type) in JSON_CONTENT_TYPES:
            if not response.content:
                return None
            return response.json()

        return response.text


def _has_header(headers: dict[str, str], name: str) -> bool:
    return any(key.lower() == name for key in headers)


def _media_type(content_type: str) -> str:
    return content_type.split(";", 1)[0].strip().lower()
