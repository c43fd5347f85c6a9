"""Authenticated HTTP client that never raises.

Every call resolves to a SuccessResult or a FailureResult:

- success: ``SuccessResult(message=<parsed body>)``
- transport failure (no response): 500 with an "Unexpected error" message
- non-2xx response: that status code, message, and the error body
- anything else: 500 with the raw message
"""

import time
from collections.abc import Callable
from typing import Any

import httpx
import structlog

from action_toolkit.auth.protocols import AuthStrategy
from action_toolkit.http.constants import (
    DEFAULT_TIMEOUT_SECONDS,
    HTTP_STATUS_INTERNAL_SERVER_ERROR,
    HTTP_STATUS_NO_CONTENT,
)
from action_toolkit.http.errors import (
    HttpStatusError,
    ResponseParseError,
    TransportError,
)
from action_toolkit.http.hooks import RequestHooks, logging_hooks
from action_toolkit.http.metrics import ClientMetrics
from action_toolkit.http.models import (
    FailureResult,
    RetryPolicy,
    SuccessResult,
    TransportErrorClass,
)


logger = structlog.get_logger()

_DEFAULT_HEADERS = {"Content-Type": "application/json"}


class ResilientHttpClient:
    """HTTP client wrapping one base URL and one AuthStrategy.

    Provides:
    - Credential injection through the strategy on every attempt
    - Transport-level retries per RetryPolicy, observed via hooks
    - Logging hooks at request, retry, error, and response
    - Normalization of every outcome into one result shape
    """

    def __init__(
        self,
        base_url: str,
        strategy: AuthStrategy,
        log: structlog.stdlib.BoundLogger | None = None,
        retry_policy: RetryPolicy | None = None,
        hooks: RequestHooks | None = None,
        timeout: float = DEFAULT_TIMEOUT_SECONDS,
        transport: httpx.BaseTransport | None = None,
        sleep: Callable[[float], None] = time.sleep,
    ) -> None:
        """Initialize the client.

        Args:
            base_url: Base URL every endpoint is resolved against.
            strategy: Authorization strategy applied to each request.
            log: Logger to use; defaults to the module logger.
            retry_policy: Retry configuration (default: RetryPolicy()).
            hooks: Extra hooks, run after the built-in logging hooks.
            timeout: Request timeout in seconds.
            transport: Optional httpx transport (used by tests).
            sleep: Sleep function used between retries.

        Raises:
            ValueError: If base_url is empty.
        """
        if not base_url:
            msg = "Commerce URL must be provided"
            raise ValueError(msg)

        self._base_url = base_url.rstrip("/")
        self._strategy = strategy
        self._log = (log or logger).bind(component="http", base_url=self._base_url)
        self._retry_policy = retry_policy or RetryPolicy()
        self._hooks = logging_hooks(self._log).merged(hooks)
        self._timeout = timeout
        self._transport = transport
        self._sleep = sleep
        self._metrics = ClientMetrics.get_instance()

    @property
    def base_url(self) -> str:
        """Get the base URL."""
        return self._base_url

    def get(
        self, endpoint: str, headers: dict[str, str] | None = None
    ) -> SuccessResult | FailureResult:
        """Issue a GET request."""
        return self.request(endpoint, "GET", headers)

    def post(
        self,
        endpoint: str,
        headers: dict[str, str] | None = None,
        payload: Any = None,
    ) -> SuccessResult | FailureResult:
        """Issue a POST request with an optional JSON payload."""
        return self.request(endpoint, "POST", headers, payload)

    def put(
        self,
        endpoint: str,
        headers: dict[str, str] | None = None,
        payload: Any = None,
    ) -> SuccessResult | FailureResult:
        """Issue a PUT request with an optional JSON payload."""
        return self.request(endpoint, "PUT", headers, payload)

    def delete(
        self, endpoint: str, headers: dict[str, str] | None = None
    ) -> SuccessResult | FailureResult:
        """Issue a DELETE request."""
        return self.request(endpoint, "DELETE", headers)

    def request(
        self,
        endpoint: str,
        method: str = "POST",
        headers: dict[str, str] | None = None,
        payload: Any = None,
    ) -> SuccessResult | FailureResult:
        """Call an endpoint and normalize the outcome.

        Args:
            endpoint: Path relative to the base URL.
            method: HTTP method.
            headers: Extra request headers.
            payload: JSON-serializable body; None sends no body.

        Returns:
            SuccessResult with the parsed body, or FailureResult. Never raises.
        """
        start_ns = time.perf_counter_ns()
        method = method.upper()

        try:
            with self._http_client() as client:
                body = self._send_with_retry(client, endpoint, method, headers, payload)
        except TransportError as e:
            self._metrics.record_failure(e.error_class.value)
            self._log.error(
                "http_request_failed",
                method=method,
                endpoint=endpoint,
                error_class=e.error_class.value,
                error=str(e),
            )
            return FailureResult(
                status_code=HTTP_STATUS_INTERNAL_SERVER_ERROR,
                message=f'Unexpected error, check logs. Original error "{e}"',
            )
        except HttpStatusError as e:
            self._metrics.record_failure(f"HTTP_{e.status_code}")
            return FailureResult(
                status_code=e.status_code,
                message=str(e),
                body=e.response_body,
            )
        except Exception as e:  # noqa: BLE001
            self._metrics.record_failure(TransportErrorClass.UNKNOWN.value)
            self._log.error(
                "http_request_failed",
                method=method,
                endpoint=endpoint,
                error_type=type(e).__name__,
                error=str(e),
            )
            return FailureResult(
                status_code=HTTP_STATUS_INTERNAL_SERVER_ERROR,
                message=str(e),
            )
        finally:
            self._metrics.record_call((time.perf_counter_ns() - start_ns) / 1_000_000)

        return SuccessResult(message=body)

    def _http_client(self) -> httpx.Client:
        """Build a freshly configured base client for one call."""
        return httpx.Client(
            base_url=f"{self._base_url}/",
            headers=_DEFAULT_HEADERS,
            timeout=self._timeout,
            transport=self._transport,
            follow_redirects=True,
        )

    def _send_with_retry(
        self,
        client: httpx.Client,
        endpoint: str,
        method: str,
        headers: dict[str, str] | None,
        payload: Any,
    ) -> Any:
        """Send the request, retrying per policy.

        Returns:
            Parsed response body.

        Raises:
            TransportError: If no response was received after all retries.
            HttpStatusError: If the final response is not 2xx.
            ResponseParseError: If a 2xx body is not valid JSON.
        """
        attempt = 0
        while True:
            request = client.build_request(
                method,
                endpoint.lstrip("/"),
                headers=headers,
                json=payload,
            )
            request = self._strategy.authorize(request)
            self._hooks.run_before_request(request)

            try:
                response = client.send(request)
            except httpx.TransportError as e:
                error = TransportError(
                    str(e) or type(e).__name__, _classify_transport_error(e)
                )
                if not self._retry_policy.should_retry(method, attempt):
                    raise error from e
                self._before_retry(request, error, attempt)
                attempt += 1
                continue

            response = self._hooks.run_after_response(response)
            self._metrics.record_response(response.status_code)

            if response.is_success:
                return _parse_body(response)

            status_error = HttpStatusError(response)
            if not self._retry_policy.should_retry(method, attempt, response.status_code):
                raise self._hooks.run_before_error(status_error)
            self._before_retry(request, status_error, attempt)
            attempt += 1

    def _before_retry(
        self, request: httpx.Request, error: BaseException, attempt: int
    ) -> None:
        self._metrics.record_retry()
        self._hooks.run_before_retry(request, error, attempt + 1)
        delay_ms = self._retry_policy.get_delay_ms(attempt)
        if delay_ms > 0:
            self._sleep(delay_ms / 1000.0)


def _classify_transport_error(error: httpx.TransportError) -> TransportErrorClass:
    if isinstance(error, httpx.TimeoutException):
        return TransportErrorClass.NETWORK_TIMEOUT
    if isinstance(error, httpx.NetworkError):
        return TransportErrorClass.CONNECTION_ERROR
    if isinstance(error, httpx.ProtocolError):
        return TransportErrorClass.PROTOCOL_ERROR
    return TransportErrorClass.UNKNOWN


def _parse_body(response: httpx.Response) -> Any:
    """Decode a 2xx body; empty responses yield None."""
    if (
        response.status_code == HTTP_STATUS_NO_CONTENT
        or response.headers.get("content-length") == "0"
        or not response.content
    ):
        return None
    try:
        return response.json()
    except ValueError as e:
        msg = f"Failed to parse JSON response: {e}"
        raise ResponseParseError(msg) from e
