"""Instrumentation points fired around every outgoing request.

Four hook lists run regardless of outcome:

- ``before_request``: after authorization, before the request is sent
- ``before_retry``: before each retry, with the retry count and the triggering error
- ``before_error``: on a non-2xx response, may enrich the error; must return it
- ``after_response``: after any response is received
"""

from collections.abc import Callable
from dataclasses import dataclass, field

import httpx
import structlog

from action_toolkit.http.errors import HttpStatusError
from action_toolkit.http.redact import redact_headers, redact_url_credentials


BeforeRequestHook = Callable[[httpx.Request], None]
BeforeRetryHook = Callable[[httpx.Request, BaseException, int], None]
BeforeErrorHook = Callable[[HttpStatusError], HttpStatusError]
AfterResponseHook = Callable[[httpx.Response], httpx.Response]


@dataclass
class RequestHooks:
    """Ordered hook lists for a client."""

    before_request: list[BeforeRequestHook] = field(default_factory=list)
    before_retry: list[BeforeRetryHook] = field(default_factory=list)
    before_error: list[BeforeErrorHook] = field(default_factory=list)
    after_response: list[AfterResponseHook] = field(default_factory=list)

    def merged(self, other: "RequestHooks | None") -> "RequestHooks":
        """Return new hooks running ``self`` first and then ``other``."""
        if other is None:
            return self
        return RequestHooks(
            before_request=[*self.before_request, *other.before_request],
            before_retry=[*self.before_retry, *other.before_retry],
            before_error=[*self.before_error, *other.before_error],
            after_response=[*self.after_response, *other.after_response],
        )

    def run_before_request(self, request: httpx.Request) -> None:
        for hook in self.before_request:
            hook(request)

    def run_before_retry(
        self, request: httpx.Request, error: BaseException, retry_count: int
    ) -> None:
        for hook in self.before_retry:
            hook(request, error, retry_count)

    def run_before_error(self, error: HttpStatusError) -> HttpStatusError:
        for hook in self.before_error:
            error = hook(error)
        return error

    def run_after_response(self, response: httpx.Response) -> httpx.Response:
        for hook in self.after_response:
            response = hook(response)
        return response


def attach_response_body(error: HttpStatusError) -> HttpStatusError:
    """Copy the parsed error body onto the error for later extraction.

    JSON bodies are decoded; anything else is kept as text. Empty bodies
    leave ``response_body`` as None.
    """
    response = error.response
    if not response.content:
        return error
    try:
        error.response_body = response.json()
    except ValueError:
        error.response_body = response.text
    return error


def logging_hooks(log: structlog.stdlib.BoundLogger) -> RequestHooks:
    """Build the default hook set that logs every stage of a request.

    Args:
        log: Logger the hooks write to.

    Returns:
        Hooks for request, retry, error, and response logging.
    """

    def log_request(request: httpx.Request) -> None:
        log.debug(
            "http_request",
            method=request.method,
            url=redact_url_credentials(str(request.url)),
            headers=redact_headers(request.headers),
        )

    def log_retry(request: httpx.Request, error: BaseException, retry_count: int) -> None:
        log.debug(
            "http_retry",
            method=request.method,
            url=redact_url_credentials(str(request.url)),
            retry_count=retry_count,
            error_type=type(error).__name__,
            error=str(error),
        )

    def log_response(response: httpx.Response) -> httpx.Response:
        log.debug(
            "http_response",
            method=response.request.method,
            url=redact_url_credentials(str(response.request.url)),
            status_code=response.status_code,
            reason=response.reason_phrase,
        )
        return response

    return RequestHooks(
        before_request=[log_request],
        before_retry=[log_retry],
        before_error=[attach_response_body],
        after_response=[log_response],
    )
