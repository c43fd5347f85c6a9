"""Protocol interface for authorization strategies."""

from typing import Protocol, runtime_checkable

import httpx


@runtime_checkable
class AuthStrategy(Protocol):
    """Protocol for request authorization.

    Any strategy that implements ``authorize`` can be plugged into
    ResilientHttpClient, regardless of how it obtains credentials
    (token exchange, per-request signature, or delegated identity).
    """

    def authorize(self, request: httpx.Request) -> httpx.Request:
        """Return the request augmented with authorization headers.

        Implementations do not raise for missing or invalid credentials;
        they attach a header the remote API will reject instead.

        Args:
            request: Pending request.

        Returns:
            The authorized request.
        """
        ...
