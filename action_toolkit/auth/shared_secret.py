"""Bearer token issued by exchanging admin username and password."""

import threading
from typing import Any

import httpx
import structlog

from action_toolkit.auth.credentials import (
    DEFAULT_CREDENTIAL_TTL_SECONDS,
    Credential,
    TokenCache,
)
from action_toolkit.http.rest_client import RestClient


logger = structlog.get_logger()

TOKEN_CACHE_KEY = "commerce_basic_auth_token"  # noqa: S105
TOKEN_ENDPOINT_PATH = "rest/V1/integration/admin/token"  # noqa: S105


class SharedSecretStrategy:
    """Authorizes requests with an admin token from the token endpoint.

    The token is cached for one hour. Exchange failures are logged and
    result in ``Authorization: Bearer null`` so the remote API rejects the
    request with 401 instead of this strategy raising.
    """

    def __init__(
        self,
        base_url: str,
        username: str,
        password: str,
        cache: TokenCache | None = None,
        rest_client: RestClient | None = None,
        log: structlog.stdlib.BoundLogger | None = None,
    ) -> None:
        """Initialize the strategy.

        Args:
            base_url: Commerce base URL hosting the token endpoint.
            username: Admin username.
            password: Admin password.
            cache: Token cache; defaults to an empty, store-less cache.
            rest_client: Client used for the exchange call.
            log: Logger to use; defaults to the module logger.
        """
        self._base_url = base_url.rstrip("/")
        self._username = username
        self._password = password
        self._log = (log or logger).bind(component="auth", strategy="shared_secret")
        self._cache = cache or TokenCache(log=self._log)
        self._rest_client = rest_client or RestClient(log=self._log)
        self._lock = threading.Lock()

    @property
    def token_endpoint(self) -> str:
        """Get the token exchange URL."""
        return f"{self._base_url}/{TOKEN_ENDPOINT_PATH}"

    def authorize(self, request: httpx.Request) -> httpx.Request:
        """Attach ``Authorization: Bearer <token>`` to the request."""
        token = self.get_token()
        request.headers["Authorization"] = f"Bearer {_header_value(token)}"
        return request

    def get_token(self) -> str | None:
        """Return the cached token, exchanging credentials on a miss.

        Returns:
            The bearer token, or None if the exchange failed.
        """
        with self._lock:
            cached = self._cache.get(TOKEN_CACHE_KEY)
            if cached is not None:
                return cached

            token = self._issue_token()
            self._cache.put(
                TOKEN_CACHE_KEY,
                Credential(value=token, expires_in_seconds=DEFAULT_CREDENTIAL_TTL_SECONDS),
            )
            return token

    def _issue_token(self) -> str | None:
        try:
            response = self._rest_client.post(
                self.token_endpoint,
                headers={"Content-Type": "application/json"},
                payload={"username": self._username, "password": self._password},
            )
        except Exception as e:  # noqa: BLE001
            self._log.error(
                "basic_auth_token_failed",
                error_type=type(e).__name__,
                error=str(e),
            )
            return None

        token = coerce_token(response)
        if token is None:
            self._log.error(
                "basic_auth_token_failed",
                error="Unexpected token response shape",
                response_type=type(response).__name__,
            )
            return None

        self._log.info("basic_auth_token_issued", token_length=len(token))
        return token


def coerce_token(response: Any) -> str | None:
    """Extract a token from an exchange response.

    Accepts a bare string or ``{"token": ...}``. Other scalars are converted
    to strings; anything else yields None.
    """
    if isinstance(response, str):
        return response
    if isinstance(response, dict):
        token = response.get("token")
        return str(token) if token is not None else None
    if isinstance(response, int | float | bool):
        return str(response)
    return None


def _header_value(token: str | None) -> str:
    return "null" if token is None else token
