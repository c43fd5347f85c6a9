"""OAuth client-credentials implementation of IdentityContext."""

import threading
import time
from collections.abc import Callable
from http import HTTPStatus

import httpx
import structlog

from action_toolkit.auth.delegated_token import ImsConfig
from action_toolkit.auth.errors import IdentityError


logger = structlog.get_logger()

DEFAULT_TOKEN_ENDPOINT = "https://ims-na1.adobelogin.com/ims/token/v3"  # noqa: S105

# Tokens are refreshed this many seconds before the reported expiry.
EXPIRY_MARGIN_SECONDS = 60


class OAuthClientCredentialsContext:
    """Identity context backed by an OAuth ``client_credentials`` endpoint.

    Configurations are kept by name. Tokens are cached per context name in
    memory until shortly before they expire.
    """

    def __init__(
        self,
        token_endpoint: str = DEFAULT_TOKEN_ENDPOINT,
        timeout: float = 15.0,
        transport: httpx.BaseTransport | None = None,
        clock: Callable[[], float] = time.time,
        log: structlog.stdlib.BoundLogger | None = None,
    ) -> None:
        """Initialize the context.

        Args:
            token_endpoint: OAuth token endpoint URL.
            timeout: Request timeout in seconds.
            transport: Optional httpx transport (used by tests).
            clock: Returns the current Unix time in seconds.
            log: Logger to use; defaults to the module logger.
        """
        self._token_endpoint = token_endpoint
        self._timeout = timeout
        self._transport = transport
        self._clock = clock
        self._log = (log or logger).bind(component="auth", subcomponent="identity")
        self._configs: dict[str, ImsConfig] = {}
        self._tokens: dict[str, tuple[str, float]] = {}
        self._current: str | None = None
        self._lock = threading.Lock()

    @property
    def current(self) -> str | None:
        """Get the current context name."""
        return self._current

    def set_current(self, name: str) -> None:
        self._current = name

    def set(self, name: str, config: ImsConfig) -> None:
        with self._lock:
            if self._configs.get(name) != config:
                self._tokens.pop(name, None)
            self._configs[name] = config

    def get_token(self) -> str:
        """Return a token for the current context, requesting one if needed.

        Raises:
            IdentityError: If no context is configured or the request fails.
        """
        name = self._current
        if name is None or name not in self._configs:
            msg = f"No identity configuration for context {name!r}"
            raise IdentityError(msg)

        with self._lock:
            cached = self._tokens.get(name)
            if cached is not None and cached[1] > self._clock():
                return cached[0]

            token, expires_in = self._request_token(self._configs[name])
            self._tokens[name] = (
                token,
                self._clock() + max(expires_in - EXPIRY_MARGIN_SECONDS, 0),
            )
            return token

    def _request_token(self, config: ImsConfig) -> tuple[str, int]:
        try:
            with httpx.Client(timeout=self._timeout, transport=self._transport) as client:
                response = client.post(
                    self._token_endpoint,
                    data={
                        "grant_type": "client_credentials",
                        "client_id": config.client_id,
                        "client_secret": config.client_secrets[0],
                        "scope": ",".join(config.scopes),
                    },
                )
        except httpx.HTTPError as exc:
            self._log.warning("identity_token_network_error", error=str(exc))
            msg = f"Network error during token request: {exc}"
            raise IdentityError(msg) from exc

        if response.status_code != HTTPStatus.OK:
            self._log.warning(
                "identity_token_request_failed",
                status_code=response.status_code,
            )
            msg = f"Token request failed with status {response.status_code}"
            raise IdentityError(msg, response.status_code)

        try:
            data = response.json()
        except ValueError as exc:
            msg = "Token response is not valid JSON"
            raise IdentityError(msg, response.status_code) from exc

        access_token = data.get("access_token") if isinstance(data, dict) else None
        if not access_token:
            msg = "No access_token in token response"
            raise IdentityError(msg, response.status_code)

        expires_in = data.get("expires_in", 0)
        self._log.info("identity_token_issued", org=config.ims_org_id)
        return access_token, int(expires_in) if isinstance(expires_in, int | float) else 0
