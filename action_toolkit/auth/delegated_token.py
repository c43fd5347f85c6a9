"""Bearer token obtained from an external identity context."""

from typing import Protocol, runtime_checkable

import httpx
import structlog
from pydantic import BaseModel, ConfigDict, Field


logger = structlog.get_logger()

DEFAULT_CONTEXT_NAME = "adobe-commerce-client"
ONBOARDING_CONTEXT_NAME = "onboarding-config"


class ImsConfig(BaseModel):
    """Client-credential configuration registered with an identity context."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    client_id: str
    client_secrets: list[str] = Field(min_length=1)
    technical_account_id: str
    technical_account_email: str
    ims_org_id: str
    scopes: list[str] = Field(default_factory=list)


@runtime_checkable
class IdentityContext(Protocol):
    """Named configuration registry that issues tokens for the current entry.

    Implementations are expected to cache tokens internally.
    """

    def set_current(self, name: str) -> None:
        """Select the configuration used by ``get_token``."""
        ...

    def set(self, name: str, config: ImsConfig) -> None:
        """Register (or replace) the configuration stored under ``name``."""
        ...

    def get_token(self) -> str:
        """Return a bearer token for the current configuration.

        Raises:
            IdentityError: If the identity service cannot issue a token.
        """
        ...


def get_delegated_token(
    identity: IdentityContext,
    config: ImsConfig,
    context_name: str = ONBOARDING_CONTEXT_NAME,
) -> str:
    """Register ``config`` under ``context_name`` and fetch its token.

    Args:
        identity: Identity context to use.
        config: Client-credential configuration.
        context_name: Name the configuration is stored under.

    Returns:
        Bearer token issued for the configuration.
    """
    identity.set_current(context_name)
    identity.set(context_name, config)
    return identity.get_token()


class DelegatedTokenStrategy:
    """Authorizes requests with a token from an identity context.

    No local caching; the identity context owns token lifetime. A failure
    to obtain a token is logged and sends ``Authorization: Bearer null``.
    """

    def __init__(
        self,
        identity: IdentityContext,
        config: ImsConfig,
        context_name: str = DEFAULT_CONTEXT_NAME,
        log: structlog.stdlib.BoundLogger | None = None,
    ) -> None:
        """Initialize the strategy.

        Args:
            identity: Identity context that issues tokens.
            config: Client-credential configuration.
            context_name: Context name the configuration is stored under.
            log: Logger to use; defaults to the module logger.
        """
        self._identity = identity
        self._config = config
        self._context_name = context_name
        self._log = (log or logger).bind(
            component="auth", strategy="delegated_token", context=context_name
        )

    def authorize(self, request: httpx.Request) -> httpx.Request:
        """Attach ``Authorization: Bearer <token>`` to the request."""
        token = self.get_token()
        request.headers["Authorization"] = f"Bearer {token if token is not None else 'null'}"
        return request

    def get_token(self) -> str | None:
        """Return a token from the identity context, or None on failure."""
        try:
            token = get_delegated_token(self._identity, self._config, self._context_name)
        except Exception as e:  # noqa: BLE001
            self._log.error(
                "delegated_token_failed",
                error_type=type(e).__name__,
                error=str(e),
            )
            return None

        self._log.debug("delegated_token_attached", token_length=len(token))
        return token
