"""Factory for creating auth strategies from settings."""

import structlog

from action_toolkit.auth.credentials import TokenCache
from action_toolkit.auth.delegated_token import (
    DEFAULT_CONTEXT_NAME,
    DelegatedTokenStrategy,
    IdentityContext,
    ImsConfig,
)
from action_toolkit.auth.errors import ConfigurationError
from action_toolkit.auth.protocols import AuthStrategy
from action_toolkit.settings.app import AppSettings


logger = structlog.get_logger()


def create_auth_strategy(
    settings: AppSettings,
    *,
    cache: TokenCache | None = None,
    identity: IdentityContext | None = None,
    context_name: str = DEFAULT_CONTEXT_NAME,
) -> AuthStrategy:
    """Create an auth strategy using the best available credentials.

    Priority: request signing > delegated token > shared secret.

    Args:
        settings: Application settings.
        cache: Token cache for the shared-secret strategy. Defaults to one
            backed by a SQLite store at ``settings.state_db_path``.
        identity: Identity context for the delegated strategy. Defaults to
            OAuthClientCredentialsContext.
        context_name: Identity context name for the delegated strategy.

    Returns:
        An AuthStrategy implementation ready for use.

    Raises:
        ConfigurationError: If no complete credential set is configured.
    """
    log = logger.bind(component="auth", subcomponent="factory")

    if settings.has_signing_credentials:
        from action_toolkit.auth.request_signing import RequestSigningStrategy

        log.info("auth_strategy_created", auth_method="request_signing")
        return RequestSigningStrategy(
            consumer_key=settings.commerce_consumer_key or "",
            consumer_secret=settings.commerce_consumer_secret or "",
            access_token=settings.commerce_access_token or "",
            access_token_secret=settings.commerce_access_token_secret or "",
        )

    if settings.has_delegated_credentials:
        if identity is None:
            from action_toolkit.auth.identity import OAuthClientCredentialsContext

            identity = OAuthClientCredentialsContext()

        config = ImsConfig(
            client_id=settings.oauth_client_id or "",
            client_secrets=[settings.oauth_client_secret or ""],
            technical_account_id=settings.oauth_technical_account_id or "",
            technical_account_email=settings.oauth_technical_account_email or "",
            ims_org_id=settings.oauth_ims_org_id or "",
            scopes=settings.scopes,
        )
        log.info("auth_strategy_created", auth_method="delegated_token")
        return DelegatedTokenStrategy(identity, config, context_name=context_name)

    if settings.has_shared_secret_credentials:
        if not settings.commerce_base_url:
            msg = "COMMERCE_BASE_URL is required for admin token authentication"
            raise ConfigurationError(msg)

        from action_toolkit.auth.shared_secret import SharedSecretStrategy

        if cache is None:
            from action_toolkit.store.sqlite import SqliteTtlStore

            db_path = settings.state_db_path

            def _open_store() -> SqliteTtlStore:
                store = SqliteTtlStore(db_path)
                store.connect()
                return store

            cache = TokenCache(store_factory=_open_store)

        log.info("auth_strategy_created", auth_method="shared_secret")
        return SharedSecretStrategy(
            base_url=settings.commerce_base_url,
            username=settings.commerce_admin_username or "",
            password=settings.commerce_admin_password or "",
            cache=cache,
        )

    msg = (
        "No Commerce credentials configured (need COMMERCE_CONSUMER_KEY/SECRET and "
        "COMMERCE_ACCESS_TOKEN/SECRET, OAUTH_CLIENT_ID/SECRET, or "
        "COMMERCE_ADMIN_USERNAME/PASSWORD)"
    )
    raise ConfigurationError(msg)
