"""Authorization strategies for outgoing requests.

Three interchangeable strategies implement AuthStrategy:

- SharedSecretStrategy: admin token exchanged for username/password, cached
- RequestSigningStrategy: OAuth 1.0a signature computed per request
- DelegatedTokenStrategy: token issued by an external identity context
"""

from action_toolkit.auth.protocols import AuthStrategy
from action_toolkit.auth.errors import ConfigurationError, IdentityError  # noqa: I001
from action_toolkit.auth.credentials import Credential, TokenCache
from action_toolkit.auth.bearer_token import BearerToken, BearerTokenInfo
from action_toolkit.auth.delegated_token import (
    DelegatedTokenStrategy,
    IdentityContext,
    ImsConfig,
    get_delegated_token,
)
from action_toolkit.auth.identity import OAuthClientCredentialsContext
from action_toolkit.auth.request_signing import RequestSigningStrategy
from action_toolkit.auth.shared_secret import SharedSecretStrategy
from action_toolkit.auth.factory import create_auth_strategy


__all__ = [
    "AuthStrategy",
    "BearerToken",
    "BearerTokenInfo",
    "ConfigurationError",
    "Credential",
    "DelegatedTokenStrategy",
    "IdentityContext",
    "IdentityError",
    "ImsConfig",
    "OAuthClientCredentialsContext",
    "RequestSigningStrategy",
    "SharedSecretStrategy",
    "TokenCache",
    "create_auth_strategy",
    "get_delegated_token",
]
