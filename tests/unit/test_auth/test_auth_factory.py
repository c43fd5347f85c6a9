"""Unit tests for create_auth_strategy."""

from pathlib import Path
from unittest.mock import MagicMock

import pytest

from action_toolkit.auth import (
    ConfigurationError,
    DelegatedTokenStrategy,
    RequestSigningStrategy,
    SharedSecretStrategy,
    TokenCache,
    create_auth_strategy,
)
from action_toolkit.settings import AppSettings


def _settings(**values: object) -> AppSettings:
    return AppSettings(_env_file=None, **values)  # type: ignore[call-arg]


SIGNING = {
    "commerce_consumer_key": "ck",
    "commerce_consumer_secret": "cs",
    "commerce_access_token": "at",
    "commerce_access_token_secret": "ats",
}
DELEGATED = {"oauth_client_id": "id", "oauth_client_secret": "secret"}
SHARED = {
    "commerce_base_url": "https://shop.example.com/",
    "commerce_admin_username": "admin",
    "commerce_admin_password": "pw",
}


@pytest.fixture(autouse=True)
def _clean_env(monkeypatch: pytest.MonkeyPatch) -> None:
    for name in [
        "COMMERCE_BASE_URL",
        "COMMERCE_ADMIN_USERNAME",
        "COMMERCE_ADMIN_PASSWORD",
        "COMMERCE_CONSUMER_KEY",
        "COMMERCE_CONSUMER_SECRET",
        "COMMERCE_ACCESS_TOKEN",
        "COMMERCE_ACCESS_TOKEN_SECRET",
        "OAUTH_CLIENT_ID",
        "OAUTH_CLIENT_SECRET",
    ]:
        monkeypatch.delenv(name, raising=False)


class TestCreateAuthStrategy:
    """Tests for strategy selection."""

    def test_signing_preferred(self) -> None:
        """Should pick request signing when all four credentials exist."""
        strategy = create_auth_strategy(_settings(**SIGNING, **DELEGATED, **SHARED))

        assert isinstance(strategy, RequestSigningStrategy)

    def test_delegated_when_no_signing(self) -> None:
        """Should pick the delegated strategy over shared secret."""
        identity = MagicMock()

        strategy = create_auth_strategy(
            _settings(**DELEGATED, **SHARED), identity=identity
        )

        assert isinstance(strategy, DelegatedTokenStrategy)

    def test_shared_secret_last(self, tmp_path: Path) -> None:
        """Should pick shared secret when only admin credentials exist."""
        strategy = create_auth_strategy(
            _settings(**SHARED, state_db_path=str(tmp_path / "state.db")),
            cache=TokenCache(),
        )

        assert isinstance(strategy, SharedSecretStrategy)
        assert strategy.token_endpoint == (
            "https://shop.example.com/rest/V1/integration/admin/token"
        )

    def test_partial_signing_credentials_ignored(self) -> None:
        """Should not pick signing with an incomplete credential set."""
        with pytest.raises(ConfigurationError):
            create_auth_strategy(_settings(commerce_consumer_key="ck"))

    def test_shared_secret_requires_base_url(self) -> None:
        """Should reject admin credentials without a base URL."""
        with pytest.raises(ConfigurationError, match="COMMERCE_BASE_URL"):
            create_auth_strategy(
                _settings(commerce_admin_username="admin", commerce_admin_password="pw")
            )
