"""Application settings powered by Pydantic BaseSettings."""

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class AppSettings(BaseSettings):
    """Centralized environment configuration for actions."""

    model_config = SettingsConfigDict(
        env_prefix="",
        case_sensitive=False,
        env_file=".env",
        env_file_encoding="utf-8",
        populate_by_name=True,
    )

    commerce_base_url: str | None = Field(
        default=None, validation_alias="COMMERCE_BASE_URL"
    )

    # Shared-secret (admin token exchange)
    commerce_admin_username: str | None = Field(
        default=None, validation_alias="COMMERCE_ADMIN_USERNAME"
    )
    commerce_admin_password: str | None = Field(
        default=None, validation_alias="COMMERCE_ADMIN_PASSWORD"
    )

    # Request signing
    commerce_consumer_key: str | None = Field(
        default=None, validation_alias="COMMERCE_CONSUMER_KEY"
    )
    commerce_consumer_secret: str | None = Field(
        default=None, validation_alias="COMMERCE_CONSUMER_SECRET"
    )
    commerce_access_token: str | None = Field(
        default=None, validation_alias="COMMERCE_ACCESS_TOKEN"
    )
    commerce_access_token_secret: str | None = Field(
        default=None, validation_alias="COMMERCE_ACCESS_TOKEN_SECRET"
    )

    # Delegated token
    oauth_client_id: str | None = Field(default=None, validation_alias="OAUTH_CLIENT_ID")
    oauth_client_secret: str | None = Field(
        default=None, validation_alias="OAUTH_CLIENT_SECRET"
    )
    oauth_technical_account_id: str | None = Field(
        default=None, validation_alias="OAUTH_TECHNICAL_ACCOUNT_ID"
    )
    oauth_technical_account_email: str | None = Field(
        default=None, validation_alias="OAUTH_TECHNICAL_ACCOUNT_EMAIL"
    )
    oauth_ims_org_id: str | None = Field(
        default=None, validation_alias="OAUTH_IMS_ORG_ID"
    )
    oauth_scopes: str = Field(
        default="AdobeID,openid,adobeio_api", validation_alias="OAUTH_SCOPES"
    )

    state_db_path: str = Field(
        default=".action_state.db", validation_alias="STATE_DB_PATH"
    )
    log_level: str = Field(default="info", validation_alias="LOG_LEVEL")
    pagination_max_pages: int | None = Field(
        default=None, ge=1, validation_alias="PAGINATION_MAX_PAGES"
    )

    @field_validator("commerce_base_url")
    @classmethod
    def strip_trailing_slash(cls, v: str | None) -> str | None:
        """Normalize the base URL so endpoints can be joined with a single slash."""
        return v.rstrip("/") if v else v

    @property
    def scopes(self) -> list[str]:
        """Return OAuth scopes as a list."""
        return [scope.strip() for scope in self.oauth_scopes.split(",") if scope.strip()]

    @property
    def has_signing_credentials(self) -> bool:
        """Whether all four request-signing credentials are configured."""
        return all(
            [
                self.commerce_consumer_key,
                self.commerce_consumer_secret,
                self.commerce_access_token,
                self.commerce_access_token_secret,
            ]
        )

    @property
    def has_delegated_credentials(self) -> bool:
        """Whether OAuth client credentials are configured."""
        return bool(self.oauth_client_id and self.oauth_client_secret)

    @property
    def has_shared_secret_credentials(self) -> bool:
        """Whether admin username and password are configured."""
        return bool(self.commerce_admin_username and self.commerce_admin_password)


def get_settings() -> AppSettings:
    """Get a settings instance."""
    return AppSettings()
