"""
Client settings using Pydantic Settings

Handles DERIBIT_* environment variables and client configuration.
"""

from typing import Literal, Optional

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from ..constants import (
    DEFAULT_MAX_RETRIES,
    DEFAULT_RATE_LIMIT_BURST,
    DEFAULT_RATE_LIMIT_PER_SECOND,
    DEFAULT_REFRESH_SAFETY_MARGIN_S,
    DEFAULT_RETRY_BASE_DELAY_MS,
    DEFAULT_TIMEOUT_MS,
    DEFAULT_USER_AGENT,
    PRODUCTION_BASE_URL,
    TESTNET_BASE_URL,
)


class DeribitSettings(BaseSettings):
    """Client settings loaded from environment variables"""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        populate_by_name=True,
        extra="ignore",
    )

    # Connection
    base_url: Optional[str] = Field(default=None, alias="DERIBIT_BASE_URL", description="Explicit API host, overrides testnet")
    testnet: bool = Field(default=False, alias="DERIBIT_TESTNET", description="Use Deribit test environment")
    production_url: str = Field(default=PRODUCTION_BASE_URL, alias="DERIBIT_PRODUCTION_URL", description="Deribit production host")
    test_url: str = Field(default=TESTNET_BASE_URL, alias="DERIBIT_TEST_URL", description="Deribit test host")

    # Credentials
    client_id: Optional[str] = Field(default=None, alias="DERIBIT_CLIENT_ID", description="API client ID")
    client_secret: Optional[str] = Field(default=None, alias="DERIBIT_CLIENT_SECRET", repr=False, description="API client secret")
    access_token: Optional[str] = Field(default=None, alias="DERIBIT_ACCESS_TOKEN", repr=False, description="Host supplied bearer token, never refreshed")
    scope: Optional[str] = Field(default=None, alias="DERIBIT_SCOPE", description="OAuth scope requested on public/auth")
    auth_grant_type: Literal["client_credentials", "client_signature"] = Field(
        default="client_credentials", alias="DERIBIT_AUTH_GRANT_TYPE", description="Grant used for the initial token exchange"
    )
    api_key_file: Optional[str] = Field(default=None, alias="DERIBIT_API_KEY_FILE", description="Path to YAML account file")

    # HTTP
    timeout_ms: int = Field(default=DEFAULT_TIMEOUT_MS, gt=0, alias="DERIBIT_TIMEOUT_MS", description="Per-call timeout in milliseconds")
    user_agent: str = Field(default=DEFAULT_USER_AGENT, alias="DERIBIT_USER_AGENT", description="User-Agent header")
    max_retries: int = Field(default=DEFAULT_MAX_RETRIES, ge=0, alias="DERIBIT_MAX_RETRIES", description="Transport retries for idempotent calls")
    retry_base_delay_ms: int = Field(default=DEFAULT_RETRY_BASE_DELAY_MS, ge=0, alias="DERIBIT_RETRY_BASE_DELAY_MS", description="Base transport retry delay")

    # Rate limiting
    rate_limit_per_second: float = Field(default=DEFAULT_RATE_LIMIT_PER_SECOND, gt=0, alias="DERIBIT_RATE_LIMIT_PER_SECOND", description="Token bucket refill rate")
    rate_limit_burst: int = Field(default=DEFAULT_RATE_LIMIT_BURST, gt=0, alias="DERIBIT_RATE_LIMIT_BURST", description="Token bucket capacity")

    # Auth
    refresh_safety_margin_s: float = Field(default=DEFAULT_REFRESH_SAFETY_MARGIN_S, ge=0, alias="DERIBIT_REFRESH_SAFETY_MARGIN_S", description="Refresh tokens this long before expiry")
    revoke_on_logout: bool = Field(default=False, alias="DERIBIT_REVOKE_ON_LOGOUT", description="Call private/logout when logging out")

    # Logging
    log_level: str = Field(default="INFO", alias="DERIBIT_LOG_LEVEL", description="Logging level")
    log_format: str = Field(default="text", alias="DERIBIT_LOG_FORMAT", description="Log format (json or text)")
    log_file: Optional[str] = Field(default=None, alias="DERIBIT_LOG_FILE", description="Log file path")

    def get_api_base_url(self) -> str:
        """Get the Deribit host based on environment"""
        if self.base_url:
            return self.base_url.rstrip("/")
        if self.testnet:
            return self.test_url.rstrip("/")
        return self.production_url.rstrip("/")

    @property
    def timeout_seconds(self) -> float:
        return self.timeout_ms / 1000.0

    def has_credentials(self) -> bool:
        return bool(self.client_id and self.client_secret)


# Global settings instance
settings = DeribitSettings()
