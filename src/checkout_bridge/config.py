"""Configuration management for the Checkout Bridge service."""

from functools import lru_cache

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

PAYPAL_LIVE_BASE_URL = "https://api-m.paypal.com"
PAYPAL_SANDBOX_BASE_URL = "https://api-m.sandbox.paypal.com"


class PayPalSettings(BaseSettings):
    """PayPal REST API credentials and environment."""

    model_config = SettingsConfigDict(
        env_prefix="PAYPAL_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
        frozen=True,
    )

    client_id: str = Field(default="", description="PayPal REST client id")
    client_secret: str = Field(default="", description="PayPal REST client secret")
    env: str = Field(default="live", description="PayPal environment (live or sandbox)")
    timeout_seconds: float = Field(default=10.0, description="Request timeout")

    @property
    def base_url(self) -> str:
        """REST base URL for the configured environment."""
        if self.env.lower() == "sandbox":
            return PAYPAL_SANDBOX_BASE_URL
        return PAYPAL_LIVE_BASE_URL

    @property
    def credentials_configured(self) -> bool:
        return bool(self.client_id and self.client_secret)


class ShopifySettings(BaseSettings):
    """Shopify Admin GraphQL API settings."""

    model_config = SettingsConfigDict(
        env_prefix="SHOPIFY_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
        frozen=True,
    )

    store: str = Field(default="", description="Store handle (<store>.myshopify.com)")
    admin_token: str = Field(default="", description="Admin API access token")
    api_version: str = Field(default="2025-10", description="Admin API version")
    timeout_seconds: float = Field(default=10.0, description="Request timeout")

    @property
    def graphql_url(self) -> str:
        """Admin GraphQL endpoint for the configured store and API version."""
        return (
            f"https://{self.store}.myshopify.com/admin/api/"
            f"{self.api_version}/graphql.json"
        )

    @property
    def credentials_configured(self) -> bool:
        return bool(self.store and self.admin_token)


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
        frozen=True,
    )

    # Service Configuration
    host: str = Field(default="0.0.0.0", description="Bind address")
    port: int = Field(default=3000, description="Listen port")
    debug: bool = Field(default=False, description="Debug mode")
    log_level: str = Field(default="INFO", description="Logging level")
    environment: str = Field(default="development", description="Environment name")
    service_name: str = Field(default="checkout-bridge", description="Service name")

    # Boundary
    allowed_origins: list[str] = Field(
        default_factory=list, description="Browser origins allowed to call the API"
    )
    allowed_origin: str | None = Field(
        default=None, description="Single extra allowed origin (deployment override)"
    )
    max_body_bytes: int = Field(
        default=1024 * 1024, description="Maximum accepted request body size"
    )

    # Upstreams
    paypal: PayPalSettings = Field(default_factory=PayPalSettings)
    shopify: ShopifySettings = Field(default_factory=ShopifySettings)

    @property
    def origin_allow_list(self) -> list[str]:
        """Configured origins plus the optional override, empties dropped."""
        origins = [o.strip() for o in self.allowed_origins if o and o.strip()]
        if self.allowed_origin and self.allowed_origin.strip():
            origins.append(self.allowed_origin.strip())
        return origins


@lru_cache()
def get_settings() -> Settings:
    """Get cached settings instance"""
    return Settings()
