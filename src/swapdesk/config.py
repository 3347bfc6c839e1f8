"""Application configuration using pydantic-settings."""

from decimal import Decimal
from functools import lru_cache

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # ======================
    # Environment
    # ======================
    environment: str = Field(default="development", description="Runtime environment")
    debug: bool = Field(default=True, description="Enable debug mode")

    # ======================
    # Session
    # ======================
    default_account: str = Field(
        default="0x0000000000000000000000000000000000000000",
        description="Account used for exchanges when the host shell does not supply one",
    )

    # ======================
    # Pricing
    # ======================
    price_api_url: str = Field(
        default="https://api.coingecko.com/api/v3", description="USD price API base URL"
    )
    price_cache_seconds: int = Field(default=60, description="How long fetched prices stay fresh")
    http_timeout: float = Field(default=10.0, description="Price request timeout in seconds")

    # ======================
    # Fees
    # ======================
    bridge_fee_percent: Decimal = Field(
        default=Decimal("0"), description="Fee charged by 1:1 bridge pairs (0.1 = 0.1%)"
    )
    simulated_fee_percent: Decimal = Field(
        default=Decimal("0.3"), description="Fee charged by simulated pairs (0.3 = 0.3%)"
    )

    # ======================
    # Safety Guards
    # ======================
    dry_run: bool = Field(default=True, description="Use simulated pairs (no real exchanges)")

    @property
    def is_production(self) -> bool:
        """Check if running in production environment."""
        return self.environment.lower() == "production"

    def get_safe_dict(self) -> dict:
        """Return settings dict suitable for logging."""
        return {
            "environment": self.environment,
            "debug": self.debug,
            "dry_run": self.dry_run,
            "default_account": self.default_account,
            "pricing": {
                "api_url": self.price_api_url,
                "cache_seconds": self.price_cache_seconds,
                "timeout": self.http_timeout,
            },
            "fees": {
                "bridge_percent": str(self.bridge_fee_percent),
                "simulated_percent": str(self.simulated_fee_percent),
            },
        }


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
