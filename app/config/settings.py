"""
Application settings.

Loads configuration from environment variables using pydantic-settings.
"""

from loguru import logger
from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    # Telegram Bot
    telegram_bot_token: str | None = None

    # Database (snapshot storage)
    database_url: str = "sqlite+aiosqlite:///./payback247.db"
    database_echo: bool = False

    # Admin
    admin_telegram_ids: str = ""  # Comma-separated list

    # Application
    environment: str = "production"
    debug: bool = False
    log_level: str = "INFO"
    health_check_port: int = Field(
        default=8080, ge=1, le=65535, description="Health check HTTP server port"
    )

    # Scheduling
    sweep_interval_seconds: int = Field(
        default=1, ge=1, description="Expiry sweep interval in seconds"
    )
    snapshot_interval_seconds: int = Field(
        default=30, ge=1, description="State snapshot save interval in seconds"
    )

    # Payment timer (initial SystemConfig value)
    payment_timer_hours: float = Field(
        default=2.0, gt=0, description="Hours a payment or confirmation stays open"
    )

    # Simulated crypto verification
    verification_success_rate: float = Field(
        default=0.9, ge=0, le=1.0,
        description="Probability that a simulated chain lookup succeeds"
    )
    verification_settle_seconds: int = Field(
        default=3, ge=0, description="Delay before a verification resolves"
    )
    verification_reset_seconds: int = Field(
        default=3, ge=0, description="Delay before a failed payment resets"
    )
    crypto_verification_enabled: bool = False
    crypto_api_key: str | None = None
    crypto_wallet_address: str | None = None

    # Demo session participant (mirrors the single local user of the demo)
    demo_participant_id: str = "bq_5"

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        """Normalize log level name."""
        level = v.upper()
        if level not in {"TRACE", "DEBUG", "INFO", "SUCCESS", "WARNING", "ERROR", "CRITICAL"}:
            raise ValueError(f"Unknown log level: {v}")
        return level

    def get_admin_ids(self) -> list[int]:
        """
        Get list of admin Telegram IDs.

        Returns:
            List of admin IDs
        """
        if not self.admin_telegram_ids:
            return []
        ids = []
        for raw in self.admin_telegram_ids.split(","):
            raw = raw.strip()
            if not raw:
                continue
            try:
                ids.append(int(raw))
            except ValueError:
                logger.warning(f"Ignoring invalid admin telegram id: {raw!r}")
        return ids


# Global settings instance
settings = Settings()
