"""Application configuration."""
from decimal import Decimal
from typing import Optional

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    # Database
    database_url: str

    # Brand
    app_name: str = "SwaadX"
    currency_symbol: str = "₹"

    # Pricing
    tax_rate: Decimal = Decimal("0.05")

    # Sessions
    session_expiry_minutes: int = 30
    session_sweep_interval_seconds: int = 300

    # Storage
    storage_timeout_seconds: float = 5.0
    menu_source: str = "database"  # database, yaml
    menu_file: Optional[str] = None

    # Server
    log_level: str = "INFO"
    host: str = "0.0.0.0"
    port: int = 8000

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
    )


settings = Settings()
