"""Armora configuration — loaded from environment variables and .env file."""

from pathlib import Path
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=str(Path(__file__).resolve().parent.parent / ".env"),
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # Officer directory snapshot
    roster_path: str = "./data/officers.json"

    # Pricing: wall-clock surcharges are evaluated in this zone
    pricing_timezone: str = "Europe/London"

    # API
    armora_api_key: str = "armora-dev-key-change-me"
    armora_api_port: int = 8002
    rate_limit_per_minute: int = 100

    # Logging
    log_level: str = "INFO"


settings = Settings()
