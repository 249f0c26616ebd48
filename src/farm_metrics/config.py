"""Application configuration."""

import os

from pydantic_settings import BaseSettings, SettingsConfigDict

_ENVIRONMENT = os.getenv("ENVIRONMENT", "local")


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    admin_token: str
    environment: str = _ENVIRONMENT
    notification_limit: int = 10
    critical_stock_ratio: float = 0.5
    warning_stock_ratio: float = 1.0
    days_remaining_sentinel: int = 999
    default_egg_count: int = 5000
    default_egg_price: float = 30
    extra_nutrients: str | None = None

    model_config = SettingsConfigDict(
        env_prefix="FARM_",
        env_file=(f".env.{_ENVIRONMENT}", ".env"),
        extra="ignore",
    )


def parse_nutrient_labels(raw: str | None) -> list[str]:
    """Parse extra nutrient labels from a comma-separated env value."""
    if raw is None:
        return []
    labels: list[str] = []
    for chunk in raw.split(","):
        value = chunk.strip()
        if value and value not in labels:
            labels.append(value)
    return labels
