"""Runtime settings for moneyplan.

Values come from ``MONEYPLAN_*`` environment variables or a ``.env`` file.
"""

from decimal import Decimal
from functools import lru_cache
from pathlib import Path

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_prefix="MONEYPLAN_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # Currency of budget items, expenses and all headline figures
    base_currency: str = Field(default="RUB", min_length=3, max_length=4)
    # Progress (percent) from which a currency row is flagged as near its limit
    near_limit_threshold: Decimal = Field(default=Decimal(80), ge=0, le=100)
    log_level: str = "INFO"
    snapshot_path: Path = Path("budget.json")
    # Category ids hidden from category listings (display preference only)
    hidden_categories: set[str] = Field(default_factory=set)


@lru_cache
def get_settings() -> Settings:
    return Settings()
