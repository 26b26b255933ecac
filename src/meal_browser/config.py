"""Application configuration."""

import os
from typing import Literal

from pydantic_settings import BaseSettings, SettingsConfigDict

_ENVIRONMENT = os.getenv("ENVIRONMENT", "local")

DEFAULT_CATEGORY_CHIPS = (
    "Breakfast,Lunch,Dinner,Dessert,Beef,Pork,Chicken,Seafood,Vegetarian"
)


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    mealdb_base_url: str = "https://www.themealdb.com/api/json/v1/1"
    http_timeout_seconds: float = 10.0
    fallback_category: str = "Seafood"
    fallback_limit: int = 12
    category_chips: str = DEFAULT_CATEGORY_CHIPS
    storage_backend: Literal["file", "memory", "supabase"] = "file"
    storage_path: str = ".meal_browser/state.json"
    storage_profile: str = "default"
    supabase_url: str | None = None
    supabase_service_key: str | None = None
    debug: bool = False
    environment: str = _ENVIRONMENT

    model_config = SettingsConfigDict(
        env_file=(f".env.{_ENVIRONMENT}", ".env"),
        extra="ignore",
    )


def parse_category_chips(raw: str | None) -> list[str]:
    """Parse the comma-separated category chip list."""
    if raw is None:
        return []
    chips: list[str] = []
    for chunk in raw.split(","):
        value = chunk.strip()
        if not value or value in chips:
            continue
        chips.append(value)
    return chips
