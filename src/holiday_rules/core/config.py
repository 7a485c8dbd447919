from functools import lru_cache
from typing import Literal

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

HolidayType = Literal["public", "bank", "school", "optional", "observance"]

# Priority order used when two holidays collapse into one.
HOLIDAY_TYPES: tuple[HolidayType, ...] = ("public", "bank", "school", "optional", "observance")


class Settings(BaseSettings):
    """Engine defaults loaded from environment variables."""

    model_config = SettingsConfigDict(env_prefix="HOLIDAYS_", case_sensitive=False)

    fallback_language: str = "en"
    timezone: str | None = None
    types: list[HolidayType] = Field(default_factory=lambda: list(HOLIDAY_TYPES))


@lru_cache
def get_settings() -> Settings:
    return Settings()
