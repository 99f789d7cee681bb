from functools import lru_cache
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", env_ignore_empty=True, extra="ignore")

    # Calendar
    HOLIDAY_COUNTRY: str = "GB"
    HOLIDAY_SUBDIVISION: str | None = "ENG"
    TIMEZONE: str = "Europe/London"

    # Logging
    LOG_LEVEL: str = "INFO"
    LOG_JSON: bool = True

    # Environment
    ENVIRONMENT: str = "dev"


@lru_cache
def get_settings() -> Settings:
    return Settings()
