from __future__ import annotations

from typing import Optional

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    MOON_EXTENDED_DETAILS: bool = True
    MOON_TIMEZONE: str = "UTC"
    MOON_FORECAST_DAYS: int = 7
    CORS_ORIGINS: Optional[str] = "*"
    LOG_LEVEL: str = "INFO"
    model_config = SettingsConfigDict(env_file=".env", extra="ignore")


settings = Settings()
