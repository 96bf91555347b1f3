"""
Application configuration using Pydantic Settings.

Loads configuration from environment variables (.env file).
"""

from typing import List, Literal, Optional

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    # Project Info
    PROJECT_NAME: str = "Weather-aware run planner."
    VERSION: str = "0.1.0"
    AUTHORS: List[str] = []
    PROJECT_URL: str = ""

    DEBUG: bool = False
    LOG_LEVEL: str = "INFO"

    # Forecast collaborator
    DEFAULT_LOCATION: str = "Balbriggan, IE"
    FORECAST_DAYS: int = 14
    FORECAST_CACHE_TTL_SECONDS: int = 3600
    WEATHER_API_URL: str = "https://api.open-meteo.com/v1/forecast"
    GEOCODING_API_URL: str = "https://geocoding-api.open-meteo.com/v1/search"
    WEATHER_API_KEY: Optional[str] = None
    WEATHER_MAX_RETRIES: int = 3
    WEATHER_RETRY_DELAY_SECONDS: float = 1.0
    WEATHER_TIMEOUT_SECONDS: float = 10.0
    WEATHER_RATE_LIMIT_PER_MINUTE: int = 60

    # Scheduler
    SCHEDULING_POLICY: Literal["weekend_flex", "sunday_monday"] = "weekend_flex"

    model_config = SettingsConfigDict(env_file=".env", case_sensitive=True, extra="ignore")


# Global settings instance
settings = Settings()
