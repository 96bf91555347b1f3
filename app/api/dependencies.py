"""
Shared API dependencies.

Reusable FastAPI dependencies for the forecast collaborator and the
scheduling policy.
"""

from functools import lru_cache
from typing import Optional

from fastapi import HTTPException, status

from app.core.config import settings
from app.planning.policy import SchedulingPolicy, get_policy
from app.weather.client import OpenMeteoClient
from app.weather.errors import (
    InvalidCredentialError,
    LocationNotFoundError,
    RateLimitExceededError,
    WeatherAPIError,
)
from app.weather.forecast_service import ForecastService


@lru_cache
def get_forecast_service() -> ForecastService:
    """Process-wide forecast service (cache + rate limiter live here)."""
    return ForecastService(OpenMeteoClient.from_settings(), ttl_seconds=settings.FORECAST_CACHE_TTL_SECONDS)


def resolve_policy(name: Optional[str]) -> SchedulingPolicy:
    return get_policy(name or settings.SCHEDULING_POLICY)


def weather_http_error(exc: WeatherAPIError) -> HTTPException:
    """Translate a forecast failure into an HTTP error."""
    if isinstance(exc, LocationNotFoundError):
        return HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=exc.message)
    if isinstance(exc, RateLimitExceededError):
        return HTTPException(status_code=status.HTTP_429_TOO_MANY_REQUESTS, detail=exc.message)
    if isinstance(exc, InvalidCredentialError):
        return HTTPException(status_code=status.HTTP_502_BAD_GATEWAY, detail="Weather service rejected credentials")
    return HTTPException(status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
                         detail="Weather service unavailable. Please try again later.", )
