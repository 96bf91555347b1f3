"""Forecast collaborator - Open-Meteo client, rate limiting, caching."""

from app.weather.client import OpenMeteoClient
from app.weather.errors import WeatherAPIError
from app.weather.forecast_service import ForecastService

__all__ = ["ForecastService", "OpenMeteoClient", "WeatherAPIError"]
