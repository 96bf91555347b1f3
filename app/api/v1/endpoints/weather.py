"""
Weather endpoints - cached daily forecast.
"""

from typing import Optional

from fastapi import APIRouter, Depends, Query

from app.api.dependencies import get_forecast_service, weather_http_error
from app.core.config import settings
from app.schemas.weather import WeatherSample
from app.weather.errors import WeatherAPIError
from app.weather.forecast_service import ForecastService

router = APIRouter()


@router.get("/forecast", summary="Get the daily forecast for a location.", response_model=list[WeatherSample], )
def get_forecast(location: Optional[str] = Query(None, description="Defaults to the configured location"),
                 days: int = Query(settings.FORECAST_DAYS, ge=1, le=16),
                 service: ForecastService = Depends(get_forecast_service), ):
    try:
        return service.get_forecast(location or settings.DEFAULT_LOCATION, days)
    except WeatherAPIError as exc:
        raise weather_http_error(exc) from exc
