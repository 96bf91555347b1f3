"""
Planning endpoints - run suggestions and schedule validation.
"""

from typing import Optional

from fastapi import APIRouter, Depends, Query

from app.api.dependencies import get_forecast_service, resolve_policy, weather_http_error
from app.core.config import settings
from app.planning.suggestions import generate_suggestions
from app.planning.validation import validate_no_back_to_back_hard_days, validate_no_large_gaps
from app.planning.weather_scoring import DEFAULT_PREFERENCES
from app.schemas.planning import (
    PlanningRequest,
    PolicyName,
    ScheduleValidationRequest,
    ScheduleValidationResponse,
    Suggestion,
)
from app.weather.errors import WeatherAPIError
from app.weather.forecast_service import ForecastService

router = APIRouter()


@router.post("/suggestions", summary="Suggest runs for a supplied forecast.", response_model=list[Suggestion], )
def create_suggestions(request: PlanningRequest):
    preferences = DEFAULT_PREFERENCES if request.preferences is None else request.preferences
    return generate_suggestions(request.forecast, training_plan=request.training_plan, preferences=preferences,
                                existing_runs=request.existing_runs, policy=resolve_policy(request.policy),
                                longest_completed_distance=request.longest_completed_distance,
                                last_completed_run=request.last_completed_run, )


@router.get("/suggestions", summary="Suggest runs using the live forecast for a location.",
            response_model=list[Suggestion], )
def get_suggestions(location: Optional[str] = Query(None, description="Defaults to the configured location"),
                    days: int = Query(7, ge=1, le=16), policy: Optional[PolicyName] = Query(None),
                    service: ForecastService = Depends(get_forecast_service), ):
    try:
        forecast = service.get_forecast(location or settings.DEFAULT_LOCATION, days)
    except WeatherAPIError as exc:
        raise weather_http_error(exc) from exc
    return generate_suggestions(forecast, preferences=DEFAULT_PREFERENCES, policy=resolve_policy(policy))


@router.post("/validate", summary="Check a schedule for large gaps and back-to-back hard days.",
             response_model=ScheduleValidationResponse, )
def validate_schedule(request: ScheduleValidationRequest):
    return ScheduleValidationResponse(no_large_gaps=validate_no_large_gaps(request.suggestions),
                                      no_back_to_back_hard_days=validate_no_back_to_back_hard_days(
                                          request.suggestions), )
