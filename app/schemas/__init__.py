"""Pydantic schemas for request/response validation."""

from app.schemas.planning import (
    CompletedRun,
    ExistingRun,
    Phase,
    PlanningRequest,
    PreferenceThresholds,
    RunType,
    RunsNeeded,
    ScoredDay,
    Suggestion,
    TrainingPlanWeek,
)
from app.schemas.weather import Coordinates, HourlyWeather, WeatherSample, WeatherSnapshot

__all__ = [
    "CompletedRun",
    "ExistingRun",
    "Phase",
    "PlanningRequest",
    "PreferenceThresholds",
    "RunType",
    "RunsNeeded",
    "ScoredDay",
    "Suggestion",
    "TrainingPlanWeek",
    "Coordinates",
    "HourlyWeather",
    "WeatherSample",
    "WeatherSnapshot",
]
