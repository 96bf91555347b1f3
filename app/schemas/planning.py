"""
Planning schemas - inputs and outputs of the run scheduler.

Inputs (owned by external collaborators):

- :class:`PreferenceThresholds`: weather tolerance per run type
- :class:`TrainingPlanWeek`: the current plan week (may be absent)
- :class:`ExistingRun`: runs already committed to the calendar

Outputs (created fresh per call, never persisted here):

- :class:`ScoredDay`: one forecast day scored for one run type
- :class:`Suggestion`: a dated run proposal with score and reason
"""

from __future__ import annotations

import datetime
from enum import Enum
from typing import Literal, Optional

from pydantic import BaseModel, Field

from app.schemas.weather import WeatherSample, WeatherSnapshot

WeatherQuality = Literal["excellent", "good", "fair", "poor"]
PolicyName = Literal["weekend_flex", "sunday_monday"]


class RunType(str, Enum):
    LONG_RUN = "LONG_RUN"
    EASY_RUN = "EASY_RUN"
    TEMPO_RUN = "TEMPO_RUN"
    INTERVAL_RUN = "INTERVAL_RUN"
    RECOVERY_RUN = "RECOVERY_RUN"
    RACE = "RACE"


class Phase(str, Enum):
    BASE_BUILDING = "BASE_BUILDING"
    BASE_EXTENSION = "BASE_EXTENSION"
    SPEED_DEVELOPMENT = "SPEED_DEVELOPMENT"
    PEAK_TAPER = "PEAK_TAPER"


class PreferenceThresholds(BaseModel):
    """Weather tolerance for one run type.

    ``None`` limits mean "no limit".  ``avoid_conditions`` entries are
    matched case-insensitively as substrings of the condition text.
    """

    run_type: RunType
    max_precipitation: float = Field(..., ge=0.0, le=100.0)
    max_wind_speed: Optional[float] = Field(None, ge=0.0, description="km/h, None = no limit")
    min_temperature: Optional[float] = Field(None, description="°C, None = no limit")
    max_temperature: Optional[float] = Field(None, description="°C, None = no limit")
    avoid_conditions: list[str] = Field(default_factory=list)


class TrainingPlanWeek(BaseModel):
    """Targets for the current training-plan week."""

    phase: Phase
    week_number: int = Field(..., ge=1)
    week_start: datetime.date
    week_end: datetime.date
    long_run_target: float = Field(..., ge=0.0, description="Long run distance (km)")
    weekly_mileage_target: float = Field(..., ge=0.0, description="Total weekly distance (km)")
    notes: Optional[str] = None


class ExistingRun(BaseModel):
    """A run already on the calendar.  Its date is never re-suggested."""

    date: datetime.date
    run_type: RunType


class CompletedRun(BaseModel):
    """The most recent run actually completed.

    Without a run type it counts as a long run when it is at least as long
    as the week's long-run distance.
    """

    date: datetime.date
    distance: float = Field(..., ge=0.0, description="km")
    run_type: Optional[RunType] = None


class RunsNeeded(BaseModel):
    """Distances and counts resolved from the plan week."""

    long_run_distance: float
    easy_run_distance: float
    total_easy_runs: int = Field(..., ge=0)


class ScoredDay(BaseModel):
    """A forecast day scored against one run type's thresholds."""

    date: datetime.date
    date_key: str = Field(..., description="YYYY-MM-DD")
    score: int = Field(..., ge=0, le=100)
    quality: WeatherQuality
    is_acceptable: bool = Field(..., description="Whether the weather passes every hard threshold")
    weather: WeatherSnapshot
    start_time: Optional[datetime.time] = None
    end_time: Optional[datetime.time] = None


class Suggestion(BaseModel):
    """A proposed run."""

    date: datetime.date
    run_type: RunType
    distance: float = Field(..., ge=0.0)
    weather_score: int = Field(..., ge=0, le=100)
    is_optimal: bool = Field(..., description="True when weather_score >= 80")
    reason: str = ""
    weather: WeatherSnapshot
    start_time: Optional[datetime.time] = None
    end_time: Optional[datetime.time] = None


class PlanningRequest(BaseModel):
    """Body of the suggestion endpoint.

    ``preferences=None`` falls back to the default thresholds; an empty
    list means "no thresholds" and every day scores neutral.
    """

    forecast: list[WeatherSample] = Field(default_factory=list)
    training_plan: Optional[TrainingPlanWeek] = None
    preferences: Optional[list[PreferenceThresholds]] = None
    existing_runs: list[ExistingRun] = Field(default_factory=list)
    longest_completed_distance: Optional[float] = Field(None, ge=0.0, description="Longest run so far (km)")
    last_completed_run: Optional[CompletedRun] = None
    policy: Optional[PolicyName] = Field(None, description="Scheduling policy (defaults to settings)")


class ScheduleValidationRequest(BaseModel):
    suggestions: list[Suggestion]


class ScheduleValidationResponse(BaseModel):
    no_large_gaps: bool
    no_back_to_back_hard_days: bool
