"""
Scheduling policy - every tunable constant of the run scheduler.

Two incompatible rule generations exist for the scheduler.  Rather than
baking either into the algorithm, both are expressed as
:class:`SchedulingPolicy` values and injected:

``weekend_flex`` (canonical, :data:`DEFAULT_POLICY`)
    Long run on any day, weekend preferred on ties.  One rest day after
    the long run.  Weights precipitation 40 / wind 25 / temperature 20 /
    condition 15.  Daily scoring only.

``sunday_monday``
    Long run on Sunday or Monday only.  Two rest days after the long run.
    Weights 60 / 30 / 5 / 5.  Hourly time-window scoring inside a fixed
    daypart.

Run-type intensity is a static table (:data:`RUN_TYPE_INTENSITY`), not an
ad hoc comparison at each call site.
"""

from __future__ import annotations

from typing import Literal, Optional

from pydantic import BaseModel, ConfigDict, Field, model_validator

from app.schemas.planning import RunType

# ======================================================================
# Run-type classification
# ======================================================================

Intensity = Literal["hard", "easy"]

RUN_TYPE_INTENSITY: dict[RunType, Intensity] = {
    RunType.LONG_RUN: "hard",
    RunType.TEMPO_RUN: "hard",
    RunType.INTERVAL_RUN: "hard",
    RunType.RACE: "hard",
    RunType.EASY_RUN: "easy",
    RunType.RECOVERY_RUN: "easy",
}


def classify_run_type(run_type: RunType) -> Intensity:
    """Return ``'hard'`` or ``'easy'`` for *run_type*."""
    return RUN_TYPE_INTENSITY[run_type]


def is_hard_run(run_type: RunType) -> bool:
    return classify_run_type(run_type) == "hard"


# ======================================================================
# Policy value objects
# ======================================================================


class ScoringWeights(BaseModel):
    """Maximum penalty per weather factor.  Must sum to 100."""

    model_config = ConfigDict(frozen=True)

    precipitation: float = Field(40.0, ge=0.0)
    wind: float = Field(25.0, ge=0.0)
    temperature: float = Field(20.0, ge=0.0)
    condition: float = Field(15.0, ge=0.0)

    @model_validator(mode="after")
    def _check_total(self) -> ScoringWeights:
        total = self.precipitation + self.wind + self.temperature + self.condition
        if abs(total - 100.0) > 1e-9:
            raise ValueError(f"Scoring weights must sum to 100, got {total}")
        return self


class TimeWindowConfig(BaseModel):
    """Hourly window scoring inside a daypart ``[start_hour, end_hour)``."""

    model_config = ConfigDict(frozen=True)

    enabled: bool = False
    daypart_start_hour: int = Field(6, ge=0, le=23)
    daypart_end_hour: int = Field(20, ge=1, le=24)
    window_hours: int = Field(2, ge=1, le=12)

    @model_validator(mode="after")
    def _check_daypart(self) -> TimeWindowConfig:
        if self.daypart_end_hour - self.daypart_start_hour < self.window_hours:
            raise ValueError("Daypart is shorter than the run window")
        return self


class SchedulingPolicy(BaseModel):
    """Configuration of the scheduler.

    Weekdays use :meth:`datetime.date.weekday` numbering (Monday = 0,
    Sunday = 6).  ``long_run_weekdays=None`` allows every day.
    ``long_run_progression_step`` caps the long run at the longest
    completed distance plus this many km (``None`` disables the cap).
    """

    model_config = ConfigDict(frozen=True)

    name: str
    long_run_weekdays: Optional[frozenset[int]] = None
    preferred_long_run_weekdays: frozenset[int] = frozenset({5, 6})
    rest_days_after_long_run: int = Field(1, ge=0, le=3)

    weights: ScoringWeights = Field(default_factory=ScoringWeights)
    ideal_temperature: float = 12.5
    temperature_penalty_per_degree: float = Field(2.0, ge=0.0)

    default_long_run_distance: float = Field(12.0, gt=0.0)
    default_easy_run_distance: float = Field(6.0, gt=0.0)
    default_easy_run_count: int = Field(2, ge=0)
    easy_run_split_threshold: float = Field(15.0, ge=0.0)
    easy_run_count_high: int = Field(3, ge=0)
    easy_run_count_low: int = Field(2, ge=0)
    min_easy_run_distance: float = Field(3.0, ge=0.0)
    long_run_progression_step: Optional[float] = Field(2.0, gt=0.0)

    max_gap_days: int = Field(4, ge=1)
    optimal_score: int = Field(80, ge=0, le=100)

    time_window: TimeWindowConfig = Field(default_factory=TimeWindowConfig)

    def allows_long_run_on(self, weekday: int) -> bool:
        return self.long_run_weekdays is None or weekday in self.long_run_weekdays


WEEKEND_FLEX_POLICY = SchedulingPolicy(name="weekend_flex")

SUNDAY_MONDAY_POLICY = SchedulingPolicy(
    name="sunday_monday",
    long_run_weekdays=frozenset({6, 0}),
    preferred_long_run_weekdays=frozenset({6}),
    rest_days_after_long_run=2,
    weights=ScoringWeights(precipitation=60.0, wind=30.0, temperature=5.0, condition=5.0),
    default_long_run_distance=10.0,
    default_easy_run_distance=5.0,
    time_window=TimeWindowConfig(enabled=True, daypart_start_hour=6, daypart_end_hour=20, window_hours=2),
)

DEFAULT_POLICY = WEEKEND_FLEX_POLICY

POLICIES: dict[str, SchedulingPolicy] = {
    WEEKEND_FLEX_POLICY.name: WEEKEND_FLEX_POLICY,
    SUNDAY_MONDAY_POLICY.name: SUNDAY_MONDAY_POLICY,
}


def get_policy(name: str) -> SchedulingPolicy:
    """Look up a named policy.

    Raises :class:`KeyError` if *name* is unknown.
    """
    policy = POLICIES.get(name)
    if policy is None:
        raise KeyError(f"Scheduling policy '{name}' not found. Available: {sorted(POLICIES)}")
    return policy
