"""
Weather scoring - how good is one weather sample for one run type?

Two independent questions are answered here:

1. **Score** (soft, 0-100): start at 100 and deduct four capped penalties
   whose caps come from the policy's :class:`ScoringWeights`:

   - precipitation: ``min(precip / max(max_precip, 1), 1) * W_precip``
   - wind (only when a positive limit is set): ``min(wind / max_wind, 1) * W_wind``
   - temperature: ``|temp - ideal| * per_degree`` capped at ``W_temp``
   - condition: flat ``W_cond`` when an avoided condition matches

   The result is clamped to [0, 100] and rounded with halves going up.

2. **Acceptability** (hard filter): every threshold must hold.  Equality
   at a threshold is acceptable.

The score and the filter are independent: a day can be
unacceptable and still outrank a worse one when nothing better exists.
"""

from __future__ import annotations

import math
from typing import Optional, Union

from app.planning.policy import DEFAULT_POLICY, SchedulingPolicy
from app.schemas.planning import PreferenceThresholds, RunType, WeatherQuality
from app.schemas.weather import HourlyWeather, WeatherSample, WeatherSnapshot

WeatherLike = Union[WeatherSample, HourlyWeather, WeatherSnapshot]

# ======================================================================
# Default thresholds
# ======================================================================

DEFAULT_PREFERENCES: list[PreferenceThresholds] = [
    PreferenceThresholds(run_type=RunType.LONG_RUN, max_precipitation=20, max_wind_speed=25, min_temperature=0,
                         max_temperature=25, avoid_conditions=["Heavy Rain", "Thunderstorm", "Heavy Snow"], ),
    PreferenceThresholds(run_type=RunType.EASY_RUN, max_precipitation=50, max_wind_speed=35, min_temperature=-5,
                         max_temperature=30, avoid_conditions=["Thunderstorm", "Heavy Snow"], ),
    PreferenceThresholds(run_type=RunType.TEMPO_RUN, max_precipitation=30, max_wind_speed=25, min_temperature=5,
                         max_temperature=25, avoid_conditions=["Heavy Rain", "Thunderstorm", "Heavy Snow"], ),
    PreferenceThresholds(run_type=RunType.INTERVAL_RUN, max_precipitation=30, max_wind_speed=25, min_temperature=5,
                         max_temperature=25, avoid_conditions=["Heavy Rain", "Thunderstorm", "Heavy Snow"], ),
    PreferenceThresholds(run_type=RunType.RECOVERY_RUN, max_precipitation=60, max_wind_speed=40, min_temperature=-5,
                         max_temperature=30, avoid_conditions=["Thunderstorm"], ),
    PreferenceThresholds(run_type=RunType.RACE, max_precipitation=100, max_wind_speed=None, min_temperature=None,
                         max_temperature=None, avoid_conditions=[], ),
]

# Quality bands, inclusive on the lower edge.
_QUALITY_BANDS: list[tuple[WeatherQuality, int]] = [("excellent", 80), ("good", 60), ("fair", 40), ("poor", 0), ]


def get_preference_for_run_type(preferences: list[PreferenceThresholds],
                                run_type: RunType) -> Optional[PreferenceThresholds]:
    """Return the thresholds for *run_type*, or ``None`` if absent."""
    for preference in preferences:
        if preference.run_type == run_type:
            return preference
    return None


# ======================================================================
# Helpers
# ======================================================================


def round_half_up(value: float) -> int:
    """Round to the nearest integer, halves upward (12.5 -> 13, -5.5 -> -5)."""
    return int(math.floor(value + 0.5))


def _matching_condition(condition: str, avoid_conditions: list[str]) -> Optional[str]:
    """Return the first avoided condition found in *condition*."""
    lowered = condition.lower()
    for avoided in avoid_conditions:
        if avoided and avoided.lower() in lowered:
            return avoided
    return None


# ======================================================================
# Score
# ======================================================================


def get_weather_score(weather: WeatherLike, thresholds: PreferenceThresholds,
                      policy: Optional[SchedulingPolicy] = None, ) -> int:
    """Score *weather* against *thresholds* (0-100, higher is better)."""
    cfg = policy or DEFAULT_POLICY
    weights = cfg.weights
    score = 100.0

    max_precip = max(thresholds.max_precipitation, 1.0)
    score -= min(weather.precipitation / max_precip, 1.0) * weights.precipitation

    if thresholds.max_wind_speed:
        score -= min(weather.wind_speed / thresholds.max_wind_speed, 1.0) * weights.wind

    temp_diff = abs(weather.temperature - cfg.ideal_temperature)
    score -= min(temp_diff * cfg.temperature_penalty_per_degree, weights.temperature)

    if _matching_condition(weather.condition, thresholds.avoid_conditions) is not None:
        score -= weights.condition

    return max(0, min(100, round_half_up(score)))


# ======================================================================
# Hard filter
# ======================================================================


def is_acceptable_weather(weather: WeatherLike, thresholds: PreferenceThresholds) -> bool:
    """Return ``True`` if *weather* satisfies every threshold."""
    if weather.precipitation > thresholds.max_precipitation:
        return False
    if thresholds.max_wind_speed is not None and weather.wind_speed > thresholds.max_wind_speed:
        return False
    if thresholds.min_temperature is not None and weather.temperature < thresholds.min_temperature:
        return False
    if thresholds.max_temperature is not None and weather.temperature > thresholds.max_temperature:
        return False
    return _matching_condition(weather.condition, thresholds.avoid_conditions) is None


def get_weather_quality(score: int) -> WeatherQuality:
    """Map a score to its quality tier."""
    for label, lower in _QUALITY_BANDS:
        if score >= lower:
            return label
    return "poor"


def get_rejection_reason(weather: WeatherLike, thresholds: PreferenceThresholds) -> list[str]:
    """Explain every failed threshold.  Empty when the weather is acceptable."""
    reasons: list[str] = []

    if weather.precipitation > thresholds.max_precipitation:
        reasons.append(f"Precipitation too high ({round_half_up(weather.precipitation)}% "
                       f"vs {round_half_up(thresholds.max_precipitation)}% max)")

    if thresholds.max_wind_speed is not None and weather.wind_speed > thresholds.max_wind_speed:
        reasons.append(f"Wind speed exceeds limit ({round_half_up(weather.wind_speed)} km/h "
                       f"vs {round_half_up(thresholds.max_wind_speed)} km/h max)")

    if thresholds.min_temperature is not None and weather.temperature < thresholds.min_temperature:
        reasons.append(f"Temperature below minimum ({round_half_up(weather.temperature)}°C "
                       f"vs {round_half_up(thresholds.min_temperature)}°C min)")

    if thresholds.max_temperature is not None and weather.temperature > thresholds.max_temperature:
        reasons.append(f"Temperature above maximum ({round_half_up(weather.temperature)}°C "
                       f"vs {round_half_up(thresholds.max_temperature)}°C max)")

    avoided = _matching_condition(weather.condition, thresholds.avoid_conditions)
    if avoided is not None:
        reasons.append(f"Conditions include {avoided} which should be avoided")

    return reasons
