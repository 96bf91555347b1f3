"""
Reason generation - one human-readable sentence per suggestion.

Templates depend on why the day was chosen:

- gap filler: placed to keep training consistent, not for its weather
- poor or unacceptable weather: described as *challenging*
- otherwise: the quality tier plus the concrete conditions

Easy-run reasons always name the weekday.
"""

from __future__ import annotations

from app.planning.validation import get_day_name
from app.planning.weather_scoring import round_half_up
from app.schemas.planning import RunType, ScoredDay, Suggestion
from app.schemas.weather import WeatherSnapshot


def _describe(weather: WeatherSnapshot) -> str:
    return (f"{weather.condition}, {round_half_up(weather.temperature)}°C, "
            f"{round_half_up(weather.precipitation)}% chance of rain")


def _window_note(suggestion: Suggestion) -> str:
    if suggestion.start_time is None or suggestion.end_time is None:
        return ""
    return f" Best window {suggestion.start_time:%H:%M}-{suggestion.end_time:%H:%M}."


def _long_run_reason(suggestion: Suggestion, scored_day: ScoredDay) -> str:
    conditions = _describe(suggestion.weather)
    if scored_day.quality == "poor" or not scored_day.is_acceptable:
        return (f"Best available day despite challenging weather ({conditions}). "
                "Consider adjusting pace or distance.")
    if scored_day.quality == "excellent":
        return f"Best weather of the week for your long run: {conditions}."
    if scored_day.quality == "good":
        return f"Good conditions for your long run: {conditions}."
    return f"Fair weather, the best available for your long run this week: {conditions}."


def _easy_run_reason(suggestion: Suggestion, scored_day: ScoredDay, is_gap_filler: bool) -> str:
    day = get_day_name(suggestion.date)
    conditions = _describe(suggestion.weather)
    if is_gap_filler:
        return (f"Scheduled on {day} for training consistency, avoiding a 4+ day gap between runs "
                f"({conditions}).")
    if scored_day.quality == "poor" or not scored_day.is_acceptable:
        return f"Challenging conditions on {day} ({conditions}); keep the effort easy."
    if scored_day.quality in ("excellent", "good"):
        return f"{scored_day.quality.capitalize()} weather on {day} for an easy run: {conditions}."
    return f"Fair conditions on {day} for an easy run: {conditions}."


def generate_reason(suggestion: Suggestion, scored_day: ScoredDay, is_gap_filler: bool = False) -> str:
    """Explain why *suggestion* landed on its day."""
    if suggestion.run_type == RunType.LONG_RUN and not is_gap_filler:
        reason = _long_run_reason(suggestion, scored_day)
    else:
        reason = _easy_run_reason(suggestion, scored_day, is_gap_filler)
    return reason + _window_note(suggestion)
