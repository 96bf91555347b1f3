"""What would the planner suggest for a mixed Irish winter week?

Builds a synthetic 7-day forecast (week of 2025-12-01) and prints the
suggestions under both scheduling policies.

Usage:
    python scripts/simulate_week.py
"""

import datetime
import sys
from pathlib import Path

project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))

from app.planning.policy import POLICIES
from app.planning.suggestions import generate_suggestions
from app.planning.validation import validate_no_back_to_back_hard_days, validate_no_large_gaps
from app.planning.weather_scoring import DEFAULT_PREFERENCES
from app.schemas.planning import Phase, TrainingPlanWeek
from app.schemas.weather import HourlyWeather, WeatherSample

START = datetime.date(2025, 12, 1)

# (condition, temperature, precipitation, wind)
RAW_WEEK = [
    ("Slight Rain", 9.0, 60, 28),
    ("Partly Cloudy", 11.0, 15, 14),
    ("Heavy Rain", 8.0, 85, 40),
    ("Overcast", 10.5, 25, 18),
    ("Moderate Rain", 7.0, 70, 33),
    ("Clear", 12.0, 5, 8),
    ("Mainly Clear", 10.0, 10, 12),
]


def _hourly(day: datetime.date, condition: str, temperature: float, precipitation: float,
            wind: float) -> list[HourlyWeather]:
    """Crude diurnal curve: cooler and calmer early, wetter in the evening."""
    hours = []
    for hour in range(24):
        offset = -3.0 if hour < 8 else (2.0 if 11 <= hour <= 16 else 0.0)
        hours.append(HourlyWeather(
            time=datetime.datetime.combine(day, datetime.time(hour)),
            condition=condition,
            temperature=temperature + offset,
            precipitation=min(100.0, precipitation + (15.0 if hour >= 17 else 0.0)),
            wind_speed=wind * (0.7 if hour < 9 else 1.0),
        ))
    return hours


def build_forecast() -> list[WeatherSample]:
    forecast = []
    for i, (condition, temperature, precipitation, wind) in enumerate(RAW_WEEK):
        day = START + datetime.timedelta(days=i)
        forecast.append(WeatherSample(
            timestamp=datetime.datetime.combine(day, datetime.time(0)),
            location="Balbriggan, IE",
            condition=condition,
            temperature=temperature,
            precipitation=precipitation,
            wind_speed=wind,
            hourly=_hourly(day, condition, temperature, precipitation, wind),
        ))
    return forecast


def main() -> None:
    plan = TrainingPlanWeek(phase=Phase.BASE_BUILDING, week_number=11, week_start=START,
                            week_end=START + datetime.timedelta(days=6), long_run_target=13,
                            weekly_mileage_target=30)
    forecast = build_forecast()

    for name, policy in POLICIES.items():
        print("=" * 72)
        print(f"Policy: {name}")
        print("=" * 72)
        suggestions = generate_suggestions(forecast, plan, DEFAULT_PREFERENCES, [], policy)
        for s in suggestions:
            window = f" {s.start_time:%H:%M}-{s.end_time:%H:%M}" if s.start_time and s.end_time else ""
            flag = "*" if s.is_optimal else " "
            print(f"{s.date:%a %d %b}{window:>12}  {s.run_type.value:<9} {s.distance:>5.1f} km  "
                  f"score {s.weather_score:>3}{flag}  {s.reason}")
        print()
        print(f"No large gaps:            {validate_no_large_gaps(suggestions)}")
        print(f"No back-to-back hard days: {validate_no_back_to_back_hard_days(suggestions)}")
        print()


if __name__ == "__main__":
    main()
