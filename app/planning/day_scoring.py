"""
Day scoring - apply the weather scorer across a forecast horizon.

Each forecast day becomes a :class:`ScoredDay` for one run type.  When the
policy enables time windows and the day carries hourly samples, the day is
scored by its best run window inside the daypart instead of by the daily
aggregate:

    window score = mean(hourly scores over ``window_hours`` consecutive hours)

The best window (ties -> earliest) sets the day's score, its aggregated
weather becomes the snapshot, and the day is acceptable only when every
hour in the window is acceptable.  Days without usable hours fall back to
daily scoring.

Without thresholds for the run type every day gets the neutral score.
"""

from __future__ import annotations

import datetime
from collections import Counter
from typing import Optional

from loguru import logger

from app.planning.policy import DEFAULT_POLICY, SchedulingPolicy
from app.planning.validation import format_date_key
from app.planning.weather_scoring import (
    get_preference_for_run_type,
    get_weather_quality,
    get_weather_score,
    is_acceptable_weather,
    round_half_up,
)
from app.schemas.planning import PreferenceThresholds, RunType, ScoredDay
from app.schemas.weather import HourlyWeather, WeatherSample, WeatherSnapshot

NEUTRAL_SCORE = 50

_ONE_HOUR = datetime.timedelta(hours=1)


def _make_scored_day(sample: WeatherSample, score: int, is_acceptable: bool, weather: WeatherSnapshot,
                     start_time: Optional[datetime.time] = None,
                     end_time: Optional[datetime.time] = None, ) -> ScoredDay:
    return ScoredDay(date=sample.date, date_key=format_date_key(sample.date), score=score,
                     quality=get_weather_quality(score), is_acceptable=is_acceptable, weather=weather,
                     start_time=start_time, end_time=end_time, )


# ======================================================================
# Time windows
# ======================================================================


def _aggregate_window(hours: list[HourlyWeather]) -> WeatherSnapshot:
    """Summarise a run window: mean temperature, worst precipitation and wind."""
    condition = Counter(h.condition for h in hours).most_common(1)[0][0]
    feels = [h.feels_like for h in hours if h.feels_like is not None]
    humidity = [h.humidity for h in hours if h.humidity is not None]
    return WeatherSnapshot(condition=condition, temperature=round(sum(h.temperature for h in hours) / len(hours), 1),
                           precipitation=max(h.precipitation for h in hours),
                           wind_speed=max(h.wind_speed for h in hours),
                           feels_like=round(sum(feels) / len(feels), 1) if feels else None,
                           humidity=round(sum(humidity) / len(humidity)) if humidity else None, )


def _candidate_windows(hourly: list[HourlyWeather], policy: SchedulingPolicy) -> list[list[HourlyWeather]]:
    """All runs of ``window_hours`` consecutive hours inside the daypart."""
    tw = policy.time_window
    in_daypart = sorted((h for h in hourly if tw.daypart_start_hour <= h.time.hour < tw.daypart_end_hour),
                        key=lambda h: h.time, )
    windows = []
    for i in range(len(in_daypart) - tw.window_hours + 1):
        window = in_daypart[i:i + tw.window_hours]
        if all(b.time - a.time == _ONE_HOUR for a, b in zip(window, window[1:])):
            windows.append(window)
    return windows


def _score_best_window(sample: WeatherSample, thresholds: PreferenceThresholds,
                       policy: SchedulingPolicy, ) -> Optional[ScoredDay]:
    best: Optional[tuple[float, list[HourlyWeather]]] = None
    for window in _candidate_windows(sample.hourly, policy):
        mean = sum(get_weather_score(h, thresholds, policy) for h in window) / len(window)
        if best is None or mean > best[0]:
            best = (mean, window)

    if best is None:
        return None

    mean, window = best
    end = window[-1].time + _ONE_HOUR
    return _make_scored_day(sample, score=max(0, min(100, round_half_up(mean))),
                            is_acceptable=all(is_acceptable_weather(h, thresholds) for h in window),
                            weather=_aggregate_window(window), start_time=window[0].time.time(),
                            end_time=end.time(), )


# ======================================================================
# Public API
# ======================================================================


def score_day(sample: WeatherSample, thresholds: Optional[PreferenceThresholds],
              policy: Optional[SchedulingPolicy] = None, ) -> ScoredDay:
    """Score a single forecast day."""
    cfg = policy or DEFAULT_POLICY
    snapshot = WeatherSnapshot.from_sample(sample)

    if thresholds is None:
        return _make_scored_day(sample, score=NEUTRAL_SCORE, is_acceptable=True, weather=snapshot)

    if cfg.time_window.enabled and sample.hourly:
        windowed = _score_best_window(sample, thresholds, cfg)
        if windowed is not None:
            return windowed

    return _make_scored_day(sample, score=get_weather_score(sample, thresholds, cfg),
                            is_acceptable=is_acceptable_weather(sample, thresholds), weather=snapshot, )


def score_forecast_days(forecast: list[WeatherSample], preferences: list[PreferenceThresholds],
                        run_type: RunType = RunType.LONG_RUN,
                        policy: Optional[SchedulingPolicy] = None, ) -> list[ScoredDay]:
    """Score every forecast day for *run_type*.

    The result is ordered by date with one entry per calendar day (the
    first sample wins when the forecast repeats a date).
    """
    thresholds = get_preference_for_run_type(preferences, run_type)
    by_date: dict[datetime.date, ScoredDay] = {}
    for sample in forecast:
        if sample.date not in by_date:
            by_date[sample.date] = score_day(sample, thresholds, policy)

    scored = [by_date[d] for d in sorted(by_date)]
    logger.debug("Scored {} forecast days for {} (thresholds={})", len(scored), run_type.value,
                 "set" if thresholds else "neutral")
    return scored
