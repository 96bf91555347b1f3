"""Tests for scoring a forecast horizon day by day (daily and time-window)."""

import datetime

from app.planning.day_scoring import NEUTRAL_SCORE, score_day, score_forecast_days
from app.planning.policy import DEFAULT_POLICY, SUNDAY_MONDAY_POLICY
from app.planning.weather_scoring import DEFAULT_PREFERENCES, get_preference_for_run_type
from app.schemas.planning import RunType
from app.schemas.weather import HourlyWeather, WeatherSample

# ======================================================================
# Helpers
# ======================================================================

MONDAY = datetime.date(2025, 12, 1)
LONG = get_preference_for_run_type(DEFAULT_PREFERENCES, RunType.LONG_RUN)


def _make_sample(day: datetime.date = MONDAY, condition: str = "Clear", temperature: float = 12.5,
                 precipitation: float = 0.0, wind_speed: float = 0.0,
                 hourly: list[HourlyWeather] | None = None, ) -> WeatherSample:
    return WeatherSample(timestamp=datetime.datetime.combine(day, datetime.time(0)), condition=condition,
                         temperature=temperature, precipitation=precipitation, wind_speed=wind_speed,
                         hourly=hourly or [], )


def _make_hours(day: datetime.date, dry_hours: set[int], wet_precipitation: float = 80.0) -> list[HourlyWeather]:
    """24 mild, calm hours; only *dry_hours* are free of rain."""
    return [HourlyWeather(time=datetime.datetime.combine(day, datetime.time(h)), condition="Clear", temperature=12.5,
                          precipitation=0.0 if h in dry_hours else wet_precipitation, wind_speed=0.0, )
            for h in range(24)]


# ======================================================================
# Daily scoring
# ======================================================================


class TestScoreDay:
    def test_daily_score_and_quality(self):
        day = score_day(_make_sample(precipitation=20), LONG)
        assert day.score == 60
        assert day.quality == "good"
        assert day.is_acceptable is True
        assert day.date == MONDAY
        assert day.date_key == "2025-12-01"
        assert day.start_time is None and day.end_time is None

    def test_snapshot_copies_the_sample(self):
        day = score_day(_make_sample(condition="Overcast", temperature=9.0, precipitation=35, wind_speed=12), LONG)
        assert day.weather.condition == "Overcast"
        assert day.weather.temperature == 9.0
        assert day.weather.precipitation == 35
        assert day.weather.wind_speed == 12
        assert day.is_acceptable is False

    def test_missing_thresholds_give_neutral_score(self):
        day = score_day(_make_sample(condition="Thunderstorm", precipitation=100), None)
        assert day.score == NEUTRAL_SCORE
        assert day.quality == "fair"
        assert day.is_acceptable is True

    def test_hourly_data_ignored_without_time_windows(self):
        sample = _make_sample(precipitation=80, hourly=_make_hours(MONDAY, {9, 10}))
        day = score_day(sample, LONG, DEFAULT_POLICY)
        assert day.score == 60
        assert day.start_time is None


# ======================================================================
# Time-window scoring
# ======================================================================


class TestTimeWindowScoring:
    def test_best_window_sets_score_and_times(self):
        sample = _make_sample(precipitation=80, hourly=_make_hours(MONDAY, {9, 10}))
        day = score_day(sample, LONG, SUNDAY_MONDAY_POLICY)
        assert day.score == 100
        assert day.is_acceptable is True
        assert day.start_time == datetime.time(9, 0)
        assert day.end_time == datetime.time(11, 0)
        assert day.weather.precipitation == 0

    def test_hours_outside_daypart_are_ignored(self):
        # Dry only at 04:00-05:59, before the 06:00 daypart start
        sample = _make_sample(precipitation=80, hourly=_make_hours(MONDAY, {4, 5}))
        day = score_day(sample, LONG, SUNDAY_MONDAY_POLICY)
        # every window is wet: 100 - 60 = 40, earliest wins
        assert day.score == 40
        assert day.is_acceptable is False
        assert day.start_time == datetime.time(6, 0)
        assert day.end_time == datetime.time(8, 0)

    def test_window_is_unacceptable_if_any_hour_fails(self):
        hours = _make_hours(MONDAY, {9})
        hours[10] = hours[10].model_copy(update={"precipitation": 25.0})
        day = score_day(_make_sample(precipitation=80, hourly=hours), LONG, SUNDAY_MONDAY_POLICY)
        # 08-10 and 09-11 both average (40 + 100) / 2; earliest wins
        assert day.score == 70
        assert day.start_time == datetime.time(8, 0)
        assert day.is_acceptable is False

    def test_non_consecutive_hours_do_not_form_a_window(self):
        hours = [h for h in _make_hours(MONDAY, {9, 11}) if h.time.hour != 10]
        day = score_day(_make_sample(precipitation=80, hourly=hours), LONG, SUNDAY_MONDAY_POLICY)
        # 09 and 11 are both dry but not adjacent
        assert day.score == 70
        assert day.start_time == datetime.time(8, 0)

    def test_no_usable_hours_fall_back_to_daily(self):
        night_only = [h for h in _make_hours(MONDAY, set()) if h.time.hour < 6]
        day = score_day(_make_sample(precipitation=10, hourly=night_only), LONG, SUNDAY_MONDAY_POLICY)
        # daily: 10 / 20 * 60 = 30
        assert day.score == 70
        assert day.start_time is None


# ======================================================================
# Horizon
# ======================================================================


class TestScoreForecastDays:
    def test_sorted_by_date(self):
        forecast = [_make_sample(MONDAY + datetime.timedelta(days=i)) for i in (3, 0, 2, 1)]
        days = score_forecast_days(forecast, DEFAULT_PREFERENCES)
        assert [d.date_key for d in days] == ["2025-12-01", "2025-12-02", "2025-12-03", "2025-12-04"]

    def test_duplicate_dates_keep_first_sample(self):
        forecast = [_make_sample(precipitation=0), _make_sample(precipitation=100)]
        days = score_forecast_days(forecast, DEFAULT_PREFERENCES)
        assert len(days) == 1
        assert days[0].score == 100

    def test_run_type_selects_thresholds(self):
        forecast = [_make_sample(precipitation=30)]
        long_day = score_forecast_days(forecast, DEFAULT_PREFERENCES, RunType.LONG_RUN)[0]
        easy_day = score_forecast_days(forecast, DEFAULT_PREFERENCES, RunType.EASY_RUN)[0]
        assert long_day.is_acceptable is False
        assert easy_day.is_acceptable is True
        assert easy_day.score > long_day.score

    def test_missing_run_type_scores_neutral(self):
        days = score_forecast_days([_make_sample(), _make_sample(MONDAY + datetime.timedelta(days=1))], [])
        assert [d.score for d in days] == [NEUTRAL_SCORE, NEUTRAL_SCORE]

    def test_empty_forecast(self):
        assert score_forecast_days([], DEFAULT_PREFERENCES) == []
