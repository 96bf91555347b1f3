"""Tests for calendar helpers and schedule validators."""

import datetime

import pytest

from app.planning.validation import (
    add_days,
    format_date_key,
    get_day_gap,
    get_day_name,
    is_weekend,
    to_date,
    validate_no_back_to_back_hard_days,
    validate_no_large_gaps,
)
from app.schemas.planning import ExistingRun, RunType

MONDAY = datetime.date(2025, 12, 1)


def _run(offset: int, run_type: RunType = RunType.EASY_RUN) -> ExistingRun:
    return ExistingRun(date=MONDAY + datetime.timedelta(days=offset), run_type=run_type)


# ======================================================================
# Calendar helpers
# ======================================================================


class TestCalendarHelpers:
    @pytest.mark.parametrize("value", [
        datetime.date(2025, 12, 1),
        datetime.datetime(2025, 12, 1, 18, 30),
        "2025-12-01",
        "2025-12-01T06:00:00",
    ])
    def test_format_date_key(self, value):
        assert format_date_key(value) == "2025-12-01"

    def test_to_date_passthrough(self):
        assert to_date(MONDAY) is MONDAY

    def test_add_days_crosses_month_and_year(self):
        assert add_days(datetime.date(2025, 12, 31), 1) == datetime.date(2026, 1, 1)
        assert add_days(MONDAY, -1) == datetime.date(2025, 11, 30)

    def test_day_names(self):
        names = [get_day_name(add_days(MONDAY, i)) for i in range(7)]
        assert names == ["Monday", "Tuesday", "Wednesday", "Thursday", "Friday", "Saturday", "Sunday"]

    def test_is_weekend(self):
        assert [is_weekend(add_days(MONDAY, i)) for i in range(7)] == [False] * 5 + [True] * 2

    def test_day_gap_is_absolute(self):
        assert get_day_gap(MONDAY, add_days(MONDAY, 4)) == 4
        assert get_day_gap(add_days(MONDAY, 4), MONDAY) == 4
        assert get_day_gap("2025-12-01", "2025-12-01") == 0


# ======================================================================
# Gap validator
# ======================================================================


class TestNoLargeGaps:
    def test_gap_of_four_is_allowed(self):
        # Monday -> Friday
        assert validate_no_large_gaps([_run(0), _run(4)]) is True

    def test_gap_of_five_is_rejected(self):
        assert validate_no_large_gaps([_run(0), _run(5)]) is False

    def test_order_does_not_matter(self):
        assert validate_no_large_gaps([_run(8), _run(0), _run(4)]) is True
        assert validate_no_large_gaps([_run(9), _run(0), _run(4)]) is False

    def test_zero_or_one_run(self):
        assert validate_no_large_gaps([]) is True
        assert validate_no_large_gaps([_run(3)]) is True

    def test_custom_limit(self):
        assert validate_no_large_gaps([_run(0), _run(3)], max_gap_days=2) is False


# ======================================================================
# Hard-day validator
# ======================================================================


class TestNoBackToBackHardDays:
    def test_adjacent_hard_runs_rejected(self):
        assert validate_no_back_to_back_hard_days([_run(5, RunType.LONG_RUN), _run(6, RunType.TEMPO_RUN)]) is False

    def test_hard_after_easy_is_fine(self):
        assert validate_no_back_to_back_hard_days([_run(5, RunType.LONG_RUN), _run(6, RunType.EASY_RUN)]) is True

    def test_hard_runs_two_days_apart(self):
        runs = [_run(1, RunType.INTERVAL_RUN), _run(3, RunType.RACE), _run(5, RunType.LONG_RUN)]
        assert validate_no_back_to_back_hard_days(runs) is True

    def test_recovery_counts_as_easy(self):
        runs = [_run(0, RunType.RECOVERY_RUN), _run(1, RunType.RACE), _run(2, RunType.RECOVERY_RUN)]
        assert validate_no_back_to_back_hard_days(runs) is True

    def test_empty(self):
        assert validate_no_back_to_back_hard_days([]) is True
