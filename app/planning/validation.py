"""
Schedule validation and calendar helpers.

A *gap* is the number of calendar days between two consecutive runs
(Monday -> Friday is a gap of 4).  Gaps above ``max_gap_days`` (4 by
default, i.e. four or more run-free days) are disallowed.

Two hard run types (see :data:`app.planning.policy.RUN_TYPE_INTENSITY`)
must never sit on adjacent days.
"""

from __future__ import annotations

import datetime
from typing import Iterable, Protocol, Union

from app.planning.policy import DEFAULT_POLICY, is_hard_run
from app.schemas.planning import RunType

DateLike = Union[datetime.date, datetime.datetime, str]


class _DatedRun(Protocol):
    date: datetime.date
    run_type: RunType


# ======================================================================
# Calendar helpers
# ======================================================================


def to_date(value: DateLike) -> datetime.date:
    """Coerce a date, datetime or ISO string into a :class:`datetime.date`."""
    if isinstance(value, datetime.datetime):
        return value.date()
    if isinstance(value, datetime.date):
        return value
    return datetime.date.fromisoformat(value[:10])


def format_date_key(value: DateLike) -> str:
    """Return ``YYYY-MM-DD`` for *value*."""
    return to_date(value).isoformat()


def add_days(value: datetime.date, days: int) -> datetime.date:
    return value + datetime.timedelta(days=days)


def get_day_name(value: datetime.date) -> str:
    """English weekday name, e.g. ``'Monday'``."""
    return value.strftime("%A")


def is_weekend(value: datetime.date) -> bool:
    return value.weekday() >= 5


def get_day_gap(first: DateLike, second: DateLike) -> int:
    """Absolute number of calendar days between two dates."""
    return abs((to_date(second) - to_date(first)).days)


# ======================================================================
# Validators
# ======================================================================


def validate_no_large_gaps(suggestions: Iterable[_DatedRun], max_gap_days: int = DEFAULT_POLICY.max_gap_days) -> bool:
    """``True`` iff no two consecutive runs are more than *max_gap_days* apart."""
    dates = sorted(s.date for s in suggestions)
    return all(get_day_gap(a, b) <= max_gap_days for a, b in zip(dates, dates[1:]))


def validate_no_back_to_back_hard_days(suggestions: Iterable[_DatedRun]) -> bool:
    """``True`` iff no two hard runs fall on adjacent calendar days."""
    hard_dates = sorted({s.date for s in suggestions if is_hard_run(s.run_type)})
    return all(get_day_gap(a, b) != 1 for a, b in zip(hard_dates, hard_dates[1:]))
