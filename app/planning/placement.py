"""
Run placement - choose the days for the long run and the easy runs.

Long run
    Drop days that are committed (existing runs), already claimed in this
    pass, or not allowed by the policy's long-run weekdays, then take the
    highest score.  Ties go to a preferred weekday, then to the earliest
    date.  Nothing is forced onto a disallowed day: no eligible day means
    no long run.

Easy runs
    Drop the long-run day and the policy's rest day(s) right after it,
    plus committed and claimed days, then greedily take the top *count*
    by score (ties -> earliest).  Fewer eligible days means fewer runs.
"""

from __future__ import annotations

import datetime
from typing import Optional

from app.planning.policy import DEFAULT_POLICY, SchedulingPolicy
from app.planning.validation import add_days
from app.schemas.planning import ScoredDay


def rest_days_after(long_run_date: datetime.date, policy: Optional[SchedulingPolicy] = None) -> set[datetime.date]:
    """Dates left free after a long run on *long_run_date*."""
    cfg = policy or DEFAULT_POLICY
    return {add_days(long_run_date, offset) for offset in range(1, cfg.rest_days_after_long_run + 1)}


def find_best_long_run_day(scored_days: list[ScoredDay], existing_run_dates: set[datetime.date],
                           used_dates: set[datetime.date], policy: Optional[SchedulingPolicy] = None,
                           avoid_dates: Optional[set[datetime.date]] = None, ) -> Optional[ScoredDay]:
    """Pick the long-run day, or ``None`` when no day is eligible.

    ``avoid_dates`` is a soft exclusion: those days are only used when
    nothing else is eligible.
    """
    cfg = policy or DEFAULT_POLICY
    candidates = [d for d in scored_days if
                  d.date not in existing_run_dates and d.date not in used_dates and cfg.allows_long_run_on(
                      d.date.weekday())]
    if not candidates:
        return None

    if avoid_dates:
        preferred = [d for d in candidates if d.date not in avoid_dates]
        if preferred:
            candidates = preferred

    return min(candidates,
               key=lambda d: (-d.score, d.date.weekday() not in cfg.preferred_long_run_weekdays, d.date), )


def find_easy_run_days(scored_days: list[ScoredDay], long_run_date: Optional[datetime.date],
                       existing_run_dates: set[datetime.date], used_dates: set[datetime.date], count: int,
                       policy: Optional[SchedulingPolicy] = None,
                       blocked_dates: Optional[set[datetime.date]] = None, ) -> list[ScoredDay]:
    """Pick up to *count* easy-run days, best score first."""
    if count <= 0:
        return []

    excluded = set(existing_run_dates) | set(used_dates) | set(blocked_dates or ())
    if long_run_date is not None:
        excluded.add(long_run_date)
        excluded |= rest_days_after(long_run_date, policy)

    eligible = [d for d in scored_days if d.date not in excluded]
    eligible.sort(key=lambda d: (-d.score, d.date))
    return eligible[:count]
