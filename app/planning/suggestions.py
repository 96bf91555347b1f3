"""
Suggestion assembly - the scheduler's entry point.

Pipeline (pure, synchronous, deterministic):

1. Resolve distances and the easy-run count from the plan week.
2. Score every forecast day for the long run and for easy runs.
3. Place the long run (unless one is already committed in the horizon).
4. Place the easy runs around it, honouring the rest day(s).
5. **Gap fill**: while a run-free stretch longer than ``max_gap_days``
   remains inside the horizon, force an easy run onto the best remaining
   day in it, whatever the weather.  Consistency beats weather here.
6. Generate a reason for every suggestion.
7. Return the suggestions sorted by date.

The days just before and just after the horizon act as virtual anchors
for step 5 (a completed run a few days before the horizon replaces the
leading one), and committed runs inside the horizon count as anchors too.
A second pass then closes any stretch left between the suggestions
themselves.
"""

from __future__ import annotations

import datetime
from typing import Optional

from loguru import logger

from app.planning.day_scoring import score_forecast_days
from app.planning.placement import find_best_long_run_day, find_easy_run_days, rest_days_after
from app.planning.policy import DEFAULT_POLICY, SchedulingPolicy, is_hard_run
from app.planning.reasons import generate_reason
from app.planning.validation import add_days
from app.schemas.planning import (
    CompletedRun,
    ExistingRun,
    PreferenceThresholds,
    RunType,
    RunsNeeded,
    ScoredDay,
    Suggestion,
    TrainingPlanWeek,
)
from app.schemas.weather import WeatherSample

# ======================================================================
# Distances
# ======================================================================


def _cap_long_run(distance: float, longest_completed: Optional[float], policy: SchedulingPolicy) -> float:
    """Hold the long run within one progression step of the longest run so far."""
    if not longest_completed or policy.long_run_progression_step is None:
        return distance
    return min(distance, round(longest_completed + policy.long_run_progression_step, 1))


def get_runs_needed(plan: Optional[TrainingPlanWeek], policy: Optional[SchedulingPolicy] = None,
                    longest_completed_distance: Optional[float] = None, ) -> RunsNeeded:
    """Resolve long-run distance, easy-run distance and easy-run count.

    ``remaining = weekly_mileage_target - long_run``; a remainder above the
    policy's split threshold is shared by more, shorter runs.  When the
    long run is capped by progression, the easy runs absorb the difference.
    """
    cfg = policy or DEFAULT_POLICY
    if plan is None:
        return RunsNeeded(long_run_distance=_cap_long_run(cfg.default_long_run_distance,
                                                          longest_completed_distance, cfg),
                          easy_run_distance=cfg.default_easy_run_distance,
                          total_easy_runs=cfg.default_easy_run_count, )

    long_run = plan.long_run_target if plan.long_run_target > 0 else cfg.default_long_run_distance
    long_run = _cap_long_run(long_run, longest_completed_distance, cfg)
    remaining = plan.weekly_mileage_target - long_run
    count = cfg.easy_run_count_high if remaining > cfg.easy_run_split_threshold else cfg.easy_run_count_low
    distance = round(remaining / count, 1) if count else 0.0

    return RunsNeeded(long_run_distance=long_run, easy_run_distance=max(distance, cfg.min_easy_run_distance),
                      total_easy_runs=count, )


# ======================================================================
# Gap fill
# ======================================================================


def _fill_gaps(scored_days: list[ScoredDay], anchors: set[datetime.date], excluded: set[datetime.date],
               policy: SchedulingPolicy, lead_anchor: Optional[datetime.date] = None,
               bounded: bool = True, ) -> list[ScoredDay]:
    """Force runs into stretches longer than ``max_gap_days``.

    With ``bounded`` the day before the horizon (or ``lead_anchor``) and
    the day after it close the outer stretches; otherwise only the
    stretches between *anchors* are checked.  Inside a violating stretch
    the best-scoring free day wins, then the one closest to the middle of
    the stretch, then the earliest.
    """
    if not scored_days:
        return []

    by_date = {d.date: d for d in scored_days}
    points = set(anchors)
    if bounded:
        points.add(lead_anchor or add_days(scored_days[0].date, -1))
        points.add(add_days(scored_days[-1].date, 1))
    taken = set(excluded)
    fillers: list[ScoredDay] = []

    filled = True
    while filled:
        filled = False
        ordered = sorted(points)
        for prev, nxt in zip(ordered, ordered[1:]):
            if (nxt - prev).days <= policy.max_gap_days:
                continue
            candidates = [by_date[d] for d in by_date if prev < d < nxt and d not in taken]
            if not candidates:
                continue
            middle = (prev.toordinal() + nxt.toordinal()) / 2
            best = min(candidates, key=lambda d: (-d.score, abs(d.date.toordinal() - middle), d.date))
            fillers.append(best)
            taken.add(best.date)
            points.add(best.date)
            filled = True
            break

    return fillers


def _lead_anchor(last_completed: Optional[CompletedRun], horizon_start: datetime.date,
                 policy: SchedulingPolicy) -> Optional[datetime.date]:
    """A recent completed run just before the horizon opens the first stretch."""
    if last_completed is None:
        return None
    earliest = add_days(horizon_start, -policy.max_gap_days)
    if earliest <= last_completed.date < horizon_start:
        return last_completed.date
    return None


# ======================================================================
# Assembly
# ======================================================================


def _build_suggestion(day: ScoredDay, run_type: RunType, distance: float, policy: SchedulingPolicy,
                      is_gap_filler: bool = False, ) -> Suggestion:
    suggestion = Suggestion(date=day.date, run_type=run_type, distance=distance, weather_score=day.score,
                            is_optimal=day.score >= policy.optimal_score, weather=day.weather,
                            start_time=day.start_time, end_time=day.end_time, )
    return suggestion.model_copy(update={"reason": generate_reason(suggestion, day, is_gap_filler)})


def generate_suggestions(forecast: list[WeatherSample], training_plan: Optional[TrainingPlanWeek] = None,
                         preferences: Optional[list[PreferenceThresholds]] = None,
                         existing_runs: Optional[list[ExistingRun]] = None,
                         policy: Optional[SchedulingPolicy] = None,
                         longest_completed_distance: Optional[float] = None,
                         last_completed_run: Optional[CompletedRun] = None, ) -> list[Suggestion]:
    """Propose a run schedule over the forecast horizon.

    Args:
        forecast: One sample per day.  Missing days are simply not
            candidates.
        training_plan: Current plan week, or ``None`` for defaults.
        preferences: Thresholds per run type.  Missing run types score
            neutral.
        existing_runs: Runs already on the calendar.  Their dates are
            never suggested again.
        policy: Optional :class:`SchedulingPolicy` override (uses
            ``DEFAULT_POLICY`` if ``None``).
        longest_completed_distance: Longest run so far; caps the long run
            at one progression step above it.
        last_completed_run: Most recent completed run.  Its rest days are
            honoured and, when recent, it opens the first gap.

    Returns:
        Suggestions sorted by date, at most one per date.  A one-day
        horizon yields at most the long run.
    """
    cfg = policy or DEFAULT_POLICY
    if not forecast:
        return []

    prefs = preferences or []
    committed = list(existing_runs or [])
    needed = get_runs_needed(training_plan, cfg, longest_completed_distance)

    long_days = score_forecast_days(forecast, prefs, RunType.LONG_RUN, cfg)
    easy_days = score_forecast_days(forecast, prefs, RunType.EASY_RUN, cfg)
    easy_by_date = {d.date: d for d in easy_days}
    horizon = set(easy_by_date)
    single_day = len(horizon) == 1

    if last_completed_run is not None:
        completed_type = last_completed_run.run_type
        if completed_type is None:
            is_long = last_completed_run.distance >= needed.long_run_distance
            completed_type = RunType.LONG_RUN if is_long else RunType.EASY_RUN
        committed.append(ExistingRun(date=last_completed_run.date, run_type=completed_type))

    existing_dates = {r.date for r in committed}
    in_horizon = [r for r in committed if r.date in horizon]
    blocked: set[datetime.date] = set()
    hard_neighbours: set[datetime.date] = set()
    for run in committed:
        if run.run_type == RunType.LONG_RUN:
            blocked |= rest_days_after(run.date, cfg)
        if is_hard_run(run.run_type):
            hard_neighbours |= {add_days(run.date, -1), add_days(run.date, 1)}

    used: set[datetime.date] = set()
    suggestions: list[Suggestion] = []

    # --- Long run ---
    long_day: Optional[ScoredDay] = None
    if not any(r.run_type == RunType.LONG_RUN for r in in_horizon):
        long_day = find_best_long_run_day(long_days, existing_dates, used | blocked, cfg,
                                          avoid_dates=hard_neighbours)
        if long_day is not None:
            used.add(long_day.date)
            blocked |= rest_days_after(long_day.date, cfg)
            suggestions.append(_build_suggestion(long_day, RunType.LONG_RUN, needed.long_run_distance, cfg))

    if single_day:
        return suggestions

    # --- Easy runs ---
    already_easy = sum(1 for r in in_horizon if r.run_type != RunType.LONG_RUN)
    easy_count = max(needed.total_easy_runs - already_easy, 0)
    for day in find_easy_run_days(easy_days, long_day.date if long_day else None, existing_dates, used,
                                  easy_count, cfg, blocked_dates=blocked, ):
        used.add(day.date)
        suggestions.append(_build_suggestion(day, RunType.EASY_RUN, needed.easy_run_distance, cfg))

    # --- Gap fill ---
    # First across the calendar (committed runs close gaps), then between
    # the suggestions alone so the returned schedule holds up by itself.
    anchors = used | {r.date for r in in_horizon}
    lead = _lead_anchor(last_completed_run, easy_days[0].date, cfg)
    fillers = _fill_gaps(easy_days, anchors, existing_dates | used | blocked, cfg, lead_anchor=lead)
    placed = used | {d.date for d in fillers}
    fillers += _fill_gaps(easy_days, placed, existing_dates | placed | blocked, cfg, bounded=False)
    for day in fillers:
        suggestions.append(_build_suggestion(day, RunType.EASY_RUN, needed.easy_run_distance, cfg,
                                             is_gap_filler=True))

    suggestions.sort(key=lambda s: s.date)
    logger.debug("Generated {} suggestions ({} gap fillers) over {} days with policy {}", len(suggestions),
                 len(fillers), len(horizon), cfg.name)
    return suggestions
