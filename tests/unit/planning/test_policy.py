"""Tests for scheduling policies and run-type classification."""

import pytest
from pydantic import ValidationError

from app.planning.policy import (
    DEFAULT_POLICY,
    POLICIES,
    SUNDAY_MONDAY_POLICY,
    WEEKEND_FLEX_POLICY,
    ScoringWeights,
    SchedulingPolicy,
    TimeWindowConfig,
    classify_run_type,
    get_policy,
    is_hard_run,
)
from app.schemas.planning import RunType


class TestRunTypeClassification:
    @pytest.mark.parametrize("run_type", [RunType.LONG_RUN, RunType.TEMPO_RUN, RunType.INTERVAL_RUN, RunType.RACE])
    def test_hard_types(self, run_type):
        assert classify_run_type(run_type) == "hard"
        assert is_hard_run(run_type) is True

    @pytest.mark.parametrize("run_type", [RunType.EASY_RUN, RunType.RECOVERY_RUN])
    def test_easy_types(self, run_type):
        assert classify_run_type(run_type) == "easy"
        assert is_hard_run(run_type) is False


class TestScoringWeights:
    def test_defaults_sum_to_100(self):
        w = ScoringWeights()
        assert (w.precipitation, w.wind, w.temperature, w.condition) == (40, 25, 20, 15)

    def test_weights_must_sum_to_100(self):
        with pytest.raises(ValidationError):
            ScoringWeights(precipitation=50, wind=25, temperature=20, condition=15)

    def test_weights_are_frozen(self):
        w = ScoringWeights()
        with pytest.raises(ValidationError):
            w.precipitation = 10


class TestTimeWindowConfig:
    def test_disabled_by_default(self):
        assert TimeWindowConfig().enabled is False

    def test_daypart_must_fit_a_window(self):
        with pytest.raises(ValidationError):
            TimeWindowConfig(enabled=True, daypart_start_hour=10, daypart_end_hour=11, window_hours=2)


class TestSchedulingPolicy:
    def test_default_is_weekend_flex(self):
        assert DEFAULT_POLICY is WEEKEND_FLEX_POLICY
        assert DEFAULT_POLICY.rest_days_after_long_run == 1
        assert DEFAULT_POLICY.max_gap_days == 4
        assert DEFAULT_POLICY.optimal_score == 80

    def test_weekend_flex_allows_every_day(self):
        assert all(WEEKEND_FLEX_POLICY.allows_long_run_on(d) for d in range(7))

    def test_sunday_monday_restricts_long_run(self):
        allowed = [d for d in range(7) if SUNDAY_MONDAY_POLICY.allows_long_run_on(d)]
        assert allowed == [0, 6]
        assert SUNDAY_MONDAY_POLICY.rest_days_after_long_run == 2
        assert SUNDAY_MONDAY_POLICY.time_window.enabled is True

    def test_custom_policy(self):
        policy = SchedulingPolicy(name="custom", max_gap_days=3, rest_days_after_long_run=0)
        assert policy.max_gap_days == 3
        assert policy.weights == ScoringWeights()

    def test_get_policy(self):
        for name, policy in POLICIES.items():
            assert get_policy(name) is policy

    def test_unknown_policy_raises(self):
        with pytest.raises(KeyError, match="not found"):
            get_policy("monday_only")
