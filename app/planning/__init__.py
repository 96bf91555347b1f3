"""Run scheduling core - weather scoring, placement, gap validation, reasons."""

from app.planning.policy import DEFAULT_POLICY, SchedulingPolicy, get_policy
from app.planning.suggestions import generate_suggestions, get_runs_needed

__all__ = ["DEFAULT_POLICY", "SchedulingPolicy", "generate_suggestions", "get_policy", "get_runs_needed"]
