"""Planning layer: input normalization, focus rotation and naming."""

from workout_engine.planning.focus_sequence import (
    build_focus_distribution,
    build_focus_sequence,
    goal_to_focus,
    merge_focus_by_priority,
)
from workout_engine.planning.naming import (
    build_plan_title,
    build_rationale,
    build_session_name,
    format_focus_label,
    format_goal_label,
)
from workout_engine.planning.normalizer import (
    DEFAULT_INPUT,
    adjust_minutes_per_session,
    apply_rest_preference,
    normalize_history,
    normalize_plan_input,
    validate_plan_input,
)

__all__ = [
    "DEFAULT_INPUT",
    "adjust_minutes_per_session",
    "apply_rest_preference",
    "build_focus_distribution",
    "build_focus_sequence",
    "build_plan_title",
    "build_rationale",
    "build_session_name",
    "format_focus_label",
    "format_goal_label",
    "goal_to_focus",
    "merge_focus_by_priority",
    "normalize_history",
    "normalize_plan_input",
    "validate_plan_input",
]
