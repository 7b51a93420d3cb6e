"""Exercise selection: filtering, focus constraints and variety scoring."""

from workout_engine.selection.catalog_filter import (
    ExercisePools,
    build_pools,
    filter_exercises,
    is_option_available,
    is_or_group_satisfied,
    matches_focus_area,
    select_equipment_option,
    select_exercise_equipment,
    select_from_or_group,
)
from workout_engine.selection.focus import get_focus_constraint
from workout_engine.selection.movement import movement_family, normalize_exercise_key
from workout_engine.selection.variety_scorer import (
    HistorySummary,
    VarietyScorer,
    history_from_exercises,
    score_exercise,
)

__all__ = [
    "ExercisePools",
    "HistorySummary",
    "VarietyScorer",
    "build_pools",
    "filter_exercises",
    "get_focus_constraint",
    "history_from_exercises",
    "is_option_available",
    "is_or_group_satisfied",
    "matches_focus_area",
    "movement_family",
    "normalize_exercise_key",
    "score_exercise",
    "select_equipment_option",
    "select_exercise_equipment",
    "select_from_or_group",
]
