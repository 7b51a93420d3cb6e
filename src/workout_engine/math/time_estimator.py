"""Per-exercise duration estimates used to pack sessions into a time budget."""

from __future__ import annotations

from workout_engine.models.enums import (
    DEFAULT_REST_SECONDS,
    DEFAULT_SETUP_MINUTES,
    SETUP_MINUTES,
    FocusArea,
    Goal,
)
from workout_engine.models.equipment import EquipmentOption
from workout_engine.models.exercise import Exercise, ExercisePrescription


def setup_minutes(option: EquipmentOption | None) -> int:
    """Changeover time for an equipment kind (1 bodyweight, 2 free weights, 3 barbell/machine)."""
    if option is None:
        return DEFAULT_SETUP_MINUTES
    return SETUP_MINUTES.get(option.kind, DEFAULT_SETUP_MINUTES)


def work_seconds(goal: Goal, exercise: Exercise) -> int:
    """Time under work per set."""
    if exercise.focus == FocusArea.CARDIO or exercise.is_cardio:
        return 60
    if goal == Goal.STRENGTH:
        return 50
    if goal in (Goal.ENDURANCE, Goal.CARDIO):
        return 60
    return 45


def estimate_exercise_minutes(
    exercise: Exercise,
    prescription: ExercisePrescription,
    option: EquipmentOption | None = None,
    goal: Goal | None = None,
) -> float:
    """Estimate the minutes an exercise occupies in a session.

    The set-based estimate is ``setup + sets * (work + rest) / 60``. When the
    catalog declares a total duration, a per-set fallback derived from it is
    computed too and the larger estimate wins, so long-format exercises
    (timed carries, flows) are not under-counted.

    Args:
        exercise: Catalog entry.
        prescription: Resolved prescription; only sets and rest are read.
        option: Equipment option in use, for setup time.
        goal: Session goal. Defaults to general fitness.

    Returns:
        Minutes rounded to one decimal place, never below 1.
    """
    setup = setup_minutes(option)
    work = work_seconds(goal or Goal.GENERAL_FITNESS, exercise)
    rest = prescription.rest_seconds if prescription.rest_seconds is not None else DEFAULT_REST_SECONDS
    estimated = setup + prescription.sets * (work + rest) / 60

    fallback = 0.0
    if exercise.duration_minutes:
        per_set = exercise.duration_minutes / max(exercise.sets, 1)
        fallback = setup + prescription.sets * per_set

    return max(1.0, round(max(estimated, fallback), 1))
