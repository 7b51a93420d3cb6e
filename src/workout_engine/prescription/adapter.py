"""Prescription adapter: sets/reps/RPE/rest for an exercise in a given session.

Catalog values are treated as moderate-intensity, intermediate baselines.
"""

from __future__ import annotations

from workout_engine.math.utils import clamp, round_half_up
from workout_engine.models.enums import (
    GOAL_REST_MODIFIER,
    INTENSITY_REST_MODIFIER,
    MAX_PRESCRIBED_SETS,
    MAX_REST_SECONDS,
    MAX_RPE,
    MIN_PRESCRIBED_SETS,
    MIN_REST_SECONDS_CARDIO,
    MIN_REST_SECONDS_DEFAULT,
    MIN_RPE,
    ExperienceLevel,
    Goal,
    Intensity,
)
from workout_engine.models.exercise import Exercise, ExercisePrescription

# Goals whose sessions keep the catalog's duration-style reps
_CATALOG_REP_GOALS = frozenset({Goal.CARDIO, Goal.RANGE_OF_MOTION})


def derive_reps(goal: Goal, intensity: Intensity) -> str | None:
    """Rep range for a goal and intensity, or None to keep catalog reps."""
    high = intensity == Intensity.HIGH
    if goal == Goal.STRENGTH:
        return "3-6" if high else "4-6"
    if goal == Goal.ENDURANCE:
        return "15-20" if high else "12-15"
    if goal in _CATALOG_REP_GOALS:
        return None
    return "8-10" if high else "8-12"


def adjust_sets(base_sets: int, experience: ExperienceLevel) -> int:
    if experience == ExperienceLevel.BEGINNER:
        base_sets -= 1
    elif experience == ExperienceLevel.ADVANCED:
        base_sets += 1
    return int(clamp(base_sets, MIN_PRESCRIBED_SETS, MAX_PRESCRIBED_SETS))


def adjust_sets_for_intensity(sets: int, intensity: Intensity) -> int:
    """Low intensity adds a set; high intensity never removes one."""
    if intensity == Intensity.LOW:
        sets += 1
    return int(clamp(sets, MIN_PRESCRIBED_SETS, MAX_PRESCRIBED_SETS))


def adjust_rpe(base_rpe: float, intensity: Intensity) -> float:
    if intensity == Intensity.LOW:
        base_rpe -= 1
    elif intensity == Intensity.HIGH:
        base_rpe += 1
    return clamp(base_rpe, MIN_RPE, MAX_RPE)


def adjust_rest_seconds(
    exercise: Exercise,
    goal: Goal,
    intensity: Intensity,
    rest_modifier: float = 1.0,
) -> int:
    modifier = (
        rest_modifier
        * INTENSITY_REST_MODIFIER[intensity]
        * GOAL_REST_MODIFIER.get(goal, 1.0)
    )
    floor = MIN_REST_SECONDS_CARDIO if exercise.is_cardio else MIN_REST_SECONDS_DEFAULT
    return int(clamp(round_half_up(exercise.rest_seconds * modifier), floor, MAX_REST_SECONDS))


def adapt_prescription(
    exercise: Exercise,
    goal: Goal,
    intensity: Intensity,
    experience: ExperienceLevel,
    rest_modifier: float = 1.0,
) -> ExercisePrescription:
    """Derive the session prescription for one exercise.

    Args:
        exercise: Catalog entry supplying baseline sets/reps/RPE/rest.
        goal: Session goal.
        intensity: Requested intensity tier.
        experience: User experience level.
        rest_modifier: Caller scaling for rest (session length, recovery
            preference).

    Returns:
        ExercisePrescription without a load; load resolution happens once
        an equipment option is chosen.
    """
    keep_catalog_reps = exercise.is_cardio or exercise.is_mobility or goal in _CATALOG_REP_GOALS
    reps = exercise.reps if keep_catalog_reps else (derive_reps(goal, intensity) or exercise.reps)
    sets = adjust_sets_for_intensity(adjust_sets(exercise.sets, experience), intensity)
    return ExercisePrescription(
        sets=sets,
        reps=reps,
        rpe=adjust_rpe(exercise.rpe, intensity),
        rest_seconds=adjust_rest_seconds(exercise, goal, intensity, rest_modifier),
    )
