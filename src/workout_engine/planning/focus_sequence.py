"""Weekly focus rotation.

Maps training goals to default focus areas and lays them out across the
sessions of a week.
"""

from __future__ import annotations

from typing import Iterable, Sequence

from workout_engine.models.enums import FocusArea, Goal, GoalPriority
from workout_engine.models.plan_input import PlanGoals, PlanPreferences

_GOAL_FOCUS: dict[Goal, tuple[FocusArea, ...]] = {
    Goal.ENDURANCE: (FocusArea.CARDIO, FocusArea.FULL_BODY, FocusArea.MOBILITY),
    Goal.CARDIO: (FocusArea.CARDIO, FocusArea.FULL_BODY, FocusArea.MOBILITY),
    Goal.HYPERTROPHY: (FocusArea.UPPER, FocusArea.LOWER, FocusArea.FULL_BODY),
    Goal.GENERAL_FITNESS: (FocusArea.FULL_BODY, FocusArea.CARDIO, FocusArea.MOBILITY),
}
_DEFAULT_GOAL_FOCUS = (FocusArea.UPPER, FocusArea.LOWER, FocusArea.CORE)


def goal_to_focus(goal: Goal) -> list[FocusArea]:
    """Default focus rotation for a goal."""
    return list(_GOAL_FOCUS.get(goal, _DEFAULT_GOAL_FOCUS))


def merge_focus_by_priority(
    primary: Sequence[FocusArea],
    secondary: Sequence[FocusArea] | None,
    priority: GoalPriority,
) -> list[FocusArea]:
    """Combine two goal rotations according to which goal leads.

    ``primary`` priority ignores the secondary rotation, ``secondary``
    priority repeats the secondary rotation twice ahead of the primary, and
    ``balanced`` alternates primary and secondary focuses.
    """
    if not secondary or priority == GoalPriority.PRIMARY:
        return list(primary)
    if priority == GoalPriority.SECONDARY:
        return [*secondary, *secondary, *primary]
    merged: list[FocusArea] = []
    for index, focus in enumerate(primary):
        merged.append(focus)
        merged.append(secondary[index % len(secondary)])
    return merged


def build_focus_sequence(
    sessions: int,
    preferences: PlanPreferences,
    goals: PlanGoals,
) -> list[FocusArea]:
    """Focus of each of ``sessions`` sessions, cycling through the pool.

    Preferred focus areas win outright; otherwise the pool comes from the
    goals via ``merge_focus_by_priority``.
    """
    if preferences.focus_areas:
        pool = list(preferences.focus_areas)
    else:
        secondary = goal_to_focus(goals.secondary) if goals.secondary else None
        pool = merge_focus_by_priority(goal_to_focus(goals.primary), secondary, goals.priority)
    return [pool[index % len(pool)] for index in range(max(sessions, 0))]


def build_focus_distribution(focuses: Iterable[FocusArea]) -> dict[FocusArea, int]:
    """Count sessions per focus; every focus area is present, zero or not."""
    distribution = {focus: 0 for focus in FocusArea}
    for focus in focuses:
        distribution[focus] += 1
    return distribution
