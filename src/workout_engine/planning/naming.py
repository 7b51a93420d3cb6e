"""Naming — session names, plan titles and rationales.

Produces the human-readable text attached to generated sessions and plans.
"""

from __future__ import annotations

from collections import Counter
from typing import Iterable, Sequence

from workout_engine.models.enums import FocusArea, Goal, RestPreference
from workout_engine.models.exercise import Exercise, ScheduledExercise

_FOCUS_LABELS: dict[FocusArea, str] = {
    FocusArea.UPPER: "Upper Body",
    FocusArea.LOWER: "Lower Body",
    FocusArea.FULL_BODY: "Full Body",
    FocusArea.CORE: "Core",
    FocusArea.CARDIO: "Cardio",
    FocusArea.MOBILITY: "Mobility",
    FocusArea.ARMS: "Arms",
    FocusArea.LEGS: "Legs",
    FocusArea.BICEPS: "Biceps",
    FocusArea.TRICEPS: "Triceps",
    FocusArea.CHEST: "Chest",
    FocusArea.BACK: "Back",
    FocusArea.SHOULDERS: "Shoulders",
}

_GOAL_LABELS: dict[Goal, str] = {
    Goal.STRENGTH: "Strength",
    Goal.HYPERTROPHY: "Hypertrophy",
    Goal.ENDURANCE: "Endurance",
    Goal.RANGE_OF_MOTION: "Range Of Motion",
    Goal.CARDIO: "Cardio",
    Goal.GENERAL_FITNESS: "General Fitness",
}

_RECOVERY_NOTES: dict[RestPreference, str] = {
    RestPreference.HIGH_RECOVERY: "Extra recovery was prioritized between sessions.",
    RestPreference.MINIMAL_REST: "Sessions are designed for minimal rest between workouts.",
    RestPreference.BALANCED: "Recovery is balanced across the rotation.",
}


def format_focus_label(focus: FocusArea) -> str:
    return _FOCUS_LABELS.get(focus, focus.value.replace("_", " ").title())


def format_goal_label(goal: Goal) -> str:
    return _GOAL_LABELS.get(goal, goal.value.replace("_", " ").title())


def format_focus_areas(focuses: Iterable[FocusArea]) -> str:
    """Join focus labels with " + ", dropping repeats."""
    labels = dict.fromkeys(format_focus_label(focus) for focus in focuses)
    return " + ".join(labels)


def _pattern_counts(exercises: Sequence[ScheduledExercise | Exercise]) -> Counter[str]:
    counts: Counter[str] = Counter()
    for item in exercises:
        exercise = item.exercise if isinstance(item, ScheduledExercise) else item
        if exercise.movement_pattern:
            counts[exercise.movement_pattern.lower()] += 1
    return counts


def build_session_name(
    focus: FocusArea | Sequence[FocusArea],
    exercises: Sequence[ScheduledExercise | Exercise],
    goal: Goal,
) -> str:
    """Name a session from its focus, goal and movement-pattern mix.

    Upper sessions lean "Push" or "Pull" and lower sessions lean "Squat" or
    "Hinge" when one pattern dominates. Several focuses produce a combined
    label such as "Chest + Back - Strength Focus".
    """
    goal_label = format_goal_label(goal)
    if not isinstance(focus, FocusArea):
        focuses = list(dict.fromkeys(focus))
        if len(focuses) != 1:
            return f"{format_focus_areas(focuses)} - {goal_label} Focus"
        focus = focuses[0]

    counts = _pattern_counts(exercises)
    if focus == FocusArea.UPPER:
        push, pull = counts["push"], counts["pull"]
        if push > pull:
            return "Push - Chest & Tris"
        if pull > push:
            return "Pull - Back & Biceps"
        return f"Upper Body - {goal_label} Focus"
    if focus == FocusArea.LOWER:
        squat, hinge = counts["squat"], counts["hinge"]
        if squat > hinge:
            return "Legs - Squat Focus"
        if hinge > squat:
            return "Legs - Hinge Focus"
        return f"Lower Body - {goal_label} Focus"
    if focus == FocusArea.FULL_BODY:
        return f"Full Body - {goal_label} Flow"
    if focus == FocusArea.CORE:
        return "Core - Stability Focus"
    if focus == FocusArea.CARDIO:
        return f"Conditioning - {goal_label} Circuit"
    if focus == FocusArea.MOBILITY:
        return "Mobility - Recovery Flow"
    return f"{format_focus_label(focus)} - {goal_label} Focus"


def build_plan_title(focus: FocusArea, goal: Goal, minutes: int) -> str:
    """e.g. "Chest · Strength · 45 min"."""
    return f"{format_focus_label(focus)} · {format_goal_label(goal)} · {minutes} min"


def build_rationale(
    focus: FocusArea,
    duration_minutes: int,
    rest_preference: RestPreference,
    goal: Goal,
) -> str:
    note = _RECOVERY_NOTES[rest_preference]
    return (
        f"{duration_minutes} minute {format_goal_label(goal)} session focused on "
        f"{format_focus_label(focus)}. {note}"
    )


def build_plan_description(sessions: int, focus: FocusArea, styles: Sequence[Goal]) -> str:
    """One-line plan summary; mixed styles are called out."""
    if len(set(styles)) > 1:
        return f"{sessions} sessions per week · Mixed styles across your focus rotation."
    return f"{sessions} sessions per week · {format_focus_label(focus)} focus."


def build_template_description(focus: FocusArea, goal: Goal) -> str:
    return f"{format_focus_label(focus)} focus · {goal.value.replace('_', ' ')} goal."
