"""Name keys, movement families and muscle matching for catalog exercises."""

from __future__ import annotations

from typing import Iterable

from workout_engine.catalog.tables import DEFAULT_FOCUS_TABLES, FocusTables
from workout_engine.models.enums import COMPOUND_PATTERNS
from workout_engine.models.exercise import Exercise


def normalize_exercise_key(name: str) -> str:
    return " ".join(name.lower().split())


def primary_muscle_key(exercise: Exercise) -> str:
    return (exercise.primary_muscle or "").strip().lower()


def family_from_name(name: str, tables: FocusTables = DEFAULT_FOCUS_TABLES) -> str | None:
    """First keyword row (in table order) found in the name, or None."""
    lowered = name.lower()
    for keywords, family in tables.family_keywords:
        if any(keyword in lowered for keyword in keywords):
            return family
    return None


def movement_family(exercise: Exercise, tables: FocusTables = DEFAULT_FOCUS_TABLES) -> str:
    """Classify an exercise into a coarse movement family.

    Name keywords win; otherwise the movement pattern, else "other".
    """
    return family_from_name(exercise.name, tables) or exercise.movement_pattern or "other"


def is_compound(exercise: Exercise) -> bool:
    return (exercise.movement_pattern or "") in COMPOUND_PATTERNS


def matches_primary_muscle(exercise: Exercise, muscles: Iterable[str]) -> bool:
    """True if the exercise's primary muscle contains any of the given muscles."""
    key = primary_muscle_key(exercise)
    if not key:
        return False
    return any(muscle.lower() in key for muscle in muscles)
