"""Variety scoring: rank candidates by freshness, profile fit and goal alignment.

Scores are additive:
    - recent name: -3, otherwise +2
    - recent movement pattern: -1; recent primary muscle: -1
    - recent movement family: -1, otherwise +0.5
    - category natively serves the goal: +1
    - difficulty vs. experience: -2 .. +2 (only when the catalog declares it)
    - intensity alignment: compound +2 at high; compound -0.5 / other +1 at low
    - sourced from the primary pool: +1

Ordering adds ``rng() * jitter`` so equal scores break ties reproducibly.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Iterable, Sequence

from workout_engine.catalog.tables import DEFAULT_FOCUS_TABLES, FocusTables
from workout_engine.math.seeded_random import SeededRandom
from workout_engine.models.enums import (
    TIE_BREAK_JITTER,
    ExerciseCategory,
    ExerciseSource,
    ExperienceLevel,
    Goal,
    Intensity,
)
from workout_engine.models.exercise import Exercise, ScheduledExercise
from workout_engine.models.session import SessionHistory
from workout_engine.selection.movement import (
    family_from_name,
    is_compound,
    movement_family,
    normalize_exercise_key,
    primary_muscle_key,
)

_NATIVE_CATEGORY: dict[Goal, ExerciseCategory] = {
    Goal.STRENGTH: ExerciseCategory.STRENGTH,
    Goal.HYPERTROPHY: ExerciseCategory.STRENGTH,
    Goal.ENDURANCE: ExerciseCategory.STRENGTH,
    Goal.CARDIO: ExerciseCategory.CARDIO,
    Goal.RANGE_OF_MOTION: ExerciseCategory.MOBILITY,
}


@dataclass(frozen=True)
class HistorySummary:
    """Normalized lookup sets derived from a SessionHistory."""

    names: frozenset[str] = field(default_factory=frozenset)
    patterns: frozenset[str] = field(default_factory=frozenset)
    muscles: frozenset[str] = field(default_factory=frozenset)
    families: frozenset[str] = field(default_factory=frozenset)

    @classmethod
    def from_history(
        cls,
        history: SessionHistory | None,
        tables: FocusTables = DEFAULT_FOCUS_TABLES,
    ) -> HistorySummary:
        """Summarize history; recent families are read from the exercise names."""
        if history is None:
            return cls()
        families = (
            family_from_name(name, tables) for name in history.recent_exercise_names
        )
        return cls(
            names=frozenset(
                normalize_exercise_key(name) for name in history.recent_exercise_names
            ),
            patterns=frozenset(pattern.lower() for pattern in history.recent_patterns),
            muscles=frozenset(muscle.strip().lower() for muscle in history.recent_muscles),
            families=frozenset(family for family in families if family),
        )


def history_from_exercises(exercises: Iterable[ScheduledExercise | Exercise]) -> SessionHistory:
    """Build a SessionHistory from previously scheduled (or catalog) exercises."""
    names: list[str] = []
    patterns: list[str] = []
    muscles: list[str] = []
    for item in exercises:
        exercise = item.exercise if isinstance(item, ScheduledExercise) else item
        names.append(exercise.name)
        if exercise.movement_pattern:
            patterns.append(exercise.movement_pattern)
        if exercise.primary_muscle:
            muscles.append(exercise.primary_muscle)
    return SessionHistory(
        recent_exercise_names=tuple(names),
        recent_patterns=tuple(patterns),
        recent_muscles=tuple(muscles),
    )


def experience_score(exercise: Exercise, experience: ExperienceLevel) -> float:
    if exercise.difficulty is None:
        return 0.0
    if experience == ExperienceLevel.BEGINNER:
        if exercise.difficulty == ExperienceLevel.BEGINNER:
            return 2.0
        if exercise.difficulty == ExperienceLevel.INTERMEDIATE:
            return 0.5
        return -2.0
    if experience == ExperienceLevel.ADVANCED:
        if exercise.difficulty == ExperienceLevel.ADVANCED:
            return 2.0
        if exercise.difficulty == ExperienceLevel.INTERMEDIATE:
            return 1.0
        return -1.0
    return 1.5 if exercise.difficulty == ExperienceLevel.INTERMEDIATE else 0.5


def intensity_score(exercise: Exercise, intensity: Intensity) -> float:
    if intensity == Intensity.HIGH:
        return 2.0 if is_compound(exercise) else 0.0
    if intensity == Intensity.LOW:
        return -0.5 if is_compound(exercise) else 1.0
    return 0.0


def goal_alignment_score(exercise: Exercise, goal: Goal | None) -> float:
    if goal is None:
        return 0.0
    return 1.0 if _NATIVE_CATEGORY.get(goal) == exercise.category else 0.0


class VarietyScorer:
    """Scores and orders candidates for one session build.

    Usage:
        scorer = VarietyScorer(experience, intensity, goal, summary)
        ordered = scorer.order_pool(pool, ExerciseSource.PRIMARY, rng)
    """

    def __init__(
        self,
        experience: ExperienceLevel,
        intensity: Intensity,
        goal: Goal | None,
        history: HistorySummary | None = None,
        tables: FocusTables = DEFAULT_FOCUS_TABLES,
        jitter: float = TIE_BREAK_JITTER,
    ) -> None:
        self.experience = experience
        self.intensity = intensity
        self.goal = goal
        self.history = history or HistorySummary()
        self.tables = tables
        self.jitter = jitter

    def score(self, exercise: Exercise, source: ExerciseSource) -> float:
        history = self.history
        score = 0.0
        if normalize_exercise_key(exercise.name) in history.names:
            score -= 3
        else:
            score += 2
        if exercise.movement_pattern and exercise.movement_pattern.lower() in history.patterns:
            score -= 1
        muscle = primary_muscle_key(exercise)
        if muscle and muscle in history.muscles:
            score -= 1
        if movement_family(exercise, self.tables) in history.families:
            score -= 1
        else:
            score += 0.5
        score += goal_alignment_score(exercise, self.goal)
        score += experience_score(exercise, self.experience)
        score += intensity_score(exercise, self.intensity)
        if source == ExerciseSource.PRIMARY:
            score += 1
        return score

    def order_pool(
        self,
        pool: Sequence[Exercise],
        source: ExerciseSource,
        rng: SeededRandom,
    ) -> list[Exercise]:
        """Pool sorted by descending score plus seeded jitter.

        One random draw is consumed per exercise in pool order, so the
        result depends only on the pool, the scorer state and the rng state.
        """
        scored = [
            (self.score(exercise, source) + rng.random() * self.jitter, index, exercise)
            for index, exercise in enumerate(pool)
        ]
        scored.sort(key=lambda item: (-item[0], item[1]))
        return [exercise for _, _, exercise in scored]


def score_exercise(
    exercise: Exercise,
    source: ExerciseSource,
    experience: ExperienceLevel,
    intensity: Intensity,
    history: HistorySummary | None = None,
    goal: Goal | None = None,
    tables: FocusTables = DEFAULT_FOCUS_TABLES,
) -> float:
    """Functional form of ``VarietyScorer.score``."""
    return VarietyScorer(experience, intensity, goal, history, tables).score(exercise, source)
