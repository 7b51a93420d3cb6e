"""Session-level models: constraints, in-progress picks, history and results."""

from __future__ import annotations

from dataclasses import dataclass, field

from workout_engine.models.enums import ExerciseSource, FocusArea, Goal, SessionWarning
from workout_engine.models.equipment import EquipmentOption
from workout_engine.models.exercise import Exercise, ExercisePrescription, ScheduledExercise


@dataclass(frozen=True)
class FocusConstraint:
    """Derived rule that a focus's primary muscles must dominate total sets.

    Built once per session build from the static focus tables and thrown
    away afterwards.
    """

    focus: FocusArea
    primary_muscles: tuple[str, ...]
    accessory_muscles: tuple[str, ...]
    min_primary_set_ratio: float


@dataclass
class PlannedExercise:
    """Mutable scheduling unit owned by a single session build.

    Volume passes rewrite ``prescription`` and ``estimated_minutes`` in
    place; the finished session freezes each one into a ScheduledExercise.
    """

    exercise: Exercise
    source: ExerciseSource
    option: EquipmentOption
    prescription: ExercisePrescription
    estimated_minutes: float
    min_sets: int
    max_sets: int

    @property
    def sets(self) -> int:
        return self.prescription.sets

    def freeze(self) -> ScheduledExercise:
        return ScheduledExercise(
            exercise=self.exercise,
            prescription=self.prescription,
            estimated_minutes=self.estimated_minutes,
            source=self.source,
            equipment=self.option,
        )


@dataclass(frozen=True)
class SessionHistory:
    """Caller-supplied recency hints. Empty history is valid."""

    recent_exercise_names: tuple[str, ...] = field(default_factory=tuple)
    recent_patterns: tuple[str, ...] = field(default_factory=tuple)
    recent_muscles: tuple[str, ...] = field(default_factory=tuple)


@dataclass(frozen=True)
class ImpactBreakdown:
    volume: int
    intensity: int
    density: int


@dataclass(frozen=True)
class WorkoutImpact:
    """Aggregate volume/intensity/density summary of a session or week."""

    score: int
    breakdown: ImpactBreakdown


@dataclass(frozen=True)
class SessionResult:
    """A finished session.

    ``error`` is set only for hard infeasibility (the session is then
    empty). ``warnings`` carries soft signals such as a relaxed focus ratio
    or the bodyweight fallback.
    """

    focus: FocusArea
    goal: Goal
    duration_minutes: int
    exercises: tuple[ScheduledExercise, ...] = field(default_factory=tuple)
    warnings: tuple[SessionWarning, ...] = field(default_factory=tuple)
    error: SessionWarning | None = None
    focuses: tuple[FocusArea, ...] = field(default_factory=tuple)
    primary_set_ratio: float | None = None

    @property
    def total_minutes(self) -> float:
        return round(sum(item.estimated_minutes for item in self.exercises), 1)

    @property
    def total_sets(self) -> int:
        return sum(item.sets for item in self.exercises)
