"""Catalog exercises and the prescriptions attached to them."""

from __future__ import annotations

from dataclasses import dataclass, field

from workout_engine.models.enums import (
    EquipmentOrGroup,
    ExerciseCategory,
    ExerciseSource,
    ExperienceLevel,
    FocusArea,
    Goal,
)
from workout_engine.models.equipment import EquipmentOption


@dataclass(frozen=True)
class Exercise:
    """Immutable catalog entry.

    ``focus`` is the coarse region the catalog files the exercise under
    (upper, lower, core, cardio, mobility or full_body). ``goal`` and
    ``difficulty`` are optional hints used for filtering and scoring.
    ``or_group`` names interchangeable equipment that must be on hand on top
    of one listed option; with no listed options the group supplies it.
    """

    name: str
    category: ExerciseCategory = ExerciseCategory.STRENGTH
    focus: FocusArea | None = None
    primary_muscle: str | None = None
    secondary_muscles: tuple[str, ...] = field(default_factory=tuple)
    movement_pattern: str | None = None
    equipment: tuple[EquipmentOption, ...] = field(default_factory=tuple)
    or_group: EquipmentOrGroup | None = None
    sets: int = 3
    reps: str = "8-12"
    rpe: float = 7.0
    rest_seconds: int = 60
    duration_minutes: float | None = None
    load_target: float | None = None
    goal: Goal | None = None
    difficulty: ExperienceLevel | None = None

    @property
    def is_cardio(self) -> bool:
        return (
            self.category == ExerciseCategory.CARDIO
            or self.movement_pattern == "cardio"
        )

    @property
    def is_mobility(self) -> bool:
        return self.category == ExerciseCategory.MOBILITY


@dataclass(frozen=True)
class ExerciseLoad:
    """A concrete, equipment-available load."""

    value: float
    label: str
    unit: str = "lb"


@dataclass(frozen=True)
class ExercisePrescription:
    """Resolved sets/reps/RPE/rest (and optional load) for one exercise."""

    sets: int
    reps: str
    rpe: float
    rest_seconds: int
    load: ExerciseLoad | None = None


@dataclass(frozen=True)
class ScheduledExercise:
    """A catalog exercise merged with its session prescription.

    This is the unit returned to callers in a finished session.
    """

    exercise: Exercise
    prescription: ExercisePrescription
    estimated_minutes: float
    source: ExerciseSource
    equipment: EquipmentOption | None = None

    @property
    def name(self) -> str:
        return self.exercise.name

    @property
    def sets(self) -> int:
        return self.prescription.sets

    @property
    def reps(self) -> str:
        return self.prescription.reps

    @property
    def rpe(self) -> float:
        return self.prescription.rpe

    @property
    def rest_seconds(self) -> int:
        return self.prescription.rest_seconds

    @property
    def load(self) -> ExerciseLoad | None:
        return self.prescription.load
