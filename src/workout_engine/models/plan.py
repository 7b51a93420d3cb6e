"""Weekly plan and template outputs."""

from __future__ import annotations

from dataclasses import dataclass, field

from workout_engine.models.enums import ExperienceLevel, FocusArea, Goal
from workout_engine.models.exercise import ScheduledExercise
from workout_engine.models.plan_input import PlanInput
from workout_engine.models.session import SessionResult, WorkoutImpact


@dataclass(frozen=True)
class PlanDay:
    order: int
    name: str
    focus: FocusArea
    style: Goal
    duration_minutes: int
    rationale: str
    exercises: tuple[ScheduledExercise, ...] = field(default_factory=tuple)
    session: SessionResult | None = None


@dataclass(frozen=True)
class PlanSummary:
    sessions_per_week: int
    total_minutes: int
    focus_distribution: dict[FocusArea, int]
    impact: WorkoutImpact


@dataclass(frozen=True)
class GeneratedPlan:
    """A full week of scheduled sessions. Ownership passes to the caller."""

    title: str
    description: str
    goal: Goal
    level: ExperienceLevel
    tags: tuple[str, ...]
    schedule: tuple[PlanDay, ...]
    inputs: PlanInput
    summary: PlanSummary


@dataclass(frozen=True)
class WorkoutTemplateDraft:
    title: str
    description: str
    focus: FocusArea
    style: Goal
    inputs: PlanInput


@dataclass(frozen=True)
class PlanResult:
    """Either a plan or the validation errors that prevented it."""

    plan: GeneratedPlan | None = None
    errors: tuple[str, ...] = field(default_factory=tuple)


@dataclass(frozen=True)
class TemplateResult:
    template: WorkoutTemplateDraft | None = None
    errors: tuple[str, ...] = field(default_factory=tuple)
