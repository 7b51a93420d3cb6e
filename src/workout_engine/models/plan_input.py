"""Normalized plan request.

Every field is populated after normalization; see
``workout_engine.planning.normalizer`` for the documented defaults.
"""

from __future__ import annotations

from dataclasses import dataclass, field

from workout_engine.models.enums import (
    CardioActivity,
    EquipmentPreset,
    ExperienceLevel,
    FocusArea,
    Goal,
    GoalPriority,
    Intensity,
    IntentMode,
    RestPreference,
)
from workout_engine.models.equipment import EquipmentInventory


@dataclass(frozen=True)
class PlanIntent:
    mode: IntentMode = IntentMode.BODY_PART
    style: Goal | None = Goal.STRENGTH
    body_parts: tuple[FocusArea, ...] = (FocusArea.CHEST,)


@dataclass(frozen=True)
class PlanGoals:
    primary: Goal = Goal.STRENGTH
    secondary: Goal | None = None
    priority: GoalPriority = GoalPriority.PRIMARY


@dataclass(frozen=True)
class EquipmentSelection:
    preset: EquipmentPreset = EquipmentPreset.CUSTOM
    inventory: EquipmentInventory = field(
        default_factory=lambda: EquipmentInventory(bodyweight=True)
    )


@dataclass(frozen=True)
class TimeBudget:
    minutes_per_session: int = 45
    total_minutes_per_week: int | None = None


@dataclass(frozen=True)
class LayoutEntry:
    """An explicit focus/style assignment for one session of the week."""

    session_index: int
    style: Goal
    focus: FocusArea


@dataclass(frozen=True)
class WeeklySchedule:
    days_available: tuple[int, ...] = (0,)
    min_rest_days: int = 1
    weekly_layout: tuple[LayoutEntry, ...] = field(default_factory=tuple)


@dataclass(frozen=True)
class PlanPreferences:
    focus_areas: tuple[FocusArea, ...] = (FocusArea.CHEST,)
    disliked_activities: tuple[str, ...] = field(default_factory=tuple)
    cardio_activities: tuple[CardioActivity, ...] = field(default_factory=tuple)
    accessibility_constraints: tuple[str, ...] = field(default_factory=tuple)
    rest_preference: RestPreference = RestPreference.BALANCED


@dataclass(frozen=True)
class PlanInput:
    """The caller's complete, normalized request."""

    intent: PlanIntent = field(default_factory=PlanIntent)
    goals: PlanGoals = field(default_factory=PlanGoals)
    experience_level: ExperienceLevel = ExperienceLevel.INTERMEDIATE
    intensity: Intensity = Intensity.MODERATE
    equipment: EquipmentSelection = field(default_factory=EquipmentSelection)
    time: TimeBudget = field(default_factory=TimeBudget)
    schedule: WeeklySchedule = field(default_factory=WeeklySchedule)
    preferences: PlanPreferences = field(default_factory=PlanPreferences)
