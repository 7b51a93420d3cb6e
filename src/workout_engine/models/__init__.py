"""Data models for the workout engine."""

from workout_engine.models.enums import (
    BandTier,
    CardioActivity,
    EquipmentKind,
    EquipmentOrGroup,
    EquipmentPreset,
    ExerciseCategory,
    ExerciseSource,
    ExperienceLevel,
    FocusArea,
    Goal,
    GoalPriority,
    Intensity,
    IntentMode,
    MachineType,
    RestPreference,
    SessionWarning,
)
from workout_engine.models.equipment import (
    BarbellInventory,
    EquipmentInventory,
    EquipmentOption,
    MachineInventory,
)
from workout_engine.models.exercise import (
    Exercise,
    ExerciseLoad,
    ExercisePrescription,
    ScheduledExercise,
)
from workout_engine.models.plan import (
    GeneratedPlan,
    PlanDay,
    PlanResult,
    PlanSummary,
    TemplateResult,
    WorkoutTemplateDraft,
)
from workout_engine.models.plan_input import (
    EquipmentSelection,
    LayoutEntry,
    PlanGoals,
    PlanInput,
    PlanIntent,
    PlanPreferences,
    TimeBudget,
    WeeklySchedule,
)
from workout_engine.models.session import (
    FocusConstraint,
    ImpactBreakdown,
    PlannedExercise,
    SessionHistory,
    SessionResult,
    WorkoutImpact,
)

__all__ = [
    "BandTier",
    "BarbellInventory",
    "CardioActivity",
    "EquipmentInventory",
    "EquipmentKind",
    "EquipmentOption",
    "EquipmentOrGroup",
    "EquipmentPreset",
    "EquipmentSelection",
    "Exercise",
    "ExerciseCategory",
    "ExerciseLoad",
    "ExercisePrescription",
    "ExerciseSource",
    "ExperienceLevel",
    "FocusArea",
    "FocusConstraint",
    "GeneratedPlan",
    "Goal",
    "GoalPriority",
    "ImpactBreakdown",
    "Intensity",
    "IntentMode",
    "LayoutEntry",
    "MachineInventory",
    "MachineType",
    "PlanDay",
    "PlanGoals",
    "PlanInput",
    "PlanIntent",
    "PlanPreferences",
    "PlanResult",
    "PlanSummary",
    "PlannedExercise",
    "RestPreference",
    "ScheduledExercise",
    "SessionHistory",
    "SessionResult",
    "SessionWarning",
    "TemplateResult",
    "TimeBudget",
    "WeeklySchedule",
    "WorkoutImpact",
    "WorkoutTemplateDraft",
]
