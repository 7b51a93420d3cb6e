"""Enumerations and tuning constants for the workout engine.

Enum values are the wire strings used by catalog files and plan inputs, so
every enum derives from ``str`` and can be built straight from JSON.
"""

from enum import Enum


class Goal(str, Enum):
    """Training goal for a session or plan."""

    STRENGTH = "strength"
    HYPERTROPHY = "hypertrophy"
    ENDURANCE = "endurance"
    RANGE_OF_MOTION = "range_of_motion"
    CARDIO = "cardio"
    GENERAL_FITNESS = "general_fitness"


class GoalPriority(str, Enum):
    """How a secondary goal is blended into the weekly focus rotation."""

    PRIMARY = "primary"
    SECONDARY = "secondary"
    BALANCED = "balanced"


class FocusArea(str, Enum):
    """Body-part or training-mode target of a session."""

    UPPER = "upper"
    LOWER = "lower"
    FULL_BODY = "full_body"
    CORE = "core"
    CARDIO = "cardio"
    MOBILITY = "mobility"
    ARMS = "arms"
    LEGS = "legs"
    BICEPS = "biceps"
    TRICEPS = "triceps"
    CHEST = "chest"
    BACK = "back"
    SHOULDERS = "shoulders"


class Intensity(str, Enum):
    """Intensity tier requested by the user."""

    LOW = "low"
    MODERATE = "moderate"
    HIGH = "high"


class ExperienceLevel(str, Enum):
    BEGINNER = "beginner"
    INTERMEDIATE = "intermediate"
    ADVANCED = "advanced"


class RestPreference(str, Enum):
    """Recovery preference between sets and sessions."""

    BALANCED = "balanced"
    HIGH_RECOVERY = "high_recovery"
    MINIMAL_REST = "minimal_rest"


class IntentMode(str, Enum):
    """Whether the request names a training style or a set of body parts."""

    STYLE = "style"
    BODY_PART = "body_part"


class ExerciseCategory(str, Enum):
    STRENGTH = "Strength"
    CARDIO = "Cardio"
    MOBILITY = "Mobility"


class EquipmentKind(str, Enum):
    """Kinds of equipment an exercise option can call for."""

    BODYWEIGHT = "bodyweight"
    BENCH_PRESS = "bench_press"
    DUMBBELL = "dumbbell"
    KETTLEBELL = "kettlebell"
    BAND = "band"
    BARBELL = "barbell"
    MACHINE = "machine"
    BLOCK = "block"
    BOLSTER = "bolster"
    STRAP = "strap"


class MachineType(str, Enum):
    CABLE = "cable"
    LEG_PRESS = "leg_press"
    TREADMILL = "treadmill"
    ROWER = "rower"


class EquipmentOrGroup(str, Enum):
    """Named sets of interchangeable equipment; any one member satisfies the group."""

    FREE_WEIGHT_PRIMARY = "free_weight_primary"
    SINGLE_IMPLEMENT = "single_implement"
    PULL_UP_INFRASTRUCTURE = "pull_up_infrastructure"
    TREADMILL_OUTDOOR = "treadmill_outdoor"
    ROWING_MACHINES = "rowing_machines"
    RESISTANCE_VARIABLE = "resistance_variable"


class BandTier(str, Enum):
    """Resistance band tiers, lightest first."""

    LIGHT = "light"
    MEDIUM = "medium"
    HEAVY = "heavy"


class EquipmentPreset(str, Enum):
    HOME_MINIMAL = "home_minimal"
    FULL_GYM = "full_gym"
    HOTEL = "hotel"
    CUSTOM = "custom"


class CardioActivity(str, Enum):
    """Cardio modalities a user can whitelist."""

    SKIPPING = "skipping"
    INDOOR_CYCLING = "indoor_cycling"
    OUTDOOR_CYCLING = "outdoor_cycling"
    RUNNING = "running"
    ROWING = "rowing"


class ExerciseSource(str, Enum):
    """Pool an exercise was admitted from during a session build."""

    PRIMARY = "primary"
    SECONDARY = "secondary"
    ACCESSORY = "accessory"


class SessionWarning(str, Enum):
    """Soft and hard outcome codes attached to a built session."""

    FOCUS_CONSTRAINTS_RELAXED = "focus_constraints_relaxed"
    FOCUS_CONSTRAINTS_UNMET = "focus_constraints_unmet"
    EMPTY_EQUIPMENT_INVENTORY = "empty_equipment_inventory"
    TIME_BUDGET_UNDERFILLED = "time_budget_underfilled"
    TIME_BUDGET_EXCEEDED = "time_budget_exceeded"


# ---------------------------------------------------------------------------
# Session bounds
# ---------------------------------------------------------------------------
MIN_SESSION_MINUTES = 20
MAX_SESSION_MINUTES = 120
MIN_WEEKLY_MINUTES = 40
MAX_MIN_REST_DAYS = 2

# Primary-muscle share of total sets required when a focus constraint applies
MIN_PRIMARY_SET_RATIO = 0.75

# Safety cap on every iterative repair loop (ratio enforcement, volume passes)
MAX_REPAIR_ITERATIONS = 200

# Admission may overshoot the time budget by this many minutes once the
# minimum exercise count is met; the increase pass targets within this gap.
TIME_TOLERANCE_MINUTES = 6

# A finished session outside target +/- this many minutes carries a
# time-budget warning
TIME_BUDGET_WINDOW_MINUTES = 8

# Accessory top-up stops once the session is within this many minutes of target
TOP_UP_GAP_MINUTES = 5

# Movement-pattern usage cap per session
PATTERN_CAP_CONSTRAINED = 4
PATTERN_CAP_DEFAULT = 2

# Multi-focus sessions give each focus this share of the total duration
MERGE_BUDGET_FRACTION = 0.8

# Random jitter added to scores when ordering candidates
TIE_BREAK_JITTER = 0.2

# ---------------------------------------------------------------------------
# Prescription constants
# ---------------------------------------------------------------------------
MIN_PRESCRIBED_SETS = 2
MAX_PRESCRIBED_SETS = 6
MIN_RPE = 5
MAX_RPE = 9
MIN_REST_SECONDS_CARDIO = 30
MIN_REST_SECONDS_DEFAULT = 45
MAX_REST_SECONDS = 180

INTENSITY_REST_MODIFIER = {
    Intensity.LOW: 0.85,
    Intensity.MODERATE: 1.0,
    Intensity.HIGH: 1.15,
}

GOAL_REST_MODIFIER = {
    Goal.STRENGTH: 1.2,
    Goal.ENDURANCE: 0.7,
    Goal.RANGE_OF_MOTION: 0.5,
}

# Movement patterns that recruit several joints under load
COMPOUND_PATTERNS = frozenset({"squat", "hinge", "push", "pull", "carry"})

# ---------------------------------------------------------------------------
# Load and timing constants
# ---------------------------------------------------------------------------
BARBELL_BASE_WEIGHT = 45
BAND_TIER_LOADS = {
    BandTier.LIGHT: 10,
    BandTier.MEDIUM: 20,
    BandTier.HEAVY: 30,
}

# Dumbbell targets above this are read as a total load, not per hand
DUMBBELL_TOTAL_LOAD_THRESHOLD = 80

SETUP_MINUTES = {
    EquipmentKind.BODYWEIGHT: 1,
    EquipmentKind.BENCH_PRESS: 2,
    EquipmentKind.DUMBBELL: 2,
    EquipmentKind.KETTLEBELL: 2,
    EquipmentKind.BAND: 2,
    EquipmentKind.BARBELL: 3,
    EquipmentKind.MACHINE: 3,
}
DEFAULT_SETUP_MINUTES = 2
DEFAULT_REST_SECONDS = 90
