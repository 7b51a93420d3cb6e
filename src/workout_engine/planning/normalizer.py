"""InputNormalizer — defaults, repair and validation of plan requests.

``normalize_plan_input`` deep-merges a partial, JSON-shaped request over
``DEFAULT_INPUT``. Nested objects merge key by key (so a caller can set only
``equipment.inventory.barbell.plates``); lists replace wholesale.
"""

from __future__ import annotations

import copy
import dataclasses
import math
from enum import Enum
from typing import Any, Callable, Mapping, TypeVar

from workout_engine.exceptions import InvalidPlanInputError
from workout_engine.math.utils import clamp
from workout_engine.models.enums import (
    MAX_MIN_REST_DAYS,
    MAX_SESSION_MINUTES,
    MIN_SESSION_MINUTES,
    MIN_WEEKLY_MINUTES,
    BandTier,
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
from workout_engine.models.equipment import (
    EQUIPMENT_PRESETS,
    BarbellInventory,
    EquipmentInventory,
    MachineInventory,
    has_equipment,
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
from workout_engine.models.session import SessionHistory

E = TypeVar("E", bound=Enum)

DEFAULT_INPUT: dict[str, Any] = {
    "intent": {"mode": "body_part", "style": "strength", "body_parts": ["chest"]},
    "goals": {"primary": "strength", "secondary": None, "priority": "primary"},
    "experience_level": "intermediate",
    "intensity": "moderate",
    "equipment": {
        "preset": "custom",
        "inventory": {
            "bodyweight": True,
            "bench_press": False,
            "dumbbells": [],
            "kettlebells": [],
            "bands": [],
            "barbell": {"available": False, "plates": []},
            "machines": {"cable": False, "leg_press": False, "treadmill": False, "rower": False},
        },
    },
    "time": {"minutes_per_session": 45, "total_minutes_per_week": None},
    "schedule": {"days_available": [0], "min_rest_days": 1, "weekly_layout": []},
    "preferences": {
        "focus_areas": ["chest"],
        "disliked_activities": [],
        "cardio_activities": [],
        "accessibility_constraints": [],
        "rest_preference": "balanced",
    },
}

# Validation messages, shown to end users as-is
MSG_MINUTES_RANGE = "Minutes per session must be between 20 and 120."
MSG_WEEKLY_MINUTES = "Total weekly minutes must be at least 40 when provided."
MSG_STYLE_REQUIRED = "Select a workout style."
MSG_BODY_PART_REQUIRED = "Select at least one body focus area."
MSG_REST_DAYS_RANGE = "Minimum rest days must be between 0 and 2."
MSG_EQUIPMENT_REQUIRED = "Select at least one equipment option."
MSG_TRAINING_DAY_REQUIRED = "Select at least one training day."


def normalize_plan_input(partial: Mapping[str, Any] | PlanInput | None = None) -> PlanInput:
    """Fill defaults and shape a partial request into a PlanInput.

    Args:
        partial: JSON-shaped mapping with snake_case keys, an existing
            PlanInput (returned unchanged) or None for all defaults.

    Returns:
        A fully populated PlanInput.

    Raises:
        InvalidPlanInputError: If a value has the wrong type or names an
            unknown enum member.
    """
    if isinstance(partial, PlanInput):
        return partial
    if partial is not None and not isinstance(partial, Mapping):
        raise InvalidPlanInputError("plan input must be an object")

    partial = partial or {}
    merged = deep_merge(DEFAULT_INPUT, partial)

    try:
        # A named preset supplies the inventory unless the caller sent one
        equipment = partial.get("equipment") or {}
        preset = _enum(EquipmentPreset, merged["equipment"]["preset"], "equipment.preset")
        use_preset = preset != EquipmentPreset.CUSTOM and "inventory" not in equipment

        return PlanInput(
            intent=_intent(merged["intent"]),
            goals=_goals(merged["goals"]),
            experience_level=_enum(ExperienceLevel, merged["experience_level"], "experience_level"),
            intensity=_enum(Intensity, merged["intensity"], "intensity"),
            equipment=EquipmentSelection(
                preset=preset,
                inventory=(
                    EQUIPMENT_PRESETS[preset]
                    if use_preset
                    else _inventory(merged["equipment"]["inventory"])
                ),
            ),
            time=_time(merged["time"]),
            schedule=_schedule(merged["schedule"]),
            preferences=_preferences(merged["preferences"]),
        )
    except (TypeError, KeyError, AttributeError) as exc:
        raise InvalidPlanInputError(f"malformed plan input: {exc}") from exc


def deep_merge(base: Mapping[str, Any], override: Mapping[str, Any]) -> dict[str, Any]:
    """Recursively merge ``override`` onto a copy of ``base``.

    Mappings merge key by key; any other value (lists included) replaces.
    An explicit None in ``override`` also replaces.
    """
    result = copy.deepcopy(dict(base))
    for key, value in override.items():
        current = result.get(key)
        if isinstance(current, Mapping) and isinstance(value, Mapping):
            result[key] = deep_merge(current, value)
        else:
            result[key] = copy.deepcopy(value)
    return result


def validate_plan_input(plan_input: PlanInput, allow_empty_equipment: bool = False) -> list[str]:
    """Return human-readable violations; an empty list means valid.

    Args:
        plan_input: Normalized request.
        allow_empty_equipment: Skip the equipment check for callers that
            recover with a bodyweight-only inventory.
    """
    errors: list[str] = []
    minutes = plan_input.time.minutes_per_session
    if minutes < MIN_SESSION_MINUTES or minutes > MAX_SESSION_MINUTES:
        errors.append(MSG_MINUTES_RANGE)

    weekly = plan_input.time.total_minutes_per_week
    if weekly is not None and weekly < MIN_WEEKLY_MINUTES:
        errors.append(MSG_WEEKLY_MINUTES)

    intent = plan_input.intent
    if intent.mode == IntentMode.STYLE and intent.style is None:
        errors.append(MSG_STYLE_REQUIRED)
    if intent.mode == IntentMode.BODY_PART and not intent.body_parts:
        errors.append(MSG_BODY_PART_REQUIRED)

    rest_days = plan_input.schedule.min_rest_days
    if rest_days < 0 or rest_days > MAX_MIN_REST_DAYS:
        errors.append(MSG_REST_DAYS_RANGE)

    if not allow_empty_equipment and not has_equipment(plan_input.equipment.inventory):
        errors.append(MSG_EQUIPMENT_REQUIRED)

    return errors


def normalize_history(raw: Mapping[str, Any] | SessionHistory | None) -> SessionHistory | None:
    """Shape a JSON history object into a SessionHistory.

    Accepts ``recent_exercise_names``, ``recent_patterns`` and
    ``recent_muscles`` lists; any of them may be omitted.
    """
    if raw is None or isinstance(raw, SessionHistory):
        return raw
    if not isinstance(raw, Mapping):
        raise InvalidPlanInputError("history must be an object")
    return SessionHistory(
        recent_exercise_names=tuple(
            str(name) for name in _as_list(raw.get("recent_exercise_names"), "history.recent_exercise_names")
        ),
        recent_patterns=tuple(
            str(pattern) for pattern in _as_list(raw.get("recent_patterns"), "history.recent_patterns")
        ),
        recent_muscles=tuple(
            str(muscle) for muscle in _as_list(raw.get("recent_muscles"), "history.recent_muscles")
        ),
    )


def apply_rest_preference(plan_input: PlanInput) -> PlanInput:
    """Override minimum rest days from the recovery preference."""
    preference = plan_input.preferences.rest_preference
    schedule = plan_input.schedule
    if preference == RestPreference.HIGH_RECOVERY:
        schedule = dataclasses.replace(schedule, min_rest_days=max(schedule.min_rest_days, 1))
    elif preference == RestPreference.MINIMAL_REST:
        schedule = dataclasses.replace(schedule, min_rest_days=0)
    else:
        return plan_input
    return dataclasses.replace(plan_input, schedule=schedule)


def adjust_minutes_per_session(plan_input: PlanInput, sessions_per_week: int) -> int:
    """Per-session minutes, derived from the weekly total when one is given."""
    weekly = plan_input.time.total_minutes_per_week
    if not weekly or sessions_per_week <= 0:
        return plan_input.time.minutes_per_session
    per_session = math.floor(weekly / sessions_per_week)
    return int(clamp(per_session, MIN_SESSION_MINUTES, MAX_SESSION_MINUTES))


# ---------------------------------------------------------------------------
# Internal builders
# ---------------------------------------------------------------------------


def _enum(enum_cls: type[E], value: Any, path: str) -> E:
    try:
        return enum_cls(value)
    except ValueError as exc:
        allowed = ", ".join(member.value for member in enum_cls)
        raise InvalidPlanInputError(f"{path}: {value!r} is not one of {allowed}") from exc


def _optional_enum(enum_cls: type[E], value: Any, path: str) -> E | None:
    return None if value is None else _enum(enum_cls, value, path)


def _enum_list(enum_cls: type[E], values: Any, path: str) -> tuple[E, ...]:
    return tuple(_enum(enum_cls, value, path) for value in _as_list(values, path))


def _as_list(values: Any, path: str) -> list[Any]:
    if values is None:
        return []
    if isinstance(values, (str, bytes)) or not isinstance(values, (list, tuple)):
        raise InvalidPlanInputError(f"{path} must be a list")
    return list(values)


def _number(value: Any, path: str, parse: Callable[[Any], Any] = int) -> Any:
    if isinstance(value, bool):
        raise InvalidPlanInputError(f"{path} must be a number")
    try:
        return parse(value)
    except (TypeError, ValueError) as exc:
        raise InvalidPlanInputError(f"{path} must be a number") from exc


def _intent(raw: Mapping[str, Any]) -> PlanIntent:
    return PlanIntent(
        mode=_enum(IntentMode, raw["mode"], "intent.mode"),
        style=_optional_enum(Goal, raw.get("style"), "intent.style"),
        body_parts=_enum_list(FocusArea, raw.get("body_parts"), "intent.body_parts"),
    )


def _goals(raw: Mapping[str, Any]) -> PlanGoals:
    return PlanGoals(
        primary=_enum(Goal, raw["primary"], "goals.primary"),
        secondary=_optional_enum(Goal, raw.get("secondary"), "goals.secondary"),
        priority=_enum(GoalPriority, raw["priority"], "goals.priority"),
    )


def _inventory(raw: Mapping[str, Any]) -> EquipmentInventory:
    barbell = raw.get("barbell") or {}
    machines = raw.get("machines") or {}
    path = "equipment.inventory"
    return EquipmentInventory(
        bodyweight=bool(raw.get("bodyweight")),
        bench_press=bool(raw.get("bench_press")),
        dumbbells=tuple(_number(w, f"{path}.dumbbells", float) for w in _as_list(raw.get("dumbbells"), f"{path}.dumbbells")),
        kettlebells=tuple(_number(w, f"{path}.kettlebells", float) for w in _as_list(raw.get("kettlebells"), f"{path}.kettlebells")),
        bands=_enum_list(BandTier, raw.get("bands"), f"{path}.bands"),
        barbell=BarbellInventory(
            available=bool(barbell.get("available")),
            plates=tuple(_number(p, f"{path}.barbell.plates", float) for p in _as_list(barbell.get("plates"), f"{path}.barbell.plates")),
        ),
        machines=MachineInventory(
            cable=bool(machines.get("cable")),
            leg_press=bool(machines.get("leg_press")),
            treadmill=bool(machines.get("treadmill")),
            rower=bool(machines.get("rower")),
        ),
    )


def _time(raw: Mapping[str, Any]) -> TimeBudget:
    weekly = raw.get("total_minutes_per_week")
    return TimeBudget(
        minutes_per_session=_number(raw["minutes_per_session"], "time.minutes_per_session"),
        total_minutes_per_week=None if weekly is None else _number(weekly, "time.total_minutes_per_week"),
    )


def _schedule(raw: Mapping[str, Any]) -> WeeklySchedule:
    layout = []
    for index, entry in enumerate(_as_list(raw.get("weekly_layout"), "schedule.weekly_layout")):
        path = f"schedule.weekly_layout[{index}]"
        layout.append(LayoutEntry(
            session_index=_number(entry.get("session_index", index), f"{path}.session_index"),
            style=_enum(Goal, entry["style"], f"{path}.style"),
            focus=_enum(FocusArea, entry["focus"], f"{path}.focus"),
        ))
    return WeeklySchedule(
        days_available=tuple(
            _number(day, "schedule.days_available")
            for day in _as_list(raw.get("days_available"), "schedule.days_available")
        ),
        min_rest_days=_number(raw["min_rest_days"], "schedule.min_rest_days"),
        weekly_layout=tuple(layout),
    )


def _preferences(raw: Mapping[str, Any]) -> PlanPreferences:
    return PlanPreferences(
        focus_areas=_enum_list(FocusArea, raw.get("focus_areas"), "preferences.focus_areas"),
        disliked_activities=tuple(
            str(item) for item in _as_list(raw.get("disliked_activities"), "preferences.disliked_activities")
        ),
        cardio_activities=_enum_list(CardioActivity, raw.get("cardio_activities"), "preferences.cardio_activities"),
        accessibility_constraints=tuple(
            str(item)
            for item in _as_list(raw.get("accessibility_constraints"), "preferences.accessibility_constraints")
        ),
        rest_preference=_enum(RestPreference, raw["rest_preference"], "preferences.rest_preference"),
    )
