"""Catalog filtering: equipment satisfiability, focus matching, and pool building.

All functions are pure and take the static tables as an explicit argument.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Iterable, Sequence

from workout_engine.catalog.tables import DEFAULT_FOCUS_TABLES, FocusTables
from workout_engine.models.enums import (
    CardioActivity,
    EquipmentKind,
    EquipmentOrGroup,
    ExerciseCategory,
    FocusArea,
    Goal,
)
from workout_engine.models.equipment import EQUIPMENT_OR_GROUPS, EquipmentInventory, EquipmentOption
from workout_engine.models.exercise import Exercise
from workout_engine.models.plan_input import PlanPreferences
from workout_engine.models.session import FocusConstraint
from workout_engine.selection.movement import matches_primary_muscle, primary_muscle_key

LOW_IMPACT = "low-impact"

_PROP_KINDS = frozenset({EquipmentKind.BLOCK, EquipmentKind.BOLSTER, EquipmentKind.STRAP})

# Categories that can serve each goal at all
_GOAL_CATEGORIES: dict[Goal, frozenset[ExerciseCategory]] = {
    Goal.STRENGTH: frozenset({ExerciseCategory.STRENGTH}),
    Goal.HYPERTROPHY: frozenset({ExerciseCategory.STRENGTH}),
    Goal.ENDURANCE: frozenset({ExerciseCategory.STRENGTH, ExerciseCategory.CARDIO}),
    Goal.CARDIO: frozenset({ExerciseCategory.CARDIO}),
    Goal.RANGE_OF_MOTION: frozenset({ExerciseCategory.MOBILITY, ExerciseCategory.STRENGTH}),
    Goal.GENERAL_FITNESS: frozenset(ExerciseCategory),
}


# ---------------------------------------------------------------------------
# Equipment matching
# ---------------------------------------------------------------------------


def is_requirement_met(inventory: EquipmentInventory, requirement: EquipmentKind) -> bool:
    """AND-requirement check; props (block, bolster, strap) are assumed on hand."""
    if requirement in _PROP_KINDS:
        return True
    return _is_kind_owned(inventory, requirement)


def _is_kind_owned(inventory: EquipmentInventory, kind: EquipmentKind) -> bool:
    if kind == EquipmentKind.BODYWEIGHT:
        return inventory.bodyweight
    if kind == EquipmentKind.BENCH_PRESS:
        return inventory.bench_press
    if kind == EquipmentKind.DUMBBELL:
        return bool(inventory.dumbbells)
    if kind == EquipmentKind.KETTLEBELL:
        return bool(inventory.kettlebells)
    if kind == EquipmentKind.BAND:
        return bool(inventory.bands)
    if kind == EquipmentKind.BARBELL:
        return inventory.barbell.available
    if kind == EquipmentKind.MACHINE:
        return inventory.machines.any()
    return False


def is_option_available(inventory: EquipmentInventory, option: EquipmentOption) -> bool:
    """An option is usable when its own kind and every AND-requirement are met.

    A prop only counts as a requirement. As an option's own kind it is never
    available, so a prop-only exercise needs a real implement listed
    alongside it (e.g. bodyweight requiring a block).
    """
    if not all(is_requirement_met(inventory, req) for req in option.requires):
        return False
    if option.kind == EquipmentKind.MACHINE and option.machine_type is not None:
        return inventory.machines.has(option.machine_type)
    return _is_kind_owned(inventory, option.kind)


def select_from_or_group(
    inventory: EquipmentInventory,
    group: EquipmentOrGroup,
) -> EquipmentOption | None:
    """First available member of the group, in preference order."""
    for option in EQUIPMENT_OR_GROUPS[group]:
        if is_option_available(inventory, option):
            return option
    return None


def is_or_group_satisfied(inventory: EquipmentInventory, group: EquipmentOrGroup) -> bool:
    return select_from_or_group(inventory, group) is not None


def select_equipment_option(
    inventory: EquipmentInventory,
    options: Sequence[EquipmentOption],
    or_group: EquipmentOrGroup | None = None,
) -> EquipmentOption | None:
    """First satisfiable option in catalog order, or None.

    With an OR-group the group must be satisfied as well. An exercise that
    lists no options of its own uses the group's first available member.
    """
    if or_group is not None:
        group_option = select_from_or_group(inventory, or_group)
        if group_option is None:
            return None
        if not options:
            return group_option
    for option in options:
        if is_option_available(inventory, option):
            return option
    return None


def select_exercise_equipment(
    inventory: EquipmentInventory,
    exercise: Exercise,
) -> EquipmentOption | None:
    return select_equipment_option(inventory, exercise.equipment, exercise.or_group)


# ---------------------------------------------------------------------------
# Focus and goal matching
# ---------------------------------------------------------------------------


def matches_focus_area(
    focus: FocusArea,
    exercise: Exercise,
    tables: FocusTables = DEFAULT_FOCUS_TABLES,
) -> bool:
    """Does the exercise belong to the requested focus?

    Body-part focuses match on primary muscle and need the catalog to file
    the exercise under their base region (an unfiled exercise counts as
    full body, so it never matches a body part);
    cardio and mobility match on category or catalog focus; regions match
    on catalog focus, or on the region's muscles when the catalog is silent.
    """
    if focus == FocusArea.FULL_BODY:
        return True
    if focus == FocusArea.CARDIO:
        return exercise.focus == FocusArea.CARDIO or exercise.category == ExerciseCategory.CARDIO
    if focus == FocusArea.MOBILITY:
        return exercise.focus == FocusArea.MOBILITY or exercise.category == ExerciseCategory.MOBILITY
    if tables.is_body_part(focus):
        if not matches_primary_muscle(exercise, tables.muscles_for(focus)):
            return False
        return exercise.focus == tables.base_focus(focus)
    if exercise.focus is not None:
        return exercise.focus == focus
    return primary_muscle_key(exercise) in tables.region_muscles.get(focus, ())


def matches_goal(exercise: Exercise, goal: Goal | None) -> bool:
    """Goal compatibility on category plus the catalog's declared goal.

    general_fitness exercises serve every goal, hypertrophy builds on
    strength work and endurance accepts cardio work. Anything else needs
    a strict match or no declared goal.
    """
    if goal is None:
        return True
    if exercise.category not in _GOAL_CATEGORIES[goal]:
        return False
    native = exercise.goal
    if native is None or native == goal or native == Goal.GENERAL_FITNESS:
        return True
    if goal == Goal.HYPERTROPHY and native == Goal.STRENGTH:
        return True
    if goal == Goal.ENDURANCE and native == Goal.CARDIO:
        return True
    return False


def matches_cardio_selection(
    name: str,
    activities: Iterable[CardioActivity],
    tables: FocusTables = DEFAULT_FOCUS_TABLES,
) -> bool:
    """Whitelist check for cardio exercises; an empty selection allows all."""
    activities = tuple(activities)
    if not activities:
        return True
    lowered = name.lower()
    return any(
        keyword in lowered
        for activity in activities
        for keyword in tables.cardio_keywords.get(activity, ())
    )


def filter_exercises(
    catalog: Iterable[Exercise],
    focus: FocusArea,
    inventory: EquipmentInventory,
    preferences: PlanPreferences,
    goal: Goal | None = None,
    tables: FocusTables = DEFAULT_FOCUS_TABLES,
    *,
    session_goal: Goal | None = None,
    category_goal: Goal | None = None,
) -> list[Exercise]:
    """Narrow the catalog to exercises eligible for a focus.

    Args:
        catalog: Catalog snapshot, read only.
        focus: Requested focus area.
        inventory: Equipment available.
        preferences: Dislikes, accessibility constraints and cardio whitelist.
        goal: Goal used for the full compatibility filter; None disables it.
        tables: Focus lookup tables.
        session_goal: The session's goal, used for the mobility gate even
            when the compatibility filter is disabled.
        category_goal: Apply only the category half of the goal filter.

    Returns:
        Eligible exercises in catalog order.
    """
    disliked = [item.lower() for item in preferences.disliked_activities if item]
    low_impact = LOW_IMPACT in preferences.accessibility_constraints
    mobility_goal = session_goal if session_goal is not None else goal
    allow_mobility = focus == FocusArea.MOBILITY or mobility_goal in (
        Goal.GENERAL_FITNESS,
        Goal.RANGE_OF_MOTION,
    )

    eligible: list[Exercise] = []
    for exercise in catalog:
        lowered = exercise.name.lower()
        if not matches_focus_area(focus, exercise, tables):
            continue
        if exercise.is_mobility and not allow_mobility:
            continue
        if select_exercise_equipment(inventory, exercise) is None:
            continue
        if any(item in lowered for item in disliked):
            continue
        if low_impact and any(keyword in lowered for keyword in tables.high_impact_keywords):
            continue
        if not matches_goal(exercise, goal):
            continue
        if category_goal is not None and exercise.category not in _GOAL_CATEGORIES[category_goal]:
            continue
        if exercise.is_cardio and not matches_cardio_selection(
            exercise.name, preferences.cardio_activities, tables
        ):
            continue
        eligible.append(exercise)
    return eligible


# ---------------------------------------------------------------------------
# Pools
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class ExercisePools:
    """Primary, secondary and accessory candidates for one focus."""

    primary: tuple[Exercise, ...] = field(default_factory=tuple)
    secondary: tuple[Exercise, ...] = field(default_factory=tuple)
    accessory: tuple[Exercise, ...] = field(default_factory=tuple)


def build_pools(
    catalog: Sequence[Exercise],
    focus: FocusArea,
    goal: Goal,
    inventory: EquipmentInventory,
    preferences: PlanPreferences,
    constraint: FocusConstraint | None = None,
    tables: FocusTables = DEFAULT_FOCUS_TABLES,
) -> ExercisePools:
    """Partition the catalog into the three selection pools for a focus.

    The secondary pool drops the declared-goal check (general fitness keeps
    it). Without a constraint it still keeps category compatibility; under
    one, the focus muscles matter more than category. When a constraint
    applies and nothing passes the primary goal filter, the secondary pool
    stands in as primary. Accessories come from the focus's parent region,
    restricted to the constraint's accessory muscles.
    """
    primary = filter_exercises(
        catalog, focus, inventory, preferences, goal, tables, session_goal=goal
    )
    secondary_goal = goal if goal == Goal.GENERAL_FITNESS else None
    secondary = filter_exercises(
        catalog, focus, inventory, preferences, secondary_goal, tables,
        session_goal=goal,
        category_goal=goal if constraint is None else None,
    )
    if constraint is not None and not primary:
        primary = secondary

    accessory: list[Exercise] = []
    base = tables.base_focus(focus)
    if base is not None and base != focus:
        accessory = filter_exercises(
            catalog, base, inventory, preferences, None, tables, session_goal=goal
        )
        if constraint is not None:
            accessory = [
                exercise for exercise in accessory
                if constraint.accessory_muscles
                and matches_primary_muscle(exercise, constraint.accessory_muscles)
            ]

    return ExercisePools(
        primary=tuple(primary),
        secondary=tuple(secondary),
        accessory=tuple(accessory),
    )
