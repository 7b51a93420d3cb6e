"""SessionBuilder — greedy scheduling of catalog exercises into one session.

The build runs as a small state machine over a growing list of
PlannedExercise picks:

    seed -> fill to minimum -> decrease/increase volume -> focus ratio
    -> accessory top-up -> focus ratio -> variety reorder

All mutable state lives in a ``_SessionBuild`` created per call, so
concurrent builds share nothing but the read-only catalog.
"""

from __future__ import annotations

import dataclasses
import logging
from collections import Counter
from typing import Iterable, Sequence

from workout_engine.catalog.tables import DEFAULT_FOCUS_TABLES, FocusTables
from workout_engine.config import DEFAULT_SETTINGS, EngineSettings
from workout_engine.math.load_resolver import resolve_load
from workout_engine.math.seeded_random import SeededRandom
from workout_engine.math.time_estimator import estimate_exercise_minutes
from workout_engine.math.utils import clamp
from workout_engine.math.volume import (
    clamp_session_minutes,
    exercise_caps,
    family_cap,
    rest_modifier,
    set_caps,
)
from workout_engine.models.enums import (
    PATTERN_CAP_CONSTRAINED,
    PATTERN_CAP_DEFAULT,
    TIME_BUDGET_WINDOW_MINUTES,
    TOP_UP_GAP_MINUTES,
    ExerciseSource,
    FocusArea,
    Goal,
    SessionWarning,
)
from workout_engine.models.equipment import (
    EquipmentInventory,
    bodyweight_only_inventory,
    has_equipment,
)
from workout_engine.models.exercise import Exercise
from workout_engine.models.plan_input import PlanInput
from workout_engine.models.session import (
    FocusConstraint,
    PlannedExercise,
    SessionHistory,
    SessionResult,
)
from workout_engine.prescription.adapter import adapt_prescription
from workout_engine.selection.catalog_filter import (
    ExercisePools,
    build_pools,
    select_exercise_equipment,
)
from workout_engine.selection.focus import get_focus_constraint
from workout_engine.selection.movement import (
    matches_primary_muscle,
    movement_family,
    normalize_exercise_key,
    primary_muscle_key,
)
from workout_engine.selection.variety_scorer import HistorySummary, VarietyScorer
from workout_engine.session_builder.ordering import reorder_for_variety

logger = logging.getLogger(__name__)

_DECREASE_ORDER = (ExerciseSource.ACCESSORY, ExerciseSource.SECONDARY, ExerciseSource.PRIMARY)
_INCREASE_ORDER = (ExerciseSource.PRIMARY, ExerciseSource.SECONDARY, ExerciseSource.ACCESSORY)

# Movement family assigned to exercises without any classification
_UNCLASSIFIED_FAMILY = "other"


def default_seed(goal: Goal, target_minutes: int) -> str:
    return f"{goal.value}-{target_minutes}"


def time_budget_warning(total_minutes: float, target_minutes: float) -> SessionWarning | None:
    """Flag a session whose estimate lands outside target +/- the budget window."""
    total = round(total_minutes, 1)
    if total < target_minutes - TIME_BUDGET_WINDOW_MINUTES:
        return SessionWarning.TIME_BUDGET_UNDERFILLED
    if total > target_minutes + TIME_BUDGET_WINDOW_MINUTES:
        return SessionWarning.TIME_BUDGET_EXCEEDED
    return None


class SessionBuilder:
    """Builds a single-focus session.

    Usage:
        builder = SessionBuilder()
        result = builder.build(catalog, FocusArea.CHEST, 45, plan_input)
    """

    def __init__(
        self,
        settings: EngineSettings = DEFAULT_SETTINGS,
        tables: FocusTables = DEFAULT_FOCUS_TABLES,
    ) -> None:
        self.settings = settings
        self.tables = tables

    def build(
        self,
        catalog: Sequence[Exercise],
        focus: FocusArea,
        duration_minutes: float,
        plan_input: PlanInput,
        *,
        goal: Goal | None = None,
        history: SessionHistory | None = None,
        seed: str | int | None = None,
        excluded_accessory_muscles: Iterable[str] = (),
    ) -> SessionResult:
        """Select and prescribe exercises for one focus within a time budget.

        Args:
            catalog: Catalog snapshot, read only.
            focus: Focus area of the session.
            duration_minutes: Target length; clamped to [20, 120].
            plan_input: Normalized request.
            goal: Goal override; defaults to the input's primary goal.
            history: Recent exercises to steer away from.
            seed: PRNG seed; defaults to "{goal}-{minutes}".
            excluded_accessory_muscles: Accessory muscles owned by sibling
                focuses in a multi-focus session.

        Returns:
            SessionResult with ordered exercises, warnings and an error code
            when no usable exercise exists for the focus.
        """
        target_goal = goal or plan_input.goals.primary
        target = clamp_session_minutes(duration_minutes)
        warnings: list[SessionWarning] = []

        inventory = plan_input.equipment.inventory
        if not has_equipment(inventory):
            logger.info("Bodyweight fallback engaged for focus %s", focus.value)
            inventory = bodyweight_only_inventory()
            warnings.append(SessionWarning.EMPTY_EQUIPMENT_INVENTORY)

        constraint = get_focus_constraint(
            focus, self.tables, self.settings.min_primary_set_ratio, excluded_accessory_muscles
        )
        pools = build_pools(
            catalog, focus, target_goal, inventory, plan_input.preferences, constraint, self.tables
        )

        def unmet(reason: str) -> SessionResult:
            logger.warning("Focus constraints unsatisfied for %s: %s", focus.value, reason)
            return SessionResult(
                focus=focus,
                goal=target_goal,
                duration_minutes=target,
                warnings=tuple(warnings),
                error=SessionWarning.FOCUS_CONSTRAINTS_UNMET,
                focuses=(focus,),
            )

        if constraint is not None and not pools.primary:
            return unmet("no eligible exercises for the primary muscles")

        rng = SeededRandom(seed if seed is not None else default_seed(target_goal, target))
        scorer = VarietyScorer(
            plan_input.experience_level,
            plan_input.intensity,
            target_goal,
            HistorySummary.from_history(history, self.tables),
            self.tables,
            self.settings.tie_break_jitter,
        )
        run = _SessionBuild(
            pools=pools,
            constraint=constraint,
            plan_input=plan_input,
            inventory=inventory,
            target_minutes=target,
            goal=target_goal,
            scorer=scorer,
            rng=rng,
            settings=self.settings,
            tables=self.tables,
        )
        ordered, relaxed = run.execute()
        if not ordered:
            return unmet("no exercise passed admission")

        ratio = run.primary_ratio() if constraint is not None else None
        if relaxed:
            logger.info(
                "Focus constraints relaxed for %s: primary ratio %.2f, %d of %d exercises",
                focus.value, ratio or 0.0, len(ordered), run.min_exercises,
            )
            warnings.append(SessionWarning.FOCUS_CONSTRAINTS_RELAXED)

        exercises = tuple(item.freeze() for item in ordered)
        total_minutes = sum(item.estimated_minutes for item in exercises)
        budget = time_budget_warning(total_minutes, target)
        if budget is not None:
            logger.info(
                "Session for %s misses the time budget: %.1f of %d minutes",
                focus.value, total_minutes, target,
            )
            warnings.append(budget)

        return SessionResult(
            focus=focus,
            goal=target_goal,
            duration_minutes=target,
            exercises=exercises,
            warnings=tuple(warnings),
            focuses=(focus,),
            primary_set_ratio=ratio,
        )


class _SessionBuild:
    """State of one build call: picks, usage counters and bounds."""

    def __init__(
        self,
        pools: ExercisePools,
        constraint: FocusConstraint | None,
        plan_input: PlanInput,
        inventory: EquipmentInventory,
        target_minutes: int,
        goal: Goal,
        scorer: VarietyScorer,
        rng: SeededRandom,
        settings: EngineSettings,
        tables: FocusTables,
    ) -> None:
        self.pools = pools
        self.constraint = constraint
        self.plan_input = plan_input
        self.inventory = inventory
        self.target = target_minutes
        self.goal = goal
        self.scorer = scorer
        self.rng = rng
        self.settings = settings
        self.tables = tables

        self.picks: list[PlannedExercise] = []
        self.used_names: set[str] = set()
        self.used_patterns: Counter[str] = Counter()
        self.used_families: Counter[str] = Counter()

        self.min_exercises, self.max_exercises = exercise_caps(target_minutes, goal)
        self.min_set_cap, self.max_set_cap = set_caps(target_minutes)
        self.rest_modifier = rest_modifier(target_minutes, plan_input.preferences.rest_preference)
        self.family_cap = family_cap(target_minutes)

        allowed = [
            exercise
            for exercise in (*pools.primary, *pools.secondary, *pools.accessory)
            if self.is_allowed(exercise)
        ]
        available = {normalize_exercise_key(exercise.name) for exercise in allowed}
        if available:
            self.min_exercises = min(self.min_exercises, len(available))
            self.max_exercises = min(self.max_exercises, len(available))
        self.available_families = {
            movement_family(exercise, tables) for exercise in allowed
        } - {_UNCLASSIFIED_FAMILY}

    # -- classification --------------------------------------------------

    def is_primary_match(self, exercise: Exercise) -> bool:
        if self.constraint is None:
            return False
        return matches_primary_muscle(exercise, self.constraint.primary_muscles)

    def is_accessory_match(self, exercise: Exercise) -> bool:
        if self.constraint is None or not self.constraint.accessory_muscles:
            return False
        return matches_primary_muscle(exercise, self.constraint.accessory_muscles)

    def is_allowed(self, exercise: Exercise) -> bool:
        if self.constraint is None:
            return True
        return self.is_primary_match(exercise) or self.is_accessory_match(exercise)

    # -- totals -----------------------------------------------------------

    @property
    def total_minutes(self) -> float:
        return sum(item.estimated_minutes for item in self.picks)

    def set_totals(self, extra: PlannedExercise | None = None, extra_sets: int = 0) -> tuple[int, int]:
        """(primary sets, total sets), optionally with a hypothetical pick or set bump."""
        items = list(self.picks)
        if extra is not None and not any(item is extra for item in items):
            items.append(extra)
        primary = total = 0
        for item in items:
            sets = item.sets + (extra_sets if item is extra else 0)
            total += sets
            if self.is_primary_match(item.exercise):
                primary += sets
        return primary, total

    def primary_ratio(self, extra: PlannedExercise | None = None, extra_sets: int = 0) -> float:
        primary, total = self.set_totals(extra, extra_sets)
        return primary / total if total > 0 else 0.0

    def can_meet_primary_ratio(self, extra: PlannedExercise) -> bool:
        """Could the ratio still be reached by maxing out every primary pick?"""
        items = self.picks + [extra]
        max_primary = sum(item.max_sets for item in items if self.is_primary_match(item.exercise))
        non_primary = sum(item.sets for item in items if not self.is_primary_match(item.exercise))
        potential = max_primary + non_primary
        if potential == 0:
            return False
        return max_primary / potential >= self.constraint.min_primary_set_ratio

    # -- planned exercises ------------------------------------------------

    def create_plan(self, exercise: Exercise, source: ExerciseSource) -> PlannedExercise | None:
        option = select_exercise_equipment(self.inventory, exercise)
        if option is None:
            return None
        prescription = adapt_prescription(
            exercise,
            self.goal,
            self.plan_input.intensity,
            self.plan_input.experience_level,
            self.rest_modifier,
        )
        if exercise.is_cardio:
            min_sets = 1
            max_sets = max(min_sets, min(4, self.max_set_cap))
        else:
            min_sets, max_sets = self.min_set_cap, self.max_set_cap
        sets = int(clamp(prescription.sets, min_sets, max_sets))
        if self.target <= 35 and source in (ExerciseSource.ACCESSORY, ExerciseSource.SECONDARY):
            sets = max(min_sets, sets - 1)
        if self.target >= 90 and source == ExerciseSource.PRIMARY:
            sets = min(max_sets, sets + 1)
        prescription = dataclasses.replace(
            prescription,
            sets=sets,
            load=resolve_load(option, exercise.load_target, self.inventory),
        )
        return PlannedExercise(
            exercise=exercise,
            source=source,
            option=option,
            prescription=prescription,
            estimated_minutes=estimate_exercise_minutes(exercise, prescription, option, self.goal),
            min_sets=min_sets,
            max_sets=max_sets,
        )

    def resize(self, planned: PlannedExercise, sets: int) -> None:
        planned.prescription = dataclasses.replace(planned.prescription, sets=sets)
        planned.estimated_minutes = estimate_exercise_minutes(
            planned.exercise, planned.prescription, planned.option, self.goal
        )

    # -- admission --------------------------------------------------------

    def try_add(self, exercise: Exercise, source: ExerciseSource) -> bool:
        """Admit the exercise if every admission check passes."""
        key = normalize_exercise_key(exercise.name)
        allow_duplicate = (
            self.constraint is not None
            and self.is_primary_match(exercise)
            and len(self.pools.primary) < self.min_exercises
        )
        if len(self.picks) >= self.max_exercises:
            return False
        if key in self.used_names and not allow_duplicate:
            return False

        at_minimum = len(self.picks) >= self.min_exercises
        pattern = exercise.movement_pattern or "accessory"
        if self.picks and at_minimum:
            last = self.picks[-1].exercise
            last_muscle = primary_muscle_key(last)
            if (last.movement_pattern or "accessory") == pattern or (
                last_muscle and last_muscle == primary_muscle_key(exercise)
            ):
                return False

        pattern_cap = PATTERN_CAP_CONSTRAINED if self.constraint else PATTERN_CAP_DEFAULT
        if self.used_patterns[pattern] >= pattern_cap:
            return False

        family = movement_family(exercise, self.tables)
        if (
            family != _UNCLASSIFIED_FAMILY
            and self.used_families[family] >= self.family_cap
            and len(self.available_families) > 1
            and len(self.picks) >= self.min_exercises - 1
        ):
            return False

        if not self.is_allowed(exercise):
            return False

        planned = self.create_plan(exercise, source)
        if planned is None:
            return False

        if self.constraint is not None and not self.is_primary_match(exercise):
            if (
                self.primary_ratio(planned) < self.constraint.min_primary_set_ratio
                and not self.can_meet_primary_ratio(planned)
            ):
                return False

        tolerance = self.settings.time_tolerance_minutes
        if at_minimum and self.total_minutes + planned.estimated_minutes > self.target + tolerance:
            return False

        self.picks.append(planned)
        self.used_names.add(key)
        self.used_patterns[pattern] += 1
        self.used_families[family] += 1
        return True

    # -- phases -----------------------------------------------------------

    def seed(self) -> None:
        primary = self.pools.primary
        seed_pool = primary or self.pools.secondary
        seed_source = ExerciseSource.PRIMARY if primary else ExerciseSource.SECONDARY
        for exercise in self.scorer.order_pool(seed_pool, seed_source, self.rng):
            source = ExerciseSource.PRIMARY if exercise in primary else ExerciseSource.SECONDARY
            if self.try_add(exercise, source):
                logger.debug("Seeded session with %s (%s)", exercise.name, source.value)
                return

    def fill_to_minimum(self) -> None:
        fill_pools: list[tuple[ExerciseSource, Sequence[Exercise]]] = [
            (ExerciseSource.SECONDARY, self.pools.secondary),
            (ExerciseSource.ACCESSORY, self.pools.accessory),
        ]
        if self.constraint is None:
            pooled = (*self.pools.primary, *self.pools.secondary, *self.pools.accessory)
            fill_pools.append((ExerciseSource.SECONDARY, pooled))
        for source, pool in fill_pools:
            for exercise in self.scorer.order_pool(pool, source, self.rng):
                if len(self.picks) >= self.min_exercises:
                    break
                self.try_add(exercise, source)

    def decrease_volume(self) -> None:
        """Drop sets (accessory first) until the session fits the target."""
        iterations = 0
        while self.total_minutes > self.target and iterations < self.settings.volume_max_iterations:
            changed = False
            for source in _DECREASE_ORDER:
                planned = next(
                    (item for item in self.picks if item.source == source and item.sets > item.min_sets),
                    None,
                )
                if planned is None:
                    continue
                self.resize(planned, planned.sets - 1)
                changed = True
                if self.total_minutes <= self.target:
                    break
            if not changed:
                break
            iterations += 1
        logger.debug("Decrease pass finished after %d iterations", iterations)

    def increase_volume(self) -> None:
        """Add sets (primary first) while the session is well under target.

        A step that would overshoot the target is rolled back. Non-primary
        picks are not grown past the point where the focus ratio breaks.
        """
        floor = self.target - self.settings.time_tolerance_minutes
        iterations = 0
        while self.total_minutes < floor and iterations < self.settings.volume_max_iterations:
            increased = False
            for source in _INCREASE_ORDER:
                for planned in self.picks:
                    if planned.source != source or planned.sets >= planned.max_sets:
                        continue
                    if not self._can_grow(planned):
                        continue
                    self.resize(planned, planned.sets + 1)
                    if self.total_minutes <= self.target:
                        increased = True
                        break
                    self.resize(planned, planned.sets - 1)
                if increased:
                    break
            if not increased:
                break
            iterations += 1
        logger.debug("Increase pass finished after %d iterations", iterations)

    def _can_grow(self, planned: PlannedExercise) -> bool:
        if self.constraint is None:
            return True
        if not self.is_allowed(planned.exercise):
            return False
        if self.is_primary_match(planned.exercise):
            return True
        ratio = self.primary_ratio(planned, extra_sets=1)
        return ratio >= self.constraint.min_primary_set_ratio

    def enforce_focus_ratio(self) -> None:
        """Grow primary picks until they hold the required share of sets.

        Each step adds one set to a primary pick. While the ratio p/t is
        below 1, (p + 1)/(t + 1) > p/t, so the ratio rises strictly every
        step, and the sum of remaining primary headroom falls by one. The
        loop therefore ends by reaching the target, running out of
        headroom, or hitting the iteration cap; the last two are reported
        as relaxed by the caller.
        """
        if self.constraint is None:
            return
        target_ratio = self.constraint.min_primary_set_ratio
        iterations = 0
        while (
            self.primary_ratio() < target_ratio
            and iterations < self.settings.ratio_max_iterations
        ):
            planned = next(
                (
                    item for item in self.picks
                    if self.is_primary_match(item.exercise) and item.sets < item.max_sets
                ),
                None,
            )
            if planned is None:
                break
            self.resize(planned, planned.sets + 1)
            iterations += 1

    def top_up_accessories(self) -> None:
        gap_floor = self.target - TOP_UP_GAP_MINUTES
        for exercise in self.scorer.order_pool(self.pools.accessory, ExerciseSource.ACCESSORY, self.rng):
            if len(self.picks) >= self.max_exercises or self.total_minutes >= gap_floor:
                break
            self.try_add(exercise, ExerciseSource.ACCESSORY)

    def execute(self) -> tuple[list[PlannedExercise], bool]:
        """Run every phase; return the ordered picks and the relaxed flag."""
        self.seed()
        self.fill_to_minimum()
        self.decrease_volume()
        self.increase_volume()
        self.enforce_focus_ratio()
        self.top_up_accessories()
        self.enforce_focus_ratio()

        if not self.picks:
            return [], False

        relaxed = False
        if self.constraint is not None:
            relaxed = (
                self.primary_ratio() < self.constraint.min_primary_set_ratio
                or len(self.picks) < self.min_exercises
            )
        ordered = reorder_for_variety(self.picks, self.scorer, self.rng, self.tables)
        return ordered, relaxed
