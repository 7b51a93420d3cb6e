"""SessionMerger — one session spanning several focus areas."""

from __future__ import annotations

import dataclasses
import logging
from typing import Iterator, Sequence

from workout_engine.math.time_estimator import estimate_exercise_minutes
from workout_engine.math.utils import round_half_up
from workout_engine.math.volume import clamp_session_minutes, exercise_caps, set_caps
from workout_engine.models.enums import (
    MIN_SESSION_MINUTES,
    TIME_BUDGET_WINDOW_MINUTES,
    ExerciseSource,
    FocusArea,
    Goal,
    SessionWarning,
)
from workout_engine.models.exercise import Exercise, ScheduledExercise
from workout_engine.models.plan_input import PlanInput
from workout_engine.models.session import SessionHistory, SessionResult
from workout_engine.selection.movement import normalize_exercise_key
from workout_engine.session_builder.builder import SessionBuilder, default_seed, time_budget_warning

logger = logging.getLogger(__name__)

_TRIM_ORDER = (ExerciseSource.ACCESSORY, ExerciseSource.SECONDARY, ExerciseSource.PRIMARY)
_GROW_ORDER = tuple(reversed(_TRIM_ORDER))

_BUDGET_WARNINGS = frozenset({
    SessionWarning.TIME_BUDGET_UNDERFILLED,
    SessionWarning.TIME_BUDGET_EXCEEDED,
})


class SessionMerger:
    """Builds each focus independently, then interleaves the results.

    Usage:
        merger = SessionMerger(SessionBuilder())
        result = merger.build(catalog, [FocusArea.CHEST, FocusArea.BACK], 60, plan_input)
    """

    def __init__(self, builder: SessionBuilder | None = None) -> None:
        self.builder = builder or SessionBuilder()

    def sibling_muscles(self, focus: FocusArea, focuses: Sequence[FocusArea]) -> tuple[str, ...]:
        """Primary and accessory muscles of every other focus in the request."""
        tables = self.builder.tables
        muscles: list[str] = []
        for other in focuses:
            if other == focus:
                continue
            muscles.extend(tables.muscles_for(other))
            muscles.extend(tables.accessories_for(other))
        return tuple(dict.fromkeys(muscles))

    def build(
        self,
        catalog: Sequence[Exercise],
        focuses: Sequence[FocusArea],
        duration_minutes: float,
        plan_input: PlanInput,
        *,
        goal: Goal | None = None,
        history: SessionHistory | None = None,
        seed: str | None = None,
    ) -> SessionResult:
        """Build and merge one sub-session per focus.

        Each focus gets a generous share of the total time rather than an
        even split; the merged list is capped at the single-session maximum
        plus one slot per extra focus, then trimmed (or grown) back into
        the total budget.

        Args:
            catalog: Catalog snapshot.
            focuses: Focus areas; duplicates are ignored.
            duration_minutes: Total session length.
            plan_input: Normalized request.
            goal: Goal override.
            history: Recent exercises.
            seed: Base seed; each focus derives its own from it.

        Returns:
            A SessionResult whose ``focus`` is the first focus and whose
            ``focuses`` lists all of them.
        """
        unique = list(dict.fromkeys(focuses))
        if not unique:
            raise ValueError("at least one focus area is required")
        if len(unique) == 1:
            return self.builder.build(
                catalog, unique[0], duration_minutes, plan_input,
                goal=goal, history=history, seed=seed,
            )

        target_goal = goal or plan_input.goals.primary
        total = clamp_session_minutes(duration_minutes)
        per_focus = max(
            MIN_SESSION_MINUTES,
            round_half_up(total * self.builder.settings.merge_budget_fraction),
        )
        base_seed = seed if seed is not None else default_seed(target_goal, total)

        sessions = [
            self.builder.build(
                catalog,
                focus,
                per_focus,
                plan_input,
                goal=target_goal,
                history=history,
                seed=f"{base_seed}-{focus.value}",
                excluded_accessory_muscles=self.sibling_muscles(focus, unique),
            )
            for focus in unique
        ]

        _, base_max = exercise_caps(total, target_goal)
        cap = base_max + (len(unique) - 1)
        merged = interleave_exercises([session.exercises for session in sessions], cap)
        owner_of = {
            id(item): index
            for index, session in enumerate(sessions)
            for item in session.exercises
        }
        merged = fit_to_budget(
            merged,
            [owner_of[id(item)] for item in merged],
            total,
            target_goal,
            self.builder.settings.volume_max_iterations,
        )

        warnings: list[SessionWarning] = []
        for session in sessions:
            for warning in session.warnings:
                if warning not in warnings and warning not in _BUDGET_WARNINGS:
                    warnings.append(warning)
            if session.error is not None and SessionWarning.FOCUS_CONSTRAINTS_RELAXED not in warnings:
                warnings.append(SessionWarning.FOCUS_CONSTRAINTS_RELAXED)

        error = None
        if not merged:
            error = SessionWarning.FOCUS_CONSTRAINTS_UNMET
            logger.warning(
                "Focus constraints unsatisfied for %s: every sub-session is empty",
                "+".join(focus.value for focus in unique),
            )
            warnings = [w for w in warnings if w != SessionWarning.FOCUS_CONSTRAINTS_RELAXED]
        else:
            budget = time_budget_warning(_total(merged), total)
            if budget is not None:
                logger.info(
                    "Merged session for %s misses the time budget: %.1f of %d minutes",
                    "+".join(focus.value for focus in unique), _total(merged), total,
                )
                warnings.append(budget)

        return SessionResult(
            focus=unique[0],
            goal=target_goal,
            duration_minutes=total,
            exercises=tuple(merged),
            warnings=tuple(warnings),
            error=error,
            focuses=tuple(unique),
        )


def interleave_exercises(
    lists: Sequence[Sequence[ScheduledExercise]],
    cap: int,
) -> list[ScheduledExercise]:
    """Round-robin merge, skipping names already taken, up to ``cap`` items."""
    merged: list[ScheduledExercise] = []
    seen: set[str] = set()
    longest = max((len(items) for items in lists), default=0)
    for index in range(longest):
        for items in lists:
            if len(merged) >= cap:
                return merged
            if index >= len(items):
                continue
            key = normalize_exercise_key(items[index].name)
            if key in seen:
                continue
            seen.add(key)
            merged.append(items[index])
    return merged


def fit_to_budget(
    items: Sequence[ScheduledExercise],
    owners: Sequence[int],
    target_minutes: int,
    goal: Goal,
    max_iterations: int = 200,
) -> list[ScheduledExercise]:
    """Bring an interleaved list back within target +/- the budget window.

    While over the ceiling, the lowest-priority trailing pick is dropped as
    long as its focus keeps another pick and the total stays above the
    floor; failing that, one set is shaved from the lowest-priority pick
    that can spare it. While under the floor, sets are added back starting
    from the primary picks. ``owners`` gives each item's focus index.
    """
    picks = list(items)
    owned = list(owners)
    ceiling = target_minutes + TIME_BUDGET_WINDOW_MINUTES
    floor = target_minutes - TIME_BUDGET_WINDOW_MINUTES
    min_sets, max_sets = set_caps(target_minutes)

    iterations = 0
    while _total(picks) > ceiling and iterations < max_iterations:
        iterations += 1
        index = _droppable_index(picks, owned, floor)
        if index is not None:
            del picks[index], owned[index]
            continue
        index, shaved = _shave(picks, floor, min_sets, goal)
        if shaved is not None:
            picks[index] = shaved
            continue
        index = _droppable_index(picks, owned, None)
        if index is None:
            break
        del picks[index], owned[index]

    while _total(picks) < floor and iterations < max_iterations:
        iterations += 1
        index, grown = _grow(picks, ceiling, max_sets, goal)
        if grown is None:
            break
        picks[index] = grown

    logger.debug("Budget fit finished after %d iterations at %.1f minutes", iterations, _total(picks))
    return picks


def _total(picks: Sequence[ScheduledExercise]) -> float:
    return round(sum(item.estimated_minutes for item in picks), 1)


def _with_sets(item: ScheduledExercise, sets: int, goal: Goal) -> ScheduledExercise:
    prescription = dataclasses.replace(item.prescription, sets=sets)
    return dataclasses.replace(
        item,
        prescription=prescription,
        estimated_minutes=estimate_exercise_minutes(item.exercise, prescription, item.equipment, goal),
    )


def _by_priority(
    picks: Sequence[ScheduledExercise],
    order: Sequence[ExerciseSource],
    latest_first: bool,
) -> Iterator[int]:
    indices = range(len(picks) - 1, -1, -1) if latest_first else range(len(picks))
    for source in order:
        for index in indices:
            if picks[index].source == source:
                yield index


def _droppable_index(
    picks: Sequence[ScheduledExercise],
    owners: Sequence[int],
    floor: float | None,
) -> int | None:
    total = _total(picks)
    for index in _by_priority(picks, _TRIM_ORDER, latest_first=True):
        if owners.count(owners[index]) < 2:
            continue
        if floor is not None and total - picks[index].estimated_minutes < floor:
            continue
        return index
    return None


def _shave(
    picks: Sequence[ScheduledExercise],
    floor: float,
    min_sets: int,
    goal: Goal,
) -> tuple[int, ScheduledExercise | None]:
    total = _total(picks)
    for index in _by_priority(picks, _TRIM_ORDER, latest_first=True):
        item = picks[index]
        lowest = 1 if item.exercise.is_cardio else min_sets
        if item.sets <= lowest:
            continue
        shaved = _with_sets(item, item.sets - 1, goal)
        if total - item.estimated_minutes + shaved.estimated_minutes >= floor:
            return index, shaved
    return -1, None


def _grow(
    picks: Sequence[ScheduledExercise],
    ceiling: float,
    max_sets: int,
    goal: Goal,
) -> tuple[int, ScheduledExercise | None]:
    total = _total(picks)
    for index in _by_priority(picks, _GROW_ORDER, latest_first=False):
        item = picks[index]
        if item.sets >= max_sets:
            continue
        grown = _with_sets(item, item.sets + 1, goal)
        if total - item.estimated_minutes + grown.estimated_minutes <= ceiling:
            return index, grown
    return -1, None
