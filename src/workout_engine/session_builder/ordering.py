"""Final variety pass over a session's picks."""

from __future__ import annotations

from typing import Sequence

from workout_engine.catalog.tables import DEFAULT_FOCUS_TABLES, FocusTables
from workout_engine.math.seeded_random import SeededRandom
from workout_engine.models.session import PlannedExercise
from workout_engine.selection.movement import movement_family, primary_muscle_key
from workout_engine.selection.variety_scorer import VarietyScorer


def is_adjacent_repeat(
    previous: PlannedExercise | None,
    candidate: PlannedExercise,
    tables: FocusTables = DEFAULT_FOCUS_TABLES,
) -> bool:
    """True if the candidate shares pattern, primary muscle or family with previous."""
    if previous is None:
        return False
    prev, nxt = previous.exercise, candidate.exercise
    if prev.movement_pattern and prev.movement_pattern == nxt.movement_pattern:
        return True
    prev_muscle = primary_muscle_key(prev)
    if prev_muscle and prev_muscle == primary_muscle_key(nxt):
        return True
    return movement_family(prev, tables) == movement_family(nxt, tables)


def reorder_for_variety(
    picks: Sequence[PlannedExercise],
    scorer: VarietyScorer,
    rng: SeededRandom,
    tables: FocusTables = DEFAULT_FOCUS_TABLES,
) -> list[PlannedExercise]:
    """Greedily rebuild the order so neighbours differ.

    At each step the candidates are, in order of preference: picks that
    repeat nothing from the previous exercise, picks with a different
    primary muscle, then anything left. The best-scoring candidate (plus
    seeded jitter) is placed next.
    """
    remaining = list(picks)
    ordered: list[PlannedExercise] = []
    while remaining:
        previous = ordered[-1] if ordered else None
        candidates = [item for item in remaining if not is_adjacent_repeat(previous, item, tables)]
        if not candidates and previous is not None:
            prev_muscle = primary_muscle_key(previous.exercise)
            candidates = [
                item for item in remaining
                if prev_muscle
                and primary_muscle_key(item.exercise)
                and primary_muscle_key(item.exercise) != prev_muscle
            ]
        if not candidates:
            candidates = remaining

        best = candidates[0]
        best_score = float("-inf")
        for item in candidates:
            item_score = scorer.score(item.exercise, item.source) + rng.random() * scorer.jitter
            if item_score > best_score:
                best, best_score = item, item_score
        ordered.append(best)
        remaining.remove(best)
    return ordered
