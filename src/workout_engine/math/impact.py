"""Workout impact: post-hoc volume/intensity/density summary.

Per-exercise workload is computed by a pluggable callable; the default is a
tonnage x intensity-factor metric. Aggregation runs over a pandas frame.
"""

from __future__ import annotations

import re
from typing import Callable, Iterable

import numpy as np
import pandas as pd

from workout_engine.math.utils import round_half_up
from workout_engine.models.exercise import ScheduledExercise
from workout_engine.models.plan import PlanDay
from workout_engine.models.session import ImpactBreakdown, WorkoutImpact

WorkloadFn = Callable[[ScheduledExercise], float]

_DIGITS = re.compile(r"\d+")


def parse_reps(reps: str | int | float | None) -> int | None:
    """Read a rep count from a rep string; ranges average ("8-12" -> 10)."""
    if isinstance(reps, (int, float)):
        return int(reps)
    if not reps:
        return None
    numbers = [int(match) for match in _DIGITS.findall(reps)]
    if not numbers:
        return None
    if len(numbers) == 1:
        return numbers[0]
    return round_half_up(sum(numbers) / len(numbers))


def exercise_volume(item: ScheduledExercise) -> float:
    reps = parse_reps(item.reps)
    if reps is None or not item.sets:
        return 0.0
    return float(reps * item.sets)


def tonnage_workload(item: ScheduledExercise) -> float:
    """Default workload: volume x load (1 when unloaded) x RPE / 10."""
    load = item.load.value if item.load is not None else 1.0
    return exercise_volume(item) * load * (item.rpe / 10.0)


def calculate_exercise_impact(
    exercises: Iterable[ScheduledExercise],
    workload: WorkloadFn = tonnage_workload,
) -> WorkoutImpact:
    """Aggregate scheduled exercises into a single impact summary.

    Args:
        exercises: Finished exercises of a session or week.
        workload: Per-exercise workload function.

    Returns:
        WorkoutImpact where score = total workload / 10, intensity is the
        mean RPE on a 0-100 scale and density is volume per estimated minute.
    """
    rows = [
        {
            "workload": workload(item),
            "volume": exercise_volume(item),
            "rpe": float(item.rpe),
            "minutes": float(item.estimated_minutes),
        }
        for item in exercises
    ]
    if not rows:
        return WorkoutImpact(score=0, breakdown=ImpactBreakdown(volume=0, intensity=0, density=0))

    frame = pd.DataFrame(rows, dtype=np.float64)
    total_workload = float(frame["workload"].sum())
    total_volume = float(frame["volume"].sum())
    total_minutes = float(frame["minutes"].sum())
    avg_rpe = float(np.mean(frame["rpe"].to_numpy()))
    density = total_volume / total_minutes if total_minutes > 0 else 0.0

    return WorkoutImpact(
        score=round_half_up(total_workload / 10),
        breakdown=ImpactBreakdown(
            volume=round_half_up(total_volume),
            intensity=round_half_up(avg_rpe * 10),
            density=round_half_up(density),
        ),
    )


def calculate_workout_impact(
    schedule: Iterable[PlanDay],
    workload: WorkloadFn = tonnage_workload,
) -> WorkoutImpact:
    """Impact of a whole week: every day's exercises pooled together."""
    return calculate_exercise_impact(
        (item for day in schedule for item in day.exercises),
        workload,
    )
