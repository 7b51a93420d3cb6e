"""Duration-driven bounds: exercise counts, set counts, family caps, rest scaling."""

from __future__ import annotations

from workout_engine.math.utils import clamp, round_half_up
from workout_engine.models.enums import (
    MAX_SESSION_MINUTES,
    MIN_SESSION_MINUTES,
    Goal,
    RestPreference,
)

# (upper minute bound, min exercises, max exercises); last row catches the rest
_EXERCISE_BANDS: tuple[tuple[float, int, int], ...] = (
    (20, 2, 3),
    (30, 3, 4),
    (45, 4, 6),
    (60, 5, 8),
    (90, 6, 9),
    (float("inf"), 6, 10),
)

_SET_BANDS: tuple[tuple[float, int, int], ...] = (
    (30, 2, 4),
    (60, 2, 5),
    (float("inf"), 2, 6),
)

_SHORT_REST_GOALS = frozenset({Goal.ENDURANCE, Goal.CARDIO, Goal.RANGE_OF_MOTION})


def clamp_session_minutes(minutes: float) -> int:
    return int(clamp(round_half_up(minutes), MIN_SESSION_MINUTES, MAX_SESSION_MINUTES))


def exercise_caps(minutes: float, goal: Goal | None = None) -> tuple[int, int]:
    """Min and max exercise counts for a session length.

    Past 30 minutes, strength sessions lose one slot to their longer rests
    and short-rest goals gain one.
    """
    low, high = next((lo, hi) for bound, lo, hi in _EXERCISE_BANDS if minutes <= bound)
    if minutes > 30:
        if goal == Goal.STRENGTH:
            high = max(low, high - 1)
        elif goal in _SHORT_REST_GOALS:
            high += 1
    return low, high


def set_caps(minutes: float) -> tuple[int, int]:
    return next((lo, hi) for bound, lo, hi in _SET_BANDS if minutes <= bound)


def family_cap(minutes: float) -> int:
    """How many exercises may share a movement family."""
    if minutes <= 35:
        return 2
    if minutes <= 60:
        return 3
    return 4


def rest_modifier(minutes: float, preference: RestPreference) -> float:
    """Scale rest with session length and the user's recovery preference."""
    if minutes <= 30:
        modifier = 0.8
    elif minutes <= 45:
        modifier = 0.9
    elif minutes >= 90:
        modifier = 1.1
    else:
        modifier = 1.0

    if preference == RestPreference.MINIMAL_REST:
        modifier -= 0.1
    elif preference == RestPreference.HIGH_RECOVERY:
        modifier += 0.1
    return clamp(modifier, 0.7, 1.3)
