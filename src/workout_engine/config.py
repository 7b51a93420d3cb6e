"""Engine tunables, overridable from environment variables."""

from __future__ import annotations

import os
from dataclasses import dataclass
from typing import Callable, Mapping, TypeVar

from workout_engine.exceptions import ConfigError
from workout_engine.models.enums import (
    MAX_REPAIR_ITERATIONS,
    MERGE_BUDGET_FRACTION,
    MIN_PRIMARY_SET_RATIO,
    TIE_BREAK_JITTER,
    TIME_TOLERANCE_MINUTES,
)

T = TypeVar("T")


@dataclass(frozen=True)
class EngineSettings:
    """Tunables for the session builder and merger.

    The ratio threshold and iteration caps have no derivation behind them
    beyond product defaults, so they are kept adjustable here.
    """

    min_primary_set_ratio: float = MIN_PRIMARY_SET_RATIO
    ratio_max_iterations: int = MAX_REPAIR_ITERATIONS
    volume_max_iterations: int = MAX_REPAIR_ITERATIONS
    merge_budget_fraction: float = MERGE_BUDGET_FRACTION
    time_tolerance_minutes: float = TIME_TOLERANCE_MINUTES
    tie_break_jitter: float = TIE_BREAK_JITTER


DEFAULT_SETTINGS = EngineSettings()


def load_settings(environ: Mapping[str, str] | None = None) -> EngineSettings:
    """Build settings from ``WORKOUT_*`` environment variables.

    Args:
        environ: Mapping to read from. Defaults to ``os.environ``.

    Returns:
        EngineSettings with defaults for any unset variable.

    Raises:
        ConfigError: If a variable is set but cannot be parsed or is out of range.
    """
    env = os.environ if environ is None else environ
    settings = EngineSettings(
        min_primary_set_ratio=_read(
            env, "WORKOUT_MIN_PRIMARY_SET_RATIO", float, MIN_PRIMARY_SET_RATIO
        ),
        ratio_max_iterations=_read(
            env, "WORKOUT_RATIO_MAX_ITERATIONS", int, MAX_REPAIR_ITERATIONS
        ),
        volume_max_iterations=_read(
            env, "WORKOUT_VOLUME_MAX_ITERATIONS", int, MAX_REPAIR_ITERATIONS
        ),
        merge_budget_fraction=_read(
            env, "WORKOUT_MERGE_BUDGET_FRACTION", float, MERGE_BUDGET_FRACTION
        ),
    )
    if not 0.0 < settings.min_primary_set_ratio <= 1.0:
        raise ConfigError("WORKOUT_MIN_PRIMARY_SET_RATIO must be in (0, 1]")
    if settings.ratio_max_iterations < 1 or settings.volume_max_iterations < 1:
        raise ConfigError("iteration caps must be positive")
    if not 0.0 < settings.merge_budget_fraction <= 1.0:
        raise ConfigError("WORKOUT_MERGE_BUDGET_FRACTION must be in (0, 1]")
    return settings


def _read(env: Mapping[str, str], name: str, parse: Callable[[str], T], default: T) -> T:
    raw = env.get(name)
    if raw is None or raw.strip() == "":
        return default
    try:
        return parse(raw)
    except ValueError as exc:
        raise ConfigError(f"{name}={raw!r} is not a valid {parse.__name__}") from exc
