"""Workout session synthesis engine — catalog in, scheduled sessions out."""

from workout_engine.catalog import load_catalog
from workout_engine.config import DEFAULT_SETTINGS, EngineSettings, load_settings
from workout_engine.engine import WorkoutEngine
from workout_engine.exceptions import (
    CatalogError,
    ConfigError,
    InvalidPlanInputError,
    WorkoutEngineError,
)

__all__ = [
    "CatalogError",
    "ConfigError",
    "DEFAULT_SETTINGS",
    "EngineSettings",
    "InvalidPlanInputError",
    "WorkoutEngine",
    "WorkoutEngineError",
    "load_catalog",
    "load_settings",
]
