"""Catalog loading and static focus tables."""

from workout_engine.catalog.loader import catalog_from_rows, exercise_from_dict, load_catalog
from workout_engine.catalog.tables import DEFAULT_FOCUS_TABLES, FocusMuscles, FocusTables

__all__ = [
    "DEFAULT_FOCUS_TABLES",
    "FocusMuscles",
    "FocusTables",
    "catalog_from_rows",
    "exercise_from_dict",
    "load_catalog",
]
