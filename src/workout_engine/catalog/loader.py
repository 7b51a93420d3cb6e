"""Pure functions mapping raw catalog rows to Exercise records.

Catalog storage is an external concern; this module only shapes rows that
have already been read (or reads a JSON snapshot file for the CLI).
"""

from __future__ import annotations

import json
import logging
from enum import Enum
from pathlib import Path
from typing import Any, Iterable, TypeVar

from workout_engine.exceptions import CatalogError
from workout_engine.models.enums import (
    EquipmentKind,
    EquipmentOrGroup,
    ExerciseCategory,
    ExperienceLevel,
    FocusArea,
    Goal,
    MachineType,
)
from workout_engine.models.equipment import EquipmentOption
from workout_engine.models.exercise import Exercise

logger = logging.getLogger(__name__)

E = TypeVar("E", bound=Enum)

_MOBILITY_HINTS = ("yoga", "mobility", "stretch")
_CARDIO_HINTS = ("cardio",)


def load_catalog(path: str | Path) -> list[Exercise]:
    """Read a JSON array of catalog rows from disk.

    Raises:
        CatalogError: If the file is not a JSON array or a row is malformed.
    """
    with open(path, encoding="utf-8") as fh:
        try:
            rows = json.load(fh)
        except json.JSONDecodeError as exc:
            raise CatalogError(f"{path} is not valid JSON: {exc}") from exc
    if not isinstance(rows, list):
        raise CatalogError(f"{path} must contain a JSON array of exercises")
    return catalog_from_rows(rows)


def catalog_from_rows(rows: Iterable[dict[str, Any]]) -> list[Exercise]:
    """Map every row, preserving catalog order."""
    exercises = [exercise_from_dict(row, index) for index, row in enumerate(rows)]
    logger.debug("Loaded %d catalog exercises", len(exercises))
    return exercises


def exercise_from_dict(row: dict[str, Any], index: int | None = None) -> Exercise:
    """Map one catalog row to an Exercise.

    Args:
        row: Raw row with snake_case keys. Only ``name`` is required.
        index: Position in the source catalog, used in error messages.

    Returns:
        A frozen Exercise.

    Raises:
        CatalogError: If the row is not a dict, has no name, or carries an
            unknown enum value.
    """
    if not isinstance(row, dict):
        raise CatalogError("row must be an object", index)
    name = row.get("name")
    if not isinstance(name, str) or not name.strip():
        raise CatalogError("missing exercise name", index)

    default_equipment = [] if row.get("or_group") else [{"kind": "bodyweight"}]
    raw_equipment = row.get("equipment") or default_equipment
    if not isinstance(raw_equipment, list):
        raise CatalogError(f"{name}: equipment must be a list", index)

    secondary = row.get("secondary_muscles") or []
    if not isinstance(secondary, list):
        raise CatalogError(f"{name}: secondary_muscles must be a list", index)

    try:
        return Exercise(
            name=name.strip(),
            category=_infer_category(row, index),
            focus=_optional_enum(FocusArea, row.get("focus")),
            primary_muscle=row.get("primary_muscle") or None,
            secondary_muscles=tuple(str(muscle) for muscle in secondary),
            movement_pattern=row.get("movement_pattern") or None,
            equipment=tuple(_equipment_option(item, name, index) for item in raw_equipment),
            or_group=_optional_enum(EquipmentOrGroup, row.get("or_group")),
            sets=int(row.get("sets", 3)),
            reps=str(row.get("reps", "8-12")),
            rpe=float(row.get("rpe", 7)),
            rest_seconds=int(row.get("rest_seconds", 60)),
            duration_minutes=_optional_float(row.get("duration_minutes")),
            load_target=_optional_float(row.get("load_target")),
            goal=_optional_enum(Goal, row.get("goal")),
            difficulty=_optional_enum(ExperienceLevel, row.get("difficulty")),
        )
    except (TypeError, ValueError) as exc:
        raise CatalogError(f"{name}: {exc}", index) from exc


# ---------------------------------------------------------------------------
# Internal helpers
# ---------------------------------------------------------------------------


def _infer_category(row: dict[str, Any], index: int | None) -> ExerciseCategory:
    """Use the explicit category when valid, otherwise guess from keywords."""
    raw = row.get("category")
    if raw:
        try:
            return ExerciseCategory(raw)
        except ValueError:
            pass

    indicators = [
        str(row.get(key) or "").lower()
        for key in ("name", "focus", "primary_muscle")
    ]
    if any(hint in text for text in indicators for hint in _MOBILITY_HINTS):
        category = ExerciseCategory.MOBILITY
    elif any(hint in text for text in indicators for hint in _CARDIO_HINTS):
        category = ExerciseCategory.CARDIO
    else:
        category = ExerciseCategory.STRENGTH
    logger.warning(
        "Catalog row %s (%s) has no valid category, inferred %s",
        index, row.get("name"), category.value,
    )
    return category


def _equipment_option(item: Any, name: str, index: int | None) -> EquipmentOption:
    if isinstance(item, str):
        item = {"kind": item}
    if not isinstance(item, dict) or "kind" not in item:
        raise CatalogError(f"{name}: equipment entries need a kind", index)
    requires = item.get("requires") or []
    if not isinstance(requires, list):
        raise CatalogError(f"{name}: equipment requires must be a list", index)
    return EquipmentOption(
        kind=EquipmentKind(item["kind"]),
        requires=tuple(EquipmentKind(req) for req in requires),
        machine_type=_optional_enum(MachineType, item.get("machine_type")),
    )


def _optional_enum(enum_cls: type[E], value: Any) -> E | None:
    if value is None or value == "":
        return None
    return enum_cls(value)


def _optional_float(value: Any) -> float | None:
    if value is None or value == "":
        return None
    return float(value)
