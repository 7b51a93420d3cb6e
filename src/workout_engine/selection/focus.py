"""FocusConstraint derivation for body-part focuses."""

from __future__ import annotations

from typing import Iterable

from workout_engine.catalog.tables import DEFAULT_FOCUS_TABLES, FocusTables
from workout_engine.models.enums import MIN_PRIMARY_SET_RATIO, FocusArea
from workout_engine.models.session import FocusConstraint


def get_focus_constraint(
    focus: FocusArea,
    tables: FocusTables = DEFAULT_FOCUS_TABLES,
    min_ratio: float = MIN_PRIMARY_SET_RATIO,
    excluded_accessory_muscles: Iterable[str] = (),
) -> FocusConstraint | None:
    """Build the constraint for a body-part focus, or None for region/mode focuses.

    Args:
        focus: Requested focus area.
        tables: Focus lookup tables.
        min_ratio: Required primary share of total sets.
        excluded_accessory_muscles: Muscles to drop from the accessory list,
            used by multi-focus sessions so one focus does not take another's
            muscles.
    """
    if not tables.is_body_part(focus):
        return None
    excluded = {muscle.lower() for muscle in excluded_accessory_muscles}
    primary = tables.muscles_for(focus)
    accessory = tuple(
        muscle for muscle in tables.accessories_for(focus)
        if muscle not in excluded and muscle not in primary
    )
    return FocusConstraint(
        focus=focus,
        primary_muscles=primary,
        accessory_muscles=accessory,
        min_primary_set_ratio=min_ratio,
    )
