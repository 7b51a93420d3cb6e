"""Load resolution: abstract target load -> concrete, available equipment load.

Misses are reported as ``None`` (no option, no target, or nothing in the
inventory to match) and the prescription simply omits a load.
"""

from __future__ import annotations

from typing import Sequence

import numpy as np

from workout_engine.math.utils import round_half_up
from workout_engine.models.enums import (
    BAND_TIER_LOADS,
    BARBELL_BASE_WEIGHT,
    DUMBBELL_TOTAL_LOAD_THRESHOLD,
    BandTier,
    EquipmentKind,
)
from workout_engine.models.equipment import EquipmentInventory, EquipmentOption
from workout_engine.models.exercise import ExerciseLoad


def pick_closest_weight(weights: Sequence[float], target: float) -> float | None:
    """Return the available weight nearest to target; earlier entries win ties."""
    if not weights:
        return None
    closest = weights[0]
    for weight in weights[1:]:
        if abs(weight - target) < abs(closest - target):
            closest = weight
    return closest


def barbell_totals(plates: Sequence[float], base: float = BARBELL_BASE_WEIGHT) -> np.ndarray:
    """Every achievable barbell total, sorted ascending.

    Each plate in the inventory is loaded as a pair (one per side) and used
    at most once, so totals are ``base + 2 * s`` for every subset sum ``s``.
    """
    sums = np.zeros(1, dtype=np.float64)
    for plate in plates:
        sums = np.unique(np.concatenate([sums, sums + 2.0 * float(plate)]))
    return base + sums


def resolve_barbell_load(target: float, inventory: EquipmentInventory) -> ExerciseLoad:
    base = BARBELL_BASE_WEIGHT
    if not inventory.barbell.available:
        return ExerciseLoad(value=base, label=f"{base} lb barbell (no plates)")
    totals = barbell_totals(inventory.barbell.plates, base)
    closest = float(totals[int(np.argmin(np.abs(totals - target)))])
    return ExerciseLoad(value=closest, label=f"{_fmt(closest)} lb barbell")


def resolve_band_tier(bands: Sequence[BandTier]) -> BandTier | None:
    """Heaviest preferred tier: heavy, then medium, then whatever is listed first."""
    if BandTier.HEAVY in bands:
        return BandTier.HEAVY
    if BandTier.MEDIUM in bands:
        return BandTier.MEDIUM
    return bands[0] if bands else None


def resolve_load(
    option: EquipmentOption | None,
    target: float | None,
    inventory: EquipmentInventory,
) -> ExerciseLoad | None:
    """Map a target load onto the equipment option's concrete load.

    Args:
        option: The equipment option chosen for the exercise.
        target: Catalog load target in pounds. For dumbbells, targets above
            80 are read as a total load and corrected to a per-hand weight.
        inventory: The user's equipment snapshot.

    Returns:
        ExerciseLoad, or None when there is no option, no target, or the
        inventory offers nothing matching.
    """
    if option is None or not target:
        return None

    kind = option.kind
    if kind == EquipmentKind.DUMBBELL:
        adjusted = (
            round_half_up(target / 3)
            if target > DUMBBELL_TOTAL_LOAD_THRESHOLD
            else target
        )
        per_hand = pick_closest_weight(inventory.dumbbells, adjusted)
        if per_hand is None:
            return None
        return ExerciseLoad(value=per_hand * 2, label=f"2x{_fmt(per_hand)} lb dumbbells")
    if kind == EquipmentKind.KETTLEBELL:
        weight = pick_closest_weight(inventory.kettlebells, target)
        if weight is None:
            return None
        return ExerciseLoad(value=weight, label=f"{_fmt(weight)} lb kettlebell")
    if kind == EquipmentKind.BAND:
        tier = resolve_band_tier(inventory.bands)
        if tier is None:
            return None
        return ExerciseLoad(value=BAND_TIER_LOADS[tier], label=f"{tier.value} band")
    if kind == EquipmentKind.BARBELL:
        return resolve_barbell_load(target, inventory)
    if kind == EquipmentKind.MACHINE:
        return ExerciseLoad(value=target, label=f"Select ~{_fmt(target)} lb on the stack")
    return None


def _fmt(value: float) -> str:
    """Render whole-number weights without a trailing .0."""
    return str(int(value)) if float(value).is_integer() else f"{value:g}"
