"""Equipment inventory and catalog equipment options.

The inventory is a read-only snapshot of what the user owns. Catalog
exercises list alternative ``EquipmentOption`` values; an option may carry
extra AND-requirements (a barbell bench press also needs a bench).
"""

from __future__ import annotations

from dataclasses import dataclass, field

from workout_engine.models.enums import (
    BandTier,
    EquipmentKind,
    EquipmentOrGroup,
    EquipmentPreset,
    MachineType,
)


@dataclass(frozen=True)
class EquipmentOption:
    """One way of performing an exercise."""

    kind: EquipmentKind
    requires: tuple[EquipmentKind, ...] = field(default_factory=tuple)
    machine_type: MachineType | None = None


@dataclass(frozen=True)
class BarbellInventory:
    available: bool = False
    plates: tuple[float, ...] = field(default_factory=tuple)


@dataclass(frozen=True)
class MachineInventory:
    cable: bool = False
    leg_press: bool = False
    treadmill: bool = False
    rower: bool = False

    def has(self, machine_type: MachineType) -> bool:
        return bool(getattr(self, machine_type.value))

    def any(self) -> bool:
        return any(self.has(machine_type) for machine_type in MachineType)


@dataclass(frozen=True)
class EquipmentInventory:
    """Snapshot of the equipment a user has on hand.

    Dumbbell and kettlebell weights are per implement. Bands are listed by
    tier. Never mutated by the engine.
    """

    bodyweight: bool = False
    bench_press: bool = False
    dumbbells: tuple[float, ...] = field(default_factory=tuple)
    kettlebells: tuple[float, ...] = field(default_factory=tuple)
    bands: tuple[BandTier, ...] = field(default_factory=tuple)
    barbell: BarbellInventory = field(default_factory=BarbellInventory)
    machines: MachineInventory = field(default_factory=MachineInventory)


def has_equipment(inventory: EquipmentInventory) -> bool:
    """Return True if the inventory offers at least one usable item."""
    return (
        inventory.bodyweight
        or inventory.bench_press
        or bool(inventory.dumbbells)
        or bool(inventory.kettlebells)
        or bool(inventory.bands)
        or inventory.barbell.available
        or inventory.machines.any()
    )


def bodyweight_only_inventory() -> EquipmentInventory:
    """Inventory substituted when the user supplies no equipment at all."""
    return EquipmentInventory(bodyweight=True)


# ---------------------------------------------------------------------------
# Named presets
# ---------------------------------------------------------------------------

EQUIPMENT_PRESETS: dict[EquipmentPreset, EquipmentInventory] = {
    EquipmentPreset.HOME_MINIMAL: EquipmentInventory(
        bodyweight=True,
        dumbbells=(10, 20),
        bands=(BandTier.LIGHT, BandTier.MEDIUM),
    ),
    EquipmentPreset.FULL_GYM: EquipmentInventory(
        bodyweight=True,
        bench_press=True,
        dumbbells=(10, 15, 20, 25, 30, 35, 40, 50),
        kettlebells=(15, 25, 35, 50),
        bands=(BandTier.LIGHT, BandTier.MEDIUM, BandTier.HEAVY),
        barbell=BarbellInventory(available=True, plates=(10, 25, 35, 45)),
        machines=MachineInventory(cable=True, leg_press=True, treadmill=True, rower=True),
    ),
    EquipmentPreset.HOTEL: EquipmentInventory(
        bodyweight=True,
        dumbbells=(10, 15, 20),
        bands=(BandTier.LIGHT,),
        machines=MachineInventory(treadmill=True),
    ),
}


# ---------------------------------------------------------------------------
# OR-groups
# ---------------------------------------------------------------------------

# Members in preference order; the first available one is used.
EQUIPMENT_OR_GROUPS: dict[EquipmentOrGroup, tuple[EquipmentOption, ...]] = {
    EquipmentOrGroup.FREE_WEIGHT_PRIMARY: (
        EquipmentOption(kind=EquipmentKind.BARBELL),
        EquipmentOption(kind=EquipmentKind.DUMBBELL),
    ),
    EquipmentOrGroup.SINGLE_IMPLEMENT: (
        EquipmentOption(kind=EquipmentKind.KETTLEBELL),
        EquipmentOption(kind=EquipmentKind.DUMBBELL),
    ),
    EquipmentOrGroup.PULL_UP_INFRASTRUCTURE: (
        EquipmentOption(kind=EquipmentKind.BODYWEIGHT),
    ),
    EquipmentOrGroup.TREADMILL_OUTDOOR: (
        EquipmentOption(kind=EquipmentKind.MACHINE, machine_type=MachineType.TREADMILL),
        EquipmentOption(kind=EquipmentKind.BODYWEIGHT),
    ),
    EquipmentOrGroup.ROWING_MACHINES: (
        EquipmentOption(kind=EquipmentKind.MACHINE, machine_type=MachineType.ROWER),
    ),
    EquipmentOrGroup.RESISTANCE_VARIABLE: (
        EquipmentOption(kind=EquipmentKind.BAND),
        EquipmentOption(kind=EquipmentKind.MACHINE, machine_type=MachineType.CABLE),
    ),
}
