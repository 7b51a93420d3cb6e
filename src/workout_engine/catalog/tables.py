"""Static focus and movement lookup tables.

Loaded once at import into an immutable ``FocusTables`` value and passed
explicitly to filter and scoring functions, so tests can swap in their own.
"""

from __future__ import annotations

from dataclasses import dataclass
from types import MappingProxyType
from typing import Mapping

from workout_engine.models.enums import CardioActivity, FocusArea


@dataclass(frozen=True)
class FocusMuscles:
    """Muscles targeted by a body-part focus and the region it belongs to."""

    muscles: tuple[str, ...]
    base_focus: FocusArea


@dataclass(frozen=True)
class FocusTables:
    focus_muscles: Mapping[FocusArea, FocusMuscles]
    focus_accessories: Mapping[FocusArea, tuple[str, ...]]
    region_muscles: Mapping[FocusArea, tuple[str, ...]]
    family_keywords: tuple[tuple[tuple[str, ...], str], ...]
    cardio_keywords: Mapping[CardioActivity, tuple[str, ...]]
    high_impact_keywords: tuple[str, ...]

    def is_body_part(self, focus: FocusArea) -> bool:
        return focus in self.focus_muscles

    def base_focus(self, focus: FocusArea) -> FocusArea | None:
        entry = self.focus_muscles.get(focus)
        return entry.base_focus if entry else None

    def muscles_for(self, focus: FocusArea) -> tuple[str, ...]:
        entry = self.focus_muscles.get(focus)
        return entry.muscles if entry else ()

    def accessories_for(self, focus: FocusArea) -> tuple[str, ...]:
        return self.focus_accessories.get(focus, ())


_UPPER = ("chest", "back", "shoulders", "biceps", "triceps", "forearms")
_LOWER = ("quads", "hamstrings", "glutes", "calves", "adductors", "abductors", "hip_flexors")

DEFAULT_FOCUS_TABLES = FocusTables(
    focus_muscles=MappingProxyType({
        FocusArea.ARMS: FocusMuscles(("biceps", "triceps", "forearms", "shoulders"), FocusArea.UPPER),
        FocusArea.LEGS: FocusMuscles(_LOWER, FocusArea.LOWER),
        FocusArea.BICEPS: FocusMuscles(("biceps",), FocusArea.UPPER),
        FocusArea.TRICEPS: FocusMuscles(("triceps",), FocusArea.UPPER),
        FocusArea.CHEST: FocusMuscles(("chest",), FocusArea.UPPER),
        FocusArea.BACK: FocusMuscles(("back",), FocusArea.UPPER),
        FocusArea.SHOULDERS: FocusMuscles(("shoulders",), FocusArea.UPPER),
    }),
    focus_accessories=MappingProxyType({
        FocusArea.CHEST: ("triceps", "shoulders"),
        FocusArea.BACK: ("biceps", "forearms"),
        FocusArea.BICEPS: ("forearms",),
        FocusArea.TRICEPS: ("shoulders",),
        FocusArea.LEGS: ("core",),
    }),
    region_muscles=MappingProxyType({
        FocusArea.UPPER: _UPPER,
        FocusArea.LOWER: _LOWER,
        FocusArea.CORE: ("core", "abs", "obliques"),
    }),
    # Order matters: "split squat" is a lunge but contains "squat", and
    # "push-up" is a press, so earlier rows win.
    family_keywords=(
        (("press", "push-up", "pushup"), "press"),
        (("fly", "pec deck"), "fly"),
        (("dip",), "dip"),
        (("row",), "row"),
        (("pull",), "pull"),
        (("curl",), "curl"),
        (("extension",), "extension"),
        (("raise", "lateral"), "raise"),
        (("split squat", "lunge"), "lunge"),
        (("squat",), "squat"),
        (("deadlift", "rdl", "hinge"), "hinge"),
        (("carry",), "carry"),
        (("plank", "crunch", "core"), "core"),
        (("run", "bike", "rower", "interval"), "cardio"),
    ),
    cardio_keywords=MappingProxyType({
        CardioActivity.SKIPPING: ("skipping", "jump rope"),
        CardioActivity.INDOOR_CYCLING: ("indoor cycling", "spin", "assault bike"),
        CardioActivity.OUTDOOR_CYCLING: ("outdoor cycling", "road cycling", "bike ride"),
        CardioActivity.RUNNING: ("run", "treadmill"),
        CardioActivity.ROWING: ("row",),
    }),
    high_impact_keywords=("jump", "interval", "burpee", "sprint"),
)
