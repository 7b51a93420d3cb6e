"""Tests for focus constraint derivation."""

from __future__ import annotations

from workout_engine.models.enums import FocusArea
from workout_engine.selection.focus import get_focus_constraint


class TestGetFocusConstraint:
    def test_body_part(self) -> None:
        constraint = get_focus_constraint(FocusArea.CHEST)
        assert constraint.focus == FocusArea.CHEST
        assert constraint.primary_muscles == ("chest",)
        assert constraint.accessory_muscles == ("triceps", "shoulders")
        assert constraint.min_primary_set_ratio == 0.75

    def test_region_and_mode_focuses_have_none(self) -> None:
        for focus in (FocusArea.UPPER, FocusArea.LOWER, FocusArea.FULL_BODY,
                      FocusArea.CORE, FocusArea.CARDIO, FocusArea.MOBILITY):
            assert get_focus_constraint(focus) is None

    def test_excluded_accessories(self) -> None:
        constraint = get_focus_constraint(FocusArea.CHEST, excluded_accessory_muscles=["Shoulders"])
        assert constraint.accessory_muscles == ("triceps",)

    def test_accessories_never_repeat_primary(self) -> None:
        # arms lists shoulders as a primary muscle and has no accessories
        constraint = get_focus_constraint(FocusArea.ARMS)
        assert "shoulders" in constraint.primary_muscles
        assert constraint.accessory_muscles == ()

    def test_custom_ratio(self) -> None:
        assert get_focus_constraint(FocusArea.LEGS, min_ratio=0.6).min_primary_set_ratio == 0.6
