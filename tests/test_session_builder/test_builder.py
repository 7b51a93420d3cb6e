"""Tests for single-focus session building: invariants and reference scenarios."""

from __future__ import annotations

import pytest

from workout_engine.catalog.loader import catalog_from_rows
from workout_engine.math.time_estimator import setup_minutes
from workout_engine.math.volume import exercise_caps
from workout_engine.models.enums import (
    EquipmentKind,
    ExerciseSource,
    FocusArea,
    Goal,
    SessionWarning,
)
from workout_engine.models.equipment import EquipmentInventory
from workout_engine.models.plan_input import EquipmentSelection, PlanInput
from workout_engine.models.session import SessionHistory
from workout_engine.selection.catalog_filter import is_option_available
from workout_engine.selection.movement import matches_primary_muscle, normalize_exercise_key
from workout_engine.serialization import session_to_dict
from workout_engine.session_builder.builder import SessionBuilder, default_seed, time_budget_warning


@pytest.fixture
def builder():
    return SessionBuilder()


@pytest.fixture
def legs_input(make_input):
    return make_input(preset="full_gym", minutes=90, experience_level="advanced", goal="strength")


@pytest.fixture
def legs_session(builder, catalog, legs_input):
    return builder.build(catalog, FocusArea.LEGS, 90, legs_input)


def _primary_ratio(session, muscles):
    total = sum(item.sets for item in session.exercises)
    primary = sum(
        item.sets for item in session.exercises if matches_primary_muscle(item.exercise, muscles)
    )
    return primary / total


class TestDefaultSeed:
    def test_format(self) -> None:
        assert default_seed(Goal.STRENGTH, 45) == "strength-45"


class TestTimeBudgetWarning:
    @pytest.mark.parametrize(
        "total, expected",
        [
            (45.0, None),
            (37.0, None),
            (53.0, None),
            (36.9, SessionWarning.TIME_BUDGET_UNDERFILLED),
            (53.04, None),
            (53.1, SessionWarning.TIME_BUDGET_EXCEEDED),
        ],
    )
    def test_window(self, total, expected) -> None:
        assert time_budget_warning(total, 45) == expected


# =============================================================================
# Invariants
# =============================================================================


class TestInvariants:
    def test_deterministic(self, builder, catalog, legs_input) -> None:
        first = builder.build(catalog, FocusArea.LEGS, 90, legs_input, seed="fixed")
        second = builder.build(catalog, FocusArea.LEGS, 90, legs_input, seed="fixed")
        assert session_to_dict(first) == session_to_dict(second)

    def test_default_seed_is_deterministic(self, builder, catalog, make_input) -> None:
        plan_input = make_input(preset="home_minimal")
        first = builder.build(catalog, FocusArea.FULL_BODY, 45, plan_input)
        second = builder.build(catalog, FocusArea.FULL_BODY, 45, plan_input)
        assert [e.name for e in first.exercises] == [e.name for e in second.exercises]

    def test_no_duplicate_names(self, legs_session) -> None:
        keys = [normalize_exercise_key(item.name) for item in legs_session.exercises]
        assert len(keys) == len(set(keys))

    def test_time_budget(self, legs_session) -> None:
        assert abs(legs_session.total_minutes - 90) <= 8

    def test_primary_ratio(self, builder, catalog, make_input) -> None:
        session = builder.build(catalog, FocusArea.CHEST, 45, make_input(preset="full_gym"))
        assert session.exercises
        if SessionWarning.FOCUS_CONSTRAINTS_RELAXED not in session.warnings:
            assert _primary_ratio(session, ["chest"]) >= 0.75
            assert session.primary_set_ratio >= 0.75

    def test_equipment_satisfiable(self, builder, catalog, make_input, home_inventory) -> None:
        session = builder.build(catalog, FocusArea.UPPER, 45, make_input(preset="home_minimal"))
        assert session.exercises
        for item in session.exercises:
            assert is_option_available(home_inventory, item.equipment)

    def test_exercise_count_within_caps(self, builder, catalog, make_input) -> None:
        plan_input = make_input(preset="full_gym")
        session = builder.build(catalog, FocusArea.FULL_BODY, 60, plan_input)
        _, high = exercise_caps(60, Goal.STRENGTH)
        assert 1 <= len(session.exercises) <= high

    def test_duration_clamped(self, builder, catalog, make_input) -> None:
        session = builder.build(catalog, FocusArea.CORE, 5, make_input())
        assert session.duration_minutes == 20

    def test_catalog_not_mutated(self, builder, catalog, legs_input) -> None:
        before = list(catalog)
        builder.build(catalog, FocusArea.LEGS, 90, legs_input)
        assert catalog == before


# =============================================================================
# Reference scenarios
# =============================================================================


class TestMinimalTime:
    def test_twenty_minute_bodyweight_core(self, builder, catalog, make_input) -> None:
        plan_input = make_input(experience_level="beginner")
        session = builder.build(catalog, FocusArea.CORE, 20, plan_input)
        assert 2 <= len(session.exercises) <= 3
        assert all(setup_minutes(item.equipment) <= 1 for item in session.exercises)
        assert 12 <= session.total_minutes <= 28
        assert session.error is None


class TestHighVolumeStrength:
    def test_barbell_present(self, legs_session) -> None:
        assert any(item.equipment.kind == EquipmentKind.BARBELL for item in legs_session.exercises)

    def test_primary_ratio(self, legs_session) -> None:
        assert legs_session.primary_set_ratio >= 0.75
        assert _primary_ratio(legs_session, ["quads", "hamstrings", "glutes", "calves"]) >= 0.75

    def test_strength_reps(self, legs_session) -> None:
        assert {item.reps for item in legs_session.exercises} <= {"3-6", "4-6"}

    def test_loads_resolved(self, legs_session) -> None:
        barbell = [i for i in legs_session.exercises if i.equipment.kind == EquipmentKind.BARBELL]
        for item in barbell:
            assert item.load is not None
            assert item.load.label.endswith("lb barbell")

    def test_seed_is_primary(self, legs_session) -> None:
        assert any(item.source == ExerciseSource.PRIMARY for item in legs_session.exercises)


class TestEmptyEquipment:
    def test_bodyweight_fallback(self, builder, catalog) -> None:
        plan_input = PlanInput(equipment=EquipmentSelection(inventory=EquipmentInventory()))
        session = builder.build(catalog, FocusArea.FULL_BODY, 45, plan_input)
        assert session.exercises
        assert SessionWarning.EMPTY_EQUIPMENT_INVENTORY in session.warnings
        assert all(item.equipment.kind == EquipmentKind.BODYWEIGHT for item in session.exercises)


class TestUnmetAndRelaxed:
    def test_no_primary_exercises(self, builder, catalog, make_input) -> None:
        # the only biceps exercise needs dumbbells
        session = builder.build(catalog, FocusArea.BICEPS, 45, make_input())
        assert session.exercises == ()
        assert session.error == SessionWarning.FOCUS_CONSTRAINTS_UNMET

    def test_empty_catalog(self, builder, make_input) -> None:
        session = builder.build([], FocusArea.FULL_BODY, 45, make_input())
        assert session.exercises == ()
        assert session.error == SessionWarning.FOCUS_CONSTRAINTS_UNMET

    def test_thin_primary_pool_is_relaxed(self, builder, catalog_rows, make_input) -> None:
        wanted = {"Push-Up", "Triceps Dip", "Overhead Triceps Extension", "Dumbbell Lateral Raise"}
        catalog = catalog_from_rows([row for row in catalog_rows if row["name"] in wanted])
        session = builder.build(catalog, FocusArea.CHEST, 45, make_input(preset="full_gym"))
        assert session.exercises
        assert session.error is None
        assert SessionWarning.FOCUS_CONSTRAINTS_RELAXED in session.warnings


class TestTimeBudget:
    @pytest.mark.parametrize("minutes", [20, 45, 90, 120])
    @pytest.mark.parametrize(
        "focus",
        [
            FocusArea.CHEST,
            FocusArea.BACK,
            FocusArea.LEGS,
            FocusArea.UPPER,
            FocusArea.LOWER,
            FocusArea.CORE,
            FocusArea.FULL_BODY,
            FocusArea.CARDIO,
            FocusArea.MOBILITY,
        ],
    )
    def test_within_budget_or_flagged(self, builder, catalog, make_input, focus, minutes) -> None:
        session = builder.build(catalog, focus, minutes, make_input(preset="full_gym"), seed="sweep")
        if session.error is not None:
            return
        total = session.total_minutes
        if total < minutes - 8:
            assert SessionWarning.TIME_BUDGET_UNDERFILLED in session.warnings
        elif total > minutes + 8:
            assert SessionWarning.TIME_BUDGET_EXCEEDED in session.warnings
        else:
            assert SessionWarning.TIME_BUDGET_UNDERFILLED not in session.warnings
            assert SessionWarning.TIME_BUDGET_EXCEEDED not in session.warnings

    def test_thin_catalog_is_underfilled(self, builder, catalog_rows, make_input) -> None:
        catalog = catalog_from_rows([row for row in catalog_rows if row["name"] == "Front Plank"])
        session = builder.build(catalog, FocusArea.CORE, 60, make_input())
        assert [item.name for item in session.exercises] == ["Front Plank"]
        assert session.total_minutes < 52
        assert SessionWarning.TIME_BUDGET_UNDERFILLED in session.warnings


class TestHistory:
    def test_recent_exercises_avoided(self, builder, catalog, make_input) -> None:
        plan_input = make_input(preset="home_minimal")
        first = builder.build(catalog, FocusArea.UPPER, 20, plan_input, seed="h")
        recent = {item.name for item in first.exercises}
        second = builder.build(
            catalog, FocusArea.UPPER, 20, plan_input, seed="h",
            history=SessionHistory(recent_exercise_names=tuple(recent)),
        )
        assert recent
        assert second.exercises
        assert recent.isdisjoint(item.name for item in second.exercises)

    def test_goal_override(self, builder, catalog, make_input) -> None:
        session = builder.build(
            catalog, FocusArea.LOWER, 45, make_input(preset="full_gym"), goal=Goal.HYPERTROPHY
        )
        assert session.goal == Goal.HYPERTROPHY
        assert all(item.reps == "8-12" for item in session.exercises)
