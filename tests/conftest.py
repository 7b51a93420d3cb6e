"""Shared test fixtures: a representative catalog, inventories and input factories."""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any, Callable

import pytest

from workout_engine.catalog.loader import catalog_from_rows
from workout_engine.models.enums import BandTier, EquipmentPreset
from workout_engine.models.equipment import (
    EQUIPMENT_PRESETS,
    EquipmentInventory,
    bodyweight_only_inventory,
)
from workout_engine.models.exercise import Exercise
from workout_engine.models.plan_input import PlanInput
from workout_engine.planning.normalizer import normalize_plan_input

BODYWEIGHT = [{"kind": "bodyweight"}]

CATALOG_ROWS: list[dict[str, Any]] = [
    # --- lower ---
    {
        "name": "Barbell Back Squat", "category": "Strength", "focus": "lower",
        "primary_muscle": "quads", "secondary_muscles": ["glutes"], "movement_pattern": "squat",
        "equipment": [{"kind": "barbell"}], "sets": 4, "reps": "5", "rpe": 8,
        "rest_seconds": 150, "load_target": 185, "goal": "strength", "difficulty": "advanced",
    },
    {
        "name": "Barbell Romanian Deadlift", "category": "Strength", "focus": "lower",
        "primary_muscle": "hamstrings", "movement_pattern": "hinge",
        "equipment": [{"kind": "barbell"}], "sets": 4, "reps": "6-8", "rpe": 8,
        "rest_seconds": 120, "load_target": 155, "goal": "strength", "difficulty": "advanced",
    },
    {
        "name": "Barbell Hip Thrust", "category": "Strength", "focus": "lower",
        "primary_muscle": "glutes", "movement_pattern": "bridge",
        "equipment": [{"kind": "barbell", "requires": ["bench_press"]}], "sets": 3,
        "reps": "8-10", "rpe": 8, "rest_seconds": 120, "load_target": 185,
        "goal": "strength", "difficulty": "advanced",
    },
    {
        "name": "Goblet Squat", "category": "Strength", "focus": "lower",
        "primary_muscle": "quads", "movement_pattern": "squat",
        "equipment": [{"kind": "dumbbell"}, {"kind": "kettlebell"}], "sets": 3,
        "reps": "10-12", "rpe": 7, "rest_seconds": 90, "load_target": 40,
        "difficulty": "beginner",
    },
    {
        "name": "Walking Lunge", "category": "Strength", "focus": "lower",
        "primary_muscle": "glutes", "movement_pattern": "lunge",
        "equipment": [{"kind": "dumbbell"}, {"kind": "bodyweight"}], "sets": 3,
        "reps": "10-12", "rpe": 7, "rest_seconds": 90, "load_target": 30,
    },
    {
        "name": "Leg Press", "category": "Strength", "focus": "lower",
        "primary_muscle": "quads", "movement_pattern": "squat",
        "equipment": [{"kind": "machine", "machine_type": "leg_press"}], "sets": 3,
        "reps": "10-12", "rpe": 7, "rest_seconds": 90, "load_target": 250,
        "difficulty": "intermediate",
    },
    {
        "name": "Standing Calf Raise", "category": "Strength", "focus": "lower",
        "primary_muscle": "calves", "movement_pattern": "isolation",
        "equipment": [{"kind": "dumbbell"}, {"kind": "bodyweight"}], "sets": 3,
        "reps": "12-15", "rpe": 7, "rest_seconds": 60, "load_target": 25,
    },
    {
        "name": "Bodyweight Squat", "category": "Strength", "focus": "lower",
        "primary_muscle": "quads", "movement_pattern": "squat", "equipment": BODYWEIGHT,
        "sets": 3, "reps": "15", "rpe": 6, "rest_seconds": 60,
        "goal": "general_fitness", "difficulty": "beginner",
    },
    {
        "name": "Glute Bridge", "category": "Strength", "focus": "lower",
        "primary_muscle": "glutes", "movement_pattern": "bridge", "equipment": BODYWEIGHT,
        "sets": 3, "reps": "12-15", "rpe": 6, "rest_seconds": 60, "difficulty": "beginner",
    },
    {
        "name": "Kettlebell Swing", "category": "Strength", "focus": "lower",
        "primary_muscle": "hamstrings", "movement_pattern": "hinge",
        "equipment": [{"kind": "kettlebell"}], "sets": 3, "reps": "15", "rpe": 7,
        "rest_seconds": 60, "load_target": 35,
    },
    # --- upper ---
    {
        "name": "Barbell Bench Press", "category": "Strength", "focus": "upper",
        "primary_muscle": "chest", "secondary_muscles": ["triceps", "shoulders"],
        "movement_pattern": "push",
        "equipment": [
            {"kind": "barbell", "requires": ["bench_press"]},
            {"kind": "dumbbell", "requires": ["bench_press"]},
        ],
        "sets": 4, "reps": "5", "rpe": 8, "rest_seconds": 150, "load_target": 135,
        "goal": "strength", "difficulty": "intermediate",
    },
    {
        "name": "Push-Up", "category": "Strength", "focus": "upper",
        "primary_muscle": "chest", "movement_pattern": "push", "equipment": BODYWEIGHT,
        "sets": 3, "reps": "10-15", "rpe": 7, "rest_seconds": 60, "difficulty": "beginner",
    },
    {
        "name": "Dumbbell Fly", "category": "Strength", "focus": "upper",
        "primary_muscle": "chest", "movement_pattern": "isolation",
        "equipment": [{"kind": "dumbbell"}], "sets": 3, "reps": "10-12", "rpe": 7,
        "rest_seconds": 60, "load_target": 25,
    },
    {
        "name": "Incline Dumbbell Press", "category": "Strength", "focus": "upper",
        "primary_muscle": "chest", "movement_pattern": "push",
        "equipment": [{"kind": "dumbbell", "requires": ["bench_press"]}], "sets": 3,
        "reps": "8-10", "rpe": 8, "rest_seconds": 90, "load_target": 50,
    },
    {
        "name": "Bent-Over Barbell Row", "category": "Strength", "focus": "upper",
        "primary_muscle": "back", "movement_pattern": "pull",
        "equipment": [{"kind": "barbell"}], "sets": 4, "reps": "6-8", "rpe": 8,
        "rest_seconds": 120, "load_target": 135, "goal": "strength",
    },
    {
        "name": "Pull-Up", "category": "Strength", "focus": "upper",
        "primary_muscle": "back", "movement_pattern": "pull", "equipment": BODYWEIGHT,
        "sets": 3, "reps": "6-10", "rpe": 8, "rest_seconds": 90, "difficulty": "advanced",
    },
    {
        "name": "Single-Arm Dumbbell Row", "category": "Strength", "focus": "upper",
        "primary_muscle": "back", "movement_pattern": "pull",
        "equipment": [{"kind": "dumbbell"}], "sets": 3, "reps": "10-12", "rpe": 7,
        "rest_seconds": 60, "load_target": 45,
    },
    {
        "name": "Lat Pulldown", "category": "Strength", "focus": "upper",
        "primary_muscle": "back", "movement_pattern": "pull",
        "equipment": [{"kind": "machine", "machine_type": "cable"}], "sets": 3,
        "reps": "10-12", "rpe": 7, "rest_seconds": 75, "load_target": 120,
    },
    {
        "name": "Band Pull-Apart", "category": "Strength", "focus": "upper",
        "primary_muscle": "shoulders", "movement_pattern": "isolation",
        "equipment": [{"kind": "band"}], "sets": 3, "reps": "15-20", "rpe": 6,
        "rest_seconds": 45, "load_target": 10,
    },
    {
        "name": "Dumbbell Biceps Curl", "category": "Strength", "focus": "upper",
        "primary_muscle": "biceps", "movement_pattern": "isolation",
        "equipment": [{"kind": "dumbbell"}], "sets": 3, "reps": "10-12", "rpe": 7,
        "rest_seconds": 60, "load_target": 25,
    },
    {
        "name": "Triceps Dip", "category": "Strength", "focus": "upper",
        "primary_muscle": "triceps", "movement_pattern": "push", "equipment": BODYWEIGHT,
        "sets": 3, "reps": "8-12", "rpe": 7, "rest_seconds": 60,
    },
    {
        "name": "Overhead Triceps Extension", "category": "Strength", "focus": "upper",
        "primary_muscle": "triceps", "movement_pattern": "isolation",
        "equipment": [{"kind": "dumbbell"}], "sets": 3, "reps": "10-12", "rpe": 7,
        "rest_seconds": 60, "load_target": 30,
    },
    {
        "name": "Dumbbell Lateral Raise", "category": "Strength", "focus": "upper",
        "primary_muscle": "shoulders", "movement_pattern": "isolation",
        "equipment": [{"kind": "dumbbell"}], "sets": 3, "reps": "12-15", "rpe": 7,
        "rest_seconds": 45, "load_target": 15,
    },
    {
        "name": "Overhead Press", "category": "Strength", "focus": "upper",
        "primary_muscle": "shoulders", "movement_pattern": "push",
        "equipment": [{"kind": "barbell"}, {"kind": "dumbbell"}], "sets": 4,
        "reps": "6-8", "rpe": 8, "rest_seconds": 120, "load_target": 95,
    },
    {
        "name": "Farmer Carry", "category": "Strength", "focus": "upper",
        "primary_muscle": "forearms", "movement_pattern": "carry",
        "equipment": [{"kind": "dumbbell"}, {"kind": "kettlebell"}], "sets": 3,
        "reps": "40 m", "rpe": 7, "rest_seconds": 60, "duration_minutes": 6,
        "load_target": 50,
    },
    # --- core ---
    {
        "name": "Front Plank", "category": "Strength", "focus": "core",
        "primary_muscle": "core", "movement_pattern": "isometric", "equipment": BODYWEIGHT,
        "sets": 3, "reps": "30-45 sec", "rpe": 6, "rest_seconds": 45, "difficulty": "beginner",
    },
    {
        "name": "Side Plank", "category": "Strength", "focus": "core",
        "primary_muscle": "obliques", "movement_pattern": "isometric", "equipment": BODYWEIGHT,
        "sets": 3, "reps": "20-30 sec", "rpe": 6, "rest_seconds": 45,
    },
    {
        "name": "Dead Bug", "category": "Strength", "focus": "core",
        "primary_muscle": "core", "movement_pattern": "anti_extension", "equipment": BODYWEIGHT,
        "sets": 3, "reps": "10-12", "rpe": 6, "rest_seconds": 45, "difficulty": "beginner",
    },
    {
        "name": "Bicycle Crunch", "category": "Strength", "focus": "core",
        "primary_muscle": "abs", "movement_pattern": "flexion", "equipment": BODYWEIGHT,
        "sets": 3, "reps": "15-20", "rpe": 6, "rest_seconds": 45,
    },
    {
        "name": "Hanging Leg Raise", "category": "Strength", "focus": "core",
        "primary_muscle": "abs", "movement_pattern": "flexion", "equipment": BODYWEIGHT,
        "sets": 3, "reps": "8-12", "rpe": 8, "rest_seconds": 60, "difficulty": "advanced",
    },
    # --- cardio ---
    {
        "name": "Treadmill Run", "category": "Cardio", "focus": "cardio",
        "primary_muscle": "full_body", "movement_pattern": "cardio",
        "equipment": [{"kind": "machine", "machine_type": "treadmill"}], "sets": 2,
        "reps": "10 min", "rpe": 6, "rest_seconds": 60, "duration_minutes": 20,
    },
    {
        "name": "Jump Rope Intervals", "category": "Cardio", "focus": "cardio",
        "primary_muscle": "calves", "movement_pattern": "cardio", "equipment": BODYWEIGHT,
        "sets": 4, "reps": "60 sec", "rpe": 7, "rest_seconds": 45,
    },
    {
        "name": "Burpee", "category": "Cardio", "focus": "cardio",
        "primary_muscle": "full_body", "movement_pattern": "cardio", "equipment": BODYWEIGHT,
        "sets": 3, "reps": "10", "rpe": 8, "rest_seconds": 45, "goal": "general_fitness",
    },
    # --- mobility ---
    {
        "name": "Hip Flexor Stretch", "category": "Mobility", "focus": "mobility",
        "primary_muscle": "hip_flexors", "movement_pattern": "stretch", "equipment": BODYWEIGHT,
        "sets": 2, "reps": "45 sec", "rpe": 5, "rest_seconds": 30,
    },
    {
        "name": "Cat-Cow Flow", "category": "Mobility", "focus": "mobility",
        "primary_muscle": "back", "movement_pattern": "flow", "equipment": BODYWEIGHT,
        "sets": 2, "reps": "60 sec", "rpe": 5, "rest_seconds": 30,
    },
    {
        "name": "Supported Bridge", "category": "Mobility", "focus": "mobility",
        "primary_muscle": "glutes", "movement_pattern": "stretch",
        "equipment": [{"kind": "bodyweight", "requires": ["block"]}], "sets": 2,
        "reps": "60 sec", "rpe": 5,
        "rest_seconds": 30,
    },
]


@pytest.fixture
def catalog_rows() -> list[dict[str, Any]]:
    return [dict(row) for row in CATALOG_ROWS]


@pytest.fixture
def catalog(catalog_rows: list[dict[str, Any]]) -> list[Exercise]:
    """The representative catalog, mapped through the catalog loader."""
    return catalog_from_rows(catalog_rows)


@pytest.fixture
def catalog_file(tmp_path: Path, catalog_rows: list[dict[str, Any]]) -> Path:
    path = tmp_path / "catalog.json"
    path.write_text(json.dumps(catalog_rows))
    return path


@pytest.fixture
def by_name(catalog: list[Exercise]) -> Callable[[str], Exercise]:
    """Look up a catalog exercise by name."""
    index = {exercise.name: exercise for exercise in catalog}
    return index.__getitem__


@pytest.fixture
def bodyweight_inventory() -> EquipmentInventory:
    return bodyweight_only_inventory()


@pytest.fixture
def home_inventory() -> EquipmentInventory:
    return EQUIPMENT_PRESETS[EquipmentPreset.HOME_MINIMAL]


@pytest.fixture
def full_gym_inventory() -> EquipmentInventory:
    return EQUIPMENT_PRESETS[EquipmentPreset.FULL_GYM]


@pytest.fixture
def empty_inventory() -> EquipmentInventory:
    return EquipmentInventory()


@pytest.fixture
def make_input() -> Callable[..., PlanInput]:
    """Factory: normalize a partial request with a few shortcut keywords.

    Usage:
        plan_input = make_input(preset="full_gym", experience_level="advanced")
    """

    def _make(
        partial: dict[str, Any] | None = None,
        *,
        preset: str | None = None,
        minutes: int | None = None,
        goal: str | None = None,
        **top_level: Any,
    ) -> PlanInput:
        request: dict[str, Any] = dict(partial or {})
        if preset is not None:
            request.setdefault("equipment", {})["preset"] = preset
        if minutes is not None:
            request.setdefault("time", {})["minutes_per_session"] = minutes
        if goal is not None:
            request.setdefault("goals", {})["primary"] = goal
        request.update(top_level)
        return normalize_plan_input(request)

    return _make


@pytest.fixture
def band_inventory() -> EquipmentInventory:
    return EquipmentInventory(bands=(BandTier.LIGHT, BandTier.MEDIUM))
