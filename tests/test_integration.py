"""End-to-end: catalog JSON → WorkoutEngine → JSON export.

Covers a single session, a multi-focus session and a full week built from
the same catalog file, checking the properties every output must hold.
"""

from __future__ import annotations

import json

from workout_engine.catalog import load_catalog
from workout_engine.engine import WorkoutEngine
from workout_engine.math.time_estimator import estimate_exercise_minutes
from workout_engine.models.enums import ExerciseSource, FocusArea, Goal
from workout_engine.serialization import result_to_dict, to_json_string


class TestEndToEndIntegration:
    def test_home_upper_session(self, catalog_file) -> None:
        """Home user with dumbbells and bands gets a fully loaded upper session."""
        catalog = load_catalog(catalog_file)
        request = {
            "intent": {"body_parts": ["upper"]},
            "experience_level": "beginner",
            "equipment": {"preset": "home_minimal"},
            "time": {"minutes_per_session": 30},
        }
        session = WorkoutEngine().build_session(catalog, request, seed="home")

        assert session.error is None
        assert session.focus == FocusArea.UPPER
        assert 0 < session.total_minutes <= 38
        names = [item.name for item in session.exercises]
        assert len(names) == len(set(names))
        for item in session.exercises:
            assert item.equipment is not None
            assert item.equipment.kind.value in {"bodyweight", "dumbbell", "band"}
            assert item.estimated_minutes == estimate_exercise_minutes(
                item.exercise, item.prescription, item.equipment, session.goal
            )

    def test_multi_focus_session_exports(self, catalog) -> None:
        session = WorkoutEngine().build_multi_focus_session(
            catalog,
            {"equipment": {"preset": "full_gym"}, "time": {"minutes_per_session": 60}},
            [FocusArea.CHEST, FocusArea.BACK],
            seed="split",
        )
        payload = json.loads(to_json_string(session))
        assert payload["focuses"] == ["chest", "back"]
        assert {item["source"] for item in payload["exercises"]} <= {s.value for s in ExerciseSource}
        assert payload["total_sets"] == sum(item["sets"] for item in payload["exercises"])

    def test_full_week(self, catalog_file) -> None:
        """A four-day hypertrophy week rotates focuses and serializes cleanly."""
        catalog = load_catalog(catalog_file)
        result = WorkoutEngine().generate_plan(catalog, {
            "intent": {"mode": "style", "style": "hypertrophy"},
            "goals": {"primary": "hypertrophy"},
            "preferences": {"focus_areas": []},
            "equipment": {"preset": "full_gym"},
            "schedule": {"days_available": [0, 1, 3, 5]},
            "time": {"minutes_per_session": 50},
        })
        plan = result.plan
        assert plan is not None
        assert [day.focus for day in plan.schedule] == [
            FocusArea.UPPER, FocusArea.LOWER, FocusArea.FULL_BODY, FocusArea.UPPER,
        ]
        assert all(day.style == Goal.HYPERTROPHY for day in plan.schedule)
        assert plan.summary.total_minutes == 200
        assert plan.summary.impact.score > 0

        payload = result_to_dict(result)
        assert payload["plan"]["summary"]["focus_distribution"]["upper"] == 2
        assert json.loads(json.dumps(payload)) == payload
