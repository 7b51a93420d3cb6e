"""Tests for environment-driven engine settings."""

from __future__ import annotations

import pytest

from workout_engine.config import DEFAULT_SETTINGS, EngineSettings, load_settings
from workout_engine.exceptions import ConfigError


class TestLoadSettings:
    def test_defaults(self) -> None:
        assert load_settings({}) == DEFAULT_SETTINGS
        assert DEFAULT_SETTINGS.min_primary_set_ratio == 0.75
        assert DEFAULT_SETTINGS.merge_budget_fraction == 0.8

    def test_overrides(self) -> None:
        settings = load_settings({
            "WORKOUT_MIN_PRIMARY_SET_RATIO": "0.6",
            "WORKOUT_RATIO_MAX_ITERATIONS": "50",
            "WORKOUT_VOLUME_MAX_ITERATIONS": "75",
            "WORKOUT_MERGE_BUDGET_FRACTION": "0.5",
        })
        assert settings == EngineSettings(
            min_primary_set_ratio=0.6,
            ratio_max_iterations=50,
            volume_max_iterations=75,
            merge_budget_fraction=0.5,
        )

    def test_blank_means_default(self) -> None:
        assert load_settings({"WORKOUT_MIN_PRIMARY_SET_RATIO": "  "}) == DEFAULT_SETTINGS

    def test_reads_os_environ(self, monkeypatch) -> None:
        monkeypatch.setenv("WORKOUT_RATIO_MAX_ITERATIONS", "10")
        assert load_settings().ratio_max_iterations == 10

    @pytest.mark.parametrize(
        "environ",
        [
            {"WORKOUT_MIN_PRIMARY_SET_RATIO": "high"},
            {"WORKOUT_MIN_PRIMARY_SET_RATIO": "0"},
            {"WORKOUT_MIN_PRIMARY_SET_RATIO": "1.5"},
            {"WORKOUT_RATIO_MAX_ITERATIONS": "2.5"},
            {"WORKOUT_VOLUME_MAX_ITERATIONS": "0"},
            {"WORKOUT_MERGE_BUDGET_FRACTION": "-0.2"},
        ],
    )
    def test_invalid(self, environ) -> None:
        with pytest.raises(ConfigError):
            load_settings(environ)

    def test_custom_ratio_reaches_builder(self, catalog, make_input) -> None:
        from workout_engine.engine import WorkoutEngine

        engine = WorkoutEngine(load_settings({"WORKOUT_MIN_PRIMARY_SET_RATIO": "0.5"}))
        assert engine.builder.settings.min_primary_set_ratio == 0.5
        session = engine.build_session(catalog, {"equipment": {"preset": "full_gym"}}, seed="cfg")
        assert session.exercises
        assert session.primary_set_ratio is not None
