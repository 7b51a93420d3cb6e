"""Session scheduling: single-focus builder and multi-focus merger."""

from workout_engine.session_builder.builder import SessionBuilder, default_seed
from workout_engine.session_builder.merger import SessionMerger, interleave_exercises
from workout_engine.session_builder.ordering import reorder_for_variety

__all__ = [
    "SessionBuilder",
    "SessionMerger",
    "default_seed",
    "interleave_exercises",
    "reorder_for_variety",
]
