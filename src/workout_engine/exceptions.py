"""Exception hierarchy for the workout engine.

Expected conditions (validation failures, infeasible focus constraints,
missing loads) are reported as values, never raised. These exceptions cover
malformed data handed to the engine by its collaborators.
"""

from __future__ import annotations


class WorkoutEngineError(Exception):
    """Base exception for all workout_engine errors."""


class CatalogError(WorkoutEngineError):
    """A catalog row could not be turned into an Exercise."""

    def __init__(self, message: str, row_index: int | None = None) -> None:
        if row_index is not None:
            message = f"catalog row {row_index}: {message}"
        super().__init__(message)
        self.row_index = row_index


class InvalidPlanInputError(WorkoutEngineError):
    """A partial plan input has the wrong shape or an unknown enum value."""


class ConfigError(WorkoutEngineError):
    """An environment setting could not be parsed."""
