"""Prescription adaptation for goal, intensity and experience."""

from workout_engine.prescription.adapter import (
    adapt_prescription,
    adjust_rpe,
    adjust_sets,
    derive_reps,
)

__all__ = ["adapt_prescription", "adjust_rpe", "adjust_sets", "derive_reps"]
