"""JSON export for sessions, plans and templates.

Converts engine results into plain dicts of JSON-safe values (enum members
become their wire strings) so callers can store or send them unchanged.

All functions are pure (no I/O).
"""

from __future__ import annotations

import dataclasses
import json
from enum import Enum
from typing import Any

from workout_engine.models.exercise import ExerciseLoad, ScheduledExercise
from workout_engine.models.plan import (
    GeneratedPlan,
    PlanDay,
    PlanResult,
    TemplateResult,
    WorkoutTemplateDraft,
)
from workout_engine.models.plan_input import PlanInput
from workout_engine.models.session import SessionResult, WorkoutImpact


def session_to_dict(session: SessionResult) -> dict:
    """Convert a SessionResult to a JSON-safe dict."""
    return {
        "focus": session.focus.value,
        "focuses": [focus.value for focus in session.focuses],
        "goal": session.goal.value,
        "duration_minutes": session.duration_minutes,
        "total_minutes": session.total_minutes,
        "total_sets": session.total_sets,
        "primary_set_ratio": (
            None if session.primary_set_ratio is None else round(session.primary_set_ratio, 3)
        ),
        "warnings": [warning.value for warning in session.warnings],
        "error": session.error.value if session.error is not None else None,
        "exercises": [_convert_exercise(item) for item in session.exercises],
    }


def plan_to_dict(plan: GeneratedPlan) -> dict:
    """Convert a GeneratedPlan to a JSON-safe dict."""
    summary = plan.summary
    return {
        "title": plan.title,
        "description": plan.description,
        "goal": plan.goal.value,
        "level": plan.level.value,
        "tags": list(plan.tags),
        "schedule": [_convert_day(day) for day in plan.schedule],
        "inputs": plan_input_to_dict(plan.inputs),
        "summary": {
            "sessions_per_week": summary.sessions_per_week,
            "total_minutes": summary.total_minutes,
            "focus_distribution": {
                focus.value: count for focus, count in summary.focus_distribution.items()
            },
            "impact": _convert_impact(summary.impact),
        },
    }


def template_to_dict(template: WorkoutTemplateDraft) -> dict:
    """Convert a WorkoutTemplateDraft to a JSON-safe dict."""
    return {
        "title": template.title,
        "description": template.description,
        "focus": template.focus.value,
        "style": template.style.value,
        "inputs": plan_input_to_dict(template.inputs),
    }


def plan_input_to_dict(plan_input: PlanInput) -> dict:
    """Convert a PlanInput back to the snake_case request shape."""
    return _jsonable(dataclasses.asdict(plan_input))


def result_to_dict(result: SessionResult | PlanResult | TemplateResult | list[str]) -> dict:
    """Convert any engine entry-point result, errors included."""
    if isinstance(result, list):
        return {"errors": list(result)}
    if isinstance(result, SessionResult):
        return session_to_dict(result)
    if isinstance(result, PlanResult):
        return {
            "plan": plan_to_dict(result.plan) if result.plan is not None else None,
            "errors": list(result.errors),
        }
    if isinstance(result, TemplateResult):
        return {
            "template": template_to_dict(result.template) if result.template is not None else None,
            "errors": list(result.errors),
        }
    raise TypeError(f"cannot serialize {type(result).__name__}")


def to_json_string(result: Any, indent: int = 2) -> str:
    """Serialize an engine result (or a dict already converted) to JSON."""
    payload = result if isinstance(result, dict) else result_to_dict(result)
    return json.dumps(payload, indent=indent)


# ---------------------------------------------------------------------------
# Internal helpers
# ---------------------------------------------------------------------------


def _convert_exercise(item: ScheduledExercise) -> dict:
    """Flatten catalog fields and the resolved prescription into one dict."""
    exercise = item.exercise
    return {
        "name": exercise.name,
        "category": exercise.category.value,
        "focus": exercise.focus.value if exercise.focus is not None else None,
        "primary_muscle": exercise.primary_muscle,
        "secondary_muscles": list(exercise.secondary_muscles),
        "movement_pattern": exercise.movement_pattern,
        "equipment": item.equipment.kind.value if item.equipment is not None else None,
        "sets": item.sets,
        "reps": item.reps,
        "rpe": item.rpe,
        "rest_seconds": item.rest_seconds,
        "load": _convert_load(item.load),
        "estimated_minutes": item.estimated_minutes,
        "source": item.source.value,
    }


def _convert_load(load: ExerciseLoad | None) -> dict | None:
    if load is None:
        return None
    return {"value": load.value, "unit": load.unit, "label": load.label}


def _convert_impact(impact: WorkoutImpact) -> dict:
    return {
        "score": impact.score,
        "breakdown": {
            "volume": impact.breakdown.volume,
            "intensity": impact.breakdown.intensity,
            "density": impact.breakdown.density,
        },
    }


def _convert_day(day: PlanDay) -> dict:
    result = {
        "order": day.order,
        "name": day.name,
        "focus": day.focus.value,
        "style": day.style.value,
        "duration_minutes": day.duration_minutes,
        "rationale": day.rationale,
        "exercises": [_convert_exercise(item) for item in day.exercises],
    }
    if day.session is not None:
        result["warnings"] = [warning.value for warning in day.session.warnings]
        result["error"] = day.session.error.value if day.session.error is not None else None
    return result


def _jsonable(value: Any) -> Any:
    if isinstance(value, Enum):
        return value.value
    if isinstance(value, dict):
        return {_jsonable(key): _jsonable(item) for key, item in value.items()}
    if isinstance(value, (list, tuple)):
        return [_jsonable(item) for item in value]
    return value
