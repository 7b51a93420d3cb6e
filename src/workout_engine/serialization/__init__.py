"""Serialization module — export engine results as JSON."""

from workout_engine.serialization.json_export import (
    plan_input_to_dict,
    plan_to_dict,
    result_to_dict,
    session_to_dict,
    template_to_dict,
    to_json_string,
)

__all__ = [
    "plan_input_to_dict",
    "plan_to_dict",
    "result_to_dict",
    "session_to_dict",
    "template_to_dict",
    "to_json_string",
]
