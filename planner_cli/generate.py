"""Plan generator — builds sessions, plans or templates from JSON files.

Usage:
    python -m planner_cli.generate --catalog catalog.json --mode session
    python -m planner_cli.generate --catalog catalog.json --input request.json --mode plan
    python -m planner_cli.generate --catalog catalog.json --mode multi --focus chest back
"""

from __future__ import annotations

import argparse
import json
import logging
import sys
from pathlib import Path
from typing import Any, Sequence

from workout_engine.catalog import load_catalog
from workout_engine.config import load_settings
from workout_engine.engine import WorkoutEngine
from workout_engine.exceptions import CatalogError, ConfigError, InvalidPlanInputError
from workout_engine.models.enums import FocusArea
from workout_engine.models.plan import PlanResult, TemplateResult
from workout_engine.planning.normalizer import normalize_history
from workout_engine.serialization import to_json_string

from planner_cli.config import CATALOG_PATH, LOG_LEVEL, OUTPUT_INDENT

logging.basicConfig(
    level=getattr(logging, LOG_LEVEL, logging.INFO),
    format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
)
logger = logging.getLogger(__name__)

EXIT_OK = 0
EXIT_CATALOG_ERROR = 1
EXIT_INVALID_INPUT = 2

MODES = ("session", "multi", "plan", "template")


def _load_json(path: Path) -> Any:
    with open(path) as f:
        return json.load(f)


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Generate workout sessions and weekly plans")
    parser.add_argument(
        "--catalog",
        type=Path,
        default=CATALOG_PATH,
        help="Exercise catalog JSON file (default: $WORKOUT_CATALOG_PATH)",
    )
    parser.add_argument("--input", type=Path, help="Partial plan input JSON file")
    parser.add_argument("--mode", choices=MODES, default="session", help="What to generate")
    parser.add_argument(
        "--focus",
        nargs="+",
        choices=[focus.value for focus in FocusArea],
        help="Focus area(s) for session and multi modes",
    )
    parser.add_argument("--seed", help="Seed for reproducible output")
    parser.add_argument("--history", type=Path, help="Recent-history JSON file")
    parser.add_argument("--indent", type=int, default=OUTPUT_INDENT, help="JSON indent")
    return parser


def _errors_of(result: Any) -> list[str]:
    if isinstance(result, list):
        return result
    if isinstance(result, (PlanResult, TemplateResult)):
        return list(result.errors)
    return []


def run(args: argparse.Namespace) -> int:
    """Execute one CLI invocation; returns the process exit code."""
    try:
        settings = load_settings()
    except ConfigError as exc:
        logger.error("Invalid settings: %s", exc)
        return EXIT_INVALID_INPUT

    engine = WorkoutEngine(settings)

    if args.mode == "template":
        catalog = []
    else:
        if args.catalog is None:
            logger.error("No catalog given; pass --catalog or set WORKOUT_CATALOG_PATH")
            return EXIT_CATALOG_ERROR
        try:
            catalog = load_catalog(args.catalog)
        except (CatalogError, OSError) as exc:
            logger.error("Failed to load catalog %s: %s", args.catalog, exc)
            return EXIT_CATALOG_ERROR

    try:
        partial_input = _load_json(args.input) if args.input else None
        history = normalize_history(_load_json(args.history)) if args.history else None
    except (OSError, json.JSONDecodeError, InvalidPlanInputError) as exc:
        print(f"error: {exc}", file=sys.stderr)
        return EXIT_INVALID_INPUT

    focuses = [FocusArea(value) for value in args.focus] if args.focus else None

    if args.mode == "session":
        result = engine.build_session(
            catalog, partial_input, focuses[0] if focuses else None,
            history=history, seed=args.seed,
        )
    elif args.mode == "multi":
        result = engine.build_multi_focus_session(
            catalog, partial_input, focuses, history=history, seed=args.seed,
        )
    elif args.mode == "plan":
        result = engine.generate_plan(catalog, partial_input, history=history)
    else:
        result = engine.build_workout_template(partial_input)

    errors = _errors_of(result)
    if errors:
        for message in errors:
            print(f"error: {message}", file=sys.stderr)
        return EXIT_INVALID_INPUT

    print(to_json_string(result, indent=args.indent))
    return EXIT_OK


def main(argv: Sequence[str] | None = None) -> int:
    args = _build_parser().parse_args(argv)
    return run(args)


if __name__ == "__main__":
    sys.exit(main())
