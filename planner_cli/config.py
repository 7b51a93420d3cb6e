"""Environment-variable-based configuration for the plan generator CLI."""

from __future__ import annotations

import os
from pathlib import Path

CATALOG_PATH: Path | None = (
    Path(os.environ["WORKOUT_CATALOG_PATH"]).expanduser()
    if os.environ.get("WORKOUT_CATALOG_PATH")
    else None
)
LOG_LEVEL: str = os.environ.get("WORKOUT_LOG_LEVEL", "INFO").upper()
OUTPUT_INDENT: int = int(os.environ.get("WORKOUT_OUTPUT_INDENT", "2"))
