# Flagwise Options Parser — (c) 2025 rtj.dev LLC — MIT Licensed
"""utils.py"""
from __future__ import annotations

import logging
import os
import shutil
import sys

import pythonjsonlogger.json
from rich.logging import RichHandler

LOG_FORMAT = "%(asctime)s %(name)s %(levelname)s %(message)s"


def get_program_invocation() -> str:
    """How the user started flagwise, for use in hints such as `flagwise --config`."""
    script = sys.argv[0] if sys.argv else ""
    if os.path.basename(script) == "__main__.py":
        return "python -m flagwise"
    if shutil.which(script):
        return os.path.basename(script)
    return script or "flagwise"


def setup_logging(
    mode: str | None = None,
    console_log_level: int = logging.WARNING,
) -> None:
    """
    Route log records to the console, either through Rich or as JSON lines.

    Args:
        mode (str | None): "cli" for Rich output or "json" for one JSON object
            per record. Falls back to `FLAGWISE_LOG_MODE`, then "cli".
        console_log_level (int): Threshold for the console handler.

    Raises:
        ValueError: If `mode` is not "cli" or "json".
    """
    mode = mode or os.getenv("FLAGWISE_LOG_MODE") or "cli"

    if mode == "cli":
        handler: logging.Handler = RichHandler(
            rich_tracebacks=True,
            show_path=False,
            markup=False,
            log_time_format="[%Y-%m-%d %H:%M:%S]",
        )
    elif mode == "json":
        handler = logging.StreamHandler()
        handler.setFormatter(pythonjsonlogger.json.JsonFormatter(LOG_FORMAT))
    else:
        raise ValueError(f"Invalid log mode: {mode}")
    handler.setLevel(console_log_level)

    root = logging.getLogger()
    root.setLevel(logging.DEBUG)
    root.handlers.clear()
    root.addHandler(handler)

    logging.getLogger("flagwise").debug("Logging initialized in '%s' mode.", mode)
