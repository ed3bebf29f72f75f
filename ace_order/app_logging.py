"""Logging configuration helpers."""

from __future__ import annotations

import logging
from pathlib import Path

from ace_order.config import resolve_debug_log_path


def configure_logging(path: str | Path | None = None, level: int = logging.DEBUG) -> None:
    """Send ``ace_order`` logs to the debug log file.

    The terminal belongs to the Textual UI, so nothing is written to stderr.
    Calling this again is a no-op.
    """
    logger = logging.getLogger("ace_order")
    logger.setLevel(level)
    if logger.handlers:
        return

    log_path = Path(path or resolve_debug_log_path())
    log_path.parent.mkdir(parents=True, exist_ok=True)
    handler = logging.FileHandler(log_path, encoding="utf-8")
    handler.setFormatter(logging.Formatter("%(asctime)s %(levelname)s %(name)s: %(message)s"))
    logger.addHandler(handler)
    logger.propagate = False
