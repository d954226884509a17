"""Loguru-based logging setup for the command line."""

from __future__ import annotations

import sys
from pathlib import Path

from loguru import logger

_CONSOLE_FORMAT = "<green>{time:HH:mm:ss}</green> | <level>{level:<7}</level> | {message}"
_DEBUG_FORMAT = "<green>{time:HH:mm:ss}</green> | <level>{level:<7}</level> | <cyan>{name}:{line}</cyan> | {message}"


def setup_logger(level: str = "WARNING", log_dir: Path | None = None) -> None:
    """
    Route diagnostics to stderr at *level*, keeping stdout for listings.

    Debug and trace levels also show the emitting module. When *log_dir*
    is given, a rotating debug log is written there as well.
    """
    logger.remove()

    # Console; colors only when stderr is a terminal
    logger.add(
        sys.stderr,
        level=level,
        format=_DEBUG_FORMAT if level in ("TRACE", "DEBUG") else _CONSOLE_FORMAT,
        colorize=None,
        backtrace=False,
        diagnose=False,
    )

    # File
    if not log_dir:
        return
    try:
        log_dir.mkdir(parents=True, exist_ok=True)
    except OSError as e:
        logger.warning(f"File logging disabled, cannot create {log_dir}: {e}")
        return
    logger.add(
        str(log_dir / "code-tardis.log"),
        level="DEBUG",
        format="{time:YYYY-MM-DD HH:mm:ss} | {level:<7} | {name}:{line} | {message}",
        rotation="5 MB",
        retention="7 days",
        encoding="utf-8",
    )
