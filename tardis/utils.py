"""Shared utility functions."""

from __future__ import annotations

import os
from datetime import datetime, timezone
from pathlib import Path


def format_timestamp(ts: datetime) -> str:
    """RFC 3339 UTC string with millisecond precision, e.g. ``2025-06-27T14:30:00.123Z``."""
    return ts.astimezone(timezone.utc).isoformat(timespec="milliseconds").replace("+00:00", "Z")


def to_absolute(path: str | Path, base: Path) -> Path:
    """Absolute, lexically normalized form of *path*, relative paths taken from *base*."""
    path = Path(path).expanduser()
    if not path.is_absolute():
        path = base / path
    return Path(os.path.normpath(path))
