"""Path helpers — platform history location, URI decoding and containment."""

from __future__ import annotations

import os
import platform
from collections.abc import Mapping
from pathlib import Path
from urllib.parse import SplitResult
from urllib.request import url2pathname

from tardis.errors import ConfigError

# Location of the editor's local history store, relative to its base directory
_HISTORY_SUBPATH = Path("Code") / "User" / "History"


def home_dir() -> Path:
    """Return the user's home directory or raise ConfigError."""
    try:
        return Path.home()
    except (RuntimeError, KeyError) as e:
        raise ConfigError(f"Could not find home directory: {e}") from e


def default_history_root(
    home: Path | None = None,
    system: str | None = None,
    environ: Mapping[str, str] | None = None,
) -> Path:
    """Platform-specific local history directory."""
    home = home if home is not None else home_dir()
    system = system or platform.system()
    environ = environ if environ is not None else os.environ

    if system == "Darwin":
        return home / "Library" / "Application Support" / _HISTORY_SUBPATH
    if system == "Windows":
        appdata = environ.get("APPDATA")
        base = Path(appdata) if appdata else home / "AppData" / "Roaming"
        return base / _HISTORY_SUBPATH
    return home / ".config" / _HISTORY_SUBPATH


def canonicalize_dir(path: str | Path) -> Path:
    """Absolute, symlink-resolved form of an existing directory."""
    try:
        return Path(path).expanduser().resolve(strict=True)
    except OSError as e:
        raise ConfigError(f"Could not find working directory {path}: {e}") from e


def uri_to_path(resource: SplitResult) -> Path:
    """
    Decode the path component of a ``file`` URI.

    Percent-escapes are decoded and ``.``/``..`` segments are collapsed
    lexically; symlinks are left alone.
    """
    raw = url2pathname(resource.path)
    if resource.netloc and resource.netloc != "localhost":
        raw = f"//{resource.netloc}{raw}"
    return Path(os.path.normpath(raw)) if raw else Path()


def is_within(path: Path, directory: Path) -> bool:
    """True if *path* is *directory* or lies below it (component-wise)."""
    return path.is_absolute() and path.is_relative_to(directory)
