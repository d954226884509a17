"""Application configuration — optional JSON file validated over defaults."""

from __future__ import annotations

import json
import os
from pathlib import Path
from typing import Any

from loguru import logger

from tardis.core.path_resolver import home_dir

_instance: "Config | None" = None

CONFIG_DIR_ENV = "CODE_TARDIS_CONFIG_DIR"

LOG_LEVELS = ("TRACE", "DEBUG", "INFO", "SUCCESS", "WARNING", "ERROR", "CRITICAL")


def get_config() -> Config:
    """Module-level factory — single global Config instance."""
    global _instance
    if _instance is None:
        _instance = Config()
    return _instance


def reset_config() -> None:
    """Reset the global config instance (for testing)."""
    global _instance
    _instance = None


def default_config_dir() -> Path:
    env = os.environ.get(CONFIG_DIR_ENV)
    if env:
        return Path(env).expanduser()
    return home_dir() / ".config" / "code-tardis"


class Config:
    """Read-only JSON configuration."""

    _DEFAULTS: dict[str, Any] = {
        "history_path": "",
        "scan_depth": 3,
        "metadata_filename": "entries.json",
        "log_level": "WARNING",
        "log_dir": "",
    }

    def __init__(self, config_dir: Path | None = None) -> None:
        self._data: dict[str, Any] = {}
        self._dir = config_dir or default_config_dir()
        self._path = self._dir / "config.json"
        self._load()

    def _load(self) -> None:
        """Load config from disk; invalid values keep their defaults."""
        self._data = dict(self._DEFAULTS)
        if not self._path.exists():
            return
        try:
            with open(self._path, encoding="utf-8") as f:
                user_data = json.load(f)
        except (json.JSONDecodeError, OSError) as e:
            logger.warning(f"Failed to load config, using defaults: {e}")
            return
        if not isinstance(user_data, dict):
            logger.warning(f"Ignoring config {self._path}: expected a JSON object")
            return

        for key, value in user_data.items():
            if key not in self._DEFAULTS:
                logger.warning(f"Ignoring unknown config key '{key}'")
            elif not self._is_valid(key, value):
                logger.warning(
                    f"Invalid config value {key}={value!r}, using default {self._DEFAULTS[key]!r}"
                )
            else:
                self._data[key] = value

    def _is_valid(self, key: str, value: Any) -> bool:
        default = self._DEFAULTS[key]
        if isinstance(value, bool) or not isinstance(value, type(default)):
            return False
        if key == "scan_depth":
            return value >= 1
        if key == "log_level":
            return value.upper() in LOG_LEVELS
        return True

    # ── Typed properties ──

    @property
    def config_dir(self) -> Path:
        return self._dir

    @property
    def history_path(self) -> Path | None:
        raw = self._data["history_path"]
        return Path(raw).expanduser() if raw else None

    @property
    def scan_depth(self) -> int:
        return self._data["scan_depth"]

    @property
    def metadata_filename(self) -> str:
        return self._data["metadata_filename"] or "entries.json"

    @property
    def log_level(self) -> str:
        return self._data["log_level"].upper()

    @property
    def log_dir(self) -> Path | None:
        raw = self._data["log_dir"]
        return Path(raw).expanduser() if raw else None
