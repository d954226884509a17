"""Tests for invocation context wiring."""

from __future__ import annotations

from pathlib import Path
from unittest.mock import MagicMock, patch

import pytest

from tardis.context import create_context
from tardis.errors import ConfigError


@pytest.fixture
def config() -> MagicMock:
    """Mock Config with default values."""
    config = MagicMock()
    config.history_path = None
    config.scan_depth = 3
    config.metadata_filename = "entries.json"
    return config


class TestCreateContext:
    def test_work_dir_canonical(self, config: MagicMock, tmp_path: Path) -> None:
        (tmp_path / "proj").mkdir()
        ctx = create_context(config, tmp_path / "proj" / ".." / "proj", tmp_path)
        assert ctx.work_dir == (tmp_path / "proj").resolve()

    def test_cli_history_dir_wins(self, config: MagicMock, tmp_path: Path) -> None:
        config.history_path = Path("/from/config")
        ctx = create_context(config, tmp_path, tmp_path / "cli")
        assert ctx.history_root == tmp_path / "cli"

    def test_config_history_path(self, config: MagicMock, tmp_path: Path) -> None:
        config.history_path = Path("/from/config")
        ctx = create_context(config, tmp_path)
        assert ctx.history_root == Path("/from/config")

    def test_platform_default(self, config: MagicMock, tmp_path: Path) -> None:
        with patch("tardis.context.default_history_root", return_value=Path("/auto")):
            ctx = create_context(config, tmp_path)
        assert ctx.history_root == Path("/auto")

    def test_missing_home(self, config: MagicMock, tmp_path: Path) -> None:
        with patch.object(Path, "home", side_effect=RuntimeError("no home")):
            with pytest.raises(ConfigError):
                create_context(config, tmp_path)
