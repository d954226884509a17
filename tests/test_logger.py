"""Tests for logging setup."""

from __future__ import annotations

from pathlib import Path

import pytest
from loguru import logger

from tardis.logger import setup_logger


@pytest.fixture(autouse=True)
def _reset_sinks():
    yield
    logger.remove()


class TestConsole:
    def test_level_filters_stderr(self, capsys) -> None:
        setup_logger("ERROR")
        logger.warning("quiet please")
        logger.error("loud failure")
        err = capsys.readouterr().err
        assert "quiet please" not in err
        assert "loud failure" in err

    def test_debug_shows_module(self, capsys) -> None:
        setup_logger("DEBUG")
        logger.debug("tracing")
        assert __name__ in capsys.readouterr().err

    def test_stdout_untouched(self, capsys) -> None:
        setup_logger("TRACE")
        logger.info("diagnostic")
        assert capsys.readouterr().out == ""


class TestFileSink:
    def test_writes_debug_log(self, tmp_path: Path) -> None:
        log_dir = tmp_path / "logs"
        setup_logger("ERROR", log_dir)
        logger.debug("written to file only")
        logger.remove()
        assert "written to file only" in (log_dir / "code-tardis.log").read_text(encoding="utf-8")

    def test_uncreatable_dir_disables_file_logging(self, tmp_path: Path, capsys) -> None:
        blocker = tmp_path / "blocker"
        blocker.write_text("not a directory", encoding="utf-8")
        setup_logger("WARNING", blocker / "logs")
        assert "File logging disabled" in capsys.readouterr().err
