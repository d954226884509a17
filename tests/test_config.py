"""Tests for the Config system."""

from __future__ import annotations

import json
from pathlib import Path

import pytest

from tardis.config import CONFIG_DIR_ENV, Config, get_config, reset_config


@pytest.fixture(autouse=True)
def _clean_config():
    reset_config()
    yield
    reset_config()


@pytest.fixture
def config(tmp_path: Path) -> Config:
    return Config(config_dir=tmp_path)


def _write(config_dir: Path, data) -> None:
    (config_dir / "config.json").write_text(json.dumps(data), encoding="utf-8")


class TestConfig:
    def test_default_values(self, config: Config) -> None:
        assert config.history_path is None
        assert config.scan_depth == 3
        assert config.metadata_filename == "entries.json"
        assert config.log_level == "WARNING"
        assert config.log_dir is None

    def test_user_values_merged(self, tmp_path: Path) -> None:
        _write(tmp_path, {"history_path": "/store", "log_level": "debug"})
        config = Config(config_dir=tmp_path)
        assert config.history_path == Path("/store")
        assert config.log_level == "DEBUG"
        assert config.scan_depth == 3

    @pytest.mark.parametrize(
        "key, value",
        [
            ("scan_depth", "deep"),
            ("scan_depth", 0),
            ("scan_depth", True),
            ("history_path", 5),
            ("log_dir", ["logs"]),
            ("log_level", "LOUD"),
        ],
    )
    def test_invalid_value_keeps_default(self, tmp_path: Path, key: str, value) -> None:
        _write(tmp_path, {key: value})
        config = Config(config_dir=tmp_path)
        assert config.scan_depth == 3
        assert config.history_path is None
        assert config.log_dir is None
        assert config.log_level == "WARNING"

    def test_unknown_key_ignored(self, tmp_path: Path) -> None:
        _write(tmp_path, {"extra": {"nested": 5}, "scan_depth": 2})
        config = Config(config_dir=tmp_path)
        assert config.scan_depth == 2

    def test_malformed_file_uses_defaults(self, tmp_path: Path) -> None:
        (tmp_path / "config.json").write_text("{oops", encoding="utf-8")
        config = Config(config_dir=tmp_path)
        assert config.scan_depth == 3

    def test_non_object_uses_defaults(self, tmp_path: Path) -> None:
        _write(tmp_path, [1, 2, 3])
        config = Config(config_dir=tmp_path)
        assert config.history_path is None

    def test_never_written(self, config: Config, tmp_path: Path) -> None:
        assert not (tmp_path / "config.json").exists()


class TestGlobalConfig:
    def test_env_dir_and_singleton(self, tmp_path: Path, monkeypatch) -> None:
        monkeypatch.setenv(CONFIG_DIR_ENV, str(tmp_path))
        first = get_config()
        assert first.config_dir == tmp_path
        assert get_config() is first
