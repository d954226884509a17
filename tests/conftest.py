"""Shared fixtures — synthetic local history stores on disk."""

from __future__ import annotations

import json
from collections.abc import Callable
from pathlib import Path

import pytest

RecordFactory = Callable[..., Path]


@pytest.fixture
def work_dir(tmp_path: Path) -> Path:
    d = tmp_path / "project"
    d.mkdir()
    return d.resolve()


@pytest.fixture
def history_root(tmp_path: Path) -> Path:
    d = tmp_path / "History"
    d.mkdir()
    return d.resolve()


@pytest.fixture
def make_record(history_root: Path) -> RecordFactory:
    """
    Write ``<history_root>/<name>/entries.json`` plus one snapshot file per entry.

    *entries* is a list of ``(id, timestamp_ms)`` pairs; each snapshot's
    content is ``b"content of <id>"``.
    """

    def _make(
        name: str,
        resource: str,
        entries: list[tuple[str, int]],
        version: int = 1,
    ) -> Path:
        record_dir = history_root / name
        record_dir.mkdir(parents=True)
        meta = {
            "version": version,
            "resource": resource,
            "entries": [{"id": entry_id, "timestamp": ts} for entry_id, ts in entries],
        }
        (record_dir / "entries.json").write_text(json.dumps(meta), encoding="utf-8")
        for entry_id, _ in entries:
            (record_dir / entry_id).write_bytes(f"content of {entry_id}".encode())
        return record_dir

    return _make
