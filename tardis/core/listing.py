"""Listing — summary and per-backup lines for correlated files."""

from __future__ import annotations

from collections.abc import Iterable, Iterator
from pathlib import Path

from tardis.errors import PathError
from tardis.models.history_record import BackupEntry, ResolvedHistoryFile
from tardis.utils import format_timestamp


def relative_path(history_file: ResolvedHistoryFile, work_dir: Path) -> Path:
    """Current file path relative to *work_dir*; PathError if outside it."""
    current = history_file.current_file_path
    try:
        return current.relative_to(work_dir)
    except ValueError as e:
        raise PathError(f"{current} is not under {work_dir}") from e


def list_history(
    files: Iterable[ResolvedHistoryFile],
    work_dir: Path,
    verbose: bool = False,
) -> Iterator[str]:
    """
    Yield one line per file, or one line per backup when *verbose*.

    Summary: ``<path> (<n> backups)``.
    Verbose: ``<path>\\t<timestamp>\\t<backup file>`` in stored order, with a
    trailing ``\\t<source>`` column when the editor recorded what made the snapshot.
    """
    for history_file in files:
        current = relative_path(history_file, work_dir)
        backups = history_file.backup_files
        if verbose:
            for entry, (ts, backup) in zip(history_file.record.entries, backups):
                line = f"{current}\t{format_timestamp(ts)}\t{backup}"
                source = describe_source(entry)
                yield f"{line}\t{source}" if source else line
        else:
            yield f"{current} ({len(backups)} backups)"


def describe_source(entry: BackupEntry) -> str:
    """``source (description)``, or empty when the editor recorded neither."""
    if entry.source and entry.source_description:
        return f"{entry.source} ({entry.source_description})"
    return entry.source or entry.source_description or ""
