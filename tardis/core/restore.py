"""Restore manager — copy the newest backup over its original file."""

from __future__ import annotations

import shutil
from collections.abc import Iterable, Sequence
from dataclasses import dataclass
from datetime import datetime
from pathlib import Path

from loguru import logger

from tardis.errors import NotFoundError, RestoreError
from tardis.models.history_record import ResolvedHistoryFile
from tardis.utils import format_timestamp, to_absolute


@dataclass(frozen=True)
class RestoreAction:
    """A single planned copy from the history store onto an original file."""

    timestamp: datetime
    source: Path
    destination: Path

    def describe(self) -> str:
        return f"Restoring {self.destination} using {self.source} from {format_timestamp(self.timestamp)}"


class RestoreManager:
    """Plan and perform restores for correlated history files."""

    def select_backup(self, history_file: ResolvedHistoryFile) -> tuple[datetime, Path]:
        """
        Pick the newest backup of a file.

        The greatest timestamp wins and ties go to the later entry, so for a
        store written in order this is always the last entry.
        """
        backups = history_file.backup_files
        if not backups:
            raise NotFoundError(f"No backup files found for {history_file.current_file_path}")

        newest = max(range(len(backups)), key=lambda i: (backups[i][0], i))
        if newest != len(backups) - 1:
            logger.warning(
                f"History for {history_file.current_file_path} is out of order, "
                f"using entry {newest + 1} of {len(backups)}"
            )
        return backups[newest]

    def select_files(
        self,
        files: Sequence[ResolvedHistoryFile],
        requested: Iterable[str | Path],
        work_dir: Path,
    ) -> list[ResolvedHistoryFile]:
        """
        Narrow *files* to the requested paths; all of them if none requested.

        Relative requests are taken from *work_dir*. A request that matches
        no history file raises NotFoundError.
        """
        wanted = [to_absolute(p, work_dir) for p in requested]
        if not wanted:
            return list(files)

        by_path = {f.current_file_path: f for f in files}
        selected: list[ResolvedHistoryFile] = []
        for path in wanted:
            match = by_path.get(path) or by_path.get(path.resolve())
            if match is None:
                raise NotFoundError(f"No local history found for {path}")
            if match not in selected:
                selected.append(match)
        return selected

    def plan_restore(
        self,
        files: Sequence[ResolvedHistoryFile],
        work_dir: Path,
        requested: Iterable[str | Path] = (),
    ) -> list[RestoreAction]:
        """Build the restore actions without touching the filesystem."""
        actions = []
        for history_file in self.select_files(files, requested, work_dir):
            ts, backup = self.select_backup(history_file)
            actions.append(
                RestoreAction(
                    timestamp=ts,
                    source=backup,
                    destination=history_file.current_file_path,
                )
            )
        return actions

    def apply(self, action: RestoreAction) -> None:
        """Overwrite the original file with the backup's bytes and mode."""
        if action.destination.is_dir():
            raise RestoreError(action.source, action.destination, "destination is a directory")
        try:
            shutil.copyfile(action.source, action.destination)
            shutil.copymode(action.source, action.destination)
        except OSError as e:
            raise RestoreError(action.source, action.destination, str(e)) from e
        logger.info(f"Restored {action.destination} from {action.source.name}")
