"""Local history record models."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from pathlib import Path
from urllib.parse import SplitResult

from tardis.core.path_resolver import uri_to_path

FILE_SCHEME = "file"


@dataclass(frozen=True)
class BackupEntry:
    """One snapshot listed in a metadata file."""

    id: str  # File name of the snapshot, relative to the record directory
    timestamp: datetime  # Capture instant, UTC
    source: str | None = None  # What triggered the snapshot, e.g. "undoRedo.source"
    source_description: str | None = None


@dataclass
class BackupRecord:
    """Decoded ``entries.json``."""

    version: int
    resource: SplitResult
    entries: list[BackupEntry] = field(default_factory=list)

    @property
    def scheme(self) -> str:
        return self.resource.scheme

    @property
    def resource_uri(self) -> str:
        return self.resource.geturl()


@dataclass
class ResolvedHistoryFile:
    """A record correlated to a file under the working directory."""

    containing_dir: Path
    record: BackupRecord

    @property
    def current_file_path(self) -> Path:
        return uri_to_path(self.record.resource)

    @property
    def backup_files(self) -> list[tuple[datetime, Path]]:
        """``(timestamp, absolute snapshot path)`` pairs in stored order."""
        return [(e.timestamp, self.containing_dir / e.id) for e in self.record.entries]

    def is_scheme(self, scheme: str) -> bool:
        return self.record.scheme == scheme
