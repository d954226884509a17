"""History scanner — find metadata files and correlate them to a working directory."""

from __future__ import annotations

import os
from collections.abc import Iterable, Iterator
from pathlib import Path

from loguru import logger

from tardis.core.parser import parse_record
from tardis.core.path_resolver import is_within
from tardis.errors import ParseError
from tardis.models.history_record import FILE_SCHEME, ResolvedHistoryFile

METADATA_FILENAME = "entries.json"
DEFAULT_MAX_DEPTH = 3


def iter_metadata_files(
    root: Path,
    max_depth: int = DEFAULT_MAX_DEPTH,
    filename: str = METADATA_FILENAME,
) -> Iterator[tuple[Path, str]]:
    """
    Yield ``(containing_dir, text)`` for every metadata file below *root*.

    The root is depth 0; files up to *max_depth* are visited. Entries that
    vanish or cannot be read are skipped, a missing root yields nothing.
    """
    yield from _walk(Path(root), 0, max_depth, filename)


def _walk(directory: Path, depth: int, max_depth: int, filename: str) -> Iterator[tuple[Path, str]]:
    if depth >= max_depth:
        return
    try:
        with os.scandir(directory) as it:
            children = list(it)
    except OSError as e:
        logger.debug(f"Skipping unreadable directory {directory}: {e}")
        return

    for child in children:
        try:
            is_dir = child.is_dir(follow_symlinks=False)
            is_file = child.is_file(follow_symlinks=False)
        except OSError as e:
            logger.debug(f"Skipping {child.path}: {e}")
            continue

        if is_dir:
            yield from _walk(Path(child.path), depth + 1, max_depth, filename)
        elif is_file and child.name == filename:
            path = Path(child.path)
            try:
                text = path.read_text(encoding="utf-8")
            except UnicodeDecodeError as e:
                raise ParseError(f"Not valid UTF-8: {e}", path) from e
            except OSError as e:
                logger.debug(f"Skipping unreadable metadata {path}: {e}")
                continue
            yield path.parent, text


def correlate(
    pairs: Iterable[tuple[Path, str]],
    work_dir: Path,
    source_name: str = METADATA_FILENAME,
) -> Iterator[ResolvedHistoryFile]:
    """Parse each metadata text and keep local files under *work_dir*."""
    for containing_dir, text in pairs:
        record = parse_record(text, containing_dir / source_name)
        resolved = ResolvedHistoryFile(containing_dir=containing_dir, record=record)

        if not resolved.is_scheme(FILE_SCHEME):
            logger.debug(f"Excluding non-file resource {record.resource_uri}")
            continue
        if not is_within(resolved.current_file_path, work_dir):
            logger.debug(f"Excluding {resolved.current_file_path}: outside {work_dir}")
            continue
        yield resolved


class HistoryScanner:
    """
    Discovery orchestrator.

    Walks a local history root and returns the records whose original
    file lives under a working directory.
    """

    def __init__(
        self,
        history_root: Path,
        max_depth: int = DEFAULT_MAX_DEPTH,
        metadata_filename: str = METADATA_FILENAME,
    ) -> None:
        self._root = history_root
        self._max_depth = max_depth
        self._filename = metadata_filename

    @property
    def history_root(self) -> Path:
        return self._root

    def iter_history(self, work_dir: Path) -> Iterator[ResolvedHistoryFile]:
        pairs = iter_metadata_files(self._root, self._max_depth, self._filename)
        return correlate(pairs, work_dir, self._filename)

    def scan(self, work_dir: Path) -> list[ResolvedHistoryFile]:
        """Collect every correlated record; a ParseError aborts the scan."""
        found = list(self.iter_history(work_dir))
        logger.info(f"Found {len(found)} file(s) with local history under {work_dir}")
        return found
