"""Invocation context — service container for one command run."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import TYPE_CHECKING

from tardis.core.path_resolver import canonicalize_dir, default_history_root
from tardis.core.restore import RestoreManager
from tardis.core.scanner import HistoryScanner

if TYPE_CHECKING:
    from tardis.config import Config


@dataclass
class TardisContext:
    """
    Central service container.

    Holds the resolved configuration values so the core components stay
    plain functions of their inputs.
    """

    config: Config
    work_dir: Path
    scanner: HistoryScanner
    restore_manager: RestoreManager

    @property
    def history_root(self) -> Path:
        return self.scanner.history_root


def create_context(
    config: Config,
    work_dir: str | Path = ".",
    history_dir: str | Path | None = None,
) -> TardisContext:
    """Canonicalize the working directory and pick the history root."""
    canonical = canonicalize_dir(work_dir)

    if history_dir:
        root = Path(history_dir).expanduser()
    else:
        root = config.history_path or default_history_root()

    scanner = HistoryScanner(
        root,
        max_depth=config.scan_depth,
        metadata_filename=config.metadata_filename,
    )
    return TardisContext(
        config=config,
        work_dir=canonical,
        scanner=scanner,
        restore_manager=RestoreManager(),
    )
