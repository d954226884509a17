"""Error hierarchy — every fatal condition aborts the invocation."""

from __future__ import annotations

from pathlib import Path


class TardisError(Exception):
    """Base class for errors surfaced to the user."""


class ConfigError(TardisError):
    """Working directory or home directory could not be resolved."""


class ParseError(TardisError):
    """A metadata file was found but could not be decoded."""

    def __init__(self, message: str, source: Path | str | None = None) -> None:
        self.source = source
        if source is not None:
            message = f"{source}: {message}"
        super().__init__(message)


class NotFoundError(TardisError):
    """No backup entry (or no matching record) to restore from."""


class PathError(TardisError):
    """A file path could not be expressed relative to the working directory."""


class RestoreError(TardisError):
    """Copying a backup over its original file failed."""

    def __init__(self, source: Path, destination: Path, reason: str) -> None:
        self.source = source
        self.destination = destination
        super().__init__(f"Could not restore {destination} from {source}: {reason}")
