"""Metadata parser — decode one ``entries.json`` into a BackupRecord."""

from __future__ import annotations

import json
from datetime import datetime, timedelta, timezone
from pathlib import Path
from typing import Any
from urllib.parse import SplitResult, urlsplit

from tardis.errors import ParseError
from tardis.models.history_record import BackupEntry, BackupRecord

SUPPORTED_VERSIONS = frozenset({1})

_EPOCH = datetime(1970, 1, 1, tzinfo=timezone.utc)


def parse_record(text: str, source: Path | str | None = None) -> BackupRecord:
    """
    Decode metadata text into a BackupRecord.

    Every required field is validated before the record is built; any
    mismatch raises ParseError naming *source* (used only for messages).
    """
    try:
        data = json.loads(text)
    except json.JSONDecodeError as e:
        raise ParseError(f"Malformed JSON: {e}", source) from e

    if not isinstance(data, dict):
        raise ParseError("Expected a JSON object at top level", source)

    version = data.get("version")
    if not _is_int(version):
        raise ParseError("Missing or non-integer 'version'", source)
    if version not in SUPPORTED_VERSIONS:
        raise ParseError(f"Unsupported metadata version {version}", source)

    resource = _parse_resource(data.get("resource"), source)

    raw_entries = data.get("entries")
    if not isinstance(raw_entries, list):
        raise ParseError("Missing or non-array 'entries'", source)

    entries = [_parse_entry(raw, index, source) for index, raw in enumerate(raw_entries)]
    return BackupRecord(version=version, resource=resource, entries=entries)


def _is_int(value: Any) -> bool:
    return isinstance(value, int) and not isinstance(value, bool)


def _parse_resource(value: Any, source: Path | str | None) -> SplitResult:
    if not isinstance(value, str) or not value:
        raise ParseError("Missing or non-string 'resource'", source)
    try:
        resource = urlsplit(value)
    except ValueError as e:
        raise ParseError(f"Invalid resource URI {value!r}: {e}", source) from e
    if not resource.scheme:
        raise ParseError(f"Resource URI has no scheme: {value!r}", source)
    return resource


def _parse_entry(raw: Any, index: int, source: Path | str | None) -> BackupEntry:
    if not isinstance(raw, dict):
        raise ParseError(f"entries[{index}] is not an object", source)

    entry_id = raw.get("id")
    if not isinstance(entry_id, str) or not entry_id:
        raise ParseError(f"entries[{index}] has no 'id'", source)

    return BackupEntry(
        id=entry_id,
        timestamp=parse_millis(raw.get("timestamp"), f"entries[{index}].timestamp", source),
        source=_optional_str(raw.get("source")),
        source_description=_optional_str(raw.get("sourceDescription")),
    )


def parse_millis(value: Any, field_name: str, source: Path | str | None = None) -> datetime:
    """Epoch milliseconds to an aware UTC datetime."""
    if not _is_int(value):
        raise ParseError(f"'{field_name}' is not an integer: {value!r}", source)
    try:
        return _EPOCH + timedelta(milliseconds=value)
    except OverflowError as e:
        raise ParseError(f"'{field_name}' out of range: {value}", source) from e


def _optional_str(value: Any) -> str | None:
    return value if isinstance(value, str) else None
