"""
Snapshot persistence for a contacts collection.

A snapshot is one JSON document::

    {"format": "phonebook", "version": 1,
     "records": [{"kind": "person", "created": "...", "last_edited": "...",
                  "fields": {"name": "John", ...}}, ...]}

It is always written as a whole: the document goes to a temporary file
next to the target which then replaces the target in one step.
"""
import datetime
import json
import logging
import os
import stat
import tempfile
from typing import Any, Dict, List

from .errors import SnapshotError
from .records import RECORD_TYPES, Record, Timestamps

log = logging.getLogger(__name__)

FORMAT_NAME = "phonebook"
FORMAT_VERSION = 1


def record_to_dict(rec: Record) -> Dict[str, Any]:
    return {
        "kind": rec.KIND,
        "created": rec.created.isoformat(),
        "last_edited": rec.last_edited.isoformat(),
        "fields": {spec.attr: getattr(rec, spec.attr) for spec in rec.FIELDS},
    }


def record_from_dict(data: Any) -> Record:
    if not isinstance(data, dict):
        raise SnapshotError("Record entry is not an object.")
    cls = RECORD_TYPES.get(data.get("kind"))
    if cls is None:
        raise SnapshotError(f"Unknown record kind: {data.get('kind')!r}")
    fields = data.get("fields")
    if not isinstance(fields, dict):
        raise SnapshotError("Record fields are missing.")

    values = {}
    for spec in cls.FIELDS:
        value = fields.get(spec.attr)
        if not isinstance(value, str):
            raise SnapshotError(f"Field '{spec.attr}' is missing or not text.")
        values[spec.attr] = value
    try:
        stamps = Timestamps(
            datetime.datetime.fromisoformat(data["created"]),
            datetime.datetime.fromisoformat(data["last_edited"]),
        )
    except (KeyError, TypeError, ValueError) as e:
        raise SnapshotError(f"Bad record timestamps: {e}") from e
    return cls(**values, stamps=stamps)


def dumps(records: List[Record]) -> str:
    return json.dumps({
        "format": FORMAT_NAME,
        "version": FORMAT_VERSION,
        "records": [record_to_dict(r) for r in records],
    }, ensure_ascii=False, indent=2)


def loads(text: str) -> List[Record]:
    try:
        doc = json.loads(text)
    except (ValueError, RecursionError) as e:
        raise SnapshotError(f"Not a JSON document: {e}") from e
    if not isinstance(doc, dict) or doc.get("format") != FORMAT_NAME:
        raise SnapshotError("Not a phone book snapshot.")
    if doc.get("version") != FORMAT_VERSION:
        raise SnapshotError(f"Unsupported snapshot version: {doc.get('version')!r}")
    records = doc.get("records")
    if not isinstance(records, list):
        raise SnapshotError("Snapshot has no record list.")
    return [record_from_dict(item) for item in records]


def _target_mode(path: str) -> int:
    # mkstemp creates 0600; keep what the user had, or what a plain open would give
    try:
        return stat.S_IMODE(os.stat(path).st_mode)
    except FileNotFoundError:
        umask = os.umask(0)
        os.umask(umask)
        return 0o666 & ~umask


def save_snapshot(records: List[Record], path: str) -> None:
    """Write all records to ``path`` atomically. Raises ``OSError`` on failure."""
    payload = dumps(records)
    directory = os.path.dirname(os.path.abspath(path))
    fd, tmp_path = tempfile.mkstemp(prefix=".phonebook-", suffix=".tmp", dir=directory)
    try:
        with os.fdopen(fd, "w", encoding="utf-8") as f:
            f.write(payload)
        os.chmod(tmp_path, _target_mode(path))
        os.replace(tmp_path, path)
    except BaseException:
        if os.path.exists(tmp_path):
            os.remove(tmp_path)
        raise
    log.info("Saved %d records to %s", len(records), path)


def load_snapshot(path: str) -> List[Record]:
    try:
        with open(path, "r", encoding="utf-8") as f:
            text = f.read()
    except (OSError, UnicodeDecodeError) as e:
        raise SnapshotError(f"Cannot read {path}: {e}") from e
    records = loads(text)
    log.info("Loaded %d records from %s", len(records), path)
    return records
