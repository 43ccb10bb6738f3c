"""
record_store.py - local JSON record store

All records live in one JSON document:
    {"version": 1, "energy": [...], "sleep": [...]}

- every write goes to a temp file and is moved into place with os.replace
- a corrupt file is backed up (*.corrupt-<epoch>.json) and reset
- transient write errors are retried before surfacing as StoreError
"""

import json
import logging
import os
import time
from pathlib import Path

from tenacity import retry, retry_if_exception_type, stop_after_attempt, wait_exponential

from logic.models import RecordKind, ValidationError

logger = logging.getLogger(__name__)

STORE_VERSION = 1


class StoreError(Exception):
    """Persistence failure on insert / delete / replace / load."""


def _empty_document():
    doc = {"version": STORE_VERSION}
    for kind in RecordKind:
        doc[kind.value] = []
    return doc


def _row_id(row):
    """id of a stored row; rows that are not objects have none and are written back untouched."""
    return row.get('id') if isinstance(row, dict) else None


@retry(
    retry=retry_if_exception_type(OSError),
    stop=stop_after_attempt(3),
    wait=wait_exponential(multiplier=0.1, min=0.1, max=1),
    reraise=True
)
def _atomic_write(path: Path, payload: str) -> None:
    """temp file in the same directory -> fsync -> os.replace"""
    tmp = path.with_name(path.name + ".tmp")
    with open(tmp, "w", encoding="utf-8") as f:
        f.write(payload)
        f.flush()
        os.fsync(f.fileno())
    os.replace(tmp, path)

    try:
        os.chmod(path, 0o600)
    except OSError:
        pass


class RecordStore:
    """
    Durable store for EnergyRecord / SleepRecord.

    Every call re-reads the file, so the returned lists are always a fresh
    snapshot. Single process, single writer.
    """

    def __init__(self, path):
        self.path = Path(path)

    # ---------------------------------------------------------
    # File I/O
    # ---------------------------------------------------------

    def _load(self) -> dict:
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)

            if not self.path.exists():
                logger.info(f"Creating new record store at {self.path}")
                doc = _empty_document()
                self._save(doc)
                return doc

            txt = self.path.read_text(encoding="utf-8").strip()
        except OSError as e:
            raise StoreError(f"Could not read record store {self.path}: {e}") from e

        if not txt:
            doc = _empty_document()
            self._save(doc)
            return doc

        try:
            data = json.loads(txt)
        except json.JSONDecodeError:
            return self._backup_and_reset(txt, "is not valid JSON")

        if not isinstance(data, dict):
            return self._backup_and_reset(txt, f"has a {type(data).__name__} at the top level")

        doc = _empty_document()
        for kind in RecordKind:
            rows = data.get(kind.value, [])
            if not isinstance(rows, list):
                return self._backup_and_reset(txt, f"has a non-list '{kind.value}' section")
            doc[kind.value] = rows
        return doc

    def _backup_and_reset(self, txt: str, reason: str) -> dict:
        """Keep the unreadable file next to the store, then start from an empty document."""
        backup = self.path.with_suffix(f".corrupt-{int(time.time())}.json")
        logger.warning(f"Record store {reason}, backing up to {backup} and starting fresh")
        try:
            backup.write_text(txt, encoding="utf-8")
        except OSError as e:
            raise StoreError(f"Could not back up corrupt store {self.path}: {e}") from e
        doc = _empty_document()
        self._save(doc)
        return doc

    def _save(self, doc: dict) -> None:
        payload = json.dumps(doc, indent=2, sort_keys=True, ensure_ascii=False) + "\n"
        try:
            _atomic_write(self.path, payload)
        except OSError as e:
            raise StoreError(f"Could not write record store {self.path}: {e}") from e

    # ---------------------------------------------------------
    # Queries
    # ---------------------------------------------------------

    def query_all(self, kind: RecordKind) -> list:
        """All records of one kind, in file order. Invalid rows are skipped with a warning."""
        doc = self._load()
        record_class = kind.record_class

        records = []
        skipped = []
        for idx, row in enumerate(doc[kind.value]):
            try:
                records.append(record_class.from_dict(row))
            except (KeyError, TypeError, ValueError, ValidationError) as e:
                skipped.append((idx, str(e)))

        if skipped:
            logger.warning(f"Skipped {len(skipped)} invalid {kind.value} record(s): {skipped[:5]}")

        return records

    def count(self, kind: RecordKind) -> int:
        return len(self._load()[kind.value])

    # ---------------------------------------------------------
    # Mutations
    # ---------------------------------------------------------

    def insert(self, record) -> None:
        doc = self._load()
        rows = doc[record.kind.value]
        if any(_row_id(row) == record.id for row in rows):
            raise StoreError(f"Record {record.id} already exists")

        rows.append(record.to_dict())
        self._save(doc)
        logger.info(f"Inserted {record.kind.value} record {record.id}")

    def delete(self, record_id: str, kind=None) -> None:
        doc = self._load()
        kinds = [kind] if kind else list(RecordKind)
        for k in kinds:
            rows = doc[k.value]
            remaining = [row for row in rows if _row_id(row) != record_id]
            if len(remaining) != len(rows):
                doc[k.value] = remaining
                self._save(doc)
                logger.info(f"Deleted {k.value} record {record_id}")
                return

        raise StoreError(f"Record {record_id} not found")

    def replace(self, old_id: str, new_record) -> None:
        """
        Delete old_id and insert new_record as one write.
        Either both changes land on disk or neither does.
        """
        doc = self._load()
        rows = doc[new_record.kind.value]
        remaining = [row for row in rows if _row_id(row) != old_id]
        if len(remaining) == len(rows):
            raise StoreError(f"Record {old_id} not found")
        if any(_row_id(row) == new_record.id for row in remaining):
            raise StoreError(f"Record {new_record.id} already exists")

        remaining.append(new_record.to_dict())
        doc[new_record.kind.value] = remaining
        self._save(doc)
        logger.info(f"Replaced {new_record.kind.value} record {old_id} -> {new_record.id}")
