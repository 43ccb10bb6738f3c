"""
duplicate_guard.py - double-logging protection

A new entry is checked against the most recent existing record of the same kind:
  energy: 10 minutes / sleep: 4 hours

- nothing inside the window -> insert immediately (Inserted)
- something inside the window -> nothing is written; the caller gets
  ConflictFound and asks the user to Replace or Cancel
"""

import logging
from dataclasses import dataclass, field
from datetime import timedelta
from enum import Enum

from logic.config import ENERGY_DUPLICATE_WINDOW, SLEEP_DUPLICATE_WINDOW
from logic.models import Interruption, RecordKind, now_local, to_local

logger = logging.getLogger(__name__)

DUPLICATE_WINDOWS = {
    RecordKind.ENERGY: ENERGY_DUPLICATE_WINDOW,
    RecordKind.SLEEP: SLEEP_DUPLICATE_WINDOW,
}


class Resolution(Enum):
    REPLACE = 'replace'
    CANCEL = 'cancel'


@dataclass(frozen=True)
class Inserted:
    record: object


@dataclass(frozen=True)
class Cancelled:
    candidate: object


@dataclass
class ConflictFound:
    """
    A recent record already exists. Holds the proposed fields until the user decides.
    """
    candidate: object
    pending: dict
    store: object
    kind: RecordKind
    resolved: bool = field(default=False, compare=False)

    def resolve(self, choice: Resolution, now=None):
        """
        REPLACE: delete candidate + insert new record (one store write).
                 The new record is stamped now, not when the user first tapped.
        CANCEL:  store untouched.
        """
        if self.resolved:
            raise RuntimeError("Conflict has already been resolved")

        if choice is Resolution.CANCEL:
            self.resolved = True
            logger.info(f"Duplicate {self.kind.value} entry cancelled (kept {self.candidate.id})")
            return Cancelled(self.candidate)

        if choice is not Resolution.REPLACE:
            raise ValueError(f"Unknown resolution: {choice!r}")

        record = self.kind.record_class.create(**self.pending, timestamp=now or now_local())
        self.store.replace(self.candidate.id, record)
        self.resolved = True
        logger.info(f"Duplicate {self.kind.value} entry replaced: {self.candidate.id} -> {record.id}")
        return Inserted(record)


def find_recent_record(records, window: timedelta, now=None):
    """
    Most recent record with timestamp strictly after now - window, or None.
    """
    now = to_local(now or now_local())
    cutoff = now - window

    recent = [r for r in records if to_local(r.timestamp) > cutoff]
    if not recent:
        return None
    return max(recent, key=lambda r: r.timestamp)


def propose_entry(store, kind: RecordKind, fields: dict, now=None):
    """
    Validate -> look for a recent record -> insert or report the conflict.

    Raises:
        ValidationError: before the store is read or written
        StoreError: when the insert fails
    """
    now = now or now_local()

    # validation happens here, before any store access
    record = kind.record_class.create(**fields, timestamp=now)

    candidate = find_recent_record(store.query_all(kind), DUPLICATE_WINDOWS[kind], now=now)
    if candidate is not None:
        logger.info(f"Recent {kind.value} entry found ({candidate.id} at {candidate.timestamp.isoformat()})")
        return ConflictFound(candidate=candidate, pending=dict(fields), store=store, kind=kind)

    store.insert(record)
    return Inserted(record)


def propose_energy_entry(store, rating, now=None):
    return propose_entry(store, RecordKind.ENERGY, {"rating": rating}, now=now)


def propose_sleep_entry(store, hours_slept, was_interrupted=Interruption.UNSPECIFIED,
                        bedtime=None, now=None):
    fields = {
        "hours_slept": hours_slept,
        "was_interrupted": was_interrupted,
        "bedtime": bedtime,
    }
    return propose_entry(store, RecordKind.SLEEP, fields, now=now)
