"""
export.py - records -> pandas DataFrame / CSV

Used by the History page (table + download) and scripts/export_csv.py.
"""

import logging

import pandas as pd

from logic.models import RecordKind

logger = logging.getLogger(__name__)

EXPORT_COLUMNS = {
    RecordKind.ENERGY: ['timestamp', 'rating', 'description', 'id'],
    RecordKind.SLEEP: ['timestamp', 'hours_slept', 'was_interrupted', 'bedtime', 'category', 'id'],
}


def _energy_row(record):
    return {
        'timestamp': record.timestamp,
        'rating': record.rating,
        'description': record.description,
        'id': record.id,
    }


def _sleep_row(record):
    return {
        'timestamp': record.timestamp,
        'hours_slept': record.hours_slept,
        'was_interrupted': record.was_interrupted.value,
        'bedtime': record.bedtime.strftime('%H:%M') if record.bedtime else '',
        'category': record.category,
        'id': record.id,
    }


def records_to_dataframe(records, kind: RecordKind) -> pd.DataFrame:
    """One row per record, oldest first. Empty input -> empty frame with the same columns."""
    columns = EXPORT_COLUMNS[kind]
    to_row = _energy_row if kind is RecordKind.ENERGY else _sleep_row

    rows = [to_row(r) for r in sorted(records, key=lambda r: r.timestamp)]
    if not rows:
        return pd.DataFrame(columns=columns)
    return pd.DataFrame(rows, columns=columns)


def export_csv(store, kind: RecordKind, out_path) -> int:
    """
    Write all records of one kind to CSV.
    Returns: number of rows written
    """
    df = records_to_dataframe(store.query_all(kind), kind)
    df.to_csv(out_path, index=False, encoding='utf-8')
    logger.info(f"Exported {len(df)} {kind.value} record(s) to {out_path}")
    return len(df)
