"""
export_csv.py - dump MySpark records to CSV

Usage:
    python scripts/export_csv.py --kind energy --out energy.csv
    python scripts/export_csv.py --kind sleep --out sleep.csv --data ~/myspark.json
"""

import argparse
import logging
import os
import sys

sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), '..')))

from logic.config import resolve_data_path
from logic.export import export_csv
from logic.models import RecordKind
from logic.record_store import RecordStore, StoreError

logger = logging.getLogger("export_csv")


def main(argv=None):
    parser = argparse.ArgumentParser(description="Export MySpark records to CSV")
    parser.add_argument("--kind", choices=[k.value for k in RecordKind], required=True)
    parser.add_argument("--out", required=True, help="output CSV path")
    parser.add_argument("--data", default=None, help="record store JSON (default: $MYSPARK_DATA or data/myspark.json)")
    args = parser.parse_args(argv)

    logging.basicConfig(level=logging.INFO, format="%(levelname)s: %(message)s")

    store = RecordStore(resolve_data_path(args.data))
    try:
        rows = export_csv(store, RecordKind(args.kind), args.out)
    except StoreError as e:
        logger.error(f"Export failed: {e}")
        return 1

    print(f"{rows} {args.kind} record(s) -> {args.out}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
