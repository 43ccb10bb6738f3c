"""
config.py - MySpark settings

Data file location and the fixed windows / thresholds used by the logic modules.
"""

import os
from datetime import time, timedelta
from pathlib import Path

# --- Paths ---
BASE_DIR = Path(__file__).resolve().parent.parent
DATA_DIR = BASE_DIR / 'data'
DEFAULT_DATA_PATH = DATA_DIR / 'myspark.json'
DATA_ENV_VAR = 'MYSPARK_DATA'

# --- Duplicate guard ---
ENERGY_DUPLICATE_WINDOW = timedelta(minutes=10)
SLEEP_DUPLICATE_WINDOW = timedelta(hours=4)

# --- Summary ---
SUMMARY_WINDOW_DAYS = 7
BAND_HIGH = 3.5
BAND_LOW = 2.5

# --- UI ---
SAVED_BANNER_SECONDS = 2
DEFAULT_SLEEP_HOURS = 7.0
MAX_SLEEP_HOURS_OPTION = 12.0
DEFAULT_BEDTIME = time(23, 0)
BEDTIME_STEP_MINUTES = 5
APP_PORT = 8501


def resolve_data_path(data_arg=None) -> Path:
    """
    Store file path: explicit argument > MYSPARK_DATA env var > data/myspark.json
    """
    if data_arg:
        return Path(data_arg).expanduser().resolve()
    env = os.environ.get(DATA_ENV_VAR)
    if env:
        return Path(env).expanduser().resolve()
    return DEFAULT_DATA_PATH.resolve()
