"""
test_formatting.py - banner / prompt texts
"""

import os
import sys
from datetime import datetime, timedelta

sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from logic.formatting import (
    energy_duplicate_message,
    energy_feedback_message,
    fmt_time,
    hours_ago_text,
    minutes_ago_text,
    sleep_duplicate_message,
    sleep_feedback_message,
    stars,
)
from logic.models import EnergyRecord, SleepRecord, to_local

NOW = to_local(datetime(2024, 1, 15, 19, 5))


class TestTimeText:
    def test_fmt_time(self):
        assert fmt_time(NOW) == "7:05 PM"

    def test_minutes_ago(self):
        assert minutes_ago_text(NOW - timedelta(seconds=20), now=NOW) == "just now"
        assert minutes_ago_text(NOW - timedelta(seconds=90), now=NOW) == "1 minute ago"
        assert minutes_ago_text(NOW - timedelta(minutes=9), now=NOW) == "9 minutes ago"

    def test_hours_ago(self):
        assert hours_ago_text(NOW - timedelta(minutes=30), now=NOW) == "just now"
        assert hours_ago_text(NOW - timedelta(minutes=70), now=NOW) == "1 hour ago"
        assert hours_ago_text(NOW - timedelta(hours=3), now=NOW) == "3 hours ago"

    def test_stars(self):
        assert stars(3) == "⭐⭐⭐"
        assert stars(0) == ""


class TestMessages:
    def test_energy_feedback_uses_record_time(self):
        record = EnergyRecord.create(4, timestamp=NOW)
        assert energy_feedback_message(record) == "⭐⭐⭐⭐ energy logged at 7:05 PM!"

    def test_sleep_feedback(self):
        record = SleepRecord.create(7.5, timestamp=NOW)
        assert sleep_feedback_message(record) == "7.5 hours sleep logged at 7:05 PM!"

    def test_energy_duplicate(self):
        candidate = EnergyRecord.create(2, timestamp=NOW - timedelta(minutes=5))
        message = energy_duplicate_message(candidate, 5, now=NOW)
        assert "⭐⭐ energy 5 minutes ago" in message
        assert "new ⭐⭐⭐⭐⭐ rating" in message

    def test_sleep_duplicate(self):
        candidate = SleepRecord.create(8, timestamp=NOW - timedelta(hours=2))
        assert sleep_duplicate_message(candidate, now=NOW).startswith("You logged 8 hours sleep 2 hours ago.")
