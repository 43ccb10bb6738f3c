"""
test_feedback.py - saved banner hide deadline
"""

import os
import sys
from datetime import datetime, timedelta

sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from logic.feedback import SavedBanner
from logic.models import to_local

NOW = to_local(datetime(2024, 1, 15, 12, 0))


class TestSavedBanner:
    def test_hidden_initially(self):
        banner = SavedBanner()
        assert banner.is_visible(NOW) is False
        assert banner.reset_if_expired(NOW) is False

    def test_visible_for_two_seconds(self):
        banner = SavedBanner()
        banner.show("saved", now=NOW)
        assert banner.is_visible(NOW + timedelta(seconds=1.9)) is True
        assert banner.reset_if_expired(NOW + timedelta(seconds=1.9)) is False
        assert banner.is_visible(NOW + timedelta(seconds=2)) is False

    def test_reset_is_idempotent(self):
        banner = SavedBanner()
        banner.show("saved", now=NOW)
        later = NOW + timedelta(seconds=3)
        assert banner.reset_if_expired(later) is True
        assert banner.message is None
        assert banner.reset_if_expired(later) is False

    def test_new_message_restarts_delay(self):
        banner = SavedBanner()
        banner.show("first", now=NOW)
        banner.show("second", now=NOW + timedelta(seconds=1.5))
        assert banner.message == "second"
        assert banner.is_visible(NOW + timedelta(seconds=3)) is True

    def test_custom_delay(self):
        banner = SavedBanner(delay_seconds=5)
        banner.show("saved", now=NOW)
        assert banner.is_visible(NOW + timedelta(seconds=4)) is True
