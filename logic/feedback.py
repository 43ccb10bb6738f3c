"""
feedback.py - "saved" confirmation banner

The banner is shown only after the store write succeeded and hides itself
SAVED_BANNER_SECONDS later. Hiding is deadline based: whoever renders the
banner calls reset_if_expired(), and calling it again changes nothing.
"""

from datetime import timedelta

from logic.config import SAVED_BANNER_SECONDS
from logic.models import now_local


class SavedBanner:
    def __init__(self, delay_seconds=SAVED_BANNER_SECONDS):
        self.delay = timedelta(seconds=delay_seconds)
        self.message = None
        self.expires_at = None

    def show(self, message: str, now=None) -> None:
        """A newer message replaces an older one and restarts the delay."""
        now = now or now_local()
        self.message = message
        self.expires_at = now + self.delay

    def is_visible(self, now=None) -> bool:
        if self.message is None:
            return False
        return (now or now_local()) < self.expires_at

    def reset_if_expired(self, now=None) -> bool:
        """
        Clear the banner once its delay has passed.
        Returns True when a reset happened on this call.
        """
        if self.message is None:
            return False
        if (now or now_local()) < self.expires_at:
            return False
        self.message = None
        self.expires_at = None
        return True
