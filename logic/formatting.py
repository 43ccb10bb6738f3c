"""
formatting.py - user-facing text

Feedback banners, duplicate-entry prompts and "time ago" strings.
"""

from datetime import datetime

from logic.models import format_clock, now_local, to_local


def fmt_time(dt: datetime) -> str:
    """7:05 PM"""
    dt = to_local(dt)
    return format_clock(dt.hour, dt.minute)


def stars(count: int) -> str:
    return "⭐" * max(0, int(count))


def minutes_ago_text(then: datetime, now=None) -> str:
    now = now or now_local()
    seconds_ago = int((to_local(now) - to_local(then)).total_seconds())

    if seconds_ago < 60:
        return "just now"
    if seconds_ago < 120:
        return "1 minute ago"
    return f"{seconds_ago // 60} minutes ago"


def hours_ago_text(then: datetime, now=None) -> str:
    now = now or now_local()
    hours_ago = int((to_local(now) - to_local(then)).total_seconds() // 3600)

    if hours_ago < 1:
        return "just now"
    if hours_ago == 1:
        return "1 hour ago"
    return f"{hours_ago} hours ago"


# --- Saved feedback (always uses the stored record's timestamp) ---

def energy_feedback_message(record) -> str:
    return f"{stars(record.rating)} energy logged at {fmt_time(record.timestamp)}!"


def sleep_feedback_message(record) -> str:
    return f"{record.formatted_hours} sleep logged at {fmt_time(record.timestamp)}!"


# --- Duplicate prompts ---

def energy_duplicate_message(candidate, pending_rating: int, now=None) -> str:
    return (
        f"You logged {stars(candidate.rating)} energy {minutes_ago_text(candidate.timestamp, now)}. "
        f"Replace it with your new {stars(pending_rating)} rating?"
    )


def sleep_duplicate_message(candidate, now=None) -> str:
    return (
        f"You logged {candidate.formatted_hours} sleep {hours_ago_text(candidate.timestamp, now)}. "
        f"Replace it with your new entry?"
    )
