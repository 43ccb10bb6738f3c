"""
history.py - day-bucketed history view

Records are grouped by local calendar day, most recent day first, and each
day gets a header: "Today", "Yesterday", or the full date.
"""

from collections import defaultdict
from datetime import date, datetime, timedelta

from logic.models import now_local, to_local


def start_of_day(dt: datetime) -> datetime:
    """Local midnight of the day dt falls on."""
    return to_local(dt).replace(hour=0, minute=0, second=0, microsecond=0)


def bucket_by_day(records) -> dict:
    """
    {local date: [records]} - within a day, most recent first.
    """
    buckets = defaultdict(list)
    for record in records:
        buckets[start_of_day(record.timestamp).date()].append(record)

    for day_records in buckets.values():
        day_records.sort(key=lambda r: r.timestamp, reverse=True)

    return dict(buckets)


def day_label(day: date, today: date) -> str:
    if day == today:
        return "Today"
    if day == today - timedelta(days=1):
        return "Yesterday"
    # "Friday, January 5, 2024": day of month without zero padding
    return f"{day:%A, %B} {day.day}, {day.year}"


class HistorySections:
    """
    Iterable of (label, records) pairs, newest day first.

    Grouping is done once; labels are worked out each time the sections are
    iterated, so the same object can be walked any number of times.
    """

    def __init__(self, records, now=None):
        self._buckets = bucket_by_day(records)
        self._days = sorted(self._buckets, reverse=True)
        self._now = now

    def __iter__(self):
        today = to_local(self._now or now_local()).date()
        for day in self._days:
            yield day_label(day, today), list(self._buckets[day])

    def __len__(self):
        return len(self._days)

    def __bool__(self):
        return bool(self._days)

    @property
    def days(self) -> list:
        return list(self._days)


def get_history(records, now=None) -> HistorySections:
    return HistorySections(records, now=now)
