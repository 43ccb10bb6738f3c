"""
summary.py - rolling 7-day statistics

Over the records logged in the last 7 days:
  1. count
  2. mean of a numeric field (0 when there is nothing to average)
  3. trend series: one point per day with records, per-day mean, oldest first
  4. insight band: positive (> 3.5) / negative (< 2.5) / neutral
"""

from dataclasses import dataclass, field
from datetime import date, timedelta
from enum import Enum

import pandas as pd

from logic.config import BAND_HIGH, BAND_LOW, SUMMARY_WINDOW_DAYS
from logic.history import start_of_day
from logic.models import now_local, to_local


FIELD_EXTRACTORS = {
    "rating": lambda r: r.rating,
    "hours_slept": lambda r: r.hours_slept,
}


class Band(Enum):
    POSITIVE = 'positive'
    NEUTRAL = 'neutral'
    NEGATIVE = 'negative'


INSIGHTS = {
    Band.POSITIVE: {
        "icon": "✨",
        "title": "Great Energy Week!",
        "description": "Your average energy this week is above 3.5 stars. Keep it up!",
    },
    Band.NEGATIVE: {
        "icon": "🌙",
        "title": "Low Energy Pattern",
        "description": "Consider what might be affecting your energy levels this week.",
    },
    Band.NEUTRAL: {
        "icon": "📈",
        "title": "Moderate Energy",
        "description": "Your energy levels are steady. Look for patterns to optimize further.",
    },
}


@dataclass(frozen=True)
class TrendPoint:
    day: date
    value: float


@dataclass(frozen=True)
class Summary:
    field_name: str
    count: int
    mean: float
    band: Band
    trend: list = field(default_factory=list)

    @property
    def insight(self) -> dict:
        return INSIGHTS[self.band]


# =============================================================
# Building blocks
# =============================================================

def filter_window(records, now=None, days=SUMMARY_WINDOW_DAYS) -> list:
    """Records with timestamp >= now - days."""
    now = to_local(now or now_local())
    cutoff = now - timedelta(days=days)
    return [r for r in records if to_local(r.timestamp) >= cutoff]


def rolling_mean(values) -> float:
    values = list(values)
    if not values:
        return 0.0
    return sum(values) / len(values)


def trend_series(records, extractor) -> list:
    """
    Per-day mean of the field, one TrendPoint per day that has records, ascending.
    Days without records are skipped, not zero-filled.
    """
    if not records:
        return []

    df = pd.DataFrame({
        'day': [start_of_day(r.timestamp).date() for r in records],
        'value': [float(extractor(r)) for r in records],
    })
    daily = df.groupby('day', sort=True)['value'].mean()

    return [TrendPoint(day=day, value=float(value)) for day, value in daily.items()]


def classify_band(mean: float, count=None) -> Band:
    """
    > 3.5 positive, < 2.5 negative, otherwise neutral.
    An empty window (count == 0) has no pattern to report and is always neutral.
    """
    if count == 0:
        return Band.NEUTRAL
    if mean > BAND_HIGH:
        return Band.POSITIVE
    if mean < BAND_LOW:
        return Band.NEGATIVE
    return Band.NEUTRAL


# =============================================================
# Summary
# =============================================================

def get_summary(records, field_name: str, now=None, days=SUMMARY_WINDOW_DAYS) -> Summary:
    """
    Raises:
        KeyError: unknown field_name
    """
    extractor = FIELD_EXTRACTORS[field_name]

    windowed = filter_window(records, now=now, days=days)
    count = len(windowed)
    mean = rolling_mean(extractor(r) for r in windowed)

    return Summary(
        field_name=field_name,
        count=count,
        mean=mean,
        band=classify_band(mean, count),
        trend=trend_series(windowed, extractor),
    )
