"""
models.py - MySpark record models

Two kinds of logged events, both immutable once created:
- EnergyRecord: energy rating 1-5
- SleepRecord: hours slept, interruption (Yes/No/Unspecified), optional bedtime

Plus validation (ValidationError) and the display helpers used by the UI.
"""

import math
import uuid
from dataclasses import dataclass, field
from datetime import datetime, time
from enum import Enum
from typing import Optional


class ValidationError(ValueError):
    """Input field outside its valid range."""


# =============================================================
# Time helpers
# =============================================================

def now_local() -> datetime:
    return datetime.now().astimezone()


def to_local(dt: datetime) -> datetime:
    """Naive datetimes are treated as local time."""
    return dt.astimezone()


def parse_timestamp(value: str) -> datetime:
    return to_local(datetime.fromisoformat(value))


def _new_id() -> str:
    return uuid.uuid4().hex


# =============================================================
# Enums
# =============================================================

class Interruption(Enum):
    """Whether sleep was interrupted. UNSPECIFIED is a real answer, not a missing one."""
    YES = 'yes'
    NO = 'no'
    UNSPECIFIED = 'unspecified'

    @classmethod
    def from_choice(cls, label: str) -> 'Interruption':
        """UI button label (Yes / No / Skip) -> Interruption"""
        mapping = {'yes': cls.YES, 'no': cls.NO, 'skip': cls.UNSPECIFIED}
        try:
            return mapping[label.strip().lower()]
        except KeyError:
            raise ValidationError(f"Unknown interruption choice: {label!r}")


class RecordKind(Enum):
    ENERGY = 'energy'
    SLEEP = 'sleep'

    @property
    def record_class(self):
        return EnergyRecord if self is RecordKind.ENERGY else SleepRecord

    @property
    def title(self) -> str:
        return 'Energy' if self is RecordKind.ENERGY else 'Sleep'


# =============================================================
# Validation
# =============================================================

RATING_MIN, RATING_MAX = 1, 5
HOURS_MIN, HOURS_MAX = 0.0, 24.0


def validate_rating(rating) -> int:
    if isinstance(rating, bool) or not isinstance(rating, int):
        raise ValidationError(f"Rating must be an integer, got {type(rating).__name__}")
    if rating < RATING_MIN or rating > RATING_MAX:
        raise ValidationError(f"Rating must be between {RATING_MIN} and {RATING_MAX}, got {rating}")
    return rating


def validate_hours(hours) -> float:
    if isinstance(hours, bool):
        raise ValidationError("Hours slept must be a number, got bool")
    try:
        value = float(hours)
    except (TypeError, ValueError):
        raise ValidationError(f"Hours slept must be a number, got {hours!r}")
    if not math.isfinite(value) or value < HOURS_MIN or value > HOURS_MAX:
        raise ValidationError(f"Hours slept must be between 0 and 24, got {hours}")
    return value


# =============================================================
# Records
# =============================================================

ENERGY_DESCRIPTIONS = {1: "Very Low", 2: "Low", 3: "Moderate", 4: "High", 5: "Very High"}
ENERGY_EMOJIS = {1: "😴", 2: "😔", 3: "😐", 4: "😊", 5: "⚡"}


@dataclass(frozen=True)
class EnergyRecord:
    rating: int
    timestamp: datetime
    id: str = field(default_factory=_new_id)

    kind = RecordKind.ENERGY

    @classmethod
    def create(cls, rating, timestamp=None) -> 'EnergyRecord':
        return cls(rating=validate_rating(rating), timestamp=to_local(timestamp or now_local()))

    @property
    def description(self) -> str:
        return ENERGY_DESCRIPTIONS.get(self.rating, "Unknown")

    @property
    def emoji(self) -> str:
        return ENERGY_EMOJIS.get(self.rating, "❓")

    def is_from_today(self, now=None) -> bool:
        now = now or now_local()
        return to_local(self.timestamp).date() == to_local(now).date()

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "rating": self.rating,
            "timestamp": self.timestamp.isoformat(),
        }

    @classmethod
    def from_dict(cls, data: dict) -> 'EnergyRecord':
        return cls(
            id=str(data['id']),
            rating=validate_rating(data['rating']),
            timestamp=parse_timestamp(data['timestamp']),
        )


# (upper bound exclusive, label, emoji)
SLEEP_CATEGORIES = [
    (4, "Very Short", "😵"),
    (6, "Short", "😪"),
    (8, "Adequate", "😌"),
    (10, "Good", "😊"),
]


@dataclass(frozen=True)
class SleepRecord:
    hours_slept: float
    timestamp: datetime
    was_interrupted: Interruption = Interruption.UNSPECIFIED
    bedtime: Optional[time] = None
    id: str = field(default_factory=_new_id)

    kind = RecordKind.SLEEP

    @classmethod
    def create(cls, hours_slept, was_interrupted=Interruption.UNSPECIFIED, bedtime=None,
               timestamp=None) -> 'SleepRecord':
        if not isinstance(was_interrupted, Interruption):
            raise ValidationError(f"was_interrupted must be an Interruption, got {was_interrupted!r}")
        if bedtime is not None and not isinstance(bedtime, time):
            raise ValidationError(f"bedtime must be a time of day, got {bedtime!r}")
        return cls(
            hours_slept=validate_hours(hours_slept),
            was_interrupted=was_interrupted,
            bedtime=bedtime.replace(second=0, microsecond=0, tzinfo=None) if bedtime else None,
            timestamp=to_local(timestamp or now_local()),
        )

    @property
    def quality_description(self) -> str:
        return {
            Interruption.YES: "Interrupted",
            Interruption.NO: "Uninterrupted",
            Interruption.UNSPECIFIED: "Not specified",
        }[self.was_interrupted]

    @property
    def quality_emoji(self) -> str:
        return "😵‍💫" if self.was_interrupted is Interruption.YES else "😴"

    @property
    def category(self) -> str:
        for upper, label, _ in SLEEP_CATEGORIES:
            if self.hours_slept < upper:
                return label
        return "Long"

    @property
    def category_emoji(self) -> str:
        for upper, _, emoji in SLEEP_CATEGORIES:
            if self.hours_slept < upper:
                return emoji
        return "😴"

    @property
    def formatted_hours(self) -> str:
        return f"{format_hours(self.hours_slept)} hours"

    @property
    def formatted_bedtime(self) -> Optional[str]:
        if self.bedtime is None:
            return None
        return format_clock(self.bedtime.hour, self.bedtime.minute)

    def is_from_today(self, now=None) -> bool:
        now = now or now_local()
        return to_local(self.timestamp).date() == to_local(now).date()

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "hours_slept": self.hours_slept,
            "was_interrupted": self.was_interrupted.value,
            "bedtime": self.bedtime.strftime('%H:%M') if self.bedtime else None,
            "timestamp": self.timestamp.isoformat(),
        }

    @classmethod
    def from_dict(cls, data: dict) -> 'SleepRecord':
        bedtime_raw = data.get('bedtime')
        return cls(
            id=str(data['id']),
            hours_slept=validate_hours(data['hours_slept']),
            was_interrupted=Interruption(data.get('was_interrupted', Interruption.UNSPECIFIED.value)),
            bedtime=time.fromisoformat(bedtime_raw) if bedtime_raw else None,
            timestamp=parse_timestamp(data['timestamp']),
        )


# =============================================================
# Shared display helpers
# =============================================================

def format_hours(hours: float) -> str:
    """7.5 -> '7.5', 8.0 -> '8' (at most one decimal)"""
    text = f"{hours:.1f}"
    return text[:-2] if text.endswith('.0') else text


def format_clock(hour: int, minute: int) -> str:
    """12-hour clock without a leading zero: 7:05 PM"""
    suffix = "AM" if hour < 12 else "PM"
    h12 = hour % 12 or 12
    return f"{h12}:{minute:02d} {suffix}"
