"""
test_models.py - record models, validation and display helpers
"""

import pytest
import sys
import os
from datetime import datetime, time

sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from logic.models import (
    EnergyRecord,
    Interruption,
    RecordKind,
    SleepRecord,
    ValidationError,
    format_clock,
    format_hours,
    to_local,
    validate_hours,
    validate_rating,
)

NOW = to_local(datetime(2024, 1, 15, 12, 0))


# =========================================
# Validation
# =========================================

class TestValidateRating:
    @pytest.mark.parametrize("rating", [1, 3, 5])
    def test_valid(self, rating):
        assert validate_rating(rating) == rating

    @pytest.mark.parametrize("rating", [0, 6, -1])
    def test_out_of_range(self, rating):
        with pytest.raises(ValidationError):
            validate_rating(rating)

    def test_rejects_float(self):
        with pytest.raises(ValidationError):
            validate_rating(3.5)

    def test_rejects_bool(self):
        with pytest.raises(ValidationError):
            validate_rating(True)

    def test_is_a_value_error(self):
        with pytest.raises(ValueError):
            validate_rating(9)


class TestValidateHours:
    @pytest.mark.parametrize("hours", [0, 0.0, 7.5, 24])
    def test_valid(self, hours):
        assert validate_hours(hours) == float(hours)

    @pytest.mark.parametrize("hours", [-0.5, 24.5, float('nan'), float('inf')])
    def test_invalid(self, hours):
        with pytest.raises(ValidationError):
            validate_hours(hours)

    def test_rejects_text(self):
        with pytest.raises(ValidationError):
            validate_hours("seven")


# =========================================
# EnergyRecord
# =========================================

class TestEnergyRecord:
    def test_create(self):
        record = EnergyRecord.create(4, timestamp=NOW)
        assert record.rating == 4
        assert record.timestamp == NOW
        assert record.kind is RecordKind.ENERGY
        assert len(record.id) == 32

    def test_ids_are_unique(self):
        a = EnergyRecord.create(3, timestamp=NOW)
        b = EnergyRecord.create(3, timestamp=NOW)
        assert a.id != b.id

    def test_invalid_rating(self):
        with pytest.raises(ValidationError):
            EnergyRecord.create(0, timestamp=NOW)

    def test_immutable(self):
        record = EnergyRecord.create(2, timestamp=NOW)
        with pytest.raises(AttributeError):
            record.rating = 5

    def test_description_and_emoji(self):
        assert EnergyRecord.create(1, timestamp=NOW).description == "Very Low"
        assert EnergyRecord.create(5, timestamp=NOW).description == "Very High"
        assert EnergyRecord.create(5, timestamp=NOW).emoji == "⚡"

    def test_is_from_today(self):
        record = EnergyRecord.create(3, timestamp=to_local(datetime(2024, 1, 15, 0, 5)))
        assert record.is_from_today(NOW) is True
        assert record.is_from_today(to_local(datetime(2024, 1, 16, 0, 5))) is False

    def test_dict_round_trip(self):
        record = EnergyRecord.create(4, timestamp=NOW)
        restored = EnergyRecord.from_dict(record.to_dict())
        assert restored == record

    def test_from_dict_rejects_bad_rating(self):
        data = EnergyRecord.create(4, timestamp=NOW).to_dict()
        data['rating'] = 9
        with pytest.raises(ValidationError):
            EnergyRecord.from_dict(data)

    def test_dict_round_trip_keeps_microseconds(self):
        record = EnergyRecord.create(4, timestamp=NOW.replace(microsecond=123456))
        restored = EnergyRecord.from_dict(record.to_dict())
        assert restored.timestamp.microsecond == 123456
        assert restored == record

    def test_from_dict_rejects_fractional_rating(self):
        data = EnergyRecord.create(4, timestamp=NOW).to_dict()
        data['rating'] = 3.7
        with pytest.raises(ValidationError):
            EnergyRecord.from_dict(data)


# =========================================
# SleepRecord
# =========================================

class TestSleepRecord:
    def test_defaults(self):
        record = SleepRecord.create(7.5, timestamp=NOW)
        assert record.hours_slept == 7.5
        assert record.was_interrupted is Interruption.UNSPECIFIED
        assert record.bedtime is None
        assert record.kind is RecordKind.SLEEP

    def test_zero_hours_is_valid(self):
        assert SleepRecord.create(0, timestamp=NOW).hours_slept == 0.0

    def test_bedtime_drops_seconds(self):
        record = SleepRecord.create(8, bedtime=time(23, 15, 42), timestamp=NOW)
        assert record.bedtime == time(23, 15)

    def test_rejects_raw_interruption_value(self):
        with pytest.raises(ValidationError):
            SleepRecord.create(8, was_interrupted="yes", timestamp=NOW)

    def test_rejects_bad_bedtime(self):
        with pytest.raises(ValidationError):
            SleepRecord.create(8, bedtime="23:00", timestamp=NOW)

    @pytest.mark.parametrize("hours, category", [
        (3.5, "Very Short"),
        (4.0, "Short"),
        (6.0, "Adequate"),
        (7.5, "Adequate"),
        (8.0, "Good"),
        (10.0, "Long"),
    ])
    def test_category(self, hours, category):
        assert SleepRecord.create(hours, timestamp=NOW).category == category

    def test_quality(self):
        yes = SleepRecord.create(6, was_interrupted=Interruption.YES, timestamp=NOW)
        no = SleepRecord.create(6, was_interrupted=Interruption.NO, timestamp=NOW)
        skipped = SleepRecord.create(6, timestamp=NOW)
        assert yes.quality_description == "Interrupted"
        assert no.quality_description == "Uninterrupted"
        assert skipped.quality_description == "Not specified"

    def test_formatted(self):
        record = SleepRecord.create(8.0, bedtime=time(22, 30), timestamp=NOW)
        assert record.formatted_hours == "8 hours"
        assert record.formatted_bedtime == "10:30 PM"
        assert SleepRecord.create(6.5, timestamp=NOW).formatted_bedtime is None

    def test_dict_round_trip_keeps_tri_state(self):
        for choice in Interruption:
            record = SleepRecord.create(6.5, was_interrupted=choice, bedtime=time(23, 0), timestamp=NOW)
            restored = SleepRecord.from_dict(record.to_dict())
            assert restored == record
            assert restored.was_interrupted is choice

    def test_from_dict_missing_interruption_is_unspecified(self):
        data = SleepRecord.create(7, timestamp=NOW).to_dict()
        del data['was_interrupted']
        assert SleepRecord.from_dict(data).was_interrupted is Interruption.UNSPECIFIED


# =========================================
# Interruption / helpers
# =========================================

class TestInterruptionChoice:
    def test_labels(self):
        assert Interruption.from_choice("Yes") is Interruption.YES
        assert Interruption.from_choice("no") is Interruption.NO
        assert Interruption.from_choice(" Skip ") is Interruption.UNSPECIFIED

    def test_unknown(self):
        with pytest.raises(ValidationError):
            Interruption.from_choice("maybe")


class TestFormatHelpers:
    def test_format_hours(self):
        assert format_hours(7.5) == "7.5"
        assert format_hours(8.0) == "8"
        assert format_hours(0) == "0"

    def test_format_clock(self):
        assert format_clock(0, 0) == "12:00 AM"
        assert format_clock(12, 30) == "12:30 PM"
        assert format_clock(19, 5) == "7:05 PM"
