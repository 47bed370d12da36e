"""Tests for the stateless instant classifier."""

from __future__ import annotations

from datetime import datetime, timedelta, timezone

import pytest

from zonepulse.catalog import MARS_ZONES, civil_zone
from zonepulse.models import HighlightState, LocalProjection
from zonepulse.utils import (
    classify,
    containing_slot_index,
    current_slot_index,
    generate_slots,
    invalid_projection,
    is_business_hours,
    is_current,
    is_date_boundary,
    is_day,
    is_highlighted,
    is_night,
    is_weekend,
    project_civil,
)


def _at(hour: int, minute: int = 0, weekday: int = 3) -> LocalProjection:
    return LocalProjection(zone_id="UTC", hour=hour, minute=minute, second=0, weekday=weekday)


class TestIsCurrent:

    def test_floors_reference_to_step(self, march_10_morning):
        slot_0800 = datetime(2024, 3, 10, 8, 0, tzinfo=timezone.utc)
        slot_0830 = datetime(2024, 3, 10, 8, 30, tzinfo=timezone.utc)

        assert is_current(slot_0800, march_10_morning, 30, "Europe/London")
        assert not is_current(slot_0830, march_10_morning, 30, "Europe/London")

    def test_exact_boundary_belongs_to_new_slot(self):
        reference = datetime(2024, 3, 10, 8, 30, tzinfo=timezone.utc)
        assert is_current(datetime(2024, 3, 10, 8, 30, tzinfo=timezone.utc), reference)

    def test_same_time_on_another_day_is_not_current(self, march_10_morning):
        assert not is_current(datetime(2024, 3, 9, 8, 0, tzinfo=timezone.utc), march_10_morning)

    def test_evaluated_in_reference_zone(self):
        reference = datetime(2024, 3, 10, 8, 15, tzinfo=timezone.utc)  # 13:45 in Kolkata
        slots = generate_slots(reference, 30, 48, "Asia/Kolkata")
        current = [s for s in slots if is_current(s, reference, 30, "Asia/Kolkata")]

        assert len(current) == 1
        assert project_civil(current[0], "Asia/Kolkata").hour == 13
        assert project_civil(current[0], "Asia/Kolkata").minute == 30


class TestIsHighlighted:

    def test_millisecond_exact(self):
        selected = datetime(2024, 3, 10, 8, 0, tzinfo=timezone.utc)

        assert is_highlighted(selected, selected)
        assert not is_highlighted(selected + timedelta(milliseconds=1), selected)
        assert is_highlighted(selected + timedelta(microseconds=200), selected)

    def test_accepts_highlight_state(self):
        selected = datetime(2024, 3, 10, 8, 0, tzinfo=timezone.utc)

        assert is_highlighted(selected, HighlightState(selected, 30, 60))
        assert not is_highlighted(selected, HighlightState.idle(60))
        assert not is_highlighted(selected, None)


class TestWindows:

    @pytest.mark.parametrize("hour,expected", [(19, False), (20, True), (23, True), (0, True), (5, True), (6, False), (12, False)])
    def test_default_night_wraps_midnight(self, hour, expected):
        assert is_night(_at(hour)) is expected
        assert is_day(_at(hour)) is not expected

    def test_non_wrapping_window(self):
        assert is_night(_at(2), 1, 5)
        assert not is_night(_at(5), 1, 5)

    def test_invalid_projection_is_neither_night_nor_day(self):
        p = invalid_projection("Mars/Airy")
        assert not is_night(p)
        assert not is_day(p)
        assert not is_date_boundary(p)

    def test_weekend(self):
        assert is_weekend(_at(10, weekday=6))
        assert is_weekend(_at(10, weekday=7))
        assert not is_weekend(_at(10, weekday=5))
        assert not is_weekend(LocalProjection(zone_id="Mars/Airy", hour=1, minute=0, second=0, sol=5))

    def test_date_boundary(self):
        assert is_date_boundary(_at(0, 0))
        assert not is_date_boundary(_at(0, 30))
        assert not is_date_boundary(_at(12, 0))

    def test_business_hours(self):
        assert is_business_hours(_at(9))
        assert is_business_hours(_at(16, 30))
        assert not is_business_hours(_at(17))
        assert not is_business_hours(_at(10, weekday=6))


class TestClassify:

    def test_civil_slot(self, march_10_morning):
        slot = datetime(2024, 3, 10, 8, 0, tzinfo=timezone.utc)
        result = classify(slot, civil_zone("Europe/London"), march_10_morning, slot,
                          reference_zone="Europe/London")

        assert result.is_current
        assert result.is_highlighted
        assert result.is_weekend  # Sunday
        assert result.is_day
        assert not result.is_business_hours
        assert not result.is_near_dst

    def test_near_dst_flag(self):
        slot = datetime(2024, 3, 9, 12, 0, tzinfo=timezone.utc)
        result = classify(slot, civil_zone("America/New_York"), slot)
        assert result.is_near_dst

    def test_mars_slot_has_no_weekend_or_dst(self, march_10_morning):
        result = classify(march_10_morning, MARS_ZONES["Mars/Jezero"], march_10_morning)

        assert not result.is_weekend
        assert not result.is_near_dst
        assert not result.is_business_hours


class TestCurrentOnDstDays:
    """Exactly one row is current even when wall-clock hours repeat or run long."""

    NEW_YORK = "America/New_York"

    @pytest.fixture
    def fall_back_slots(self):
        return generate_slots(datetime(2024, 11, 3, 12, tzinfo=timezone.utc), 30, 48, self.NEW_YORK)

    def _current_rows(self, slots, reference):
        return [i for i, slot in enumerate(slots) if is_current(slot, reference, 30, self.NEW_YORK, 48)]

    def test_repeated_hour_has_one_current_row(self, fall_back_slots):
        reference = datetime(2024, 11, 3, 5, 15, tzinfo=timezone.utc)  # 01:15 EDT

        assert self._current_rows(fall_back_slots, reference) == [2]
        assert current_slot_index(fall_back_slots, reference, self.NEW_YORK) == 2

    def test_second_pass_of_repeated_hour(self, fall_back_slots):
        reference = datetime(2024, 11, 3, 6, 15, tzinfo=timezone.utc)  # 01:15 EST

        assert self._current_rows(fall_back_slots, reference) == [4]
        assert current_slot_index(fall_back_slots, reference, self.NEW_YORK) == 4

    def test_last_local_hour_of_long_day_stays_on_last_slot(self, fall_back_slots):
        reference = datetime(2024, 11, 4, 4, 15, tzinfo=timezone.utc)  # 23:15 EST on Nov 3

        assert fall_back_slots[-1] == datetime(2024, 11, 4, 3, 30, tzinfo=timezone.utc)
        assert self._current_rows(fall_back_slots, reference) == [47]
        assert current_slot_index(fall_back_slots, reference, self.NEW_YORK) == 47

    def test_next_local_day_is_off_the_grid(self, fall_back_slots):
        reference = datetime(2024, 11, 4, 5, 15, tzinfo=timezone.utc)  # 00:15 EST on Nov 4

        assert self._current_rows(fall_back_slots, reference) == []
        assert containing_slot_index(fall_back_slots, reference, self.NEW_YORK) == -1
        assert current_slot_index(fall_back_slots, reference, self.NEW_YORK) == 0
