"""Day slot sequence generation and slot lookup."""

from __future__ import annotations

from bisect import bisect_right
from datetime import datetime, timedelta, timezone
from typing import Optional, Sequence, Union

from zonepulse.errors import ConfigurationError
from .zone_projector import load_civil_zone

MINUTES_PER_DAY = 24 * 60
DEFAULT_STEP_MINUTES = 30
DEFAULT_SLOT_COUNT = 48


def to_instant(value: Union[datetime, float, int]) -> datetime:
    """Normalise an epoch timestamp or datetime into an aware UTC datetime.

    Naive datetimes are taken to be UTC.

    Raises:
        OverflowError, ValueError, OSError: If a timestamp is outside the
            platform's representable range
    """
    if isinstance(value, datetime):
        if value.tzinfo is None:
            return value.replace(tzinfo=timezone.utc)
        return value.astimezone(timezone.utc)
    return datetime.fromtimestamp(float(value), tz=timezone.utc)


def instant_millis(instant: datetime) -> int:
    """Millisecond epoch timestamp used for exact instant comparison."""
    delta = to_instant(instant) - datetime(1970, 1, 1, tzinfo=timezone.utc)
    return delta // timedelta(milliseconds=1)


def validate_step_minutes(step_minutes: int) -> int:
    """Ensure a slot step evenly divides one day.

    Raises:
        ConfigurationError: If the step is not a positive divisor of 1440
    """
    if not isinstance(step_minutes, int) or isinstance(step_minutes, bool):
        raise ConfigurationError(f"Slot step must be an integer, got {step_minutes!r}")
    if step_minutes <= 0 or MINUTES_PER_DAY % step_minutes != 0:
        raise ConfigurationError(
            f"Slot step of {step_minutes} minutes does not evenly divide a day"
        )
    return step_minutes


def local_midnight(reference_instant: datetime, reference_zone: Optional[str] = None) -> datetime:
    """Start of the reference instant's calendar day in the reference zone, as UTC."""
    instant = to_instant(reference_instant)
    if reference_zone is None:
        tz = timezone.utc
    else:
        tz = load_civil_zone(reference_zone)
    local = instant.astimezone(tz)
    midnight = datetime(local.year, local.month, local.day, tzinfo=tz)
    return midnight.astimezone(timezone.utc)


def generate_slots(
    reference_instant: datetime,
    step_minutes: int = DEFAULT_STEP_MINUTES,
    count: int = DEFAULT_SLOT_COUNT,
    reference_zone: Optional[str] = None,
) -> list[datetime]:
    """Build the ordered slot instants for the reference instant's day.

    Slots start at local midnight of ``reference_instant`` in
    ``reference_zone`` (UTC when None) and are spaced by exactly
    ``step_minutes`` of elapsed time.

    Args:
        reference_instant: Any instant inside the day to generate
        step_minutes: Spacing between slots; must divide 1440
        count: Number of slots to emit
        reference_zone: IANA zone of the viewer

    Returns:
        ``count`` strictly increasing aware UTC datetimes
    """
    validate_step_minutes(step_minutes)
    if count < 0:
        raise ConfigurationError(f"Slot count must not be negative, got {count}")

    start = local_midnight(reference_instant, reference_zone)
    step = timedelta(minutes=step_minutes)
    return [start + step * index for index in range(count)]


def slot_index_of(slots: Sequence[datetime], instant: datetime) -> int:
    """Index of the slot in the same UTC minute as ``instant``, or -1."""
    target = instant_millis(instant) // 60_000
    for index, slot in enumerate(slots):
        if instant_millis(slot) // 60_000 == target:
            return index
    return -1


def containing_slot_index(
    slots: Sequence[datetime],
    instant: datetime,
    reference_zone: Optional[str] = None,
) -> int:
    """Index of the slot holding ``instant``, or -1 when it is off the grid.

    The last slot also holds the rest of its local day, so on a 25-hour
    day the final local hour still maps to the last slot.
    """
    if not slots:
        return -1
    instant = to_instant(instant)
    if instant < slots[0]:
        return -1
    step = slots[1] - slots[0] if len(slots) > 1 else timedelta(0)
    if instant < slots[-1] + step:
        return bisect_right(slots, instant) - 1
    if local_midnight(instant, reference_zone) == local_midnight(slots[0], reference_zone):
        return len(slots) - 1
    return -1


def current_slot_index(
    slots: Sequence[datetime],
    reference_instant: datetime,
    reference_zone: Optional[str] = None,
) -> int:
    """Index of the slot containing ``reference_instant``.

    Falls back to 0 when the reference lies outside the slots' local day.
    """
    return max(containing_slot_index(slots, reference_instant, reference_zone), 0)
