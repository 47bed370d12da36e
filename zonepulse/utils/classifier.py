"""Stateless labels for (instant, zone) pairs.

Every predicate is recomputed on each render tick; nothing is cached
because the reference instant moves every tick.
"""

from __future__ import annotations

from datetime import datetime, timedelta
from typing import Optional, Union

from zonepulse.models import Classification, HighlightState, LocalProjection, Zone
from .projection import near_dst_transition, project
from .slot_generator import (
    DEFAULT_SLOT_COUNT,
    DEFAULT_STEP_MINUTES,
    instant_millis,
    local_midnight,
    to_instant,
)

DEFAULT_NIGHT_HOURS = (20, 6)
DEFAULT_BUSINESS_HOURS = (9, 17)
WEEKEND_DAYS = frozenset({6, 7})

Highlight = Union[HighlightState, datetime, None]


def _hour_in_window(hour: int, start: int, end: int) -> bool:
    if start > end:
        return hour >= start or hour < end
    return start <= hour < end


def is_current(
    instant: datetime,
    reference_instant: datetime,
    step_minutes: int = DEFAULT_STEP_MINUTES,
    reference_zone: Optional[str] = None,
    slot_count: int = DEFAULT_SLOT_COUNT,
) -> bool:
    """Whether the slot starting at ``instant`` holds the reference instant.

    Slots span ``step_minutes`` of elapsed time, so a wall-clock hour
    repeated by a DST fall-back still has a single current slot. The last
    of the ``slot_count`` slots generated for the reference's local day in
    ``reference_zone`` also holds whatever is left of that day.
    """
    slot = to_instant(instant)
    reference = to_instant(reference_instant)
    step = timedelta(minutes=step_minutes)
    if slot <= reference < slot + step:
        return True
    last = local_midnight(reference, reference_zone) + step * (slot_count - 1)
    return slot == last and reference > last


def is_highlighted(instant: datetime, highlight: Highlight) -> bool:
    """Millisecond-exact match against the highlighted instant."""
    if isinstance(highlight, HighlightState):
        highlight = highlight.selected
    if highlight is None:
        return False
    return instant_millis(instant) == instant_millis(highlight)


def is_night(
    projection: LocalProjection,
    start: int = DEFAULT_NIGHT_HOURS[0],
    end: int = DEFAULT_NIGHT_HOURS[1],
) -> bool:
    if not projection.valid:
        return False
    return _hour_in_window(projection.hour, start, end)


def is_day(
    projection: LocalProjection,
    start: int = DEFAULT_NIGHT_HOURS[0],
    end: int = DEFAULT_NIGHT_HOURS[1],
) -> bool:
    return projection.valid and not is_night(projection, start, end)


def is_weekend(projection: LocalProjection) -> bool:
    """Saturday or Sunday in the zone; Mars sols have no weekday."""
    return projection.weekday in WEEKEND_DAYS


def is_date_boundary(projection: LocalProjection) -> bool:
    return projection.valid and projection.hour == 0 and projection.minute == 0


def is_business_hours(
    projection: LocalProjection,
    start: int = DEFAULT_BUSINESS_HOURS[0],
    end: int = DEFAULT_BUSINESS_HOURS[1],
) -> bool:
    """Weekday hours inside the business window (civil zones only)."""
    if projection.weekday is None or projection.weekday in WEEKEND_DAYS:
        return False
    return start <= projection.hour < end


def classify(
    instant: datetime,
    zone: Zone,
    reference_instant: datetime,
    highlight: Highlight = None,
    *,
    step_minutes: int = DEFAULT_STEP_MINUTES,
    reference_zone: Optional[str] = None,
    slot_count: int = DEFAULT_SLOT_COUNT,
    night_hours: tuple[int, int] = DEFAULT_NIGHT_HOURS,
    business_hours: tuple[int, int] = DEFAULT_BUSINESS_HOURS,
    projection: Optional[LocalProjection] = None,
) -> Classification:
    """Compute every label for ``instant`` as displayed in ``zone``.

    Args:
        instant: Slot instant being rendered
        zone: Column the slot is rendered in
        reference_instant: The host's current instant
        highlight: Highlight state or highlighted instant
        step_minutes: Slot step, the span of the current slot
        reference_zone: Zone the slots were generated in
        slot_count: Number of slots generated for the day
        night_hours: (start, end) hours of the night window
        business_hours: (start, end) hours of the business window
        projection: Pre-computed projection of ``instant`` into ``zone``

    Returns:
        Classification with all flags filled in
    """
    if projection is None:
        projection = project(instant, zone)
    return Classification(
        is_current=is_current(instant, reference_instant, step_minutes, reference_zone, slot_count),
        is_highlighted=is_highlighted(instant, highlight),
        is_night=is_night(projection, *night_hours),
        is_weekend=is_weekend(projection),
        is_date_boundary=is_date_boundary(projection),
        is_near_dst=near_dst_transition(instant, zone),
        is_business_hours=is_business_hours(projection, *business_hours),
    )
