"""Projection of instants into IANA civil time zones."""

from __future__ import annotations

from datetime import datetime, timedelta, timezone
from functools import lru_cache
from typing import Optional
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from zonepulse.errors import UnknownZoneError
from zonepulse.models import LocalProjection

DST_LOOKAHEAD = timedelta(hours=24)


@lru_cache(maxsize=None)
def load_civil_zone(zone_id: str) -> ZoneInfo:
    """Return the tzinfo for an IANA zone name.

    Raises:
        UnknownZoneError: If the platform's zone database has no such zone
    """
    try:
        return ZoneInfo(zone_id)
    except (ZoneInfoNotFoundError, ValueError, TypeError) as exc:
        raise UnknownZoneError(zone_id) from exc


def is_valid_civil_zone(zone_id: str) -> bool:
    try:
        load_civil_zone(zone_id)
    except UnknownZoneError:
        return False
    return True


def _aware(instant: datetime) -> datetime:
    if instant.tzinfo is None:
        return instant.replace(tzinfo=timezone.utc)
    return instant


def utc_offset_minutes(instant: datetime, zone_id: str) -> int:
    """Signed UTC offset of ``zone_id`` at ``instant``, in minutes."""
    local = _aware(instant).astimezone(load_civil_zone(zone_id))
    return int(local.utcoffset() // timedelta(minutes=1))


def project_civil(instant: datetime, zone_id: str) -> LocalProjection:
    """Local calendar fields of ``instant`` in the civil zone ``zone_id``."""
    local = _aware(instant).astimezone(load_civil_zone(zone_id))
    dst = local.dst()
    return LocalProjection(
        zone_id=zone_id,
        hour=local.hour,
        minute=local.minute,
        second=local.second,
        year=local.year,
        month=local.month,
        day=local.day,
        weekday=local.isoweekday(),
        utc_offset_minutes=int(local.utcoffset() // timedelta(minutes=1)),
        is_dst=bool(dst),
    )


def is_near_dst_transition(instant: datetime, zone_id: str) -> bool:
    """Whether the zone's UTC offset changes within the next 24 hours.

    This compares the offset at ``instant`` with the offset 24 hours later.
    It is a look-ahead warning, not the exact transition boundary: a
    transition a few hours before ``instant`` is not reported.
    """
    instant = _aware(instant)
    return utc_offset_minutes(instant, zone_id) != utc_offset_minutes(
        instant + DST_LOOKAHEAD, zone_id
    )


def _in_dst(instant: datetime, tz: ZoneInfo) -> bool:
    return bool(instant.astimezone(tz).dst())


def dst_transitions(zone_id: str, year: int) -> tuple[Optional[datetime], Optional[datetime]]:
    """Find when DST starts and ends in ``zone_id`` during ``year``.

    Scans day by day, then narrows each change down to the minute.

    Returns:
        (start, end) as aware UTC datetimes; either is None when the zone
        has no such transition in that year
    """
    tz = load_civil_zone(zone_id)
    start: Optional[datetime] = None
    end: Optional[datetime] = None

    day = datetime(year, 1, 1, tzinfo=tz).astimezone(timezone.utc)
    year_end = datetime(year + 1, 1, 1, tzinfo=tz).astimezone(timezone.utc)
    previous = _in_dst(day, tz)
    while day < year_end:
        following = day + timedelta(days=1)
        current = _in_dst(following, tz)
        if current != previous:
            low, high = day, following
            while high - low > timedelta(minutes=1):
                middle = low + (high - low) / 2
                if _in_dst(middle, tz) == previous:
                    low = middle
                else:
                    high = middle
            high = high.replace(second=0, microsecond=0)
            if current:
                start = start or high
            else:
                end = end or high
        previous = current
        day = following
    return start, end
