"""Display strings for slot labels, offsets and time differences."""

from __future__ import annotations

from datetime import datetime
from typing import Optional

from zonepulse.models import LocalProjection, Zone
from .slot_generator import to_instant
from .zone_projector import load_civil_zone, utc_offset_minutes

TIME_FORMAT_12H = "12h"
TIME_FORMAT_24H = "24h"
TIME_FORMATS = (TIME_FORMAT_12H, TIME_FORMAT_24H)

MARS_SUFFIX = "MTC"
INVALID_LABEL = "--:--"


def _twelve_hour(hour: int) -> tuple[int, str]:
    meridiem = "AM" if hour < 12 else "PM"
    return (hour % 12) or 12, meridiem


def format_time(
    projection: LocalProjection,
    time_format: str = TIME_FORMAT_12H,
    show_seconds: bool = False,
) -> str:
    """Label for a projected slot.

    Civil zones follow ``time_format``; Mars zones always read
    ``h:mm AM MTC (Sol N)``.
    """
    if not projection.valid:
        return INVALID_LABEL

    if projection.is_mars:
        hour, meridiem = _twelve_hour(projection.hour)
        return f"{hour}:{projection.minute:02d} {meridiem} {MARS_SUFFIX} (Sol {projection.sol})"

    seconds = f":{projection.second:02d}" if show_seconds else ""
    if time_format == TIME_FORMAT_24H:
        return f"{projection.hour:02d}:{projection.minute:02d}{seconds}"
    hour, meridiem = _twelve_hour(projection.hour)
    return f"{hour}:{projection.minute:02d}{seconds} {meridiem}"


def format_utc_offset(minutes: int) -> str:
    sign = "+" if minutes >= 0 else "-"
    hours, mins = divmod(abs(minutes), 60)
    return f"{sign}{hours:02d}:{mins:02d}"


def format_offset(zone: Zone, instant: Optional[datetime] = None) -> str:
    """Offset label for a column header.

    Civil zones show the UTC offset at ``instant`` (now when omitted).
    Mars zones show the longitude offset from Coordinated Mars Time.
    """
    if zone.is_mars:
        longitude_hours = zone.mars_site.longitude_east / 15.0
        sign = "+" if longitude_hours >= 0 else "-"
        whole = int(abs(longitude_hours))
        minutes = int((abs(longitude_hours) - whole) * 60)
        return f"{MARS_SUFFIX}{sign}{whole:02d}:{minutes:02d}"
    if instant is None:
        instant = datetime.now(load_civil_zone(zone.id))
    return format_utc_offset(utc_offset_minutes(to_instant(instant), zone.id))


def format_time_difference(selected: datetime, reference: datetime) -> str:
    """Human phrase for how far the selected instant is from the reference.

    Examples: ``"2 hours 30 minutes from now"``, ``"45 minutes ago"``.
    """
    seconds = (to_instant(selected) - to_instant(reference)).total_seconds()
    direction = "from now" if seconds >= 0 else "ago"
    hours, minutes = divmod(int(abs(seconds) // 60), 60)

    parts = []
    if hours:
        parts.append(f"{hours} {'hour' if hours == 1 else 'hours'}")
    if minutes or not hours:
        parts.append(f"{minutes} {'minute' if minutes == 1 else 'minutes'}")
    return f"{' '.join(parts)} {direction}"


def format_date_heading(instant: datetime, zone: Zone, projection: Optional[LocalProjection] = None) -> str:
    """Date-change marker text, e.g. ``"Sunday, March 10, 2024"`` or ``"Sol 1234"``."""
    if zone.is_mars:
        if projection is None or not projection.valid:
            return "Sol ?"
        return f"Sol {projection.sol}"
    local = to_instant(instant).astimezone(load_civil_zone(zone.id))
    return f"{local:%A}, {local:%B} {local.day}, {local.year}"


def search_labels(projection: LocalProjection) -> tuple[str, str, str, str]:
    """(12h hour, 24h hour, 12h time, 24h time) in lower case for matching."""
    hour12, meridiem = _twelve_hour(projection.hour)
    return (
        str(hour12),
        f"{projection.hour:02d}",
        f"{hour12}:{projection.minute:02d} {meridiem}".lower(),
        f"{projection.hour:02d}:{projection.minute:02d}",
    )
