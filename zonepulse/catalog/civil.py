"""Curated IANA zones offered by the zone picker."""

from __future__ import annotations

import logging
from datetime import datetime

from PySide6.QtCore import QTimeZone

from zonepulse.models import Zone
from zonepulse.utils import is_valid_civil_zone, utc_offset_minutes

logger = logging.getLogger(__name__)

CURATED_ZONES = (
    # North America
    "America/New_York",
    "America/Chicago",
    "America/Denver",
    "America/Los_Angeles",
    "America/Anchorage",
    "Pacific/Honolulu",
    # Latin America & Caribbean
    "America/Mexico_City",
    "America/Bogota",
    "America/Argentina/Buenos_Aires",
    "America/Sao_Paulo",
    "America/Santiago",
    "America/Lima",
    "America/Toronto",
    "America/Vancouver",
    "America/Phoenix",
    # Europe
    "Europe/London",
    "Europe/Berlin",
    "Europe/Paris",
    "Europe/Rome",
    "Europe/Madrid",
    "Europe/Amsterdam",
    "Europe/Athens",
    "Europe/Moscow",
    "Europe/Istanbul",
    # Africa
    "Africa/Casablanca",
    "Africa/Lagos",
    "Africa/Johannesburg",
    "Africa/Nairobi",
    "Africa/Cairo",
    # Asia
    "Asia/Dubai",
    "Asia/Kolkata",
    "Asia/Bangkok",
    "Asia/Singapore",
    "Asia/Hong_Kong",
    "Asia/Tokyo",
    "Asia/Seoul",
    "Asia/Shanghai",
    "Asia/Jakarta",
    "Asia/Karachi",
    # Australia & Pacific
    "Australia/Sydney",
    "Australia/Melbourne",
    "Australia/Brisbane",
    "Australia/Adelaide",
    "Australia/Perth",
    "Pacific/Auckland",
    # UTC & Global
    "Etc/UTC",
    "Etc/GMT",
)

REGION_ORDER = (
    "North America",
    "Europe",
    "Asia",
    "Australia & Pacific",
    "Africa",
    "UTC & Global",
    "Mars",
    "Other",
)

_REGION_PREFIXES = (
    ("America/", "North America"),
    ("Europe/", "Europe"),
    ("Asia/", "Asia"),
    ("Africa/", "Africa"),
    ("Australia/", "Australia & Pacific"),
    ("Pacific/", "Australia & Pacific"),
    ("Etc/", "UTC & Global"),
    ("Mars/", "Mars"),
)


def region_of(zone_id: str) -> str:
    for prefix, region in _REGION_PREFIXES:
        if zone_id.startswith(prefix):
            return region
    return "Other"


def city_of(zone_id: str) -> str:
    return zone_id.rsplit("/", 1)[-1].replace("_", " ")


def civil_zone(zone_id: str) -> Zone:
    """Display metadata for an IANA zone (validity is not checked here)."""
    parts = zone_id.split("/")
    return Zone(
        id=zone_id,
        name=city_of(zone_id),
        city=city_of(zone_id),
        country=parts[0] if len(parts) > 1 else "",
        region=region_of(zone_id),
    )


def civil_catalog() -> list[Zone]:
    """Curated civil zones valid on this platform.

    Zones missing from the platform's tz database are skipped with a warning.
    """
    zones = []
    for zone_id in CURATED_ZONES:
        if not is_valid_civil_zone(zone_id):
            logger.warning("Skipping zone not known to this platform: %s", zone_id)
            continue
        zones.append(civil_zone(zone_id))
    return zones


def local_zone_id() -> str:
    """IANA name of the host's zone, falling back to UTC."""
    zone_id = QTimeZone.systemTimeZoneId().data().decode("utf-8", errors="replace")
    if zone_id and is_valid_civil_zone(zone_id):
        return zone_id
    logger.warning("Host time zone %r is not an IANA zone; using UTC", zone_id)
    return "UTC"


def sort_key(zone: Zone, now: datetime) -> tuple[int, int, str]:
    """Region order, then current UTC offset, then name."""
    region = zone.region or region_of(zone.id)
    region_rank = REGION_ORDER.index(region) if region in REGION_ORDER else len(REGION_ORDER)
    if zone.is_mars:
        offset = int(zone.mars_site.longitude_east * 4)  # minutes of MTC offset
    else:
        offset = utc_offset_minutes(now, zone.id)
    return region_rank, offset, zone.name
