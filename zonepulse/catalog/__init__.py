"""Catalog of selectable civil and Mars zones."""

from __future__ import annotations

from datetime import date, datetime, timezone
from typing import Optional

from zonepulse.errors import UnknownZoneError
from zonepulse.models import Zone, zone_family, ZoneFamily
from zonepulse.utils import is_valid_civil_zone

from .civil import (
    CURATED_ZONES,
    REGION_ORDER,
    civil_catalog,
    civil_zone,
    local_zone_id,
    region_of,
    sort_key,
)
from .mars import LANDING_SITE_ID, MARS_ZONES, mars_catalog, mars_zone, rover_info


def mars_enabled(today: date) -> bool:
    """Mars zones are offered only on April 1."""
    return today.month == 4 and today.day == 1


def list_zones(
    today: Optional[date] = None,
    include_mars: Optional[bool] = None,
    now: Optional[datetime] = None,
) -> list[Zone]:
    """Selectable zones in picker order.

    Args:
        today: Local calendar date deciding whether Mars zones appear
        include_mars: Force Mars zones on or off regardless of the date
        now: Instant used to order civil zones by their current offset

    Returns:
        Zones sorted by region, UTC offset and name
    """
    now = now or datetime.now(timezone.utc)
    if include_mars is None:
        include_mars = mars_enabled(today or now.date())

    zones = civil_catalog()
    if include_mars:
        zones.extend(mars_catalog())
    return sorted(zones, key=lambda zone: sort_key(zone, now))


def resolve_zone(zone_id: str) -> Zone:
    """Zone metadata for any Mars site or IANA identifier.

    Raises:
        UnknownZoneError: If the identifier is neither a known Mars site
            nor a zone in the platform's tz database
    """
    if zone_family(zone_id) is ZoneFamily.MARS:
        zone = mars_zone(zone_id)
        if zone is None:
            raise UnknownZoneError(zone_id)
        return zone
    if not is_valid_civil_zone(zone_id):
        raise UnknownZoneError(zone_id)
    return civil_zone(zone_id)


__all__ = [
    "CURATED_ZONES",
    "REGION_ORDER",
    "LANDING_SITE_ID",
    "MARS_ZONES",
    "civil_catalog",
    "civil_zone",
    "list_zones",
    "local_zone_id",
    "mars_catalog",
    "mars_enabled",
    "mars_zone",
    "region_of",
    "resolve_zone",
    "rover_info",
]
