"""Named Mars sites available as display zones."""

from __future__ import annotations

from typing import Optional

from zonepulse.models import MARS_PREFIX, MarsSite, Zone

MARS_REGION = "Mars"

_SITES: tuple[tuple[str, str, str, MarsSite], ...] = (
    (
        "Jezero",
        "Jezero Crater",
        "Jezero Crater",
        MarsSite(
            longitude_east=77.58,
            latitude=18.38,
            description="Perseverance Rover landing site (2021)",
            rover_name="Perseverance",
            rover_mission="NASA Mars 2020 Mission",
            rover_landing_date="February 18, 2021",
        ),
    ),
    (
        "Elysium",
        "Elysium Planitia",
        "Elysium Planitia",
        MarsSite(longitude_east=135.97, latitude=4.5, description="InSight landing site (2018)"),
    ),
    (
        "Gale",
        "Gale Crater",
        "Gale Crater",
        MarsSite(longitude_east=137.44, latitude=-5.08, description="Curiosity Rover landing site (2012)"),
    ),
    (
        "Olympus",
        "Olympus City",
        "Olympus Mons",
        MarsSite(
            longitude_east=226.31,
            latitude=18.39,
            description="Future settlement at the base of the largest volcano in the solar system",
        ),
    ),
    (
        "Marineris",
        "Marineris Colony",
        "Valles Marineris",
        MarsSite(
            longitude_east=70.0,
            latitude=-13.8,
            description="Future settlement in the largest canyon system in the solar system",
        ),
    ),
    (
        "Airy",
        "Airy Prime",
        "Airy-0 (Prime Meridian)",
        MarsSite(longitude_east=0.0, latitude=5.1, description="Mars Prime Meridian settlement (Airy-0 crater)"),
    ),
)

MARS_ZONES: dict[str, Zone] = {
    f"{MARS_PREFIX}{key}": Zone(
        id=f"{MARS_PREFIX}{key}",
        name=name,
        city=city,
        country="Mars",
        region=MARS_REGION,
        latitude=site.latitude,
        longitude=site.longitude_east,
        mars_site=site,
    )
    for key, name, city, site in _SITES
}

LANDING_SITE_ID = f"{MARS_PREFIX}Jezero"


def mars_catalog() -> list[Zone]:
    return list(MARS_ZONES.values())


def mars_zone(zone_id: str) -> Optional[Zone]:
    return MARS_ZONES.get(zone_id)


def rover_info(zone_id: str) -> Optional[dict]:
    """Rover details for a Mars site, or None when no rover is present."""
    zone = MARS_ZONES.get(zone_id)
    if zone is None or not zone.mars_site.rover_present:
        return None
    site = zone.mars_site
    return {
        "name": site.rover_name,
        "mission": site.rover_mission or "Unknown Mission",
        "landing_date": site.rover_landing_date or "Unknown Date",
        "location": zone.name,
        "latitude": site.latitude,
        "longitude": site.longitude_east,
    }
