"""Zone identifiers and display metadata."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Optional


MARS_PREFIX = "Mars/"


class ZoneFamily(Enum):
    """The two kinds of zone a column can display."""
    CIVIL = "civil"
    MARS = "mars"


def zone_family(zone_id: str) -> ZoneFamily:
    """Family of a zone, decided only by its identifier's namespace."""
    if zone_id.startswith(MARS_PREFIX):
        return ZoneFamily.MARS
    return ZoneFamily.CIVIL


@dataclass(frozen=True)
class MarsSite:
    """Fixed location on Mars used to derive local mean solar time.

    Attributes:
        longitude_east: Degrees East of the Airy-0 prime meridian
        latitude: Degrees North (negative for South)
        description: Short human description of the site
        rover_name: Rover operating at the site, if any
        rover_mission: Mission the rover belongs to
        rover_landing_date: Landing date as shown to users
    """
    longitude_east: float
    latitude: float
    description: str = ""
    rover_name: Optional[str] = None
    rover_mission: Optional[str] = None
    rover_landing_date: Optional[str] = None

    @property
    def rover_present(self) -> bool:
        return self.rover_name is not None


@dataclass(frozen=True)
class Zone:
    """A displayable zone: an IANA civil zone or a named Mars site."""
    id: str
    name: str
    city: str = ""
    country: str = ""
    region: str = ""
    latitude: Optional[float] = None
    longitude: Optional[float] = None
    mars_site: Optional[MarsSite] = None

    def __post_init__(self):
        if self.family is ZoneFamily.MARS and self.mars_site is None:
            raise ValueError(f"Mars zone {self.id!r} needs a Mars site")
        if self.family is ZoneFamily.CIVIL and self.mars_site is not None:
            raise ValueError(f"Civil zone {self.id!r} cannot carry a Mars site")

    @property
    def family(self) -> ZoneFamily:
        return zone_family(self.id)

    @property
    def is_mars(self) -> bool:
        return self.family is ZoneFamily.MARS

    def __str__(self) -> str:
        return f"{self.name} ({self.id})"
