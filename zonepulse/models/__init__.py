"""Data models for zones, projections and highlight state."""

from .zone import (
    MARS_PREFIX,
    ZoneFamily,
    MarsSite,
    Zone,
    zone_family,
)
from .projection import (
    LocalProjection,
    Classification,
    SlotRow,
)
from .highlight import HighlightPhase, HighlightState

__all__ = [
    "MARS_PREFIX",
    "ZoneFamily",
    "MarsSite",
    "Zone",
    "zone_family",
    "LocalProjection",
    "Classification",
    "SlotRow",
    "HighlightPhase",
    "HighlightState",
]
