"""The ordered set of zones shown on the grid."""

from __future__ import annotations

import logging
from typing import Dict, List, Optional, Sequence

from PySide6.QtCore import QObject, Signal

from zonepulse.catalog import resolve_zone
from zonepulse.errors import DisplaySetFullError, ZonePulseError
from zonepulse.models import Zone

logger = logging.getLogger(__name__)

DEFAULT_MAX_ZONES = 8


class ZoneRegistry(QObject):
    """Ordered, de-duplicated display set with the local zone pinned first.

    Identifiers are validated here, once, so every zone that reaches the
    grid projects without error.

    Signals:
        zone_added: Emitted with the id of a newly added zone
        zone_removed: Emitted with the id of a removed zone
        zones_reordered: Emitted after the order of zones changes
    """

    zone_added = Signal(str)
    zone_removed = Signal(str)
    zones_reordered = Signal()

    def __init__(self, local_zone_id: str, max_zones: int = DEFAULT_MAX_ZONES, parent=None):
        super().__init__(parent)
        if max_zones < 1:
            raise ValueError("A display set must hold at least one zone")
        self._max_zones = max_zones
        self._local = resolve_zone(local_zone_id)
        self._zones: Dict[str, Zone] = {self._local.id: self._local}

    # ---- Properties --------------------------------------------------------

    @property
    def local_zone(self) -> Zone:
        return self._local

    @property
    def max_zones(self) -> int:
        return self._max_zones

    @property
    def zone_ids(self) -> List[str]:
        return list(self._zones)

    @property
    def zones(self) -> List[Zone]:
        return list(self._zones.values())

    @property
    def is_full(self) -> bool:
        return len(self._zones) >= self._max_zones

    def __len__(self) -> int:
        return len(self._zones)

    def __contains__(self, zone_id: str) -> bool:
        return zone_id in self._zones

    def get(self, zone_id: str) -> Optional[Zone]:
        return self._zones.get(zone_id)

    # ---- Mutations ---------------------------------------------------------

    def add_zone(self, zone_id: str) -> bool:
        """Append a zone to the display set.

        Returns:
            False if the zone was already displayed, True if it was added

        Raises:
            UnknownZoneError: If the identifier is not a known zone
            DisplaySetFullError: If the set already holds ``max_zones`` zones
        """
        if zone_id in self._zones:
            return False
        zone = resolve_zone(zone_id)
        if self.is_full:
            raise DisplaySetFullError(self._max_zones)
        self._zones[zone.id] = zone
        logger.info("Added zone %s", zone.id)
        self.zone_added.emit(zone.id)
        return True

    def remove_zone(self, zone_id: str) -> bool:
        """Remove a zone. The local zone and unknown ids are left alone.

        Returns:
            True if a zone was removed
        """
        if zone_id == self._local.id or zone_id not in self._zones:
            return False
        del self._zones[zone_id]
        logger.info("Removed zone %s", zone_id)
        self.zone_removed.emit(zone_id)
        return True

    def replace_zone(self, old_id: str, new_id: str) -> bool:
        """Swap one displayed zone for another, keeping its position.

        Raises:
            UnknownZoneError: If ``new_id`` is not a known zone
            ZonePulseError: If ``old_id`` is the local zone
        """
        if old_id not in self._zones or new_id in self._zones:
            return False
        if old_id == self._local.id:
            raise ZonePulseError("The local zone cannot be replaced")
        new_zone = resolve_zone(new_id)
        self._zones = {
            (new_zone.id if zone_id == old_id else zone_id): (new_zone if zone_id == old_id else zone)
            for zone_id, zone in self._zones.items()
        }
        self.zone_removed.emit(old_id)
        self.zone_added.emit(new_zone.id)
        self.zones_reordered.emit()
        return True

    def reorder(self, zone_ids: Sequence[str]):
        """Reorder the display set; the local zone always stays first.

        Raises:
            ValueError: If ``zone_ids`` is not a permutation of the displayed ids
        """
        if sorted(zone_ids) != sorted(self._zones) or len(set(zone_ids)) != len(zone_ids):
            raise ValueError("Reorder must list every displayed zone exactly once")
        ordered = [self._local.id] + [zone_id for zone_id in zone_ids if zone_id != self._local.id]
        if ordered == list(self._zones):
            return
        self._zones = {zone_id: self._zones[zone_id] for zone_id in ordered}
        self.zones_reordered.emit()
