"""Grid engine: one owner for the slots, zones, highlight and scroll state."""

from __future__ import annotations

import logging
import time
from datetime import date, datetime
from typing import Any, Callable, Dict, List, Optional

from PySide6.QtCore import QObject, QTimer, Signal

from zonepulse.catalog import local_zone_id
from zonepulse.config import Settings
from zonepulse.models import HighlightState, SlotRow
from zonepulse.utils import (
    classify,
    current_slot_index,
    format_time,
    generate_slots,
    load_civil_zone,
    project,
    to_instant,
)
from .highlight_lifecycle import HighlightLifecycle
from .scroll_coordinator import ScrollCoordinator
from .zone_registry import ZoneRegistry

logger = logging.getLogger(__name__)


class GridEngine(QObject):
    """Drives the time grid from an external reference-instant feed.

    The engine owns no wall clock of its own: the host calls
    :meth:`on_reference_tick` (typically once a second) with the current
    instant. Its only timer is the highlight countdown, started by
    :meth:`start` and stopped by :meth:`dispose`.

    Signals:
        slots_changed: Emitted with the new slot list when the day changes
        reference_changed: Emitted with each new reference instant
        highlight_changed: Emitted with the HighlightState after each change
    """

    slots_changed = Signal(object)
    reference_changed = Signal(object)
    highlight_changed = Signal(object)

    COUNTDOWN_INTERVAL_MS = 1000

    def __init__(
        self,
        settings: Optional[Settings] = None,
        clock: Callable[[], float] = time.monotonic,
        parent=None,
    ):
        super().__init__(parent)
        self._settings = settings or Settings()
        self._reference_zone = self._settings.reference_zone or local_zone_id()
        self._tz = load_civil_zone(self._reference_zone)

        self._slots: List[datetime] = []
        self._slot_date: Optional[date] = None
        self._reference: Optional[datetime] = None
        self._started = False

        self.registry = ZoneRegistry(self._reference_zone, self._settings.max_zones, parent=self)
        self.highlight = HighlightLifecycle(
            self._settings.highlight_duration_seconds,
            self._settings.highlight_auto_clear,
            clock,
            parent=self,
        )
        self.scroll = ScrollCoordinator(
            self._settings.scroll_settle_ms,
            self._settings.effective_alignment,
            self._reference_zone,
            parent=self,
        )

        self._countdown_timer = QTimer(self)
        self._countdown_timer.setInterval(self.COUNTDOWN_INTERVAL_MS)
        self._countdown_timer.timeout.connect(self.highlight.poll)

        self.registry.zone_added.connect(self.scroll.register_zone)
        self.registry.zone_removed.connect(self.scroll.unregister_zone)
        self.scroll.user_scrolled.connect(self._on_user_scrolled)
        self.highlight.state_changed.connect(self._on_highlight_state)
        self.highlight.highlight_cleared.connect(self._on_highlight_cleared)

        self.scroll.register_zone(self._reference_zone)

    # ---- Properties --------------------------------------------------------

    @property
    def settings(self) -> Settings:
        return self._settings

    @property
    def reference_zone(self) -> str:
        return self._reference_zone

    @property
    def reference_instant(self) -> Optional[datetime]:
        return self._reference

    @property
    def slots(self) -> List[datetime]:
        return list(self._slots)

    @property
    def highlight_state(self) -> HighlightState:
        return self.highlight.state

    @property
    def is_running(self) -> bool:
        return self._started

    # ---- Lifecycle ---------------------------------------------------------

    def start(self):
        """Start the highlight countdown timer. Calling twice is harmless."""
        if self._started:
            return
        self._started = True
        self._countdown_timer.start()
        logger.debug("Grid engine started for %s", self._reference_zone)

    def dispose(self):
        """Stop every timer and drop all scroll handles."""
        self._countdown_timer.stop()
        self.scroll.dispose()
        self._started = False
        logger.debug("Grid engine disposed")

    # ---- Inputs ------------------------------------------------------------

    def add_zone(self, zone_id: str, view: Any = None) -> bool:
        added = self.registry.add_zone(zone_id)
        if view is not None and zone_id in self.registry:
            self.scroll.register_zone(zone_id, view)
        return added

    def remove_zone(self, zone_id: str) -> bool:
        return self.registry.remove_zone(zone_id)

    def attach_view(self, zone_id: str, view: Any):
        """Give a displayed zone's scroll handle its list view."""
        if zone_id not in self.registry:
            raise KeyError(zone_id)
        self.scroll.register_zone(zone_id, view)

    def on_reference_tick(self, reference_instant: datetime):
        """Advance the grid to a new current instant.

        Regenerates the slots when the reference zone's calendar date
        changes, then lets the scroll coordinator track the current slot.
        """
        reference = to_instant(reference_instant)
        local_date = reference.astimezone(self._tz).date()
        if local_date != self._slot_date:
            self._slots = generate_slots(
                reference,
                self._settings.step_minutes,
                self._settings.slot_count,
                self._reference_zone,
            )
            self._slot_date = local_date
            self.scroll.set_slots(self._slots)
            logger.info("Generated %d slots for %s", len(self._slots), local_date)
            self.slots_changed.emit(self.slots)
        self._reference = reference
        self.scroll.on_reference_tick(reference)
        self.reference_changed.emit(reference)

    def select(self, instant: datetime):
        """Highlight ``instant`` and bring it into view in every idle zone."""
        self.highlight.select(instant)
        self.scroll.on_selection_changed(self.highlight.selected)

    def select_index(self, index: int):
        self.select(self._slots[index])

    def clear(self):
        self.highlight.clear()

    def activity(self) -> bool:
        return self.highlight.activity()

    def user_scroll(self, zone_id: str, offset: Optional[float] = None):
        self.scroll.on_user_scroll(zone_id, offset)

    def search(self, query: str) -> List[str]:
        return self.scroll.on_search(query)

    # ---- Outputs -----------------------------------------------------------

    def current_index(self) -> Optional[int]:
        if not self._slots or self._reference is None:
            return None
        return current_slot_index(self._slots, self._reference, self._reference_zone)

    def rows(self, zone_id: str) -> List[SlotRow]:
        """Projected, classified and labelled rows for one displayed zone.

        Raises:
            KeyError: If the zone is not in the display set
        """
        zone = self.registry.get(zone_id)
        if zone is None:
            raise KeyError(zone_id)
        if not self._slots or self._reference is None:
            return []
        settings = self._settings
        rows = []
        for index, slot in enumerate(self._slots):
            projection = project(slot, zone)
            classification = classify(
                slot,
                zone,
                self._reference,
                self.highlight.state,
                step_minutes=settings.step_minutes,
                slot_count=settings.slot_count,
                reference_zone=self._reference_zone,
                night_hours=settings.night_hours,
                business_hours=settings.business_hours,
                projection=projection,
            )
            label = format_time(projection, settings.time_format, settings.show_seconds)
            rows.append(SlotRow(index, slot, projection, classification, label))
        return rows

    def grid(self) -> Dict[str, List[SlotRow]]:
        return {zone_id: self.rows(zone_id) for zone_id in self.registry.zone_ids}

    # ---- Slots -------------------------------------------------------------

    def _on_user_scrolled(self, zone_id: str):
        self.highlight.activity()

    def _on_highlight_state(self, state: HighlightState):
        self.scroll.set_highlight_active(state.is_active)
        self.highlight_changed.emit(state)

    def _on_highlight_cleared(self):
        if self._reference is not None:
            self.scroll.on_selection_changed(self._reference)
