"""Per-zone scroll handles and programmatic re-centering."""

from __future__ import annotations

import logging
from datetime import datetime
from typing import Any, Dict, List, Optional, Sequence

from PySide6.QtCore import QObject, QTimer, Signal

from zonepulse.utils import (
    containing_slot_index,
    current_slot_index,
    find_slot_index,
    slot_index_of,
    to_instant,
)

logger = logging.getLogger(__name__)

DEFAULT_SETTLE_MS = 500
ALIGN_CENTER = "center"
ALIGN_START = "start"


class ScrollHandle(QObject):
    """One zone's scrollable list plus its user-active flag.

    The flag is raised by :meth:`mark_user_active` and drops after
    ``settle_ms`` of quiet; each new user scroll restarts the window.

    Signals:
        settled: Emitted with the zone id when the user-active window ends
    """

    settled = Signal(str)

    def __init__(self, zone_id: str, view: Any = None, settle_ms: int = DEFAULT_SETTLE_MS, parent=None):
        super().__init__(parent)
        self.zone_id = zone_id
        self.view = view
        self.last_offset: Optional[float] = None
        self._user_active = False
        self._disposed = False

        self._settle_timer = QTimer(self)
        self._settle_timer.setSingleShot(True)
        self._settle_timer.setInterval(settle_ms)
        self._settle_timer.timeout.connect(self._on_settled)

    @property
    def user_active(self) -> bool:
        return self._user_active

    @property
    def disposed(self) -> bool:
        return self._disposed

    @property
    def settle_pending(self) -> bool:
        return self._settle_timer.isActive()

    def mark_user_active(self, offset: Optional[float] = None):
        if self._disposed:
            return
        self.last_offset = offset
        self._user_active = True
        self._settle_timer.start()

    def scroll_to(self, index: int, alignment: str):
        """Ask the view to bring ``index`` into place, if a view is attached."""
        if self._disposed or self.view is None:
            return
        self.view.scroll_to_index(index, alignment)

    def dispose(self):
        """Stop the settle timer and detach the view. Safe to call twice."""
        if self._disposed:
            return
        self._disposed = True
        self._settle_timer.stop()
        self._user_active = False
        self.view = None

    def _on_settled(self):
        if self._disposed:
            return
        self._user_active = False
        self.settled.emit(self.zone_id)


class ScrollCoordinator(QObject):
    """Keeps independently scrolled zone lists aligned without fighting the user.

    Zones the user is scrolling are skipped by every programmatic request
    until their handle settles; all other zones are moved.

    Signals:
        scroll_requested: Emitted with (zone_id, index, alignment) per zone moved
        user_scrolled: Emitted with the zone id on each user scroll
        zone_settled: Emitted with the zone id when its user-active window ends
    """

    scroll_requested = Signal(str, int, str)
    user_scrolled = Signal(str)
    zone_settled = Signal(str)

    def __init__(
        self,
        settle_ms: int = DEFAULT_SETTLE_MS,
        alignment: str = ALIGN_CENTER,
        reference_zone: str = "UTC",
        parent=None,
    ):
        super().__init__(parent)
        self._settle_ms = settle_ms
        self._alignment = alignment
        self._reference_zone = reference_zone
        self._handles: Dict[str, ScrollHandle] = {}
        self._slots: List[datetime] = []
        self._highlight_active = False
        self._reference: Optional[datetime] = None
        self._last_boundary: Optional[tuple] = None

    # ---- Properties --------------------------------------------------------

    @property
    def zone_ids(self) -> List[str]:
        return list(self._handles)

    @property
    def slots(self) -> List[datetime]:
        return list(self._slots)

    @property
    def alignment(self) -> str:
        return self._alignment

    @alignment.setter
    def alignment(self, value: str):
        self._alignment = value

    @property
    def highlight_active(self) -> bool:
        return self._highlight_active

    def handle(self, zone_id: str) -> Optional[ScrollHandle]:
        return self._handles.get(zone_id)

    def is_user_active(self, zone_id: str) -> bool:
        handle = self._handles.get(zone_id)
        return handle is not None and handle.user_active

    # ---- Registration ------------------------------------------------------

    def register_zone(self, zone_id: str, view: Any = None) -> ScrollHandle:
        """Create the handle for a newly displayed zone.

        Registering an already known zone only swaps its view.
        """
        handle = self._handles.get(zone_id)
        if handle is not None:
            handle.view = view
            return handle
        handle = ScrollHandle(zone_id, view, self._settle_ms, parent=self)
        handle.settled.connect(self.zone_settled)
        self._handles[zone_id] = handle
        logger.debug("Registered scroll handle for %s", zone_id)
        return handle

    def unregister_zone(self, zone_id: str):
        """Destroy a zone's handle, cancelling any pending settle timer."""
        handle = self._handles.pop(zone_id, None)
        if handle is None:
            return
        handle.dispose()
        handle.setParent(None)
        logger.debug("Unregistered scroll handle for %s", zone_id)

    def dispose(self):
        for zone_id in list(self._handles):
            self.unregister_zone(zone_id)

    # ---- Inputs ------------------------------------------------------------

    def set_slots(self, slots: Sequence[datetime]):
        self._slots = [to_instant(slot) for slot in slots]
        self._last_boundary = None

    def set_highlight_active(self, active: bool):
        self._highlight_active = active

    def on_user_scroll(self, zone_id: str, offset: Optional[float] = None):
        """Mark ``zone_id`` as being scrolled by the user. Unknown zones are ignored."""
        handle = self._handles.get(zone_id)
        if handle is None:
            return
        handle.mark_user_active(offset)
        self.user_scrolled.emit(zone_id)

    def on_selection_changed(self, target_instant: Optional[datetime]) -> List[str]:
        """Scroll every non-active zone to the slot of ``target_instant``.

        Returns:
            Ids of the zones asked to scroll
        """
        if target_instant is None:
            return []
        index = self.index_for(target_instant)
        if index < 0:
            logger.debug("Selection %s is outside the displayed day", target_instant)
            return []
        return self._request(index)

    def on_reference_tick(self, reference_instant: datetime) -> List[str]:
        """Track real time while nothing is highlighted.

        Zones are re-centered on the current slot the first time a tick
        lands in a new slot; ticks within the same slot do nothing.

        Returns:
            Ids of the zones asked to scroll
        """
        self._reference = to_instant(reference_instant)
        if not self._slots:
            return []
        boundary = (self._slots[0], current_slot_index(self._slots, self._reference, self._reference_zone))
        if boundary == self._last_boundary:
            return []
        self._last_boundary = boundary
        if self._highlight_active:
            return []
        return self._request(boundary[1])

    def on_search(self, query: str) -> List[str]:
        """Scroll non-active zones to the first slot matching ``query``.

        A blank or unmatched query scrolls back to the current slot.
        """
        if not self._slots:
            return []
        index = find_slot_index(self._slots, query, self._reference_zone)
        if index is None:
            if self._reference is None:
                return []
            index = current_slot_index(self._slots, self._reference, self._reference_zone)
        return self._request(index)

    # ---- Internals ---------------------------------------------------------

    def index_for(self, instant: datetime) -> int:
        """Slot holding ``instant``: an exact minute match, else the containing slot, else -1."""
        index = slot_index_of(self._slots, instant)
        if index >= 0:
            return index
        return containing_slot_index(self._slots, instant, self._reference_zone)

    def _request(self, index: int) -> List[str]:
        moved = []
        for zone_id, handle in list(self._handles.items()):
            if handle.user_active:
                logger.debug("Skipping re-center of %s while the user scrolls it", zone_id)
                continue
            handle.scroll_to(index, self._alignment)
            self.scroll_requested.emit(zone_id, index, self._alignment)
            moved.append(zone_id)
        return moved
