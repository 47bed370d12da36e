"""Auto-clearing highlight state machine."""

from __future__ import annotations

import logging
import time
from datetime import datetime
from typing import Callable, Optional

from PySide6.QtCore import QObject, Signal

from zonepulse.models import HighlightState
from zonepulse.utils import to_instant

logger = logging.getLogger(__name__)

DEFAULT_HIGHLIGHT_SECONDS = 60


class HighlightLifecycle(QObject):
    """Owns the selected instant and its countdown.

    The countdown runs on a monotonic clock: :meth:`poll` works out how many
    whole seconds elapsed since the last tick and applies that many ticks,
    so a late timer wake-up never leaves the countdown behind the real
    clear time.

    Signals:
        state_changed: Emitted with the new HighlightState on every change
        remaining_changed: Emitted with the seconds left after a tick or reset
        highlight_cleared: Emitted when an active highlight returns to idle
    """

    state_changed = Signal(object)
    remaining_changed = Signal(int)
    highlight_cleared = Signal()

    def __init__(
        self,
        total: int = DEFAULT_HIGHLIGHT_SECONDS,
        auto_clear: bool = True,
        clock: Callable[[], float] = time.monotonic,
        parent=None,
    ):
        super().__init__(parent)
        if total <= 0:
            raise ValueError("Highlight duration must be positive")
        self._total = total
        self._auto_clear = auto_clear
        self._clock = clock
        self._state = HighlightState.idle(total)
        self._anchor: Optional[float] = None  # clock reading of the last tick or reset

    # ---- Properties --------------------------------------------------------

    @property
    def state(self) -> HighlightState:
        return self._state

    @property
    def total(self) -> int:
        return self._total

    @property
    def auto_clear(self) -> bool:
        return self._auto_clear

    @property
    def is_active(self) -> bool:
        return self._state.is_active

    @property
    def selected(self) -> Optional[datetime]:
        return self._state.selected

    @property
    def remaining(self) -> int:
        return self._state.remaining

    # ---- Transitions -------------------------------------------------------

    def select(self, instant: datetime):
        """Highlight ``instant`` with a full countdown, from any state."""
        instant = to_instant(instant)
        self._anchor = self._clock()
        self._set_state(HighlightState(selected=instant, remaining=self._total, total=self._total))
        logger.debug("Highlight selected: %s", self._state)
        self.remaining_changed.emit(self._total)

    def activity(self) -> bool:
        """Restart the countdown after user interaction.

        Returns:
            True if a highlight was active and its countdown was reset
        """
        if not self._state.is_active:
            return False
        self._anchor = self._clock()
        if self._state.remaining != self._total:
            self._set_state(HighlightState(self._state.selected, self._total, self._total))
            self.remaining_changed.emit(self._total)
        return True

    def clear(self):
        """Drop the highlight immediately. Clearing while idle does nothing."""
        if not self._state.is_active:
            return
        self._go_idle()

    def tick(self):
        """Count one second down, clearing the highlight when it reaches zero.

        The second is also consumed from the clock, so a later :meth:`poll`
        does not count it again.
        """
        if not self._state.is_active:
            return
        if self._anchor is not None:
            self._anchor += 1
        self._count_down()

    def poll(self) -> int:
        """Apply every whole second elapsed since the last tick.

        Intended to be driven by a periodic timer; the timer's own interval
        is never trusted.

        Returns:
            Number of ticks applied
        """
        if not self._state.is_active or self._anchor is None:
            return 0
        now = self._clock()
        elapsed = int(now - self._anchor)
        if elapsed <= 0:
            return 0
        self._anchor += elapsed
        applied = 0
        for _ in range(elapsed):
            if not self._state.is_active:
                break
            self._count_down()
            applied += 1
        return applied

    # ---- Internals ---------------------------------------------------------

    def _count_down(self):
        if not self._auto_clear:
            return
        remaining = self._state.remaining - 1
        if remaining <= 0:
            self._go_idle()
            return
        self._set_state(HighlightState(self._state.selected, remaining, self._total))
        self.remaining_changed.emit(remaining)

    def _go_idle(self):
        self._anchor = None
        self._set_state(HighlightState.idle(self._total))
        logger.debug("Highlight cleared")
        self.highlight_cleared.emit()

    def _set_state(self, state: HighlightState):
        self._state = state
        self.state_changed.emit(state)
