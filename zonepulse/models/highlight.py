"""Highlight selection state."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from enum import Enum
from typing import Optional


class HighlightPhase(Enum):
    """Lifecycle phases of the highlighted instant."""
    IDLE = "idle"
    ACTIVE = "active"


@dataclass(frozen=True)
class HighlightState:
    """Snapshot of the selected instant and its auto-clear countdown.

    Attributes:
        selected: The highlighted instant, or None when idle
        remaining: Whole seconds left before the highlight clears itself
        total: Countdown length restored by selection and activity
    """
    selected: Optional[datetime]
    remaining: int
    total: int

    @classmethod
    def idle(cls, total: int) -> HighlightState:
        return cls(selected=None, remaining=total, total=total)

    @property
    def phase(self) -> HighlightPhase:
        return HighlightPhase.IDLE if self.selected is None else HighlightPhase.ACTIVE

    @property
    def is_active(self) -> bool:
        return self.selected is not None

    def __str__(self) -> str:
        if self.selected is None:
            return "Idle"
        return f"Active({self.selected.isoformat()}, remaining={self.remaining})"
