"""Result types produced when an instant is projected into a zone."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Optional


@dataclass(frozen=True)
class LocalProjection:
    """Local wall-clock fields of one instant in one zone.

    Civil zones fill the calendar fields (``year`` .. ``weekday``), the UTC
    offset and the DST flag. Mars zones fill ``sol`` and the intermediate
    Mars hour values instead and leave the calendar fields as ``None``.

    A projection with ``valid=False`` marks degenerate input; its hour,
    minute and second are ``-1``.
    """
    zone_id: str
    hour: int
    minute: int
    second: int
    year: Optional[int] = None
    month: Optional[int] = None
    day: Optional[int] = None
    weekday: Optional[int] = None  # ISO weekday, 1 = Monday .. 7 = Sunday
    utc_offset_minutes: Optional[int] = None
    is_dst: bool = False
    sol: Optional[int] = None
    mtc_hours: Optional[float] = None
    lmst_hours: Optional[float] = None
    valid: bool = True

    @property
    def is_mars(self) -> bool:
        return self.sol is not None

    @property
    def minutes_of_day(self) -> int:
        return self.hour * 60 + self.minute


@dataclass(frozen=True)
class Classification:
    """Labels computed for one (instant, zone) pair on one render tick."""
    is_current: bool = False
    is_highlighted: bool = False
    is_night: bool = False
    is_weekend: bool = False
    is_date_boundary: bool = False
    is_near_dst: bool = False
    is_business_hours: bool = False

    @property
    def is_day(self) -> bool:
        return not self.is_night


@dataclass(frozen=True)
class SlotRow:
    """One rendered row of a zone column."""
    index: int
    instant: datetime
    projection: LocalProjection
    classification: Classification
    label: str
