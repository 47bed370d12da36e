"""Matching typed time queries against the slot sequence."""

from __future__ import annotations

from datetime import datetime
from typing import Optional, Sequence

from .formatting import search_labels
from .slot_generator import to_instant
from .zone_projector import project_civil


def find_slot_index(slots: Sequence[datetime], query: str, zone_id: str) -> Optional[int]:
    """First slot whose local label in ``zone_id`` matches ``query``.

    A query containing ``:`` prefix-matches the full 12h or 24h label
    (``"8:3"`` matches ``8:30 am``); otherwise the query must equal the hour
    in 12h or 24h form (``"8"``, ``"08"``, ``"20"``).

    Returns:
        Index of the first match, or None when the query is blank or nothing matches
    """
    needle = query.strip().lower()
    if not needle:
        return None

    for index, slot in enumerate(slots):
        hour12, hour24, full12, full24 = search_labels(project_civil(to_instant(slot), zone_id))
        if ":" in needle:
            if full12.startswith(needle) or full24.startswith(needle):
                return index
        elif needle in (hour12, hour24):
            return index
    return None
