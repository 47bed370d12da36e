"""Qt state objects driving the grid."""

from .highlight_lifecycle import DEFAULT_HIGHLIGHT_SECONDS, HighlightLifecycle
from .scroll_coordinator import (
    ALIGN_CENTER,
    ALIGN_START,
    DEFAULT_SETTLE_MS,
    ScrollCoordinator,
    ScrollHandle,
)
from .zone_registry import DEFAULT_MAX_ZONES, ZoneRegistry
from .engine import GridEngine

__all__ = [
    "DEFAULT_HIGHLIGHT_SECONDS",
    "HighlightLifecycle",
    "ALIGN_CENTER",
    "ALIGN_START",
    "DEFAULT_SETTLE_MS",
    "ScrollCoordinator",
    "ScrollHandle",
    "DEFAULT_MAX_ZONES",
    "ZoneRegistry",
    "GridEngine",
]
