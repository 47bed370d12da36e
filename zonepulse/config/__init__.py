"""Settings and their YAML loader."""

from .settings import SCROLL_ALIGNMENTS, Settings, settings_from_mapping
from .loader import DEFAULTS_PATH, load_defaults, load_settings

__all__ = [
    "SCROLL_ALIGNMENTS",
    "Settings",
    "settings_from_mapping",
    "DEFAULTS_PATH",
    "load_defaults",
    "load_settings",
]
