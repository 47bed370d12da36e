"""ZonePulse: a multi-zone day grid with Mars time and a synchronized highlight."""

__version__ = "0.1.0"
