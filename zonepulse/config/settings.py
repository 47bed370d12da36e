"""Validated engine settings."""

from __future__ import annotations

from dataclasses import dataclass, fields
from typing import Any, Mapping, Optional

from zonepulse.errors import ConfigurationError
from zonepulse.utils import TIME_FORMATS, load_civil_zone, validate_step_minutes

SCROLL_ALIGNMENTS = ("center", "start")


@dataclass(frozen=True)
class Settings:
    """Engine configuration.

    Build instances through :func:`settings_from_mapping` or
    :func:`zonepulse.config.load_settings` so values are validated.
    """
    step_minutes: int = 30
    slot_count: int = 48
    highlight_duration_seconds: int = 60
    highlight_auto_clear: bool = True
    night_hours_start: int = 20
    night_hours_end: int = 6
    business_hours_start: int = 9
    business_hours_end: int = 17
    time_format: str = "12h"
    show_seconds: bool = False
    scroll_settle_ms: int = 500
    scroll_alignment: str = "center"
    reduced_motion: bool = False
    max_zones: int = 8
    reference_zone: Optional[str] = None

    @property
    def night_hours(self) -> tuple[int, int]:
        return self.night_hours_start, self.night_hours_end

    @property
    def business_hours(self) -> tuple[int, int]:
        return self.business_hours_start, self.business_hours_end

    @property
    def effective_alignment(self) -> str:
        """Alignment actually used for programmatic scrolls."""
        return "start" if self.reduced_motion else self.scroll_alignment

    def validate(self) -> "Settings":
        """Check every field, returning self.

        Raises:
            ConfigurationError: On the first invalid value found
        """
        validate_step_minutes(self.step_minutes)
        for name in ("slot_count", "highlight_duration_seconds", "scroll_settle_ms", "max_zones"):
            value = getattr(self, name)
            if not _is_int(value) or value <= 0:
                raise ConfigurationError(f"{name} must be a positive integer, got {value!r}")
        for name in ("night_hours_start", "night_hours_end", "business_hours_start", "business_hours_end"):
            value = getattr(self, name)
            if not _is_int(value) or not 0 <= value <= 23:
                raise ConfigurationError(f"{name} must be an hour between 0 and 23, got {value!r}")
        for name in ("highlight_auto_clear", "show_seconds", "reduced_motion"):
            if not isinstance(getattr(self, name), bool):
                raise ConfigurationError(f"{name} must be true or false")
        if self.time_format not in TIME_FORMATS:
            raise ConfigurationError(
                f"time_format must be one of {', '.join(TIME_FORMATS)}, got {self.time_format!r}"
            )
        if self.scroll_alignment not in SCROLL_ALIGNMENTS:
            raise ConfigurationError(
                f"scroll_alignment must be one of {', '.join(SCROLL_ALIGNMENTS)}, got {self.scroll_alignment!r}"
            )
        if self.reference_zone is not None:
            load_civil_zone(self.reference_zone)
        return self


def _is_int(value: Any) -> bool:
    return isinstance(value, int) and not isinstance(value, bool)


def settings_from_mapping(values: Mapping[str, Any]) -> Settings:
    """Build validated settings, rejecting keys that are not settings.

    Raises:
        ConfigurationError: On unknown keys or invalid values
    """
    known = {f.name for f in fields(Settings)}
    unknown = sorted(set(values) - known)
    if unknown:
        raise ConfigurationError(f"Unknown setting(s): {', '.join(unknown)}")
    return Settings(**values).validate()
