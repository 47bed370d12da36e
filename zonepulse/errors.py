"""Exception types raised by the time grid."""


class ZonePulseError(Exception):
    """Base class for all errors raised by zonepulse."""


class ConfigurationError(ZonePulseError, ValueError):
    """Invalid settings, step size or other up-front configuration."""


class UnknownZoneError(ConfigurationError):
    """A zone identifier that is neither a known IANA zone nor a Mars site."""

    def __init__(self, zone_id: str):
        super().__init__(f"Unknown zone identifier: {zone_id!r}")
        self.zone_id = zone_id


class DisplaySetFullError(ZonePulseError):
    """Raised when adding a zone to a display set that is already at capacity."""

    def __init__(self, capacity: int):
        super().__init__(f"Cannot display more than {capacity} zones")
        self.capacity = capacity
