"""Dispatch of instant projection by zone family."""

from __future__ import annotations

from datetime import datetime

from zonepulse.models import LocalProjection, Zone
from .mars_time import project_mars
from .slot_generator import to_instant
from .zone_projector import is_near_dst_transition, project_civil


def project(instant: datetime, zone: Zone) -> LocalProjection:
    """Project ``instant`` into ``zone``, civil or Mars."""
    if zone.is_mars:
        return project_mars(instant, zone.id, zone.mars_site)
    return project_civil(to_instant(instant), zone.id)


def near_dst_transition(instant: datetime, zone: Zone) -> bool:
    """DST look-ahead flag; Mars zones never observe DST."""
    if zone.is_mars:
        return False
    return is_near_dst_transition(to_instant(instant), zone.id)
