"""Coordinated Mars Time and local mean solar time for Mars sites.

The conversion runs in stages:

1. UTC calendar fields -> Julian Date (UT)
2. JD(UT) -> JD(TT) by a fixed TT-UTC offset
3. JD(TT) -> Mars Sol Date (MSD)
4. MSD -> Coordinated Mars Time (MTC, hours at Airy-0)
5. MTC -> Local Mean Solar Time (LMST) at the site's longitude

Sol numbers are counted from the Perseverance landing instant.
"""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass
from datetime import datetime, timezone
from functools import lru_cache
from typing import Union

from zonepulse.models import LocalProjection, MarsSite

logger = logging.getLogger(__name__)

# TT - UTC: 37 leap seconds + 32.184 s, held constant.
TT_MINUS_UTC_SECONDS = 69.184
SECONDS_PER_DAY = 86400.0

MARS_SOL_RATIO = 1.0274912517  # Mars solar day / Earth day
MSD_EPOCH_JD_TT = 2451549.5
MSD_OFFSET = 44796.0
MSD_CORRECTION = 0.00096

LANDING_INSTANT = datetime(2021, 2, 18, 20, 55, 0, tzinfo=timezone.utc)

INVALID_SOL = -1_000_000


@dataclass(frozen=True)
class MarsClock:
    """Intermediate values of one Mars time conversion."""
    jd_ut: float
    jd_tt: float
    msd: float
    mtc_hours: float
    lmst_hours: float


def julian_day_number(year: int, month: int, day: int) -> int:
    """Gregorian calendar date to Julian Day Number (noon-based integer)."""
    a = (14 - month) // 12
    y = year + 4800 - a
    m = month + 12 * a - 3
    return day + (153 * m + 2) // 5 + 365 * y + y // 4 - y // 100 + y // 400 - 32045


def julian_date_ut(instant: datetime) -> float:
    """Julian Date (UT) of an instant, including the fraction of the day."""
    utc = instant.astimezone(timezone.utc) if instant.tzinfo else instant
    jdn = julian_day_number(utc.year, utc.month, utc.day)
    seconds = utc.second + utc.microsecond / 1_000_000
    return (
        jdn
        + (utc.hour - 12) / 24.0
        + utc.minute / 1440.0
        + seconds / SECONDS_PER_DAY
    )


def julian_date_tt(jd_ut: float) -> float:
    return jd_ut + TT_MINUS_UTC_SECONDS / SECONDS_PER_DAY


def mars_sol_date(jd_tt: float) -> float:
    return (jd_tt - MSD_EPOCH_JD_TT) / MARS_SOL_RATIO + MSD_OFFSET - MSD_CORRECTION


def coordinated_mars_time(msd: float) -> float:
    """MTC in fractional hours, 0 <= MTC < 24."""
    return (msd * 24.0) % 24.0


def local_mean_solar_time(mtc_hours: float, longitude_east: float) -> float:
    """LMST in fractional hours at a site ``longitude_east`` degrees from Airy-0."""
    return (mtc_hours - longitude_east / 15.0) % 24.0


def mars_clock(instant: datetime, longitude_east: float) -> MarsClock:
    jd_ut = julian_date_ut(instant)
    jd_tt = julian_date_tt(jd_ut)
    msd = mars_sol_date(jd_tt)
    mtc = coordinated_mars_time(msd)
    return MarsClock(
        jd_ut=jd_ut,
        jd_tt=jd_tt,
        msd=msd,
        mtc_hours=mtc,
        lmst_hours=local_mean_solar_time(mtc, longitude_east),
    )


def split_hours(hours: float) -> tuple[int, int, int]:
    """Break fractional hours into (hour, minute, second) with rounding.

    Seconds are rounded; a rounded 60 carries into minutes, a resulting 60
    minutes carries into hours, and hours wrap at 24.
    """
    hour = int(math.floor(hours))
    minutes_float = (hours - hour) * 60.0
    minute = int(math.floor(minutes_float))
    second = int(round((minutes_float - minute) * 60.0))
    if second >= 60:
        second -= 60
        minute += 1
    if minute >= 60:
        minute -= 60
        hour += 1
    return hour % 24, minute, second


@lru_cache(maxsize=1)
def landing_sol_date() -> float:
    """MSD of the Perseverance landing instant, computed once."""
    return mars_sol_date(julian_date_tt(julian_date_ut(LANDING_INSTANT)))


def sol_number(msd: float) -> int:
    """Whole sols elapsed since the landing instant."""
    return int(math.floor(msd - landing_sol_date()))


def invalid_projection(zone_id: str) -> LocalProjection:
    """Out-of-range projection returned for degenerate input."""
    return LocalProjection(
        zone_id=zone_id,
        hour=-1,
        minute=-1,
        second=-1,
        sol=INVALID_SOL,
        valid=False,
    )


def project_mars(
    instant: Union[datetime, float, int],
    zone_id: str,
    site: MarsSite,
) -> LocalProjection:
    """Local Mars time of ``instant`` at ``site``.

    Never raises for bad instants: degenerate input (non-finite or
    out-of-range timestamps) yields ``invalid_projection``.
    """
    try:
        if not isinstance(instant, datetime):
            instant = datetime.fromtimestamp(float(instant), tz=timezone.utc)
        clock = mars_clock(instant, site.longitude_east)
        if not math.isfinite(clock.msd):
            raise ValueError(f"non-finite Mars Sol Date {clock.msd}")
    except (OverflowError, ValueError, OSError, TypeError) as exc:
        logger.warning("Cannot convert %r to Mars time for %s: %s", instant, zone_id, exc)
        return invalid_projection(zone_id)

    hour, minute, second = split_hours(clock.lmst_hours)
    return LocalProjection(
        zone_id=zone_id,
        hour=hour,
        minute=minute,
        second=second,
        sol=sol_number(clock.msd),
        mtc_hours=clock.mtc_hours,
        lmst_hours=clock.lmst_hours,
    )
