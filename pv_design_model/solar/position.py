"""Solar position model: declination, elevation and azimuth.

Closed-form model without atmospheric refraction or equation-of-time
correction. All angles are in degrees.

Azimuth convention
------------------
0 = North, 90 = East, 180 = South, 270 = West. Hour angles are negative in
the morning, zero at solar noon and positive in the afternoon (15 °/hour).

Public API
----------
declination(day_of_year)                   – Solar declination (Cooper).
solar_position(latitude, decl, hour_angle) – Elevation and azimuth.
current_sun_position(latitude, moment)     – Position for a clock time.
sun_path(latitude, day_of_year)            – Above-horizon trace for one day.
"""

from __future__ import annotations

import logging
import math
from collections.abc import Mapping
from dataclasses import dataclass
from datetime import datetime
from types import MappingProxyType

import numpy as np

from pv_design_model.config.defaults import (
    AZIMUTH_DENOMINATOR_EPS,
    AZIMUTH_SOUTH_DEG,
    DAYS_PER_YEAR,
    DECLINATION_DAY_OFFSET,
    DEGREES_PER_HOUR,
    EARTH_AXIAL_TILT_DEG,
    EQUINOX_DAY,
    FULL_CIRCLE_DEG,
    SOLAR_NOON_HOUR,
    SUMMER_SOLSTICE_DAY,
    SUN_PATH_HOUR_ANGLE_LIMIT_DEG,
    SUN_PATH_STEP_DEG,
    WINTER_SOLSTICE_DAY,
)

logger = logging.getLogger(__name__)

REFERENCE_SUN_PATH_DAYS: Mapping[str, int] = MappingProxyType({
    "summer_solstice": SUMMER_SOLSTICE_DAY,
    "equinox": EQUINOX_DAY,
    "winter_solstice": WINTER_SOLSTICE_DAY,
})
"""Days traced on a sun path chart."""


@dataclass(frozen=True)
class GeoPosition:
    """Site coordinates in decimal degrees."""

    latitude: float
    longitude: float


@dataclass(frozen=True)
class SolarPosition:
    """Apparent sun position for one instant.

    Attributes:
        elevation: Angle above the horizon in degrees (<= 90).
        azimuth: Compass bearing in degrees, in [0, 360).
    """

    elevation: float
    azimuth: float

    @property
    def is_above_horizon(self) -> bool:
        """True when the sun is strictly above the horizon."""
        return self.elevation > 0.0


@dataclass(frozen=True)
class SunPathPoint:
    """One sample of a daily sun path trace."""

    hour_angle: float
    elevation: float
    azimuth: float


def _clamp_unit(value: float) -> float:
    return max(-1.0, min(1.0, value))


def declination(day_of_year: int) -> float:
    """Return the solar declination in degrees for *day_of_year*.

    Uses ``23.45 · sin(360/365 · (284 + n))``. Out-of-range days are accepted;
    the formula is periodic with a period of 365 days.
    """
    angle = FULL_CIRCLE_DEG * (DECLINATION_DAY_OFFSET + day_of_year) / DAYS_PER_YEAR
    return EARTH_AXIAL_TILT_DEG * math.sin(math.radians(angle))


def solar_position(
    latitude: float,
    declination_deg: float,
    hour_angle: float,
) -> SolarPosition:
    """Compute solar elevation and azimuth.

    Args:
        latitude: Observer latitude in degrees (negative south).
        declination_deg: Solar declination in degrees.
        hour_angle: Hour angle in degrees (negative before solar noon).

    Returns:
        :class:`SolarPosition` with azimuth normalised into [0, 360).

    The inverse-cosine argument of the azimuth is clamped to [-1, 1]. At the
    poles (or with the sun at the zenith) the denominator vanishes; the ratio
    is then treated as fully clamped so the azimuth stays defined.
    """
    lat = math.radians(latitude)
    dec = math.radians(declination_deg)
    ha = math.radians(hour_angle)

    sin_elev = math.sin(dec) * math.sin(lat) + math.cos(dec) * math.cos(lat) * math.cos(ha)
    elev = math.asin(_clamp_unit(sin_elev))

    numerator = math.sin(dec) - math.sin(elev) * math.sin(lat)
    denominator = math.cos(elev) * math.cos(lat)
    if abs(denominator) < AZIMUTH_DENOMINATOR_EPS:
        cos_az = 1.0 if numerator >= 0.0 else -1.0
    else:
        cos_az = _clamp_unit(numerator / denominator)

    raw_azimuth = math.degrees(math.acos(cos_az))
    if hour_angle >= 0.0:
        azimuth = AZIMUTH_SOUTH_DEG + raw_azimuth
    else:
        azimuth = AZIMUTH_SOUTH_DEG - raw_azimuth

    return SolarPosition(
        elevation=math.degrees(elev),
        azimuth=azimuth % FULL_CIRCLE_DEG,
    )


def hour_angle_from_clock(hours: float) -> float:
    """Convert a (decimal) clock hour to an hour angle in degrees."""
    return (hours - SOLAR_NOON_HOUR) * DEGREES_PER_HOUR


def day_of_year(moment: datetime) -> int:
    """Return the calendar day of year (1-366) of *moment*."""
    return moment.timetuple().tm_yday


def current_sun_position(latitude: float, moment: datetime) -> SolarPosition:
    """Sun position at *moment*, treating local clock time as solar time.

    Each call is independent; a live display can re-invoke this on a fixed
    interval.
    """
    hours = moment.hour + moment.minute / 60.0
    pos = solar_position(
        latitude,
        declination(day_of_year(moment)),
        hour_angle_from_clock(hours),
    )
    logger.debug(
        "Sun at %s (lat=%.4f): elevation=%.2f°, azimuth=%.2f°",
        moment.isoformat(),
        latitude,
        pos.elevation,
        pos.azimuth,
    )
    return pos


def sun_path(
    latitude: float,
    day_of_year_: int,
    step_deg: float = SUN_PATH_STEP_DEG,
) -> list[SunPathPoint]:
    """Trace the sun across one day, keeping only points above the horizon.

    Parameters
    ----------
    latitude:
        Observer latitude in degrees.
    day_of_year_:
        Day of year used for the declination.
    step_deg:
        Hour-angle step in degrees. Must be positive.

    Returns
    -------
    list[SunPathPoint]
        Samples ordered from sunrise to sunset. Empty during polar night.

    Raises
    ------
    ValueError
        When *step_deg* is not positive.
    """
    if step_deg <= 0.0:
        raise ValueError(f"step_deg must be > 0, got {step_deg}")

    dec = declination(day_of_year_)
    hour_angles = np.arange(
        -SUN_PATH_HOUR_ANGLE_LIMIT_DEG,
        SUN_PATH_HOUR_ANGLE_LIMIT_DEG + step_deg / 2.0,
        step_deg,
    )

    points: list[SunPathPoint] = []
    for ha in hour_angles:
        pos = solar_position(latitude, dec, float(ha))
        if pos.is_above_horizon:
            points.append(
                SunPathPoint(
                    hour_angle=float(ha),
                    elevation=pos.elevation,
                    azimuth=pos.azimuth,
                )
            )

    logger.debug(
        "Sun path lat=%.4f day=%d: %d of %d samples above horizon",
        latitude,
        day_of_year_,
        len(points),
        len(hour_angles),
    )
    return points
