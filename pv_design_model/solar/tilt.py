"""Fixed-tilt optimisation for a given latitude.

Seasonal tilts follow the ±15° rule; the annual tilt applies an empirical
0.87 factor above 10° of latitude. The reference table lists the noon sun
elevation on the solstices and the equinox together with the tilt that makes
the panel perpendicular to it.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass

from pv_design_model.config.defaults import (
    ANNUAL_TILT_FACTOR,
    EARTH_AXIAL_TILT_DEG,
    LOW_LATITUDE_THRESHOLD_DEG,
    SEASONAL_TILT_OFFSET_DEG,
    TILT_MAX_DEG,
    TILT_MIN_DEG,
)

logger = logging.getLogger(__name__)

_REFERENCE_EVENTS: tuple[tuple[str, float], ...] = (
    ("summer_solstice", EARTH_AXIAL_TILT_DEG),
    ("equinox", 0.0),
    ("winter_solstice", -EARTH_AXIAL_TILT_DEG),
)


@dataclass(frozen=True)
class ReferenceEvent:
    """Noon sun geometry on one reference date.

    Attributes:
        name: ``"summer_solstice"``, ``"equinox"`` or ``"winter_solstice"``.
        declination: Hemisphere-relative declination in degrees.
        max_elevation: Solar elevation at noon in degrees.
        perpendicular_tilt: Tilt placing the panel normal on the noon sun.
    """

    name: str
    declination: float
    max_elevation: float
    perpendicular_tilt: float


@dataclass(frozen=True)
class TiltResult:
    """Recommended tilt angles in degrees."""

    winter_tilt: float
    summer_tilt: float
    annual_tilt: float
    reference_table: tuple[ReferenceEvent, ...]


def _clamp_tilt(value: float) -> float:
    return min(TILT_MAX_DEG, max(TILT_MIN_DEG, value))


def optimal_tilt(latitude: float) -> TiltResult:
    """Compute winter, summer and annual tilt angles for *latitude*.

    Args:
        latitude: Site latitude in degrees; only its magnitude matters.

    Returns:
        :class:`TiltResult` with seasonal tilts clamped to [0, 90].
    """
    abs_lat = abs(latitude)

    if abs_lat < LOW_LATITUDE_THRESHOLD_DEG:
        annual = abs_lat
    else:
        annual = abs_lat * ANNUAL_TILT_FACTOR

    table = []
    for name, dec in _REFERENCE_EVENTS:
        max_elev = 90.0 - abs(abs_lat - dec)
        table.append(
            ReferenceEvent(
                name=name,
                declination=dec,
                max_elevation=max_elev,
                perpendicular_tilt=90.0 - max_elev,
            )
        )

    result = TiltResult(
        winter_tilt=_clamp_tilt(abs_lat + SEASONAL_TILT_OFFSET_DEG),
        summer_tilt=_clamp_tilt(abs_lat - SEASONAL_TILT_OFFSET_DEG),
        annual_tilt=annual,
        reference_table=tuple(table),
    )
    logger.debug(
        "Tilt for lat=%.4f: winter=%.1f°, summer=%.1f°, annual=%.1f°",
        latitude,
        result.winter_tilt,
        result.summer_tilt,
        result.annual_tilt,
    )
    return result
