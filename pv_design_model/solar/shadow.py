"""Minimum inter-row spacing to avoid self-shading.

The design point is a single instant: the chosen solar hour on the winter
solstice (day 355), when the sun is lowest and shadows are longest. Spacing
computed here keeps the next row unshaded at that hour on the shortest day;
it says nothing about other hours.

Geometry
--------
    vertical_projection = L · sin(tilt)
    shadow_length       = vertical_projection / tan(elevation)
    min_row_spacing     = |shadow_length · cos(sun_azimuth − (180 + panel_azimuth))|

Panel azimuth uses 0 = South, −90 = East, +90 = West.
"""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass

from pv_design_model.config.defaults import AZIMUTH_SOUTH_DEG, WINTER_SOLSTICE_DAY
from pv_design_model.solar.position import (
    SolarPosition,
    declination,
    hour_angle_from_clock,
    solar_position,
)

logger = logging.getLogger(__name__)


class InvalidGeometryError(ValueError):
    """The sun is at or below the horizon at the requested design instant.

    Recoverable: the caller should pick a design hour closer to solar noon.
    """

    def __init__(self, latitude: float, design_hour: float, elevation: float) -> None:
        self.latitude = latitude
        self.design_hour = design_hour
        self.elevation = elevation
        super().__init__(
            f"Sun is below the horizon at {design_hour:g} h solar time on the "
            f"winter solstice for latitude {latitude:g}° "
            f"(elevation {elevation:.2f}°). Choose a design hour closer to noon."
        )


@dataclass(frozen=True)
class ShadowSpacingResult:
    """Row spacing for the worst-case design instant.

    Attributes:
        min_row_spacing_m: Free distance between rows along the row normal.
        critical_sun_position: Sun position at the design instant.
        shadow_length_m: Length of the shadow along the sun direction.
        vertical_projection_m: Height of the panel's upper edge above its base.
    """

    min_row_spacing_m: float
    critical_sun_position: SolarPosition
    shadow_length_m: float
    vertical_projection_m: float


def min_row_spacing(
    latitude: float,
    panel_length_m: float,
    tilt_deg: float,
    panel_azimuth_deg: float,
    design_hour: float,
) -> ShadowSpacingResult:
    """Compute the minimum row spacing for a fixed-tilt array.

    Parameters
    ----------
    latitude:
        Site latitude in degrees.
    panel_length_m:
        Sloped length of the panel (or table) in metres.
    tilt_deg:
        Panel tilt in degrees from horizontal.
    panel_azimuth_deg:
        Panel orientation: 0 = South, −90 = East, +90 = West.
    design_hour:
        Solar clock hour that must stay unshaded on 21 December.

    Returns
    -------
    ShadowSpacingResult

    Raises
    ------
    InvalidGeometryError
        When the sun is not above the horizon at the design instant.
    """
    hour_angle = hour_angle_from_clock(design_hour)
    sun = solar_position(latitude, declination(WINTER_SOLSTICE_DAY), hour_angle)

    if sun.elevation <= 0.0:
        raise InvalidGeometryError(latitude, design_hour, sun.elevation)

    vertical_projection = panel_length_m * math.sin(math.radians(tilt_deg))
    shadow_length = vertical_projection / math.tan(math.radians(sun.elevation))

    panel_azimuth_system = AZIMUTH_SOUTH_DEG + panel_azimuth_deg
    azimuth_delta = math.radians(sun.azimuth - panel_azimuth_system)
    spacing = abs(shadow_length * math.cos(azimuth_delta))

    logger.info(
        "Row spacing lat=%.4f at %g h: sun elev=%.1f° az=%.1f°, shadow=%.2f m, "
        "spacing=%.2f m",
        latitude,
        design_hour,
        sun.elevation,
        sun.azimuth,
        shadow_length,
        spacing,
    )
    return ShadowSpacingResult(
        min_row_spacing_m=spacing,
        critical_sun_position=sun,
        shadow_length_m=shadow_length,
        vertical_projection_m=vertical_projection,
    )
