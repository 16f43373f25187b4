"""Tests for solar/shadow.py – minimum inter-row spacing.

Reference: Madrid (40.41° N), 2 m panel at 30°, facing south, 10 h solar
  vertical projection = 2 × sin 30° = 1.0 m
  sun elevation at 10 h on 21 Dec ≈ 20.3°
  shadow length = 1.0 / tan(20.3°) ≈ 2.70 m
"""

from __future__ import annotations

import math

import pytest

from pv_design_model.solar.shadow import InvalidGeometryError, min_row_spacing


class TestMinRowSpacing:
    def test_madrid_reference(self) -> None:
        result = min_row_spacing(40.41, 2.0, 30.0, 0.0, 10.0)
        assert result.min_row_spacing_m > 0.0
        assert math.isclose(result.vertical_projection_m, 1.0, abs_tol=1e-12)
        assert math.isclose(result.shadow_length_m, 2.70, abs_tol=0.02)
        assert result.critical_sun_position.is_above_horizon

    def test_spacing_never_exceeds_shadow_length(self) -> None:
        for hour in (9.0, 10.0, 11.0, 12.0, 13.0, 14.0, 15.0):
            result = min_row_spacing(40.41, 2.0, 30.0, 0.0, hour)
            assert result.min_row_spacing_m <= result.shadow_length_m + 1e-9

    def test_noon_spacing_equals_shadow_length_for_south_facing(self) -> None:
        result = min_row_spacing(40.41, 2.0, 30.0, 0.0, 12.0)
        assert math.isclose(result.min_row_spacing_m, result.shadow_length_m, rel_tol=1e-6)

    def test_flat_panel_casts_no_shadow(self) -> None:
        result = min_row_spacing(40.41, 2.0, 0.0, 0.0, 10.0)
        assert result.vertical_projection_m == 0.0
        assert result.min_row_spacing_m == 0.0

    def test_scales_linearly_with_panel_length(self) -> None:
        short = min_row_spacing(40.41, 1.0, 30.0, 0.0, 10.0)
        long = min_row_spacing(40.41, 2.0, 30.0, 0.0, 10.0)
        assert math.isclose(long.min_row_spacing_m, 2.0 * short.min_row_spacing_m)

    def test_steeper_tilt_needs_more_space(self) -> None:
        shallow = min_row_spacing(40.41, 2.0, 15.0, 0.0, 11.0)
        steep = min_row_spacing(40.41, 2.0, 45.0, 0.0, 11.0)
        assert steep.min_row_spacing_m > shallow.min_row_spacing_m

    def test_earlier_hour_gives_longer_shadow(self) -> None:
        early = min_row_spacing(40.41, 2.0, 30.0, 0.0, 9.0)
        late = min_row_spacing(40.41, 2.0, 30.0, 0.0, 11.0)
        assert early.shadow_length_m > late.shadow_length_m


class TestInvalidGeometry:
    def test_sun_below_horizon_raises(self) -> None:
        with pytest.raises(InvalidGeometryError) as exc_info:
            min_row_spacing(40.41, 2.0, 30.0, 0.0, 6.0)
        err = exc_info.value
        assert err.latitude == 40.41
        assert err.design_hour == 6.0
        assert err.elevation <= 0.0

    def test_is_a_value_error(self) -> None:
        with pytest.raises(ValueError):
            min_row_spacing(40.41, 2.0, 30.0, 0.0, 0.0)

    def test_polar_night_raises_at_noon(self) -> None:
        with pytest.raises(InvalidGeometryError):
            min_row_spacing(75.0, 2.0, 30.0, 0.0, 12.0)

    def test_message_names_design_hour(self) -> None:
        with pytest.raises(InvalidGeometryError, match="6 h"):
            min_row_spacing(40.41, 2.0, 30.0, 0.0, 6.0)
