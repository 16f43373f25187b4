"""Tests for solar/tilt.py – seasonal and annual tilt recommendations."""

from __future__ import annotations

import math

import pytest

from pv_design_model.solar.tilt import optimal_tilt


class TestOptimalTilt:
    def test_madrid(self) -> None:
        result = optimal_tilt(40.41)
        assert math.isclose(result.winter_tilt, 55.41)
        assert math.isclose(result.summer_tilt, 25.41)
        assert math.isclose(result.annual_tilt, 40.41 * 0.87)

    def test_low_latitude_annual_equals_latitude(self) -> None:
        assert math.isclose(optimal_tilt(8.0).annual_tilt, 8.0)

    def test_threshold_uses_factor(self) -> None:
        assert math.isclose(optimal_tilt(10.0).annual_tilt, 8.7)

    def test_summer_tilt_clamped_at_zero(self) -> None:
        result = optimal_tilt(5.0)
        assert result.summer_tilt == 0.0
        assert math.isclose(result.winter_tilt, 20.0)

    def test_winter_tilt_clamped_at_ninety(self) -> None:
        result = optimal_tilt(85.0)
        assert result.winter_tilt == 90.0
        assert math.isclose(result.summer_tilt, 70.0)

    def test_southern_hemisphere_uses_magnitude(self) -> None:
        north = optimal_tilt(33.9)
        south = optimal_tilt(-33.9)
        assert north.winter_tilt == south.winter_tilt
        assert north.summer_tilt == south.summer_tilt
        assert north.annual_tilt == south.annual_tilt

    @pytest.mark.parametrize("latitude", [-90.0, -45.0, 0.0, 12.5, 40.41, 66.5, 90.0])
    def test_seasonal_tilts_within_bounds(self, latitude: float) -> None:
        result = optimal_tilt(latitude)
        assert 0.0 <= result.winter_tilt <= 90.0
        assert 0.0 <= result.summer_tilt <= 90.0


class TestReferenceTable:
    def test_events_in_order(self) -> None:
        names = [e.name for e in optimal_tilt(40.0).reference_table]
        assert names == ["summer_solstice", "equinox", "winter_solstice"]

    def test_noon_elevations(self) -> None:
        table = {e.name: e for e in optimal_tilt(40.0).reference_table}
        assert math.isclose(table["summer_solstice"].max_elevation, 73.45)
        assert math.isclose(table["equinox"].max_elevation, 50.0)
        assert math.isclose(table["winter_solstice"].max_elevation, 26.55)

    def test_perpendicular_tilt_complements_elevation(self) -> None:
        for event in optimal_tilt(40.0).reference_table:
            assert math.isclose(event.perpendicular_tilt + event.max_elevation, 90.0)

    def test_equinox_perpendicular_tilt_equals_latitude(self) -> None:
        table = {e.name: e for e in optimal_tilt(37.2).reference_table}
        assert math.isclose(table["equinox"].perpendicular_tilt, 37.2)
