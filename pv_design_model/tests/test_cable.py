"""Tests for electrical/cable.py – voltage-drop cable sizing.

Reference: 5 kW at 230 V over 20 m of copper, 1.5 % drop
  I      = 5000 / 230                  = 21.739 A
  ΔV_max = 230 × 1.5 %                 = 3.45 V
  S_req  = 2 × 20 × 21.739 / (56 × 3.45) = 4.50 mm²  →  6 mm²
  ΔV     = 2 × 20 × 21.739 / (56 × 6)   = 2.588 V (1.125 %)
"""

from __future__ import annotations

import math

import pytest

from pv_design_model.config.defaults import (
    CONDUCTIVITY_BY_MATERIAL,
    MATERIAL_ALIASES,
    STANDARD_CABLE_SECTIONS_MM2,
)
from pv_design_model.electrical.cable import conductivity_for, size_cable, voltage_drop
from pv_design_model.electrical.catalog import select_from_catalog


class TestSizeCable:
    def test_reference_copper(self) -> None:
        result = size_cable(5000.0, 230.0, 20.0, "copper", 1.5)
        assert math.isclose(result.current_a, 21.7391, rel_tol=1e-4)
        assert math.isclose(result.required_cross_section_mm2, 4.5009, rel_tol=1e-4)
        assert result.selected_cross_section_mm2 == 6.0
        assert math.isclose(result.actual_voltage_drop_v, 2.5880, rel_tol=1e-4)
        assert math.isclose(result.actual_voltage_drop_pct, 1.1252, rel_tol=1e-3)
        assert result.within_drop_limit
        assert not result.is_out_of_catalog

    def test_aluminium_needs_larger_section(self) -> None:
        copper = size_cable(5000.0, 230.0, 20.0, "copper", 1.5)
        aluminium = size_cable(5000.0, 230.0, 20.0, "aluminium", 1.5)
        assert aluminium.required_cross_section_mm2 > copper.required_cross_section_mm2
        assert aluminium.selected_cross_section_mm2 == 10.0

    def test_selected_is_smallest_sufficient(self) -> None:
        result = size_cable(3000.0, 400.0, 35.0, "cu", 1.5)
        idx = STANDARD_CABLE_SECTIONS_MM2.index(result.selected_cross_section_mm2)
        assert result.selected_cross_section_mm2 >= result.required_cross_section_mm2
        if idx > 0:
            assert STANDARD_CABLE_SECTIONS_MM2[idx - 1] < result.required_cross_section_mm2

    def test_selected_section_keeps_drop_within_limit(self) -> None:
        for length in (5.0, 15.0, 40.0, 80.0):
            result = size_cable(4000.0, 230.0, length, "copper", 3.0)
            assert result.actual_voltage_drop_pct <= 3.0 + 1e-9

    def test_zero_length_gives_smallest_section(self) -> None:
        result = size_cable(5000.0, 230.0, 0.0, "copper", 1.5)
        assert result.selected_cross_section_mm2 == 1.5
        assert result.actual_voltage_drop_v == 0.0

    def test_out_of_catalog_returns_largest_and_flags(self) -> None:
        result = size_cable(50000.0, 230.0, 100.0, "copper", 1.5)
        assert result.required_cross_section_mm2 > 95.0
        assert result.selected_cross_section_mm2 == 95.0
        assert result.is_out_of_catalog
        assert not result.within_drop_limit

    def test_out_of_catalog_logs_warning(self, caplog) -> None:
        with caplog.at_level("WARNING"):
            size_cable(50000.0, 230.0, 100.0, "copper", 1.5)
        assert "exceeds the largest standard section" in caplog.text

    def test_unknown_material_raises(self) -> None:
        with pytest.raises(ValueError, match="Unknown conductor material"):
            size_cable(5000.0, 230.0, 20.0, "silver", 1.5)


class TestConductivity:
    @pytest.mark.parametrize("material", ["copper", "Cu", " COPPER "])
    def test_copper_aliases(self, material: str) -> None:
        assert conductivity_for(material) == 56.0

    @pytest.mark.parametrize("material", ["aluminium", "aluminum", "AL"])
    def test_aluminium_aliases(self, material: str) -> None:
        assert conductivity_for(material) == 35.0

    def test_voltage_drop_formula(self) -> None:
        assert math.isclose(voltage_drop(10.0, 20.0, 56.0, 4.0), 400.0 / 224.0)

    def test_material_tables_are_read_only(self) -> None:
        with pytest.raises(TypeError):
            CONDUCTIVITY_BY_MATERIAL["copper"] = 1.0
        with pytest.raises(TypeError):
            MATERIAL_ALIASES["steel"] = "copper"
        assert conductivity_for("copper") == 56.0


class TestSelectFromCatalog:
    def test_exact_match_selected(self) -> None:
        assert select_from_catalog(16.0, (10.0, 16.0, 20.0)) == 16.0

    def test_rounds_up(self) -> None:
        assert select_from_catalog(16.01, (10.0, 16.0, 20.0)) == 20.0

    def test_below_smallest(self) -> None:
        assert select_from_catalog(0.0, (10.0, 16.0, 20.0)) == 10.0

    def test_above_largest_is_none(self) -> None:
        assert select_from_catalog(20.5, (10.0, 16.0, 20.0)) is None
