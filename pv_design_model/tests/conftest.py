"""Shared pytest fixtures for the pv_design_model test suite.

All fixtures are synthetic and deterministic. The default equipment is a
450 W module on a 5 kW two-MPPT inverter.

Reference string search (−5 °C … 70 °C, target 4 000 W, 16 panels)
--------------------------------------------------------------------
  Voc_max = 49.5 × (1 + (−30) × (−0.28) / 100)  = 53.658 V
  Vmp_min = 41.5 × (1 + 45 × (−0.4) / 100)      = 34.03 V
  max per string = floor(550 / 53.658)          = 10
  min per string = ceil(120 / 34.03)            = 4
  max total      = min(16, floor(5000 × 1.3 / 450)) = min(16, 14) = 14

  Best layouts (|P − 4000|):
    1s-9      4 050 W   50
    2s-4-5    4 050 W   50
    2s-5-4    4 050 W   50
    1s-8      3 600 W  400
    2s-4-4    3 600 W  400
    1s-10, 2s-4-6, 2s-5-5, 2s-6-4   4 500 W  500
    1s-7      3 150 W  850
"""

from __future__ import annotations

import copy

import pytest

from pv_design_model.strings.search import InverterSpec, PanelSpec, StringSearchSettings

# ---------------------------------------------------------------------------
# Equipment fixtures
# ---------------------------------------------------------------------------


@pytest.fixture
def panel_450w() -> PanelSpec:
    """450 W monocrystalline module datasheet."""
    return PanelSpec(
        rated_power_w=450.0,
        open_circuit_voltage_v=49.5,
        short_circuit_current_a=11.6,
        voltage_at_max_power_v=41.5,
        current_at_max_power_a=10.85,
        voltage_temp_coeff_pct_per_c=-0.28,
        model="MONO-450",
    )


@pytest.fixture
def inverter_5kw() -> InverterSpec:
    """5 kW string inverter with two MPPT inputs."""
    return InverterSpec(
        max_output_power_w=5000.0,
        max_dc_voltage_v=550.0,
        min_mppt_voltage_v=120.0,
        max_mppt_voltage_v=450.0,
        max_input_current_a=14.0,
        mppt_channel_count=2,
        model="INV-5K",
    )


@pytest.fixture
def search_settings() -> StringSearchSettings:
    """Continental climate, 4 kW target, 16 panels on hand."""
    return StringSearchSettings(
        min_ambient_temp_c=-5.0,
        max_ambient_temp_c=70.0,
        target_power_w=4000.0,
        max_panels_available=16,
    )


# ---------------------------------------------------------------------------
# Design file fixtures
# ---------------------------------------------------------------------------

_PANEL_DICT = {
    "model": "MONO-450",
    "rated_power_w": 450,
    "open_circuit_voltage_v": 49.5,
    "short_circuit_current_a": 11.6,
    "voltage_at_max_power_v": 41.5,
    "current_at_max_power_a": 10.85,
    "voltage_temp_coeff_pct_per_c": -0.28,
}

_INVERTER_DICT = {
    "model": "INV-5K",
    "max_output_power_w": 5000,
    "max_dc_voltage_v": 550,
    "min_mppt_voltage_v": 120,
    "max_mppt_voltage_v": 450,
    "max_input_current_a": 14,
    "mppt_channel_count": 2,
}

_FULL_DESIGN = {
    "design": {"name": "madrid_home", "description": "Rooftop, Madrid"},
    "location": {"latitude": 40.41, "longitude": -3.70},
    "sun_path": {},
    "shadow": {
        "panel_length_m": 2.0,
        "tilt_deg": 30,
        "panel_azimuth_deg": 0,
        "design_hour": 10,
    },
    "sizing": {
        "panel": _PANEL_DICT,
        "inverter": _INVERTER_DICT,
        "settings": {
            "min_ambient_temp_c": -5,
            "max_ambient_temp_c": 70,
            "target_power_w": 4000,
            "max_panels_available": 16,
        },
    },
    "cable": {
        "power_w": 5000,
        "voltage_v": 230,
        "length_m": 20,
        "material": "copper",
        "max_drop_pct": 1.5,
    },
    "protection": {
        "panel_isc": 11.6,
        "parallel_strings": 2,
        "inverter_power_w": 5000,
        "grid_voltage_v": 230,
        "phase_count": 1,
    },
    "battery": {
        "daily_consumption_wh": 5000,
        "autonomy_days": 2,
        "system_voltage_v": 48,
        "technology": "lithium",
    },
    "production": {"peak_power_kwp": 4.05, "climate_zone": 4},
    "financial": {
        "system_cost_eur": 6000,
        "self_consumption_pct": 60,
        "buy_price_eur": 0.20,
        "sell_price_eur": 0.05,
    },
}


@pytest.fixture
def panel_dict() -> dict:
    return copy.deepcopy(_PANEL_DICT)


@pytest.fixture
def inverter_dict() -> dict:
    return copy.deepcopy(_INVERTER_DICT)


@pytest.fixture
def minimal_design() -> dict:
    """Smallest valid design: only name and latitude."""
    return {
        "design": {"name": "minimal"},
        "location": {"latitude": 40.41},
    }


@pytest.fixture
def full_design() -> dict:
    """Design with every calculator section filled in."""
    return copy.deepcopy(_FULL_DESIGN)
