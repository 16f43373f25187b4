"""JSON schema definition and validation for PV design files.

A design file groups the inputs of every calculator in one JSON document.
Only ``design`` and ``location`` are required; each calculator section is
optional and the CLI runs a calculator only when its section is present.
Validation uses the ``jsonschema`` library (Draft 7).

Usage::

    from pv_design_model.config.schema import validate_design
    validate_design(data)   # raises jsonschema.ValidationError on failure
"""

from __future__ import annotations

import copy

import jsonschema

# ---------------------------------------------------------------------------
# Re-usable sub-schemas
# ---------------------------------------------------------------------------

_NUMBER = {"type": "number"}
_POSITIVE_NUMBER = {"type": "number", "exclusiveMinimum": 0}
_NON_NEGATIVE_NUMBER = {"type": "number", "minimum": 0}
_PERCENT = {"type": "number", "minimum": 0, "maximum": 100}
_POSITIVE_PERCENT = {"type": "number", "exclusiveMinimum": 0, "maximum": 100}
_POSITIVE_INTEGER = {"type": "integer", "minimum": 1}
_DAY_OF_YEAR = {"type": "integer", "minimum": 1, "maximum": 366}

_CATALOG_REFERENCE = {
    "type": "object",
    "required": ["catalog_csv", "model"],
    "properties": {
        "catalog_csv": {"type": "string", "minLength": 1},
        "model": {"type": "string", "minLength": 1},
    },
    "additionalProperties": False,
}

_PANEL_INLINE = {
    "type": "object",
    "required": [
        "rated_power_w",
        "open_circuit_voltage_v",
        "short_circuit_current_a",
        "voltage_at_max_power_v",
        "current_at_max_power_a",
        "voltage_temp_coeff_pct_per_c",
    ],
    "properties": {
        "model": {"type": "string"},
        "rated_power_w": _POSITIVE_NUMBER,
        "open_circuit_voltage_v": _POSITIVE_NUMBER,
        "short_circuit_current_a": _POSITIVE_NUMBER,
        "voltage_at_max_power_v": _POSITIVE_NUMBER,
        "current_at_max_power_a": _POSITIVE_NUMBER,
        "voltage_temp_coeff_pct_per_c": _NUMBER,
    },
    "additionalProperties": False,
}

_INVERTER_INLINE = {
    "type": "object",
    "required": [
        "max_output_power_w",
        "max_dc_voltage_v",
        "min_mppt_voltage_v",
        "max_mppt_voltage_v",
        "max_input_current_a",
        "mppt_channel_count",
    ],
    "properties": {
        "model": {"type": "string"},
        "max_output_power_w": _POSITIVE_NUMBER,
        "max_dc_voltage_v": _POSITIVE_NUMBER,
        "min_mppt_voltage_v": _POSITIVE_NUMBER,
        "max_mppt_voltage_v": _POSITIVE_NUMBER,
        "max_input_current_a": _POSITIVE_NUMBER,
        "mppt_channel_count": _POSITIVE_INTEGER,
    },
    "additionalProperties": False,
}

# ---------------------------------------------------------------------------
# Section schemas
# ---------------------------------------------------------------------------

_DESIGN_BLOCK = {
    "type": "object",
    "required": ["name"],
    "properties": {
        "name": {"type": "string", "minLength": 1},
        "description": {"type": "string"},
        "output_dir": {"type": "string", "minLength": 1},
    },
    "additionalProperties": False,
}

_LOCATION = {
    "type": "object",
    "required": ["latitude"],
    "properties": {
        "latitude": {"type": "number", "minimum": -90, "maximum": 90},
        "longitude": {"type": "number", "minimum": -180, "maximum": 180},
    },
    "additionalProperties": False,
}

_SUN_PATH = {
    "type": "object",
    "properties": {
        "days": {"type": "array", "items": _DAY_OF_YEAR, "minItems": 1},
        "step_deg": _POSITIVE_NUMBER,
    },
    "additionalProperties": False,
}

_SHADOW = {
    "type": "object",
    "required": ["panel_length_m", "tilt_deg", "design_hour"],
    "properties": {
        "panel_length_m": _POSITIVE_NUMBER,
        "tilt_deg": {"type": "number", "minimum": 0, "maximum": 90},
        "panel_azimuth_deg": {"type": "number", "minimum": 0, "maximum": 360},
        "design_hour": {"type": "number", "minimum": 0, "maximum": 24},
    },
    "additionalProperties": False,
}

_SIZING = {
    "type": "object",
    "required": ["panel", "inverter", "settings"],
    "properties": {
        "panel": {"oneOf": [_PANEL_INLINE, _CATALOG_REFERENCE]},
        "inverter": {"oneOf": [_INVERTER_INLINE, _CATALOG_REFERENCE]},
        "settings": {
            "type": "object",
            "required": [
                "min_ambient_temp_c",
                "max_ambient_temp_c",
                "target_power_w",
                "max_panels_available",
            ],
            "properties": {
                "min_ambient_temp_c": _NUMBER,
                "max_ambient_temp_c": _NUMBER,
                "target_power_w": _POSITIVE_NUMBER,
                "max_panels_available": _POSITIVE_INTEGER,
            },
            "additionalProperties": False,
        },
    },
    "additionalProperties": False,
}

_CABLE = {
    "type": "object",
    "required": ["power_w", "voltage_v", "length_m", "material", "max_drop_pct"],
    "properties": {
        "power_w": _NON_NEGATIVE_NUMBER,
        "voltage_v": _POSITIVE_NUMBER,
        "length_m": _NON_NEGATIVE_NUMBER,
        "material": {"type": "string", "minLength": 1},
        "max_drop_pct": _POSITIVE_PERCENT,
    },
    "additionalProperties": False,
}

_PROTECTION = {
    "type": "object",
    "required": [
        "panel_isc",
        "parallel_strings",
        "inverter_power_w",
        "grid_voltage_v",
        "phase_count",
    ],
    "properties": {
        "panel_isc": _NON_NEGATIVE_NUMBER,
        "parallel_strings": _POSITIVE_INTEGER,
        "inverter_power_w": _NON_NEGATIVE_NUMBER,
        "grid_voltage_v": _POSITIVE_NUMBER,
        "phase_count": {"type": "integer", "enum": [1, 3]},
    },
    "additionalProperties": False,
}

_BATTERY = {
    "type": "object",
    "required": ["daily_consumption_wh", "autonomy_days", "system_voltage_v"],
    "properties": {
        "daily_consumption_wh": _NON_NEGATIVE_NUMBER,
        "autonomy_days": _NON_NEGATIVE_NUMBER,
        "system_voltage_v": _POSITIVE_NUMBER,
        "depth_of_discharge_pct": _POSITIVE_PERCENT,
        "technology": {"type": "string", "minLength": 1},
    },
    "anyOf": [
        {"required": ["depth_of_discharge_pct"]},
        {"required": ["technology"]},
    ],
    "additionalProperties": False,
}

_PRODUCTION = {
    "type": "object",
    "required": ["peak_power_kwp"],
    "properties": {
        "peak_power_kwp": _NON_NEGATIVE_NUMBER,
        "hsp_hours": _NON_NEGATIVE_NUMBER,
        "climate_zone": _POSITIVE_INTEGER,
        "performance_ratio_pct": _PERCENT,
    },
    "anyOf": [
        {"required": ["hsp_hours"]},
        {"required": ["climate_zone"]},
    ],
    "additionalProperties": False,
}

_FINANCIAL = {
    "type": "object",
    "required": [
        "system_cost_eur",
        "self_consumption_pct",
        "buy_price_eur",
        "sell_price_eur",
    ],
    "properties": {
        "system_cost_eur": _NON_NEGATIVE_NUMBER,
        "annual_generation_kwh": _NON_NEGATIVE_NUMBER,
        "self_consumption_pct": _PERCENT,
        "buy_price_eur": _NON_NEGATIVE_NUMBER,
        "sell_price_eur": _NON_NEGATIVE_NUMBER,
    },
    "additionalProperties": False,
}

# ---------------------------------------------------------------------------
# Top-level schema
# ---------------------------------------------------------------------------

DESIGN_SCHEMA: dict = {
    "$schema": "http://json-schema.org/draft-07/schema#",
    "title": "PV Installation Design",
    "type": "object",
    "required": ["design", "location"],
    "properties": {
        "design": _DESIGN_BLOCK,
        "location": _LOCATION,
        "sun_path": _SUN_PATH,
        "shadow": _SHADOW,
        "sizing": _SIZING,
        "cable": _CABLE,
        "protection": _PROTECTION,
        "battery": _BATTERY,
        "production": _PRODUCTION,
        "financial": _FINANCIAL,
    },
    "additionalProperties": False,
}


# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------


def validate_design(data: dict) -> None:
    """Validate a design dictionary against the JSON schema.

    Raises a ``jsonschema.ValidationError`` with a descriptive message
    (including the JSON path to the failing field) if validation fails.

    Parameters
    ----------
    data:
        Parsed design dictionary (e.g. from ``json.load``).

    Raises
    ------
    jsonschema.ValidationError
        When *data* does not conform to the design schema.
    ValueError
        When cross-field semantic constraints are violated (e.g. the minimum
        ambient temperature is not below the maximum).
    """
    validator = jsonschema.Draft7Validator(DESIGN_SCHEMA)
    errors = sorted(validator.iter_errors(data), key=lambda e: list(e.absolute_path))

    if errors:
        first = errors[0]
        path_str = " → ".join(str(p) for p in first.absolute_path) or "(root)"
        raise jsonschema.ValidationError(
            f"Design validation failed at '{path_str}': {first.message}",
            path=first.absolute_path,
            schema_path=first.absolute_schema_path,
            validator=first.validator,
            validator_value=first.validator_value,
            instance=first.instance,
            schema=first.schema,
            cause=first.cause,
        )

    # ------------------------------------------------------------------
    # Cross-field semantic validation
    # ------------------------------------------------------------------
    _validate_temperature_range(data)
    _validate_mppt_window(data)
    _validate_generation_source(data)


def _validate_temperature_range(data: dict) -> None:
    """Check that min_ambient_temp_c < max_ambient_temp_c."""
    settings = data.get("sizing", {}).get("settings", {})
    t_min = settings.get("min_ambient_temp_c")
    t_max = settings.get("max_ambient_temp_c")
    if t_min is not None and t_max is not None and t_min >= t_max:
        raise ValueError(
            f"min_ambient_temp_c ({t_min}) must be strictly less than "
            f"max_ambient_temp_c ({t_max}). Check sizing.settings."
        )


def _validate_mppt_window(data: dict) -> None:
    """Check that an inline inverter's MPPT window is ordered."""
    inverter = data.get("sizing", {}).get("inverter", {})
    v_min = inverter.get("min_mppt_voltage_v")
    v_max = inverter.get("max_mppt_voltage_v")
    if v_min is not None and v_max is not None and v_min >= v_max:
        raise ValueError(
            f"min_mppt_voltage_v ({v_min}) must be strictly less than "
            f"max_mppt_voltage_v ({v_max}). Check sizing.inverter."
        )


def _validate_generation_source(data: dict) -> None:
    """Check that the financial section has an annual generation to work from."""
    financial = data.get("financial")
    if financial is None or "annual_generation_kwh" in financial:
        return
    if "production" not in data:
        raise ValueError(
            "financial.annual_generation_kwh is missing and there is no "
            "production section to estimate it from."
        )


def get_schema() -> dict:
    """Return a copy of the design JSON schema dictionary.

    Returns
    -------
    dict
        The design schema as a plain Python dictionary compatible with
        ``jsonschema`` and any JSON Schema Draft 7 tool.
    """
    return copy.deepcopy(DESIGN_SCHEMA)
