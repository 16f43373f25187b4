"""Load and validate design JSON files and component datasheet CSVs.

Public API
----------
load_design(path)               – Parse + validate a design JSON file.
load_panel_catalog(path)        – Load a panel datasheet CSV keyed by model.
load_inverter_catalog(path)     – Load an inverter datasheet CSV keyed by model.

All error messages name the specific field, model or row that caused the
problem so the user can fix the JSON or CSV without guessing.
"""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

import pandas as pd

from pv_design_model.config.defaults import CSV_DELIMITER
from pv_design_model.config.schema import validate_design
from pv_design_model.solar.position import GeoPosition
from pv_design_model.strings.search import (
    InverterSpec,
    PanelSpec,
    StringSearchSettings,
)

logger = logging.getLogger(__name__)

_MODEL_COLUMN = "model"

_PANEL_COLUMNS = [
    "rated_power_w",
    "open_circuit_voltage_v",
    "short_circuit_current_a",
    "voltage_at_max_power_v",
    "current_at_max_power_a",
    "voltage_temp_coeff_pct_per_c",
]

_INVERTER_COLUMNS = [
    "max_output_power_w",
    "max_dc_voltage_v",
    "min_mppt_voltage_v",
    "max_mppt_voltage_v",
    "max_input_current_a",
    "mppt_channel_count",
]


# ---------------------------------------------------------------------------
# Typed result container
# ---------------------------------------------------------------------------


@dataclass
class DesignConfig:
    """Validated, parsed design file.

    Attributes
    ----------
    raw:
        The original validated dictionary as loaded from JSON. The section
        properties below are thin accessors into ``raw``.
    name:
        Design name (``design.name``).
    path:
        Absolute path to the source JSON file (``None`` if loaded from a dict).
    """

    raw: dict[str, Any]
    name: str
    path: Path | None = field(default=None, repr=False)

    # ------------------------------------------------------------------
    # Convenience properties (thin accessors into raw)
    # ------------------------------------------------------------------

    @property
    def location(self) -> GeoPosition:
        """Site coordinates; longitude defaults to 0 when omitted."""
        block = self.raw["location"]
        return GeoPosition(
            latitude=float(block["latitude"]),
            longitude=float(block.get("longitude", 0.0)),
        )

    @property
    def latitude(self) -> float:
        return self.location.latitude

    @property
    def output_dir(self) -> str | None:
        """``design.output_dir`` if set."""
        return self.raw["design"].get("output_dir")

    @property
    def sun_path(self) -> dict | None:
        return self.raw.get("sun_path")

    @property
    def shadow(self) -> dict | None:
        return self.raw.get("shadow")

    @property
    def sizing(self) -> dict | None:
        return self.raw.get("sizing")

    @property
    def cable(self) -> dict | None:
        return self.raw.get("cable")

    @property
    def protection(self) -> dict | None:
        return self.raw.get("protection")

    @property
    def battery(self) -> dict | None:
        return self.raw.get("battery")

    @property
    def production(self) -> dict | None:
        return self.raw.get("production")

    @property
    def financial(self) -> dict | None:
        return self.raw.get("financial")

    def resolve_path(self, relative: str | Path) -> Path:
        """Resolve *relative* against the design file's directory.

        Absolute paths and designs loaded from a dict are returned unchanged.
        """
        candidate = Path(relative)
        if candidate.is_absolute() or self.path is None:
            return candidate
        return self.path.parent / candidate

    def panel(self) -> PanelSpec:
        """Panel datasheet from ``sizing.panel`` (inline or catalog reference).

        Raises
        ------
        KeyError
            If the design has no sizing section, or the catalog lacks the model.
        """
        block = self.raw["sizing"]["panel"]
        if "catalog_csv" in block:
            catalog = load_panel_catalog(self.resolve_path(block["catalog_csv"]))
            return _lookup_model(catalog, block["model"], block["catalog_csv"])
        return panel_from_dict(block)

    def inverter(self) -> InverterSpec:
        """Inverter datasheet from ``sizing.inverter`` (inline or catalog reference)."""
        block = self.raw["sizing"]["inverter"]
        if "catalog_csv" in block:
            catalog = load_inverter_catalog(self.resolve_path(block["catalog_csv"]))
            return _lookup_model(catalog, block["model"], block["catalog_csv"])
        return inverter_from_dict(block)

    def string_settings(self) -> StringSearchSettings:
        return settings_from_dict(self.raw["sizing"]["settings"])


# ---------------------------------------------------------------------------
# Public functions
# ---------------------------------------------------------------------------


def load_design(path: str | Path) -> DesignConfig:
    """Load and validate a design JSON file.

    Parameters
    ----------
    path:
        Path to the design ``.json`` file.

    Returns
    -------
    DesignConfig
        Validated and parsed design.

    Raises
    ------
    FileNotFoundError
        When *path* does not exist.
    json.JSONDecodeError
        When the file contains invalid JSON.
    jsonschema.ValidationError
        When the JSON does not conform to the design schema.
    ValueError
        When cross-field constraints are violated.
    """
    path = Path(path)
    if not path.exists():
        raise FileNotFoundError(
            f"Design file not found: '{path}'. "
            "Check that the path is correct and the file exists."
        )

    logger.debug("Loading design from '%s'", path)

    try:
        with path.open("r", encoding="utf-8") as fh:
            data = json.load(fh)
    except json.JSONDecodeError as exc:
        raise json.JSONDecodeError(
            f"Invalid JSON in design file '{path}': {exc.msg}",
            exc.doc,
            exc.pos,
        ) from exc

    validate_design(data)

    config = DesignConfig(
        raw=data,
        name=data["design"]["name"],
        path=path.resolve(),
    )
    sections = [k for k in data if k not in ("design", "location")]
    logger.info(
        "Loaded design '%s' (latitude=%.2f, sections=%s) from '%s'",
        config.name,
        config.latitude,
        sections,
        path,
    )
    return config


def load_design_dict(data: dict) -> DesignConfig:
    """Validate and wrap an already-parsed design dictionary.

    Relative catalog paths are resolved against the working directory.

    Raises
    ------
    jsonschema.ValidationError
        When *data* does not conform to the design schema.
    ValueError
        When cross-field constraints are violated.
    """
    validate_design(data)
    return DesignConfig(raw=data, name=data["design"]["name"], path=None)


def panel_from_dict(data: dict) -> PanelSpec:
    """Build a :class:`PanelSpec` from a datasheet mapping."""
    return PanelSpec(
        rated_power_w=float(data["rated_power_w"]),
        open_circuit_voltage_v=float(data["open_circuit_voltage_v"]),
        short_circuit_current_a=float(data["short_circuit_current_a"]),
        voltage_at_max_power_v=float(data["voltage_at_max_power_v"]),
        current_at_max_power_a=float(data["current_at_max_power_a"]),
        voltage_temp_coeff_pct_per_c=float(data["voltage_temp_coeff_pct_per_c"]),
        model=str(data.get("model", "")),
    )


def inverter_from_dict(data: dict) -> InverterSpec:
    """Build an :class:`InverterSpec` from a datasheet mapping."""
    return InverterSpec(
        max_output_power_w=float(data["max_output_power_w"]),
        max_dc_voltage_v=float(data["max_dc_voltage_v"]),
        min_mppt_voltage_v=float(data["min_mppt_voltage_v"]),
        max_mppt_voltage_v=float(data["max_mppt_voltage_v"]),
        max_input_current_a=float(data["max_input_current_a"]),
        mppt_channel_count=int(data["mppt_channel_count"]),
        model=str(data.get("model", "")),
    )


def settings_from_dict(data: dict) -> StringSearchSettings:
    """Build :class:`StringSearchSettings` from ``sizing.settings``."""
    return StringSearchSettings(
        min_ambient_temp_c=float(data["min_ambient_temp_c"]),
        max_ambient_temp_c=float(data["max_ambient_temp_c"]),
        target_power_w=float(data["target_power_w"]),
        max_panels_available=int(data["max_panels_available"]),
    )


def load_panel_catalog(path: str | Path) -> dict[str, PanelSpec]:
    """Load a panel datasheet CSV.

    The CSV needs a ``model`` column plus one column per :class:`PanelSpec`
    field (``rated_power_w``, ``open_circuit_voltage_v``, …).

    Returns
    -------
    dict[str, PanelSpec]
        Panels keyed by model name.

    Raises
    ------
    FileNotFoundError
        When *path* does not exist.
    ValueError
        When columns are missing, values are NaN or model names repeat.
    """
    df = _read_catalog_csv(path, _PANEL_COLUMNS, "Panel")
    catalog = {
        str(row[_MODEL_COLUMN]): panel_from_dict(row)
        for row in df.to_dict(orient="records")
    }
    logger.info("Loaded panel catalog '%s': %d model(s)", path, len(catalog))
    return catalog


def load_inverter_catalog(path: str | Path) -> dict[str, InverterSpec]:
    """Load an inverter datasheet CSV keyed by model name.

    Same conventions as :func:`load_panel_catalog`.
    """
    df = _read_catalog_csv(path, _INVERTER_COLUMNS, "Inverter")
    catalog = {
        str(row[_MODEL_COLUMN]): inverter_from_dict(row)
        for row in df.to_dict(orient="records")
    }
    logger.info("Loaded inverter catalog '%s': %d model(s)", path, len(catalog))
    return catalog


# ---------------------------------------------------------------------------
# Internal helpers
# ---------------------------------------------------------------------------


def _read_catalog_csv(
    path: str | Path,
    value_columns: list[str],
    kind: str,
) -> pd.DataFrame:
    path = Path(path)
    if not path.exists():
        raise FileNotFoundError(
            f"{kind} catalog CSV not found: '{path}'. "
            "Check the 'catalog_csv' path in the design JSON."
        )

    logger.debug("Loading %s catalog from '%s'", kind.lower(), path)

    try:
        df = pd.read_csv(path, sep=CSV_DELIMITER)
    except Exception as exc:
        raise ValueError(f"Failed to parse {kind.lower()} catalog CSV '{path}': {exc}") from exc

    required = [_MODEL_COLUMN] + value_columns
    _check_required_columns(df, path, required)
    _check_no_nan(df, path, required)

    duplicates = df[_MODEL_COLUMN][df[_MODEL_COLUMN].duplicated()].tolist()
    if duplicates:
        raise ValueError(
            f"{kind} catalog CSV '{path}' lists model(s) more than once: {duplicates}."
        )
    return df


def _lookup_model(catalog: dict, model: str, source: str):
    if model not in catalog:
        available = ", ".join(sorted(catalog))
        raise KeyError(
            f"Model '{model}' not found in catalog '{source}'. "
            f"Available models: {available}"
        )
    return catalog[model]


def _check_required_columns(
    df: pd.DataFrame,
    path: Path,
    required_columns: list[str],
) -> None:
    """Raise ValueError listing all missing columns."""
    available = set(df.columns)
    missing = [c for c in required_columns if c not in available]
    if missing:
        raise ValueError(
            f"Catalog CSV '{path}' is missing required column(s): "
            f"{missing}. "
            f"Available columns: {sorted(available)}."
        )


def _check_no_nan(
    df: pd.DataFrame,
    path: Path,
    columns: list[str],
) -> None:
    """Raise ValueError naming each column that contains NaN values."""
    nan_cols = []
    for col in columns:
        if df[col].isna().any():
            n_nan = int(df[col].isna().sum())
            first_idx = int(df[col].isna().idxmax())
            nan_cols.append(f"'{col}' ({n_nan} NaN value(s), first at row {first_idx})")

    if nan_cols:
        raise ValueError(
            f"Catalog CSV '{path}' contains NaN values in the following "
            f"column(s): {'; '.join(nan_cols)}. "
            "Every datasheet field must be filled in."
        )
