"""Conductor cross-section sizing by voltage drop.

Model
-----
    I        = P / V
    ΔV_max   = V × max_drop_pct / 100
    S_req    = 2 · L · I / (k · ΔV_max)

with ``k`` the conductivity in m/(Ω·mm²): 56 for copper, 35 for aluminium.
The factor 2 covers the outbound and return conductor. The selected section
is the smallest commercial section >= ``S_req``; when even the largest is too
small it is returned anyway and ``is_out_of_catalog`` is set, so the caller
can flag the recomputed drop against its limit.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass

from pv_design_model.config.defaults import (
    CONDUCTIVITY_BY_MATERIAL,
    MATERIAL_ALIASES,
    ROUND_TRIP_LENGTH_FACTOR,
    STANDARD_CABLE_SECTIONS_MM2,
)
from pv_design_model.electrical.catalog import select_from_catalog

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class CableSizingResult:
    """Outcome of a cable sizing calculation.

    Attributes:
        current_a: Load current in A.
        required_cross_section_mm2: Continuous section meeting the drop limit.
        selected_cross_section_mm2: Commercial section chosen.
        actual_voltage_drop_v: Drop with the selected section in V.
        actual_voltage_drop_pct: Drop with the selected section in %.
        max_voltage_drop_pct: Limit the section was sized for in %.
    """

    current_a: float
    required_cross_section_mm2: float
    selected_cross_section_mm2: float
    actual_voltage_drop_v: float
    actual_voltage_drop_pct: float
    max_voltage_drop_pct: float

    @property
    def is_out_of_catalog(self) -> bool:
        """True when the required section exceeds the largest catalog section."""
        return self.required_cross_section_mm2 > STANDARD_CABLE_SECTIONS_MM2[-1]

    @property
    def within_drop_limit(self) -> bool:
        """True when the selected section keeps the drop within the limit."""
        return self.actual_voltage_drop_pct <= self.max_voltage_drop_pct


def conductivity_for(material: str) -> float:
    """Return the conductivity of *material*.

    Raises:
        ValueError: If *material* is not a known conductor material.
    """
    key = MATERIAL_ALIASES.get(material.strip().lower())
    if key is None:
        raise ValueError(
            f"Unknown conductor material '{material}'. "
            f"Must be one of: {sorted(MATERIAL_ALIASES)}."
        )
    return CONDUCTIVITY_BY_MATERIAL[key]


def voltage_drop(
    length_m: float,
    current_a: float,
    conductivity: float,
    cross_section_mm2: float,
) -> float:
    """Round-trip voltage drop in V over a conductor pair."""
    return ROUND_TRIP_LENGTH_FACTOR * length_m * current_a / (
        conductivity * cross_section_mm2
    )


def size_cable(
    power_w: float,
    voltage_v: float,
    length_m: float,
    material: str,
    max_drop_pct: float,
) -> CableSizingResult:
    """Size a conductor for a maximum voltage drop.

    Args:
        power_w: Transmitted power in W.
        voltage_v: Circuit voltage in V (AC phase voltage or DC string voltage).
        length_m: One-way cable length in metres.
        material: ``"copper"``/``"cu"`` or ``"aluminium"``/``"al"``.
        max_drop_pct: Allowed voltage drop in % of *voltage_v*.

    Returns:
        :class:`CableSizingResult` with the selected commercial section and the
        recomputed drop.

    Raises:
        ValueError: If *material* is unknown.
    """
    conductivity = conductivity_for(material)
    current = power_w / voltage_v
    max_drop_v = voltage_v * max_drop_pct / 100.0
    required = ROUND_TRIP_LENGTH_FACTOR * length_m * current / (conductivity * max_drop_v)

    selected = select_from_catalog(required, STANDARD_CABLE_SECTIONS_MM2)
    if selected is None:
        selected = STANDARD_CABLE_SECTIONS_MM2[-1]
        logger.warning(
            "Required section %.2f mm² exceeds the largest standard section "
            "%.0f mm²; returning the largest.",
            required,
            selected,
        )

    drop_v = voltage_drop(length_m, current, conductivity, selected)
    drop_pct = drop_v / voltage_v * 100.0

    logger.debug(
        "Cable %s: I=%.2f A, S_req=%.3f mm² → %.1f mm², ΔV=%.2f V (%.2f %%)",
        material,
        current,
        required,
        selected,
        drop_v,
        drop_pct,
    )
    return CableSizingResult(
        current_a=current,
        required_cross_section_mm2=required,
        selected_cross_section_mm2=selected,
        actual_voltage_drop_v=drop_v,
        actual_voltage_drop_pct=drop_pct,
        max_voltage_drop_pct=max_drop_pct,
    )
