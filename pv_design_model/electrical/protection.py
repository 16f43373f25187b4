"""Overcurrent and isolation device ratings for a grid-tied PV system.

All devices apply the 1.25 continuous-current factor. Catalog selections that
exceed the largest standard rating are returned as ``None`` and flagged on
the result; they are never silently clamped.

The three-phase output current always assumes 400 V line-to-line. The
``grid_voltage_v`` argument only enters the single-phase branch.
"""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass

from pv_design_model.config.defaults import (
    AC_BREAKER_RATINGS_A,
    DC_FUSE_RATINGS_A,
    PROTECTION_SAFETY_FACTOR,
    SINGLE_PHASE,
    THREE_PHASE,
    THREE_PHASE_LINE_VOLTAGE_V,
)
from pv_design_model.electrical.catalog import select_from_catalog

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ProtectionRatings:
    """Protection device ratings in A.

    Attributes:
        min_fuse_rating_a: 1.25 × panel Isc.
        fuse_rating_a: Selected DC string fuse, or None when out of catalog.
        disconnect_switch_rating_a: 1.25 × Isc × parallel strings (continuous).
        ac_output_current_a: Nominal inverter output current.
        min_breaker_rating_a: 1.25 × AC output current.
        breaker_rating_a: Selected AC breaker, or None when out of catalog.
    """

    min_fuse_rating_a: float
    fuse_rating_a: float | None
    disconnect_switch_rating_a: float
    ac_output_current_a: float
    min_breaker_rating_a: float
    breaker_rating_a: float | None

    @property
    def fuse_out_of_catalog(self) -> bool:
        return self.fuse_rating_a is None

    @property
    def breaker_out_of_catalog(self) -> bool:
        return self.breaker_rating_a is None


def ac_output_current(power_w: float, grid_voltage_v: float, phase_count: int) -> float:
    """Nominal AC output current for a single- or three-phase inverter.

    Raises:
        ValueError: If *phase_count* is neither 1 nor 3.
    """
    if phase_count == SINGLE_PHASE:
        return power_w / grid_voltage_v
    if phase_count == THREE_PHASE:
        return power_w / (THREE_PHASE_LINE_VOLTAGE_V * math.sqrt(3.0))
    raise ValueError(
        f"phase_count must be {SINGLE_PHASE} or {THREE_PHASE}, got {phase_count}"
    )


def size_protections(
    panel_isc: float,
    parallel_strings: int,
    inverter_power_w: float,
    grid_voltage_v: float,
    phase_count: int,
) -> ProtectionRatings:
    """Select DC fuse, DC disconnect and AC breaker ratings.

    Args:
        panel_isc: Panel short-circuit current in A.
        parallel_strings: Number of strings in parallel on the disconnect.
        inverter_power_w: Inverter rated AC power in W.
        grid_voltage_v: Phase voltage for single-phase systems in V.
        phase_count: 1 (single phase) or 3 (three phase, 400 V assumed).

    Returns:
        :class:`ProtectionRatings`.

    Raises:
        ValueError: If *phase_count* is neither 1 nor 3.
    """
    min_fuse = panel_isc * PROTECTION_SAFETY_FACTOR
    fuse = select_from_catalog(min_fuse, DC_FUSE_RATINGS_A)
    if fuse is None:
        logger.warning(
            "DC fuse: %.2f A exceeds the largest standard rating %.0f A.",
            min_fuse,
            DC_FUSE_RATINGS_A[-1],
        )

    disconnect = panel_isc * parallel_strings * PROTECTION_SAFETY_FACTOR

    i_ac = ac_output_current(inverter_power_w, grid_voltage_v, phase_count)
    min_breaker = i_ac * PROTECTION_SAFETY_FACTOR
    breaker = select_from_catalog(min_breaker, AC_BREAKER_RATINGS_A)
    if breaker is None:
        logger.warning(
            "AC breaker: %.2f A exceeds the largest standard rating %.0f A.",
            min_breaker,
            AC_BREAKER_RATINGS_A[-1],
        )

    return ProtectionRatings(
        min_fuse_rating_a=min_fuse,
        fuse_rating_a=fuse,
        disconnect_switch_rating_a=disconnect,
        ac_output_current_a=i_ac,
        min_breaker_rating_a=min_breaker,
        breaker_rating_a=breaker,
    )
