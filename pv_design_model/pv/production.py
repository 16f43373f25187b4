"""Rough energy yield estimate from peak sun hours.

    daily_kwh   = kWp × HSP × PR / 100
    monthly_kwh = daily_kwh × 30.41
    annual_kwh  = daily_kwh × 365

HSP (peak sun hours) is the daily irradiation in kWh/m² expressed as hours
at 1 kW/m². Reference values per Spanish climate zone live in
``HSP_CLIMATE_ZONES``.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass

from pv_design_model.config.defaults import (
    AVERAGE_DAYS_PER_MONTH,
    DAYS_PER_YEAR,
    DEFAULT_PERFORMANCE_RATIO_PCT,
    HSP_CLIMATE_ZONES,
)

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class EnergyYield:
    """Estimated production in kWh."""

    daily_kwh: float
    monthly_kwh: float
    annual_kwh: float


def hsp_for_zone(zone_id: int) -> float:
    """Return the reference peak sun hours of climate zone *zone_id*.

    Raises:
        ValueError: If *zone_id* is not a known zone.
    """
    try:
        return HSP_CLIMATE_ZONES[zone_id][1]
    except KeyError:
        raise ValueError(
            f"Unknown climate zone {zone_id}. Must be one of: {sorted(HSP_CLIMATE_ZONES)}."
        ) from None


def estimate_energy_yield(
    peak_power_kwp: float,
    hsp_hours: float,
    performance_ratio_pct: float = DEFAULT_PERFORMANCE_RATIO_PCT,
) -> EnergyYield:
    """Estimate daily, monthly and annual production.

    Args:
        peak_power_kwp: Installed DC peak power in kWp.
        hsp_hours: Peak sun hours per day.
        performance_ratio_pct: System performance ratio in %.

    Returns:
        :class:`EnergyYield`.
    """
    daily = peak_power_kwp * hsp_hours * performance_ratio_pct / 100.0
    result = EnergyYield(
        daily_kwh=daily,
        monthly_kwh=daily * AVERAGE_DAYS_PER_MONTH,
        annual_kwh=daily * DAYS_PER_YEAR,
    )
    logger.debug(
        "Yield: %.2f kWp × %.2f h × PR %.0f %% → %.1f kWh/yr",
        peak_power_kwp,
        hsp_hours,
        performance_ratio_pct,
        result.annual_kwh,
    )
    return result
