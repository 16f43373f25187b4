"""Off-grid battery bank capacity from consumption and autonomy.

    total_energy_wh    = daily_consumption_wh × autonomy_days
    usable_capacity_wh = total_energy_wh / (DoD / 100)
    capacity_ah        = usable_capacity_wh / system_voltage_v

The depth of discharge is chosen by the caller from the battery technology
(see ``DOD_PRESETS``); it is not derived here.
"""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass

from pv_design_model.config.defaults import DOD_PRESETS

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class BatteryBankResult:
    """Required bank size.

    Attributes:
        total_energy_wh: Energy the bank must deliver over the autonomy period.
        usable_capacity_wh: Nameplate energy including the DoD margin.
        capacity_ah: Nameplate capacity at the system voltage.
    """

    total_energy_wh: float
    usable_capacity_wh: float
    capacity_ah: float

    @property
    def rounded_capacity_ah(self) -> int:
        """Capacity rounded up to the next whole Ah."""
        return math.ceil(self.capacity_ah)


def dod_for_technology(technology: str) -> float:
    """Return the recommended depth of discharge (%) for *technology*.

    Raises:
        ValueError: If *technology* has no preset.
    """
    try:
        return DOD_PRESETS[technology]
    except KeyError:
        raise ValueError(
            f"Unknown battery technology '{technology}'. "
            f"Must be one of: {sorted(DOD_PRESETS)}."
        ) from None


def size_battery_bank(
    daily_consumption_wh: float,
    autonomy_days: float,
    system_voltage_v: float,
    depth_of_discharge_pct: float,
) -> BatteryBankResult:
    """Size a battery bank for the given consumption and autonomy.

    Args:
        daily_consumption_wh: Average daily consumption in Wh.
        autonomy_days: Days the bank must cover without solar input.
        system_voltage_v: Nominal bank voltage (12, 24, 48 V …).
        depth_of_discharge_pct: Usable fraction of capacity in %.

    Returns:
        :class:`BatteryBankResult`. The result is linear in consumption and
        autonomy.
    """
    total_energy = daily_consumption_wh * autonomy_days
    usable = total_energy / (depth_of_discharge_pct / 100.0)
    capacity_ah = usable / system_voltage_v

    logger.debug(
        "Battery bank: %.0f Wh × %g d at DoD %.0f %% → %.0f Wh, %.1f Ah @ %g V",
        daily_consumption_wh,
        autonomy_days,
        depth_of_discharge_pct,
        usable,
        capacity_ah,
        system_voltage_v,
    )
    return BatteryBankResult(
        total_energy_wh=total_energy,
        usable_capacity_wh=usable,
        capacity_ah=capacity_ah,
    )
