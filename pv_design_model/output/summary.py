"""Flatten calculator results into (calculator, quantity, value, unit) rows.

The same rows feed the summary CSV and the terminal summary printed by the
CLI, so both always show the same numbers.
"""

from __future__ import annotations

from dataclasses import dataclass

from pv_design_model.battery.bank import BatteryBankResult
from pv_design_model.electrical.cable import CableSizingResult
from pv_design_model.electrical.protection import ProtectionRatings
from pv_design_model.finance.payback import ReturnResult
from pv_design_model.output.formatting import fmt_currency, fmt_float, fmt_optional, fmt_pct
from pv_design_model.pv.production import EnergyYield
from pv_design_model.solar.shadow import ShadowSpacingResult
from pv_design_model.solar.tilt import TiltResult
from pv_design_model.strings.search import StringSearchResult


@dataclass(frozen=True)
class SummaryRow:
    """One headline quantity, already formatted."""

    calculator: str
    quantity: str
    value: str
    unit: str = ""

    def as_dict(self) -> dict[str, str]:
        return {
            "calculator": self.calculator,
            "quantity": self.quantity,
            "value": self.value,
            "unit": self.unit,
        }


def tilt_rows(result: TiltResult) -> list[SummaryRow]:
    name = "tilt"
    return [
        SummaryRow(name, "annual_tilt", fmt_float(result.annual_tilt, 1), "deg"),
        SummaryRow(name, "winter_tilt", fmt_float(result.winter_tilt, 1), "deg"),
        SummaryRow(name, "summer_tilt", fmt_float(result.summer_tilt, 1), "deg"),
    ]


def shadow_rows(result: ShadowSpacingResult) -> list[SummaryRow]:
    name = "shadow"
    sun = result.critical_sun_position
    return [
        SummaryRow(name, "min_row_spacing", fmt_float(result.min_row_spacing_m, 2), "m"),
        SummaryRow(name, "shadow_length", fmt_float(result.shadow_length_m, 2), "m"),
        SummaryRow(name, "vertical_projection", fmt_float(result.vertical_projection_m, 2), "m"),
        SummaryRow(name, "sun_elevation", fmt_float(sun.elevation, 2), "deg"),
        SummaryRow(name, "sun_azimuth", fmt_float(sun.azimuth, 2), "deg"),
    ]


def string_rows(result: StringSearchResult) -> list[SummaryRow]:
    name = "strings"
    rows = [
        SummaryRow(name, "voc_max", fmt_float(result.voc_max_v, 2), "V"),
        SummaryRow(name, "vmp_min", fmt_float(result.vmp_min_v, 2), "V"),
        SummaryRow(name, "max_panels_per_string", str(result.max_panels_per_string)),
        SummaryRow(name, "min_panels_per_string", str(result.min_panels_per_string)),
        SummaryRow(name, "max_total_panels", str(result.max_total_panels)),
    ]
    best = result.configurations[0] if result.configurations else None
    rows.append(SummaryRow(name, "best_configuration", best.signature if best else ""))
    rows.append(
        SummaryRow(
            name,
            "best_total_power",
            fmt_optional(best.total_power_w if best else None, 0),
            "W",
        )
    )
    return rows


def cable_rows(result: CableSizingResult) -> list[SummaryRow]:
    name = "cable"
    return [
        SummaryRow(name, "current", fmt_float(result.current_a, 2), "A"),
        SummaryRow(name, "required_section", fmt_float(result.required_cross_section_mm2, 3), "mm2"),
        SummaryRow(name, "selected_section", fmt_float(result.selected_cross_section_mm2, 1), "mm2"),
        SummaryRow(name, "voltage_drop", fmt_float(result.actual_voltage_drop_v, 2), "V"),
        SummaryRow(name, "voltage_drop_pct", fmt_pct(result.actual_voltage_drop_pct), "%"),
        SummaryRow(name, "out_of_catalog", str(result.is_out_of_catalog)),
    ]


def protection_rows(result: ProtectionRatings) -> list[SummaryRow]:
    name = "protection"
    return [
        SummaryRow(name, "min_fuse_rating", fmt_float(result.min_fuse_rating_a, 2), "A"),
        SummaryRow(name, "fuse_rating", fmt_optional(result.fuse_rating_a, 0), "A"),
        SummaryRow(name, "disconnect_switch_rating", fmt_float(result.disconnect_switch_rating_a, 2), "A"),
        SummaryRow(name, "ac_output_current", fmt_float(result.ac_output_current_a, 2), "A"),
        SummaryRow(name, "min_breaker_rating", fmt_float(result.min_breaker_rating_a, 2), "A"),
        SummaryRow(name, "breaker_rating", fmt_optional(result.breaker_rating_a, 0), "A"),
        SummaryRow(name, "fuse_out_of_catalog", str(result.fuse_out_of_catalog)),
        SummaryRow(name, "breaker_out_of_catalog", str(result.breaker_out_of_catalog)),
    ]


def battery_rows(result: BatteryBankResult) -> list[SummaryRow]:
    name = "battery"
    return [
        SummaryRow(name, "total_energy", fmt_float(result.total_energy_wh, 0), "Wh"),
        SummaryRow(name, "usable_capacity", fmt_float(result.usable_capacity_wh, 0), "Wh"),
        SummaryRow(name, "capacity", str(result.rounded_capacity_ah), "Ah"),
    ]


def production_rows(result: EnergyYield) -> list[SummaryRow]:
    name = "production"
    return [
        SummaryRow(name, "daily_yield", fmt_float(result.daily_kwh, 2), "kWh"),
        SummaryRow(name, "monthly_yield", fmt_float(result.monthly_kwh, 1), "kWh"),
        SummaryRow(name, "annual_yield", fmt_float(result.annual_kwh, 0), "kWh"),
    ]


def financial_rows(result: ReturnResult) -> list[SummaryRow]:
    name = "financial"
    return [
        SummaryRow(name, "annual_savings", fmt_currency(result.annual_savings_eur), "EUR"),
        SummaryRow(name, "annual_surplus_earnings", fmt_currency(result.annual_surplus_earnings_eur), "EUR"),
        SummaryRow(name, "annual_benefit", fmt_currency(result.annual_benefit_eur), "EUR"),
        SummaryRow(name, "payback", fmt_optional(result.payback_years, 1), "years"),
        SummaryRow(name, "net_benefit_25_years", fmt_currency(result.net_benefit_at_25_years_eur), "EUR"),
        SummaryRow(name, "simple_irr", fmt_pct(result.simple_irr, already_pct=False), "%"),
    ]
