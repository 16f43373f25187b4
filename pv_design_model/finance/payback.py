"""Simple return on investment for a self-consumption PV system.

Purely linear, no discount rate, no tariff escalation, no degradation:

    annual_savings    = E × sc/100 × buy_price
    surplus_earnings  = E × (1 − sc/100) × sell_price
    payback_years     = cost / (savings + surplus)
    net_benefit_25    = 25 × (savings + surplus) − cost
"""

from __future__ import annotations

import logging
from dataclasses import dataclass

import numpy as np

from pv_design_model.config.defaults import FINANCIAL_HORIZON_YEARS
from pv_design_model.finance.metrics import (
    build_linear_cashflows,
    calculate_payback_year,
    safe_irr,
)

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ReturnResult:
    """Financial return of a PV installation.

    Attributes:
        annual_savings_eur: Avoided grid purchases per year.
        annual_surplus_earnings_eur: Income from exported energy per year.
        annual_benefit_eur: Sum of savings and surplus earnings.
        payback_years: Investment divided by annual benefit (fractional), or
            None when the annual benefit is zero.
        net_benefit_at_25_years_eur: 25 years of benefit minus the investment.
        cumulative_cashflows: Cumulative undiscounted cashflow, years 0..25.
        payback_year: First whole year with a non-negative cumulative
            cashflow within the horizon, or None.
        simple_irr: IRR of the undiscounted 25-year cashflow, or None.
    """

    annual_savings_eur: float
    annual_surplus_earnings_eur: float
    annual_benefit_eur: float
    payback_years: float | None
    net_benefit_at_25_years_eur: float
    cumulative_cashflows: np.ndarray
    payback_year: int | None
    simple_irr: float | None


def compute_return(
    system_cost_eur: float,
    annual_generation_kwh: float,
    self_consumption_pct: float,
    buy_price_eur: float,
    sell_price_eur: float,
) -> ReturnResult:
    """Compute payback and 25-year net benefit.

    Parameters
    ----------
    system_cost_eur:
        Installed system cost in €.
    annual_generation_kwh:
        Expected annual PV production in kWh.
    self_consumption_pct:
        Share of production consumed on site in % (0-100).
    buy_price_eur:
        Grid purchase price in €/kWh.
    sell_price_eur:
        Compensation for exported energy in €/kWh.

    Returns
    -------
    ReturnResult
    """
    sc_fraction = self_consumption_pct / 100.0
    savings = annual_generation_kwh * sc_fraction * buy_price_eur
    surplus = annual_generation_kwh * (1.0 - sc_fraction) * sell_price_eur
    benefit = savings + surplus

    if benefit == 0.0:
        payback_years = None
        logger.warning("Annual benefit is zero; the investment never pays back.")
    else:
        payback_years = system_cost_eur / benefit

    cashflows = build_linear_cashflows(system_cost_eur, benefit, FINANCIAL_HORIZON_YEARS)
    net_benefit = FINANCIAL_HORIZON_YEARS * benefit - system_cost_eur

    result = ReturnResult(
        annual_savings_eur=savings,
        annual_surplus_earnings_eur=surplus,
        annual_benefit_eur=benefit,
        payback_years=payback_years,
        net_benefit_at_25_years_eur=net_benefit,
        cumulative_cashflows=np.cumsum(cashflows),
        payback_year=calculate_payback_year(cashflows),
        simple_irr=safe_irr(cashflows),
    )
    logger.info(
        "Return: benefit=%.2f €/yr, payback=%s yr, net 25 yr=%.0f €",
        benefit,
        f"{payback_years:.1f}" if payback_years is not None else "n/a",
        net_benefit,
    )
    return result
