"""Cashflow metrics: linear cashflow series, IRR, payback year.

IRR computations use ``numpy_financial``. IRR convergence failures return
``None`` instead of raising exceptions.
"""

from __future__ import annotations

import logging

import numpy as np
import numpy_financial as npf

logger = logging.getLogger(__name__)


def build_linear_cashflows(
    investment: float,
    annual_benefit: float,
    years: int,
) -> np.ndarray:
    """Return the undiscounted cashflow series for a constant annual benefit.

    Args:
        investment: Up-front cost in euros (booked negative in year 0).
        annual_benefit: Benefit received at the end of every year.
        years: Number of benefit years.

    Returns:
        Array of length ``years + 1``: ``[-investment, benefit, …, benefit]``.
    """
    cashflows = np.full(years + 1, float(annual_benefit))
    cashflows[0] = -float(investment)
    return cashflows


def safe_irr(cashflows: np.ndarray) -> float | None:
    """Compute IRR, returning None on convergence failure.

    Args:
        cashflows: Array of cashflows (year 0 through N).

    Returns:
        IRR as a decimal, or None if the solver does not converge.
    """
    try:
        result = float(npf.irr(cashflows))
    except (ValueError, FloatingPointError) as exc:
        logger.debug("IRR solver failed: %s", exc)
        return None
    if np.isnan(result) or np.isinf(result):
        logger.debug("IRR did not converge for %d cashflows", len(cashflows))
        return None
    return result


def calculate_payback_year(cashflows: np.ndarray) -> int | None:
    """Find the first year where the cumulative cashflow is no longer negative.

    Args:
        cashflows: Array of cashflows (year 0 through N).

    Returns:
        Year index where the cumulative CF first reaches zero or more
        (0 only for a zero investment), or None if payback is never reached.
    """
    cumulative = np.cumsum(cashflows)
    recovered = np.where(cumulative >= 0.0)[0]
    if len(recovered) == 0:
        return None
    return int(recovered[0])
