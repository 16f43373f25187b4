"""Number formatting helpers for output CSVs and stdout.

Every helper returns a string; ``None`` (a value that could not be computed,
or a catalog selection out of range) becomes ``""`` unless a placeholder is
given.
"""

from __future__ import annotations

from pv_design_model.config.defaults import CURRENCY_PRECISION, FLOAT_PRECISION


def fmt_float(value: float | None, precision: int = FLOAT_PRECISION) -> str:
    """Format *value* with *precision* decimal places, e.g. ``"3.1416"``."""
    if value is None:
        return ""
    return f"{value:.{precision}f}"


def fmt_currency(value: float | None, precision: int = CURRENCY_PRECISION) -> str:
    """Format a euro amount, e.g. ``"1234.50"``."""
    return fmt_float(value, precision=precision)


def fmt_pct(
    value: float | None,
    precision: int = 2,
    *,
    already_pct: bool = True,
) -> str:
    """Format a percentage without the % sign.

    Args:
        value: Percentage (``3.0``) or, with ``already_pct=False``, a
            decimal fraction (``0.03``) that is scaled by 100.
        precision: Decimal places.
        already_pct: Whether *value* is already in percent units.

    Returns:
        Formatted string, e.g. ``"3.00"``, or ``""`` for None.
    """
    if value is None:
        return ""
    display = value if already_pct else value * 100.0
    return f"{display:.{precision}f}"


def fmt_optional(
    value: float | int | None,
    precision: int = FLOAT_PRECISION,
    placeholder: str = "",
) -> str:
    """Format an optional number, returning *placeholder* for None.

    Integers are written without decimals.
    """
    if value is None:
        return placeholder
    if isinstance(value, int):
        return str(value)
    return fmt_float(value, precision=precision)
