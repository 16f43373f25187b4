"""Brute-force search over series/parallel string layouts for one inverter.

The search space has two shapes:

1. **Single string**: every panel in series on one MPPT input.
2. **Dual string**: two series strings on two MPPT inputs, one per channel.

Temperature-corrected voltages bound the string length; DC/AC oversizing
(130 %) and the available panel count bound the total. Every candidate is
scored by its distance to the target power and the ten best distinct layouts
are returned. The space is at most a few dozen totals times their splits, so
no pruning is applied.

Public API
----------
PanelSpec                    – Module datasheet values.
InverterSpec                 – Inverter DC input and AC output limits.
StringSearchSettings         – Site temperatures, target power, panel budget.
StringConfiguration          – One candidate layout.
StringSearchResult           – Derived bounds + ranked candidates.
search_string_configurations – Main entry point.
"""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass, field

from pv_design_model.config.defaults import (
    DC_AC_OVERSIZING_FACTOR,
    DUAL_STRING_MIN_MPPT_CHANNELS,
    MAX_RANKED_CONFIGURATIONS,
    STC_TEMPERATURE_C,
    VIOLATION_CURRENT_LIMIT,
    VMP_TEMP_COEFF_PCT_PER_C,
)

logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# Inputs
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class PanelSpec:
    """PV module datasheet values at STC.

    Attributes
    ----------
    rated_power_w:
        Nameplate power (Pmax) in W.
    open_circuit_voltage_v:
        Voc in V.
    short_circuit_current_a:
        Isc in A.
    voltage_at_max_power_v:
        Vmp in V.
    current_at_max_power_a:
        Imp in A.
    voltage_temp_coeff_pct_per_c:
        Voc temperature coefficient in %/°C (negative for crystalline Si).
    model:
        Optional model name.
    """

    rated_power_w: float
    open_circuit_voltage_v: float
    short_circuit_current_a: float
    voltage_at_max_power_v: float
    current_at_max_power_a: float
    voltage_temp_coeff_pct_per_c: float
    model: str = ""


@dataclass(frozen=True)
class InverterSpec:
    """Inverter limits relevant for string design.

    Attributes
    ----------
    max_output_power_w:
        Rated AC output power in W.
    max_dc_voltage_v:
        Absolute maximum DC input voltage in V.
    min_mppt_voltage_v:
        Lower bound of the MPPT voltage window in V.
    max_mppt_voltage_v:
        Upper bound of the MPPT voltage window in V.
    max_input_current_a:
        Maximum input current per MPPT channel in A.
    mppt_channel_count:
        Number of independent MPPT inputs.
    model:
        Optional model name.
    """

    max_output_power_w: float
    max_dc_voltage_v: float
    min_mppt_voltage_v: float
    max_mppt_voltage_v: float
    max_input_current_a: float
    mppt_channel_count: int
    model: str = ""


@dataclass(frozen=True)
class StringSearchSettings:
    """Site and project constraints for the search."""

    min_ambient_temp_c: float
    max_ambient_temp_c: float
    target_power_w: float
    max_panels_available: int


# ---------------------------------------------------------------------------
# Result types
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class StringConfiguration:
    """One candidate string layout.

    Attributes
    ----------
    panels_per_string:
        Panel count of each string, one entry per MPPT channel used.
    total_panels:
        Sum of ``panels_per_string``.
    total_power_w:
        ``total_panels × rated_power_w``.
    open_circuit_voltage_per_string:
        Cold-weather Voc of each string in V.
    is_valid:
        False when any constraint in ``violations`` is broken.
    violations:
        Names of broken constraints (e.g. ``"current_limit"``).
    fitness_score:
        ``|total_power_w − target_power_w|``; lower is better.
    """

    panels_per_string: tuple[int, ...]
    total_panels: int
    total_power_w: float
    open_circuit_voltage_per_string: tuple[float, ...]
    is_valid: bool
    violations: frozenset[str] = field(default_factory=frozenset)
    fitness_score: float = 0.0

    @property
    def signature(self) -> str:
        """Identity of the layout, e.g. ``"1s-9"`` or ``"2s-4-5"``."""
        counts = "-".join(str(n) for n in self.panels_per_string)
        return f"{len(self.panels_per_string)}s-{counts}"

    @property
    def string_count(self) -> int:
        """Number of strings (MPPT channels used)."""
        return len(self.panels_per_string)

    def dc_ac_ratio(self, inverter: InverterSpec) -> float:
        """DC nameplate over inverter AC rating."""
        return self.total_power_w / inverter.max_output_power_w


@dataclass(frozen=True)
class StringSearchResult:
    """Derived bounds and the ranked configurations.

    Attributes
    ----------
    voc_max_v:
        Panel Voc at the minimum ambient temperature.
    vmp_min_v:
        Panel Vmp at the maximum ambient temperature.
    max_panels_per_string:
        Longest string allowed by the DC voltage limit.
    min_panels_per_string:
        Shortest string keeping Vmp inside the MPPT window.
    max_total_panels:
        Upper bound on the total panel count.
    configurations:
        Best layouts, ascending fitness score (at most ten). Empty when no
        layout fits.
    """

    voc_max_v: float
    vmp_min_v: float
    max_panels_per_string: int
    min_panels_per_string: int
    max_total_panels: int
    configurations: list[StringConfiguration]

    @property
    def is_empty(self) -> bool:
        """True when no configuration satisfies the voltage window."""
        return not self.configurations


# ---------------------------------------------------------------------------
# Temperature corrections and bounds
# ---------------------------------------------------------------------------


def cold_open_circuit_voltage(panel: PanelSpec, min_ambient_temp_c: float) -> float:
    """Voc at the coldest expected temperature (rises as temperature drops)."""
    delta_t = min_ambient_temp_c - STC_TEMPERATURE_C
    return panel.open_circuit_voltage_v * (
        1.0 + delta_t * panel.voltage_temp_coeff_pct_per_c / 100.0
    )


def hot_max_power_voltage(panel: PanelSpec, max_ambient_temp_c: float) -> float:
    """Vmp at the hottest expected temperature using a fixed −0.4 %/°C droop."""
    delta_t = max_ambient_temp_c - STC_TEMPERATURE_C
    return panel.voltage_at_max_power_v * (
        1.0 + delta_t * VMP_TEMP_COEFF_PCT_PER_C / 100.0
    )


def max_total_panels(
    panel: PanelSpec,
    inverter: InverterSpec,
    max_panels_available: int,
) -> int:
    """Cap the panel count by availability and by 130 % DC/AC oversizing."""
    by_power = math.floor(
        inverter.max_output_power_w * DC_AC_OVERSIZING_FACTOR / panel.rated_power_w
    )
    return min(int(max_panels_available), by_power)


# ---------------------------------------------------------------------------
# Candidate construction
# ---------------------------------------------------------------------------


def _make_candidate(
    strings: tuple[int, ...],
    panel: PanelSpec,
    inverter: InverterSpec,
    voc_max: float,
    target_power_w: float,
) -> StringConfiguration:
    """Build one candidate and evaluate its constraints.

    Each string feeds its own MPPT input, so the current check compares the
    panel Isc with the per-channel limit regardless of the string count.
    """
    total = sum(strings)
    power = total * panel.rated_power_w

    violations: set[str] = set()
    if panel.short_circuit_current_a >= inverter.max_input_current_a:
        violations.add(VIOLATION_CURRENT_LIMIT)

    return StringConfiguration(
        panels_per_string=strings,
        total_panels=total,
        total_power_w=power,
        open_circuit_voltage_per_string=tuple(n * voc_max for n in strings),
        is_valid=not violations,
        violations=frozenset(violations),
        fitness_score=abs(power - target_power_w),
    )


def _ranking_key(config: StringConfiguration) -> tuple[float, int]:
    """Ascending distance to target, then fewer panels first."""
    return (config.fitness_score, config.total_panels)


def rank_configurations(
    candidates: list[StringConfiguration],
    limit: int = MAX_RANKED_CONFIGURATIONS,
) -> list[StringConfiguration]:
    """Sort, drop repeated layouts (first occurrence wins) and truncate.

    ``sorted`` is stable, so candidates with equal keys keep their
    enumeration order (single string before dual, smaller first string first).
    """
    seen: set[str] = set()
    ranked: list[StringConfiguration] = []
    for cfg in sorted(candidates, key=_ranking_key):
        if cfg.signature in seen:
            continue
        seen.add(cfg.signature)
        ranked.append(cfg)
        if len(ranked) == limit:
            break
    return ranked


# ---------------------------------------------------------------------------
# Public entry point
# ---------------------------------------------------------------------------


def search_string_configurations(
    panel: PanelSpec,
    inverter: InverterSpec,
    settings: StringSearchSettings,
) -> StringSearchResult:
    """Enumerate single and dual string layouts and rank them.

    Parameters
    ----------
    panel:
        Module datasheet values.
    inverter:
        Inverter limits.
    settings:
        Site temperatures, target power and the number of panels available.

    Returns
    -------
    StringSearchResult
        Derived bounds plus up to ten configurations ordered by ascending
        fitness score (ties: fewer panels first). An empty list signals that
        no layout fits; no exception is raised.
    """
    voc_max = cold_open_circuit_voltage(panel, settings.min_ambient_temp_c)
    vmp_min = hot_max_power_voltage(panel, settings.max_ambient_temp_c)
    max_per_string = math.floor(inverter.max_dc_voltage_v / voc_max)
    min_per_string = math.ceil(inverter.min_mppt_voltage_v / vmp_min)
    upper_total = max_total_panels(panel, inverter, settings.max_panels_available)

    logger.debug(
        "String bounds: Voc_max=%.2f V, Vmp_min=%.2f V, per-string %d..%d, "
        "total <= %d",
        voc_max,
        vmp_min,
        min_per_string,
        max_per_string,
        upper_total,
    )

    candidates: list[StringConfiguration] = []
    for total in range(1, upper_total + 1):
        if min_per_string <= total <= max_per_string:
            candidates.append(
                _make_candidate((total,), panel, inverter, voc_max, settings.target_power_w)
            )

        if (
            inverter.mppt_channel_count >= DUAL_STRING_MIN_MPPT_CHANNELS
            and total >= 2 * min_per_string
        ):
            for s1 in range(min_per_string, max_per_string + 1):
                s2 = total - s1
                if min_per_string <= s2 <= max_per_string:
                    candidates.append(
                        _make_candidate(
                            (s1, s2), panel, inverter, voc_max, settings.target_power_w
                        )
                    )

    ranked = rank_configurations(candidates)

    if not ranked:
        logger.warning(
            "No string configuration fits: per-string range %d..%d, total <= %d.",
            min_per_string,
            max_per_string,
            upper_total,
        )
    else:
        best = ranked[0]
        logger.info(
            "String search: %d candidates, best %s (%.0f W, score %.0f, valid=%s).",
            len(candidates),
            best.signature,
            best.total_power_w,
            best.fitness_score,
            best.is_valid,
        )

    return StringSearchResult(
        voc_max_v=voc_max,
        vmp_min_v=vmp_min,
        max_panels_per_string=max_per_string,
        min_panels_per_string=min_per_string,
        max_total_panels=upper_total,
        configurations=ranked,
    )
