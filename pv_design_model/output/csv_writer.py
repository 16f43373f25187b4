"""Write design results to CSV files.

Up to four files are produced per design run:

1. ``{name}_summary.csv``   – One row per calculator quantity.
2. ``{name}_strings.csv``   – Ranked string configurations.
3. ``{name}_sun_path.csv``  – Above-horizon samples of each traced day.
4. ``{name}_cashflow.csv``  – Cumulative cashflow per year (years 0..25).

None values are written as empty strings.

Public API
----------
write_summary_csv                – Write the calculator summary rows.
write_string_configurations_csv  – Write the ranked string layouts.
write_sun_path_csv               – Write sun path traces.
write_cashflow_csv               – Write the cumulative cashflow table.
"""

from __future__ import annotations

import csv
import logging
from pathlib import Path

from pv_design_model.config.defaults import CSV_DELIMITER
from pv_design_model.finance.payback import ReturnResult
from pv_design_model.output.formatting import fmt_currency, fmt_float
from pv_design_model.output.summary import SummaryRow
from pv_design_model.solar.position import SunPathPoint
from pv_design_model.strings.search import InverterSpec, StringSearchResult

logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# Summary CSV
# ---------------------------------------------------------------------------


def write_summary_csv(path: Path | str, rows: list[SummaryRow]) -> None:
    """Write the calculator summary CSV.

    Columns: ``calculator``, ``quantity``, ``value``, ``unit``.
    """
    _write_dicts(path, [row.as_dict() for row in rows])
    logger.info("Wrote summary CSV (%d rows): %s", len(rows), path)


# ---------------------------------------------------------------------------
# String configurations CSV
# ---------------------------------------------------------------------------


def write_string_configurations_csv(
    path: Path | str,
    result: StringSearchResult,
    inverter: InverterSpec,
) -> None:
    """Write one row per ranked string configuration.

    Parameters
    ----------
    path:
        Destination file path.
    result:
        Search result whose ``configurations`` are written in rank order.
    inverter:
        Inverter the configurations were sized for (used for the DC/AC ratio).
    """
    rows = []
    for rank, cfg in enumerate(result.configurations, start=1):
        rows.append(
            {
                "rank": rank,
                "signature": cfg.signature,
                "string_count": cfg.string_count,
                "panels_per_string": " + ".join(str(n) for n in cfg.panels_per_string),
                "total_panels": cfg.total_panels,
                "total_power_w": fmt_float(cfg.total_power_w, 0),
                "dc_ac_ratio": fmt_float(cfg.dc_ac_ratio(inverter), 3),
                "voc_per_string_v": " / ".join(
                    fmt_float(v, 2) for v in cfg.open_circuit_voltage_per_string
                ),
                "is_valid": cfg.is_valid,
                "violations": ";".join(sorted(cfg.violations)),
                "fitness_score": fmt_float(cfg.fitness_score, 2),
            }
        )
    _write_dicts(path, rows)
    logger.info("Wrote string configurations CSV (%d rows): %s", len(rows), path)


# ---------------------------------------------------------------------------
# Sun path CSV
# ---------------------------------------------------------------------------


def write_sun_path_csv(
    path: Path | str,
    traces: dict[str, list[SunPathPoint]],
) -> None:
    """Write sun path samples, one row per (day, hour angle).

    Parameters
    ----------
    path:
        Destination file path.
    traces:
        Mapping of day label (e.g. ``"winter_solstice"`` or ``"day_120"``)
        to its above-horizon samples.
    """
    rows = []
    for label, points in traces.items():
        for point in points:
            rows.append(
                {
                    "day": label,
                    "hour_angle_deg": fmt_float(point.hour_angle, 1),
                    "elevation_deg": fmt_float(point.elevation, 3),
                    "azimuth_deg": fmt_float(point.azimuth, 3),
                }
            )
    _write_dicts(path, rows)
    logger.info("Wrote sun path CSV (%d rows): %s", len(rows), path)


# ---------------------------------------------------------------------------
# Cashflow CSV
# ---------------------------------------------------------------------------


def write_cashflow_csv(path: Path | str, result: ReturnResult) -> None:
    """Write the cumulative undiscounted cashflow, one row per year."""
    rows = [
        {"year": year, "cumulative_cashflow_eur": fmt_currency(float(value))}
        for year, value in enumerate(result.cumulative_cashflows)
    ]
    _write_dicts(path, rows)
    logger.info("Wrote cashflow CSV (%d rows): %s", len(rows), path)


# ---------------------------------------------------------------------------
# Internal helper
# ---------------------------------------------------------------------------


def _write_dicts(path: Path | str, rows: list[dict]) -> None:
    """Write a list of dicts to a CSV file, creating parent directories.

    The first dict determines the column order. An empty *rows* list
    produces an empty file.
    """
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)

    if not rows:
        path.write_text("", encoding="utf-8")
        return

    fieldnames = list(rows[0].keys())
    with path.open("w", newline="", encoding="utf-8") as fh:
        writer = csv.DictWriter(fh, fieldnames=fieldnames, delimiter=CSV_DELIMITER)
        writer.writeheader()
        writer.writerows(rows)
