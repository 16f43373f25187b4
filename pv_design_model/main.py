"""CLI entrypoint and orchestrator for the PV installation design calculators.

Execution flow
--------------
1.  Load & validate the design JSON.
2.  Optimal tilt for the site latitude (always).
3.  Sun path traces, row spacing, string search, cable, protections,
    battery bank, energy yield and financial return, each only when its
    section is present in the design file.
4.  Write output CSVs.
5.  Print summary to stdout.

A calculator that fails (e.g. the sun is below the horizon at the shadow
design hour) is logged and makes the exit code 1; the remaining calculators
still run.

Usage
-----
    python -m pv_design_model.main --design designs/example_design.json
    python -m pv_design_model.main --design my.json --output results
    python -m pv_design_model.main --design my.json --dry-run
    python -m pv_design_model.main --design my.json -v
"""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path

from pv_design_model.battery.bank import dod_for_technology, size_battery_bank
from pv_design_model.config.defaults import DEFAULT_OUTPUT_DIR
from pv_design_model.config.loader import DesignConfig, load_design
from pv_design_model.electrical.cable import size_cable
from pv_design_model.electrical.protection import size_protections
from pv_design_model.finance.payback import compute_return
from pv_design_model.output.csv_writer import (
    write_cashflow_csv,
    write_string_configurations_csv,
    write_summary_csv,
    write_sun_path_csv,
)
from pv_design_model.output.summary import (
    SummaryRow,
    battery_rows,
    cable_rows,
    financial_rows,
    production_rows,
    protection_rows,
    shadow_rows,
    string_rows,
    tilt_rows,
)
from pv_design_model.pv.production import estimate_energy_yield, hsp_for_zone
from pv_design_model.solar.position import REFERENCE_SUN_PATH_DAYS, sun_path
from pv_design_model.solar.shadow import min_row_spacing
from pv_design_model.solar.tilt import optimal_tilt
from pv_design_model.strings.search import search_string_configurations

logger = logging.getLogger(__name__)

# Errors a calculator step may raise for bad inputs; anything else is a bug.
_STEP_ERRORS = (ValueError, KeyError, FileNotFoundError, ZeroDivisionError)


# ---------------------------------------------------------------------------
# CLI argument parsing
# ---------------------------------------------------------------------------


def _build_parser() -> argparse.ArgumentParser:
    """Build the CLI argument parser."""
    p = argparse.ArgumentParser(
        prog="python -m pv_design_model.main",
        description="PV Installation Design Calculators",
    )
    p.add_argument(
        "--design",
        required=True,
        metavar="PATH",
        help="Path to design JSON file.",
    )
    p.add_argument(
        "--output",
        metavar="DIR",
        default=None,
        help="Output directory (overrides design JSON setting).",
    )
    p.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        default=False,
        help="Enable DEBUG logging.",
    )
    p.add_argument(
        "--dry-run",
        action="store_true",
        default=False,
        help="Validate the design file, then exit without calculating.",
    )
    return p


# ---------------------------------------------------------------------------
# Section helpers
# ---------------------------------------------------------------------------


def _sun_path_traces(design: DesignConfig) -> dict:
    block = design.sun_path or {}
    step = block.get("step_deg")
    if "days" in block:
        days = {f"day_{d}": d for d in block["days"]}
    else:
        days = dict(REFERENCE_SUN_PATH_DAYS)

    traces = {}
    for label, day in days.items():
        if step is None:
            traces[label] = sun_path(design.latitude, day)
        else:
            traces[label] = sun_path(design.latitude, day, step_deg=step)
    return traces


def _depth_of_discharge(block: dict) -> float:
    if "depth_of_discharge_pct" in block:
        return float(block["depth_of_discharge_pct"])
    return dod_for_technology(block["technology"])


def _hsp_hours(block: dict) -> float:
    if "hsp_hours" in block:
        return float(block["hsp_hours"])
    return hsp_for_zone(int(block["climate_zone"]))


# ---------------------------------------------------------------------------
# Main run
# ---------------------------------------------------------------------------


def run(args: argparse.Namespace) -> int:
    """Execute every calculator configured in the design file.

    Parameters
    ----------
    args:
        Parsed CLI arguments.

    Returns
    -------
    int
        Exit code (0 = success, 1 = error).
    """
    # ------------------------------------------------------------------
    # Step 1: Load & validate design JSON
    # ------------------------------------------------------------------
    logger.info("Loading design: %s", args.design)
    try:
        design = load_design(args.design)
    except Exception as exc:
        logger.error("Failed to load design: %s", exc)
        return 1

    if args.dry_run:
        print(f"Dry run: design '{design.name}' validated successfully.")
        return 0

    output_base = Path(args.output or design.output_dir or DEFAULT_OUTPUT_DIR)
    output_dir = output_base / design.name
    output_dir.mkdir(parents=True, exist_ok=True)
    logger.info("Output directory: %s", output_dir)

    rows: list[SummaryRow] = []
    failed: list[str] = []

    # ------------------------------------------------------------------
    # Step 2: Tilt
    # ------------------------------------------------------------------
    tilt = optimal_tilt(design.latitude)
    rows.extend(tilt_rows(tilt))

    # ------------------------------------------------------------------
    # Step 3: Sun path
    # ------------------------------------------------------------------
    if design.sun_path is not None:
        try:
            traces = _sun_path_traces(design)
            write_sun_path_csv(output_dir / f"{design.name}_sun_path.csv", traces)
        except _STEP_ERRORS as exc:
            logger.error("Sun path failed: %s", exc)
            failed.append("sun_path")

    # ------------------------------------------------------------------
    # Step 4: Row spacing
    # ------------------------------------------------------------------
    if design.shadow is not None:
        block = design.shadow
        try:
            spacing = min_row_spacing(
                design.latitude,
                panel_length_m=float(block["panel_length_m"]),
                tilt_deg=float(block["tilt_deg"]),
                panel_azimuth_deg=float(block.get("panel_azimuth_deg", 0.0)),
                design_hour=float(block["design_hour"]),
            )
            rows.extend(shadow_rows(spacing))
        except _STEP_ERRORS as exc:
            logger.error("Row spacing failed: %s", exc)
            failed.append("shadow")

    # ------------------------------------------------------------------
    # Step 5: String configuration search
    # ------------------------------------------------------------------
    if design.sizing is not None:
        try:
            inverter = design.inverter()
            search = search_string_configurations(
                design.panel(), inverter, design.string_settings()
            )
            rows.extend(string_rows(search))
            write_string_configurations_csv(
                output_dir / f"{design.name}_strings.csv", search, inverter
            )
        except _STEP_ERRORS as exc:
            logger.error("String search failed: %s", exc)
            failed.append("sizing")

    # ------------------------------------------------------------------
    # Step 6: Cable sizing
    # ------------------------------------------------------------------
    if design.cable is not None:
        block = design.cable
        try:
            cable = size_cable(
                power_w=float(block["power_w"]),
                voltage_v=float(block["voltage_v"]),
                length_m=float(block["length_m"]),
                material=block["material"],
                max_drop_pct=float(block["max_drop_pct"]),
            )
            if not cable.within_drop_limit:
                logger.warning(
                    "Cable voltage drop %.2f %% exceeds the %.2f %% limit.",
                    cable.actual_voltage_drop_pct,
                    cable.max_voltage_drop_pct,
                )
            rows.extend(cable_rows(cable))
        except _STEP_ERRORS as exc:
            logger.error("Cable sizing failed: %s", exc)
            failed.append("cable")

    # ------------------------------------------------------------------
    # Step 7: Protections
    # ------------------------------------------------------------------
    if design.protection is not None:
        block = design.protection
        try:
            protections = size_protections(
                panel_isc=float(block["panel_isc"]),
                parallel_strings=int(block["parallel_strings"]),
                inverter_power_w=float(block["inverter_power_w"]),
                grid_voltage_v=float(block["grid_voltage_v"]),
                phase_count=int(block["phase_count"]),
            )
            rows.extend(protection_rows(protections))
        except _STEP_ERRORS as exc:
            logger.error("Protection sizing failed: %s", exc)
            failed.append("protection")

    # ------------------------------------------------------------------
    # Step 8: Battery bank
    # ------------------------------------------------------------------
    if design.battery is not None:
        block = design.battery
        try:
            bank = size_battery_bank(
                daily_consumption_wh=float(block["daily_consumption_wh"]),
                autonomy_days=float(block["autonomy_days"]),
                system_voltage_v=float(block["system_voltage_v"]),
                depth_of_discharge_pct=_depth_of_discharge(block),
            )
            rows.extend(battery_rows(bank))
        except _STEP_ERRORS as exc:
            logger.error("Battery sizing failed: %s", exc)
            failed.append("battery")

    # ------------------------------------------------------------------
    # Step 9: Energy yield
    # ------------------------------------------------------------------
    energy_yield = None
    if design.production is not None:
        block = design.production
        try:
            if "performance_ratio_pct" in block:
                energy_yield = estimate_energy_yield(
                    float(block["peak_power_kwp"]),
                    _hsp_hours(block),
                    float(block["performance_ratio_pct"]),
                )
            else:
                energy_yield = estimate_energy_yield(
                    float(block["peak_power_kwp"]), _hsp_hours(block)
                )
            rows.extend(production_rows(energy_yield))
        except _STEP_ERRORS as exc:
            logger.error("Energy yield failed: %s", exc)
            failed.append("production")

    # ------------------------------------------------------------------
    # Step 10: Financial return
    # ------------------------------------------------------------------
    if design.financial is not None:
        block = design.financial
        if "annual_generation_kwh" in block:
            generation = float(block["annual_generation_kwh"])
        elif energy_yield is not None:
            generation = energy_yield.annual_kwh
        else:
            generation = None

        if generation is None:
            logger.error("Financial return skipped: no annual generation available.")
            failed.append("financial")
        else:
            try:
                ret = compute_return(
                    system_cost_eur=float(block["system_cost_eur"]),
                    annual_generation_kwh=generation,
                    self_consumption_pct=float(block["self_consumption_pct"]),
                    buy_price_eur=float(block["buy_price_eur"]),
                    sell_price_eur=float(block["sell_price_eur"]),
                )
                rows.extend(financial_rows(ret))
                write_cashflow_csv(output_dir / f"{design.name}_cashflow.csv", ret)
            except _STEP_ERRORS as exc:
                logger.error("Financial return failed: %s", exc)
                failed.append("financial")

    # ------------------------------------------------------------------
    # Step 11: Summary
    # ------------------------------------------------------------------
    write_summary_csv(output_dir / f"{design.name}_summary.csv", rows)
    _print_summary(design.name, rows, failed)

    if failed:
        logger.error("Calculators with errors: %s", ", ".join(failed))
        return 1
    logger.info("Design '%s' completed. Outputs in: %s", design.name, output_dir)
    return 0


def _print_summary(design_name: str, rows: list[SummaryRow], failed: list[str]) -> None:
    """Print the calculator results to stdout."""
    print()
    print("=" * 60)
    print(f"  Design: {design_name}")
    print("=" * 60)
    current = None
    for row in rows:
        if row.calculator != current:
            if current is not None:
                print()
            print(f"  [{row.calculator}]")
            current = row.calculator
        value = f"{row.value} {row.unit}".strip() if row.value else "n/a"
        print(f"    {row.quantity:<28} {value}")
    if failed:
        print()
        print(f"  Failed: {', '.join(failed)}")
    print("=" * 60)
    print()


# ---------------------------------------------------------------------------
# Entry point
# ---------------------------------------------------------------------------


def main() -> None:
    """Parse CLI arguments and run the design."""
    parser = _build_parser()
    args = parser.parse_args()

    log_level = logging.DEBUG if args.verbose else logging.INFO
    logging.basicConfig(
        level=log_level,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%H:%M:%S",
    )

    sys.exit(run(args))


if __name__ == "__main__":
    main()
