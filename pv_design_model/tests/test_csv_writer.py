"""Tests for output/csv_writer.py and output/summary.py."""

from __future__ import annotations

import csv

from pv_design_model.electrical.protection import size_protections
from pv_design_model.finance.payback import compute_return
from pv_design_model.output.csv_writer import (
    write_cashflow_csv,
    write_string_configurations_csv,
    write_summary_csv,
    write_sun_path_csv,
)
from pv_design_model.output.summary import SummaryRow, protection_rows, tilt_rows
from pv_design_model.solar.position import sun_path
from pv_design_model.solar.tilt import optimal_tilt
from pv_design_model.strings.search import search_string_configurations


def _read_rows(path) -> list[dict]:
    with path.open(newline="", encoding="utf-8") as fh:
        return list(csv.DictReader(fh))


class TestSummaryCsv:
    def test_columns_and_rows(self, tmp_path) -> None:
        rows = tilt_rows(optimal_tilt(40.0))
        path = tmp_path / "summary.csv"
        write_summary_csv(path, rows)
        written = _read_rows(path)
        assert list(written[0]) == ["calculator", "quantity", "value", "unit"]
        assert len(written) == 3
        annual = next(r for r in written if r["quantity"] == "annual_tilt")
        assert annual == {"calculator": "tilt", "quantity": "annual_tilt", "value": "34.8", "unit": "deg"}

    def test_out_of_catalog_written_as_empty(self, tmp_path) -> None:
        rows = protection_rows(size_protections(33.0, 1, 100000.0, 230.0, 1))
        path = tmp_path / "summary.csv"
        write_summary_csv(path, rows)
        by_quantity = {r["quantity"]: r["value"] for r in _read_rows(path)}
        assert by_quantity["fuse_rating"] == ""
        assert by_quantity["breaker_rating"] == ""
        assert by_quantity["min_fuse_rating"] == "41.25"
        assert by_quantity["fuse_out_of_catalog"] == "True"
        assert by_quantity["breaker_out_of_catalog"] == "True"

    def test_in_catalog_flags_false(self, tmp_path) -> None:
        rows = protection_rows(size_protections(10.0, 1, 5000.0, 230.0, 1))
        path = tmp_path / "summary.csv"
        write_summary_csv(path, rows)
        by_quantity = {r["quantity"]: r["value"] for r in _read_rows(path)}
        assert by_quantity["fuse_rating"] == "15"
        assert by_quantity["fuse_out_of_catalog"] == "False"
        assert by_quantity["breaker_out_of_catalog"] == "False"

    def test_creates_parent_directories(self, tmp_path) -> None:
        path = tmp_path / "a" / "b" / "summary.csv"
        write_summary_csv(path, [SummaryRow("tilt", "annual_tilt", "1.0", "deg")])
        assert path.exists()

    def test_empty_rows_write_empty_file(self, tmp_path) -> None:
        path = tmp_path / "summary.csv"
        write_summary_csv(path, [])
        assert path.read_text(encoding="utf-8") == ""


class TestStringConfigurationsCsv:
    def test_rank_order(self, tmp_path, panel_450w, inverter_5kw, search_settings) -> None:
        result = search_string_configurations(panel_450w, inverter_5kw, search_settings)
        path = tmp_path / "strings.csv"
        write_string_configurations_csv(path, result, inverter_5kw)
        written = _read_rows(path)
        assert len(written) == len(result.configurations)
        first = written[0]
        assert first["rank"] == "1"
        assert first["signature"] == "1s-9"
        assert first["total_power_w"] == "4050"
        assert first["dc_ac_ratio"] == "0.810"
        assert first["violations"] == ""
        assert written[1]["panels_per_string"] == "4 + 5"


class TestSunPathCsv:
    def test_rows_per_day(self, tmp_path) -> None:
        traces = {"equinox": sun_path(40.0, 80), "winter_solstice": sun_path(40.0, 355)}
        path = tmp_path / "sun_path.csv"
        write_sun_path_csv(path, traces)
        written = _read_rows(path)
        assert len(written) == len(traces["equinox"]) + len(traces["winter_solstice"])
        assert {r["day"] for r in written} == {"equinox", "winter_solstice"}
        assert all(float(r["elevation_deg"]) > 0.0 for r in written)


class TestCashflowCsv:
    def test_years_zero_to_25(self, tmp_path) -> None:
        result = compute_return(6000.0, 6000.0, 60.0, 0.20, 0.05)
        path = tmp_path / "cashflow.csv"
        write_cashflow_csv(path, result)
        written = _read_rows(path)
        assert len(written) == 26
        assert written[0] == {"year": "0", "cumulative_cashflow_eur": "-6000.00"}
        assert written[-1]["year"] == "25"
        assert written[-1]["cumulative_cashflow_eur"] == "15000.00"
