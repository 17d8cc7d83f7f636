"""
tests/test_simulator.py

The simulated export must round-trip through the real parser.
"""

from __future__ import annotations

from capacity_dashboard.loaders import parse_reports
from capacity_dashboard.simulator import generate_report_csv


class TestGenerateReportCsv:
    def test_every_row_parses(self) -> None:
        result = parse_reports(generate_report_csv(days=7))
        assert len(result.reports) == 5 * 7
        assert result.rejected == 1

    def test_custom_facilities(self) -> None:
        result = parse_reports(generate_report_csv(["North", "South"], days=3))
        assert sorted(result.reports["facility_name"].unique()) == ["North", "South"]

    def test_seed_is_reproducible(self) -> None:
        assert generate_report_csv(seed=7) == generate_report_csv(seed=7)

    def test_occupancy_within_capacity(self) -> None:
        reports = parse_reports(generate_report_csv(days=5)).reports
        assert (reports["icu_occupied"] + reports["icu_vacant"] > 0).all()
        assert (reports["ward_vacant"] >= 0).all()
