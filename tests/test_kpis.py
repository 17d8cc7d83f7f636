"""
tests/test_kpis.py

Unit tests for utilization maths, tiering and the aggregate outputs.

Coverage
--------
- Tier boundaries (closed at 85 and 70) and NO-CAPACITY
- Availability flags
- KPI totals over a snapshot, including the zero-capacity case
- Resource cards
- Watchlist ranking and exclusion
- Per-date ICU series
"""

from __future__ import annotations

import pandas as pd
import pytest

from capacity_dashboard.kpis import (
    availability_status,
    build_watchlist,
    calc_utilization,
    classify_utilization,
    kpi_totals,
    resource_cards,
    round_half_up,
    series_by_date,
)
from capacity_dashboard.loaders import empty_reports, parse_reports
from capacity_dashboard.store import TimeSeriesStore
from capacity_dashboard.transforms import latest_per_facility

from .conftest import make_csv, make_row


def _reports(*rows: str) -> pd.DataFrame:
    return parse_reports(make_csv(*rows)).reports


# ---------------------------------------------------------------------------
# Utilization and tiers
# ---------------------------------------------------------------------------


class TestClassifyUtilization:
    @pytest.mark.parametrize(
        "utilization, expected",
        [
            (100, "CRITICAL"),
            (85, "CRITICAL"),
            (84.999, "WARNING"),
            (70, "WARNING"),
            (69.999, "SAFE"),
            (0, "SAFE"),
        ],
    )
    def test_boundaries(self, utilization, expected) -> None:
        assert classify_utilization(utilization, total=10) == expected

    @pytest.mark.parametrize("utilization", [0, 50, 100])
    def test_zero_total_is_no_capacity(self, utilization) -> None:
        assert classify_utilization(utilization, total=0) == "NO-CAPACITY"


class TestCalcUtilization:
    def test_zero_total(self) -> None:
        assert calc_utilization(5, 0) == 0

    def test_one_decimal(self) -> None:
        assert calc_utilization(2, 3, decimals=1) == 66.7

    def test_whole_percent(self) -> None:
        assert calc_utilization(1, 8, decimals=0) == 13

    def test_round_half_up(self) -> None:
        assert round_half_up(2.5) == 3
        assert round_half_up(12.5) == 13
        assert round_half_up(-2.5) == -2


class TestAvailabilityStatus:
    def test_no_beds_left(self) -> None:
        assert availability_status(0, 10) == "no_beds_left"

    def test_running_low(self) -> None:
        assert availability_status(4, 10) == "running_low"

    def test_enough_beds(self) -> None:
        assert availability_status(5, 10) is None

    def test_no_capacity_is_not_flagged(self) -> None:
        assert availability_status(0, 0) is None


# ---------------------------------------------------------------------------
# kpi_totals / resource_cards
# ---------------------------------------------------------------------------


class TestKpiTotals:
    def test_snapshot_scenario(self, scenario_store: TimeSeriesStore) -> None:
        snapshot = latest_per_facility(scenario_store.reports)
        totals = kpi_totals(snapshot)

        assert len(snapshot) == 2
        assert totals["icu_occupied"] == 14
        assert totals["icu_vacant"] == 6
        assert totals["total_beds"] == 20
        assert totals["utilization_rate"] == 70.0
        assert totals["tier"] == "WARNING"

    def test_icu_occupied_equals_snapshot_sum(self, scenario_store: TimeSeriesStore) -> None:
        snapshot = latest_per_facility(scenario_store.reports)
        totals = kpi_totals(snapshot)
        assert totals["icu_occupied"] == snapshot["icu_occupied"].sum()
        assert totals["total_beds"] == totals["icu_occupied"] + totals["icu_vacant"]

    def test_history_would_double_count(self, scenario_store: TimeSeriesStore) -> None:
        assert kpi_totals(scenario_store.reports)["icu_occupied"] == 22

    def test_zero_capacity_has_zero_utilization(self) -> None:
        totals = kpi_totals(_reports(make_row("2026-01-01", "A", 0, 0)))
        assert totals["total_beds"] == 0
        assert totals["utilization_rate"] == 0
        assert totals["tier"] == "NO-CAPACITY"

    def test_empty_records(self) -> None:
        totals = kpi_totals(empty_reports())
        assert totals["icu_occupied"] == 0
        assert totals["utilization_rate"] == 0
        assert totals["availability_status"] is None

    def test_values_are_plain_ints(self, scenario_store: TimeSeriesStore) -> None:
        totals = kpi_totals(latest_per_facility(scenario_store.reports))
        assert type(totals["icu_occupied"]) is int
        assert type(totals["total_beds"]) is int


class TestResourceCards:
    def test_cards_from_totals(self, scenario_store: TimeSeriesStore) -> None:
        cards = resource_cards(kpi_totals(latest_per_facility(scenario_store.reports)))

        assert set(cards) == {"ventilator", "isolation", "ward"}
        assert cards["ventilator"] == {
            "occupied": 5, "vacant": 5, "total": 10, "utilization": 50, "tier": "SAFE",
        }
        assert cards["isolation"]["total"] == 4
        assert cards["isolation"]["utilization"] == 75
        assert cards["isolation"]["tier"] == "WARNING"

    def test_zero_total_is_no_capacity(self) -> None:
        cards = resource_cards({"vent_occupied": 0, "vent_vacant": 0})
        assert cards["ventilator"]["utilization"] == 0
        assert cards["ventilator"]["tier"] == "NO-CAPACITY"

    def test_rounded_utilization_is_classified(self) -> None:
        # 84.6% rounds to 85 before tiering
        cards = resource_cards({"ward_occupied": 846, "ward_vacant": 154})
        assert cards["ward"]["utilization"] == 85
        assert cards["ward"]["tier"] == "CRITICAL"


# ---------------------------------------------------------------------------
# build_watchlist
# ---------------------------------------------------------------------------


class TestBuildWatchlist:
    def test_ranked_descending(self, scenario_store: TimeSeriesStore) -> None:
        watchlist = build_watchlist(latest_per_facility(scenario_store.reports))

        assert watchlist["facility_name"].tolist() == ["A", "B"]
        assert watchlist["utilization_pct"].tolist() == [90.0, 50.0]
        assert watchlist["tier"].tolist() == ["CRITICAL", "SAFE"]
        assert watchlist["total"].tolist() == [10, 10]

    def test_zero_capacity_facilities_are_excluded(self) -> None:
        snapshot = _reports(
            make_row("2026-01-01", "A", 1, 1),
            make_row("2026-01-01", "Empty", 0, 0),
        )
        assert build_watchlist(snapshot)["facility_name"].tolist() == ["A"]

    def test_empty_snapshot(self) -> None:
        watchlist = build_watchlist(empty_reports())
        assert watchlist.empty
        assert "utilization_pct" in watchlist.columns

    def test_all_zero_capacity(self) -> None:
        assert build_watchlist(_reports(make_row("2026-01-01", "A", 0, 0))).empty


# ---------------------------------------------------------------------------
# series_by_date
# ---------------------------------------------------------------------------


class TestSeriesByDate:
    def test_sums_per_date_across_facilities(self, scenario_store: TimeSeriesStore) -> None:
        series = series_by_date(scenario_store.reports)
        assert series["date"].tolist() == [
            pd.Timestamp("2026-01-01"),
            pd.Timestamp("2026-01-02"),
        ]
        assert series["icu_occupied"].tolist() == [13, 9]
        assert series["icu_vacant"].tolist() == [7, 1]

    def test_sorted_even_if_input_is_not(self) -> None:
        series = series_by_date(_reports(
            make_row("2026-01-03", "A", 3, 0),
            make_row("2026-01-01", "A", 1, 0),
        ))
        assert series["icu_occupied"].tolist() == [1, 3]

    def test_empty(self) -> None:
        assert series_by_date(empty_reports()).empty
