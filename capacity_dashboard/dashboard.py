"""
Dashboard-ready output functions.

These are the primary entry points for the Streamlit front end. Each
function returns plain dicts or DataFrames suitable for rendering KPI
cards, resource bars, the watchlist, the forecast chart and the report
table. Nothing here formats for display.
"""

import logging

import pandas as pd

from .config import ALL_FACILITIES, TABLE_ROW_LIMIT
from .forecast import build_forecast_series, forecast
from .kpis import (
    WATCHLIST_COLUMNS,
    build_watchlist,
    calc_utilization,
    classify_utilization,
    kpi_totals,
    resource_cards,
    series_by_date,
)
from .store import TimeSeriesStore
from .transforms import FilterCriteria, filter_reports, latest_per_facility

logger = logging.getLogger(__name__)

TABLE_COLUMNS = [
    "report_date", "facility_name", "icu_occupied", "vent_occupied",
    "ward_occupied", "icu_utilization", "tier",
]


def get_dashboard_view(store: TimeSeriesStore, criteria: FilterCriteria) -> dict:
    """Single entry point the app calls after every ingestion or filter change.

    KPIs, resource cards and the watchlist come from the latest report per
    facility in scope; the chart series and table use every report in scope.

    Returns
    -------
    Dict with structure:
    {
        "store_version": 3,
        "criteria": FilterCriteria(...),
        "record_count": 412,
        "kpis": {... kpi_totals output ...},
        "resources": {"ventilator": {...}, "isolation": {...}, "ward": {...}},
        "watchlist": DataFrame (empty unless facility == "all"),
        "series": DataFrame(date, actual, forecast),
        "forecast": [16, 18, ...],
        "table": DataFrame (at most TABLE_ROW_LIMIT rows),
    }
    """
    subset = filter_reports(store.reports, criteria)
    snapshot = latest_per_facility(subset)

    totals = kpi_totals(snapshot)

    if criteria.facility == ALL_FACILITIES:
        watchlist = build_watchlist(snapshot)
    else:
        watchlist = pd.DataFrame(columns=WATCHLIST_COLUMNS)

    daily = series_by_date(subset)

    return {
        "store_version": store.version,
        "criteria": criteria,
        "record_count": len(subset),
        "kpis": totals,
        "resources": resource_cards(totals),
        "watchlist": watchlist,
        "series": build_forecast_series(daily),
        "forecast": forecast(daily),
        "table": get_table_view(subset),
    }


def get_table_view(records: pd.DataFrame, limit: int = TABLE_ROW_LIMIT) -> pd.DataFrame:
    """First ``limit`` records in their filtered (oldest-first) order.

    Adds each row's whole-percent ICU utilization and tier.
    """
    if records.empty:
        return pd.DataFrame(columns=TABLE_COLUMNS)

    table = records.head(limit).copy()
    totals = table["icu_occupied"] + table["icu_vacant"]
    table["icu_utilization"] = [
        int(calc_utilization(occ, tot, decimals=0))
        for occ, tot in zip(table["icu_occupied"], totals)
    ]
    table["tier"] = [
        classify_utilization(util, tot)
        for util, tot in zip(table["icu_utilization"], totals)
    ]
    return table[TABLE_COLUMNS].reset_index(drop=True)


def is_current(view: dict, store: TimeSeriesStore) -> bool:
    """False if the store has been re-ingested since ``view`` was built."""
    return view.get("store_version") == store.version


def get_facility_options(store: TimeSeriesStore) -> list[str]:
    """Return facility selector options, "all" first."""
    return [ALL_FACILITIES, *store.facilities]
