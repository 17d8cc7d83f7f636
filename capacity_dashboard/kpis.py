"""
KPI computation functions — pure functions with no side effects.

Provides utilization maths, tier classification, KPI totals over a
snapshot, resource-group cards, the risk watchlist and the per-date ICU
series used by the forecast chart.
"""

import logging
import math

import pandas as pd

from .config import (
    CRITICAL_THRESHOLD,
    LOW_AVAILABILITY_THRESHOLD,
    METRIC_FIELDS,
    RESOURCE_GROUPS,
    TIER_CRITICAL,
    TIER_NO_CAPACITY,
    TIER_SAFE,
    TIER_WARNING,
    WARNING_THRESHOLD,
)

logger = logging.getLogger(__name__)

WATCHLIST_COLUMNS = ["facility_name", "occupied", "total", "utilization", "utilization_pct", "tier"]
SERIES_COLUMNS = ["date", "icu_occupied", "icu_vacant"]


def round_half_up(value: float, decimals: int = 0) -> float:
    """Round halves up, like JS Math.round (2.5 -> 3, -2.5 -> -2)."""
    factor = 10 ** decimals
    return math.floor(value * factor + 0.5) / factor


def calc_utilization(occupied: float, total: float, decimals: int | None = None) -> float:
    """Return occupied / total * 100, or 0 when total is 0.

    If ``decimals`` is given the result is rounded half-up to that many
    places.
    """
    if total <= 0:
        return 0
    pct = occupied / total * 100
    if decimals is None:
        return pct
    return round_half_up(pct, decimals)


def classify_utilization(utilization: float, total: float) -> str:
    """Return the tier for a utilization percentage.

    Logic
    -----
    - total == 0           -> NO-CAPACITY (regardless of utilization)
    - utilization >= 85    -> CRITICAL
    - utilization >= 70    -> WARNING
    - otherwise            -> SAFE
    """
    if total <= 0:
        return TIER_NO_CAPACITY
    if utilization >= CRITICAL_THRESHOLD:
        return TIER_CRITICAL
    if utilization >= WARNING_THRESHOLD:
        return TIER_WARNING
    return TIER_SAFE


def availability_status(vacant: int, total: int) -> str | None:
    """Flag a nearly-full ICU: 'no_beds_left', 'running_low' or None."""
    if total <= 0:
        return None
    if vacant == 0:
        return "no_beds_left"
    if vacant < LOW_AVAILABILITY_THRESHOLD:
        return "running_low"
    return None


def sum_metrics(records: pd.DataFrame) -> dict[str, int]:
    """Sum the eight metrics across ``records`` (zeros when empty)."""
    if records.empty:
        return {field: 0 for field in METRIC_FIELDS}
    return {field: int(records[field].sum()) for field in METRIC_FIELDS}


def kpi_totals(records: pd.DataFrame) -> dict:
    """Return the headline ICU KPIs for a set of records.

    Pass a snapshot (latest_per_facility) rather than raw history, otherwise
    a facility with several reports in range is counted several times.

    Returns
    -------
    Dict with structure:
    {
        "icu_occupied": 14, "icu_vacant": 6, ... (all eight metrics),
        "total_beds": 20,
        "utilization_rate": 70.0,
        "tier": "WARNING",
        "availability_status": None,
    }
    """
    totals: dict = sum_metrics(records)

    total_beds = totals["icu_occupied"] + totals["icu_vacant"]
    utilization_rate = calc_utilization(totals["icu_occupied"], total_beds, decimals=1)

    totals["total_beds"] = total_beds
    totals["utilization_rate"] = utilization_rate
    totals["tier"] = classify_utilization(utilization_rate, total_beds)
    totals["availability_status"] = availability_status(totals["icu_vacant"], total_beds)
    return totals


def resource_cards(totals: dict) -> dict[str, dict]:
    """Build the ventilator / isolation / ward cards from KPI totals.

    Utilization is rounded to a whole percent before classification.
    """
    cards = {}
    for group, (occ_field, vac_field) in RESOURCE_GROUPS.items():
        occupied = totals.get(occ_field, 0)
        vacant = totals.get(vac_field, 0)
        total = occupied + vacant
        utilization = int(calc_utilization(occupied, total, decimals=0))
        cards[group] = {
            "occupied": occupied,
            "vacant": vacant,
            "total": total,
            "utilization": utilization,
            "tier": classify_utilization(utilization, total),
        }
    return cards


def build_watchlist(snapshot: pd.DataFrame) -> pd.DataFrame:
    """Rank facilities by ICU utilization, highest first.

    Facilities with no ICU capacity are left out. The sort is stable, but
    the relative order of facilities with equal utilization is not part of
    the contract.

    Returns
    -------
    DataFrame with columns:
        facility_name, occupied, total, utilization, utilization_pct, tier
    """
    if snapshot.empty:
        return pd.DataFrame(columns=WATCHLIST_COLUMNS)

    df = pd.DataFrame({
        "facility_name": snapshot["facility_name"],
        "occupied": snapshot["icu_occupied"],
        "total": snapshot["icu_occupied"] + snapshot["icu_vacant"],
    })
    df = df[df["total"] > 0].copy()
    if df.empty:
        return pd.DataFrame(columns=WATCHLIST_COLUMNS)

    df["utilization"] = df["occupied"] / df["total"] * 100
    df["utilization_pct"] = [round_half_up(u, 1) for u in df["utilization"]]
    df["tier"] = [classify_utilization(u, t) for u, t in zip(df["utilization"], df["total"])]

    result = df.sort_values("utilization", ascending=False, kind="mergesort").reset_index(drop=True)
    logger.info("Watchlist ranks %d facilities", len(result))
    return result[WATCHLIST_COLUMNS]


def series_by_date(records: pd.DataFrame) -> pd.DataFrame:
    """Sum ICU occupancy per report date across the records in scope.

    Returns
    -------
    DataFrame with columns date, icu_occupied, icu_vacant sorted by date.
    """
    if records.empty:
        logger.warning("Empty records — returning empty ICU series")
        return pd.DataFrame(columns=SERIES_COLUMNS)

    series = (
        records.groupby("report_date", sort=True)[["icu_occupied", "icu_vacant"]]
        .sum()
        .reset_index()
        .rename(columns={"report_date": "date"})
    )
    return series[SERIES_COLUMNS]
