"""
Hospital Bed-Capacity Dashboard — End-to-end analytics pipeline.

Runs the full pipeline from the CSV export to dashboard-ready outputs and
prints smoke-test summaries. Falls back to simulated data when the default
CSV is missing.

Usage:
    python main.py [path/to/export.csv]
"""

import logging
import sys
from pathlib import Path

sys.path.insert(0, str(Path(__file__).resolve().parent))

from capacity_dashboard.config import DEFAULT_CSV_FILE
from capacity_dashboard.dashboard import get_dashboard_view, get_facility_options
from capacity_dashboard.loaders import read_report_file
from capacity_dashboard.simulator import generate_report_csv
from capacity_dashboard.store import TimeSeriesStore
from capacity_dashboard.transforms import FilterCriteria, default_criteria

# ---------------------------------------------------------------------------
# Logging setup
# ---------------------------------------------------------------------------
logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s | %(name)s | %(levelname)s | %(message)s",
    datefmt="%H:%M:%S",
)
logger = logging.getLogger(__name__)


def main() -> None:
    """Run the full analytics pipeline and print smoke-test outputs."""

    print("=" * 70)
    print("  HOSPITAL BED-CAPACITY DASHBOARD")
    print("  Analytics Pipeline Smoke Test")
    print("=" * 70)
    print()

    # ------------------------------------------------------------------
    # 1. Load source data
    # ------------------------------------------------------------------
    print("[ 1 ] LOADING SOURCE DATA")
    print("-" * 40)

    path = Path(sys.argv[1]) if len(sys.argv) > 1 else DEFAULT_CSV_FILE
    text = read_report_file(path)
    if text is None:
        print(f"\n{path} not available, using simulated data")
        text = generate_report_csv()

    store = TimeSeriesStore()
    result = store.ingest_text(text)
    print(f"\nParsed {len(result.reports)} reports, rejected {result.rejected} rows")

    if not store.is_loaded:
        print("\nNo usable reports — nothing to show.")
        return

    lo, hi = store.date_bounds
    print(f"Date range: {lo.date()} to {hi.date()}")
    print(f"Facilities: {len(store.facilities)}")

    # ------------------------------------------------------------------
    # 2. Dashboard outputs (all facilities, full range)
    # ------------------------------------------------------------------
    print("\n")
    print("[ 2 ] DASHBOARD OUTPUTS — ALL FACILITIES")
    print("-" * 40)

    criteria = default_criteria(store)
    view = get_dashboard_view(store, criteria)

    kpis = view["kpis"]
    print(f"\nICU beds: {kpis['total_beds']}  occupied: {kpis['icu_occupied']}  "
          f"vacant: {kpis['icu_vacant']}")
    print(f"Utilization: {kpis['utilization_rate']}%  [{kpis['tier']}]")
    if kpis["availability_status"]:
        print(f"Availability: {kpis['availability_status']}")

    print("\nResources:")
    for group, card in view["resources"].items():
        print(f"  {group:12s} | {card['occupied']:>5} / {card['total']:<5} "
              f"{card['utilization']:>3}%  {card['tier']}")

    print("\nWatchlist (top 10):")
    if not view["watchlist"].empty:
        print(view["watchlist"].head(10).to_string(index=False))

    print(f"\n7-day forecast: {view['forecast'] or 'insufficient data'}")

    # ------------------------------------------------------------------
    # 3. Single-facility drill-down
    # ------------------------------------------------------------------
    print("\n")
    print("[ 3 ] SINGLE FACILITY")
    print("-" * 40)

    facility = get_facility_options(store)[1]
    single = get_dashboard_view(
        store,
        FilterCriteria(criteria.date_from, criteria.date_to, facility),
    )
    print(f"\n{facility}: {single['record_count']} reports, "
          f"utilization {single['kpis']['utilization_rate']}%")
    print(single["table"].tail(5).to_string(index=False))

    print("\n" + "=" * 70)
    print("  Pipeline complete.")
    print("=" * 70)


if __name__ == "__main__":
    main()
