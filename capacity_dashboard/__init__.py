"""
Hospital Bed-Capacity Dashboard

Analytics backend that turns a facility bed-capacity CSV export into KPI
totals, resource cards, a risk watchlist and a 7-day ICU forecast.

To swap the CSV input for a live feed:
    Replace loaders.parse_reports with a query that yields the same report
    frame (report_date, facility_name and the eight metric columns) and
    pass it to TimeSeriesStore.ingest. Everything downstream is unchanged.

To connect to Streamlit/Dash:
    Hold one TimeSeriesStore per session and call
    dashboard.get_dashboard_view(store, criteria) on every filter change to
    get plain dicts and DataFrames for cards, charts and tables.

To remap source columns:
    Edit config.REPORT_SCHEMA. It is validated when the loader is imported.
"""

__version__ = "0.1.0"
