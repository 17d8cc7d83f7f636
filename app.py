"""
Hospital Bed-Capacity Dashboard — Interactive Dashboard

Run with:  streamlit run app.py
"""

import sys
from pathlib import Path

import streamlit as st
import plotly.graph_objects as go
import pandas as pd

sys.path.insert(0, str(Path(__file__).resolve().parent))

from capacity_dashboard.config import (
    ALL_FACILITIES,
    DEFAULT_CSV_FILE,
    TIER_CRITICAL,
    TIER_NO_CAPACITY,
    TIER_SAFE,
    TIER_WARNING,
)
from capacity_dashboard.dashboard import get_dashboard_view, get_facility_options
from capacity_dashboard.html_cards import watchlist_item_html
from capacity_dashboard.loaders import decode_upload, read_report_file
from capacity_dashboard.simulator import generate_report_csv
from capacity_dashboard.store import TimeSeriesStore
from capacity_dashboard.transforms import FilterCriteria

# ---------------------------------------------------------------------------
# Page config
# ---------------------------------------------------------------------------
st.set_page_config(
    page_title="Bed-Capacity Dashboard",
    page_icon="🏥",
    layout="wide",
    initial_sidebar_state="expanded",
)

TIER_COLORS = {
    TIER_CRITICAL: "#ff4b4b",
    TIER_WARNING: "#ffeb3b",
    TIER_SAFE: "#00ff88",
    TIER_NO_CAPACITY: "#555555",
}

TIER_LABELS = {
    TIER_CRITICAL: "CRITICAL STATUS",
    TIER_WARNING: "HIGH DEMAND",
    TIER_SAFE: "STABLE",
    TIER_NO_CAPACITY: "NO CAPACITY",
}

AVAILABILITY_LABELS = {
    "no_beds_left": "NO BEDS LEFT",
    "running_low": "RUNNING LOW",
}


# ---------------------------------------------------------------------------
# Data loading (one store per session)
# ---------------------------------------------------------------------------
def get_store() -> TimeSeriesStore:
    if "store" not in st.session_state:
        store = TimeSeriesStore()
        store.ingest_text(read_report_file(DEFAULT_CSV_FILE))
        st.session_state["store"] = store
    return st.session_state["store"]


store = get_store()

# ---------------------------------------------------------------------------
# Sidebar
# ---------------------------------------------------------------------------
st.sidebar.title("Bed-Capacity Dashboard")
st.sidebar.markdown("Facility ICU & resource monitoring")
st.sidebar.divider()

uploaded = st.sidebar.file_uploader("Upload capacity CSV", type=["csv"])
if uploaded is not None and st.session_state.get("uploaded_id") != uploaded.file_id:
    st.session_state["uploaded_id"] = uploaded.file_id
    store.ingest_text(decode_upload(uploaded.getvalue()))

if not store.is_loaded and st.sidebar.button("Load simulated data"):
    store.ingest_text(generate_report_csv())

if not store.is_loaded:
    st.title("Bed-Capacity Dashboard")
    st.info("No data loaded. Upload a CSV export or load simulated data.")
    st.stop()

min_date, max_date = store.date_bounds
date_from = st.sidebar.date_input("From", value=min_date.date(), key=f"from_{store.version}")
date_to = st.sidebar.date_input("To", value=max_date.date(), key=f"to_{store.version}")
facility = st.sidebar.selectbox(
    "Facility",
    get_facility_options(store),
    format_func=lambda f: "All Facilities" if f == ALL_FACILITIES else f,
    key=f"facility_{store.version}",
)

st.sidebar.divider()
st.sidebar.caption(f"{len(store):,} reports · {len(store.facilities)} facilities")

if date_from > date_to:
    st.error("'From' date is after 'To' date.")
    st.stop()

view = get_dashboard_view(store, FilterCriteria(date_from, date_to, facility))
kpis = view["kpis"]


# ---------------------------------------------------------------------------
# Helper: KPI card
# ---------------------------------------------------------------------------
def kpi_card(label: str, value: str, tier: str | None = None, badge: str = ""):
    color = TIER_COLORS.get(tier, "#00d4ff")
    st.markdown(
        f"""
        <div style="background: linear-gradient(135deg, {color}22, {color}11);
                    border-left: 4px solid {color};
                    border-radius: 8px; padding: 16px; margin-bottom: 8px;">
            <div style="font-size: 13px; color: #888; font-weight: 600; text-transform: uppercase;">{label}</div>
            <div style="font-size: 28px; font-weight: 700; margin: 4px 0;">{value}</div>
            <div style="font-size: 12px; color: {color}; font-weight: 600;">{badge}</div>
        </div>
        """,
        unsafe_allow_html=True,
    )


# ===========================================================================
# KPI cards
# ===========================================================================
st.title("ICU Capacity Overview")
scope = "All Facilities" if facility == ALL_FACILITIES else facility
st.caption(f"{scope} · {date_from} to {date_to} · {view['record_count']} reports in range")

cols = st.columns(4)
with cols[0]:
    kpi_card("Total ICU Beds", f"{kpis['total_beds']:,}")
with cols[1]:
    kpi_card("Occupied", f"{kpis['icu_occupied']:,}")
with cols[2]:
    status = kpis["availability_status"]
    kpi_card(
        "Available",
        f"{kpis['icu_vacant']:,}",
        TIER_CRITICAL if status == "no_beds_left" else TIER_WARNING if status else None,
        AVAILABILITY_LABELS.get(status, ""),
    )
with cols[3]:
    kpi_card(
        "Utilization",
        f"{kpis['utilization_rate']}%",
        kpis["tier"],
        TIER_LABELS[kpis["tier"]],
    )

# ===========================================================================
# Resource cards
# ===========================================================================
st.subheader("Resources")
cols = st.columns(3)
for col, (group, card) in zip(cols, view["resources"].items()):
    with col:
        color = TIER_COLORS[card["tier"]]
        st.markdown(f"**{group.title()}** — {card['occupied']:,} / {card['total']:,}")
        st.progress(min(card["utilization"], 100) / 100)
        st.markdown(
            f"<span style='color:{color}; font-weight:600;'>{card['tier']}</span>",
            unsafe_allow_html=True,
        )

st.divider()

# ===========================================================================
# Forecast chart + watchlist
# ===========================================================================
left, right = st.columns([2, 1])

with left:
    st.subheader("ICU Occupancy & 7-Day Forecast")
    series = view["series"]
    if series.empty:
        st.info("No reports in the selected range.")
    else:
        fig = go.Figure()
        fig.add_trace(go.Scatter(
            x=series["date"],
            y=series["actual"],
            name="Actual Occupancy",
            mode="lines",
            line=dict(color="#00d4ff", width=2, shape="spline"),
            fill="tozeroy",
            fillcolor="rgba(0, 212, 255, 0.1)",
        ))
        if series["forecast"].notna().any():
            fig.add_trace(go.Scatter(
                x=series["date"],
                y=series["forecast"],
                name="7-Day Forecast",
                mode="lines",
                line=dict(color="#ff4b4b", width=2, dash="dash", shape="spline"),
                connectgaps=False,
            ))
        fig.update_layout(
            height=400,
            yaxis_title="ICU beds occupied",
            plot_bgcolor="rgba(0,0,0,0)",
            margin=dict(l=10, r=10, t=10, b=40),
        )
        st.plotly_chart(fig, use_container_width=True)

with right:
    st.subheader("Risk Watchlist")
    watchlist = view["watchlist"]
    if facility != ALL_FACILITIES:
        st.caption("Showing a single facility.")
    elif watchlist.empty:
        st.info("No data available.")
    else:
        for _, item in watchlist.iterrows():
            color = TIER_COLORS[item["tier"]]
            st.markdown(watchlist_item_html(item, color), unsafe_allow_html=True)

st.divider()

# ===========================================================================
# Report table
# ===========================================================================
st.subheader("Reports")
table = view["table"]
if not table.empty:
    display_df = table.copy()
    display_df["report_date"] = pd.to_datetime(display_df["report_date"]).dt.date
    display_df["icu_utilization"] = display_df["icu_utilization"].apply(lambda x: f"{x}% Util")

    def color_tier(val):
        color = TIER_COLORS.get(val, "#333333")
        return f"background-color: {color}22; color: {color}"

    styled = display_df.style.map(color_tier, subset=["tier"])
    st.dataframe(styled, use_container_width=True, hide_index=True)
    if view["record_count"] > len(table):
        st.caption(f"Showing first {len(table)} of {view['record_count']} reports.")
