"""Shared fixtures: CSV row builder and a small loaded store."""

from __future__ import annotations

import pytest

from capacity_dashboard.config import REPORT_SCHEMA
from capacity_dashboard.store import TimeSeriesStore

HEADER = ",".join(f"col{i}" for i in range(21))


def make_row(
    date: str,
    facility: str | None = "A",
    icu_occupied: int = 0,
    icu_vacant: int = 0,
    vent: tuple[int, int] = (0, 0),
    isolation: tuple[int, int] = (0, 0),
    ward: tuple[int, int] = (0, 0),
    n_columns: int = 21,
) -> str:
    """Build one source line with values at their schema positions.

    ICU values go entirely into the first of their two source columns.
    """
    cells = [""] * n_columns

    def put(field: str, value) -> None:
        pos = REPORT_SCHEMA[field][0]
        if pos < n_columns:
            cells[pos] = str(value)

    put("report_date", date)
    if facility is not None:
        put("facility_name", facility)
    put("icu_occupied", icu_occupied)
    put("icu_vacant", icu_vacant)
    put("vent_occupied", vent[0])
    put("vent_vacant", vent[1])
    put("isolation_occupied", isolation[0])
    put("isolation_vacant", isolation[1])
    put("ward_occupied", ward[0])
    put("ward_vacant", ward[1])
    return ",".join(cells)


def make_csv(*rows: str) -> str:
    return "\n".join([HEADER, *rows]) + "\n"


@pytest.fixture()
def scenario_csv() -> str:
    """Two reports for A (8/2 then 9/1) and one for B (5/5)."""
    return make_csv(
        make_row("2026-01-01", "A", 8, 2, vent=(3, 1), isolation=(2, 2), ward=(40, 10)),
        make_row("2026-01-01", "B", 5, 5, vent=(1, 5), isolation=(0, 0), ward=(20, 30)),
        make_row("2026-01-02", "A", 9, 1, vent=(4, 0), isolation=(3, 1), ward=(45, 5)),
    )


@pytest.fixture()
def scenario_store(scenario_csv: str) -> TimeSeriesStore:
    store = TimeSeriesStore()
    store.ingest_text(scenario_csv)
    return store
