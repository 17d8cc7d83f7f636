"""
Loader for the facility bed-capacity CSV export.

The source is a comma-delimited text file: one header line, then one row per
facility per report date. Columns are read by fixed position (see
config.REPORT_SCHEMA); headers are never consulted.

Malformed rows are dropped and counted rather than raised, so a partially
broken export still loads whatever it can.
"""

import logging
from typing import NamedTuple

import pandas as pd

from ..config import (
    FIELD_DELIMITER,
    METRIC_FIELDS,
    MIN_COLUMNS,
    REPORT_COLUMNS,
    REPORT_SCHEMA,
    UNKNOWN_FACILITY,
    validate_schema,
)
from .utils import MAX_METRIC_VALUE, normalise_date, safe_int, strip_quotes

logger = logging.getLogger(__name__)

validate_schema(REPORT_SCHEMA, MIN_COLUMNS)


class ParseResult(NamedTuple):
    reports: pd.DataFrame
    rejected: int


def empty_reports() -> pd.DataFrame:
    """Return an empty report frame with the canonical schema and dtypes."""
    df = pd.DataFrame(columns=REPORT_COLUMNS)
    df["report_date"] = pd.to_datetime(df["report_date"])
    df["facility_name"] = df["facility_name"].astype(object)
    for col in METRIC_FIELDS:
        df[col] = df[col].astype("int64")
    return df


def _parse_row(cells: list[str]) -> dict | None:
    """Map one split row to a report dict, or None if it must be dropped."""
    if len(cells) < MIN_COLUMNS:
        return None

    (date_pos,) = REPORT_SCHEMA["report_date"]
    report_date = normalise_date(cells[date_pos])
    if report_date is None:
        return None

    (name_pos,) = REPORT_SCHEMA["facility_name"]
    facility = UNKNOWN_FACILITY
    if name_pos < len(cells) and cells[name_pos]:
        facility = strip_quotes(cells[name_pos])

    record = {"report_date": report_date, "facility_name": facility}
    for field in METRIC_FIELDS:
        value = sum(safe_int(cells[pos]) for pos in REPORT_SCHEMA[field])
        if value > MAX_METRIC_VALUE:
            return None
        record[field] = value
    return record


def parse_reports(text: str) -> ParseResult:
    """Parse raw CSV text into a report DataFrame.

    Assumptions
    -----------
    - Line 1 is a header and is always skipped.
    - Rows with fewer than MIN_COLUMNS cells are rejected (this covers the
      blank line left by a trailing newline).
    - Rows whose date cell is empty or not a date are rejected.
    - Rows whose summed metric overflows an int64 column are rejected.
    - Fields are split on the bare delimiter; quotes are not honoured as
      field enclosures, they are stripped from the facility name.

    Returns
    -------
    ParseResult(reports, rejected) where reports has columns:
        report_date, facility_name, icu_occupied, icu_vacant,
        vent_occupied, vent_vacant, isolation_occupied, isolation_vacant,
        ward_occupied, ward_vacant
    Row order follows the source; sorting happens at ingestion.
    """
    lines = text.split("\n")[1:]

    records = []
    rejected = 0
    for line in lines:
        record = _parse_row(line.rstrip("\r").split(FIELD_DELIMITER))
        if record is None:
            rejected += 1
            continue
        records.append(record)

    if not records:
        logger.warning("No valid report rows parsed (%d rejected)", rejected)
        return ParseResult(empty_reports(), rejected)

    df = pd.DataFrame(records, columns=REPORT_COLUMNS)
    df["report_date"] = pd.to_datetime(df["report_date"])
    for col in METRIC_FIELDS:
        df[col] = df[col].astype("int64")

    logger.info("Parsed %d report rows (%d rejected)", len(df), rejected)
    return ParseResult(df, rejected)
