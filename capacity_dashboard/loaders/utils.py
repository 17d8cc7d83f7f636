"""
Shared utilities for data ingestion: numeric coercion, date normalisation,
quote stripping.
"""

import logging
import re
from typing import Any

import numpy as np
import pandas as pd

logger = logging.getLogger(__name__)

_LEADING_INT = re.compile(r"^[+-]?\d+")
_HAS_DIGIT = re.compile(r"\d")

# Largest value a metric column can hold
MAX_METRIC_VALUE = int(np.iinfo(np.int64).max)


def safe_int(val: Any) -> int:
    """Coerce a cell to a non-negative int, returning 0 for anything else.

    Reads the leading integer prefix of strings, so "12", " 12 ", "12.7"
    and "12beds" all give 12. Blank, non-numeric and negative values give 0,
    as do values too large for an int64 metric column.
    """
    if val is None:
        return 0
    try:
        if isinstance(val, str):
            match = _LEADING_INT.match(val.strip())
            if match is None:
                return 0
            number = int(match.group())
        else:
            number = int(val)
    except (ValueError, TypeError, OverflowError):
        return 0
    if number > MAX_METRIC_VALUE:
        logger.debug("Metric value out of range, treated as 0: %.20s...", val)
        return 0
    return max(number, 0)


def strip_quotes(val: str | None) -> str:
    """Remove every double-quote character and surrounding whitespace."""
    if val is None:
        return ""
    return val.replace('"', "").strip()


def normalise_date(val: Any) -> pd.Timestamp | None:
    """Convert a date cell to a midnight pd.Timestamp.

    Any time component is dropped. Returns None for empty or unparseable
    values, including relative keywords such as "now" or "today", which
    carry no digits.
    """
    if val is None:
        return None
    if isinstance(val, str):
        val = val.strip()
        if not _HAS_DIGIT.search(val):
            return None
    try:
        ts = pd.Timestamp(val)
    except (ValueError, TypeError, OverflowError):
        logger.debug("Could not parse date value: %s", val)
        return None
    if pd.isna(ts):
        return None
    if ts.tzinfo is not None:
        ts = ts.tz_localize(None)
    return ts.normalize()
