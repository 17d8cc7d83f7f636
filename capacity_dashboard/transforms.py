"""
Data transforms: date/facility filtering and latest-per-facility snapshots.

All functions are pure: inputs are never modified and each call returns a
new DataFrame.
"""

import logging
from dataclasses import dataclass

import pandas as pd

from .config import ALL_FACILITIES, DEFAULT_DATE_FROM

logger = logging.getLogger(__name__)

_END_OF_DAY = pd.Timedelta(hours=23, minutes=59, seconds=59)


@dataclass(frozen=True)
class FilterCriteria:
    """Date range and facility selection.

    date_from defaults to DEFAULT_DATE_FROM, date_to defaults to today.
    date_to is inclusive through 23:59:59 of that day. An inverted range
    (date_from after date_to) is allowed and matches nothing.
    """

    date_from: pd.Timestamp | str | None = None
    date_to: pd.Timestamp | str | None = None
    facility: str = ALL_FACILITIES

    def resolve_bounds(self) -> tuple[pd.Timestamp, pd.Timestamp]:
        """Return the concrete (lower, upper) timestamps for this range."""
        lower = pd.Timestamp(self.date_from if self.date_from is not None else DEFAULT_DATE_FROM)
        upper = pd.Timestamp(self.date_to) if self.date_to is not None else pd.Timestamp.now()
        upper = upper.normalize() + _END_OF_DAY
        return lower, upper


def default_criteria(store) -> FilterCriteria:
    """Criteria covering a store's full date range and every facility."""
    bounds = store.date_bounds
    if bounds is None:
        return FilterCriteria()
    return FilterCriteria(date_from=bounds[0], date_to=bounds[1])


def filter_reports(reports: pd.DataFrame, criteria: FilterCriteria) -> pd.DataFrame:
    """Select reports inside the date range and facility scope.

    A row matches when date_from <= report_date <= date_to and, unless the
    facility is "all", its facility_name equals the selected one exactly.
    Input order is preserved.
    """
    lower, upper = criteria.resolve_bounds()
    if lower > upper:
        logger.warning("date_from %s is after date_to %s; no reports match", lower.date(), upper.date())

    mask = reports["report_date"].between(lower, upper, inclusive="both")
    if criteria.facility != ALL_FACILITIES:
        mask &= reports["facility_name"] == criteria.facility

    subset = reports.loc[mask].reset_index(drop=True)
    logger.info(
        "Filtered %d of %d reports (%s to %s, facility=%s)",
        len(subset), len(reports), lower.date(), upper.date(), criteria.facility,
    )
    return subset


def latest_per_facility(subset: pd.DataFrame) -> pd.DataFrame:
    """Reduce a report subset to the most recent report per facility.

    Tie-break: the later report_date wins; on equal dates the row that
    appears later in ``subset`` wins. Facilities are returned in order of
    their first appearance in ``subset``.
    """
    if subset.empty:
        return subset.copy().reset_index(drop=True)

    first_seen = subset["facility_name"].drop_duplicates().tolist()

    latest = (
        subset.sort_values("report_date", kind="mergesort")
        .groupby("facility_name", sort=False)
        .tail(1)
        .set_index("facility_name", drop=False)
        .loc[first_seen]
        .reset_index(drop=True)
    )

    logger.info("Snapshot holds %d facilities from %d reports", len(latest), len(subset))
    return latest
