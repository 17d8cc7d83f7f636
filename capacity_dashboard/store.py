"""
In-memory time-series store holding the active report dataset.

One store instance per session. Each ingestion replaces the dataset
wholesale; an empty ingestion leaves the previous dataset in place.
"""

import logging

import pandas as pd

from .loaders import ParseResult, empty_reports, parse_reports

logger = logging.getLogger(__name__)


class _Dataset:
    """A loaded report set and its derived lookups."""

    __slots__ = ("reports", "facilities", "date_bounds")

    def __init__(self, reports: pd.DataFrame):
        self.reports = reports
        self.facilities = reports["facility_name"].drop_duplicates().tolist()
        if reports.empty:
            self.date_bounds = None
        else:
            self.date_bounds = (
                reports["report_date"].min(),
                reports["report_date"].max(),
            )


class TimeSeriesStore:
    """Holds the date-ordered report set for the current dataset.

    ``version`` increments on every successful ingestion, so results built
    against an older version can be recognised as stale.
    """

    def __init__(self):
        self._state = _Dataset(empty_reports())
        self._version = 0

    def __len__(self) -> int:
        return len(self._state.reports)

    @property
    def version(self) -> int:
        return self._version

    @property
    def is_loaded(self) -> bool:
        """True once any ingestion has succeeded."""
        return self._version > 0

    @property
    def reports(self) -> pd.DataFrame:
        return self._state.reports.copy()

    @property
    def facilities(self) -> list[str]:
        return list(self._state.facilities)

    @property
    def date_bounds(self) -> tuple[pd.Timestamp, pd.Timestamp] | None:
        return self._state.date_bounds

    def ingest(self, reports: pd.DataFrame) -> bool:
        """Replace the dataset with ``reports``, sorted by date.

        Returns False (and keeps the current dataset) if ``reports`` is
        empty. Rows sharing a date keep their source order.
        """
        if reports is None or reports.empty:
            logger.warning("Empty ingestion ignored; keeping %d existing rows", len(self))
            return False

        ordered = reports.sort_values("report_date", kind="mergesort").reset_index(drop=True)
        self._state = _Dataset(ordered)
        self._version += 1

        logger.info(
            "Loaded %d reports for %d facilities (version %d)",
            len(ordered), len(self._state.facilities), self._version,
        )
        return True

    def ingest_text(self, text: str | None) -> ParseResult | None:
        """Parse raw CSV text and ingest the result.

        None text (a failed acquisition) is a no-op and returns None.
        """
        if text is None:
            logger.warning("No source text available; store unchanged")
            return None
        result = parse_reports(text)
        self.ingest(result.reports)
        return result
