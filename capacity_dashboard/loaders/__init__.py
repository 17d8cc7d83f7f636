"""Data ingestion loaders for facility bed-capacity exports."""

from .acquisition import decode_upload, read_report_file
from .csv_report import ParseResult, empty_reports, parse_reports

__all__ = [
    "ParseResult",
    "empty_reports",
    "parse_reports",
    "read_report_file",
    "decode_upload",
]
