"""
Configuration: source column schema, tier thresholds, file paths, constants.

REPORT_SCHEMA maps each logical report field to the source column position(s)
it is read from. Metric fields listing more than one position are summed
(the ICU rule: two physical bed categories roll into one logical metric).
"""

from pathlib import Path

# ---------------------------------------------------------------------------
# File paths — adjust these if source files move
# ---------------------------------------------------------------------------
DATA_DIR = Path(__file__).resolve().parent.parent

DEFAULT_CSV_FILE = DATA_DIR / "data.csv"

# ---------------------------------------------------------------------------
# Source format
# ---------------------------------------------------------------------------
FIELD_DELIMITER = ","
MIN_COLUMNS = 20
UNKNOWN_FACILITY = "Unknown"

# ---------------------------------------------------------------------------
# Report schema
# ---------------------------------------------------------------------------
# Positions are 0-based. facility_name is optional: rows with exactly
# MIN_COLUMNS cells fall back to UNKNOWN_FACILITY.
REPORT_SCHEMA: dict[str, tuple[int, ...]] = {
    "report_date": (16,),
    "facility_name": (20,),
    "icu_occupied": (9, 18),
    "icu_vacant": (4, 11),
    "vent_occupied": (10,),
    "vent_vacant": (7,),
    "isolation_occupied": (12,),
    "isolation_vacant": (19,),
    "ward_occupied": (14,),
    "ward_vacant": (8,),
}

OPTIONAL_FIELDS = {"facility_name"}

METRIC_FIELDS: list[str] = [
    "icu_occupied",
    "icu_vacant",
    "vent_occupied",
    "vent_vacant",
    "isolation_occupied",
    "isolation_vacant",
    "ward_occupied",
    "ward_vacant",
]

REPORT_COLUMNS: list[str] = ["report_date", "facility_name", *METRIC_FIELDS]

# Resource cards shown beside the ICU KPIs: group -> (occupied, vacant)
RESOURCE_GROUPS: dict[str, tuple[str, str]] = {
    "ventilator": ("vent_occupied", "vent_vacant"),
    "isolation": ("isolation_occupied", "isolation_vacant"),
    "ward": ("ward_occupied", "ward_vacant"),
}

# ---------------------------------------------------------------------------
# Tiers
# ---------------------------------------------------------------------------
# Thresholds are closed at the lower edge: exactly 85 is critical.
CRITICAL_THRESHOLD = 85
WARNING_THRESHOLD = 70
LOW_AVAILABILITY_THRESHOLD = 5

TIER_CRITICAL = "CRITICAL"
TIER_WARNING = "WARNING"
TIER_SAFE = "SAFE"
TIER_NO_CAPACITY = "NO-CAPACITY"

# ---------------------------------------------------------------------------
# Constants
# ---------------------------------------------------------------------------
ALL_FACILITIES = "all"
DEFAULT_DATE_FROM = "2000-01-01"
FORECAST_HORIZON = 7
MIN_FORECAST_POINTS = 3
TABLE_ROW_LIMIT = 100


def validate_schema(
    schema: dict[str, tuple[int, ...]],
    min_columns: int = MIN_COLUMNS,
) -> None:
    """Check a column schema before any row is parsed.

    Raises ValueError if a field is missing, a position is negative or
    shared by two fields, or a required field reads past ``min_columns``
    (rows that short are rejected before extraction).
    """
    missing = [f for f in REPORT_COLUMNS if f not in schema]
    if missing:
        raise ValueError(f"Schema is missing fields: {missing}")

    seen: dict[int, str] = {}
    for field, positions in schema.items():
        if not positions:
            raise ValueError(f"Field '{field}' has no source column")
        for pos in positions:
            if pos < 0:
                raise ValueError(f"Field '{field}' has negative column {pos}")
            if pos in seen:
                raise ValueError(
                    f"Column {pos} is mapped to both '{seen[pos]}' and '{field}'"
                )
            seen[pos] = field
            if field not in OPTIONAL_FIELDS and pos >= min_columns:
                raise ValueError(
                    f"Required field '{field}' reads column {pos}, "
                    f"beyond the {min_columns}-column minimum"
                )
