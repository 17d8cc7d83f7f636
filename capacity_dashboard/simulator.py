"""
Simulated data generator for the bed-capacity dashboard.

Produces CSV text in the same 21-column layout as the real export so the
whole pipeline can run without a data file. All values are synthetic.
"""

import numpy as np
import pandas as pd

from .config import FIELD_DELIMITER

# ---------------------------------------------------------------------------
# Export layout: column position -> header label
# ---------------------------------------------------------------------------
_HEADER = [
    "region",
    "province",
    "city",
    "facility_code",
    "icu_v",
    "reporting_unit",
    "ownership",
    "mechvent_v",
    "nonicu_v",
    "icu_o",
    "mechvent_o",
    "nicu_v",
    "isolbed_o",
    "submitted_by",
    "nonicu_o",
    "updated_at",
    "reportdate",
    "hfhudcode",
    "nicu_o",
    "isolbed_v",
    "cfname",
]

_DEFAULT_FACILITIES = [
    "St. Luke's Medical Center",
    "Philippine General Hospital",
    "Lung Center of the Philippines",
    "East Avenue Medical Center",
    "Makati Medical Center",
]

# (occupied field position, vacant field position, capacity low, capacity high)
_BED_GROUPS = [
    (9, 4, 10, 40),    # adult ICU
    (18, 11, 2, 10),   # neonatal ICU
    (10, 7, 5, 25),    # mechanical ventilators
    (12, 19, 10, 60),  # isolation beds
    (14, 8, 50, 300),  # ward beds
]


def generate_report_csv(
    facilities: list[str] | None = None,
    start: str = "2026-09-01",
    days: int = 30,
    seed: int = 42,
) -> str:
    """Generate a synthetic daily capacity export as CSV text.

    Each facility gets one row per day. Occupancy follows a noisy upward
    drift so the forecast has a trend to fit.
    """
    rng = np.random.default_rng(seed)
    facilities = facilities or _DEFAULT_FACILITIES
    dates = pd.date_range(start, periods=days, freq="D")

    capacities = {
        name: [int(rng.integers(lo, hi + 1)) for _, _, lo, hi in _BED_GROUPS]
        for name in facilities
    }
    base_load = {name: rng.uniform(0.45, 0.8) for name in facilities}

    lines = [FIELD_DELIMITER.join(_HEADER)]
    for day_idx, date in enumerate(dates):
        for code, name in enumerate(facilities):
            row = [""] * len(_HEADER)
            row[0] = "NCR"
            row[3] = f"F{code:04d}"
            row[16] = date.strftime("%Y-%m-%d")
            row[17] = f"DOH{code:06d}"
            row[20] = f'"{name}"'

            drift = 0.006 * day_idx
            for (occ_pos, vac_pos, _, _), capacity in zip(_BED_GROUPS, capacities[name]):
                load = base_load[name] + drift + rng.normal(0, 0.04)
                occupied = int(np.clip(round(capacity * load), 0, capacity))
                row[occ_pos] = str(occupied)
                row[vac_pos] = str(capacity - occupied)

            lines.append(FIELD_DELIMITER.join(row))

    return "\n".join(lines) + "\n"
