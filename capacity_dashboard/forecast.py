"""
Short-horizon ICU occupancy forecast.

Fits an ordinary least-squares line to a date-ordered series, using the
0-based position of each point as x (not the date), and projects the next
few points. Too little data gives an empty forecast, never an error.
"""

import logging
from typing import Sequence

import numpy as np
import pandas as pd

from .config import FORECAST_HORIZON, MIN_FORECAST_POINTS
from .kpis import round_half_up

logger = logging.getLogger(__name__)


def fit_linear_trend(values: Sequence[float]) -> tuple[float, float] | None:
    """Return (slope, intercept) of the OLS line through (i, values[i]).

    Returns None when the fit is undefined (fewer than two points, so
    every x is identical and the denominator is zero).
    """
    y = np.asarray(values, dtype=float)
    n = len(y)
    x = np.arange(n, dtype=float)

    sum_x = x.sum()
    sum_y = y.sum()
    sum_xy = (x * y).sum()
    sum_xx = (x * x).sum()

    denominator = n * sum_xx - sum_x * sum_x
    if denominator == 0:
        return None

    slope = (n * sum_xy - sum_x * sum_y) / denominator
    intercept = (sum_y - slope * sum_x) / n
    return float(slope), float(intercept)


def _series_values(series: pd.DataFrame | Sequence[float]) -> list[float]:
    if isinstance(series, pd.DataFrame):
        return series["icu_occupied"].tolist()
    return list(series)


def forecast(
    series: pd.DataFrame | Sequence[float],
    horizon: int = FORECAST_HORIZON,
) -> list[int]:
    """Project ``horizon`` future ICU occupancy values.

    Parameters
    ----------
    series : Date-sorted series (series_by_date output) or plain values.
    horizon : Number of future points.

    Returns
    -------
    List of non-negative whole numbers for indices n .. n+horizon-1, or an
    empty list if the series has fewer than MIN_FORECAST_POINTS points or
    no x-variance.
    """
    values = _series_values(series)
    if len(values) < MIN_FORECAST_POINTS:
        logger.info("Forecast skipped: %d points (need %d)", len(values), MIN_FORECAST_POINTS)
        return []

    fit = fit_linear_trend(values)
    if fit is None:
        logger.info("Forecast skipped: series has no x-variance")
        return []

    slope, intercept = fit
    n = len(values)
    return [
        max(0, int(round_half_up(slope * idx + intercept)))
        for idx in range(n, n + horizon)
    ]


def build_forecast_series(
    series: pd.DataFrame,
    horizon: int = FORECAST_HORIZON,
) -> pd.DataFrame:
    """Combine actual and forecast points into one chart-ready frame.

    Future dates are the last actual date plus 1..horizon days. The
    forecast column repeats the last actual value on the last actual date
    so the two lines join.

    Returns
    -------
    DataFrame with columns date, actual, forecast. actual is NaN on future
    rows; forecast is NaN on all but the last actual row. Only actual rows
    are returned when no forecast is available.
    """
    if series.empty:
        return pd.DataFrame(columns=["date", "actual", "forecast"])

    actual = pd.DataFrame({
        "date": series["date"].to_numpy(),
        "actual": series["icu_occupied"].astype(float).to_numpy(),
        "forecast": np.nan,
    })

    predictions = forecast(series, horizon)
    if not predictions:
        return actual

    actual.loc[actual.index[-1], "forecast"] = actual["actual"].iloc[-1]

    last_date = pd.Timestamp(series["date"].iloc[-1])
    future = pd.DataFrame({
        "date": [last_date + pd.Timedelta(days=i) for i in range(1, len(predictions) + 1)],
        "actual": np.nan,
        "forecast": [float(p) for p in predictions],
    })

    return pd.concat([actual, future], ignore_index=True)
