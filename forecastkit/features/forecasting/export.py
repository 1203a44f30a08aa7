"""Tabular export of forecast results.

One row per historical point followed by one row per forecast step:

    timestamp, type, method, value, fitted_value, prediction,
    confidence_lower, confidence_upper

Moving-average fitted values start at the end of the first window, so
they are right-aligned against the historical rows; earlier rows are empty.
"""

from __future__ import annotations

import math
from typing import Any

import pandas as pd

from forecastkit.features.forecasting.schemas import (
    ForecastMetrics,
    ForecastResult,
    TimeSeriesData,
)

EXPORT_COLUMNS = [
    "timestamp",
    "type",
    "method",
    "value",
    "fitted_value",
    "prediction",
    "confidence_lower",
    "confidence_upper",
]


def result_rows(result: ForecastResult, data: TimeSeriesData) -> list[dict[str, Any]]:
    """Build export rows for one result.

    Args:
        result: Forecast to export.
        data: Series the forecast was fitted on.

    Returns:
        List of row dictionaries keyed by EXPORT_COLUMNS.
    """
    rows: list[dict[str, Any]] = []
    historical = result.timestamps.historical
    offset = len(historical) - len(result.fitted_values)

    for i, timestamp in enumerate(historical):
        fitted = result.fitted_values[i - offset] if i >= offset else None
        rows.append(
            {
                "timestamp": timestamp.isoformat(),
                "type": "historical",
                "method": result.method,
                "value": data.values[i] if i < len(data.values) else None,
                "fitted_value": fitted,
                "prediction": None,
                "confidence_lower": None,
                "confidence_upper": None,
            }
        )

    bounds = result.confidence_intervals
    for i, timestamp in enumerate(result.timestamps.forecast):
        rows.append(
            {
                "timestamp": timestamp.isoformat(),
                "type": "forecast",
                "method": result.method,
                "value": None,
                "fitted_value": None,
                "prediction": result.predictions[i],
                "confidence_lower": bounds.lower[i],
                "confidence_upper": bounds.upper[i],
            }
        )

    return rows


def result_to_frame(result: ForecastResult, data: TimeSeriesData) -> pd.DataFrame:
    """Export rows as a DataFrame with EXPORT_COLUMNS."""
    return pd.DataFrame(result_rows(result, data), columns=EXPORT_COLUMNS)


def result_to_csv(result: ForecastResult, data: TimeSeriesData) -> str:
    """Export rows as CSV text (empty cells for missing values)."""
    return result_to_frame(result, data).to_csv(index=False)


def format_metrics(metrics: ForecastMetrics) -> dict[str, str]:
    """Format metrics for display.

    Args:
        metrics: Metrics to format.

    Returns:
        Display strings: MAE/RMSE with 4 decimals, MAPE as a percentage with
        2 decimals, R2 with 4 decimals; undefined values as "N/A".
    """

    def _fmt(value: float | None, pattern: str, suffix: str = "") -> str:
        if value is None or math.isnan(value):
            return "N/A"
        return f"{value:{pattern}}{suffix}"

    return {
        "MAE": _fmt(metrics.mae, ".4f"),
        "RMSE": _fmt(metrics.rmse, ".4f"),
        "MAPE": _fmt(metrics.mape, ".2f", "%"),
        "R2": _fmt(metrics.r2, ".4f"),
    }
