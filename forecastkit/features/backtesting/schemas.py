"""Pydantic schemas for hold-out evaluation results."""

from __future__ import annotations

from datetime import datetime

from pydantic import Field

from forecastkit.features.forecasting.schemas import (
    ConfidenceIntervals,
    ForecastMethod,
    ForecastMetrics,
    SchemaBase,
)


class HoldoutResult(SchemaBase):
    """Out-of-sample evaluation of one strategy.

    Attributes:
        method: Strategy evaluated.
        config_hash: Hash of the configuration used.
        train_size: Number of training points.
        test_size: Number of held-out points (= forecast steps).
        test_timestamps: Timestamps of the held-out points.
        actuals: Held-out values.
        predictions: Forecasts for the held-out points.
        confidence_intervals: Interval bounds for the held-out points.
        metrics: Out-of-sample MAE, RMSE, MAPE and R2.
        coverage: Percentage of actuals inside the interval.
        duration_ms: Evaluation duration in milliseconds.
    """

    method: ForecastMethod
    config_hash: str
    train_size: int = Field(..., ge=2)
    test_size: int = Field(..., ge=1)
    test_timestamps: list[datetime]
    actuals: list[float]
    predictions: list[float]
    confidence_intervals: ConfidenceIntervals
    metrics: ForecastMetrics
    coverage: float
    duration_ms: float
