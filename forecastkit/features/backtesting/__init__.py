"""Backtesting module for out-of-sample forecast evaluation.

Provides metrics calculation and a chronological hold-out split.
BacktestService lives in forecastkit.features.backtesting.service.
"""

from forecastkit.features.backtesting.metrics import MetricResult, MetricsCalculator
from forecastkit.features.backtesting.schemas import HoldoutResult
from forecastkit.features.backtesting.splitter import HoldoutSplit, HoldoutSplitter

__all__ = [
    "HoldoutResult",
    "HoldoutSplit",
    "HoldoutSplitter",
    "MetricResult",
    "MetricsCalculator",
]
