"""Hold-out evaluation service.

Orchestrates:
- Validating the full series and configuration
- Splitting by config.train_test_split
- Fitting a fresh strategy on the train prefix
- Forecasting the test suffix and scoring it

CRITICAL: Each evaluation uses a new forecaster instance; the strategy
never sees held-out values.
"""

from __future__ import annotations

import time

import numpy as np
import structlog

from forecastkit.core.config import get_settings
from forecastkit.core.logging import bind_run
from forecastkit.features.backtesting.metrics import MetricsCalculator
from forecastkit.features.backtesting.schemas import HoldoutResult
from forecastkit.features.backtesting.splitter import HoldoutSplitter
from forecastkit.features.forecasting.models import (
    model_factory,
    validate_config,
    validate_series,
)
from forecastkit.features.forecasting.schemas import (
    ForecastConfig,
    ForecastMetrics,
    TimeSeriesData,
)

logger = structlog.get_logger()


class BacktestService:
    """Service for out-of-sample evaluation of a forecasting configuration."""

    def __init__(self) -> None:
        """Initialize the backtest service."""
        self.settings = get_settings()
        self.metrics_calculator = MetricsCalculator()

    def evaluate(self, data: TimeSeriesData, config: ForecastConfig) -> HoldoutResult:
        """Fit on the train prefix and score forecasts of the test suffix.

        Args:
            data: Full series.
            config: Forecast configuration; train_test_split picks the split.

        Returns:
            HoldoutResult with out-of-sample metrics and interval coverage.

        Raises:
            ValidationError: If the series is malformed.
            ConfigurationError: If the configuration or split is invalid.
        """
        with bind_run(config.method):
            return self._evaluate(data, config)

    def _evaluate(self, data: TimeSeriesData, config: ForecastConfig) -> HoldoutResult:
        start_time = time.perf_counter()

        validate_series(data)
        validate_config(config)

        splitter = HoldoutSplitter(
            train_test_split=config.train_test_split,
            min_train_size=self.settings.backtest_min_train_size,
        )
        split = splitter.split(data)
        test_size = len(split.test.values)

        logger.info(
            "backtest.evaluation_started",
            method=config.method,
            config_hash=config.config_hash(),
            train_size=len(split.train.values),
            test_size=test_size,
        )

        forecaster = model_factory(config)
        forecaster.fit(split.train, config)
        result = forecaster.predict(test_size)

        actuals = np.asarray(split.test.values, dtype=np.float64)
        predictions = np.asarray(result.predictions, dtype=np.float64)
        lower = np.asarray(result.confidence_intervals.lower, dtype=np.float64)
        upper = np.asarray(result.confidence_intervals.upper, dtype=np.float64)

        metrics = ForecastMetrics(**self.metrics_calculator.calculate_all(actuals, predictions))
        coverage = self.metrics_calculator.coverage(actuals, lower, upper).value

        duration_ms = (time.perf_counter() - start_time) * 1000

        logger.info(
            "backtest.evaluation_completed",
            method=config.method,
            config_hash=config.config_hash(),
            mae=metrics.mae,
            rmse=metrics.rmse,
            coverage=coverage,
            duration_ms=duration_ms,
        )

        return HoldoutResult(
            method=config.method,
            config_hash=config.config_hash(),
            train_size=len(split.train.values),
            test_size=test_size,
            test_timestamps=list(split.test.timestamps),
            actuals=actuals.tolist(),
            predictions=result.predictions,
            confidence_intervals=result.confidence_intervals,
            metrics=metrics,
            coverage=coverage,
            duration_ms=duration_ms,
        )
