"""Forecasting service: strategy selection, fit, predict and snapshot.

Orchestrates:
- Strategy instantiation via model_factory
- Fitting and prediction for config.forecast_horizon
- Wrapping the result in a ForecastModel snapshot
- Optional persistence under the configured artifacts directory

Errors from validation propagate unchanged; there is no fallback to a
different method.
"""

from __future__ import annotations

import time
import uuid
from datetime import UTC, datetime
from pathlib import Path

import structlog

from forecastkit.core.config import get_settings
from forecastkit.core.logging import bind_run
from forecastkit.features.forecasting.models import model_factory
from forecastkit.features.forecasting.persistence import (
    load_forecast_model,
    save_forecast_model,
)
from forecastkit.features.forecasting.schemas import (
    ForecastConfig,
    ForecastModel,
    TimeSeriesData,
)

logger = structlog.get_logger()


class ForecastingService:
    """Service for running forecasts and storing their snapshots."""

    def __init__(self) -> None:
        """Initialize the forecasting service."""
        self.settings = get_settings()

    def run_forecast(self, data: TimeSeriesData, config: ForecastConfig) -> ForecastModel:
        """Fit the configured strategy and forecast config.forecast_horizon steps.

        Args:
            data: Training series.
            config: Forecast configuration.

        Returns:
            ForecastModel snapshot of the run.

        Raises:
            ValidationError: If the series is malformed.
            ConfigurationError: If the configuration is invalid.
        """
        start_time = time.perf_counter()

        with bind_run(config.method):
            logger.info(
                "forecasting.run_started",
                config_hash=config.config_hash(),
                n_observations=len(data.values),
                horizon=config.forecast_horizon,
            )

            forecaster = model_factory(config)
            forecaster.fit(data, config)
            result = forecaster.predict(config.forecast_horizon)

            model = ForecastModel(
                config=config,
                result=result,
                trained=forecaster.is_trained,
                training_data=data,
                created_at=datetime.now(UTC),
            )

            duration_ms = (time.perf_counter() - start_time) * 1000
            logger.info(
                "forecasting.run_completed",
                config_hash=config.config_hash(),
                mae=result.metrics.mae,
                rmse=result.metrics.rmse,
                duration_ms=duration_ms,
            )
            return model

    def run_and_save(
        self, data: TimeSeriesData, config: ForecastConfig
    ) -> tuple[ForecastModel, Path]:
        """Run a forecast and save its snapshot in the artifacts directory.

        Args:
            data: Training series.
            config: Forecast configuration.

        Returns:
            Tuple of (snapshot, saved path).
        """
        model = self.run_forecast(data, config)
        model_id = uuid.uuid4().hex[:12]
        path = Path(self.settings.forecast_artifacts_dir) / f"forecast_{model_id}"
        return model, save_forecast_model(model, path)

    def load(self, path: str | Path) -> ForecastModel:
        """Load a snapshot, restricted to the artifacts directory.

        Raises:
            ValueError: If path is outside the artifacts directory.
            FileNotFoundError: If the snapshot does not exist.
            ValidationError: If the snapshot is malformed.
        """
        return load_forecast_model(path, base_dir=self.settings.forecast_artifacts_dir)
