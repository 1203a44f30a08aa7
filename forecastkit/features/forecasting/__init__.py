"""Forecasting module: three strategies behind one contract.

Exports:
    Models:
        - BaseForecaster: Abstract base class for all strategies
        - MovingAverageForecaster: Trailing mean, flat forecast
        - ExponentialSmoothingForecaster: Simple or Holt double smoothing
        - LinearTrendForecaster: OLS trend extrapolation
        - model_factory: Create forecaster from config.method

    Schemas:
        - TimeSeriesData, TimeSeriesMetadata, detect_frequency
        - ForecastConfig, ForecastParameters
        - ForecastResult, ConfidenceIntervals, ForecastMetrics, ForecastTimestamps
        - ForecastModel

    Statistics:
        - z_score, t_score, MIN_INTERVAL_WIDTH

    Export / Persistence:
        - result_to_frame, result_to_csv, format_metrics
        - save_forecast_model, load_forecast_model

    Service:
        - ForecastingService: fit, predict and snapshot in one call
"""

from forecastkit.features.forecasting.export import (
    format_metrics,
    result_to_csv,
    result_to_frame,
)
from forecastkit.features.forecasting.models import (
    BaseForecaster,
    ExponentialSmoothingForecaster,
    FittedState,
    LinearTrendForecaster,
    MovingAverageForecaster,
    model_factory,
    validate_config,
    validate_series,
)
from forecastkit.features.forecasting.persistence import (
    load_forecast_model,
    save_forecast_model,
)
from forecastkit.features.forecasting.schemas import (
    ConfidenceIntervals,
    ForecastConfig,
    ForecastMethod,
    ForecastMetrics,
    ForecastModel,
    ForecastParameters,
    ForecastResult,
    ForecastTimestamps,
    TimeSeriesData,
    TimeSeriesMetadata,
    detect_frequency,
)
from forecastkit.features.forecasting.service import ForecastingService
from forecastkit.features.forecasting.statistics import MIN_INTERVAL_WIDTH, t_score, z_score

__all__ = [
    "MIN_INTERVAL_WIDTH",
    # Models
    "BaseForecaster",
    # Schemas
    "ConfidenceIntervals",
    "ExponentialSmoothingForecaster",
    "FittedState",
    "ForecastConfig",
    "ForecastMethod",
    "ForecastMetrics",
    "ForecastModel",
    "ForecastParameters",
    "ForecastResult",
    "ForecastTimestamps",
    # Service
    "ForecastingService",
    "LinearTrendForecaster",
    "MovingAverageForecaster",
    "TimeSeriesData",
    "TimeSeriesMetadata",
    "detect_frequency",
    # Export
    "format_metrics",
    # Persistence
    "load_forecast_model",
    "model_factory",
    "result_to_csv",
    "result_to_frame",
    "save_forecast_model",
    # Statistics
    "t_score",
    "validate_config",
    "validate_series",
    "z_score",
]
