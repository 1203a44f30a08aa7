"""Test fixtures for backtesting module."""

from datetime import datetime, timedelta

import numpy as np
import pytest

from forecastkit.features.forecasting.schemas import (
    ForecastConfig,
    ForecastParameters,
    TimeSeriesData,
)


@pytest.fixture
def sample_dates_10() -> list[datetime]:
    """Ten consecutive days starting 2024-01-01."""
    start = datetime(2024, 1, 1)
    return [start + timedelta(days=i) for i in range(10)]


@pytest.fixture
def linear_series_10(sample_dates_10) -> TimeSeriesData:
    """Ten daily points on y = t + 1."""
    return TimeSeriesData.from_points(sample_dates_10, [float(i) for i in range(1, 11)])


@pytest.fixture
def level_shift_series_10(sample_dates_10) -> TimeSeriesData:
    """Flat at 1 for eight days, then 100 for the last two."""
    return TimeSeriesData.from_points(sample_dates_10, [1.0] * 8 + [100.0, 100.0])


@pytest.fixture
def sample_actuals() -> np.ndarray:
    """Actual values for metric tests."""
    return np.array([10.0, 20.0, 30.0, 40.0], dtype=np.float64)


@pytest.fixture
def sample_predictions() -> np.ndarray:
    """Predictions off by [+1, -2, +3, -4]."""
    return np.array([11.0, 18.0, 33.0, 36.0], dtype=np.float64)


@pytest.fixture
def sample_linear_config() -> ForecastConfig:
    """Linear trend with the default 0.8 split."""
    return ForecastConfig(method="linear-trend", forecast_horizon=5)


@pytest.fixture
def sample_mavg_config() -> ForecastConfig:
    """Moving average with a window of 2."""
    return ForecastConfig(
        method="moving-average",
        parameters=ForecastParameters(window_size=2),
        forecast_horizon=5,
    )
