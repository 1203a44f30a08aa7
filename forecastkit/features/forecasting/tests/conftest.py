"""Test fixtures for forecasting module."""

from collections.abc import Callable
from datetime import datetime, timedelta

import pytest

from forecastkit.features.forecasting.schemas import (
    ForecastConfig,
    ForecastParameters,
    TimeSeriesData,
)

SeriesFactory = Callable[..., TimeSeriesData]


@pytest.fixture
def make_series() -> SeriesFactory:
    """Build a TimeSeriesData with evenly spaced timestamps.

    Defaults to a daily series starting 2024-01-01.
    """

    def _make(
        values: list[float],
        start: datetime = datetime(2024, 1, 1),
        step: timedelta = timedelta(days=1),
    ) -> TimeSeriesData:
        timestamps = [start + step * i for i in range(len(values))]
        return TimeSeriesData.from_points(timestamps, values)

    return _make


@pytest.fixture
def step_series(make_series: SeriesFactory) -> TimeSeriesData:
    """Six daily points [1, 1, 2, 2, 8, 8] with an easy-to-verify moving average."""
    return make_series([1.0, 1.0, 2.0, 2.0, 8.0, 8.0])


@pytest.fixture
def linear_series(make_series: SeriesFactory) -> TimeSeriesData:
    """Five daily points on the exact line y = t + 1."""
    return make_series([1.0, 2.0, 3.0, 4.0, 5.0])


@pytest.fixture
def noisy_trend_series(make_series: SeriesFactory) -> TimeSeriesData:
    """Five daily points around a trend (OLS slope 0.8, intercept 1.4)."""
    return make_series([1.0, 3.0, 2.0, 5.0, 4.0])


@pytest.fixture
def sample_mavg_config() -> ForecastConfig:
    """Moving average with a window of 3, forecasting 2 steps."""
    return ForecastConfig(
        method="moving-average",
        parameters=ForecastParameters(window_size=3),
        forecast_horizon=2,
    )


@pytest.fixture
def sample_simple_es_config() -> ForecastConfig:
    """Simple exponential smoothing with alpha 0.5."""
    return ForecastConfig(
        method="exponential-smoothing",
        parameters=ForecastParameters(alpha=0.5),
        forecast_horizon=3,
    )


@pytest.fixture
def sample_holt_config() -> ForecastConfig:
    """Holt double smoothing with alpha 0.5 and beta 0.5."""
    return ForecastConfig(
        method="exponential-smoothing",
        parameters=ForecastParameters(alpha=0.5, beta=0.5),
        forecast_horizon=3,
    )


@pytest.fixture
def sample_linear_config() -> ForecastConfig:
    """Linear trend forecasting 2 steps."""
    return ForecastConfig(method="linear-trend", forecast_horizon=2)
