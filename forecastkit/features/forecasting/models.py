"""Forecasting strategies with one shared contract.

All forecasters implement:
- fit(data, config) -> self
- predict(horizon) -> ForecastResult
- is_trained -> bool
- get_method_name() -> str

fit validates first and then assigns a frozen fitted state in one step, so
a failed fit leaves the instance untrained. A trained instance is never
re-fitted; forecasting another series needs a new instance.

CRITICAL: No randomness anywhere. predict(h) is idempotent.
"""

from __future__ import annotations

import math
from abc import ABC, abstractmethod
from dataclasses import dataclass
from datetime import datetime
from typing import Any, ClassVar, TypeVar

import numpy as np
import pandas as pd
import structlog

from forecastkit.core.config import get_settings
from forecastkit.core.exceptions import (
    ConfigurationError,
    UntrainedModelError,
    ValidationError,
)
from forecastkit.features.backtesting.metrics import MetricsCalculator
from forecastkit.features.forecasting.schemas import (
    ConfidenceIntervals,
    ForecastConfig,
    ForecastMetrics,
    ForecastResult,
    ForecastTimestamps,
    TimeSeriesData,
)
from forecastkit.features.forecasting.statistics import (
    MIN_INTERVAL_WIDTH,
    t_score,
    z_score,
)

logger = structlog.get_logger()

FloatArray = np.ndarray[Any, np.dtype[np.floating[Any]]]

DEFAULT_WINDOW_SIZE = 3

FORECAST_OFFSETS: dict[str, pd.DateOffset] = {
    "daily": pd.DateOffset(days=1),
    "weekly": pd.DateOffset(weeks=1),
    "monthly": pd.DateOffset(months=1),
}


def future_timestamps(data: TimeSeriesData, horizon: int) -> list[datetime]:
    """Timestamps of the next horizon periods after the last observation.

    Steps follow the series frequency; irregular series step by one day.

    Args:
        data: Training series.
        horizon: Number of steps.

    Returns:
        List of horizon timestamps.
    """
    offset = FORECAST_OFFSETS.get(data.metadata.frequency, FORECAST_OFFSETS["daily"])
    last = pd.Timestamp(data.timestamps[-1])
    return [(last + offset * step).to_pydatetime() for step in range(1, horizon + 1)]


def validate_series(data: TimeSeriesData | None) -> None:
    """Check the shape of a series before any computation.

    Args:
        data: Series to check.

    Raises:
        ValidationError: If timestamps/values are missing or misaligned, there
            are fewer than 2 points, or a value is NaN or infinite.
    """
    if data is None or data.values is None or data.timestamps is None:
        raise ValidationError("Invalid time series data: missing values or timestamps")

    if len(data.values) != len(data.timestamps):
        raise ValidationError(
            "Time series data: values and timestamps must have the same length",
            details={"values": len(data.values), "timestamps": len(data.timestamps)},
        )

    if len(data.values) < 2:
        raise ValidationError(
            "Time series data: minimum 2 data points required",
            details={"n_points": len(data.values)},
        )

    values = np.asarray(data.values, dtype=np.float64)
    if not np.all(np.isfinite(values)):
        bad = np.flatnonzero(~np.isfinite(values)).tolist()
        raise ValidationError(
            "Time series data: contains NaN or infinite values",
            details={"indices": bad},
        )


def validate_config(config: ForecastConfig | None) -> None:
    """Check the method-independent ranges of a configuration.

    Args:
        config: Configuration to check.

    Raises:
        ConfigurationError: If horizon, split or confidence level is out of range.
    """
    if config is None:
        raise ConfigurationError("Forecast configuration is required")

    if config.forecast_horizon <= 0:
        raise ConfigurationError(
            "Forecast horizon must be positive",
            details={"forecast_horizon": config.forecast_horizon},
        )

    if not 0 <= config.train_test_split <= 1:
        raise ConfigurationError(
            "Train/test split must be between 0 and 1",
            details={"train_test_split": config.train_test_split},
        )

    if not 0 <= config.confidence_level <= 1:
        raise ConfigurationError(
            "Confidence level must be between 0 and 1",
            details={"confidence_level": config.confidence_level},
        )


@dataclass(frozen=True)
class FittedState:
    """Everything predict needs, computed once by fit.

    Attributes:
        data: Training series.
        config: Configuration used for fitting.
        fitted_values: In-sample estimates reported in results.
        actuals: Actual values aligned with estimates (for metrics).
        estimates: Model estimates aligned with actuals (for metrics).
    """

    data: TimeSeriesData
    config: ForecastConfig
    fitted_values: FloatArray
    actuals: FloatArray
    estimates: FloatArray

    @property
    def residual_std(self) -> float:
        """Population standard deviation of actuals - estimates."""
        return float(np.std(self.actuals - self.estimates))


StateT = TypeVar("StateT", bound=FittedState)


def _narrow_state(state: FittedState, state_type: type[StateT]) -> StateT:
    if not isinstance(state, state_type):
        raise RuntimeError("Model was not properly fitted")
    return state


class BaseForecaster(ABC):
    """Abstract base class for all forecasting strategies.

    Subclasses implement _fit (build the fitted state), _forecast (point
    forecasts) and _half_widths (interval half-widths). Validation, state
    handling and result assembly live here.

    Attributes:
        method_name: Value of ForecastConfig.method this strategy accepts.
        min_interval_width: Floor on interval half-width.
    """

    method_name: ClassVar[str]

    def __init__(self, min_interval_width: float = MIN_INTERVAL_WIDTH) -> None:
        """Initialize the forecaster.

        Args:
            min_interval_width: Floor on interval half-width.
        """
        self.min_interval_width = min_interval_width
        self._state: FittedState | None = None
        self._metrics = MetricsCalculator()

    def fit(self, data: TimeSeriesData, config: ForecastConfig) -> BaseForecaster:
        """Fit the strategy to a historical series.

        Validation order: data shape, config ranges, method consistency,
        the already-trained guard, then method-specific parameters.

        Args:
            data: Training series.
            config: Forecast configuration.

        Returns:
            self (for method chaining).

        Raises:
            ValidationError: If the series is malformed.
            ConfigurationError: If the configuration is out of range, names
                another method, or the instance is already trained.
        """
        validate_series(data)
        validate_config(config)
        if config.method != self.get_method_name():
            raise ConfigurationError(
                f"Invalid method '{config.method}' for {type(self).__name__}",
                details={"expected": self.get_method_name(), "got": config.method},
            )
        if self._state is not None:
            raise ConfigurationError(
                f"{type(self).__name__} is already trained; create a new instance "
                "to fit another series"
            )

        state = self._fit(data, config)
        self._state = state

        logger.debug(
            "forecasting.fit_completed",
            method=self.get_method_name(),
            n_observations=len(data.values),
        )
        return self

    def predict(self, horizon: int) -> ForecastResult:
        """Generate forecasts for the next horizon periods.

        Args:
            horizon: Number of periods to forecast.

        Returns:
            ForecastResult with predictions, intervals, fitted values and
            in-sample metrics.

        Raises:
            UntrainedModelError: If fit has not succeeded yet.
            ConfigurationError: If horizon is not positive.
        """
        state = self._require_state()
        if horizon <= 0:
            raise ConfigurationError(
                "Forecast horizon must be positive", details={"horizon": horizon}
            )

        predictions = self._forecast(state, horizon)
        half_widths = np.maximum(self._half_widths(state, horizon), self.min_interval_width)

        return ForecastResult(
            method=state.config.method,
            fitted_values=state.fitted_values.tolist(),
            predictions=predictions.tolist(),
            confidence_intervals=ConfidenceIntervals(
                lower=(predictions - half_widths).tolist(),
                upper=(predictions + half_widths).tolist(),
            ),
            metrics=ForecastMetrics(**self._metrics.calculate_all(state.actuals, state.estimates)),
            timestamps=ForecastTimestamps(
                historical=list(state.data.timestamps),
                forecast=future_timestamps(state.data, horizon),
            ),
        )

    @property
    def is_trained(self) -> bool:
        """Check if the forecaster has been fitted.

        Returns:
            True if fit() has completed successfully.
        """
        return self._state is not None

    def get_method_name(self) -> str:
        """Return the method identifier this strategy implements."""
        return self.method_name

    def get_params(self) -> dict[str, Any]:
        """Get constructor parameters (scikit-learn convention)."""
        return {"min_interval_width": self.min_interval_width}

    def _require_state(self) -> FittedState:
        if self._state is None:
            raise UntrainedModelError()
        return self._state

    @abstractmethod
    def _fit(self, data: TimeSeriesData, config: ForecastConfig) -> FittedState:
        """Validate method parameters and compute the fitted state.

        Raises:
            ConfigurationError: If a method parameter is invalid.
        """

    @abstractmethod
    def _forecast(self, state: FittedState, horizon: int) -> FloatArray:
        """Point forecasts of shape [horizon]."""

    @abstractmethod
    def _half_widths(self, state: FittedState, horizon: int) -> FloatArray:
        """Interval half-widths of shape [horizon], before the floor."""


# =============================================================================
# Moving average
# =============================================================================


@dataclass(frozen=True)
class MovingAverageState(FittedState):
    """Fitted state of a moving average forecaster."""

    window_size: int


class MovingAverageForecaster(BaseForecaster):
    """Trailing moving average with a flat forecast.

    Formula: MA[i] = mean(y[i-window+1 : i+1]) for i = window-1 .. N-1
             y_hat[N-1+h] = MA[N-1] for all h

    CRITICAL: Does NOT roll the average forward; the last average is
    repeated for every horizon step. Interval width is constant.

    Attributes:
        default_window_size: Window used when the config sets none.
    """

    method_name: ClassVar[str] = "moving-average"

    def __init__(
        self,
        default_window_size: int = DEFAULT_WINDOW_SIZE,
        min_interval_width: float = MIN_INTERVAL_WIDTH,
    ) -> None:
        """Initialize the moving average forecaster.

        Args:
            default_window_size: Window used when config.parameters has none.
            min_interval_width: Floor on interval half-width.
        """
        super().__init__(min_interval_width)
        self.default_window_size = default_window_size

    def _fit(self, data: TimeSeriesData, config: ForecastConfig) -> MovingAverageState:
        window_size = config.parameters.window_size
        if window_size is None:
            window_size = self.default_window_size

        if window_size <= 0:
            raise ConfigurationError(
                "Window size must be positive", details={"window_size": window_size}
            )
        if window_size > len(data.values):
            raise ConfigurationError(
                f"Window size ({window_size}) cannot be larger than data length "
                f"({len(data.values)})",
                details={"window_size": window_size, "n_points": len(data.values)},
            )

        values = np.asarray(data.values, dtype=np.float64)
        windows = np.lib.stride_tricks.sliding_window_view(values, window_size)
        moving_averages = windows.mean(axis=1)

        return MovingAverageState(
            data=data,
            config=config,
            fitted_values=moving_averages,
            actuals=values[window_size - 1 :],
            estimates=moving_averages,
            window_size=window_size,
        )

    def _forecast(self, state: FittedState, horizon: int) -> FloatArray:
        return np.full(horizon, state.fitted_values[-1], dtype=np.float64)

    def _half_widths(self, state: FittedState, horizon: int) -> FloatArray:
        width = z_score(state.config.confidence_level) * state.residual_std
        return np.full(horizon, width, dtype=np.float64)

    def get_params(self) -> dict[str, Any]:
        """Get constructor parameters."""
        return {**super().get_params(), "default_window_size": self.default_window_size}


# =============================================================================
# Exponential smoothing
# =============================================================================


@dataclass(frozen=True)
class ExponentialSmoothingState(FittedState):
    """Fitted state of an exponential smoothing forecaster.

    Attributes:
        alpha: Level smoothing factor.
        beta: Trend smoothing factor, None for simple smoothing.
        levels: Smoothed level series (S or L).
        trends: Trend series T, None for simple smoothing.
    """

    alpha: float
    beta: float | None
    levels: FloatArray
    trends: FloatArray | None


def _check_smoothing_factor(name: str, value: float) -> None:
    if not 0 < value < 1:
        raise ConfigurationError(
            f"{name.capitalize()} must be between 0 and 1 (exclusive)",
            details={name: value},
        )


class ExponentialSmoothingForecaster(BaseForecaster):
    """Simple or double (Holt) exponential smoothing.

    Simple (no beta):
        S[0] = y[0];  S[t] = alpha*y[t] + (1-alpha)*S[t-1]
        y_hat[N-1+h] = S[N-1]
    Double (beta given):
        L[0] = y[0];  T[0] = y[1] - y[0]
        L[t] = alpha*y[t] + (1-alpha)*(L[t-1] + T[t-1])
        T[t] = beta*(L[t] - L[t-1]) + (1-beta)*T[t-1]
        y_hat[N-1+h] = L[N-1] + h*T[N-1]

    Residuals and metrics use one-step-ahead errors (index 0 skipped).
    Interval half-width for step i (0-based) grows as sqrt(i+1).
    """

    method_name: ClassVar[str] = "exponential-smoothing"

    def _fit(self, data: TimeSeriesData, config: ForecastConfig) -> ExponentialSmoothingState:
        alpha = config.parameters.alpha
        beta = config.parameters.beta

        if alpha is None:
            raise ConfigurationError("Alpha is required for exponential smoothing")
        _check_smoothing_factor("alpha", alpha)
        if beta is not None:
            _check_smoothing_factor("beta", beta)

        values = np.asarray(data.values, dtype=np.float64)
        n = len(values)
        levels = np.empty(n, dtype=np.float64)
        levels[0] = values[0]

        if beta is None:
            trends = None
            for t in range(1, n):
                levels[t] = alpha * values[t] + (1 - alpha) * levels[t - 1]
            one_step = levels[:-1]
        else:
            trends = np.empty(n, dtype=np.float64)
            trends[0] = values[1] - values[0]
            for t in range(1, n):
                levels[t] = alpha * values[t] + (1 - alpha) * (levels[t - 1] + trends[t - 1])
                trends[t] = beta * (levels[t] - levels[t - 1]) + (1 - beta) * trends[t - 1]
            one_step = levels[:-1] + trends[:-1]

        return ExponentialSmoothingState(
            data=data,
            config=config,
            fitted_values=levels,
            actuals=values[1:],
            estimates=one_step,
            alpha=alpha,
            beta=beta,
            levels=levels,
            trends=trends,
        )

    def _forecast(self, state: FittedState, horizon: int) -> FloatArray:
        state = _narrow_state(state, ExponentialSmoothingState)
        last_level = state.levels[-1]
        if state.trends is None:
            return np.full(horizon, last_level, dtype=np.float64)
        steps = np.arange(1, horizon + 1, dtype=np.float64)
        return last_level + steps * state.trends[-1]

    def _half_widths(self, state: FittedState, horizon: int) -> FloatArray:
        base = z_score(state.config.confidence_level) * state.residual_std
        return base * np.sqrt(np.arange(1, horizon + 1, dtype=np.float64))

    @property
    def has_trend(self) -> bool:
        """True when fitted with Holt's double smoothing."""
        state = _narrow_state(self._require_state(), ExponentialSmoothingState)
        return state.trends is not None


# =============================================================================
# Linear trend
# =============================================================================


@dataclass(frozen=True)
class LinearTrendState(FittedState):
    """Fitted state of a linear trend forecaster.

    Attributes:
        slope: OLS slope over the index.
        intercept: OLS intercept.
        x_mean: Mean of the training index.
        sxx: Sum of squared index deviations.
        residual_se: Residual standard error sqrt(RSS / (N - 2)).
    """

    slope: float
    intercept: float
    x_mean: float
    sxx: float
    residual_se: float


class LinearTrendForecaster(BaseForecaster):
    """Ordinary least-squares trend on the series index.

    Formula: y_hat[t] = slope*t + intercept, t = 0 .. N-1, extrapolated to
    t = N .. N+h-1.

    Intervals are OLS prediction intervals:
        se_pred = se * sqrt(1 + 1/N + (x - x_mean)^2 / Sxx)
        half-width = t(confidence, N-2) * se_pred

    Only degree 1 is computed. polynomial_degree > 1 is accepted and logged
    but fits the same line.
    """

    method_name: ClassVar[str] = "linear-trend"

    def _fit(self, data: TimeSeriesData, config: ForecastConfig) -> LinearTrendState:
        degree = config.parameters.polynomial_degree
        if degree is not None:
            if degree < 1:
                raise ConfigurationError(
                    "Polynomial degree must be >= 1", details={"polynomial_degree": degree}
                )
            if degree != 1:
                logger.warning(
                    "forecasting.polynomial_degree_ignored",
                    requested_degree=degree,
                    fitted_degree=1,
                )

        values = np.asarray(data.values, dtype=np.float64)
        n = len(values)
        x = np.arange(n, dtype=np.float64)
        x_mean = float(np.mean(x))
        y_mean = float(np.mean(values))

        sxx = float(np.sum((x - x_mean) ** 2))
        sxy = float(np.sum((x - x_mean) * (values - y_mean)))

        if sxx == 0:
            slope = 0.0
            intercept = y_mean
        else:
            slope = sxy / sxx
            intercept = y_mean - slope * x_mean

        fitted = slope * x + intercept
        rss = float(np.sum((values - fitted) ** 2))
        # Two points fit exactly and leave no residual degrees of freedom
        dof = n - 2
        residual_se = math.sqrt(rss / dof) if dof > 0 else 0.0

        return LinearTrendState(
            data=data,
            config=config,
            fitted_values=fitted,
            actuals=values,
            estimates=fitted,
            slope=slope,
            intercept=intercept,
            x_mean=x_mean,
            sxx=sxx,
            residual_se=residual_se,
        )

    def _forecast(self, state: FittedState, horizon: int) -> FloatArray:
        state = _narrow_state(state, LinearTrendState)
        return state.slope * self._future_index(state, horizon) + state.intercept

    def _half_widths(self, state: FittedState, horizon: int) -> FloatArray:
        state = _narrow_state(state, LinearTrendState)
        n = len(state.actuals)
        future_x = self._future_index(state, horizon)
        leverage = (future_x - state.x_mean) ** 2 / state.sxx if state.sxx else 0.0
        standard_error = state.residual_se * np.sqrt(1 + 1 / n + leverage)
        return t_score(state.config.confidence_level, n - 2) * standard_error

    @staticmethod
    def _future_index(state: FittedState, horizon: int) -> FloatArray:
        n = len(state.actuals)
        return np.arange(n, n + horizon, dtype=np.float64)

    @property
    def slope(self) -> float:
        """Slope of the fitted trend."""
        state = _narrow_state(self._require_state(), LinearTrendState)
        return state.slope

    @property
    def intercept(self) -> float:
        """Intercept of the fitted trend."""
        state = _narrow_state(self._require_state(), LinearTrendState)
        return state.intercept


# =============================================================================
# Factory
# =============================================================================

FORECASTERS: dict[str, type[BaseForecaster]] = {
    MovingAverageForecaster.method_name: MovingAverageForecaster,
    ExponentialSmoothingForecaster.method_name: ExponentialSmoothingForecaster,
    LinearTrendForecaster.method_name: LinearTrendForecaster,
}


def model_factory(config: ForecastConfig) -> BaseForecaster:
    """Create an untrained forecaster for config.method.

    Args:
        config: Forecast configuration.

    Returns:
        Instantiated forecaster configured from settings.

    Raises:
        ConfigurationError: If the method is unknown.
    """
    settings = get_settings()
    method: str = config.method

    if method == MovingAverageForecaster.method_name:
        return MovingAverageForecaster(
            default_window_size=settings.forecast_default_window_size,
            min_interval_width=settings.forecast_min_interval_width,
        )
    if method in FORECASTERS:
        return FORECASTERS[method](min_interval_width=settings.forecast_min_interval_width)
    raise ConfigurationError(f"Unknown forecasting method: {method}")
