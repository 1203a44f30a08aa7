"""Pydantic schemas for forecasting inputs, results and stored models.

All schemas are:
- Immutable (frozen=True) once built
- Closed (extra="forbid") so misspelled parameters fail loudly
- camelCase on the wire (timeSeries JSON from the browser app), snake_case
  in Python; both spellings are accepted on input
- inf/NaN floats written as JSON Infinity/NaN constants, so a snapshot
  whose metrics or bounds overflowed still loads back

Range checks on ForecastConfig and the length/NaN checks on TimeSeriesData
are NOT enforced here: forecasters validate their inputs at fit time and
raise the package's own ValidationError / ConfigurationError.
"""

from __future__ import annotations

import hashlib
import math
from datetime import UTC, datetime
from typing import Any, Literal

import numpy as np
from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator
from pydantic.alias_generators import to_camel

Frequency = Literal["daily", "weekly", "monthly", "irregular"]
ForecastMethod = Literal["moving-average", "exponential-smoothing", "linear-trend"]

SECONDS_PER_DAY = 24 * 60 * 60
# Nominal step of each regular frequency, in days (a month is approximated)
FREQUENCY_STEP_DAYS: dict[str, float] = {"daily": 1.0, "weekly": 7.0, "monthly": 30.0}
FREQUENCY_TOLERANCE = 0.1
FREQUENCY_THRESHOLD = 0.7
GAP_FACTOR = 1.5


class SchemaBase(BaseModel):
    """Base for every forecasting schema."""

    model_config = ConfigDict(
        frozen=True,
        extra="forbid",
        alias_generator=to_camel,
        populate_by_name=True,
        ser_json_inf_nan="constants",
    )


# =============================================================================
# Time series input
# =============================================================================


def _intervals_in_days(timestamps: list[datetime]) -> np.ndarray[Any, np.dtype[np.floating[Any]]]:
    seconds = np.array(sorted(ts.timestamp() for ts in timestamps), dtype=np.float64)
    return np.diff(seconds) / SECONDS_PER_DAY


def detect_frequency(timestamps: list[datetime]) -> Frequency:
    """Classify the sampling frequency of a series.

    A frequency wins when more than 70% of consecutive intervals are within
    10% of its nominal step (1, 7 or 30 days). Checked in that order.

    Args:
        timestamps: Observation timestamps (any order).

    Returns:
        "daily", "weekly", "monthly" or "irregular".
    """
    if len(timestamps) < 2:
        return "irregular"

    intervals = _intervals_in_days(timestamps)
    for frequency, step in FREQUENCY_STEP_DAYS.items():
        matches = np.abs(intervals - step) / step < FREQUENCY_TOLERANCE
        if np.mean(matches) > FREQUENCY_THRESHOLD:
            return frequency  # type: ignore[return-value]
    return "irregular"


class TimeSeriesMetadata(SchemaBase):
    """Derived description of a series.

    Attributes:
        frequency: Detected sampling frequency.
        has_gaps: Whether observations were dropped or intervals skip steps.
        total_points: Number of observations.
    """

    frequency: Frequency = "irregular"
    has_gaps: bool = False
    total_points: int = 0


class TimeSeriesData(SchemaBase):
    """A single univariate series handed to a forecaster.

    Callers are expected to supply equal-length, NaN-free timestamps and
    values of at least two points; forecasters re-check this at fit time.

    Attributes:
        timestamps: Observation timestamps, parallel to values.
        values: Observed values.
        metadata: Derived series description.
    """

    timestamps: list[datetime]
    values: list[float]
    metadata: TimeSeriesMetadata = Field(default_factory=TimeSeriesMetadata)

    @classmethod
    def from_points(
        cls,
        timestamps: list[datetime],
        values: list[float],
        has_gaps: bool = False,
    ) -> TimeSeriesData:
        """Build a series and derive its metadata.

        Args:
            timestamps: Observation timestamps.
            values: Observed values (missing values already handled).
            has_gaps: Set by the data-preparation step when it dropped rows.

        Returns:
            TimeSeriesData with frequency, gap flag and point count filled in.
        """
        frequency = detect_frequency(timestamps)

        if not has_gaps and frequency != "irregular":
            intervals = _intervals_in_days(timestamps)
            has_gaps = bool(np.any(intervals > GAP_FACTOR * FREQUENCY_STEP_DAYS[frequency]))

        return cls(
            timestamps=list(timestamps),
            values=list(values),
            metadata=TimeSeriesMetadata(
                frequency=frequency,
                has_gaps=has_gaps,
                total_points=len(timestamps),
            ),
        )


# =============================================================================
# Configuration
# =============================================================================


class ForecastParameters(SchemaBase):
    """Per-method options. Each method reads only its own keys.

    Attributes:
        window_size: Moving average window (default from settings).
        alpha: Level smoothing factor for exponential smoothing (required there).
        beta: Trend smoothing factor; its presence selects Holt's method.
        polynomial_degree: Linear trend degree. Only 1 is computed.
    """

    window_size: int | None = None
    alpha: float | None = None
    beta: float | None = None
    polynomial_degree: int | None = None


class ForecastConfig(SchemaBase):
    """Configuration of one forecasting run.

    Attributes:
        method: Strategy name; must match the forecaster it is given to.
        parameters: Method options.
        forecast_horizon: Number of future periods to forecast (> 0).
        train_test_split: Share of points used for training in hold-out
            evaluation, in [0, 1].
        confidence_level: Interval confidence level, in [0, 1].
    """

    method: ForecastMethod
    parameters: ForecastParameters = Field(default_factory=ForecastParameters)
    forecast_horizon: int
    train_test_split: float = 0.8
    confidence_level: float = 0.95

    def config_hash(self) -> str:
        """Generate deterministic hash of configuration.

        Returns:
            16-character hex string hash of config JSON.
        """
        config_json = self.model_dump_json(by_alias=True)
        return hashlib.sha256(config_json.encode()).hexdigest()[:16]


# =============================================================================
# Results
# =============================================================================


class ConfidenceIntervals(SchemaBase):
    """Lower and upper interval bounds, one per forecast step."""

    lower: list[float]
    upper: list[float]


class ForecastMetrics(SchemaBase):
    """Accuracy metrics over the in-sample (actual, fitted) alignment.

    Undefined metrics (MAPE with all-zero actuals) are stored as None so
    the JSON wire form never carries NaN.
    """

    mae: float
    rmse: float
    mape: float | None = None
    r2: float | None = None

    @field_validator("mape", "r2", mode="before")
    @classmethod
    def nan_to_none(cls, v: Any) -> Any:  # noqa: ANN401
        """Map NaN to None."""
        if isinstance(v, float) and math.isnan(v):
            return None
        return v


class ForecastTimestamps(SchemaBase):
    """Timestamps of the historical points and of each forecast step."""

    historical: list[datetime]
    forecast: list[datetime]


class ForecastResult(SchemaBase):
    """Complete output of one predict call.

    Attributes:
        method: Strategy that produced the result.
        fitted_values: In-sample estimates (N - window_size + 1 of them for
            moving average, N otherwise).
        predictions: Point forecasts, one per horizon step.
        confidence_intervals: Interval bounds around predictions.
        metrics: In-sample accuracy metrics.
        timestamps: Historical and forecast timestamps.
    """

    method: ForecastMethod
    fitted_values: list[float]
    predictions: list[float]
    confidence_intervals: ConfidenceIntervals
    metrics: ForecastMetrics
    timestamps: ForecastTimestamps

    @model_validator(mode="after")
    def validate_horizon_lengths(self) -> ForecastResult:
        """Predictions, bounds and forecast timestamps must align."""
        horizon = len(self.predictions)
        lengths = {
            "lower": len(self.confidence_intervals.lower),
            "upper": len(self.confidence_intervals.upper),
            "forecast_timestamps": len(self.timestamps.forecast),
        }
        mismatched = {name: n for name, n in lengths.items() if n != horizon}
        if mismatched:
            raise ValueError(f"Expected {horizon} entries, got {mismatched}")
        return self

    @property
    def horizon(self) -> int:
        """Number of forecast steps."""
        return len(self.predictions)


class ForecastModel(SchemaBase):
    """Snapshot of a trained run for persistence and export.

    Attributes:
        config: Configuration the run used.
        result: Forecast produced by the run.
        trained: Always True for snapshots built after predict.
        training_data: Series the forecaster was fitted on.
        created_at: Creation time (ISO-8601 on the wire).
    """

    config: ForecastConfig
    result: ForecastResult
    trained: bool = True
    training_data: TimeSeriesData
    created_at: datetime = Field(default_factory=lambda: datetime.now(UTC))

    def to_json(self, indent: int | None = None) -> str:
        """Serialize to the camelCase JSON wire form."""
        return self.model_dump_json(by_alias=True, indent=indent)

    @classmethod
    def from_json(cls, payload: str | bytes) -> ForecastModel:
        """Parse the JSON wire form.

        Raises:
            pydantic.ValidationError: If the payload is malformed.
        """
        return cls.model_validate_json(payload)
