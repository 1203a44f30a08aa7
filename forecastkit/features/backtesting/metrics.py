"""Metrics calculator for forecast evaluation.

Supported Metrics:
- MAE: Mean Absolute Error
- RMSE: Root Mean Squared Error
- MAPE: Mean Absolute Percentage Error (zero actuals excluded)
- R2: Coefficient of determination
- Coverage: Share of actuals falling inside a prediction interval

Metrics do not validate value ranges; degenerate input propagates as
nan/inf. Only length mismatches are rejected.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

import numpy as np


@dataclass
class MetricResult:
    """Result of a single metric calculation.

    Attributes:
        name: Name of the metric.
        value: Calculated value (may be nan for edge cases).
        n_samples: Number of samples used in calculation.
        warnings: List of warnings generated during calculation.
    """

    name: str
    value: float
    n_samples: int
    warnings: list[str] = field(default_factory=lambda: [])


def _check_lengths(
    actuals: np.ndarray[Any, np.dtype[np.floating[Any]]],
    predictions: np.ndarray[Any, np.dtype[np.floating[Any]]],
) -> None:
    if len(actuals) != len(predictions):
        raise ValueError(
            f"Length mismatch: actuals={len(actuals)}, predictions={len(predictions)}"
        )


class MetricsCalculator:
    """Calculate forecasting accuracy metrics.

    Shared by every forecasting strategy for in-sample diagnostics and by
    the hold-out evaluation for out-of-sample scores.
    """

    @staticmethod
    def mae(
        actuals: np.ndarray[Any, np.dtype[np.floating[Any]]],
        predictions: np.ndarray[Any, np.dtype[np.floating[Any]]],
    ) -> MetricResult:
        """Mean Absolute Error.

        Formula: mean(|actual - predicted|)

        Args:
            actuals: Ground truth values.
            predictions: Predicted values.

        Returns:
            MetricResult with MAE value.

        Raises:
            ValueError: If arrays have different lengths.
        """
        if len(actuals) == 0:
            return MetricResult(name="mae", value=np.nan, n_samples=0, warnings=["Empty array"])
        _check_lengths(actuals, predictions)

        mae_value = float(np.mean(np.abs(actuals - predictions)))
        return MetricResult(name="mae", value=mae_value, n_samples=len(actuals))

    @staticmethod
    def rmse(
        actuals: np.ndarray[Any, np.dtype[np.floating[Any]]],
        predictions: np.ndarray[Any, np.dtype[np.floating[Any]]],
    ) -> MetricResult:
        """Root Mean Squared Error.

        Formula: sqrt(mean((actual - predicted)^2))

        Args:
            actuals: Ground truth values.
            predictions: Predicted values.

        Returns:
            MetricResult with RMSE value.

        Raises:
            ValueError: If arrays have different lengths.
        """
        if len(actuals) == 0:
            return MetricResult(name="rmse", value=np.nan, n_samples=0, warnings=["Empty array"])
        _check_lengths(actuals, predictions)

        rmse_value = float(np.sqrt(np.mean((actuals - predictions) ** 2)))
        return MetricResult(name="rmse", value=rmse_value, n_samples=len(actuals))

    @staticmethod
    def mape(
        actuals: np.ndarray[Any, np.dtype[np.floating[Any]]],
        predictions: np.ndarray[Any, np.dtype[np.floating[Any]]],
    ) -> MetricResult:
        """Mean Absolute Percentage Error.

        Formula: 100/n * sum(|A - F| / |A|) over points with A != 0

        Points whose actual is zero are excluded rather than producing inf.
        When every actual is zero the metric is undefined and nan is returned.

        Args:
            actuals: Ground truth values.
            predictions: Predicted values.

        Returns:
            MetricResult with MAPE value (percent); n_samples counts the
            points actually used.

        Raises:
            ValueError: If arrays have different lengths.
        """
        warnings: list[str] = []

        if len(actuals) == 0:
            return MetricResult(name="mape", value=np.nan, n_samples=0, warnings=["Empty array"])
        _check_lengths(actuals, predictions)

        mask = actuals != 0
        n_used = int(np.sum(mask))
        n_zeros = len(actuals) - n_used
        if n_zeros > 0:
            warnings.append(f"{n_zeros} samples with zero actuals excluded")

        if n_used == 0:
            warnings.append("All actuals are zero; MAPE undefined")
            return MetricResult(name="mape", value=np.nan, n_samples=0, warnings=warnings)

        ratios = np.abs(actuals[mask] - predictions[mask]) / np.abs(actuals[mask])
        mape_value = float(100.0 * np.mean(ratios))

        return MetricResult(name="mape", value=mape_value, n_samples=n_used, warnings=warnings)

    @staticmethod
    def r2(
        actuals: np.ndarray[Any, np.dtype[np.floating[Any]]],
        predictions: np.ndarray[Any, np.dtype[np.floating[Any]]],
    ) -> MetricResult:
        """Coefficient of determination.

        Formula: 1 - RSS / TSS

        CRITICAL: A constant series (TSS == 0) scores 1 by convention.

        Args:
            actuals: Ground truth values.
            predictions: Predicted values.

        Returns:
            MetricResult with R2 value (may be negative for poor fits).

        Raises:
            ValueError: If arrays have different lengths.
        """
        warnings: list[str] = []

        if len(actuals) == 0:
            return MetricResult(name="r2", value=np.nan, n_samples=0, warnings=["Empty array"])
        _check_lengths(actuals, predictions)

        total_ss = float(np.sum((actuals - np.mean(actuals)) ** 2))
        residual_ss = float(np.sum((actuals - predictions) ** 2))

        if total_ss == 0:
            warnings.append("Constant actuals; R2 defined as 1")
            return MetricResult(name="r2", value=1.0, n_samples=len(actuals), warnings=warnings)

        return MetricResult(
            name="r2", value=1.0 - residual_ss / total_ss, n_samples=len(actuals)
        )

    @staticmethod
    def coverage(
        actuals: np.ndarray[Any, np.dtype[np.floating[Any]]],
        lower: np.ndarray[Any, np.dtype[np.floating[Any]]],
        upper: np.ndarray[Any, np.dtype[np.floating[Any]]],
    ) -> MetricResult:
        """Share of actuals inside [lower, upper], in percent.

        Args:
            actuals: Ground truth values.
            lower: Lower interval bounds.
            upper: Upper interval bounds.

        Returns:
            MetricResult with coverage value (0-100 scale).

        Raises:
            ValueError: If arrays have different lengths.
        """
        if len(actuals) == 0:
            return MetricResult(
                name="coverage", value=np.nan, n_samples=0, warnings=["Empty array"]
            )
        _check_lengths(actuals, lower)
        _check_lengths(actuals, upper)

        inside = (actuals >= lower) & (actuals <= upper)
        return MetricResult(
            name="coverage", value=float(100.0 * np.mean(inside)), n_samples=len(actuals)
        )

    def calculate_all(
        self,
        actuals: np.ndarray[Any, np.dtype[np.floating[Any]]],
        predictions: np.ndarray[Any, np.dtype[np.floating[Any]]],
    ) -> dict[str, float]:
        """Calculate all point metrics for one (actual, predicted) alignment.

        Args:
            actuals: Ground truth values.
            predictions: Predicted values.

        Returns:
            Dictionary with mae, rmse, mape and r2.
        """
        return {
            "mae": self.mae(actuals, predictions).value,
            "rmse": self.rmse(actuals, predictions).value,
            "mape": self.mape(actuals, predictions).value,
            "r2": self.r2(actuals, predictions).value,
        }
