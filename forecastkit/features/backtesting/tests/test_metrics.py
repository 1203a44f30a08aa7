"""Tests for metrics calculator."""

import math

import numpy as np
import pytest

from forecastkit.features.backtesting.metrics import MetricsCalculator


class TestMAE:
    """Tests for Mean Absolute Error."""

    def test_known_values(self, sample_actuals, sample_predictions):
        """Test MAE = mean(|errors|)."""
        result = MetricsCalculator.mae(sample_actuals, sample_predictions)

        assert result.name == "mae"
        assert result.value == pytest.approx(2.5)
        assert result.n_samples == 4

    def test_perfect_forecast(self, sample_actuals):
        """Test MAE is 0 for exact predictions."""
        assert MetricsCalculator.mae(sample_actuals, sample_actuals).value == 0.0

    def test_empty_array_returns_nan(self):
        """Test empty input returns nan with a warning."""
        empty = np.array([], dtype=np.float64)
        result = MetricsCalculator.mae(empty, empty)

        assert math.isnan(result.value)
        assert result.warnings == ["Empty array"]

    def test_length_mismatch_raises(self, sample_actuals):
        """Test mismatched lengths raise ValueError."""
        with pytest.raises(ValueError, match="Length mismatch"):
            MetricsCalculator.mae(sample_actuals, np.array([1.0, 2.0]))


class TestRMSE:
    """Tests for Root Mean Squared Error."""

    def test_known_values(self, sample_actuals, sample_predictions):
        """Test RMSE = sqrt(mean(errors^2))."""
        result = MetricsCalculator.rmse(sample_actuals, sample_predictions)

        assert result.value == pytest.approx(math.sqrt((1 + 4 + 9 + 16) / 4))

    def test_rmse_not_below_mae(self, sample_actuals, sample_predictions):
        """Test RMSE >= MAE."""
        mae = MetricsCalculator.mae(sample_actuals, sample_predictions).value
        rmse = MetricsCalculator.rmse(sample_actuals, sample_predictions).value

        assert rmse >= mae


class TestMAPE:
    """Tests for Mean Absolute Percentage Error."""

    def test_known_values(self, sample_actuals, sample_predictions):
        """Test MAPE in percent."""
        result = MetricsCalculator.mape(sample_actuals, sample_predictions)

        expected = 100.0 * (1 / 10 + 2 / 20 + 3 / 30 + 4 / 40) / 4
        assert result.value == pytest.approx(expected)

    def test_zero_actuals_excluded(self):
        """Test points with zero actuals are skipped with a warning."""
        actuals = np.array([0.0, 10.0, 20.0])
        predictions = np.array([5.0, 11.0, 18.0])
        result = MetricsCalculator.mape(actuals, predictions)

        assert result.value == pytest.approx(100.0 * (0.1 + 0.1) / 2)
        assert result.n_samples == 2
        assert "1 samples with zero actuals excluded" in result.warnings

    def test_all_zero_actuals_is_undefined(self):
        """Test all-zero actuals give nan."""
        zeros = np.zeros(3)
        result = MetricsCalculator.mape(zeros, np.ones(3))

        assert math.isnan(result.value)
        assert result.n_samples == 0


class TestR2:
    """Tests for the coefficient of determination."""

    def test_perfect_fit(self, sample_actuals):
        """Test R2 is 1 for exact predictions."""
        assert MetricsCalculator.r2(sample_actuals, sample_actuals).value == pytest.approx(1.0)

    def test_mean_predictor_scores_zero(self, sample_actuals):
        """Test predicting the mean scores 0."""
        mean = np.full(4, sample_actuals.mean())

        assert MetricsCalculator.r2(sample_actuals, mean).value == pytest.approx(0.0)

    def test_poor_fit_is_negative(self, sample_actuals):
        """Test R2 can be negative."""
        assert MetricsCalculator.r2(sample_actuals, sample_actuals[::-1]).value < 0

    def test_constant_actuals_scores_one(self):
        """Test TSS == 0 is defined as 1."""
        actuals = np.full(3, 5.0)
        result = MetricsCalculator.r2(actuals, np.array([4.0, 5.0, 6.0]))

        assert result.value == 1.0
        assert result.warnings


class TestCoverage:
    """Tests for interval coverage."""

    def test_partial_coverage(self, sample_actuals):
        """Test percentage of actuals inside the bounds, inclusive."""
        lower = np.array([9.0, 20.0, 31.0, 30.0])
        upper = np.array([11.0, 25.0, 35.0, 39.0])
        result = MetricsCalculator.coverage(sample_actuals, lower, upper)

        assert result.value == pytest.approx(50.0)

    def test_length_mismatch_raises(self, sample_actuals):
        """Test bounds must align with actuals."""
        with pytest.raises(ValueError, match="Length mismatch"):
            MetricsCalculator.coverage(sample_actuals, sample_actuals, np.ones(2))


class TestCalculateAll:
    """Tests for calculate_all."""

    def test_returns_point_metrics(self, sample_actuals, sample_predictions):
        """Test all point metrics are present."""
        metrics = MetricsCalculator().calculate_all(sample_actuals, sample_predictions)

        assert set(metrics) == {"mae", "rmse", "mape", "r2"}
        assert metrics["mae"] == pytest.approx(2.5)
