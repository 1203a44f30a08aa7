"""Tests for the forecasting service."""

import pytest

from forecastkit.core.config import Settings
from forecastkit.core.exceptions import ConfigurationError, ValidationError
from forecastkit.core.logging import method_ctx, run_id_ctx
from forecastkit.features.forecasting.schemas import (
    ForecastConfig,
    ForecastModel,
    TimeSeriesData,
)
from forecastkit.features.forecasting.service import ForecastingService


@pytest.fixture
def service(tmp_path) -> ForecastingService:
    """Service writing artifacts under a temporary directory."""
    svc = ForecastingService()
    svc.settings = Settings(forecast_artifacts_dir=str(tmp_path / "artifacts"))
    return svc


class TestRunForecast:
    """Tests for ForecastingService.run_forecast."""

    def test_returns_trained_snapshot(self, service, linear_series, sample_linear_config):
        """Test the snapshot holds config, data and a horizon-length result."""
        model = service.run_forecast(linear_series, sample_linear_config)

        assert isinstance(model, ForecastModel)
        assert model.trained is True
        assert model.config == sample_linear_config
        assert model.training_data == linear_series
        assert model.result.predictions == pytest.approx([6.0, 7.0])
        assert model.created_at.tzinfo is not None

    def test_horizon_comes_from_config(self, service, step_series, sample_holt_config):
        """Test the forecast has config.forecast_horizon steps."""
        model = service.run_forecast(step_series, sample_holt_config)

        assert model.result.horizon == sample_holt_config.forecast_horizon

    def test_validation_error_propagates(self, service, sample_linear_config):
        """Test malformed data is reported, not replaced by a fallback."""
        data = TimeSeriesData(timestamps=[], values=[])

        with pytest.raises(ValidationError):
            service.run_forecast(data, sample_linear_config)

    def test_configuration_error_propagates(self, service, step_series):
        """Test invalid parameters are reported."""
        config = ForecastConfig(method="exponential-smoothing", forecast_horizon=2)

        with pytest.raises(ConfigurationError, match="Alpha is required"):
            service.run_forecast(step_series, config)

    def test_run_id_is_reset(self, service, linear_series, sample_linear_config):
        """Test the run id context does not leak after the call."""
        service.run_forecast(linear_series, sample_linear_config)

        assert run_id_ctx.get() is None
        assert method_ctx.get() is None

    def test_run_context_is_reset_after_failure(self, service, sample_linear_config):
        """Test a failed run does not leave its context bound."""
        with pytest.raises(ValidationError):
            service.run_forecast(TimeSeriesData(timestamps=[], values=[]), sample_linear_config)

        assert run_id_ctx.get() is None
        assert method_ctx.get() is None


class TestRunAndSave:
    """Tests for persistence through the service."""

    def test_saves_under_artifacts_dir(
        self, service, tmp_path, linear_series, sample_linear_config
    ):
        """Test the snapshot file lands in the configured directory."""
        model, path = service.run_and_save(linear_series, sample_linear_config)

        assert path.parent == tmp_path / "artifacts"
        assert path.name.startswith("forecast_")
        assert path.suffix == ".json"
        assert service.load(path) == model

    def test_load_outside_artifacts_dir_rejected(self, service, tmp_path):
        """Test load refuses paths outside the artifacts directory."""
        (tmp_path / "artifacts").mkdir()
        stray = tmp_path / "stray.json"
        stray.write_text("{}", encoding="utf-8")

        with pytest.raises(ValueError, match="outside the allowed artifacts directory"):
            service.load(stray)
