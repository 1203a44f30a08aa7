"""Application configuration via Pydantic Settings v2."""

from functools import lru_cache
from typing import Literal

from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # Application
    app_name: str = "forecastkit"
    app_env: Literal["development", "testing", "staging", "production"] = "development"
    debug: bool = False

    # Logging
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = "INFO"
    log_format: Literal["json", "console"] = "json"

    # Forecasting
    forecast_default_window_size: int = 3
    forecast_min_interval_width: float = 0.1
    forecast_artifacts_dir: str = "./artifacts/forecasts"

    # Backtesting
    backtest_min_train_size: int = 2

    @field_validator("forecast_default_window_size", "backtest_min_train_size")
    @classmethod
    def validate_positive(cls, v: int) -> int:
        """Reject non-positive sizes.

        Args:
            v: Configured size.

        Returns:
            Validated size.

        Raises:
            ValueError: If the size is not positive.
        """
        if v < 1:
            raise ValueError(f"Size must be >= 1, got {v}")
        return v

    @field_validator("forecast_min_interval_width")
    @classmethod
    def validate_interval_width(cls, v: float) -> float:
        """Interval floor must be non-negative."""
        if v < 0:
            raise ValueError(f"forecast_min_interval_width must be >= 0, got {v}")
        return v

    @property
    def is_development(self) -> bool:
        """Check if running in development mode."""
        return self.app_env == "development"

    @property
    def is_testing(self) -> bool:
        """Check if running in testing mode."""
        return self.app_env == "testing"

    @property
    def is_production(self) -> bool:
        """Check if running in production mode."""
        return self.app_env == "production"


@lru_cache
def get_settings() -> Settings:
    """Get cached settings singleton."""
    return Settings()
