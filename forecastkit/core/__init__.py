"""Core infrastructure: config, logging, exceptions."""

from forecastkit.core.config import Settings, get_settings
from forecastkit.core.exceptions import (
    ConfigurationError,
    ForecastKitError,
    UntrainedModelError,
    ValidationError,
)
from forecastkit.core.logging import (
    bind_run,
    configure_logging,
    get_logger,
    method_ctx,
    run_id_ctx,
)

__all__ = [
    "ConfigurationError",
    "ForecastKitError",
    "Settings",
    "UntrainedModelError",
    "ValidationError",
    "bind_run",
    "configure_logging",
    "get_logger",
    "get_settings",
    "method_ctx",
    "run_id_ctx",
]
