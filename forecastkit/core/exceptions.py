"""Exception taxonomy for the forecasting engine.

Every error is raised synchronously, before the failing call mutates any
forecaster state, so callers can surface ``message`` to the user directly.
"""

from typing import Any


class ForecastKitError(Exception):
    """Base exception for forecastkit errors.

    All package-specific exceptions inherit from this class and carry a
    machine-readable code plus optional structured details.
    """

    def __init__(
        self,
        message: str,
        code: str = "INTERNAL_ERROR",
        details: dict[str, Any] | None = None,
    ) -> None:
        """Initialize the error.

        Args:
            message: Human-readable error message.
            code: Machine-readable error code.
            details: Additional error context.
        """
        super().__init__(message)
        self.message = message
        self.code = code
        self.details = details or {}

    @property
    def title(self) -> str:
        """Short summary of the problem type, derived from the code."""
        return self.code.replace("_", " ").title()


class ValidationError(ForecastKitError):
    """Malformed time series input.

    Raised when timestamps/values are missing, misaligned, shorter than two
    points, or contain NaN.
    """

    def __init__(
        self,
        message: str = "Invalid time series data",
        details: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(message=message, code="VALIDATION_ERROR", details=details)


class ConfigurationError(ForecastKitError):
    """Out-of-range or inconsistent forecasting parameters."""

    def __init__(
        self,
        message: str = "Invalid forecast configuration",
        details: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(message=message, code="CONFIGURATION_ERROR", details=details)


class UntrainedModelError(ForecastKitError):
    """Prediction requested from a forecaster that was never fitted."""

    def __init__(
        self,
        message: str = "Model must be trained before making predictions",
        details: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(message=message, code="UNTRAINED_MODEL", details=details)
