"""Example: Fitting all three forecasting strategies on one series.

Fits moving average, exponential smoothing (simple and Holt) and linear
trend on the same noisy trend, then prints forecasts, interval bounds and
in-sample metrics side by side.

Usage:
    python examples/models/compare_methods.py
"""

from datetime import datetime, timedelta

import numpy as np

from forecastkit.core.logging import configure_logging
from forecastkit.features.forecasting.export import format_metrics, result_to_csv
from forecastkit.features.forecasting.models import model_factory
from forecastkit.features.forecasting.schemas import (
    ForecastConfig,
    ForecastParameters,
    TimeSeriesData,
)


def main():
    configure_logging()

    # 1. Create sample data: upward trend with noise
    rng = np.random.default_rng(42)
    n = 30
    values = 10 + 0.5 * np.arange(n) + rng.normal(0, 1.5, n)
    start = datetime(2024, 1, 1)
    timestamps = [start + timedelta(days=i) for i in range(n)]

    data = TimeSeriesData.from_points(timestamps, values.round(2).tolist())
    print(f"Training data: {data.metadata.total_points} observations")
    print(f"Detected frequency: {data.metadata.frequency}")

    # 2. One config per strategy
    configs = {
        "moving average (w=5)": ForecastConfig(
            method="moving-average",
            parameters=ForecastParameters(window_size=5),
            forecast_horizon=7,
        ),
        "simple smoothing": ForecastConfig(
            method="exponential-smoothing",
            parameters=ForecastParameters(alpha=0.3),
            forecast_horizon=7,
        ),
        "holt smoothing": ForecastConfig(
            method="exponential-smoothing",
            parameters=ForecastParameters(alpha=0.3, beta=0.1),
            forecast_horizon=7,
        ),
        "linear trend": ForecastConfig(
            method="linear-trend",
            forecast_horizon=7,
            confidence_level=0.9,
        ),
    }

    # 3. Fit and predict each
    for label, config in configs.items():
        forecaster = model_factory(config).fit(data, config)
        result = forecaster.predict(config.forecast_horizon)

        print(f"\n--- {label} ---")
        for ts, pred, lo, hi in zip(
            result.timestamps.forecast,
            result.predictions,
            result.confidence_intervals.lower,
            result.confidence_intervals.upper,
            strict=True,
        ):
            print(f"  {ts:%Y-%m-%d}: {pred:7.2f}  [{lo:7.2f}, {hi:7.2f}]")
        print(f"  Metrics: {format_metrics(result.metrics)}")

    # 4. CSV export of the last result
    print("\nCSV export (first 3 lines):")
    print("\n".join(result_to_csv(result, data).splitlines()[:3]))


if __name__ == "__main__":
    main()
