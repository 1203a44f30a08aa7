"""Example: Hold-out evaluation of a forecasting configuration.

Splits the series by train_test_split, fits on the prefix and scores the
forecast of the held-out suffix.

Usage:
    python examples/backtest/holdout_demo.py
"""

from datetime import datetime, timedelta

import numpy as np

from forecastkit.core.logging import configure_logging
from forecastkit.features.backtesting.service import BacktestService
from forecastkit.features.forecasting.schemas import (
    ForecastConfig,
    ForecastParameters,
    TimeSeriesData,
)


def main():
    configure_logging()

    rng = np.random.default_rng(7)
    n = 40
    values = 100 + 2.0 * np.arange(n) + rng.normal(0, 4, n)
    timestamps = [datetime(2024, 1, 1) + timedelta(weeks=i) for i in range(n)]
    data = TimeSeriesData.from_points(timestamps, values.tolist())

    service = BacktestService()

    print("=" * 70)
    print(f"HOLD-OUT EVALUATION ({data.metadata.frequency}, n={n}, split=0.8)")
    print("=" * 70)

    for config in [
        ForecastConfig(
            method="moving-average",
            parameters=ForecastParameters(window_size=4),
            forecast_horizon=8,
        ),
        ForecastConfig(
            method="exponential-smoothing",
            parameters=ForecastParameters(alpha=0.4, beta=0.2),
            forecast_horizon=8,
        ),
        ForecastConfig(method="linear-trend", forecast_horizon=8),
    ]:
        result = service.evaluate(data, config)
        print(f"\n{result.method}: train={result.train_size}, test={result.test_size}")
        print(f"  MAE={result.metrics.mae:.3f}  RMSE={result.metrics.rmse:.3f}")
        print(f"  Interval coverage: {result.coverage:.1f}%")


if __name__ == "__main__":
    main()
