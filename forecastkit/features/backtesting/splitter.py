"""Hold-out splitter for out-of-sample evaluation.

CRITICAL: Respects temporal order - the train part is always a prefix and
the test part the remaining suffix, so no future data reaches training.

    N = 10, train_test_split = 0.8:  [0..8) train, [8..10) test
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Any

import numpy as np

from forecastkit.core.exceptions import ConfigurationError
from forecastkit.features.forecasting.schemas import TimeSeriesData, TimeSeriesMetadata

SPLIT_EPSILON = 1e-9


@dataclass
class HoldoutSplit:
    """A single train/test split.

    Attributes:
        train: Training prefix as its own series.
        test: Held-out suffix as its own series.
        train_indices: Positions of the training points in the full series.
        test_indices: Positions of the held-out points in the full series.
    """

    train: TimeSeriesData
    test: TimeSeriesData
    train_indices: np.ndarray[Any, np.dtype[np.intp]]
    test_indices: np.ndarray[Any, np.dtype[np.intp]]


def _subseries(data: TimeSeriesData, start: int, stop: int) -> TimeSeriesData:
    return TimeSeriesData(
        timestamps=data.timestamps[start:stop],
        values=data.values[start:stop],
        metadata=TimeSeriesMetadata(
            frequency=data.metadata.frequency,
            has_gaps=data.metadata.has_gaps,
            total_points=stop - start,
        ),
    )


class HoldoutSplitter:
    """Split a series into a training prefix and a test suffix.

    Attributes:
        train_test_split: Share of points used for training, in [0, 1].
        min_train_size: Minimum number of training points.
    """

    def __init__(self, train_test_split: float, min_train_size: int = 2) -> None:
        """Initialize the splitter.

        Args:
            train_test_split: Share of points used for training.
            min_train_size: Minimum number of training points.

        Raises:
            ConfigurationError: If train_test_split is outside [0, 1].
        """
        if not 0 <= train_test_split <= 1:
            raise ConfigurationError(
                "Train/test split must be between 0 and 1",
                details={"train_test_split": train_test_split},
            )
        self.train_test_split = train_test_split
        self.min_train_size = min_train_size

    def train_size(self, n_samples: int) -> int:
        """Number of training points for a series of n_samples.

        The product is nudged by SPLIT_EPSILON before flooring so that
        100 * 0.29 gives 29, not 28.
        """
        return math.floor(n_samples * self.train_test_split + SPLIT_EPSILON)

    def split(self, data: TimeSeriesData) -> HoldoutSplit:
        """Split the series.

        Args:
            data: Full series.

        Returns:
            HoldoutSplit with train prefix and test suffix.

        Raises:
            ConfigurationError: If the split leaves fewer than min_train_size
                training points or no test points.
        """
        n_samples = len(data.values)
        train_size = self.train_size(n_samples)
        test_size = n_samples - train_size

        if train_size < self.min_train_size:
            raise ConfigurationError(
                f"Need at least {self.min_train_size} training points, got {train_size} "
                f"(n={n_samples}, train_test_split={self.train_test_split})",
                details={"train_size": train_size, "min_train_size": self.min_train_size},
            )
        if test_size < 1:
            raise ConfigurationError(
                f"train_test_split={self.train_test_split} leaves no test points "
                f"(n={n_samples})",
                details={"train_size": train_size, "test_size": test_size},
            )

        return HoldoutSplit(
            train=_subseries(data, 0, train_size),
            test=_subseries(data, train_size, n_samples),
            train_indices=np.arange(0, train_size),
            test_indices=np.arange(train_size, n_samples),
        )
