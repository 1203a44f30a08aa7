"""Critical-value approximations used to size prediction intervals.

Values come from small fixed tables rather than inverse distribution
functions:
- z_score: four common confidence levels, 1.96 otherwise.
- t_score: Student's t at df in {1, 2, 3, 4, 5, 10, 20, 30}, nearest-neighbour
  lookup on both df and level; df > 30 falls back to z_score.

A df of 15 therefore snaps to the df=10 row rather than an interpolated
value. The lookup is kept as-is so interval widths stay reproducible.
"""

from __future__ import annotations

# Floor on interval half-width. A tunable constant, not a derived value:
# it only stops degenerate residuals from producing a zero-width band.
MIN_INTERVAL_WIDTH = 0.1

# (minimum level, z) in descending order of level
Z_SCORES: tuple[tuple[float, float], ...] = (
    (0.99, 2.576),
    (0.95, 1.96),
    (0.90, 1.645),
    (0.80, 1.282),
)
DEFAULT_Z_SCORE = 1.96

T_TABLE: dict[int, dict[float, float]] = {
    1: {0.80: 3.078, 0.90: 6.314, 0.95: 12.706, 0.99: 63.657},
    2: {0.80: 1.886, 0.90: 2.920, 0.95: 4.303, 0.99: 9.925},
    3: {0.80: 1.638, 0.90: 2.353, 0.95: 3.182, 0.99: 5.841},
    4: {0.80: 1.533, 0.90: 2.132, 0.95: 2.776, 0.99: 4.604},
    5: {0.80: 1.476, 0.90: 2.015, 0.95: 2.571, 0.99: 4.032},
    10: {0.80: 1.372, 0.90: 1.812, 0.95: 2.228, 0.99: 3.169},
    20: {0.80: 1.325, 0.90: 1.725, 0.95: 2.086, 0.99: 2.845},
    30: {0.80: 1.310, 0.90: 1.697, 0.95: 2.042, 0.99: 2.750},
}
MAX_TABLE_DF = 30


def z_score(confidence_level: float) -> float:
    """Approximate two-sided normal critical value.

    Args:
        confidence_level: Confidence level in [0, 1].

    Returns:
        z for the highest tabulated level not above confidence_level,
        or 1.96 when confidence_level is below 0.80.
    """
    for level, z in Z_SCORES:
        if confidence_level >= level:
            return z
    return DEFAULT_Z_SCORE


def _nearest(keys: list[float] | list[int], target: float) -> float:
    # Ties go to the earlier key
    closest = keys[0]
    for key in keys:
        if abs(key - target) < abs(closest - target):
            closest = key
    return closest


def t_score(confidence_level: float, degrees_of_freedom: int) -> float:
    """Approximate two-sided Student's t critical value.

    Args:
        confidence_level: Confidence level in [0, 1].
        degrees_of_freedom: Residual degrees of freedom (may be <= 0 for
            tiny samples; those snap to the df=1 row).

    Returns:
        Tabulated t for the nearest df and nearest level.
    """
    if degrees_of_freedom > MAX_TABLE_DF:
        return z_score(confidence_level)

    df = int(_nearest(sorted(T_TABLE), degrees_of_freedom))
    row = T_TABLE[df]
    level = _nearest(list(row), confidence_level)
    return row[level]
