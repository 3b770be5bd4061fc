"""
Statistics primitives shared by the trend and anomaly analyzers.
"""

from typing import Sequence

import numpy as np

from usagelens.core.domain.errors import DegenerateInputError


def mean(values: Sequence[float]) -> float:
    """Arithmetic mean of a non-empty sequence."""
    arr = np.asarray(values, dtype=float)
    if np.ptp(arr) == 0:
        # sum/n can land one ulp off for a constant sequence
        return float(arr[0])
    return float(arr.sum() / arr.size)


def variance(values: Sequence[float], ddof: int = 1) -> float:
    """
    Variance with a configurable divisor (n - ddof).

    ddof=1 gives the unbiased sample variance used for small reference
    windows. A constant sequence has variance exactly 0.
    """
    arr = np.asarray(values, dtype=float)
    if arr.size - ddof <= 0:
        raise ValueError(f"variance needs more than {ddof} values, got {arr.size}")
    if np.ptp(arr) == 0:
        return 0.0
    deviations = arr - mean(arr)
    return float(np.sum(deviations * deviations) / (arr.size - ddof))


def std_dev(values: Sequence[float], ddof: int = 1) -> float:
    """Standard deviation, the square root of variance()."""
    return float(np.sqrt(variance(values, ddof=ddof)))


def least_squares(xs: Sequence[float], ys: Sequence[float]) -> tuple[float, float]:
    """
    Closed-form OLS over n, Σx, Σy, Σxy, Σx².

    Returns:
        (slope, intercept)

    Raises:
        DegenerateInputError: if x has no variance
    """
    x = np.asarray(xs, dtype=float)
    y = np.asarray(ys, dtype=float)
    n = x.size

    if n == 0 or np.ptp(x) == 0:
        raise DegenerateInputError(f"All {n} x values are identical; slope is undefined", count=n)

    # Centering x keeps n*Σx² - (Σx)² from cancelling for large x (epoch seconds)
    x_mean = mean(x)
    xc = x - x_mean

    sum_x = float(xc.sum())
    sum_y = float(y.sum())
    sum_xy = float(np.sum(xc * y))
    sum_x2 = float(np.sum(xc * xc))

    denom = n * sum_x2 - sum_x * sum_x
    if denom <= 0:
        raise DegenerateInputError(f"x values have no usable variance across {n} points", count=n)

    slope = (n * sum_xy - sum_x * sum_y) / denom
    intercept = (sum_y - slope * sum_x) / n - slope * x_mean
    return slope, intercept


def r_squared(xs: Sequence[float], ys: Sequence[float], slope: float, intercept: float) -> float:
    """Coefficient of determination, clamped to [0, 1]."""
    x = np.asarray(xs, dtype=float)
    y = np.asarray(ys, dtype=float)

    residuals = y - (slope * x + intercept)
    ss_res = float(np.sum(residuals * residuals))
    centered = y - mean(y)
    ss_tot = float(np.sum(centered * centered))
    if ss_tot == 0:
        return 1.0
    return min(1.0, max(0.0, 1.0 - ss_res / ss_tot))
