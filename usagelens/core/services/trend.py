"""
Trend Analyzer - Linear regression and direction classification.
"""

from typing import Sequence

import numpy as np

from usagelens.core.domain.errors import DegenerateInputError, InsufficientDataError
from usagelens.core.domain.result import TrendClassification, TrendResult
from usagelens.core.domain.series import AggregatedPoint
from usagelens.core.services import stats

MIN_POINTS = 2

# In the caller's y units per x unit (consumption per day via trend_points)
INCREASING_THRESHOLD = 0.01
DECREASING_THRESHOLD = -0.01

SECONDS_PER_DAY = 86400.0


def classify(slope: float) -> TrendClassification:
    if slope > INCREASING_THRESHOLD:
        return TrendClassification.INCREASING
    if slope < DECREASING_THRESHOLD:
        return TrendClassification.DECREASING
    return TrendClassification.STABLE


def fit_trend(points: Sequence[tuple[float, float]]) -> TrendResult:
    """
    Fit y = slope * x + intercept by ordinary least squares.

    Args:
        points: (x, y) pairs; x is usually days since the first point

    Returns:
        TrendResult with the fit, its r_squared and classification

    Raises:
        InsufficientDataError: fewer than two points
        DegenerateInputError: every x is the same value
    """
    if len(points) < MIN_POINTS:
        raise InsufficientDataError(required=MIN_POINTS, actual=len(points), method="fit_trend")

    xs = np.array([float(x) for x, _ in points])
    ys = np.array([float(y) for _, y in points])

    if np.ptp(xs) == 0:
        raise DegenerateInputError(
            f"All {len(points)} x values equal {xs[0]}; slope is undefined",
            x_value=float(xs[0]),
            count=len(points),
        )

    if np.ptp(ys) == 0:
        # Flat series: trivially perfect fit
        return TrendResult(
            slope=0.0,
            intercept=float(ys[0]),
            r_squared=1.0,
            classification=TrendClassification.STABLE,
        )

    slope, intercept = stats.least_squares(xs, ys)
    return TrendResult(
        slope=slope,
        intercept=intercept,
        r_squared=stats.r_squared(xs, ys, slope, intercept),
        classification=classify(slope),
    )


def trend_points(points: Sequence[AggregatedPoint]) -> list[tuple[float, float]]:
    """Map aggregated points to (days since first bucket, aggregate)."""
    if not points:
        return []
    origin = points[0].bucket_start
    return [
        ((p.bucket_start - origin).total_seconds() / SECONDS_PER_DAY, p.aggregate)
        for p in points
    ]
