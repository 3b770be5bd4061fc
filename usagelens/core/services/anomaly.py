"""
Anomaly Analyzer - Flags a latest reading that escapes its reference window.

The reference window is the trailing `window_size` points right before the
latest one. It is rebuilt from the input on every call.
"""

from datetime import datetime
from typing import Sequence

from usagelens.core.domain.errors import InsufficientDataError
from usagelens.core.domain.result import AnomalyDirection, AnomalyResult
from usagelens.core.domain.series import AggregatedPoint
from usagelens.core.services import stats

DEFAULT_WINDOW_SIZE = 5
DEFAULT_SIGMA_MULTIPLIER = 2.0


def detect_anomaly(
    points: Sequence[tuple[datetime, float]],
    window_size: int = DEFAULT_WINDOW_SIZE,
    sigma_multiplier: float = DEFAULT_SIGMA_MULTIPLIER,
    direction: AnomalyDirection = AnomalyDirection.UPPER,
) -> AnomalyResult:
    """
    Check the latest point against mean + k * stddev of the reference window.

    Standard deviation uses the n-1 divisor. With a constant window the
    stddev is 0 and the limit equals the mean, so any rise is flagged.

    Args:
        points: (timestamp, value) pairs, oldest first
        window_size: number of reference points preceding the latest one
        sigma_multiplier: k in mean + k * stddev
        direction: UPPER flags spikes only, BOTH also flags drops

    Raises:
        ValueError: window_size below 2
        InsufficientDataError: fewer than window_size + 1 points
    """
    if window_size < 2:
        raise ValueError(f"window_size must be at least 2, got {window_size}")

    required = window_size + 1
    if len(points) < required:
        raise InsufficientDataError(required=required, actual=len(points), method="detect_anomaly")

    latest_ts, latest_value = points[-1]
    latest_value = float(latest_value)
    reference = [float(v) for _, v in points[-required:-1]]

    mu = stats.mean(reference)
    sigma = stats.std_dev(reference, ddof=1)
    limit = mu + sigma_multiplier * sigma

    is_anomaly = latest_value > limit
    if AnomalyDirection(direction) == AnomalyDirection.BOTH:
        is_anomaly = is_anomaly or latest_value < mu - sigma_multiplier * sigma

    return AnomalyResult(
        reference_mean=mu,
        reference_std_dev=sigma,
        limit=limit,
        latest_value=latest_value,
        is_anomaly=is_anomaly,
        latest_timestamp=latest_ts,
    )


def anomaly_points(points: Sequence[AggregatedPoint]) -> list[tuple[datetime, float]]:
    """Map aggregated points to (bucket start, aggregate)."""
    return [(p.bucket_start, p.aggregate) for p in points]
