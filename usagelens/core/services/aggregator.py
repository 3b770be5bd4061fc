"""
Aggregator - Reduces an ordered series of samples to calendar buckets.

Output size is bounded by the number of buckets the input spans. The pass
is linear with a single "current bucket" accumulator, so memory grows with
the number of buckets, never with the number of samples.
"""

import logging
from datetime import datetime, timedelta, timezone
from typing import Iterable, Sequence

import pandas as pd

from usagelens.core.domain.errors import InputOrderError
from usagelens.core.domain.series import (
    AggregatedPoint,
    AggregationMode,
    Resolution,
    Sample,
)

logger = logging.getLogger(__name__)


def _as_utc(ts: datetime) -> datetime:
    """Naive timestamps are taken to be UTC already."""
    if ts.tzinfo is None:
        return ts.replace(tzinfo=timezone.utc)
    return ts.astimezone(timezone.utc)


def truncate(ts: datetime, resolution: Resolution) -> datetime:
    """
    Truncate a timestamp to the start of its UTC calendar bucket.

    The result keeps the naive/aware flavour of the input.
    """
    if resolution == Resolution.RAW:
        return ts

    utc = _as_utc(ts)
    if resolution == Resolution.HOUR:
        start = utc.replace(minute=0, second=0, microsecond=0)
    elif resolution == Resolution.DAY:
        start = utc.replace(hour=0, minute=0, second=0, microsecond=0)
    elif resolution == Resolution.MONTH:
        start = utc.replace(day=1, hour=0, minute=0, second=0, microsecond=0)
    elif resolution == Resolution.YEAR:
        start = utc.replace(month=1, day=1, hour=0, minute=0, second=0, microsecond=0)
    else:
        raise ValueError(f"Unsupported resolution: {resolution}")

    if ts.tzinfo is None:
        return start.replace(tzinfo=None)
    return start


def bucket_bounds(ts: datetime, resolution: Resolution) -> tuple[datetime, datetime]:
    """Half-open [start, end) bucket containing ts."""
    if resolution == Resolution.RAW:
        raise ValueError("Raw resolution has no buckets")

    start = truncate(ts, resolution)
    if resolution == Resolution.HOUR:
        end = start + timedelta(hours=1)
    elif resolution == Resolution.DAY:
        end = start + timedelta(days=1)
    elif resolution == Resolution.MONTH:
        if start.month == 12:
            end = start.replace(year=start.year + 1, month=1)
        else:
            end = start.replace(month=start.month + 1)
    else:
        end = start.replace(year=start.year + 1)
    return start, end


def _check_order(index: int, previous: datetime | None, current: datetime) -> None:
    if previous is not None and current < previous:
        raise InputOrderError(index, previous, current)


def aggregate(
    samples: Iterable[Sample],
    resolution: Resolution,
    mode: AggregationMode = AggregationMode.SUM,
) -> list[AggregatedPoint]:
    """
    Fold time-ordered samples into buckets of the given resolution.

    Args:
        samples: Samples ordered by timestamp ascending. Not sorted here.
        resolution: Bucket granularity. RAW returns one point per sample.
        mode: SUM for additive metrics, MEAN for level metrics.

    Returns:
        Ordered list of AggregatedPoint, one per non-empty bucket.

    Raises:
        InputOrderError: if a timestamp is earlier than the one before it
    """
    resolution = Resolution(resolution)
    mode = AggregationMode(mode)
    output: list[AggregatedPoint] = []
    previous: datetime | None = None

    if resolution == Resolution.RAW:
        for index, sample in enumerate(samples):
            _check_order(index, previous, sample.timestamp)
            previous = sample.timestamp
            output.append(AggregatedPoint(sample.timestamp, float(sample.value), 1))
        return output

    current_start: datetime | None = None
    total = 0.0
    count = 0

    def _close() -> None:
        value = total / count if mode == AggregationMode.MEAN else total
        output.append(AggregatedPoint(current_start, value, count))

    for index, sample in enumerate(samples):
        _check_order(index, previous, sample.timestamp)
        previous = sample.timestamp

        start = truncate(sample.timestamp, resolution)
        if start != current_start:
            if count:
                _close()
            current_start = start
            total = 0.0
            count = 0
        total += float(sample.value)
        count += 1

    if count:
        _close()

    logger.debug(f"Aggregated {sum(p.count for p in output)} samples into {len(output)} {resolution.value} buckets")
    return output


def samples_from_frame(df: pd.DataFrame) -> list[Sample]:
    """
    Convert a store DataFrame ['ds', 'y', ...] to Samples in row order.

    Rows with a missing value are dropped; ordering is left untouched so
    that the aggregator can still surface upstream ordering bugs.
    """
    if df.empty:
        return []

    required_cols = {"ds", "y"}
    if not required_cols.issubset(df.columns):
        raise ValueError(f"DataFrame must contain columns: {required_cols}")

    clean = df.dropna(subset=["y"])
    return [
        Sample(timestamp=pd.Timestamp(ts).to_pydatetime(), value=float(y))
        for ts, y in zip(clean["ds"], clean["y"])
    ]


def points_to_frame(points: Sequence[AggregatedPoint]) -> pd.DataFrame:
    """Convert aggregated points to a DataFrame ['ds', 'y', 'count']."""
    return pd.DataFrame(
        {
            "ds": [p.bucket_start for p in points],
            "y": [p.aggregate for p in points],
            "count": [p.count for p in points],
        }
    )
