"""
Series Domain Models - Samples, resolutions and aggregated points.
"""

from dataclasses import dataclass
from datetime import datetime
from enum import Enum


class Resolution(str, Enum):
    """Time-bucketing granularity for aggregation."""

    RAW = "raw"
    HOUR = "hour"
    DAY = "day"
    MONTH = "month"
    YEAR = "year"


class AggregationMode(str, Enum):
    """How samples folded into one bucket are combined."""

    SUM = "sum"  # additive metrics (consumption)
    MEAN = "mean"  # level metrics (temperature, pressure)


@dataclass(frozen=True)
class Sample:
    """A single time-stamped reading."""

    timestamp: datetime
    value: float


@dataclass(frozen=True)
class AggregatedPoint:
    """One bucket of the aggregated series."""

    bucket_start: datetime
    aggregate: float
    count: int
