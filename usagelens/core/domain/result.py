"""
Result Domain Models - Data structures for trend and anomaly results.
"""

from dataclasses import dataclass
from datetime import datetime
from enum import Enum


class TrendClassification(str, Enum):
    """Direction of a fitted trend."""

    INCREASING = "increasing"
    DECREASING = "decreasing"
    STABLE = "stable"


class AnomalyDirection(str, Enum):
    """Which side of the reference band counts as anomalous."""

    UPPER = "upper"  # spikes only
    BOTH = "both"  # spikes and drops


@dataclass(frozen=True)
class TrendResult:
    """Ordinary least squares fit of a series."""

    slope: float
    intercept: float
    r_squared: float  # 0.0 = no fit, 1.0 = perfect fit
    classification: TrendClassification


@dataclass(frozen=True)
class AnomalyResult:
    """Evaluation of the latest point against its reference window."""

    reference_mean: float
    reference_std_dev: float
    limit: float
    latest_value: float
    is_anomaly: bool
    latest_timestamp: datetime | None = None
