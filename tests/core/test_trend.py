"""
Tests for the Trend Analyzer.
"""
from datetime import datetime, timedelta

import pytest

from usagelens.core.domain.errors import DegenerateInputError, InsufficientDataError
from usagelens.core.domain.result import TrendClassification
from usagelens.core.domain.series import AggregatedPoint
from usagelens.core.services.trend import classify, fit_trend, trend_points


def test_perfect_increasing_line():
    result = fit_trend([(0, 10), (1, 20), (2, 30), (3, 40)])

    assert result.slope == pytest.approx(10.0)
    assert result.intercept == pytest.approx(10.0)
    assert result.r_squared == pytest.approx(1.0)
    assert result.classification == TrendClassification.INCREASING


def test_decreasing_line():
    result = fit_trend([(0, 40), (1, 30), (2, 20), (3, 10)])

    assert result.slope == pytest.approx(-10.0)
    assert result.intercept == pytest.approx(40.0)
    assert result.classification == TrendClassification.DECREASING


def test_flat_series():
    result = fit_trend([(0, 7.5), (1, 7.5), (2, 7.5), (5, 7.5)])

    assert result.slope == 0.0
    assert result.intercept == 7.5
    assert result.r_squared == 1.0
    assert result.classification == TrendClassification.STABLE


def test_noisy_fit_has_partial_r_squared():
    result = fit_trend([(0, 1.0), (1, 3.0), (2, 2.0), (3, 4.0)])

    assert result.slope == pytest.approx(0.8)
    assert result.intercept == pytest.approx(1.3)
    assert 0.0 < result.r_squared < 1.0
    assert result.r_squared == pytest.approx(0.64)


def test_small_slope_is_stable():
    result = fit_trend([(0, 100.0), (1, 100.005), (2, 100.01)])
    assert result.classification == TrendClassification.STABLE


@pytest.mark.parametrize("slope, expected", [
    (0.02, TrendClassification.INCREASING),
    (0.01, TrendClassification.STABLE),
    (0.0, TrendClassification.STABLE),
    (-0.01, TrendClassification.STABLE),
    (-0.02, TrendClassification.DECREASING),
])
def test_classification_thresholds(slope, expected):
    assert classify(slope) == expected


@pytest.mark.parametrize("points", [[], [(0, 1.0)]])
def test_insufficient_points(points):
    with pytest.raises(InsufficientDataError) as exc_info:
        fit_trend(points)
    assert exc_info.value.required == 2
    assert exc_info.value.actual == len(points)


def test_identical_x_is_degenerate():
    with pytest.raises(DegenerateInputError) as exc_info:
        fit_trend([(3, 1.0), (3, 2.0), (3, 5.0)])
    assert exc_info.value.x_value == 3.0
    assert exc_info.value.count == 3


def test_large_x_values_fit_without_cancellation():
    # Epoch-second scale x values
    result = fit_trend([(1e9, 1.0), (1e9 + 1, 2.0), (1e9 + 2, 3.0)])

    assert result.slope == pytest.approx(1.0)
    assert result.r_squared == pytest.approx(1.0)
    assert result.classification == TrendClassification.INCREASING


def test_degenerate_is_distinct_from_insufficient():
    assert not issubclass(DegenerateInputError, InsufficientDataError)


def test_fit_is_idempotent():
    points = [(0, 1.0), (1, 3.0), (2, 2.0), (3, 4.0)]
    assert fit_trend(points) == fit_trend(points)


def test_trend_points_uses_days_since_first_bucket():
    start = datetime(2024, 1, 1)
    points = [
        AggregatedPoint(start, 5.0, 24),
        AggregatedPoint(start + timedelta(days=1), 6.0, 24),
        AggregatedPoint(start + timedelta(days=3, hours=12), 7.0, 12),
    ]

    assert trend_points(points) == [(0.0, 5.0), (1.0, 6.0), (3.5, 7.0)]
    assert trend_points([]) == []
