"""
Tests for statistics primitives.
"""
import pytest

from usagelens.core.domain.errors import DegenerateInputError
from usagelens.core.services import stats


def test_mean():
    assert stats.mean([1.0, 2.0, 3.0, 4.0]) == 2.5


def test_sample_variance_uses_n_minus_one():
    assert stats.variance([10, 12, 9, 11, 10]) == pytest.approx(1.3)
    assert stats.variance([10, 12, 9, 11, 10], ddof=0) == pytest.approx(1.04)


def test_constant_values_have_zero_spread():
    assert stats.variance([0.1, 0.1, 0.1]) == 0.0
    assert stats.std_dev([0.1, 0.1, 0.1]) == 0.0


def test_variance_needs_enough_values():
    with pytest.raises(ValueError):
        stats.variance([1.0])


def test_least_squares():
    slope, intercept = stats.least_squares([0, 1, 2, 3], [10, 20, 30, 40])
    assert slope == pytest.approx(10.0)
    assert intercept == pytest.approx(10.0)


def test_least_squares_zero_x_variance():
    with pytest.raises(DegenerateInputError):
        stats.least_squares([2, 2], [1, 3])


def test_r_squared_bounds():
    assert stats.r_squared([0, 1, 2], [1, 2, 3], 1.0, 1.0) == pytest.approx(1.0)
    # A terrible line is clamped at zero
    assert stats.r_squared([0, 1, 2], [1, 2, 3], -100.0, 0.0) == 0.0


def test_least_squares_large_x():
    slope, intercept = stats.least_squares([1e9, 1e9 + 1, 1e9 + 2], [1.0, 2.0, 3.0])
    assert slope == pytest.approx(1.0)
    assert intercept == pytest.approx(1.0 - 1e9)


@pytest.mark.parametrize("value", [0.05, 0.1, 0.47])
def test_mean_of_constant_values_is_exact(value):
    assert stats.mean([value] * 5) == value
    assert stats.mean([value] * 7) == value
