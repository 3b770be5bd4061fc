"""
Tests for Core Domain Models (settings, errors, value types).
"""
from dataclasses import FrozenInstanceError
from datetime import datetime

import pytest
from pydantic import ValidationError

from usagelens.core.domain.errors import (
    AnalyticsError,
    DegenerateInputError,
    InputOrderError,
    InsufficientDataError,
)
from usagelens.core.domain.result import AnomalyDirection, TrendClassification, TrendResult
from usagelens.core.domain.series import AggregationMode, Resolution, Sample
from usagelens.core.domain.settings import AnalyticsSettings, SystemSettings


def test_settings_defaults():
    settings = SystemSettings()
    assert settings.series_store_type == "memory"
    assert settings.analytics.window_size == 5
    assert settings.analytics.sigma_multiplier == 2.0
    assert settings.analytics.aggregation_mode == AggregationMode.SUM
    assert settings.analytics.anomaly_direction == AnomalyDirection.UPPER
    assert settings.analytics.default_resolution == Resolution.DAY


def test_settings_validation():
    with pytest.raises(ValidationError):
        AnalyticsSettings(window_size=1)
    with pytest.raises(ValidationError):
        SystemSettings(series_store_type="cassandra")


def test_settings_accept_strings():
    settings = AnalyticsSettings(aggregation_mode="mean", default_resolution="month")
    assert settings.aggregation_mode == AggregationMode.MEAN
    assert settings.default_resolution == Resolution.MONTH


def test_value_types_are_immutable():
    sample = Sample(datetime(2024, 1, 1), 1.0)
    with pytest.raises(FrozenInstanceError):
        sample.value = 2.0

    result = TrendResult(1.0, 0.0, 1.0, TrendClassification.INCREASING)
    with pytest.raises(FrozenInstanceError):
        result.slope = 0.0


def test_errors_share_a_base_and_carry_context():
    order = InputOrderError(3, datetime(2024, 1, 2), datetime(2024, 1, 1))
    insufficient = InsufficientDataError(required=6, actual=4, method="detect_anomaly")
    degenerate = DegenerateInputError("flat x", x_value=1.0, count=3)

    for err in (order, insufficient, degenerate):
        assert isinstance(err, AnalyticsError)

    assert order.kind == "input_order"
    assert order.context() == {
        "index": 3,
        "previous": "2024-01-02T00:00:00",
        "current": "2024-01-01T00:00:00",
    }
    assert insufficient.context() == {"required": 6, "actual": 4, "method": "detect_anomaly"}
    assert "need at least 6 points, got 4" in str(insufficient)
    assert degenerate.kind == "degenerate_input"
