"""
Pytest configuration for UsageLens tests.
"""
from datetime import datetime, timedelta

import pytest

from usagelens.core.domain.series import Sample


def pytest_configure(config):
    """Register custom markers."""
    config.addinivalue_line(
        "markers", "unit: Unit tests that don't require external services"
    )


@pytest.fixture(autouse=True)
def isolated_config(monkeypatch, tmp_path):
    """Keep a developer's config.yaml or env from leaking into tests."""
    monkeypatch.setenv("USAGELENS_CONFIG_FILE", str(tmp_path / "missing.yaml"))
    for var in ("USAGELENS_STORE", "PROMETHEUS_URL", "USAGELENS_LOG_LEVEL", "USAGELENS_WINDOW_SIZE"):
        monkeypatch.delenv(var, raising=False)


@pytest.fixture
def hourly_samples():
    """Three days of hourly readings: 1.0 on day one, 2.0 on day two, 3.0 on day three."""
    start = datetime(2024, 3, 1)
    return [
        Sample(timestamp=start + timedelta(hours=h), value=float(h // 24 + 1))
        for h in range(72)
    ]
