from typing import Literal
from pydantic import BaseModel, Field

from usagelens.core.domain.result import AnomalyDirection
from usagelens.core.domain.series import AggregationMode, Resolution


class AnalyticsSettings(BaseModel):
    """
    Tunables for the aggregation and analysis core.
    """
    window_size: int = Field(default=5, ge=2, description="Reference window length for anomaly checks")
    sigma_multiplier: float = Field(default=2.0, gt=0, description="Standard deviations above the mean that count as a spike")
    aggregation_mode: AggregationMode = Field(default=AggregationMode.SUM, description="How bucket members are combined")
    anomaly_direction: AnomalyDirection = Field(default=AnomalyDirection.UPPER, description="Flag spikes only or spikes and drops")
    default_resolution: Resolution = Field(default=Resolution.DAY, description="Resolution used when the caller omits one")


class SystemSettings(BaseModel):
    """
    Global system configuration settings.
    """
    series_store_type: Literal["memory", "prometheus"] = Field(default="memory", description="Series store backend")

    # Timeseries DB
    prometheus_url: str = Field(default="http://localhost:8428", description="Prometheus-compatible base URL")
    prometheus_metric: str = Field(default="consumption", description="Metric name holding consumption samples")
    prometheus_entity_label: str = Field(default="entity", description="Label identifying the metered entity")
    prometheus_step: str = Field(default="1h", description="Query resolution step")
    timeout: float = Field(default=30.0, description="HTTP timeout in seconds")

    log_level: str = Field(default="INFO", description="Root logging level")

    analytics: AnalyticsSettings = Field(default_factory=AnalyticsSettings)
