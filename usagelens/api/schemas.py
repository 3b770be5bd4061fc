"""
Request bodies for the stateless analysis endpoints.
"""

from datetime import datetime

from pydantic import BaseModel, Field

from usagelens.core.domain.result import AnomalyDirection
from usagelens.core.domain.series import AggregationMode, Resolution, Sample


class SampleIn(BaseModel):
    """A single reading as sent by a client."""

    timestamp: datetime
    value: float

    def to_sample(self) -> Sample:
        return Sample(timestamp=self.timestamp, value=self.value)


class TrendPointIn(BaseModel):
    x: float
    y: float


class AggregateRequest(BaseModel):
    samples: list[SampleIn] = Field(default_factory=list)
    resolution: Resolution = Resolution.DAY
    mode: AggregationMode | None = None  # falls back to configured mode


class TrendRequest(BaseModel):
    points: list[TrendPointIn]


class AnomalyRequest(BaseModel):
    points: list[SampleIn]
    window_size: int | None = Field(default=None, ge=2)
    sigma_multiplier: float | None = Field(default=None, gt=0)
    direction: AnomalyDirection | None = None
