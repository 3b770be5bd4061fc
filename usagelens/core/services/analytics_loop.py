"""
Analytics Service - The request-level engine of UsageLens.

This service orchestrates the one-way flow for a single entity:
1. Fetch samples from the Series Store
2. Aggregate them to the requested resolution
3. Run the trend or anomaly analyzer on the aggregated series
"""

import logging
from datetime import datetime

from usagelens.core.domain.result import AnomalyResult, TrendResult
from usagelens.core.domain.series import AggregatedPoint, Resolution
from usagelens.core.domain.settings import AnalyticsSettings
from usagelens.core.ports.series_store import SeriesStore
from usagelens.core.services.aggregator import aggregate, samples_from_frame
from usagelens.core.services.anomaly import anomaly_points, detect_anomaly
from usagelens.core.services.trend import fit_trend, trend_points

logger = logging.getLogger(__name__)


class AnalyticsService:
    """
    Core service that answers consumption, trend and anomaly questions.
    """

    def __init__(
        self,
        store: SeriesStore,
        settings: AnalyticsSettings | None = None,
    ):
        """
        Initialize the analytics service.

        Args:
            store: Port to read time series
            settings: Analyzer tunables (defaults if omitted)
        """
        self.store = store
        self.settings = settings or AnalyticsSettings()

    async def consumption(
        self,
        entity_id: str,
        start: datetime,
        end: datetime,
        resolution: Resolution | None = None,
    ) -> list[AggregatedPoint]:
        """
        Fetch and aggregate one entity's samples over [start, end).
        """
        resolution = Resolution(resolution or self.settings.default_resolution)

        logger.info(f"Fetching samples for '{entity_id}' start={start} end={end}")
        df = await self.store.query_range(entity_id, start, end)

        if df.empty:
            logger.warning(f"No samples found for '{entity_id}'")
            return []

        samples = samples_from_frame(df)
        points = aggregate(samples, resolution, mode=self.settings.aggregation_mode)
        logger.info(f"Aggregated {len(samples)} samples for '{entity_id}' into {len(points)} {resolution.value} points")
        return points

    async def trend(
        self,
        entity_id: str,
        start: datetime,
        end: datetime,
        resolution: Resolution | None = None,
    ) -> TrendResult:
        """
        Fit a linear trend to the aggregated series, x in days.
        """
        points = await self.consumption(entity_id, start, end, resolution)
        result = fit_trend(trend_points(points))
        logger.info(
            f"Trend for '{entity_id}': slope={result.slope:.4f} "
            f"r2={result.r_squared:.3f} ({result.classification.value})"
        )
        return result

    async def anomaly(
        self,
        entity_id: str,
        start: datetime,
        end: datetime,
        resolution: Resolution | None = None,
        window_size: int | None = None,
    ) -> AnomalyResult:
        """
        Check whether the latest aggregated point is a spike.
        """
        points = await self.consumption(entity_id, start, end, resolution)
        result = detect_anomaly(
            anomaly_points(points),
            window_size=window_size or self.settings.window_size,
            sigma_multiplier=self.settings.sigma_multiplier,
            direction=self.settings.anomaly_direction,
        )
        if result.is_anomaly:
            logger.warning(
                f"Anomaly for '{entity_id}' at {result.latest_timestamp}: "
                f"value={result.latest_value} mean={result.reference_mean:.3f} limit={result.limit:.3f}"
            )
        return result
