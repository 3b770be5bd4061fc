"""
Prometheus Series Store - Reads consumption samples from Prometheus-compatible databases.

Supports VictoriaMetrics, Thanos, Mimir, Cortex, and native Prometheus.
"""

import logging
from datetime import datetime, timezone

import httpx
import pandas as pd
from pydantic import PrivateAttr

from usagelens.core.ports.series_store import SERIES_COLUMNS, SeriesStore

logger = logging.getLogger(__name__)


def _unix_seconds(ts: datetime) -> float:
    if ts.tzinfo is None:
        ts = ts.replace(tzinfo=timezone.utc)
    return ts.timestamp()


class PrometheusSeriesStore(SeriesStore):
    """
    Series store adapter for Prometheus-compatible databases.
    Configured via Pydantic model fields.
    """
    read_url: str
    metric: str = "consumption"
    entity_label: str = "entity"
    step: str = "1h"
    timeout: float = 30.0
    headers: dict[str, str] = {}

    _client: httpx.AsyncClient | None = PrivateAttr(default=None)

    def model_post_init(self, __context):
        """Normalize URL after initialization."""
        self.read_url = self.read_url.rstrip("/")

    async def _get_client(self) -> httpx.AsyncClient:
        """Get or create the HTTP client for reading."""
        if self._client is None:
            self._client = httpx.AsyncClient(
                timeout=self.timeout,
                headers=self.headers,
            )
        return self._client

    def selector(self, entity_id: str) -> str:
        """PromQL selector for one entity, e.g. consumption{entity="meter-1"}."""
        escaped = entity_id.replace("\\", "\\\\").replace('"', '\\"')
        return f'{self.metric}{{{self.entity_label}="{escaped}"}}'

    async def query_range(
        self,
        entity_id: str,
        start: datetime,
        end: datetime,
    ) -> pd.DataFrame:
        """Execute a range query and return a DataFrame."""
        client = await self._get_client()

        params = {
            "query": self.selector(entity_id),
            "start": _unix_seconds(start),
            "end": _unix_seconds(end),
            "step": self.step,
        }

        logger.debug(f"Querying {self.read_url} for {params['query']}")
        response = await client.get(
            f"{self.read_url}/api/v1/query_range",
            params=params,
        )
        response.raise_for_status()

        data = response.json()

        if data.get("status") != "success":
            raise RuntimeError(f"Prometheus query failed: {data.get('error', 'Unknown error')}")

        frames = []
        for result in data.get("data", {}).get("result", []):
            values = result.get("values", [])
            if not values:
                continue

            df_series = pd.DataFrame(values, columns=["timestamp", "value"])
            df_series["ds"] = pd.to_datetime(df_series["timestamp"].astype(float), unit="s")
            df_series["y"] = pd.to_numeric(df_series["value"], errors="coerce")
            df_series["unique_id"] = entity_id

            frames.append(df_series[SERIES_COLUMNS])

        if not frames:
            return pd.DataFrame(columns=SERIES_COLUMNS)

        df = pd.concat(frames, ignore_index=True)
        if len(frames) > 1:
            # Several label sets matched; interleave them by time
            df = df.sort_values("ds", kind="mergesort", ignore_index=True)

        # Range queries include the end instant; the port is half-open
        end_ts = pd.Timestamp(_unix_seconds(end), unit="s")
        return df[df["ds"] < end_ts].reset_index(drop=True)

    async def close(self) -> None:
        if self._client:
            await self._client.aclose()
            self._client = None
