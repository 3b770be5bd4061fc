"""
In-Memory Series Store - Keeps samples per entity in DataFrames.

Useful for local development, demos and tests.
"""

from datetime import datetime
from typing import Iterable

import pandas as pd
from pydantic import PrivateAttr

from usagelens.core.domain.series import Sample
from usagelens.core.ports.series_store import SERIES_COLUMNS, SeriesStore


class InMemorySeriesStore(SeriesStore):
    """
    Series store backed by a dict of entity -> DataFrame.
    Samples are kept in insertion order; callers append in time order.
    """

    _frames: dict[str, pd.DataFrame] = PrivateAttr(default_factory=dict)

    def add_samples(self, entity_id: str, samples: Iterable[Sample]) -> None:
        new = pd.DataFrame(
            [{"unique_id": entity_id, "ds": s.timestamp, "y": float(s.value)} for s in samples],
            columns=SERIES_COLUMNS,
        )
        existing = self._frames.get(entity_id)
        if existing is None or existing.empty:
            self._frames[entity_id] = new
        else:
            self._frames[entity_id] = pd.concat([existing, new], ignore_index=True)

    def entities(self) -> list[str]:
        return sorted(self._frames)

    async def query_range(
        self,
        entity_id: str,
        start: datetime,
        end: datetime,
    ) -> pd.DataFrame:
        df = self._frames.get(entity_id)
        if df is None or df.empty:
            return pd.DataFrame(columns=SERIES_COLUMNS)

        ds = pd.to_datetime(df["ds"])
        mask = (ds >= pd.Timestamp(start)) & (ds < pd.Timestamp(end))
        return df.loc[mask, SERIES_COLUMNS].reset_index(drop=True)
