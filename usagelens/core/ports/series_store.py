"""
SeriesStore Port - Interface for reading consumption samples.
Returns Pandas DataFrames so adapters stay close to their wire formats.
"""

from abc import ABC, abstractmethod
from datetime import datetime

import pandas as pd
from pydantic import BaseModel, ConfigDict

SERIES_COLUMNS = ["unique_id", "ds", "y"]


class SeriesStore(BaseModel, ABC):
    """
    Abstract interface for the series store collaborator.
    Also serves as a Pydantic Model for configuration validation.
    """
    model_config = ConfigDict(arbitrary_types_allowed=True)

    @abstractmethod
    async def query_range(
        self,
        entity_id: str,
        start: datetime,
        end: datetime,
    ) -> pd.DataFrame:
        """
        Fetch the samples of one entity in [start, end).

        Args:
            entity_id: Metered entity (property, meter, ...)
            start: Inclusive start time
            end: Exclusive end time

        Returns:
            DataFrame with columns ['unique_id', 'ds', 'y'], ordered by 'ds'
        """
        ...

    async def close(self) -> None:
        """Release any held connections."""
        return None
