"""
Analytics Errors - Typed failures raised by the aggregation and analysis core.

All errors are deterministic: calling again with the same input raises
the same error, so callers should report them rather than retry.
"""

from datetime import datetime
from typing import Any


class AnalyticsError(Exception):
    """Base class for all analytics core failures."""

    kind: str = "analytics_error"

    def context(self) -> dict[str, Any]:
        """Structured details the calling layer can hand back to a client."""
        return {}


class InputOrderError(AnalyticsError):
    """Samples arrived out of timestamp order."""

    kind = "input_order"

    def __init__(self, index: int, previous: datetime, current: datetime):
        self.index = index
        self.previous = previous
        self.current = current
        super().__init__(
            f"Sample {index} has timestamp {current.isoformat()} "
            f"earlier than previous {previous.isoformat()}"
        )

    def context(self) -> dict[str, Any]:
        return {
            "index": self.index,
            "previous": self.previous.isoformat(),
            "current": self.current.isoformat(),
        }


class InsufficientDataError(AnalyticsError):
    """Fewer points than the statistical method needs."""

    kind = "insufficient_data"

    def __init__(self, required: int, actual: int, method: str = ""):
        self.required = required
        self.actual = actual
        self.method = method
        prefix = f"{method}: " if method else ""
        super().__init__(f"{prefix}need at least {required} points, got {actual}")

    def context(self) -> dict[str, Any]:
        return {"required": self.required, "actual": self.actual, "method": self.method}


class DegenerateInputError(AnalyticsError):
    """The fit is mathematically undefined (zero variance in x)."""

    kind = "degenerate_input"

    def __init__(self, message: str, x_value: float | None = None, count: int = 0):
        self.x_value = x_value
        self.count = count
        super().__init__(message)

    def context(self) -> dict[str, Any]:
        return {"x_value": self.x_value, "count": self.count}
