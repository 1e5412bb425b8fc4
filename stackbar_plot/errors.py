from __future__ import annotations


class ChartDataError(ValueError):
    """Raised when host data or widget geometry cannot produce a chart."""
