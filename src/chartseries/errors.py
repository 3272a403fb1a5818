from __future__ import annotations


class ChartSeriesError(Exception):
    """Base class for errors reported to callers of the series model."""


class InvalidInputError(ChartSeriesError, ValueError):
    """Raised when an operation must reject its input instead of dropping it."""
