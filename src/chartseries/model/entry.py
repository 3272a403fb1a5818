from __future__ import annotations

from dataclasses import dataclass, replace
from enum import Enum


class EntryCriterion(str, Enum):
    POSITION = "position"
    VALUE = "value"


@dataclass(frozen=True)
class Entry:
    """One chart data point.

    ``position`` is an integer index for bar series and a real x value for
    every other kind. ``color`` carries a highlight override, if any.
    """

    position: float
    value: float
    color: int | None = None

    def as_tuple(self) -> tuple[float, float]:
        return (self.position, self.value)

    def with_value(self, value: float) -> Entry:
        return replace(self, value=float(value))

    def with_color(self, color: int | None) -> Entry:
        return replace(self, color=color)

    def with_position(self, position: float) -> Entry:
        return replace(self, position=position)
