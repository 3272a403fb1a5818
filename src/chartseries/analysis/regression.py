from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Any, Iterable

import numpy as np


@dataclass(frozen=True)
class LineOfBestFit:
    slope: float
    intercept: float
    correlation: float
    predictions: list[float]

    def as_dict(self) -> dict[str, Any]:
        return {
            "slope": self.slope,
            "intercept": self.intercept,
            "correlation": self.correlation,
            "predictions": list(self.predictions),
        }


def best_fit(points: Iterable[tuple[float, float]]) -> LineOfBestFit:
    """Least-squares line through ``points`` with Pearson correlation.

    Slope and intercept are NaN when every x is equal; correlation is NaN when
    either coordinate has zero spread.
    """
    pairs = np.asarray([(float(x), float(y)) for x, y in points], dtype=float).reshape(-1, 2)
    x = pairs[:, 0]
    y = pairs[:, 1]
    if x.size == 0:
        return LineOfBestFit(math.nan, math.nan, math.nan, [])

    dx = x - x.mean()
    dy = y - y.mean()
    sxx = float(np.sum(dx * dx))
    syy = float(np.sum(dy * dy))
    sxy = float(np.sum(dx * dy))

    if sxx == 0.0:
        slope = math.nan
        intercept = math.nan
    else:
        slope = sxy / sxx
        intercept = float(y.mean()) - slope * float(x.mean())

    if sxx == 0.0 or syy == 0.0:
        correlation = math.nan
    else:
        correlation = sxy / math.sqrt(sxx * syy)

    predictions = [float(value) for value in intercept + slope * x]
    return LineOfBestFit(
        slope=slope,
        intercept=intercept,
        correlation=correlation,
        predictions=predictions,
    )
