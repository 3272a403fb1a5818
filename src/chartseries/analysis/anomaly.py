from __future__ import annotations

from typing import Iterable, Sequence

import numpy as np

from chartseries.errors import InvalidInputError


def _to_float_array(values: Iterable[float]) -> np.ndarray:
    return np.asarray(list(values), dtype=float)


def mean_and_std(values: np.ndarray) -> tuple[float, float]:
    """Mean and population standard deviation."""
    if values.size == 0:
        return float("nan"), float("nan")
    return float(values.mean()), float(values.std(ddof=0))


def detect_anomalies(values: Iterable[float], threshold: float) -> list[tuple[int, float]]:
    """Return ``(index, value)`` for every point whose z-score exceeds ``threshold``.

    Indices are 1-based. With zero spread every value off the mean counts as an
    infinite score, so only values different from the mean are flagged.
    """
    data = _to_float_array(values)
    if data.size == 0:
        return []
    # Uniform data has zero spread; its float mean and std can carry rounding noise.
    if np.all(data == data[0]):
        return []

    mean, std = mean_and_std(data)
    if std == 0.0:
        flagged = data != mean
    else:
        flagged = np.abs(data - mean) / std > float(threshold)
    return [(int(idx) + 1, float(data[idx])) for idx in np.flatnonzero(flagged)]


def detect_anomalies_in_points(
    points: Sequence[tuple[float, float]],
    threshold: float,
) -> list[tuple[float, float]]:
    """Flag outliers on the y values and map them back to their ``(x, y)`` pair."""
    pairs = [(float(x), float(y)) for x, y in points]
    anomalies = detect_anomalies((y for _, y in pairs), threshold)
    return [pairs[index - 1] for index, _ in anomalies]


def clean_data(
    anomaly_index: int,
    x_list: Sequence[float],
    y_list: Sequence[float],
) -> list[tuple[float, float]]:
    """Drop the 1-based ``anomaly_index`` from parallel lists and zip the rest."""
    if len(x_list) != len(y_list):
        raise InvalidInputError(
            f"x and y lists must have equal length (got {len(x_list)} and {len(y_list)})"
        )
    if not 1 <= anomaly_index <= len(x_list):
        raise InvalidInputError(
            f"anomaly index must be between 1 and {len(x_list)} (got {anomaly_index})"
        )
    position = anomaly_index - 1
    remaining_x = [value for idx, value in enumerate(x_list) if idx != position]
    remaining_y = [value for idx, value in enumerate(y_list) if idx != position]
    return list(zip(remaining_x, remaining_y))
