from __future__ import annotations

import numpy as np
import pytest

from chartseries.analysis.anomaly import (
    clean_data,
    detect_anomalies,
    detect_anomalies_in_points,
    mean_and_std,
)
from chartseries.errors import InvalidInputError


def test_detect_anomalies_flags_large_outlier() -> None:
    flagged = detect_anomalies([1, 2, 3, 4, 100], threshold=1.5)

    assert flagged == [(5, 100.0)]


def test_detect_anomalies_uniform_data_flags_nothing() -> None:
    assert detect_anomalies([5, 5, 5, 5], threshold=1.5) == []
    assert detect_anomalies([], threshold=1.0) == []


def test_detect_anomalies_uniform_fractional_values_flag_nothing() -> None:
    assert detect_anomalies([0.1, 0.1, 0.1], threshold=0.5) == []
    assert detect_anomalies([0.3] * 7, threshold=0.01) == []
    assert detect_anomalies_in_points([(1, 0.1), (2, 0.1), (3, 0.1)], threshold=0.5) == []


def test_detect_anomalies_threshold_is_strict() -> None:
    # z-scores are exactly +-1 for a symmetric two-point series.
    assert detect_anomalies([0, 2], threshold=1.0) == []
    assert detect_anomalies([0, 2], threshold=0.99) == [(1, 0.0), (2, 2.0)]


def test_mean_and_std_uses_population_deviation() -> None:
    mean, std = mean_and_std(np.array([2.0, 4.0, 4.0, 4.0, 5.0, 5.0, 7.0, 9.0]))
    assert mean == pytest.approx(5.0)
    assert std == pytest.approx(2.0)


def test_detect_anomalies_in_points_maps_back_to_pairs() -> None:
    points = [(10, 1), (11, 2), (12, 3), (13, 4), (14, 100)]

    assert detect_anomalies_in_points(points, threshold=1.5) == [(14.0, 100.0)]


def test_clean_data_removes_one_based_index() -> None:
    assert clean_data(2, [1, 2, 3], [10, 20, 30]) == [(1, 10), (3, 30)]


@pytest.mark.parametrize("index", [0, 4, -1])
def test_clean_data_rejects_out_of_range_index(index: int) -> None:
    x_list = [1, 2, 3]
    y_list = [10, 20, 30]

    with pytest.raises(InvalidInputError, match="anomaly index"):
        clean_data(index, x_list, y_list)
    assert x_list == [1, 2, 3]
    assert y_list == [10, 20, 30]


def test_clean_data_rejects_mismatched_lengths() -> None:
    with pytest.raises(InvalidInputError, match="equal length"):
        clean_data(1, [1, 2], [10])


def test_invalid_input_error_is_value_error() -> None:
    with pytest.raises(ValueError):
        clean_data(9, [1], [1])
