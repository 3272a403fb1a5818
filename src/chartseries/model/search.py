from __future__ import annotations

from bisect import bisect_left
from typing import Sequence


def binary_search(positions: Sequence[float], target: float) -> int:
    """Search an ascending sequence for ``target``.

    Returns the index of an exact match, otherwise ``-(insertion_point) - 1``.
    """
    insertion_point = bisect_left(positions, target)
    if insertion_point < len(positions) and positions[insertion_point] == target:
        return insertion_point
    return -insertion_point - 1


def decode_insertion_point(search_result: int) -> int:
    if search_result < 0:
        return -(search_result + 1)
    return search_result
