from __future__ import annotations

from typing import Any, Sequence

from chartseries.model.entry import Entry
from chartseries.model.parsing import parse_number


def _highlight_index(point: Any) -> int | None:
    raw = point
    if isinstance(point, Sequence) and not isinstance(point, (str, bytes)):
        if not point:
            return None
        raw = point[0]
    value = parse_number(raw)
    if value is None or not value.is_integer():
        return None
    return int(value)


def apply_highlights(entries: list[Entry], points: Sequence[Any], color: int) -> int:
    """Recolor entries addressed by 1-based ``(index, value)`` points.

    Points may also be bare indices. Indices outside ``[1, len(entries)]``
    are skipped. Returns the number of entries recolored.
    """
    applied = 0
    for point in points:
        index = _highlight_index(point)
        if index is None or not 1 <= index <= len(entries):
            continue
        entries[index - 1] = entries[index - 1].with_color(color)
        applied += 1
    return applied


def color_map(entries: Sequence[Entry]) -> dict[int, int]:
    """Entry index to highlight color, for highlighted entries only."""
    return {index: entry.color for index, entry in enumerate(entries) if entry.color is not None}


def resolve_colors(entries: Sequence[Entry], default_color: int) -> list[int]:
    overrides = color_map(entries)
    return [overrides.get(index, default_color) for index in range(len(entries))]
