from __future__ import annotations

import math
from enum import Enum
from typing import Any, Literal

from chartseries.config import SeriesStyle
from chartseries.model.entry import Entry
from chartseries.model.parsing import parse_tuple
from chartseries.model.search import binary_search, decode_insertion_point

WindowMode = Literal["sliding", "grow"]


class SeriesKind(str, Enum):
    BAR = "bar"
    LINE = "line"
    SCATTER = "scatter"
    TIME = "time"


class SeriesPolicy:
    """Insertion and conflict rules for one chart kind.

    Policies operate on the list owned by a store; the store holds its lock
    while calling them. ``insert`` and ``remove`` return whether the list
    changed.
    """

    kind: SeriesKind

    def __init__(self, maximum_time_entries: int = 200, window_mode: WindowMode = "sliding") -> None:
        self.maximum_time_entries = max(1, int(maximum_time_entries))
        self.window_mode: WindowMode = window_mode

    def entry_from_tuple(self, fields: Any) -> Entry | None:
        parsed = parse_tuple(fields)
        if parsed is None:
            return None
        x, y = parsed
        return Entry(position=x, value=y)

    def placeholder(self, position: float) -> Entry:
        return Entry(position=position, value=0.0)

    def insert(self, entries: list[Entry], entry: Entry) -> bool:
        raise NotImplementedError

    def remove(self, entries: list[Entry], index: int) -> bool:
        if not 0 <= index < len(entries):
            return False
        del entries[index]
        return True

    def insert_time_entry(self, entries: list[Entry], entry: Entry) -> bool:
        if len(entries) >= self.maximum_time_entries:
            if self.window_mode == "grow":
                entries.append(self.placeholder(len(entries)))
            else:
                del entries[: len(entries) - self.maximum_time_entries + 1]
        entries.append(entry)
        return True

    def entries_equal(self, first: Entry, second: Entry) -> bool:
        return first.position == second.position and first.value == second.value

    def set_default_styling(self, style: SeriesStyle) -> SeriesStyle:
        return style


class BarPolicy(SeriesPolicy):
    """Stores one entry per slot; position always equals list index.

    Inserting past the end back-fills zero placeholders, so slot indices at or
    above ``maximum_bar_slots`` are refused.
    """

    kind = SeriesKind.BAR

    def __init__(
        self,
        maximum_time_entries: int = 200,
        window_mode: WindowMode = "sliding",
        maximum_bar_slots: int = 100_000,
    ) -> None:
        super().__init__(maximum_time_entries=maximum_time_entries, window_mode=window_mode)
        self.maximum_bar_slots = max(1, int(maximum_bar_slots))

    def entry_from_tuple(self, fields: Any) -> Entry | None:
        parsed = parse_tuple(fields)
        if parsed is None:
            return None
        x, y = parsed
        # Bar positions are slot indices.
        return Entry(position=math.floor(x), value=y)

    def placeholder(self, position: float) -> Entry:
        return Entry(position=int(position), value=0.0)

    def insert(self, entries: list[Entry], entry: Entry) -> bool:
        index = int(entry.position)
        if not 0 <= index < self.maximum_bar_slots:
            return False
        if index < len(entries):
            entries[index] = entry
            return True
        while len(entries) < index:
            entries.append(self.placeholder(len(entries)))
        entries.append(entry)
        return True

    def remove(self, entries: list[Entry], index: int) -> bool:
        if not 0 <= index < len(entries):
            return False
        entries[index] = entries[index].with_value(0.0)
        return True

    def insert_time_entry(self, entries: list[Entry], entry: Entry) -> bool:
        if int(entry.position) < 0:
            return False
        super().insert_time_entry(entries, entry)
        # Re-address slots so that position always equals index.
        for index, current in enumerate(entries):
            if current.position != index:
                entries[index] = current.with_position(index)
        return True

    def entries_equal(self, first: Entry, second: Entry) -> bool:
        return (
            math.floor(first.position) == math.floor(second.position)
            and first.value == second.value
        )

    def set_default_styling(self, style: SeriesStyle) -> SeriesStyle:
        return style.model_copy(update={"draw_values": True})


class PointPolicy(SeriesPolicy):
    """Keeps entries sorted by position; ties keep arrival order."""

    def __init__(
        self,
        kind: SeriesKind = SeriesKind.LINE,
        maximum_time_entries: int = 200,
        window_mode: WindowMode = "sliding",
    ) -> None:
        super().__init__(maximum_time_entries=maximum_time_entries, window_mode=window_mode)
        if kind not in (SeriesKind.LINE, SeriesKind.SCATTER):
            raise ValueError(f"PointPolicy does not support kind: {kind}")
        self.kind = kind

    def insert(self, entries: list[Entry], entry: Entry) -> bool:
        positions = [current.position for current in entries]
        index = binary_search(positions, entry.position)
        if index >= 0:
            while index < len(positions) and positions[index] == entry.position:
                index += 1
        else:
            index = decode_insertion_point(index)
        entries.insert(index, entry)
        return True

    def insert_time_entry(self, entries: list[Entry], entry: Entry) -> bool:
        # The list stays sorted, so a full sliding window drops the lowest positions.
        if len(entries) >= self.maximum_time_entries:
            if self.window_mode == "grow":
                self.insert(entries, self.placeholder(len(entries)))
            else:
                del entries[: len(entries) - self.maximum_time_entries + 1]
        return self.insert(entries, entry)

    def set_default_styling(self, style: SeriesStyle) -> SeriesStyle:
        if self.kind == SeriesKind.SCATTER:
            return style.model_copy(update={"point_shape": "circle"})
        return style.model_copy(update={"draw_values": True, "draw_circle_hole": True})


class TimeWindowPolicy(SeriesPolicy):
    """Appends in arrival order and bounds the series by ``maximum_time_entries``.

    ``window_mode="sliding"`` evicts the oldest entry once full. ``"grow"``
    reproduces the legacy behavior of appending a zero placeholder instead,
    which lets the series grow without bound.
    """

    kind = SeriesKind.TIME

    def insert(self, entries: list[Entry], entry: Entry) -> bool:
        return self.insert_time_entry(entries, entry)

    def set_default_styling(self, style: SeriesStyle) -> SeriesStyle:
        return style.model_copy(update={"draw_values": True})


def build_policy(
    kind: SeriesKind | str,
    maximum_time_entries: int = 200,
    window_mode: WindowMode = "sliding",
    maximum_bar_slots: int = 100_000,
) -> SeriesPolicy:
    resolved = SeriesKind(kind)
    if resolved == SeriesKind.BAR:
        return BarPolicy(
            maximum_time_entries=maximum_time_entries,
            window_mode=window_mode,
            maximum_bar_slots=maximum_bar_slots,
        )
    if resolved == SeriesKind.TIME:
        return TimeWindowPolicy(maximum_time_entries=maximum_time_entries, window_mode=window_mode)
    return PointPolicy(
        kind=resolved,
        maximum_time_entries=maximum_time_entries,
        window_mode=window_mode,
    )
