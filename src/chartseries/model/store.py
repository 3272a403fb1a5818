from __future__ import annotations

import logging
import threading
from typing import Any, Callable, Iterable, Literal, Sequence

import pandas as pd

from chartseries.config import AppConfig, SeriesStyle
from chartseries.model.entry import Entry, EntryCriterion
from chartseries.model.highlights import apply_highlights, resolve_colors
from chartseries.model.parsing import parse_elements, parse_number, tuples_from_columns
from chartseries.model.policies import SeriesKind, SeriesPolicy, build_policy

log = logging.getLogger(__name__)

EntryTuple = tuple[float, float]
Listener = Callable[[list[EntryTuple]], None]


class SeriesStore:
    """Ordered, lock-guarded collection of entries for one chart series.

    Every read and write runs under one reentrant lock, so a read issued
    after a write observes it and concurrent inserts never interleave.
    Reads hand out copies. Listeners are called after the lock is released
    with the exported tuples captured under the lock.
    """

    def __init__(
        self,
        policy: SeriesPolicy,
        style: SeriesStyle | None = None,
        *,
        malformed_policy: Literal["silent", "warn"] = "silent",
    ) -> None:
        self._policy = policy
        self._style = policy.set_default_styling(style or SeriesStyle())
        self._malformed_policy = malformed_policy
        self._entries: list[Entry] = []
        self._listeners: list[Listener] = []
        self._lock = threading.RLock()

    @property
    def kind(self) -> SeriesKind:
        return self._policy.kind

    @property
    def policy(self) -> SeriesPolicy:
        return self._policy

    @property
    def style(self) -> SeriesStyle:
        return self._style

    def __len__(self) -> int:
        with self._lock:
            return len(self._entries)

    # --- listeners -----------------------------------------------------
    def add_listener(self, listener: Listener) -> None:
        with self._lock:
            self._listeners.append(listener)

    def remove_listener(self, listener: Listener) -> None:
        with self._lock:
            if listener in self._listeners:
                self._listeners.remove(listener)

    def _notify(self, snapshot: list[EntryTuple]) -> None:
        with self._lock:
            listeners = list(self._listeners)
        for listener in listeners:
            listener(list(snapshot))

    # --- parsing -------------------------------------------------------
    def _parse(self, fields: Any) -> Entry | None:
        entry = self._policy.entry_from_tuple(fields)
        if entry is None and self._malformed_policy == "warn":
            log.warning("Dropping malformed %s tuple: %r", self.kind.value, fields)
        return entry

    def _export_locked(self) -> list[EntryTuple]:
        return [entry.as_tuple() for entry in self._entries]

    def _insert_locked(self, fields: Any) -> bool:
        entry = self._parse(fields)
        if entry is None:
            return False
        changed = self._policy.insert(self._entries, entry)
        if not changed:
            log.debug("Rejected %s entry at position %s", self.kind.value, entry.position)
        return changed

    # --- mutations -----------------------------------------------------
    def insert(self, fields: Sequence[Any]) -> None:
        with self._lock:
            changed = self._insert_locked(fields)
            snapshot = self._export_locked() if changed else None
        if snapshot is not None:
            self._notify(snapshot)

    def insert_time_entry(self, fields: Sequence[Any]) -> None:
        with self._lock:
            entry = self._parse(fields)
            changed = entry is not None and self._policy.insert_time_entry(self._entries, entry)
            snapshot = self._export_locked() if changed else None
        if snapshot is not None:
            self._notify(snapshot)

    def bulk_import(self, rows: Iterable[Sequence[Any]]) -> None:
        with self._lock:
            changed = False
            for row in rows:
                changed = self._insert_locked(row) or changed
            snapshot = self._export_locked() if changed else None
            if changed:
                log.debug("Bulk import left %d %s entries", len(self._entries), self.kind.value)
        if snapshot is not None:
            self._notify(snapshot)

    def set_elements(self, elements: str) -> None:
        self.bulk_import(parse_elements(elements))

    def import_from_columns(self, columns: Sequence[Sequence[Any]], use_headers: bool = False) -> None:
        self.bulk_import(tuples_from_columns(columns, use_headers=use_headers))

    def remove(self, index: int | str) -> None:
        parsed = parse_number(index)
        if parsed is None or not parsed.is_integer():
            return
        with self._lock:
            changed = self._policy.remove(self._entries, int(parsed))
            snapshot = self._export_locked() if changed else None
        if snapshot is not None:
            self._notify(snapshot)

    def remove_tuple(self, fields: Sequence[Any]) -> None:
        with self._lock:
            target = self._parse(fields)
            changed = False
            if target is not None:
                for index, entry in enumerate(self._entries):
                    if self._policy.entries_equal(entry, target):
                        changed = self._policy.remove(self._entries, index)
                        break
            snapshot = self._export_locked() if changed else None
        if snapshot is not None:
            self._notify(snapshot)

    def clear(self) -> None:
        with self._lock:
            self._entries.clear()
            snapshot = self._export_locked()
        self._notify(snapshot)

    def highlight(self, points: Sequence[Any], color: int) -> None:
        with self._lock:
            applied = apply_highlights(self._entries, points, int(color))
            snapshot = self._export_locked() if applied else None
        if snapshot is not None:
            self._notify(snapshot)

    # --- queries -------------------------------------------------------
    def contains(self, fields: Sequence[Any]) -> bool:
        with self._lock:
            target = self._policy.entry_from_tuple(fields)
            if target is None:
                return False
            return any(self._policy.entries_equal(entry, target) for entry in self._entries)

    def find_by_criterion(
        self,
        value: Any,
        criterion: EntryCriterion | str,
    ) -> list[EntryTuple]:
        target = parse_number(value)
        if target is None:
            return []
        resolved = EntryCriterion(criterion)
        with self._lock:
            if resolved == EntryCriterion.POSITION:
                matches = [entry for entry in self._entries if entry.position == target]
            else:
                matches = [entry for entry in self._entries if entry.value == target]
            return [entry.as_tuple() for entry in matches]

    def export_all(self) -> list[EntryTuple]:
        with self._lock:
            return self._export_locked()

    def entries(self) -> list[Entry]:
        with self._lock:
            return list(self._entries)

    def colors(self) -> list[int]:
        with self._lock:
            return resolve_colors(self._entries, self._style.color)

    def to_frame(self) -> pd.DataFrame:
        with self._lock:
            rows = [
                {"position": entry.position, "value": entry.value, "color": color}
                for entry, color in zip(self._entries, resolve_colors(self._entries, self._style.color))
            ]
        return pd.DataFrame(rows, columns=["position", "value", "color"])


def build_store(config: AppConfig) -> SeriesStore:
    policy = build_policy(
        config.series.kind,
        maximum_time_entries=config.series.maximum_time_entries,
        window_mode=config.series.window_mode,
        maximum_bar_slots=config.series.maximum_bar_slots,
    )
    return SeriesStore(
        policy=policy,
        style=config.style,
        malformed_policy=config.series.malformed_policy,
    )
