from __future__ import annotations

import math
from itertools import zip_longest
from numbers import Real
from typing import Any, Sequence


def parse_number(raw: Any) -> float | None:
    """Parse one raw field as a finite float, or return None."""
    if isinstance(raw, bool):
        return None
    if not isinstance(raw, (Real, str)):
        return None
    try:
        value = float(raw.strip() if isinstance(raw, str) else raw)
    except (OverflowError, ValueError):
        return None
    if not math.isfinite(value):
        return None
    return value


def parse_tuple(fields: Any) -> tuple[float, float] | None:
    """Parse the first two fields of an external tuple into ``(x, y)``.

    Absence of a result is the only failure signal; nothing is raised.
    """
    if isinstance(fields, (str, bytes)) or not isinstance(fields, Sequence):
        return None
    if len(fields) < 2:
        return None
    x = parse_number(fields[0])
    y = parse_number(fields[1])
    if x is None or y is None:
        return None
    return x, y


def parse_elements(elements: str) -> list[list[str]]:
    """Split ``"x1,y1,x2,y2,..."`` into two-field rows.

    A trailing value without a partner is dropped.
    """
    if not elements or not elements.strip():
        return []
    values = [token.strip() for token in elements.split(",")]
    return [[values[idx], values[idx + 1]] for idx in range(0, len(values) - 1, 2)]


def tuples_from_columns(columns: Sequence[Sequence[Any]], use_headers: bool = False) -> list[list[Any]]:
    """Zip columns row-wise into tuples, padding short columns with blanks."""
    if not columns:
        return []
    rows = [list(row) for row in zip_longest(*columns, fillvalue="")]
    if use_headers:
        rows = rows[1:]
    return rows
