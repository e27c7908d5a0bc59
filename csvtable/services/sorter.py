from __future__ import annotations

from collections.abc import Callable, Sequence
from typing import Any

from ..models.record import AsRead, Column, Record, Sorted, SortDirection, SortState

"""Column sorting for the record table.

Toggle rule for a header click on ``column``:
- Sorted(column, ASCENDING)  -> Sorted(column, DESCENDING)
- Sorted(column, DESCENDING) -> Sorted(column, ASCENDING)
- anything else              -> Sorted(column, DESCENDING)

So repeated clicks go DESCENDING, ASCENDING, DESCENDING, ... and AsRead is never
returned to; only a fresh file load resets it.
"""

__all__ = [
    "SORT_KEYS",
    "next_sort_state",
    "sort_records",
    "apply_sort",
]


# Absent parent id orders as 0.
SORT_KEYS: dict[Column, Callable[[Record], Any]] = {
    Column.ID: lambda r: r.id,
    Column.NAME: lambda r: r.name,
    Column.PARENT_ID: lambda r: r.parent_id if r.parent_id is not None else 0,
}


def next_sort_state(current: SortState, column: Column) -> Sorted:
    if current == Sorted(column, SortDirection.ASCENDING):
        return Sorted(column, SortDirection.DESCENDING)
    if current == Sorted(column, SortDirection.DESCENDING):
        return Sorted(column, SortDirection.ASCENDING)
    return Sorted(column, SortDirection.DESCENDING)


def sort_records(records: Sequence[Record], state: SortState) -> list[Record]:
    """Order ``records`` for ``state``; stable, so equal keys keep their input order."""
    if isinstance(state, AsRead):
        return list(records)
    return sorted(
        records,
        key=SORT_KEYS[state.column],
        reverse=state.direction is SortDirection.DESCENDING,
    )


def apply_sort(
    records: Sequence[Record], column: Column, current: SortState
) -> tuple[list[Record], Sorted]:
    """Handle a header click: next sort state and the reordered records.

    ``records`` should be in file order so ties resolve to file order.
    """
    new_state = next_sort_state(current, column)
    return sort_records(records, new_state), new_state
