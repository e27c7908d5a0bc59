from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

"""Record and sort-selection models.

A Record is one decoded CSV data row. Column / SortDirection / SortState describe
the table ordering selected by the user.
"""

__all__ = [
    "Record",
    "Column",
    "SortDirection",
    "AsRead",
    "Sorted",
    "SortState",
    "AS_READ",
]


@dataclass(frozen=True)
class Record:
    """One successfully decoded data row.

    Only produced by the decoder; a partially decoded row never exists.
    """
    id: int
    name: str  # may be empty
    parent_id: int | None = None  # blank field -> None


class Column(Enum):
    """Table columns, in display (and CSV field) order."""
    ID = "id"
    NAME = "name"
    PARENT_ID = "parent_id"

    @property
    def label(self) -> str:
        return _COLUMN_LABELS[self]


_COLUMN_LABELS = {
    Column.ID: "Id",
    Column.NAME: "Name",
    Column.PARENT_ID: "Parent Id",
}


class SortDirection(Enum):
    ASCENDING = "ascending"
    DESCENDING = "descending"


@dataclass(frozen=True)
class AsRead:
    """No reordering: display order equals decode order."""

    def __str__(self) -> str:
        return "AsRead"


@dataclass(frozen=True)
class Sorted:
    column: Column
    direction: SortDirection

    def __str__(self) -> str:
        return f"Sorted({self.column.name}, {self.direction.name})"


SortState = AsRead | Sorted

AS_READ = AsRead()
