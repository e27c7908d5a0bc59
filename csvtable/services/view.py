from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass

import pandas as pd

from ..config.loader import Settings
from ..models.file_meta import Rejection
from ..models.record import Column, Record, Sorted, SortDirection, SortState
from ..models.session_state import (
    AwaitingPick,
    DecodeFailed,
    Idle,
    Loaded,
    ReadingFile,
    RejectedFile,
    SessionState,
)

"""View-model handed to the presentation layer.

The presentation layer renders a TableView and turns header clicks, the upload
button and the clear button back into intents. Nothing here touches widgets.
"""

__all__ = [
    "REJECTION_MESSAGES",
    "format_size",
    "rejection_message",
    "HeaderView",
    "TableView",
    "build_view",
    "render_status_line",
    "table_frame",
]

# Filled with the configured size cap and content type.
REJECTION_MESSAGES = {
    Rejection.TOO_BIG: "File is too big. Pick a CSV file of at most {limit}.",
    Rejection.NOT_CSV: "File is not a CSV file. Pick a file of type {content_type}.",
}

_INDICATORS = {
    SortDirection.ASCENDING: "▲",
    SortDirection.DESCENDING: "▼",
}


@dataclass(frozen=True)
class HeaderView:
    column: Column
    label: str
    indicator: str = ""  # "▲" / "▼" on the sorted column


@dataclass(frozen=True)
class TableView:
    status: str
    headers: tuple[HeaderView, ...]
    rows: tuple[tuple[str, str, str], ...]
    can_clear: bool
    can_upload: bool
    busy: bool  # picker open or read in flight


def format_size(size: int) -> str:
    """Byte count as shown to users.

    >>> format_size(400_000)
    '400 KB'
    >>> format_size(1500)
    '1500 bytes'
    """
    if size >= 1000 and size % 1000 == 0:
        return f"{size // 1000} KB"
    return f"{size} bytes"


def rejection_message(reason: Rejection, settings: Settings | None = None) -> str:
    settings = settings or Settings()
    return REJECTION_MESSAGES[reason].format(
        limit=format_size(settings.max_file_bytes),
        content_type=settings.content_type,
    )


def render_status_line(state: SessionState, settings: Settings | None = None) -> str:
    """One line of status text for ``state``.

    >>> render_status_line(Idle())
    'No file loaded.'
    """
    if isinstance(state, Idle):
        return "No file loaded."
    if isinstance(state, AwaitingPick):
        return "Choose a CSV file..."
    if isinstance(state, ReadingFile):
        return f"Reading {state.file.name}..."
    if isinstance(state, RejectedFile):
        return rejection_message(state.reason, settings)
    if isinstance(state, DecodeFailed):
        # raw structured error, e.g. DecodeError(row=0, field=0, reason=NOT_AN_INT)
        return str(state.error)
    if isinstance(state, Loaded):
        count = len(state.records)
        noun = "record" if count == 1 else "records"
        return f"{count} {noun} loaded."
    raise TypeError(f"unknown session state: {state!r}")


def _headers(sort_state: SortState | None) -> tuple[HeaderView, ...]:
    headers = []
    for column in Column:
        indicator = ""
        if isinstance(sort_state, Sorted) and sort_state.column is column:
            indicator = _INDICATORS[sort_state.direction]
        headers.append(HeaderView(column=column, label=column.label, indicator=indicator))
    return tuple(headers)


def _row_cells(record: Record) -> tuple[str, str, str]:
    parent = "" if record.parent_id is None else str(record.parent_id)
    return (str(record.id), record.name, parent)


def build_view(state: SessionState, settings: Settings | None = None) -> TableView:
    """View for ``state``; ``settings`` supplies the limits named in rejection messages."""
    sort_state = state.sort_state if isinstance(state, Loaded) else None
    rows = tuple(_row_cells(r) for r in state.records) if isinstance(state, Loaded) else ()
    return TableView(
        status=render_status_line(state, settings),
        headers=_headers(sort_state),
        rows=rows,
        can_clear=not isinstance(state, Idle),
        # reopening a closed picker is allowed; a read in flight must finish or be cleared
        can_upload=not isinstance(state, ReadingFile),
        busy=isinstance(state, (AwaitingPick, ReadingFile)),
    )


def table_frame(records: Sequence[Record]) -> pd.DataFrame:
    """Records as a DataFrame with display column names, in the given order."""
    frame = pd.DataFrame(
        {
            Column.ID.label: pd.Series([r.id for r in records], dtype="int64"),
            Column.NAME.label: pd.Series([r.name for r in records], dtype="object"),
            Column.PARENT_ID.label: pd.array([r.parent_id for r in records], dtype="Int64"),
        }
    )
    return frame
