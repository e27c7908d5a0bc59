"""Sorting, the session state machine and the table view-model."""

from .session import FilePicker, Session, open_session
from .sorter import apply_sort, next_sort_state, sort_records
from .view import TableView, build_view, render_status_line, table_frame

__all__ = [
    "FilePicker",
    "Session",
    "open_session",
    "apply_sort",
    "next_sort_state",
    "sort_records",
    "TableView",
    "build_view",
    "render_status_line",
    "table_frame",
]
