from __future__ import annotations

from collections.abc import Awaitable, Callable
from dataclasses import dataclass
from enum import Enum

"""Uploaded file metadata and validator outcomes."""

__all__ = [
    "FileMeta",
    "PickedFile",
    "Rejection",
]


@dataclass(frozen=True)
class FileMeta:
    """What is known about a candidate file before any read."""
    name: str
    size: int  # bytes
    content_type: str  # declared MIME type, e.g. "text/csv"


@dataclass(frozen=True)
class PickedFile:
    """A file chosen by the user in the picker.

    ``read`` is the deferred content read; it is only awaited after the
    file passed validation.
    """
    meta: FileMeta
    read: Callable[[], Awaitable[bytes]]


class Rejection(Enum):
    """Reasons a file is refused before reading (checked in this order)."""
    TOO_BIG = "too_big"
    NOT_CSV = "not_csv"
