from __future__ import annotations

from dataclasses import dataclass

from .file_meta import PickedFile
from .record import Column

"""User intents and effect completions consumed by the session state machine.

RequestUpload / SortBy / Clear come from the presentation layer. FileSelected and
ContentRead are posted back by the picker and read tasks; they carry the attempt
number that spawned them so stale completions can be dropped.
"""

__all__ = [
    "RequestUpload",
    "FileSelected",
    "ContentRead",
    "SortBy",
    "Clear",
    "Intent",
]


@dataclass(frozen=True)
class RequestUpload:
    pass


@dataclass(frozen=True)
class FileSelected:
    attempt: int
    file: PickedFile


@dataclass(frozen=True)
class ContentRead:
    attempt: int
    content: bytes | None = None
    failure: BaseException | None = None  # read raised instead of returning bytes


@dataclass(frozen=True)
class SortBy:
    column: Column


@dataclass(frozen=True)
class Clear:
    pass


Intent = RequestUpload | FileSelected | ContentRead | SortBy | Clear
