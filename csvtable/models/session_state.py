from __future__ import annotations

from dataclasses import dataclass

from .decode_error import DecodeError
from .file_meta import FileMeta, Rejection
from .record import AS_READ, Record, SortState

"""SessionState variants.

Exactly one variant describes the session at any time. Variants are immutable and
replaced wholesale on every processed intent.

    Idle -> AwaitingPick -> (RejectedFile | ReadingFile)
    ReadingFile -> (Loaded | DecodeFailed)
    Loaded -> Loaded (sort)
    any -> Idle (clear)
"""

__all__ = [
    "Idle",
    "AwaitingPick",
    "ReadingFile",
    "RejectedFile",
    "Loaded",
    "DecodeFailed",
    "SessionState",
]


@dataclass(frozen=True)
class Idle:
    pass


@dataclass(frozen=True)
class AwaitingPick:
    attempt: int


@dataclass(frozen=True)
class ReadingFile:
    attempt: int
    file: FileMeta


@dataclass(frozen=True)
class RejectedFile:
    reason: Rejection
    file: FileMeta


@dataclass(frozen=True)
class Loaded:
    """Decoded records currently on display.

    ``as_read`` keeps decode order so every re-sort starts from file order.
    """
    records: tuple[Record, ...]
    sort_state: SortState = AS_READ
    as_read: tuple[Record, ...] | None = None

    def __post_init__(self) -> None:
        if self.as_read is None:
            object.__setattr__(self, "as_read", self.records)


@dataclass(frozen=True)
class DecodeFailed:
    error: DecodeError


SessionState = Idle | AwaitingPick | ReadingFile | RejectedFile | Loaded | DecodeFailed
