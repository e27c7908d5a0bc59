"""Domain models for the CSV table viewer.

Records, sort selection, file metadata, decode errors, session states and
the intents that drive the session state machine.
"""

from .decode_error import UNKNOWN_POSITION, CsvDecodeError, DecodeError, DecodeReason
from .file_meta import FileMeta, PickedFile, Rejection
from .intents import Clear, ContentRead, FileSelected, Intent, RequestUpload, SortBy
from .record import AS_READ, AsRead, Column, Record, Sorted, SortDirection, SortState
from .session_state import (
    AwaitingPick,
    DecodeFailed,
    Idle,
    Loaded,
    ReadingFile,
    RejectedFile,
    SessionState,
)

__all__ = [
    # Records and sorting
    "Record",
    "Column",
    "SortDirection",
    "AsRead",
    "Sorted",
    "SortState",
    "AS_READ",
    # Files
    "FileMeta",
    "PickedFile",
    "Rejection",
    # Errors
    "DecodeError",
    "DecodeReason",
    "CsvDecodeError",
    "UNKNOWN_POSITION",
    # Session
    "Idle",
    "AwaitingPick",
    "ReadingFile",
    "RejectedFile",
    "Loaded",
    "DecodeFailed",
    "SessionState",
    # Intents
    "RequestUpload",
    "FileSelected",
    "ContentRead",
    "SortBy",
    "Clear",
    "Intent",
]
