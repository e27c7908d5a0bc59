from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

"""Structured decode error.

row   - 0-based data row index (header excluded). -1 when the failure is file-level.
field - 0-based field index within the row. -1 when no single field is at fault
        (tokenization, encoding or read failures).
"""

__all__ = [
    "DecodeReason",
    "DecodeError",
    "CsvDecodeError",
    "UNKNOWN_POSITION",
]

UNKNOWN_POSITION = -1


class DecodeReason(Enum):
    NOT_AN_INT = "not_an_int"
    MISSING_FIELD = "missing_field"
    UNEXPECTED_FIELD = "unexpected_field"
    MALFORMED_QUOTING = "malformed_quoting"
    INVALID_ENCODING = "invalid_encoding"
    READ_FAILED = "read_failed"


_DESCRIPTIONS = {
    DecodeReason.NOT_AN_INT: "expected an integer",
    DecodeReason.MISSING_FIELD: "field is missing",
    DecodeReason.UNEXPECTED_FIELD: "row has more fields than expected",
    DecodeReason.MALFORMED_QUOTING: "malformed quoting",
    DecodeReason.INVALID_ENCODING: "file is not valid text",
    DecodeReason.READ_FAILED: "file could not be read",
}


@dataclass(frozen=True)
class DecodeError:
    """First failure found while decoding a file."""
    row: int
    field: int
    reason: DecodeReason
    detail: str | None = None  # offending value or underlying message

    def __str__(self) -> str:
        # Raw representation, shown verbatim by the table view.
        return f"DecodeError(row={self.row}, field={self.field}, reason={self.reason.name})"

    def describe(self) -> str:
        """Human readable one-liner, e.g. ``row 1, field 0: expected an integer ('X')``."""
        parts = []
        if self.row != UNKNOWN_POSITION:
            parts.append(f"row {self.row}")
        if self.field != UNKNOWN_POSITION:
            parts.append(f"field {self.field}")
        where = ", ".join(parts)
        message = _DESCRIPTIONS[self.reason]
        if self.detail:
            message = f"{message} ({self.detail!r})"
        return f"{where}: {message}" if where else message


class CsvDecodeError(ValueError):
    """Raised by the decoder; carries the structured DecodeError."""

    def __init__(self, error: DecodeError) -> None:
        super().__init__(str(error))
        self.error = error
