from __future__ import annotations

import csv
import io
import re
from collections.abc import Callable, Iterator
from dataclasses import dataclass
from typing import Any

from ..models.decode_error import UNKNOWN_POSITION, CsvDecodeError, DecodeError, DecodeReason
from ..models.record import Record

"""CSV text -> Records.

Two steps:
1. tokenize(): RFC-4180 tokenization (comma delimiter, double-quote quoting,
   doubled quotes, embedded delimiters/newlines). First non-blank line is the header.
2. decode(): positional decode of each data row through FIELD_RULES.

Fail-fast: the first bad row stops decoding and raises CsvDecodeError; no partial
result is returned. Header names are not checked.

Row policy:
- blank lines are skipped and do not take a row index
- missing required field -> MISSING_FIELD, missing optional field -> None
- extra fields -> UNEXPECTED_FIELD at the first extra index
"""

__all__ = [
    "RawCsv",
    "FieldRule",
    "FIELD_RULES",
    "tokenize",
    "decode_row",
    "decode",
]

_INT_RE = re.compile(r"[+-]?[0-9]+")


@dataclass(frozen=True)
class RawCsv:
    header: tuple[str, ...]
    rows: tuple[tuple[str, ...], ...]


class _FieldDecodeError(Exception):
    """Internal: a single field failed; position is added by the caller."""

    def __init__(self, reason: DecodeReason, value: str | None = None) -> None:
        super().__init__(reason.value)
        self.reason = reason
        self.value = value


@dataclass(frozen=True)
class FieldRule:
    """How one positional field maps onto a Record attribute."""
    attr: str
    parse: Callable[[str], Any]
    required: bool = True


def _parse_int(value: str) -> int:
    if not _INT_RE.fullmatch(value):
        raise _FieldDecodeError(DecodeReason.NOT_AN_INT, value)
    return int(value)


def _parse_str(value: str) -> str:
    return value


def _parse_optional_int(value: str) -> int | None:
    if value == "":
        return None
    return _parse_int(value)


# Field order is the CSV column order: id, name, parentId.
FIELD_RULES: tuple[FieldRule, ...] = (
    FieldRule("id", _parse_int),
    FieldRule("name", _parse_str),
    FieldRule("parent_id", _parse_optional_int, required=False),
)


def _iter_rows(raw_text: str) -> Iterator[tuple[int, list[str]]]:
    """Yield (data_row_index, fields); data_row_index is -1 for the header."""
    # no single field can be longer than the whole text
    if len(raw_text) > csv.field_size_limit():
        csv.field_size_limit(len(raw_text))
    reader = csv.reader(io.StringIO(raw_text, newline=""), strict=True)
    index = -1
    while True:
        try:
            fields = next(reader)
        except StopIteration:
            return
        except csv.Error as e:
            raise CsvDecodeError(
                DecodeError(
                    row=index if index >= 0 else UNKNOWN_POSITION,
                    field=UNKNOWN_POSITION,
                    reason=DecodeReason.MALFORMED_QUOTING,
                    detail=f"line {reader.line_num}: {e}",
                )
            ) from e
        if not fields:
            continue
        yield index, fields
        index += 1


def tokenize(raw_text: str) -> RawCsv:
    """Split ``raw_text`` into header and data rows.

    Raises:
        CsvDecodeError: MALFORMED_QUOTING on unterminated quotes or text after a closing quote
    """
    header: tuple[str, ...] = ()
    rows: list[tuple[str, ...]] = []
    for index, fields in _iter_rows(raw_text):
        if index < 0:
            header = tuple(fields)
        else:
            rows.append(tuple(fields))
    return RawCsv(header=header, rows=tuple(rows))


def decode_row(row_index: int, fields: tuple[str, ...] | list[str]) -> Record:
    """Decode one data row positionally; raises CsvDecodeError on the first bad field."""
    if len(fields) > len(FIELD_RULES):
        raise CsvDecodeError(
            DecodeError(
                row=row_index,
                field=len(FIELD_RULES),
                reason=DecodeReason.UNEXPECTED_FIELD,
                detail=fields[len(FIELD_RULES)],
            )
        )
    values: dict[str, Any] = {}
    for field_index, rule in enumerate(FIELD_RULES):
        if field_index >= len(fields):
            if rule.required:
                raise CsvDecodeError(
                    DecodeError(row=row_index, field=field_index, reason=DecodeReason.MISSING_FIELD)
                )
            values[rule.attr] = None
            continue
        try:
            values[rule.attr] = rule.parse(fields[field_index])
        except _FieldDecodeError as e:
            raise CsvDecodeError(
                DecodeError(row=row_index, field=field_index, reason=e.reason, detail=e.value)
            ) from None
    return Record(**values)


def decode(raw_text: str) -> list[Record]:
    """Decode CSV text into Records in file order.

    Raises:
        CsvDecodeError: carrying the DecodeError of the first failing row/field
    """
    raw = tokenize(raw_text)
    return [decode_row(index, fields) for index, fields in enumerate(raw.rows)]
