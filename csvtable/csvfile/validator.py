from __future__ import annotations

from ..models.file_meta import FileMeta, Rejection

"""Pre-read gate on the candidate file.

Size is checked before type: an oversized non-CSV file is TOO_BIG, not NOT_CSV.
"""

__all__ = [
    "MAX_FILE_BYTES",
    "CSV_CONTENT_TYPE",
    "validate",
]

MAX_FILE_BYTES = 400_000
CSV_CONTENT_TYPE = "text/csv"


def validate(
    meta: FileMeta,
    *,
    max_bytes: int = MAX_FILE_BYTES,
    content_type: str = CSV_CONTENT_TYPE,
) -> Rejection | None:
    """Return the rejection reason for ``meta``, or None when it may be read."""
    if meta.size > max_bytes:
        return Rejection.TOO_BIG
    # exact match, no parameters such as "; charset=utf-8"
    if meta.content_type != content_type:
        return Rejection.NOT_CSV
    return None
