from .decoder import FIELD_RULES, FieldRule, RawCsv, decode, tokenize
from .validator import MAX_FILE_BYTES, validate

__all__ = [
    "FIELD_RULES",
    "FieldRule",
    "MAX_FILE_BYTES",
    "RawCsv",
    "decode",
    "tokenize",
    "validate",
]
