"""Serialization utilities for fuel log interchange fields."""

from datetime import datetime

from core.exceptions import ParseError
from date_utils import format_fixed_timestamp, parse_fixed_timestamp

# Every character str.splitlines() treats as a line boundary
LINE_BREAK_CHARS = "\n\r\x0b\x0c\x1c\x1d\x1e\x85\u2028\u2029"


def parse_csv_timestamp(value: str) -> datetime:
    """Parse an interchange timestamp (date+time, or date only).

    Args:
        value: ``MM/DD/YYYY HH:MM`` or ``MM/DD/YYYY``

    Returns:
        Naive datetime object

    Raises:
        ParseError: If neither pattern matches
    """
    parsed = parse_fixed_timestamp(value)
    if parsed is None:
        raise ParseError("timestamp", value)
    return parsed


def format_csv_timestamp(value: datetime) -> str:
    return format_fixed_timestamp(value)


def sanitize_notes(notes: str, delimiter: str = ",") -> str:
    """Replace the delimiter and every line-break character with a space.

    This is lossy: the replaced characters cannot be recovered on decode.
    """
    table = str.maketrans({char: " " for char in delimiter + LINE_BREAK_CHARS})
    return notes.translate(table)
