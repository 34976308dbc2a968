"""Formatting collaborators for rendering computed values as text.

The host application builds one formatter and passes it to whatever needs to
render (never compute) a value.
"""

from __future__ import annotations

from typing import Protocol

from config import ADVISORY_DECIMAL_PLACES
from core.casting import format_decimal


class ValueFormatter(Protocol):
    def format(self, value: float) -> str: ...


class FixedDecimalFormatter:
    """Locale-independent formatter with a fixed number of decimal places."""

    def __init__(self, places: int = ADVISORY_DECIMAL_PLACES) -> None:
        self.places = places

    def format(self, value: float) -> str:
        return format_decimal(value, self.places)


DEFAULT_FORMATTER: ValueFormatter = FixedDecimalFormatter()
