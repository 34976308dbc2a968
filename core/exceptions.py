"""
Centralized exception hierarchy for fuel-log errors.

Every error carries a human readable message plus a ``details`` dict with the
structured context (field name, raw value, record id, ...) a caller needs to
present a precise diagnostic.
"""

from __future__ import annotations

from typing import Any


class FillupError(Exception):
    """Base exception for all fuel-log errors."""

    def __init__(self, message: str, details: dict | None = None) -> None:
        self.message = message
        self.details = details or {}
        super().__init__(self.message)


class ValidationError(FillupError):
    """Raised when a value falls outside a field's bounds."""

    def __init__(self, field: str, reason: str) -> None:
        self.field = field
        self.reason = reason
        super().__init__(
            f"Invalid value for '{field}': {reason}",
            {"field": field, "reason": reason},
        )


class ParseError(FillupError):
    """Raised when a token is not a well-formed number or date."""

    def __init__(self, field: str, raw_value: Any) -> None:
        self.field = field
        self.raw_value = raw_value
        super().__init__(
            f"Cannot parse '{field}' from {raw_value!r}",
            {"field": field, "raw_value": raw_value},
        )


class FormatError(FillupError):
    """Raised when an interchange line matches no known schema generation."""

    def __init__(self, field_count: int) -> None:
        self.field_count = field_count
        super().__init__(
            f"Unrecognized record format ({field_count} fields)",
            {"field_count": field_count},
        )


class AnomalyError(FillupError):
    """Raised when a mileage calculation yields a negative distance."""

    def __init__(self, record_id: int | None, distance: int | None = None) -> None:
        self.record_id = record_id
        self.distance = distance
        super().__init__(
            f"Negative distance ({distance}) computed for record {record_id}",
            {"record_id": record_id, "distance": distance},
        )


class ResourceNotFoundError(FillupError):
    """Raised when a requested record does not exist."""


FillupException = FillupError
ValidationException = ValidationError
ParseException = ParseError
FormatException = FormatError
AnomalyException = AnomalyError
ResourceNotFoundException = ResourceNotFoundError
