"""
Centralized date and time utilities for the fuel log.

This module is the single source of truth for how purchase timestamps are
read and written. Fuel purchases are recorded in the wall-clock time of the
place they happened, so all datetimes handled here are naive.

Key Features:
-   **Fixed Interchange Patterns**: The interchange format uses fixed,
    locale-independent patterns (``MM/DD/YYYY HH:MM`` with a date-only
    fallback), unlike user-facing display formatting.
-   **Flexible Filter Parsing**: Wraps ``dateutil`` to read ISO 8601 bounds
    given on the command line.
-   **Calendar Periods**: ``Month`` is the ordered period key used for
    monthly rollups.
"""

from __future__ import annotations

import calendar
import logging
from datetime import date, datetime
from functools import total_ordering

from dateutil import parser
from dateutil.relativedelta import relativedelta

logger = logging.getLogger(__name__)

CSV_DATETIME_FORMAT = "%m/%d/%Y %H:%M"
CSV_DATE_FORMAT = "%m/%d/%Y"


def parse_fixed_timestamp(value: str) -> datetime | None:
    """
    Parse an interchange timestamp.

    A date+time value is tried first; a bare date is accepted as midnight.

    Returns:
        The naive datetime, or None if neither pattern matches.
    """
    text = value.strip()
    for pattern in (CSV_DATETIME_FORMAT, CSV_DATE_FORMAT):
        try:
            return datetime.strptime(text, pattern)
        except ValueError:
            continue
    logger.debug("Timestamp '%s' matches no interchange pattern", value)
    return None


def format_fixed_timestamp(value: datetime) -> str:
    """Render a timestamp in the interchange date+time pattern."""
    return value.strftime(CSV_DATETIME_FORMAT)


def parse_timestamp(ts: str | datetime | date | None) -> datetime | None:
    """
    Parse an ISO 8601 timestamp (or date) into a naive datetime.

    Timezone-aware inputs keep their wall-clock value and drop the offset,
    so they compare directly against recorded purchase times.

    Args:
        ts: ISO 8601 string, datetime or date.

    Returns:
        A naive datetime, or None if parsing fails.
    """
    if not ts:
        logger.debug("Received empty timestamp; returning None.")
        return None

    if isinstance(ts, datetime):
        return ts.replace(tzinfo=None)

    if isinstance(ts, date):
        return datetime.combine(ts, datetime.min.time())

    try:
        parsed_time = parser.isoparse(ts)
    except (ValueError, TypeError) as e:
        logger.warning("Failed to parse timestamp '%s': %s", ts, e)
        return None
    return parsed_time.replace(tzinfo=None)


@total_ordering
class Month:
    """One calendar month, usable as an ordered and hashable period key."""

    __slots__ = ("month", "year")

    def __init__(self, year: int, month: int) -> None:
        if not 1 <= month <= 12:
            msg = f"month must be in 1..12, got {month}"
            raise ValueError(msg)
        self.year = year
        self.month = month

    @classmethod
    def from_date(cls, value: date | datetime) -> Month:
        return cls(value.year, value.month)

    @property
    def start(self) -> datetime:
        """First instant of the month."""
        return datetime(self.year, self.month, 1)

    def next(self) -> Month:
        return Month.from_date(self.start + relativedelta(months=1))

    def previous(self) -> Month:
        return Month.from_date(self.start - relativedelta(months=1))

    def contains(self, value: date | datetime) -> bool:
        return value.year == self.year and value.month == self.month

    @property
    def label(self) -> str:
        return calendar.month_abbr[self.month]

    @property
    def long_label(self) -> str:
        return f"{self.label} {self.year}"

    def _key(self) -> tuple[int, int]:
        return (self.year, self.month)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Month):
            return NotImplemented
        return self._key() == other._key()

    def __lt__(self, other: Month) -> bool:
        if not isinstance(other, Month):
            return NotImplemented
        return self._key() < other._key()

    def __hash__(self) -> int:
        return hash(self._key())

    def __repr__(self) -> str:
        return f"Month({self.year}, {self.month})"

    def __str__(self) -> str:
        return self.long_label


def iter_months(first: Month, last: Month):
    """Yield every month from ``first`` to ``last`` inclusive."""
    current = first
    while current <= last:
        yield current
        current = current.next()
