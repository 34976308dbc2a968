"""Business logic for folding fuel records into trip summaries."""

from __future__ import annotations

import logging
from collections.abc import Callable, Hashable, Iterable, Sequence
from datetime import datetime
from typing import Any

from date_utils import Month
from gas.models import FuelRecord, TripSummary

logger = logging.getLogger(__name__)


def _copy_summary(summary: TripSummary) -> TripSummary:
    return summary.model_copy(update={"records": set(summary.records)})


class TripAggregator:
    """Service class for trip summaries and period rollups."""

    @staticmethod
    def empty(when: datetime) -> TripSummary:
        """Summary with zero totals and a single-instant date range."""
        return TripSummary.empty(when)

    @staticmethod
    def from_record_pair(start: FuelRecord, end: FuelRecord) -> TripSummary:
        """Trip spanning two consecutive purchases.

        Distance is the odometer delta; volume and cost come from the end
        purchase only, which is the only record the trip holds.
        """
        return TripSummary.between(start, end)

    @staticmethod
    def merge(a: TripSummary, b: TripSummary) -> TripSummary:
        """Return a new summary combining ``a`` and ``b``.

        Neither input is modified. Inputs must be built from disjoint
        records: overlapping summaries double count their totals.
        """
        return _copy_summary(a).merge(b)

    @staticmethod
    def merge_all(summaries: Iterable[TripSummary]) -> TripSummary | None:
        """Combine any number of summaries; None when there are none."""
        total: TripSummary | None = None
        for summary in summaries:
            total = _copy_summary(summary) if total is None else total.merge(summary)
        return total

    @staticmethod
    def from_records(records: Sequence[FuelRecord]) -> list[TripSummary]:
        """One trip per pair of consecutive records, oldest first."""
        return [
            TripSummary.between(start, end)
            for start, end in zip(records, records[1:])
        ]

    @staticmethod
    def rollup(
        trips: Iterable[TripSummary],
        period_key: Callable[[datetime], Any] = Month.from_date,
    ) -> dict[Hashable, TripSummary]:
        """Merge trips into one summary per period.

        A trip belongs to the period of its end date. ``period_key`` maps a
        date to any ordered, hashable key; calendar months by default.

        Returns:
            Period key -> summary, ordered by key
        """
        periods: dict[Any, TripSummary] = {}

        for trip in trips:
            key = period_key(trip.end_date)
            if key in periods:
                periods[key].merge(trip)
            else:
                periods[key] = _copy_summary(trip)

        logger.debug("Rolled trips up into %d period(s)", len(periods))
        return dict(sorted(periods.items()))
