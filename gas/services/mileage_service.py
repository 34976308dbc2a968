"""Partial-fill-aware fuel economy calculations.

Economy is only measured between two full-tank fill-ups: the distance is the
odometer delta between them, and the fuel used is everything bought after the
first one up to and including the second. Partial fills in between add their
volume and cost to the next full-tank calculation instead of producing a
figure of their own.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Iterator, Sequence
from dataclasses import dataclass, field
from enum import Enum

from core.exceptions import AnomalyError
from gas.models import FuelRecord, MileageCalculation

logger = logging.getLogger(__name__)


class CalculatorState(Enum):
    """Walk state over one vehicle's records."""

    NO_ANCHOR = "no_anchor"
    ACCUMULATING = "accumulating"


@dataclass
class MileageStep:
    """Result of visiting one record during a walk."""

    record: FuelRecord
    calculation: MileageCalculation | None = None
    anomaly: AnomalyError | None = None


@dataclass
class MileageReport:
    """Outcome of annotating a record sequence."""

    calculated: list[FuelRecord] = field(default_factory=list)
    anomalies: list[AnomalyError] = field(default_factory=list)


@dataclass
class MileageStatistics:
    """Totals over the visible economy annotations of a sequence."""

    calculation_count: int = 0
    distance: int = 0
    volume: float = 0.0
    cost: float = 0.0
    best_mileage: float | None = None
    worst_mileage: float | None = None

    @property
    def average_mileage(self) -> float | None:
        if self.volume > 0:
            return self.distance / self.volume
        return None

    @property
    def cost_per_distance(self) -> float | None:
        if self.distance > 0:
            return self.cost / self.distance
        return None


class MileageCalculator:
    """Derives fuel economy from one vehicle's chronologically ordered records."""

    @staticmethod
    def walk(records: Iterable[FuelRecord]) -> Iterator[MileageStep]:
        """Visit records oldest to newest without modifying them.

        Records are taken in the given order; equal timestamps are not
        re-sorted.

        Yields:
            One MileageStep per record
        """
        state = CalculatorState.NO_ANCHOR
        anchor_odometer = 0
        accumulated_volume = 0.0
        accumulated_cost = 0.0

        for record in records:
            step = MileageStep(record=record)

            if not record.full_tank:
                if state is CalculatorState.ACCUMULATING:
                    accumulated_volume += record.volume
                    accumulated_cost += record.cost
                yield step
                continue

            if state is CalculatorState.ACCUMULATING:
                distance = record.odometer - anchor_odometer
                if distance < 0:
                    step.anomaly = AnomalyError(record.id, distance)
                elif not record.calculation_hidden:
                    step.calculation = MileageCalculation(
                        distance=distance,
                        volume=accumulated_volume + record.volume,
                        cost=accumulated_cost + record.cost,
                    )

            # Every full tank becomes the new anchor, hidden or anomalous alike
            state = CalculatorState.ACCUMULATING
            anchor_odometer = record.odometer
            accumulated_volume = 0.0
            accumulated_cost = 0.0
            yield step

    @staticmethod
    def calculate(records: Sequence[FuelRecord]) -> MileageReport:
        """Attach economy annotations to a record sequence.

        Any previous annotation is replaced, so running this twice over the
        same sequence gives identical results. A negative distance is
        reported in the returned anomalies and leaves that record without an
        annotation; the walk continues.
        """
        report = MileageReport()

        for step in MileageCalculator.walk(records):
            step.record.economy = step.calculation
            if step.calculation is not None:
                report.calculated.append(step.record)
            if step.anomaly is not None:
                logger.warning(
                    "Odometer went backwards at record %s (distance %d); "
                    "economy omitted",
                    step.anomaly.record_id,
                    step.anomaly.distance,
                )
                report.anomalies.append(step.anomaly)

        logger.debug(
            "Calculated economy for %d of %d record(s)",
            len(report.calculated),
            len(records),
        )
        return report

    @staticmethod
    def statistics(records: Iterable[FuelRecord]) -> MileageStatistics:
        """Summarize the economy annotations already attached to records."""
        stats = MileageStatistics()

        for record in records:
            calc = record.economy
            if calc is None or record.calculation_hidden:
                continue
            stats.calculation_count += 1
            stats.distance += calc.distance
            stats.volume += calc.volume
            stats.cost += calc.cost
            mileage = calc.mileage
            if stats.best_mileage is None or mileage > stats.best_mileage:
                stats.best_mileage = mileage
            if stats.worst_mileage is None or mileage < stats.worst_mileage:
                stats.worst_mileage = mileage

        return stats
