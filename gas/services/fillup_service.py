"""Business logic for fuel-log imports, exports and economy reporting."""

from __future__ import annotations

import logging
from collections.abc import Iterable
from datetime import date, datetime, time

from core.exceptions import ValidationError
from date_utils import Month, parse_timestamp
from gas.formatting import ValueFormatter
from gas.models import FuelRecord, TripSummary, Vehicle
from gas.services.csv_codec import CsvCodec, ImportResult
from gas.services.mileage_service import (
    MileageCalculator,
    MileageReport,
    MileageStatistics,
)
from gas.services.trip_service import TripAggregator
from gas.store import RecordStore

logger = logging.getLogger(__name__)

DateBound = str | date | datetime | None


def _is_date_only(value: DateBound) -> bool:
    if isinstance(value, datetime):
        return False
    if isinstance(value, date):
        return True
    return isinstance(value, str) and "T" not in value and ":" not in value


def _filter_by_date(
    records: list[FuelRecord],
    start_date: DateBound,
    end_date: DateBound,
) -> list[FuelRecord]:
    start = parse_timestamp(start_date) if start_date else None
    end = parse_timestamp(end_date) if end_date else None
    if start_date and start is None:
        raise ValidationError("start_date", f"invalid date {start_date!r}")
    if end_date and end is None:
        raise ValidationError("end_date", f"invalid date {end_date!r}")
    if end is not None and _is_date_only(end_date):
        # A bare end date covers that whole day
        end = datetime.combine(end.date(), time.max)

    return [
        r
        for r in records
        if (start is None or r.timestamp >= start)
        and (end is None or r.timestamp <= end)
    ]


class FillupService:
    """Service class for fuel-log operations over a record store."""

    @staticmethod
    def recalculate(
        store: RecordStore,
        vehicle_id: int,
    ) -> tuple[list[FuelRecord], MileageReport]:
        """Load a vehicle's records and annotate them with economy.

        Economy is always computed over the vehicle's full history so that
        the first record of any later date window still has its anchor.
        """
        records = store.load_records(vehicle_id)
        report = MileageCalculator.calculate(records)
        if report.anomalies:
            logger.warning(
                "Vehicle %d: %d odometer anomal%s",
                vehicle_id,
                len(report.anomalies),
                "y" if len(report.anomalies) == 1 else "ies",
            )
        return records, report

    @staticmethod
    def get_fillups(
        store: RecordStore,
        vehicle_id: int,
        start_date: DateBound = None,
        end_date: DateBound = None,
    ) -> list[FuelRecord]:
        """Get a vehicle's annotated records, optionally within a date range.

        Args:
            store: Record store
            vehicle_id: Owning vehicle
            start_date: Optional inclusive lower bound (ISO string or date)
            end_date: Optional inclusive upper bound (ISO string or date)

        Returns:
            Records oldest first
        """
        records, _ = FillupService.recalculate(store, vehicle_id)
        return _filter_by_date(records, start_date, end_date)

    @staticmethod
    def import_lines(
        store: RecordStore,
        vehicle: Vehicle,
        lines: Iterable[str],
    ) -> ImportResult:
        """Decode interchange lines and save them for ``vehicle``.

        Lines that fail to decode are reported in the result and skipped.
        """
        if vehicle.id is None:
            raise ValidationError("vehicle_id", "vehicle must be saved before import")

        result = CsvCodec.decode_lines(lines, vehicle_id=vehicle.id)
        for record in result.records:
            store.save_record(record)

        logger.info(
            "Imported %d record(s) for vehicle '%s'",
            len(result.records),
            vehicle.name,
        )
        return result

    @staticmethod
    def export_lines(
        store: RecordStore,
        vehicle_id: int,
        formatter: ValueFormatter | None = None,
    ) -> list[str]:
        """Encode a vehicle's records with freshly computed advisory values."""
        records, _ = FillupService.recalculate(store, vehicle_id)
        return CsvCodec.encode_lines(records, formatter)

    @staticmethod
    def get_statistics(
        store: RecordStore,
        vehicle_id: int,
        start_date: DateBound = None,
        end_date: DateBound = None,
    ) -> MileageStatistics:
        records = FillupService.get_fillups(store, vehicle_id, start_date, end_date)
        return MileageCalculator.statistics(records)

    @staticmethod
    def monthly_report(
        store: RecordStore,
        vehicle_id: int,
        start_date: DateBound = None,
        end_date: DateBound = None,
    ) -> dict[Month, TripSummary]:
        """Per-month trip totals for a vehicle.

        Trips are built between consecutive purchases over the whole history
        and then kept when their end purchase falls within the date range.
        """
        records, _ = FillupService.recalculate(store, vehicle_id)
        trips = TripAggregator.from_records(records)

        wanted = set(_filter_by_date(records, start_date, end_date))
        trips = [t for t in trips if t.records <= wanted]

        return TripAggregator.rollup(trips, Month.from_date)
