"""Record store boundary.

The fuel log core never talks to a storage engine directly. It needs only an
ordered record stream per vehicle and a way to persist a record.
"""

from __future__ import annotations

import logging
from typing import Protocol

from core.exceptions import ResourceNotFoundError, ValidationError
from gas.models import FuelRecord

logger = logging.getLogger(__name__)


class RecordStore(Protocol):
    def load_records(self, vehicle_id: int) -> list[FuelRecord]:
        """Records of one vehicle, oldest first."""
        ...

    def save_record(self, record: FuelRecord) -> int:
        """Persist a record and return its id."""
        ...


class InMemoryRecordStore:
    """
    Dict-backed store.

    Records are stored and handed out as copies without economy
    annotations, so every caller works on its own snapshot. Records sharing
    a timestamp load in id order.
    """

    def __init__(self) -> None:
        self._records: dict[int, FuelRecord] = {}
        self._next_id = 1

    def load_records(self, vehicle_id: int) -> list[FuelRecord]:
        records = [r.clone() for r in self._records.values() if r.vehicle_id == vehicle_id]
        records.sort(key=lambda r: (r.timestamp, r.id))
        return records

    def save_record(self, record: FuelRecord) -> int:
        if record.vehicle_id is None:
            raise ValidationError("vehicle_id", "required to persist a record")

        if record.id is None:
            record.id = self._next_id
        self._next_id = max(self._next_id, record.id + 1)

        self._records[record.id] = record.clone()
        logger.debug("Saved record %d for vehicle %d", record.id, record.vehicle_id)
        return record.id

    def delete_record(self, record_id: int) -> None:
        if self._records.pop(record_id, None) is None:
            raise ResourceNotFoundError(
                f"Fuel record {record_id} not found",
                {"record_id": record_id},
            )

    def __len__(self) -> int:
        return len(self._records)
