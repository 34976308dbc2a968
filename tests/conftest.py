import sys
from datetime import datetime, timedelta
from pathlib import Path

ROOT = Path(__file__).resolve().parents[1]

if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

import pytest

from gas.models import FuelRecord, Vehicle  # noqa: E402
from gas.store import InMemoryRecordStore  # noqa: E402

T0 = datetime(2024, 1, 1, 8, 30)


@pytest.fixture
def store() -> InMemoryRecordStore:
    return InMemoryRecordStore()


@pytest.fixture
def vehicle() -> Vehicle:
    return Vehicle(id=7, name="Daily Driver", tank_size=14.5)


@pytest.fixture
def make_record():
    """Build records a day apart, oldest first, with sequential ids."""
    counter = {"n": 0}

    def _make(
        odometer: int,
        volume: float = 10.0,
        *,
        full_tank: bool = True,
        cost: float = 35.0,
        hidden: bool = False,
        **extra,
    ) -> FuelRecord:
        counter["n"] += 1
        data = {
            "id": counter["n"],
            "vehicle_id": 7,
            "timestamp": T0 + timedelta(days=counter["n"]),
            "odometer": odometer,
            "volume": volume,
            "cost": cost,
            "full_tank": full_tank,
            "calculation_hidden": hidden,
        }
        data.update(extra)
        return FuelRecord(**data)

    return _make
