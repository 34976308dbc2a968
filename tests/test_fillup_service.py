from datetime import UTC, date, datetime

import pytest

from core.exceptions import ResourceNotFoundError, ValidationError
from date_utils import Month
from gas.models import FuelRecord, Vehicle
from gas.services.csv_codec import CsvCodec
from gas.services.fillup_service import FillupService

LINES = [
    "01/05/2024 09:00,10000,40.000,true,false,60.000,first fill",
    "01/19/2024 18:30,10300,10.000,false,false,16.000,top up",
    "02/03/2024 07:15,10700,25.000,true,false,40.000,",
    "02/20/2024,11100,30.000,true,false,45.000,long trip",
    "bad,line",
]


def test_store_requires_vehicle_id(store) -> None:
    with pytest.raises(ValidationError) as excinfo:
        store.save_record(FuelRecord(volume=1.0))
    assert excinfo.value.field == "vehicle_id"


def test_store_assigns_ids_and_orders_by_timestamp_then_id(store) -> None:
    later = FuelRecord(vehicle_id=1, volume=1.0, timestamp=datetime(2024, 2, 1))
    tie_a = FuelRecord(vehicle_id=1, volume=1.0, timestamp=datetime(2024, 1, 1))
    tie_b = FuelRecord(vehicle_id=1, volume=2.0, timestamp=datetime(2024, 1, 1))
    other = FuelRecord(vehicle_id=2, volume=1.0)

    ids = [store.save_record(r) for r in (later, tie_b, tie_a, other)]

    assert ids == [1, 2, 3, 4]
    assert later.id == 1
    loaded = store.load_records(1)
    assert [r.id for r in loaded] == [2, 3, 1]
    assert len(store) == 4


def test_store_orders_aware_and_decoded_records_together(store) -> None:
    aware = FuelRecord(vehicle_id=1, volume=1.0, timestamp=datetime(2024, 1, 1, tzinfo=UTC))
    decoded = CsvCodec.decode("01/02/2024,100,2.0,true,false", vehicle_id=1)
    store.save_record(decoded)
    store.save_record(aware)

    loaded = store.load_records(1)

    assert [r.timestamp for r in loaded] == [datetime(2024, 1, 1), datetime(2024, 1, 2)]
    assert FillupService.get_fillups(store, 1, start_date="2024-01-02") == [loaded[1]]


def test_store_hands_out_snapshots(store) -> None:
    record = FuelRecord(vehicle_id=1, volume=5.0)
    store.save_record(record)

    loaded = store.load_records(1)[0]
    loaded.notes = "changed"

    assert store.load_records(1)[0].notes == ""


def test_store_delete(store) -> None:
    record_id = store.save_record(FuelRecord(vehicle_id=1, volume=5.0))
    store.delete_record(record_id)
    assert store.load_records(1) == []
    with pytest.raises(ResourceNotFoundError):
        store.delete_record(record_id)


def test_import_lines_saves_decoded_records(store, vehicle) -> None:
    result = FillupService.import_lines(store, vehicle, LINES)

    assert len(result.records) == 4
    assert [f.line_number for f in result.failures] == [5]
    loaded = store.load_records(vehicle.id)
    assert [r.odometer for r in loaded] == [10000, 10300, 10700, 11100]
    assert all(r.vehicle_id == vehicle.id for r in loaded)
    assert all(r.id is not None for r in result.records)


def test_import_requires_saved_vehicle(store) -> None:
    with pytest.raises(ValidationError):
        FillupService.import_lines(store, Vehicle(name="Unsaved"), LINES)


def test_recalculate_and_get_fillups(store, vehicle) -> None:
    FillupService.import_lines(store, vehicle, LINES)

    records = FillupService.get_fillups(store, vehicle.id)
    assert records[2].economy.distance == 700
    assert records[2].economy.volume == pytest.approx(35.0)
    assert records[3].economy.mileage == pytest.approx(400 / 30)

    # the first record in a window keeps the economy computed from history
    window = FillupService.get_fillups(store, vehicle.id, start_date="2024-02-01")
    assert [r.odometer for r in window] == [10700, 11100]
    assert window[0].economy.distance == 700


def test_date_only_end_bound_covers_the_whole_day(store, vehicle) -> None:
    FillupService.import_lines(store, vehicle, LINES)

    through_19th = FillupService.get_fillups(store, vehicle.id, end_date="2024-01-19")
    assert [r.odometer for r in through_19th] == [10000, 10300]

    as_date = FillupService.get_fillups(store, vehicle.id, end_date=date(2024, 1, 19))
    assert [r.odometer for r in as_date] == [10000, 10300]

    # an explicit time is kept as given
    before_evening = FillupService.get_fillups(
        store, vehicle.id, end_date="2024-01-19T18:00"
    )
    assert [r.odometer for r in before_evening] == [10000]


def test_get_fillups_rejects_invalid_bounds(store, vehicle) -> None:
    with pytest.raises(ValidationError) as excinfo:
        FillupService.get_fillups(store, vehicle.id, end_date="someday")
    assert excinfo.value.field == "end_date"


def test_export_lines_recomputes_advisory_values(store, vehicle) -> None:
    FillupService.import_lines(store, vehicle, LINES)

    exported = FillupService.export_lines(store, vehicle.id)

    assert exported[0] == "01/05/2024 09:00,10000,40.000,true,false,60.000,first fill"
    assert exported[2] == "02/03/2024 07:15,10700,25.000,true,false,40.000,,20.00"
    assert exported[3].startswith("02/20/2024 00:00,11100,")
    assert exported[3].endswith(",13.33")


def test_get_statistics(store, vehicle) -> None:
    FillupService.import_lines(store, vehicle, LINES)

    stats = FillupService.get_statistics(store, vehicle.id)

    assert stats.calculation_count == 2
    assert stats.distance == 1100
    assert stats.volume == pytest.approx(65.0)
    assert stats.cost == pytest.approx(101.0)


def test_monthly_report(store, vehicle) -> None:
    FillupService.import_lines(store, vehicle, LINES)

    report = FillupService.monthly_report(store, vehicle.id)

    assert list(report) == [Month(2024, 1), Month(2024, 2)]
    assert report[Month(2024, 1)].distance == 300
    assert report[Month(2024, 2)].distance == 800
    assert report[Month(2024, 2)].cost == pytest.approx(85.0)

    february = FillupService.monthly_report(
        store, vehicle.id, start_date="2024-02-01", end_date="2024-02-28"
    )
    assert list(february) == [Month(2024, 2)]
