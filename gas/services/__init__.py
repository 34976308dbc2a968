"""Fuel log services."""

from gas.services.csv_codec import CsvCodec
from gas.services.fillup_service import FillupService
from gas.services.mileage_service import MileageCalculator
from gas.services.trip_service import TripAggregator

__all__ = [
    "CsvCodec",
    "FillupService",
    "MileageCalculator",
    "TripAggregator",
]
