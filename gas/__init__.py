"""Fuel log package.

This package provides:
- Fuel purchase records validated at the boundary
- Partial-fill-aware fuel economy calculations
- Trip summaries and monthly rollups
- A versioned text interchange format readable across schema generations

The package is organized into:
- models.py: records, economy results, trips and vehicles
- services/: calculation, aggregation and interchange logic
- store.py: the record store boundary
- serializers.py, formatting.py: field-level text helpers
"""

from gas.models import FuelRecord, MileageCalculation, TripSummary, Vehicle
from gas.services import CsvCodec, FillupService, MileageCalculator, TripAggregator

__all__ = [
    "CsvCodec",
    "FillupService",
    "FuelRecord",
    "MileageCalculation",
    "MileageCalculator",
    "TripAggregator",
    "TripSummary",
    "Vehicle",
]
