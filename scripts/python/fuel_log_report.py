"""Summarize a fuel-log interchange file.

Reads one vehicle's exported fuel log, recomputes fuel economy, prints a
monthly report and optionally writes the log back out in the current format.

Example:
    python -m scripts.python.fuel_log_report data/car.csv --vehicle Car --export out.csv
"""

from __future__ import annotations

import argparse
import logging
from pathlib import Path

from config import CSV_ENCODING, LOG_LEVEL
from core.exceptions import FillupError
from date_utils import Month
from gas.models import TripSummary, Vehicle
from gas.services.fillup_service import FillupService
from gas.services.mileage_service import MileageStatistics
from gas.store import InMemoryRecordStore

logger = logging.getLogger(__name__)

DEFAULT_VEHICLE_NAME = "Vehicle"


def create_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="fuel_log_report",
        description="Recompute fuel economy and monthly totals from a fuel-log export.",
    )
    parser.add_argument("path", type=Path, help="Interchange file to read")
    parser.add_argument(
        "--vehicle",
        default=DEFAULT_VEHICLE_NAME,
        help=f"Vehicle name (default: {DEFAULT_VEHICLE_NAME})",
    )
    parser.add_argument("--start-date", help="Only report from this ISO date on")
    parser.add_argument(
        "--end-date",
        help="Only report up to this ISO date (a bare date includes that whole day)",
    )
    parser.add_argument(
        "--export",
        type=Path,
        help="Write the log back out in the current interchange format",
    )
    parser.add_argument(
        "--encoding",
        default=CSV_ENCODING,
        help=f"File encoding (default: {CSV_ENCODING})",
    )
    return parser


def print_statistics(stats: MileageStatistics) -> None:
    print("\n" + "=" * 60)
    print("FUEL ECONOMY")
    print("=" * 60)

    if not stats.calculation_count:
        print("\n  No economy calculations (need two full-tank fill-ups).")
        return

    print(f"\n  Calculations: {stats.calculation_count}")
    print(f"  Distance:     {stats.distance}")
    print(f"  Fuel:         {stats.volume:.3f}")
    print(f"  Cost:         {stats.cost:.2f}")
    print(f"  Average:      {stats.average_mileage:.2f}")
    print(f"  Best/Worst:   {stats.best_mileage:.2f} / {stats.worst_mileage:.2f}")


def print_monthly_report(report: dict[Month, TripSummary]) -> None:
    print("\n" + "=" * 60)
    print("MONTHLY TOTALS")
    print("=" * 60 + "\n")

    if not report:
        print("  No trips in range.")
        return

    for month, summary in report.items():
        print(
            f"  {month.long_label:<9} distance {summary.distance:>7}  "
            f"fuel {summary.volume:>9.3f}  cost {summary.cost:>10.2f}  "
            f"avg price {summary.average_price:.3f}"
        )


def main(argv: list[str] | None = None) -> int:
    logging.basicConfig(
        level=LOG_LEVEL,
        format="%(asctime)s %(levelname)s %(message)s",
    )
    args = create_parser().parse_args(argv)

    try:
        lines = args.path.read_text(encoding=args.encoding).splitlines()
    except FileNotFoundError:
        logger.error("File not found: %s", args.path)
        return 1

    store = InMemoryRecordStore()
    try:
        vehicle = Vehicle(id=1, name=args.vehicle)
        result = FillupService.import_lines(store, vehicle, lines)

        for failure in result.failures:
            logger.warning(
                "Line %d rejected (%s): %s",
                failure.line_number,
                type(failure.error).__name__,
                failure.line,
            )

        stats = FillupService.get_statistics(
            store, vehicle.id, args.start_date, args.end_date
        )
        report = FillupService.monthly_report(
            store, vehicle.id, args.start_date, args.end_date
        )
    except FillupError as e:
        logger.error("%s", e.message)
        return 1

    print(f"\n{vehicle.name}: {len(result.records)} record(s) imported")
    print_statistics(stats)
    print_monthly_report(report)

    if args.export:
        exported = FillupService.export_lines(store, vehicle.id)
        args.export.write_text("\n".join(exported) + "\n", encoding=args.encoding)
        logger.info("Wrote %d record(s) to %s", len(exported), args.export)

    return 0 if result.ok else 2


if __name__ == "__main__":
    raise SystemExit(main())
