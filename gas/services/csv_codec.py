"""Versioned interchange codec for fuel records.

One record per line, fields joined by a single delimiter with no quoting.
The schema generation is detected from the field count:

- 5: timestamp,odometer,volume,full_tank,calculation_hidden
- 6: the above plus an advisory mileage value
- 7: timestamp,odometer,volume,full_tank,calculation_hidden,cost,notes
- 8: the above plus an advisory mileage value

Advisory values are informational only and are never read back; economy is
always recomputed from the record stream.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable
from dataclasses import dataclass, field
from enum import Enum

from core.casting import format_decimal, parse_flag
from core.exceptions import FillupError, FormatError
from gas.formatting import DEFAULT_FORMATTER, ValueFormatter
from gas.models import FuelRecord
from gas.serializers import format_csv_timestamp, parse_csv_timestamp, sanitize_notes

logger = logging.getLogger(__name__)

DELIMITER = ","
DECIMAL_PLACES = 3


class CsvGeneration(str, Enum):
    """Historical layouts of the interchange line."""

    LEGACY = "legacy"  # no cost or notes
    CURRENT = "current"


# field count -> (generation, carries advisory value)
_LAYOUTS: dict[int, tuple[CsvGeneration, bool]] = {
    5: (CsvGeneration.LEGACY, False),
    6: (CsvGeneration.LEGACY, True),
    7: (CsvGeneration.CURRENT, False),
    8: (CsvGeneration.CURRENT, True),
}


def detect_generation(field_count: int) -> CsvGeneration:
    """Return the generation that produced a line with ``field_count`` fields.

    Raises:
        FormatError: If no generation has that many fields
    """
    layout = _LAYOUTS.get(field_count)
    if layout is None:
        raise FormatError(field_count)
    return layout[0]


def _format_flag(value: bool) -> str:
    return "true" if value else "false"


@dataclass
class ImportFailure:
    """A line that could not be decoded."""

    line_number: int
    line: str
    error: FillupError


@dataclass
class ImportResult:
    """Outcome of a batch import."""

    records: list[FuelRecord] = field(default_factory=list)
    failures: list[ImportFailure] = field(default_factory=list)

    @property
    def ok(self) -> bool:
        return not self.failures


class CsvCodec:
    """Encode and decode fuel records as interchange lines."""

    @staticmethod
    def encode(record: FuelRecord, formatter: ValueFormatter | None = None) -> str:
        """Encode a record in the current generation.

        Delimiter and line-break characters in the notes are replaced with
        spaces. The advisory mileage value is appended only when the record
        carries an economy annotation.
        """
        fields = [
            format_csv_timestamp(record.timestamp),
            str(record.odometer),
            format_decimal(record.volume, DECIMAL_PLACES),
            _format_flag(record.full_tank),
            _format_flag(record.calculation_hidden),
            format_decimal(record.cost, DECIMAL_PLACES),
            sanitize_notes(record.notes, DELIMITER),
        ]

        if record.economy is not None:
            rendered = (formatter or DEFAULT_FORMATTER).format(record.economy.mileage)
            fields.append(rendered.replace(DELIMITER, "."))

        return DELIMITER.join(fields)

    @staticmethod
    def encode_lines(
        records: Iterable[FuelRecord],
        formatter: ValueFormatter | None = None,
    ) -> list[str]:
        return [CsvCodec.encode(record, formatter) for record in records]

    @staticmethod
    def decode(line: str, vehicle_id: int | None = None) -> FuelRecord:
        """Decode one interchange line of any known generation.

        Args:
            line: The line, with or without its terminator
            vehicle_id: Owner to assign to the decoded record

        Returns:
            A new record without an id or economy annotation

        Raises:
            FormatError: If the field count matches no generation
            ParseError: If a field is not a well-formed number or date
            ValidationError: If a field is outside its bounds
        """
        values = line.rstrip("\r\n").split(DELIMITER)
        generation = detect_generation(len(values))

        data = {
            "vehicle_id": vehicle_id,
            "timestamp": parse_csv_timestamp(values[0]),
            "odometer": values[1],
            "volume": values[2],
            "full_tank": parse_flag(values[3]),
            "calculation_hidden": parse_flag(values[4]),
        }

        if generation is CsvGeneration.CURRENT:
            data["cost"] = values[5]
            data["notes"] = values[6]
        else:
            data["cost"] = 0.0
            data["notes"] = ""

        record = FuelRecord(**data)
        logger.debug(
            "Decoded %s record (%d fields) at odometer %d",
            generation.value,
            len(values),
            record.odometer,
        )
        return record

    @staticmethod
    def decode_lines(
        lines: Iterable[str],
        vehicle_id: int | None = None,
    ) -> ImportResult:
        """Decode a batch of lines.

        Blank lines are skipped. A line that fails to decode is recorded as a
        failure and does not affect the rest of the batch.
        """
        result = ImportResult()

        for line_number, line in enumerate(lines, start=1):
            if not line.strip():
                continue
            try:
                result.records.append(CsvCodec.decode(line, vehicle_id))
            except FillupError as e:
                logger.warning("Skipping line %d: %s", line_number, e.message)
                result.failures.append(
                    ImportFailure(
                        line_number=line_number,
                        line=line.rstrip("\r\n"),
                        error=e,
                    )
                )

        logger.info(
            "Imported %d record(s), %d line(s) failed",
            len(result.records),
            len(result.failures),
        )
        return result
