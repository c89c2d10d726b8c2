"""
Coordinate validation of survey points.

Each CSV row holds ``id,element_lat,tag_lat,element_lon,tag_lon``.  The
tag values are rounded to seven decimals and compared with the element
position.  The default ``greater`` mode only flags an axis when the
element value is strictly greater than the rounded tag value; the
``inequality`` mode flags any difference.

Rows that cannot be parsed are logged, collected in the result and
skipped, so one bad row never stops the rest of the batch.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from decimal import Decimal, InvalidOperation, ROUND_HALF_UP
from typing import List, Sequence

from ..config.queries import CSV_COLUMNS
from ..errors import MalformedRowError
from ..models import Axis, DiscrepancyEntry, SurveyPointRecord

PRECISION = Decimal("0.0000001")

# Absolute bound of each coordinate column.
COORDINATE_LIMITS = {
    "lat": Decimal(90),
    "latitude": Decimal(90),
    "lon": Decimal(180),
    "longitude": Decimal(180),
}


@dataclass
class ValidationResult:
    entries: List[DiscrepancyEntry] = field(default_factory=list)
    malformed: List[MalformedRowError] = field(default_factory=list)
    processed: int = 0


def round_coordinate(value: Decimal) -> Decimal:
    """Round to seven decimals, halves away from zero."""
    return value.quantize(PRECISION, rounding=ROUND_HALF_UP)


def _to_decimal(raw: str, name: str, line_number: int, line: str) -> Decimal:
    try:
        value = Decimal(raw.strip())
    except InvalidOperation:
        raise MalformedRowError(line_number, line, f"{name} is not numeric: {raw!r}") from None
    if not value.is_finite():
        raise MalformedRowError(line_number, line, f"{name} is not finite: {raw!r}")
    if abs(value) > COORDINATE_LIMITS[name]:
        raise MalformedRowError(line_number, line, f"{name} is out of range: {raw!r}")
    return value


def parse_row(line: str, line_number: int = 1) -> SurveyPointRecord:
    """Parse one CSV row into a ``SurveyPointRecord``.

    Raises:
        MalformedRowError: If a field is missing, not numeric or a
            coordinate is outside its valid range.
    """
    fields: Sequence[str] = line.split(",")
    if len(fields) != len(CSV_COLUMNS):
        raise MalformedRowError(
            line_number, line, f"expected {len(CSV_COLUMNS)} fields, found {len(fields)}"
        )
    for name, raw in zip(CSV_COLUMNS, fields):
        if not raw.strip():
            raise MalformedRowError(line_number, line, f"{name} is empty")
    raw_id = fields[0].strip()
    if not raw_id.isdigit():
        raise MalformedRowError(line_number, line, f"id is not an integer: {fields[0]!r}")
    try:
        point_id = int(raw_id)
    except ValueError:
        raise MalformedRowError(line_number, line, f"id is not an integer: {fields[0]!r}") from None
    element_lat, tag_lat, element_lon, tag_lon = (
        _to_decimal(raw, name, line_number, line) for name, raw in zip(CSV_COLUMNS[1:], fields[1:])
    )
    return SurveyPointRecord(
        id=point_id,
        element_lat=element_lat,
        tag_lat=tag_lat,
        element_lon=element_lon,
        tag_lon=tag_lon,
    )


def _is_discrepancy(element: Decimal, rounded_tag: Decimal, mode: str) -> bool:
    if mode == "greater":
        return element > rounded_tag
    if mode == "inequality":
        return element != rounded_tag
    raise ValueError(f"Unknown comparison mode: {mode}")


def check_record(record: SurveyPointRecord, mode: str = "greater") -> List[DiscrepancyEntry]:
    """Compare one record, latitude first, and return its discrepancies."""
    entries: List[DiscrepancyEntry] = []
    axes = (
        (Axis.LATITUDE, record.element_lat, record.tag_lat),
        (Axis.LONGITUDE, record.element_lon, record.tag_lon),
    )
    for axis, element, tag in axes:
        rounded = round_coordinate(tag)
        if _is_discrepancy(element, rounded, mode):
            entries.append(DiscrepancyEntry(
                point_id=record.id,
                axis=axis,
                element_value=element,
                rounded_tag_value=rounded,
            ))
    return entries


def validate_csv(text: str, mode: str = "greater") -> ValidationResult:
    """Validate every row of the Overpass CSV output in input order."""
    result = ValidationResult()
    logging.info("[survey_check] Validating survey point coordinates", extra={"mode": mode})
    for line_number, raw_line in enumerate(text.splitlines(), start=1):
        line = raw_line.strip()
        if not line:
            continue
        try:
            record = parse_row(line, line_number)
        except MalformedRowError as err:
            logging.warning("[survey_check] Skipping malformed row: %s", err)
            result.malformed.append(err)
            continue
        logging.debug("[survey_check] Processing survey point id %s", record.id)
        result.processed += 1
        result.entries.extend(check_record(record, mode))
    logging.info(
        "[survey_check] Validation finished",
        extra={
            "processed": result.processed,
            "discrepancies": len(result.entries),
            "malformed": len(result.malformed),
        },
    )
    return result
