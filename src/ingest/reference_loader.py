"""Reference table loading for SLCSP resolution.

This module turns the plan catalog and ZIP mapping tables into the
read-only lookups the resolver consumes. Malformed rows are skipped and
counted unless strict mode is on; rate areas are never invented for a
row that failed to parse.
"""

from __future__ import annotations

from collections import defaultdict
from decimal import Decimal, InvalidOperation
from pathlib import Path
from types import MappingProxyType
from typing import Callable, Iterable, TypeVar

from core.constants import (
    PLAN_METAL_LEVEL_COLUMN,
    PLAN_RATE_AREA_COLUMN,
    PLAN_RATE_COLUMN,
    PLAN_REQUIRED_COLUMNS,
    PLAN_STATE_COLUMN,
    RATE_DECIMAL_PLACES,
    SILVER_METAL_LEVEL,
    ZIP_RATE_AREA_COLUMN,
    ZIP_REQUIRED_COLUMNS,
    ZIP_STATE_COLUMN,
    ZIP_ZIPCODE_COLUMN,
)
from core.errors import SlcspMalformedRowError
from core.logging_config import get_logger
from core.types import (
    AMBIGUOUS,
    DelimitedTable,
    LoadReport,
    PlanRecord,
    RateArea,
    ReferenceData,
    ZipAreaEntry,
    ZipRecord,
)
from ingest.table_reader import read_delimited_table, require_columns

_LOGGER = get_logger(__name__)

RecordT = TypeVar("RecordT")

_RATE_QUANTUM = Decimal(1).scaleb(-RATE_DECIMAL_PLACES)


def load_reference_data(
    plans_path: str | Path,
    zips_path: str | Path,
    strict: bool = False,
) -> ReferenceData:
    """Load plan and ZIP tables into resolver lookups.

    Args:
        plans_path: Plan catalog table.
        zips_path: ZIP to rate area mapping table.
        strict: Raise on the first malformed row instead of skipping it.

    Returns:
        Read-only reference data.

    Raises:
        SlcspIngestError: If a table is missing, unreadable, or lacks columns.
        SlcspMalformedRowError: If strict and a row fails to parse.
    """
    plans, plan_report = parse_plan_records(read_delimited_table(plans_path), strict)
    zips, zip_report = parse_zip_records(read_delimited_table(zips_path), strict)
    return ReferenceData(
        rates_by_area=build_silver_rate_index(plans),
        areas_by_zip=build_zip_area_index(zips),
        reports=(plan_report, zip_report),
    )


def parse_plan_records(
    table: DelimitedTable,
    strict: bool = False,
) -> tuple[list[PlanRecord], LoadReport]:
    """Parse plan catalog rows.

    Args:
        table: Plan table with state, rate_area, metal_level, rate columns.
        strict: Raise on malformed rows.

    Returns:
        Parsed plans and row accounting.
    """
    columns = require_columns(table, PLAN_REQUIRED_COLUMNS)

    def parse_row(row: tuple[str, ...]) -> PlanRecord:
        return PlanRecord(
            area=build_rate_area(
                row[columns[PLAN_STATE_COLUMN]], row[columns[PLAN_RATE_AREA_COLUMN]]
            ),
            metal_level=row[columns[PLAN_METAL_LEVEL_COLUMN]].strip(),
            rate=parse_rate(row[columns[PLAN_RATE_COLUMN]]),
        )

    return _parse_rows(table, "plans", parse_row, strict)


def parse_zip_records(
    table: DelimitedTable,
    strict: bool = False,
) -> tuple[list[ZipRecord], LoadReport]:
    """Parse ZIP mapping rows; trailing columns such as county are ignored.

    Args:
        table: ZIP table with zipcode, state, rate_area columns.
        strict: Raise on malformed rows.

    Returns:
        Parsed ZIP records and row accounting.
    """
    columns = require_columns(table, ZIP_REQUIRED_COLUMNS)

    def parse_row(row: tuple[str, ...]) -> ZipRecord:
        return ZipRecord(
            zipcode=normalize_zipcode(row[columns[ZIP_ZIPCODE_COLUMN]]),
            area=build_rate_area(
                row[columns[ZIP_STATE_COLUMN]], row[columns[ZIP_RATE_AREA_COLUMN]]
            ),
        )

    return _parse_rows(table, "zips", parse_row, strict)


def build_silver_rate_index(
    plans: Iterable[PlanRecord],
) -> MappingProxyType[RateArea, frozenset[Decimal]]:
    """Group distinct silver plan rates by rate area.

    Args:
        plans: Parsed plan records of any metal level.

    Returns:
        Read-only mapping of rate area to its distinct silver rates.
    """
    rates: defaultdict[RateArea, set[Decimal]] = defaultdict(set)
    for plan in plans:
        if plan.metal_level == SILVER_METAL_LEVEL:
            rates[plan.area].add(plan.rate)
    return MappingProxyType({area: frozenset(values) for area, values in rates.items()})


def build_zip_area_index(zips: Iterable[ZipRecord]) -> MappingProxyType[str, ZipAreaEntry]:
    """Map each ZIP to its single rate area, or ``AMBIGUOUS``.

    A ZIP listed several times for the same rate area stays resolvable.
    Once two rows disagree the ZIP is ambiguous for good.

    Args:
        zips: Parsed ZIP records.

    Returns:
        Read-only mapping of ZIP code to rate area or ``AMBIGUOUS``.
    """
    index: dict[str, ZipAreaEntry] = {}
    for record in zips:
        current = index.get(record.zipcode)
        if current is None:
            index[record.zipcode] = record.area
        elif current is not AMBIGUOUS and current != record.area:
            index[record.zipcode] = AMBIGUOUS
    return MappingProxyType(index)


def build_rate_area(state: str, rate_area: str) -> RateArea:
    """Build a normalized rate area key from separate fields.

    Args:
        state: Raw state code.
        rate_area: Raw rate area id; numeric ids lose leading zeros.

    Returns:
        Structured rate area key.

    Raises:
        SlcspMalformedRowError: If either field is blank.
    """
    state_code = state.strip().upper()
    area_id = rate_area.strip()
    if not state_code or not area_id:
        raise SlcspMalformedRowError("state and rate_area must be non-empty")
    if area_id.isdigit():
        area_id = str(int(area_id))
    return RateArea(state=state_code, rate_area=area_id)


def normalize_zipcode(zipcode: str) -> str:
    """Strip a ZIP code, rejecting blanks."""
    value = zipcode.strip()
    if not value:
        raise SlcspMalformedRowError("zipcode must be non-empty")
    return value


def parse_rate(raw_rate: str) -> Decimal:
    """Parse a monthly premium as a non-negative finite decimal.

    The rate must also fit the decimal context once rounded to cents, so
    every accepted rate can be written out.

    Raises:
        SlcspMalformedRowError: If the text is not a usable rate.
    """
    try:
        rate = Decimal(raw_rate.strip())
    except InvalidOperation as error:
        raise SlcspMalformedRowError(f"rate {raw_rate!r} is not a decimal number") from error
    if not rate.is_finite() or rate < 0:
        raise SlcspMalformedRowError(f"rate {raw_rate!r} must be a non-negative number")
    try:
        rate.quantize(_RATE_QUANTUM)
    except InvalidOperation as error:
        raise SlcspMalformedRowError(
            f"rate {raw_rate!r} has too many digits to format as money"
        ) from error
    return rate


def _parse_rows(
    table: DelimitedTable,
    table_name: str,
    parse_row: Callable[[tuple[str, ...]], RecordT],
    strict: bool,
) -> tuple[list[RecordT], LoadReport]:
    """Parse table rows, skipping or raising on malformed ones."""
    records: list[RecordT] = []
    width = len(table.header)
    # Row numbers count the header as row 1 and skip blank lines.
    for row_number, row in enumerate(table.rows, 2):
        try:
            if len(row) != width:
                raise SlcspMalformedRowError(f"expected {width} fields, got {len(row)}")
            records.append(parse_row(row))
        except SlcspMalformedRowError as error:
            if strict:
                raise SlcspMalformedRowError(
                    f"Malformed row {row_number} in {table.source_path}: {error}. "
                    "Fix the row or rerun without strict mode to skip it."
                ) from error
            _LOGGER.warning(
                "reference_row_skipped",
                table=table_name,
                source_path=str(table.source_path),
                row_number=row_number,
                reason=str(error),
            )
    report = LoadReport(table_name=table_name, rows_read=len(table.rows), rows_kept=len(records))
    _LOGGER.info(
        "reference_table_loaded",
        table=table_name,
        source_path=str(table.source_path),
        rows_read=report.rows_read,
        rows_kept=report.rows_kept,
        rows_skipped=report.rows_skipped,
    )
    return records, report
