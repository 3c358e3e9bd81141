"""Shared typed models.

This module defines immutable data models used by the loader, resolver,
writer, and CLI layers to keep interfaces explicit and stable.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from decimal import Decimal
from enum import Enum
from pathlib import Path
from typing import Literal, Mapping, Union

ResolutionStatus = Literal["resolved", "ambiguous", "not_found", "insufficient_data"]
RESOLUTION_STATUSES: tuple[ResolutionStatus, ...] = (
    "resolved",
    "ambiguous",
    "not_found",
    "insufficient_data",
)


@dataclass(frozen=True, order=True)
class RateArea:
    """Composite rate area key.

    Attributes:
        state: Two-letter state code, upper-cased.
        rate_area: Rate area identifier within the state.
    """

    state: str
    rate_area: str


@dataclass(frozen=True)
class PlanRecord:
    """One row of the plan catalog.

    Attributes:
        area: Rate area the plan is priced in.
        metal_level: Plan tier such as ``Silver`` or ``Gold``.
        rate: Monthly premium.
    """

    area: RateArea
    metal_level: str
    rate: Decimal


@dataclass(frozen=True)
class ZipRecord:
    """One row of the ZIP to rate area mapping.

    Attributes:
        zipcode: ZIP code text.
        area: Rate area the ZIP (or part of it) falls in.
    """

    zipcode: str
    area: RateArea


class ZipAreaMarker(Enum):
    """Marker stored for a ZIP that spans more than one rate area."""

    AMBIGUOUS = "ambiguous"


AMBIGUOUS = ZipAreaMarker.AMBIGUOUS
ZipAreaEntry = Union[RateArea, ZipAreaMarker]


@dataclass(frozen=True)
class DelimitedTable:
    """A parsed delimited text table.

    Attributes:
        source_path: File the table was read from.
        header: Column names in file order.
        rows: Data rows in file order, each as raw field text.
    """

    source_path: Path
    header: tuple[str, ...]
    rows: tuple[tuple[str, ...], ...]

    @property
    def column_names(self) -> tuple[str, ...]:
        """Header names with surrounding whitespace removed."""
        return tuple(column.strip() for column in self.header)

    def column_index(self, column: str) -> int:
        """Return the position of a header column."""
        return self.column_names.index(column)


@dataclass(frozen=True)
class LoadReport:
    """Row accounting for one loaded reference table."""

    table_name: str
    rows_read: int
    rows_kept: int

    @property
    def rows_skipped(self) -> int:
        """Count rows dropped as malformed."""
        return self.rows_read - self.rows_kept


@dataclass(frozen=True)
class ReferenceData:
    """Read-only lookups consumed by the resolver.

    Attributes:
        rates_by_area: Distinct silver rates per rate area.
        areas_by_zip: Rate area per ZIP, or ``AMBIGUOUS``.
        reports: Load accounting per reference table.
    """

    rates_by_area: Mapping[RateArea, frozenset[Decimal]]
    areas_by_zip: Mapping[str, ZipAreaEntry]
    reports: tuple[LoadReport, ...] = ()


@dataclass(frozen=True)
class Resolved:
    """ZIP resolved to a second lowest silver rate."""

    zipcode: str
    rate: Decimal
    status: ResolutionStatus = field(default="resolved", init=False)


@dataclass(frozen=True)
class Ambiguous:
    """ZIP spans more than one rate area."""

    zipcode: str
    status: ResolutionStatus = field(default="ambiguous", init=False)


@dataclass(frozen=True)
class NotFound:
    """ZIP is absent from the reference mapping."""

    zipcode: str
    status: ResolutionStatus = field(default="not_found", init=False)


@dataclass(frozen=True)
class InsufficientData:
    """Rate area has fewer than two distinct silver rates."""

    zipcode: str
    area: RateArea
    distinct_rate_count: int
    status: ResolutionStatus = field(default="insufficient_data", init=False)


ResolutionResult = Union[Resolved, Ambiguous, NotFound, InsufficientData]


@dataclass(frozen=True)
class RunSummary:
    """Outcome of one end-to-end SLCSP run.

    Attributes:
        output_path: Written result table.
        target_count: Number of target rows processed.
        status_counts: Target rows per resolution status.
        reports: Load accounting per reference table.
    """

    output_path: Path
    target_count: int
    status_counts: Mapping[ResolutionStatus, int]
    reports: tuple[LoadReport, ...] = ()
