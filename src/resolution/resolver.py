"""Second lowest cost silver plan resolution.

This module decides, once per ZIP, a tagged resolution outcome from
read-only reference data. Failures to resolve are values, not errors,
so one unresolvable ZIP never aborts a batch.
"""

from __future__ import annotations

from decimal import ROUND_HALF_UP, Decimal
from typing import Iterable

from core.constants import RATE_DECIMAL_PLACES
from core.types import (
    AMBIGUOUS,
    Ambiguous,
    InsufficientData,
    NotFound,
    ReferenceData,
    ResolutionResult,
    Resolved,
)
from transforms.rate_deduplication import distinct_sorted_rates

_RATE_QUANTUM = Decimal(1).scaleb(-RATE_DECIMAL_PLACES)


def resolve_zip(zipcode: str, reference: ReferenceData) -> ResolutionResult:
    """Resolve one ZIP code to its second lowest silver rate.

    Args:
        zipcode: ZIP code text; surrounding whitespace is ignored.
        reference: Loaded reference lookups.

    Returns:
        ``Resolved`` with the rate, or ``NotFound``, ``Ambiguous``, or
        ``InsufficientData`` when no single benchmark exists.
    """
    key = zipcode.strip()
    area = reference.areas_by_zip.get(key)
    if area is None:
        return NotFound(zipcode=key)
    if area is AMBIGUOUS:
        return Ambiguous(zipcode=key)
    distinct_rates = distinct_sorted_rates(reference.rates_by_area.get(area, ()))
    if len(distinct_rates) < 2:
        return InsufficientData(
            zipcode=key,
            area=area,
            distinct_rate_count=len(distinct_rates),
        )
    return Resolved(zipcode=key, rate=distinct_rates[1])


def resolve_targets(
    zipcodes: Iterable[str],
    reference: ReferenceData,
) -> list[ResolutionResult]:
    """Resolve ZIP codes in input order."""
    return [resolve_zip(zipcode, reference) for zipcode in zipcodes]


def format_rate(rate: Decimal) -> str:
    """Render a rate with exactly two decimals, e.g. ``221.40``."""
    return str(rate.quantize(_RATE_QUANTUM, rounding=ROUND_HALF_UP))


def output_rate(result: ResolutionResult) -> str:
    """Return the output field for a result: the rate or an empty string."""
    if isinstance(result, Resolved):
        return format_rate(result.rate)
    return ""
