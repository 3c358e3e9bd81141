"""Silver rate deduplication transform.

This module collapses numerically equal rates into one ascending sequence.
Equal rates count once, so two plans priced at the lowest rate never
make that rate the second lowest.
"""

from __future__ import annotations

from decimal import Decimal
from typing import Iterable


def distinct_sorted_rates(rates: Iterable[Decimal]) -> tuple[Decimal, ...]:
    """Return distinct rates in ascending order.

    Args:
        rates: Rates in any order, possibly repeated.

    Returns:
        Ascending rates with numeric duplicates removed. Applying the
        function to its own output returns the same tuple.
    """
    # Decimal("221.4") and Decimal("221.40") hash and compare equal.
    return tuple(sorted(set(rates)))
