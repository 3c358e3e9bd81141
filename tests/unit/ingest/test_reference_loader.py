"""Unit tests for reference table loading."""

from __future__ import annotations

from decimal import Decimal

import pytest

from core.errors import SlcspIngestError, SlcspMalformedRowError
from core.types import AMBIGUOUS, RateArea, ZipRecord
from ingest.reference_loader import (
    build_rate_area,
    build_zip_area_index,
    load_reference_data,
    parse_rate,
)
from tests.fixture_paths import fixture_path


def test_silver_index_ignores_other_metal_levels(reference_data) -> None:
    """Only silver plans should contribute rates."""
    assert reference_data.rates_by_area[RateArea("MO", "3")] == frozenset(
        {Decimal("245.20"), Decimal("253.65")}
    )
    assert RateArea("FL", "60") not in reference_data.rates_by_area


def test_zip_index_marks_conflicting_rate_areas_ambiguous(reference_data) -> None:
    """A ZIP in two rate areas should be stored as ambiguous."""
    assert reference_data.areas_by_zip["40813"] is AMBIGUOUS


def test_zip_index_keeps_consistent_repeated_zip(reference_data) -> None:
    """Repeated rows for the same rate area should stay resolvable."""
    assert reference_data.areas_by_zip["64148"] == RateArea("MO", "3")
    assert reference_data.areas_by_zip["54923"] == RateArea("WI", "11")


def test_zip_index_ambiguity_is_permanent() -> None:
    """A later row matching the first area should not undo ambiguity."""
    records = [
        ZipRecord(zipcode="40813", area=RateArea("KY", "8")),
        ZipRecord(zipcode="40813", area=RateArea("KY", "9")),
        ZipRecord(zipcode="40813", area=RateArea("KY", "8")),
    ]

    assert build_zip_area_index(records)["40813"] is AMBIGUOUS


def test_rate_area_keys_do_not_collide_across_field_boundaries() -> None:
    """State and area are separate fields, so A1/23 differs from A/123."""
    assert build_rate_area("A1", "23") != build_rate_area("A", "123")


def test_build_rate_area_normalizes_case_and_leading_zeros() -> None:
    """Formatting differences should map to the same rate area."""
    assert build_rate_area(" mo ", "003") == RateArea("MO", "3")


def test_reference_mappings_are_read_only(reference_data) -> None:
    """Loaded lookups should reject mutation."""
    with pytest.raises(TypeError):
        reference_data.areas_by_zip["00000"] = RateArea("MO", "3")  # type: ignore[index]


def test_load_reference_data_skips_malformed_rows() -> None:
    """Malformed rows should be skipped and counted, not fatal."""
    reference = load_reference_data(
        fixture_path("reference/malformed_plans.csv"),
        fixture_path("reference/zips.csv"),
    )
    plan_report = reference.reports[0]

    assert reference.rates_by_area[RateArea("MO", "3")] == frozenset(
        {Decimal("245.20"), Decimal("270.00")}
    )
    assert (plan_report.rows_read, plan_report.rows_kept, plan_report.rows_skipped) == (5, 2, 3)


def test_load_reference_data_strict_raises_on_malformed_row() -> None:
    """Strict mode should fail on the first malformed row."""
    with pytest.raises(SlcspMalformedRowError, match="row 3"):
        load_reference_data(
            fixture_path("reference/malformed_plans.csv"),
            fixture_path("reference/zips.csv"),
            strict=True,
        )


def test_load_reference_data_raises_for_missing_columns() -> None:
    """A plan table without a rate column cannot be loaded."""
    with pytest.raises(SlcspIngestError):
        load_reference_data(
            fixture_path("reference/missing_rate_column.csv"),
            fixture_path("reference/zips.csv"),
        )


@pytest.mark.parametrize("raw_rate", ["", "abc", "-1.00", "NaN", "Infinity", "1E+30"])
def test_parse_rate_rejects_unusable_values(raw_rate: str) -> None:
    """Non-numeric, negative, non-finite, or oversized rates are malformed."""
    with pytest.raises(SlcspMalformedRowError):
        parse_rate(raw_rate)


def test_load_reference_data_skips_rate_too_large_for_money() -> None:
    """A rate that cannot be rounded to cents should be skipped like any bad row."""
    reference = load_reference_data(
        fixture_path("reference/oversized_rate_plans.csv"),
        fixture_path("reference/zips.csv"),
    )

    assert reference.rates_by_area[RateArea("MO", "3")] == frozenset(
        {Decimal("100.00"), Decimal("120.00")}
    )
    assert reference.reports[0].rows_skipped == 1
