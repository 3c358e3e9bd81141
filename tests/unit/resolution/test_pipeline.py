"""Unit tests for SLCSP run orchestration."""

from __future__ import annotations

import shutil
from pathlib import Path

import pytest

from core.config import SlcspConfig
from core.errors import SlcspIngestError
from resolution.pipeline import render_run_summary, run_slcsp
from tests.fixture_paths import fixture_path


def _config(tmp_path: Path, **overrides: object) -> SlcspConfig:
    paths = {
        "plans_path": fixture_path("reference/plans.csv"),
        "zips_path": fixture_path("reference/zips.csv"),
        "targets_path": fixture_path("reference/slcsp.csv"),
        "output_path": tmp_path / "out.csv",
    }
    paths.update(overrides)
    return SlcspConfig.from_paths(**paths)  # type: ignore[arg-type]


def test_run_slcsp_writes_expected_table(tmp_path: Path) -> None:
    """Run should write rates in target order with blanks for unresolved ZIPs."""
    summary = run_slcsp(_config(tmp_path))

    expected = fixture_path("reference/slcsp_expected.csv").read_text(encoding="utf-8")
    assert summary.output_path.read_text(encoding="utf-8") == expected


def test_run_slcsp_counts_statuses(tmp_path: Path) -> None:
    """Summary should count every target row by outcome."""
    summary = run_slcsp(_config(tmp_path))

    assert summary.target_count == 10
    assert dict(summary.status_counts) == {
        "resolved": 6,
        "ambiguous": 1,
        "not_found": 1,
        "insufficient_data": 2,
    }


def test_run_slcsp_rewrites_targets_in_place_by_default(tmp_path: Path) -> None:
    """Without an output path the target list should be rewritten."""
    targets_path = tmp_path / "slcsp.csv"
    shutil.copyfile(fixture_path("reference/slcsp.csv"), targets_path)
    config = SlcspConfig.from_paths(
        plans_path=fixture_path("reference/plans.csv"),
        zips_path=fixture_path("reference/zips.csv"),
        targets_path=targets_path,
    )

    run_slcsp(config)

    assert targets_path.read_text(encoding="utf-8") == fixture_path(
        "reference/slcsp_expected.csv"
    ).read_text(encoding="utf-8")


def test_run_slcsp_missing_input_writes_nothing(tmp_path: Path) -> None:
    """A missing reference table should abort before any output exists."""
    config = _config(tmp_path, zips_path=tmp_path / "missing.csv")

    with pytest.raises(SlcspIngestError):
        run_slcsp(config)

    assert (tmp_path / "out.csv").exists() is False


def test_render_run_summary_lists_counts(tmp_path: Path) -> None:
    """Rendered summary should include path, totals, and skip counts."""
    summary = run_slcsp(_config(tmp_path))

    lines = render_run_summary(summary).splitlines()

    assert lines[0] == f"output_path={summary.output_path}"
    assert "resolved=6" in lines and "plans_rows_skipped=0" in lines
