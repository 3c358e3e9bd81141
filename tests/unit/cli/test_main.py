"""Unit tests for CLI command handling."""

from __future__ import annotations

from pathlib import Path

from cli.main import main
from tests.fixture_paths import fixture_path


def _reference_args() -> list[str]:
    return [
        "--plans",
        str(fixture_path("reference/plans.csv")),
        "--zips",
        str(fixture_path("reference/zips.csv")),
    ]


def test_cli_resolve_writes_output_and_prints_summary(tmp_path: Path, capsys) -> None:
    """CLI resolve should write the result table and print its path."""
    output_path = tmp_path / "out.csv"
    args = [
        "resolve",
        *_reference_args(),
        "--targets",
        str(fixture_path("reference/slcsp.csv")),
        "--output",
        str(output_path),
    ]

    exit_code = main(args)
    output = capsys.readouterr().out

    assert exit_code == 0 and f"output_path={output_path}" in output
    assert output_path.read_text(encoding="utf-8").startswith("zipcode,rate\n64148,253.65\n")


def test_cli_resolve_returns_one_for_missing_input(tmp_path: Path, capsys) -> None:
    """Missing inputs should exit non-zero with an error on stderr."""
    output_path = tmp_path / "out.csv"
    args = [
        "resolve",
        "--plans",
        str(tmp_path / "missing.csv"),
        "--zips",
        str(fixture_path("reference/zips.csv")),
        "--targets",
        str(fixture_path("reference/slcsp.csv")),
        "--output",
        str(output_path),
    ]

    exit_code = main(args)
    captured = capsys.readouterr()

    assert exit_code == 1 and "error:" in captured.err
    assert output_path.exists() is False


def test_cli_lookup_prints_status_and_rate(capsys) -> None:
    """CLI lookup should report a single ZIP outcome."""
    exit_code = main(["lookup", "54923", *_reference_args()])
    output = capsys.readouterr().out.splitlines()

    assert exit_code == 0
    assert output == ["zipcode=54923", "status=resolved", "rate=221.40"]


def test_cli_lookup_reports_ambiguous_zip(capsys) -> None:
    """Ambiguous ZIPs should print a placeholder rate."""
    exit_code = main(["lookup", "40813", *_reference_args()])
    output = capsys.readouterr().out

    assert exit_code == 0 and "status=ambiguous" in output and "rate=-" in output
