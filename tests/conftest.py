"""Pytest configuration for repository test runs."""

from __future__ import annotations

import sys
from pathlib import Path

import pytest


def pytest_sessionstart() -> None:
    """Add src directory to sys.path for test imports."""
    project_root = Path(__file__).resolve().parent.parent
    src_path = project_root / "src"
    if str(src_path) not in sys.path:
        sys.path.insert(0, str(src_path))


@pytest.fixture
def reference_data():
    """Reference lookups loaded from the shared CSV fixtures."""
    from ingest.reference_loader import load_reference_data
    from tests.fixture_paths import fixture_path

    return load_reference_data(
        fixture_path("reference/plans.csv"),
        fixture_path("reference/zips.csv"),
    )
