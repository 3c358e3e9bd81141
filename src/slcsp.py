"""Public SDK surface for SLCSP resolution.

This module provides a stable import path for library users.
It re-exports the config, loader, resolver, and pipeline entry points.
"""

from __future__ import annotations

from core.config import SlcspConfig
from core.types import (
    AMBIGUOUS,
    Ambiguous,
    InsufficientData,
    NotFound,
    RateArea,
    ReferenceData,
    ResolutionResult,
    Resolved,
    RunSummary,
)
from ingest.reference_loader import load_reference_data
from resolution.pipeline import run_slcsp
from resolution.resolver import format_rate, output_rate, resolve_targets, resolve_zip

__all__ = [
    "AMBIGUOUS",
    "Ambiguous",
    "InsufficientData",
    "NotFound",
    "RateArea",
    "ReferenceData",
    "ResolutionResult",
    "Resolved",
    "RunSummary",
    "SlcspConfig",
    "format_rate",
    "load_reference_data",
    "output_rate",
    "resolve_targets",
    "resolve_zip",
    "run_slcsp",
]
