"""SLCSP exception hierarchy.

This module defines traceable domain errors with clear boundaries.
Each subsystem raises a specific error type for debuggability.
"""

from __future__ import annotations


class SlcspError(Exception):
    """Base exception for all SLCSP failures."""


class SlcspConfigError(SlcspError):
    """Raised for invalid runtime configuration."""


class SlcspRunSpecError(SlcspError):
    """Raised for invalid or unsupported run-spec configuration."""


class SlcspIngestError(SlcspError):
    """Raised for missing, unreadable, or structurally invalid input tables."""


class SlcspMalformedRowError(SlcspIngestError):
    """Raised when a single reference row cannot be parsed."""


class SlcspOutputError(SlcspError):
    """Raised when the result table cannot be written."""
