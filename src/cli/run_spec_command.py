"""Run-spec CLI command wiring.

This module registers the run-spec subcommand and runs the batch
described by a YAML run-spec file.
"""

from __future__ import annotations

import argparse
from typing import Any

from core.run_spec import load_run_spec
from resolution.pipeline import render_run_summary, run_slcsp


def add_run_spec_command(subparsers: Any) -> None:
    """Register run-spec subcommand."""
    parser = subparsers.add_parser(
        "run-spec",
        help="Run a declarative YAML run spec",
    )
    parser.add_argument("spec_file", help="Path to YAML run-spec file")


def run_run_spec_command(args: argparse.Namespace) -> int:
    """Handle run-spec command invocation."""
    spec = load_run_spec(args.spec_file)
    summary = run_slcsp(spec.to_config())
    print(render_run_summary(summary))
    return 0
