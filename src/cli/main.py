"""SLCSP CLI entry points.

This module exposes the resolve, lookup, and run-spec commands.
It maps argparse commands onto pipeline and resolver calls.
"""

from __future__ import annotations

import argparse
import sys
from typing import Any, Sequence

from cli.run_spec_command import add_run_spec_command, run_run_spec_command
from core.config import SlcspConfig
from core.constants import (
    DEFAULT_PLANS_FILE_NAME,
    DEFAULT_TARGETS_FILE_NAME,
    DEFAULT_ZIPS_FILE_NAME,
)
from core.errors import SlcspError
from core.logging_config import get_logger
from ingest.reference_loader import load_reference_data
from resolution.pipeline import render_run_summary, run_slcsp
from resolution.resolver import output_rate, resolve_zip

_LOGGER = get_logger(__name__)


def build_parser() -> argparse.ArgumentParser:
    """Build the top-level CLI parser.

    Returns:
        Configured argument parser.
    """
    parser = argparse.ArgumentParser(
        prog="slcsp",
        description="Second lowest cost silver plan resolver",
    )
    subparsers = parser.add_subparsers(dest="command", required=True)
    _add_resolve_command(subparsers)
    _add_lookup_command(subparsers)
    add_run_spec_command(subparsers)
    return parser


def main(argv: Sequence[str] | None = None) -> int:
    """Run the SLCSP CLI.

    Args:
        argv: Optional argument vector.

    Returns:
        Process exit code.
    """
    parser = build_parser()
    args = parser.parse_args(argv)
    try:
        if args.command == "resolve":
            return _run_resolve_command(args)
        if args.command == "lookup":
            return _run_lookup_command(args)
        if args.command == "run-spec":
            return run_run_spec_command(args)
    except SlcspError as error:
        _LOGGER.error("slcsp_run_failed", command=args.command, error=str(error))
        print(f"error: {error}", file=sys.stderr)
        return 1
    parser.error(f"Unsupported command: {args.command}")
    return 2


def _run_resolve_command(args: argparse.Namespace) -> int:
    """Handle resolve command.

    Args:
        args: Parsed CLI args.

    Returns:
        Exit code.
    """
    config = SlcspConfig.from_paths(
        plans_path=args.plans,
        zips_path=args.zips,
        targets_path=args.targets,
        output_path=args.output,
        strict=args.strict,
    )
    print(render_run_summary(run_slcsp(config)))
    return 0


def _run_lookup_command(args: argparse.Namespace) -> int:
    """Handle lookup command.

    Args:
        args: Parsed CLI args.

    Returns:
        Exit code.
    """
    config = SlcspConfig.from_paths(plans_path=args.plans, zips_path=args.zips)
    reference = load_reference_data(config.plans_path, config.zips_path)
    result = resolve_zip(args.zipcode, reference)
    print(f"zipcode={result.zipcode}")
    print(f"status={result.status}")
    print(f"rate={output_rate(result) or '-'}")
    return 0


def _add_reference_arguments(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        "--plans",
        default=DEFAULT_PLANS_FILE_NAME,
        help="Plan catalog table (state, rate_area, metal_level, rate)",
    )
    parser.add_argument(
        "--zips",
        default=DEFAULT_ZIPS_FILE_NAME,
        help="ZIP mapping table (zipcode, state, rate_area)",
    )


def _add_resolve_command(subparsers: Any) -> None:
    """Register resolve subcommand."""
    parser = subparsers.add_parser("resolve", help="Fill in SLCSP rates for a target ZIP list")
    _add_reference_arguments(parser)
    parser.add_argument(
        "--targets",
        default=DEFAULT_TARGETS_FILE_NAME,
        help="Target ZIP table (zipcode, rate)",
    )
    parser.add_argument(
        "--output",
        help="Result table path; defaults to rewriting the targets file",
    )
    parser.add_argument(
        "--strict",
        action="store_true",
        help="Fail on the first malformed reference row instead of skipping it",
    )


def _add_lookup_command(subparsers: Any) -> None:
    """Register lookup subcommand."""
    parser = subparsers.add_parser("lookup", help="Resolve a single ZIP code")
    parser.add_argument("zipcode", help="ZIP code to resolve")
    _add_reference_arguments(parser)
