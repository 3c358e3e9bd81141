"""SLCSP run orchestration.

This module coordinates reference loading, per-ZIP resolution, and the
result write for one batch. All reference data is loaded before any ZIP
is resolved, and output is written only after every ZIP is resolved.
"""

from __future__ import annotations

from collections import Counter

from core.config import SlcspConfig
from core.constants import TARGET_REQUIRED_COLUMNS, TARGET_ZIPCODE_COLUMN
from core.logging_config import get_logger
from core.types import (
    RESOLUTION_STATUSES,
    DelimitedTable,
    ReferenceData,
    ResolutionResult,
    ResolutionStatus,
    RunSummary,
)
from ingest.reference_loader import load_reference_data
from ingest.table_reader import read_delimited_table, require_columns
from resolution.resolver import resolve_targets
from store.result_writer import write_results

_LOGGER = get_logger(__name__)


class SlcspPipelineRunner:
    """Runner for one load, resolve, and write batch."""

    def __init__(self, config: SlcspConfig) -> None:
        config.validate()
        self._config = config

    def run(self) -> RunSummary:
        """Execute the batch and return its summary."""
        reference = self._load_reference()
        target_table = read_delimited_table(self._config.targets_path)
        results = _resolve_table(target_table, reference)
        output_path = write_results(target_table, results, self._config.output_path)
        summary = RunSummary(
            output_path=output_path,
            target_count=len(results),
            status_counts=_count_statuses(results),
            reports=reference.reports,
        )
        _log_run_completion(self._config, summary)
        return summary

    def _load_reference(self) -> ReferenceData:
        return load_reference_data(
            self._config.plans_path,
            self._config.zips_path,
            strict=self._config.strict,
        )


def run_slcsp(config: SlcspConfig) -> RunSummary:
    """Resolve every target ZIP and write the result table.

    Args:
        config: Runtime configuration.

    Returns:
        Run summary with per-status counts.

    Raises:
        SlcspConfigError: If configured paths are invalid.
        SlcspIngestError: If an input table cannot be read.
        SlcspOutputError: If the result table cannot be written.
    """
    runner = SlcspPipelineRunner(config)
    return runner.run()


def _resolve_table(
    target_table: DelimitedTable,
    reference: ReferenceData,
) -> list[ResolutionResult]:
    """Resolve target rows in order; rows missing the ZIP field resolve as blank."""
    zip_index = require_columns(target_table, TARGET_REQUIRED_COLUMNS)[TARGET_ZIPCODE_COLUMN]
    zipcodes = [row[zip_index] if zip_index < len(row) else "" for row in target_table.rows]
    return resolve_targets(zipcodes, reference)


def _count_statuses(results: list[ResolutionResult]) -> dict[ResolutionStatus, int]:
    """Count results per status, listing every status even when zero."""
    counts = Counter(result.status for result in results)
    return {status: counts.get(status, 0) for status in RESOLUTION_STATUSES}


def _log_run_completion(config: SlcspConfig, summary: RunSummary) -> None:
    """Log run completion with contextual metadata."""
    _LOGGER.info(
        "slcsp_run_completed",
        plans_path=str(config.plans_path),
        zips_path=str(config.zips_path),
        targets_path=str(config.targets_path),
        output_path=str(summary.output_path),
        target_count=summary.target_count,
        rows_skipped=sum(report.rows_skipped for report in summary.reports),
        strict=config.strict,
        **summary.status_counts,
    )


def render_run_summary(summary: RunSummary) -> str:
    """Render a run summary into stable multi-line text for CLI output."""
    lines = [
        f"output_path={summary.output_path}",
        f"targets={summary.target_count}",
    ]
    for status, count in summary.status_counts.items():
        lines.append(f"{status}={count}")
    for report in summary.reports:
        lines.append(f"{report.table_name}_rows_skipped={report.rows_skipped}")
    return "\n".join(lines)
