"""Result table persistence.

This module writes delimited tables atomically: rows go to a temporary
file beside the destination, which is moved into place only after every
row is written. A failed run leaves no partial output behind.
"""

from __future__ import annotations

import csv
import os
import tempfile
from pathlib import Path
from typing import Sequence

from core.constants import (
    TABLE_DELIMITER,
    TABLE_ENCODING,
    TABLE_LINE_TERMINATOR,
    TARGET_RATE_COLUMN,
    TARGET_REQUIRED_COLUMNS,
)
from core.errors import SlcspOutputError
from core.types import DelimitedTable, ResolutionResult
from ingest.table_reader import require_columns
from resolution.resolver import output_rate


def write_results(
    target_table: DelimitedTable,
    results: Sequence[ResolutionResult],
    output_path: str | Path,
) -> Path:
    """Write target rows with their rate column filled in.

    Args:
        target_table: Target table as read, header and row order intact.
        results: One result per target row, in row order.
        output_path: Destination file; may be the target table itself.

    Returns:
        Written output path.

    Raises:
        SlcspOutputError: If results do not line up with rows or the
            file cannot be written.
    """
    if len(results) != len(target_table.rows):
        raise SlcspOutputError(
            f"Cannot write {len(results)} results for {len(target_table.rows)} target rows. "
            "Resolve every target row before writing."
        )
    rate_index = require_columns(target_table, TARGET_REQUIRED_COLUMNS)[TARGET_RATE_COLUMN]
    width = len(target_table.header)
    rows = [
        _with_rate(row, width, rate_index, output_rate(result))
        for row, result in zip(target_table.rows, results)
    ]
    return write_delimited_table(
        DelimitedTable(
            source_path=target_table.source_path,
            header=target_table.header,
            rows=tuple(rows),
        ),
        output_path,
    )


def write_delimited_table(table: DelimitedTable, output_path: str | Path) -> Path:
    """Write a table with its header and rows exactly as given.

    Args:
        table: Table to serialize.
        output_path: Destination file.

    Returns:
        Written output path.

    Raises:
        SlcspOutputError: If the destination cannot be written.
    """
    destination = Path(output_path).expanduser()
    try:
        destination.parent.mkdir(parents=True, exist_ok=True)
        temp_fd, temp_name = tempfile.mkstemp(
            prefix=f".{destination.name}.", suffix=".tmp", dir=destination.parent
        )
    except OSError as error:
        raise _output_error(destination, error) from error
    try:
        with os.fdopen(temp_fd, "w", encoding=TABLE_ENCODING, newline="") as handle:
            writer = csv.writer(
                handle,
                delimiter=TABLE_DELIMITER,
                lineterminator=TABLE_LINE_TERMINATOR,
            )
            writer.writerow(table.header)
            writer.writerows(table.rows)
        os.replace(temp_name, destination)
    except OSError as error:
        Path(temp_name).unlink(missing_ok=True)
        raise _output_error(destination, error) from error
    return destination


def _output_error(destination: Path, error: OSError) -> SlcspOutputError:
    return SlcspOutputError(
        f"Failed to write table to {destination}: {error}. "
        "Check the output directory permissions and retry."
    )


def _with_rate(row: tuple[str, ...], width: int, rate_index: int, rate: str) -> tuple[str, ...]:
    """Return a row padded to header width with the rate field replaced."""
    fields = list(row) + [""] * (width - len(row))
    fields[rate_index] = rate
    return tuple(fields)
