"""Delimited table reader.

This module loads header-led comma-delimited tables from local files.
It keeps every field as raw text so tables round-trip unchanged.
"""

from __future__ import annotations

import csv
from pathlib import Path
from typing import Iterable

from core.constants import TABLE_DELIMITER, TABLE_ENCODING
from core.errors import SlcspIngestError
from core.types import DelimitedTable


def read_delimited_table(path: str | Path) -> DelimitedTable:
    """Read a delimited table with a header row.

    Args:
        path: Local table file.

    Returns:
        Parsed table with rows in file order. Blank lines are dropped.

    Raises:
        SlcspIngestError: If the file is missing, unreadable, or empty.
    """
    table_path = Path(path).expanduser()
    if not table_path.exists():
        raise SlcspIngestError(
            f"Failed to read table at {table_path}: path does not exist. "
            "Provide an existing delimited table file."
        )
    try:
        with table_path.open("r", encoding=TABLE_ENCODING, newline="") as handle:
            raw_rows = [tuple(row) for row in csv.reader(handle, delimiter=TABLE_DELIMITER)]
    except (OSError, UnicodeDecodeError, csv.Error) as error:
        raise SlcspIngestError(
            f"Failed to read table at {table_path}: {error}. "
            "Check file permissions and encoding and retry."
        ) from error
    rows = [row for row in raw_rows if _has_content(row)]
    if not rows:
        raise SlcspIngestError(
            f"Table at {table_path} is empty. Add a header row and retry."
        )
    return DelimitedTable(source_path=table_path, header=rows[0], rows=tuple(rows[1:]))


def require_columns(table: DelimitedTable, columns: Iterable[str]) -> dict[str, int]:
    """Locate required columns by header name.

    Args:
        table: Parsed table.
        columns: Column names the caller needs.

    Returns:
        Mapping of column name to field position.

    Raises:
        SlcspIngestError: If any column is absent from the header.
    """
    wanted = tuple(columns)
    missing = [column for column in wanted if column not in table.column_names]
    if missing:
        raise SlcspIngestError(
            f"Table at {table.source_path} is missing required columns: "
            f"{', '.join(missing)}. Found header: {', '.join(table.header)}."
        )
    return {column: table.column_index(column) for column in wanted}


def _has_content(row: tuple[str, ...]) -> bool:
    """Return whether a parsed row holds any non-blank field."""
    return any(field.strip() for field in row)
