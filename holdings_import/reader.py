"""
Holdings export reader.

Turns a delimited brokerage export (or a pandas DataFrame) into the header
row + data rows the parsers work on, then runs format detection.

Export quirks handled here:
- comma, semicolon or tab delimited
- metadata lines before the real header ("For Account:,#####9714")
- UTF-8 byte order mark
- blank lines between account sections
"""

from __future__ import annotations

import csv
import io
import logging
from collections import Counter
from dataclasses import dataclass, field
from pathlib import Path
from typing import TYPE_CHECKING, Optional, Sequence

from . import config
from .parsers.format_detector import parse_holdings, parse_holdings_with_mapping
from .parsers.generic import suggest_column_mapping
from .parsers.holding import ColumnMapping, HoldingsParseResult

if TYPE_CHECKING:
    import pandas as pd

logger = logging.getLogger(__name__)


@dataclass
class StatementTable:
    """Tokenized export: header row plus the data rows below it."""

    headers: list[str]
    rows: list[list[str]] = field(default_factory=list)
    header_row: int = 0  # index of the header among the non-blank rows
    delimiter: str = ","


@dataclass
class RawPreview:
    """First rows of an export, for a manual column-mapping screen."""

    raw_rows: list[list[str]]
    total_rows: int
    detected_header_row: int
    delimiter: str
    suggested_mapping: Optional[ColumnMapping]


# ---------------------------------------------------------------------------
# Tokenizing
# ---------------------------------------------------------------------------

def detect_delimiter(content: str) -> str:
    """Guess the delimiter from the first line: tab, then semicolon, then comma."""
    first_line = content.split("\n", 1)[0]
    if "\t" in first_line:
        return "\t"
    if ";" in first_line:
        return ";"
    return ","


def split_rows(content: str, delimiter: str) -> list[list[str]]:
    """CSV-split ``content``, trimming cells and dropping blank rows."""
    reader = csv.reader(io.StringIO(content), delimiter=delimiter)
    rows = []
    for row in reader:
        cells = [c.strip() for c in row]
        if any(cells):
            rows.append(cells)
    return rows


def find_header_row(rows: Sequence[Sequence[str]]) -> int:
    """Index of the header row, skipping metadata lines above it.

    The header is the first row whose cell count equals the most common cell
    count among rows wider than two cells (the data rows).
    """
    if len(rows) < 2:
        return 0

    counts = [len(r) for r in rows]
    frequency = Counter(c for c in counts if c > 2)
    if not frequency:
        return 0

    mode_count = frequency.most_common(1)[0][0]
    return counts.index(mode_count)


def tokenize(content: str, header_row: Optional[int] = None) -> StatementTable:
    """Split export text into a StatementTable.

    Raises ValueError when there is no data row below the header.
    """
    if not content or not content.strip():
        raise ValueError("File is empty")

    content = content.replace("\r\n", "\n").replace("\r", "\n")
    delimiter = detect_delimiter(content)
    rows = split_rows(content, delimiter)

    if len(rows) < 2:
        raise ValueError("File has no data rows")

    idx = find_header_row(rows) if header_row is None else header_row
    if idx < 0 or idx >= len(rows) - 1:
        raise ValueError("File has no data rows after header")

    return StatementTable(
        headers=rows[idx],
        rows=rows[idx + 1:],
        header_row=idx,
        delimiter=delimiter,
    )


def read_statement(
    path: str | Path,
    header_row: Optional[int] = None,
    encoding: Optional[str] = None,
) -> StatementTable:
    """Read and tokenize a holdings export file.

    Raises FileNotFoundError for a missing file and ValueError for an export
    with no data rows.
    """
    path = Path(path)
    if not path.exists():
        raise FileNotFoundError(f"File does not exist: {path}")

    content = path.read_text(encoding=encoding or config.statement_encoding())
    table = tokenize(content, header_row=header_row)
    logger.info(
        "Read %s: header at row %d, %d data rows, delimiter %r",
        path.name, table.header_row, len(table.rows), table.delimiter,
    )
    return table


def table_from_dataframe(df: "pd.DataFrame") -> StatementTable:
    """StatementTable from a DataFrame whose columns are the export headers."""
    headers = [str(c).strip() for c in df.columns]
    rows = df.fillna("").astype(str).values.tolist()
    return StatementTable(headers=headers, rows=rows)


# ---------------------------------------------------------------------------
# File-level entry points
# ---------------------------------------------------------------------------

_READ_ERRORS = (OSError, UnicodeDecodeError, csv.Error, ValueError)


def parse_holdings_file(path: str | Path) -> HoldingsParseResult:
    """Detect the brokerage format of an export file and parse it.

    Unreadable files come back as ``success=False`` with an error message.
    """
    try:
        table = read_statement(path)
    except FileNotFoundError:
        return HoldingsParseResult(success=False, error="File does not exist")
    except _READ_ERRORS as e:
        logger.warning("Could not read holdings export %s: %s", path, e)
        return HoldingsParseResult(success=False, error=str(e))

    return parse_holdings(table.rows, table.headers)


def parse_holdings_file_with_mapping(
    path: str | Path,
    mapping: ColumnMapping,
) -> HoldingsParseResult:
    """Parse an export file with a user-confirmed column mapping."""
    try:
        table = read_statement(path, header_row=mapping.header_row)
    except FileNotFoundError:
        return HoldingsParseResult(
            success=False, detected_format="generic", error="File does not exist"
        )
    except _READ_ERRORS as e:
        logger.warning("Could not read holdings export %s: %s", path, e)
        return HoldingsParseResult(success=False, detected_format="generic", error=str(e))

    return parse_holdings_with_mapping(table.rows, table.headers, mapping)


def parse_holdings_dataframe(df: "pd.DataFrame") -> HoldingsParseResult:
    table = table_from_dataframe(df)
    return parse_holdings(table.rows, table.headers)


def get_column_info(path: str | Path) -> Optional[tuple[list[str], ColumnMapping]]:
    """Header names and a suggested mapping, or None if the file is unreadable."""
    try:
        table = read_statement(path)
    except _READ_ERRORS as e:
        logger.warning("Could not read holdings export %s: %s", path, e)
        return None

    return table.headers, suggest_column_mapping(table.headers)


def preview_raw_rows(
    path: str | Path,
    max_rows: Optional[int] = None,
) -> Optional[RawPreview]:
    """First ``max_rows`` rows (header included) for manual column mapping."""
    if max_rows is None:
        max_rows = config.preview_max_rows()
    path = Path(path)
    try:
        content = path.read_text(encoding=config.statement_encoding())
    except (OSError, UnicodeDecodeError) as e:
        logger.warning("Could not read holdings export %s: %s", path, e)
        return None

    if not content.strip():
        return None

    content = content.replace("\r\n", "\n").replace("\r", "\n")
    delimiter = detect_delimiter(content)
    try:
        rows = split_rows(content, delimiter)
    except csv.Error as e:
        logger.warning("Could not split holdings export %s: %s", path, e)
        return None
    if len(rows) < 2:
        return None

    header_row = find_header_row(rows)
    preview = rows[:max_rows]
    suggested = None
    if header_row < len(preview):
        suggested = suggest_column_mapping(preview[header_row])

    return RawPreview(
        raw_rows=preview,
        total_rows=len(rows),
        detected_header_row=header_row,
        delimiter=delimiter,
        suggested_mapping=suggested,
    )
