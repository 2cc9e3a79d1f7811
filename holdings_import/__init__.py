"""Brokerage holdings export ingestion.

Turns holdings CSV exports from E*TRADE, Fidelity, Schwab, Vanguard, or any
tabular layout (via a column mapping) into fixed-point Holding records.
"""

from .parsers import (
    Holding,
    ColumnMapping,
    HoldingsParseResult,
    BrokerageFormat,
    BROKERAGE_FORMATS,
    detect_brokerage_format,
    get_format_display_name,
    list_brokerage_formats,
    parse_holdings,
    parse_holdings_with_mapping,
    suggest_column_mapping,
    parse_generic,
)
from .reader import (
    StatementTable,
    read_statement,
    table_from_dataframe,
    parse_holdings_file,
    parse_holdings_file_with_mapping,
    parse_holdings_dataframe,
    get_column_info,
    preview_raw_rows,
)

__all__ = [
    "Holding",
    "ColumnMapping",
    "HoldingsParseResult",
    "BrokerageFormat",
    "BROKERAGE_FORMATS",
    "detect_brokerage_format",
    "get_format_display_name",
    "list_brokerage_formats",
    "parse_holdings",
    "parse_holdings_with_mapping",
    "suggest_column_mapping",
    "parse_generic",
    "StatementTable",
    "read_statement",
    "table_from_dataframe",
    "parse_holdings_file",
    "parse_holdings_file_with_mapping",
    "parse_holdings_dataframe",
    "get_column_info",
    "preview_raw_rows",
]
