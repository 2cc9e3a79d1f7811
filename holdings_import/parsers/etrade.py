"""
E*TRADE holdings CSV parser.

E*TRADE portfolio export:
    Symbol,Last Price,$ Change,% Change,Shares,Total Value,Gain/Loss
    AAPL,$171.21,$0.45,0.26%,50,"$8,560.50","$1,560.50"

Quirks:
- The standard export usually has NO cost basis column. Cost basis is
  recovered as Total Value - Gain/Loss; failing that the last price is used
  as a placeholder per-share cost.
- Column order varies between export views, so columns are found by name.
"""

from __future__ import annotations

import logging
from typing import Sequence

from .columns import build_raw_row, cell, find_column_index, normalize_headers
from .cost_basis import SOURCE_PRICE_PLACEHOLDER, resolve_cost
from .holding import Holding
from .row_filter import should_skip_row
from .values import clean_cell, normalize_ticker, parse_share_quantity

logger = logging.getLogger(__name__)

FORMAT_NAME = "etrade"
DISPLAY_NAME = "E*TRADE"


def detect(headers: Sequence[str]) -> bool:
    """Symbol, then Last Price, then a change column."""
    normalized = normalize_headers(headers)
    if len(normalized) < 4:
        return False

    return (
        normalized[0] == "symbol"
        and "last price" in normalized[1]
        and "change" in normalized[2]
    )


def parse(rows: Sequence[Sequence[str]], headers: Sequence[str]) -> list[Holding]:
    """Parse E*TRADE holdings rows."""
    symbol_idx = find_column_index(headers, exact=("symbol",))
    shares_idx = find_column_index(headers, exact=("shares", "quantity"))
    total_value_idx = find_column_index(headers, contains=("total value", "market value"))
    cost_basis_idx = find_column_index(headers, contains=("cost basis", "total cost"))
    gain_loss_idx = find_column_index(headers, contains=("gain", "loss"))
    last_price_idx = find_column_index(headers, contains=("last price", "price"))

    holdings: list[Holding] = []
    placeholders = 0

    for row in rows:
        symbol = clean_cell(cell(row, symbol_idx))
        if should_skip_row(symbol):
            continue

        shares = parse_share_quantity(clean_cell(cell(row, shares_idx)))
        if shares <= 0:
            continue

        cost = resolve_cost(
            shares,
            cost_basis=cell(row, cost_basis_idx),
            total_value=cell(row, total_value_idx),
            gain_loss=cell(row, gain_loss_idx),
            last_price=cell(row, last_price_idx),
        )
        if cost.source == SOURCE_PRICE_PLACEHOLDER:
            placeholders += 1

        holdings.append(Holding(
            ticker=normalize_ticker(symbol),
            shares=shares,
            cost_basis=cost.cost_basis,
            cost_per_share=cost.cost_per_share,
            raw_row=build_raw_row(row, headers),
        ))

    if placeholders:
        logger.info(
            "E*TRADE export has no cost basis for %d of %d holdings; "
            "last price used as placeholder cost",
            placeholders, len(holdings),
        )
    return holdings
