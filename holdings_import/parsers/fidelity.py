"""
Fidelity Positions CSV parser.

Fidelity positions export:
    Account Name/Number,Symbol,Description,Quantity,Last Price,Last Price Change,
    Current Value,Today's Gain/Loss Dollar,Today's Gain/Loss Percent,
    Total Gain/Loss Dollar,Total Gain/Loss Percent,Percent Of Account,
    Cost Basis,Cost Basis Per Share,Type

Quirks:
- Column order is fixed, so columns are read by position.
- Multi-account exports repeat the header row between account sections.
- Core cash positions appear as money market rows (SPAXX**, FDRXX**).
"""

from __future__ import annotations

import logging
from typing import Optional, Sequence

from .columns import build_raw_row, normalize_headers
from .cost_basis import SOURCE_PRICE_PLACEHOLDER, resolve_cost
from .holding import Holding
from .row_filter import should_skip_row
from .values import clean_cell, normalize_ticker, parse_share_quantity

logger = logging.getLogger(__name__)

FORMAT_NAME = "fidelity"
DISPLAY_NAME = "Fidelity"

# Column positions in the Fidelity positions export
SYMBOL = 1
QUANTITY = 3
LAST_PRICE = 4
CURRENT_VALUE = 6
TOTAL_GAIN_LOSS = 9
COST_BASIS = 12
COST_BASIS_PER_SHARE = 13

_MIN_ROW_LENGTH = COST_BASIS_PER_SHARE + 1

# Placeholders Fidelity prints in cost cells it has no data for
_MISSING_MARKERS = frozenset({"", "--", "n/a"})


def _present(value: str) -> Optional[str]:
    """The cell, or None when Fidelity left it blank or marked it '--'."""
    if clean_cell(value).lower() in _MISSING_MARKERS:
        return None
    return value


def detect(headers: Sequence[str]) -> bool:
    """Account Name/Number first, Symbol second."""
    normalized = normalize_headers(headers)
    if len(normalized) < 3:
        return False

    first, second = normalized[0], normalized[1]
    return (
        "account" in first
        and ("name" in first or "number" in first)
        and second == "symbol"
    )


def parse(rows: Sequence[Sequence[str]], headers: Sequence[str]) -> list[Holding]:
    """Parse Fidelity position rows."""
    holdings: list[Holding] = []
    placeholders = 0

    for row in rows:
        if len(row) < _MIN_ROW_LENGTH:
            continue

        symbol = clean_cell(row[SYMBOL])
        if should_skip_row(symbol):
            continue

        shares = parse_share_quantity(clean_cell(row[QUANTITY]))
        if shares <= 0:
            continue

        cost = resolve_cost(
            shares,
            cost_basis=_present(row[COST_BASIS]),
            cost_per_share=_present(row[COST_BASIS_PER_SHARE]),
            total_value=_present(row[CURRENT_VALUE]),
            gain_loss=_present(row[TOTAL_GAIN_LOSS]),
            last_price=_present(row[LAST_PRICE]),
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
            "Fidelity export has no cost basis for %d of %d holdings; "
            "last price used as placeholder cost",
            placeholders, len(holdings),
        )
    return holdings
