"""
Generic holdings CSV parser driven by a column mapping.

Used when no brokerage format matches. suggest_column_mapping() guesses a
mapping from the header names; the guess is meant to be confirmed (or
edited) by the user before parse_generic() is called with it, since a
misattributed column produces financially wrong numbers.
"""

from __future__ import annotations

import logging
from typing import Optional, Sequence

from .columns import build_raw_row, cell, normalize_headers
from .holding import COST_BASIS_PER_SHARE, COST_BASIS_TOTAL, ColumnMapping, Holding
from .row_filter import should_skip_row
from .values import (
    clean_cell,
    cost_per_share_from_total,
    normalize_ticker,
    parse_currency_amount,
    parse_share_quantity,
    total_from_cost_per_share,
)

logger = logging.getLogger(__name__)

FORMAT_NAME = "generic"
DISPLAY_NAME = "Generic CSV"

# Header fragments per role, most specific first
TICKER_COLUMN_NAMES = ("symbol", "ticker", "stock symbol", "fund symbol", "security")
SHARES_COLUMN_NAMES = ("shares", "quantity", "units", "share count", "qty")
TOTAL_COST_COLUMN_NAMES = ("cost basis", "total cost")
PER_SHARE_COST_COLUMN_NAMES = ("cost per share", "avg cost", "average cost")


def _find_header(normalized: Sequence[str], names: Sequence[str]) -> Optional[int]:
    for i, h in enumerate(normalized):
        if any(name in h for name in names):
            return i
    return None


def suggest_column_mapping(headers: Sequence[str]) -> ColumnMapping:
    """Best-effort mapping of headers to ticker / shares / cost basis.

    A total cost column is preferred over a per-share one. Roles with no
    matching header stay unmapped (None).
    """
    normalized = normalize_headers(headers)

    ticker_idx = _find_header(normalized, TICKER_COLUMN_NAMES)
    shares_idx = _find_header(normalized, SHARES_COLUMN_NAMES)

    cost_basis_type = COST_BASIS_TOTAL
    cost_idx = _find_header(normalized, TOTAL_COST_COLUMN_NAMES)
    if cost_idx is None:
        cost_idx = _find_header(normalized, PER_SHARE_COST_COLUMN_NAMES)
        if cost_idx is not None:
            cost_basis_type = COST_BASIS_PER_SHARE

    def original(idx: Optional[int]) -> Optional[str]:
        return headers[idx] if idx is not None else None

    return ColumnMapping(
        ticker=original(ticker_idx),
        shares=original(shares_idx),
        cost_basis=original(cost_idx),
        cost_basis_type=cost_basis_type,
    )


def _index_of(headers: Sequence[str], name: Optional[str]) -> Optional[int]:
    if not name:
        return None
    target = name.strip()
    for i, h in enumerate(headers):
        if h.strip() == target:
            return i
    return None


def parse_generic(
    rows: Sequence[Sequence[str]],
    headers: Sequence[str],
    mapping: ColumnMapping,
) -> list[Holding]:
    """Parse rows with an explicit column mapping.

    Returns an empty list when ticker or shares is unmapped, or mapped to a
    header the file does not have: without both nothing can be imported.
    """
    if not mapping.is_complete:
        logger.info("Column mapping lacks ticker or shares; nothing to import")
        return []

    ticker_idx = _index_of(headers, mapping.ticker)
    shares_idx = _index_of(headers, mapping.shares)
    cost_idx = _index_of(headers, mapping.cost_basis)

    if ticker_idx is None or shares_idx is None:
        logger.info(
            "Mapped columns %r / %r not found in headers %s",
            mapping.ticker, mapping.shares, list(headers),
        )
        return []

    header_labels = [h.strip() for h in headers]
    holdings: list[Holding] = []

    for row in rows:
        symbol = clean_cell(cell(row, ticker_idx))
        if should_skip_row(symbol, header_labels):
            continue

        shares = parse_share_quantity(clean_cell(cell(row, shares_idx)))
        if shares <= 0:
            continue

        cost_basis = 0
        cost_per_share = 0
        if cost_idx is not None:
            amount = parse_currency_amount(clean_cell(cell(row, cost_idx)))
            if mapping.cost_basis_type == COST_BASIS_TOTAL:
                cost_basis = amount
                cost_per_share = cost_per_share_from_total(amount, shares)
            else:
                cost_per_share = amount
                cost_basis = total_from_cost_per_share(amount, shares)

        holdings.append(Holding(
            ticker=normalize_ticker(symbol),
            shares=shares,
            cost_basis=cost_basis,
            cost_per_share=cost_per_share,
            raw_row=build_raw_row(row, headers),
        ))

    return holdings
