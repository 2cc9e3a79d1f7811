"""
Vanguard holdings CSV parser.

Vanguard holdings export:
    Fund Account Number,Fund Name,Shares,Share Price,Total Value,Cost Basis
    XXXX-1234,Vanguard Total Stock Mkt Idx Adm,100.123,$123.45,"$12,360.18","$10,000.00"

Mutual fund rows often carry only the fund name, not a ticker. The ticker is
resolved, in order, from:
1. a Symbol / Ticker column, when the export has one
2. the known fund name table below
3. a "(VTSAX)" style ticker inside the fund name
4. a placeholder built from the fund name's initials
"""

from __future__ import annotations

import logging
import re
from typing import Sequence

from .columns import build_raw_row, cell, find_column_index, normalize_headers
from .cost_basis import resolve_cost
from .holding import Holding
from .row_filter import should_skip_row
from .values import clean_cell, normalize_ticker, parse_share_quantity

logger = logging.getLogger(__name__)

FORMAT_NAME = "vanguard"
DISPLAY_NAME = "Vanguard"

_FUND_TICKERS: dict[str, str] = {
    "vanguard total stock mkt idx adm": "VTSAX",
    "vanguard total stock market index admiral": "VTSAX",
    "vanguard 500 index admiral": "VFIAX",
    "vanguard 500 index fund admiral": "VFIAX",
    "vanguard total bond market index adm": "VBTLX",
    "vanguard total bond market index admiral": "VBTLX",
    "vanguard total international stock index admiral": "VTIAX",
    "vanguard total intl stock idx adm": "VTIAX",
    "vanguard growth index admiral": "VIGAX",
    "vanguard value index admiral": "VVIAX",
    "vanguard small cap index admiral": "VSMAX",
    "vanguard mid cap index admiral": "VIMAX",
    "vanguard reit index admiral": "VGSLX",
    "vanguard federal money market": "VMFXX",
}

_TICKER_IN_NAME_RE = re.compile(r"\(([A-Z]{2,5})\)", re.IGNORECASE)

_PLACEHOLDER_TICKER = "VGRD"


def detect(headers: Sequence[str]) -> bool:
    normalized = normalize_headers(headers)
    has_account_number = any("fund account" in h or "account number" in h for h in normalized)
    has_fund_name = any("fund name" in h for h in normalized)
    has_shares = any(h == "shares" for h in normalized)

    return (has_account_number or has_fund_name) and has_shares


def ticker_from_fund_name(fund_name: str) -> str:
    """Best-effort ticker for a Vanguard fund name."""
    known = _FUND_TICKERS.get(fund_name.strip().lower())
    if known:
        return known

    m = _TICKER_IN_NAME_RE.search(fund_name)
    if m:
        return m.group(1).upper()

    # Initials of the longer words, e.g. "Wellington Fund Investor" -> "WFI"
    initials = "".join(w[0].upper() for w in fund_name.split() if len(w) > 2)[:5]
    return initials or _PLACEHOLDER_TICKER


def parse(rows: Sequence[Sequence[str]], headers: Sequence[str]) -> list[Holding]:
    fund_name_idx = find_column_index(headers, contains=("fund name",))
    symbol_idx = find_column_index(headers, exact=("symbol", "ticker"))
    shares_idx = find_column_index(headers, exact=("shares",))
    cost_basis_idx = find_column_index(headers, contains=("cost basis",))

    holdings: list[Holding] = []

    for row in rows:
        symbol = clean_cell(cell(row, symbol_idx))
        fund_name = clean_cell(cell(row, fund_name_idx))

        if not symbol and fund_name_idx is not None:
            if "fund name" in fund_name.lower():
                continue  # repeated header row
            if fund_name and should_skip_row(fund_name):
                continue  # "Total", "Cash" and sweep lines
            symbol = ticker_from_fund_name(fund_name)
            logger.debug("Resolved Vanguard fund %r to ticker %s", fund_name, symbol)

        if should_skip_row(symbol, header_labels=("symbol", "ticker")):
            continue

        shares = parse_share_quantity(clean_cell(cell(row, shares_idx)))
        if shares <= 0:
            continue

        cost = resolve_cost(shares, cost_basis=cell(row, cost_basis_idx))
        holdings.append(Holding(
            ticker=normalize_ticker(symbol),
            shares=shares,
            cost_basis=cost.cost_basis,
            cost_per_share=cost.cost_per_share,
            raw_row=build_raw_row(row, headers),
        ))

    return holdings
