"""
Charles Schwab positions CSV parser.

Schwab positions export:
    Symbol,Description,Quantity,Price,Price Change %,Price Change $,Market Value,
    Day Change %,Day Change $,Cost Basis,Gain/Loss %,Gain/Loss $,Ratings,
    Reinvest Dividends?,Capital Gains?,% of Account

Columns are read by position. Schwab appends "Cash & Cash Investments",
"Pending Activity" and "Account Total" rows after the positions.
"""

from __future__ import annotations

from typing import Sequence

from .columns import build_raw_row, normalize_headers
from .cost_basis import resolve_cost
from .holding import Holding
from .row_filter import should_skip_row
from .values import clean_cell, normalize_ticker, parse_share_quantity

FORMAT_NAME = "schwab"
DISPLAY_NAME = "Charles Schwab"

SYMBOL = 0
QUANTITY = 2
COST_BASIS = 9


def detect(headers: Sequence[str]) -> bool:
    normalized = normalize_headers(headers)
    if len(normalized) < 4:
        return False

    return (
        normalized[0] == "symbol"
        and normalized[1] == "description"
        and normalized[2] == "quantity"
        and "price" in normalized[3]
    )


def parse(rows: Sequence[Sequence[str]], headers: Sequence[str]) -> list[Holding]:
    holdings: list[Holding] = []

    for row in rows:
        if len(row) < COST_BASIS + 1:
            continue

        symbol = clean_cell(row[SYMBOL])
        if should_skip_row(symbol):
            continue

        shares = parse_share_quantity(clean_cell(row[QUANTITY]))
        if shares <= 0:
            continue

        cost = resolve_cost(shares, cost_basis=row[COST_BASIS])
        holdings.append(Holding(
            ticker=normalize_ticker(symbol),
            shares=shares,
            cost_basis=cost.cost_basis,
            cost_per_share=cost.cost_per_share,
            raw_row=build_raw_row(row, headers),
        ))

    return holdings
