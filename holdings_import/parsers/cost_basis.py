"""
Cost basis resolution shared by the brokerage-specific parsers.

Brokerages disagree on which cost fields they export. Each parser hands over
the cells it has (None = the export has no such column) and gets back a
consistent (cost_basis, cost_per_share) pair.

Priority:
1. explicit cost basis column, read as a total
2. total value - gain/loss  (gain/loss = value - cost in brokerage reporting)
3. positive total -> per-share cost derived from it
4. broker-reported per-share cost -> total derived from it
5. current price as a placeholder per-share cost (NOT a real cost basis)
6. otherwise keep the total and derive a matching per-share cost
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from .values import (
    cost_per_share_from_total,
    parse_currency_amount,
    total_from_cost_per_share,
)


SOURCE_COST_BASIS = "cost_basis"
SOURCE_VALUE_MINUS_GAIN = "value_minus_gain"
SOURCE_PER_SHARE = "per_share"
SOURCE_PRICE_PLACEHOLDER = "price_placeholder"
SOURCE_NONE = "none"


@dataclass(frozen=True)
class CostResolution:
    cost_basis: int  # cents
    cost_per_share: int  # cents per whole share
    source: str


def resolve_cost(
    shares: int,
    *,
    cost_basis: Optional[str] = None,
    cost_per_share: Optional[str] = None,
    total_value: Optional[str] = None,
    gain_loss: Optional[str] = None,
    last_price: Optional[str] = None,
) -> CostResolution:
    """Resolve total and per-share cost for one row from whatever cells exist."""
    if cost_basis is not None:
        total = parse_currency_amount(cost_basis)
        source = SOURCE_COST_BASIS
    elif total_value is not None and gain_loss is not None:
        total = parse_currency_amount(total_value) - parse_currency_amount(gain_loss)
        source = SOURCE_VALUE_MINUS_GAIN
    else:
        total = 0
        source = SOURCE_NONE

    if total > 0 and shares > 0:
        return CostResolution(total, cost_per_share_from_total(total, shares), source)

    if cost_per_share is not None:
        reported = parse_currency_amount(cost_per_share)
        if reported > 0:
            return CostResolution(
                total_from_cost_per_share(reported, shares), reported, SOURCE_PER_SHARE
            )

    if last_price is not None:
        price = parse_currency_amount(last_price)
        return CostResolution(
            total_from_cost_per_share(price, shares), price, SOURCE_PRICE_PLACEHOLDER
        )

    if total == 0:
        source = SOURCE_NONE
    return CostResolution(total, cost_per_share_from_total(total, shares), source)
