"""
Cell normalizers for brokerage holdings exports.

Holdings use fixed-point integers so that positions from different brokerages
compare exactly:
- shares are scaled by SHARE_SCALE (4 decimal places)
- money is in minor units (cents), scaled by CURRENCY_SCALE

Brokerage cells arrive with currency symbols, thousands separators, stray
quote characters and three sign notations: -$1.00, ($1.00), and unsigned.
None of these helpers raise; anything unparseable becomes 0.
"""

from __future__ import annotations

import re
from decimal import ROUND_HALF_UP, Decimal, InvalidOperation
from typing import Optional

SHARE_SCALE = 10_000
CURRENCY_SCALE = 100

_CURRENCY_SYMBOLS_RE = re.compile(r"[$€£¥]")
_WHITESPACE_RE = re.compile(r"\s")

# Leading decimal number; trailing text such as the "sh" in "50 sh" is ignored
_LEADING_NUMBER_RE = re.compile(r"^[+-]?(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?")


def _round_half_up(value: Decimal) -> int:
    try:
        return int(value.quantize(Decimal(1), rounding=ROUND_HALF_UP))
    except InvalidOperation:
        # exponent notation beyond Decimal precision, e.g. "1e40"
        return 0


def _scale(number: Decimal, scale: int) -> int:
    """Round ``number * scale`` half-up; 0 when the product overflows."""
    try:
        return _round_half_up(number * scale)
    except ArithmeticError:
        # exponent beyond the context limits, e.g. "1e999999"
        return 0


def _parse_decimal(text: str) -> Optional[Decimal]:
    """Parse the leading decimal number of ``text``; None if there is none."""
    m = _LEADING_NUMBER_RE.match(text.strip())
    if not m:
        return None
    return Decimal(m.group(0))


# ---------------------------------------------------------------------------
# Text cells
# ---------------------------------------------------------------------------

def clean_cell(value: Optional[str]) -> str:
    """Strip quote characters and surrounding whitespace from a cell."""
    if not value:
        return ""
    return value.replace('"', "").strip()


def normalize_ticker(value: Optional[str]) -> str:
    """Upper-case, trimmed ticker symbol. Idempotent."""
    return clean_cell(value).upper().strip()


# ---------------------------------------------------------------------------
# Numeric cells
# ---------------------------------------------------------------------------

def parse_share_quantity(value: Optional[str]) -> int:
    """Parse a share count like '1,234.56' into ten-thousandths of a share."""
    if not value:
        return 0
    cleaned = value.replace(",", "").replace('"', "")
    number = _parse_decimal(cleaned)
    if number is None:
        return 0
    return _scale(number, SHARE_SCALE)


def parse_currency_amount(value: Optional[str]) -> int:
    """Parse a money cell like '$1,234.56' or '($500.00)' into cents."""
    if not value:
        return 0

    cleaned = _CURRENCY_SYMBOLS_RE.sub("", value)
    cleaned = cleaned.replace(",", "").replace('"', "")
    cleaned = _WHITESPACE_RE.sub("", cleaned)

    negative = False
    num_str = cleaned
    if cleaned.startswith("(") and cleaned.endswith(")"):
        negative = True
        num_str = cleaned[1:-1]
    elif cleaned.startswith("-"):
        negative = True
        num_str = cleaned[1:]

    number = _parse_decimal(num_str)
    if number is None:
        return 0

    cents = _scale(number, CURRENCY_SCALE)
    return -cents if negative else cents


# ---------------------------------------------------------------------------
# Fixed-point conversions between the two scales
# ---------------------------------------------------------------------------

def cost_per_share_from_total(cost_basis: int, shares: int) -> int:
    """Cents per whole share from a total cost (cents) and scaled shares."""
    if shares <= 0:
        return 0
    return _round_half_up(Decimal(cost_basis) * SHARE_SCALE / Decimal(shares))


def total_from_cost_per_share(cost_per_share: int, shares: int) -> int:
    """Total cost (cents) from cents per whole share and scaled shares."""
    return _round_half_up(Decimal(cost_per_share) * Decimal(shares) / SHARE_SCALE)
