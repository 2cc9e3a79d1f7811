"""
Row classification for holdings exports.

Decides from the cleaned symbol cell alone whether a row is a real position.
Non-position rows seen in real exports:
- the header row repeated mid-file (multi-account or multi-page exports)
- cash and money market sweep lines
- total / subtotal summary lines

Runs before any numeric parsing of the row.
"""

from __future__ import annotations

import logging
from enum import Enum
from typing import Iterable, Optional

logger = logging.getLogger(__name__)


class SkipReason(str, Enum):
    EMPTY = "empty"
    HEADER_ECHO = "header_echo"
    CASH = "cash"
    TOTAL = "total"


# ---------------------------------------------------------------------------
# Known markers (lower-case)
# ---------------------------------------------------------------------------

_CASH_MARKERS = (
    "cash",
    # Money market / sweep funds
    "spaxx", "fdrxx", "fzfxx", "sprxx", "swvxx", "snvxx", "snoxx",
    "swrxx", "vmfxx", "vmmxx", "wfcxx", "wfjxx", "rjxxx",
)

_TOTAL_MARKERS = frozenset({
    "total",
    "subtotal",
    "sub-total",
    "grand total",
    "account total",
    "pending activity",
})

DEFAULT_HEADER_LABELS = ("symbol",)


def classify_row(
    symbol: str,
    header_labels: Iterable[str] = DEFAULT_HEADER_LABELS,
) -> Optional[SkipReason]:
    """Return why a row should be skipped, or None for a real position."""
    if not symbol:
        return SkipReason.EMPTY

    lowered = symbol.lower()
    if any(lowered == label.strip().lower() for label in header_labels):
        return SkipReason.HEADER_ECHO

    if any(marker in lowered for marker in _CASH_MARKERS):
        return SkipReason.CASH

    if lowered in _TOTAL_MARKERS:
        return SkipReason.TOTAL

    return None


def should_skip_row(
    symbol: str,
    header_labels: Iterable[str] = DEFAULT_HEADER_LABELS,
) -> bool:
    reason = classify_row(symbol, header_labels)
    if reason is not None:
        logger.debug("Skipping row %r: %s", symbol, reason.value)
        return True
    return False
