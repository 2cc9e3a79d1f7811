"""Brokerage format detection for holdings exports.

Checks the header row against the known brokerage signatures in a fixed
order. When nothing matches, the caller gets a suggested column mapping to
confirm; extraction with the generic parser only happens with a mapping the
caller supplied.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Callable, Optional, Sequence

from . import etrade, fidelity, generic, schwab, vanguard
from .holding import ColumnMapping, Holding, HoldingsParseResult

logger = logging.getLogger(__name__)

MANUAL_MAPPING_WARNING = "Could not detect brokerage format. Manual column mapping required."


@dataclass(frozen=True)
class BrokerageFormat:
    name: str
    display_name: str
    detect: Callable[[Sequence[str]], bool]
    parse: Callable[[Sequence[Sequence[str]], Sequence[str]], list[Holding]]


def _format(module) -> BrokerageFormat:
    return BrokerageFormat(
        name=module.FORMAT_NAME,
        display_name=module.DISPLAY_NAME,
        detect=module.detect,
        parse=module.parse,
    )


# Detection order: rigid multi-column signatures before the looser ones
BROKERAGE_FORMATS: tuple[BrokerageFormat, ...] = (
    _format(fidelity),
    _format(schwab),
    _format(vanguard),
    _format(etrade),
)


def detect_brokerage_format(headers: Sequence[str]) -> Optional[BrokerageFormat]:
    """First brokerage format whose detector accepts the headers, or None."""
    for fmt in BROKERAGE_FORMATS:
        if fmt.detect(headers):
            logger.info("Format matched: %s", fmt.display_name)
            return fmt
    logger.info("No brokerage format matched headers %s", list(headers))
    return None


def get_format_display_name(format_name: Optional[str]) -> str:
    if not format_name:
        return "Unknown Format"
    for fmt in BROKERAGE_FORMATS:
        if fmt.name == format_name:
            return fmt.display_name
    return generic.DISPLAY_NAME


def list_brokerage_formats() -> list[dict[str, str]]:
    """Known formats for display, generic last."""
    formats = [{"name": f.name, "display_name": f.display_name} for f in BROKERAGE_FORMATS]
    formats.append({"name": generic.FORMAT_NAME, "display_name": generic.DISPLAY_NAME})
    return formats


def parse_holdings(
    rows: Sequence[Sequence[str]],
    headers: Sequence[str],
) -> HoldingsParseResult:
    """Parse holdings rows with the detected brokerage parser.

    When no format matches nothing is parsed: the result carries a suggested
    column mapping for the caller to confirm and pass to
    parse_holdings_with_mapping().
    """
    fmt = detect_brokerage_format(headers)
    if fmt is not None:
        holdings = fmt.parse(rows, headers)
        logger.info("Parsed %d holdings from %d %s rows", len(holdings), len(rows), fmt.name)
        return HoldingsParseResult(success=True, holdings=holdings, detected_format=fmt.name)

    return HoldingsParseResult(
        success=True,
        holdings=[],
        detected_format=None,
        warnings=[MANUAL_MAPPING_WARNING],
        suggested_mapping=generic.suggest_column_mapping(headers),
    )


def parse_holdings_with_mapping(
    rows: Sequence[Sequence[str]],
    headers: Sequence[str],
    mapping: ColumnMapping,
) -> HoldingsParseResult:
    """Parse holdings rows with a caller-confirmed column mapping."""
    holdings = generic.parse_generic(rows, headers, mapping)
    logger.info("Parsed %d holdings from %d rows with column mapping", len(holdings), len(rows))

    warnings = []
    if not holdings and not mapping.is_complete:
        warnings.append("Column mapping needs both a ticker and a shares column.")
    return HoldingsParseResult(
        success=True,
        holdings=holdings,
        detected_format=generic.FORMAT_NAME,
        warnings=warnings,
    )
