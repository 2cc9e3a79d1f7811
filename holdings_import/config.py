"""Settings read from the environment at call time."""

from __future__ import annotations

import logging
import os

logger = logging.getLogger(__name__)

# utf-8-sig also strips the BOM some brokerages prepend to exports
DEFAULT_ENCODING = "utf-8-sig"
DEFAULT_PREVIEW_ROWS = 50


def statement_encoding() -> str:
    return os.environ.get("HOLDINGS_IMPORT_ENCODING") or DEFAULT_ENCODING


def preview_max_rows() -> int:
    """Rows returned by reader.preview_raw_rows() for manual column mapping."""
    raw = os.environ.get("HOLDINGS_IMPORT_PREVIEW_ROWS")
    if not raw:
        return DEFAULT_PREVIEW_ROWS
    try:
        value = int(raw)
    except ValueError:
        logger.warning("Ignoring non-integer HOLDINGS_IMPORT_PREVIEW_ROWS=%r", raw)
        return DEFAULT_PREVIEW_ROWS
    return value if value > 0 else DEFAULT_PREVIEW_ROWS
