"""Header and cell lookup helpers shared by the parsers."""

from __future__ import annotations

from typing import Optional, Sequence


def normalize_header(header: str) -> str:
    return header.replace('"', "").strip().lower()


def normalize_headers(headers: Sequence[str]) -> list[str]:
    return [normalize_header(h) for h in headers]


def find_column_index(
    headers: Sequence[str],
    exact: Sequence[str] = (),
    contains: Sequence[str] = (),
) -> Optional[int]:
    """Index of the first header equal to any ``exact`` name or containing any
    ``contains`` fragment (case-insensitive), or None."""
    for i, h in enumerate(normalize_headers(headers)):
        if h in exact or any(fragment in h for fragment in contains):
            return i
    return None


def cell(row: Sequence[str], idx: Optional[int]) -> Optional[str]:
    """Cell at ``idx``; None when the column does not exist, "" past the row end."""
    if idx is None:
        return None
    if idx < len(row):
        return row[idx] or ""
    return ""


def build_raw_row(row: Sequence[str], headers: Sequence[str]) -> dict[str, str]:
    """Original row keyed by original header, cells kept verbatim."""
    return {
        header: (row[i] if i < len(row) and row[i] is not None else "")
        for i, header in enumerate(headers)
    }
