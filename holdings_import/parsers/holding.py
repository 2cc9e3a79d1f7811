"""Output records shared by every brokerage parser."""

from __future__ import annotations

from dataclasses import asdict, dataclass, field
from typing import Any, Optional

COST_BASIS_TOTAL = "total"
COST_BASIS_PER_SHARE = "per_share"
COST_BASIS_TYPES = (COST_BASIS_TOTAL, COST_BASIS_PER_SHARE)


@dataclass
class Holding:
    """A single position read from a brokerage holdings export."""

    ticker: str
    shares: int  # shares * 10,000
    cost_basis: int  # total cost in cents
    cost_per_share: int  # cents per whole share
    raw_row: dict[str, str] = field(default_factory=dict)  # header -> original cell

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)


@dataclass
class ColumnMapping:
    """Which headers hold the ticker, share count and cost for a generic export.

    ``None`` means the role is unmapped. ``cost_basis_type`` says whether the
    cost column is a total ("total") or a per-share price ("per_share").
    """

    ticker: Optional[str] = None
    shares: Optional[str] = None
    cost_basis: Optional[str] = None
    cost_basis_type: str = COST_BASIS_TOTAL
    header_row: Optional[int] = None  # header row picked in a file preview

    def __post_init__(self) -> None:
        if self.cost_basis_type not in COST_BASIS_TYPES:
            raise ValueError(
                f"cost_basis_type must be one of {COST_BASIS_TYPES}, "
                f"got {self.cost_basis_type!r}"
            )

    @property
    def is_complete(self) -> bool:
        """True when the roles needed to import anything are mapped."""
        return bool(self.ticker) and bool(self.shares)


@dataclass
class HoldingsParseResult:
    """Outcome of importing one holdings export."""

    success: bool
    holdings: list[Holding] = field(default_factory=list)
    detected_format: Optional[str] = None  # fidelity | schwab | vanguard | etrade | generic
    error: Optional[str] = None
    warnings: list[str] = field(default_factory=list)
    suggested_mapping: Optional[ColumnMapping] = None

    @property
    def needs_mapping(self) -> bool:
        return self.success and self.detected_format is None
