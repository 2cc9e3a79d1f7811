"""Tests for brokerage format detection and dispatch."""

from holdings_import.parsers.format_detector import (
    BROKERAGE_FORMATS,
    MANUAL_MAPPING_WARNING,
    detect_brokerage_format,
    get_format_display_name,
    list_brokerage_formats,
    parse_holdings,
    parse_holdings_with_mapping,
)
from holdings_import.parsers.holding import ColumnMapping

ETRADE_HEADERS = ["Symbol", "Last Price", "$ Change", "% Change", "Shares", "Total Value", "Gain/Loss"]
FIDELITY_HEADERS = [
    "Account Name/Number", "Symbol", "Description", "Quantity", "Last Price",
    "Last Price Change", "Current Value", "Today's Gain/Loss Dollar",
    "Today's Gain/Loss Percent", "Total Gain/Loss Dollar", "Total Gain/Loss Percent",
    "Percent Of Account", "Cost Basis", "Cost Basis Per Share", "Type",
]
SCHWAB_HEADERS = ["Symbol", "Description", "Quantity", "Price", "Price Change %", "Market Value"]
VANGUARD_HEADERS = ["Fund Account Number", "Fund Name", "Shares", "Share Price", "Total Value", "Cost Basis"]
GENERIC_HEADERS = ["ticker", "qty", "avg cost"]


class TestDetectBrokerageFormat:
    def test_detection_order(self):
        assert [f.name for f in BROKERAGE_FORMATS] == ["fidelity", "schwab", "vanguard", "etrade"]

    def test_each_format(self):
        assert detect_brokerage_format(FIDELITY_HEADERS).name == "fidelity"
        assert detect_brokerage_format(SCHWAB_HEADERS).name == "schwab"
        assert detect_brokerage_format(VANGUARD_HEADERS).name == "vanguard"
        assert detect_brokerage_format(ETRADE_HEADERS).name == "etrade"

    def test_unknown(self):
        assert detect_brokerage_format(GENERIC_HEADERS) is None
        assert detect_brokerage_format([]) is None

    def test_first_match_wins(self):
        # Satisfies both the Vanguard and the E*TRADE signatures
        headers = ["Symbol", "Last Price", "$ Change", "Fund Name", "Shares"]
        assert detect_brokerage_format(headers).name == "vanguard"


class TestDisplayNames:
    def test_known(self):
        assert get_format_display_name("etrade") == "E*TRADE"
        assert get_format_display_name("fidelity") == "Fidelity"
        assert get_format_display_name("schwab") == "Charles Schwab"
        assert get_format_display_name("vanguard") == "Vanguard"

    def test_generic_and_unrecognized(self):
        assert get_format_display_name("generic") == "Generic CSV"
        assert get_format_display_name("robinhood") == "Generic CSV"

    def test_missing(self):
        assert get_format_display_name(None) == "Unknown Format"
        assert get_format_display_name("") == "Unknown Format"

    def test_list_formats_generic_last(self):
        formats = list_brokerage_formats()
        assert [f["name"] for f in formats] == ["fidelity", "schwab", "vanguard", "etrade", "generic"]
        assert formats[-1]["display_name"] == "Generic CSV"


class TestParseHoldings:
    def test_detected_format(self):
        rows = [["AAPL", "$171.21", "$0.45", "0.26%", "50", "$8,560.50", "$1,560.50"]]
        result = parse_holdings(rows, ETRADE_HEADERS)

        assert result.success
        assert result.detected_format == "etrade"
        assert result.error is None
        assert result.warnings == []
        assert not result.needs_mapping
        assert len(result.holdings) == 1
        assert result.holdings[0].cost_basis == 700000

    def test_skip_rules_end_to_end(self):
        rows = [
            ["AAPL", "$171.21", "$0.45", "0.26%", "50", "$8,560.50", "$1,560.50"],
            ["Cash", "", "", "", "", "$1,000.00", ""],
            ["Total", "", "", "", "", "$9,560.50", "$1,560.50"],
        ]
        result = parse_holdings(rows, ETRADE_HEADERS)
        assert len(result.holdings) == 1
        assert result.holdings[0].ticker == "AAPL"

    def test_unknown_format_asks_for_mapping(self):
        rows = [["AAPL", "50", "$140.00"]]
        result = parse_holdings(rows, GENERIC_HEADERS)

        assert result.success
        assert result.detected_format is None
        assert result.holdings == []
        assert result.warnings == [MANUAL_MAPPING_WARNING]
        assert result.needs_mapping
        assert result.suggested_mapping == ColumnMapping(
            ticker="ticker", shares="qty", cost_basis="avg cost", cost_basis_type="per_share"
        )

    def test_detected_format_with_no_positions(self):
        result = parse_holdings([], FIDELITY_HEADERS)
        assert result.success
        assert result.detected_format == "fidelity"
        assert result.holdings == []


class TestParseHoldingsWithMapping:
    def test_uses_mapping(self):
        mapping = ColumnMapping(ticker="ticker", shares="qty", cost_basis="avg cost", cost_basis_type="per_share")
        result = parse_holdings_with_mapping([["AAPL", "50", "$140.00"]], GENERIC_HEADERS, mapping)

        assert result.success
        assert result.detected_format == "generic"
        assert result.warnings == []
        h = result.holdings[0]
        assert h.cost_per_share == 14000
        assert h.cost_basis == 700000

    def test_mapping_overrides_detection(self):
        rows = [["AAPL", "$171.21", "$0.45", "0.26%", "50", "$8,560.50", "$1,560.50"]]
        mapping = ColumnMapping(ticker="Symbol", shares="Shares", cost_basis="Total Value")
        result = parse_holdings_with_mapping(rows, ETRADE_HEADERS, mapping)

        assert result.detected_format == "generic"
        assert result.holdings[0].cost_basis == 856050

    def test_incomplete_mapping_warns(self):
        result = parse_holdings_with_mapping([["AAPL", "50"]], ["ticker", "qty"], ColumnMapping(ticker="ticker"))
        assert result.success
        assert result.holdings == []
        assert result.warnings == ["Column mapping needs both a ticker and a shares column."]
