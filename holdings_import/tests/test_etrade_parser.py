"""Tests for the E*TRADE holdings parser."""

from holdings_import.parsers import etrade

ETRADE_HEADERS = ["Symbol", "Last Price", "$ Change", "% Change", "Shares", "Total Value", "Gain/Loss"]

AAPL_ROW = ["AAPL", "$171.21", "$0.45", "0.26%", "50", "$8,560.50", "$1,560.50"]


class TestDetect:
    def test_standard_export(self):
        assert etrade.detect(ETRADE_HEADERS)

    def test_lowercase_and_quoted(self):
        assert etrade.detect(['"symbol"', '"last price"', '"$ change"', '"% change"', '"shares"'])

    def test_too_few_headers(self):
        assert not etrade.detect(["Symbol", "Last Price", "$ Change"])

    def test_wrong_order(self):
        assert not etrade.detect(["Last Price", "Symbol", "$ Change", "Shares"])

    def test_fidelity_headers_rejected(self):
        assert not etrade.detect(["Account Name/Number", "Symbol", "Description", "Quantity"])


class TestParse:
    def test_cost_basis_from_value_minus_gain(self):
        holdings = etrade.parse([AAPL_ROW], ETRADE_HEADERS)

        assert len(holdings) == 1
        h = holdings[0]
        assert h.ticker == "AAPL"
        assert h.shares == 500000
        assert h.cost_basis == 700000
        assert h.cost_per_share == 14000

    def test_explicit_cost_basis_column_wins(self):
        headers = ["symbol", "last price", "shares", "total value", "cost basis"]
        row = ["AAPL", "$171.21", "50", "$8,560.50", "$7,000.00"]

        h = etrade.parse([row], headers)[0]
        assert h.cost_basis == 700000
        assert h.cost_per_share == 14000

    def test_cost_basis_column_beats_gain_loss(self):
        headers = ["symbol", "last price", "shares", "total value", "gain/loss", "total cost"]
        row = ["AAPL", "$171.21", "50", "$8,560.50", "$1,560.50", "$6,000.00"]

        h = etrade.parse([row], headers)[0]
        assert h.cost_basis == 600000
        assert h.cost_per_share == 12000

    def test_price_placeholder_without_cost_data(self):
        headers = ["symbol", "last price", "shares", "total value"]
        row = ["AAPL", "$171.21", "50", "$8,560.50"]

        h = etrade.parse([row], headers)[0]
        assert h.cost_per_share == 17121
        assert h.cost_basis == 856050

    def test_negative_gain_loss(self):
        row = ["MSFT", "$140.00", "$0.10", "0.07%", "50", "$7,000.00", "-$1,000.00"]
        h = etrade.parse([row], ETRADE_HEADERS)[0]
        assert h.cost_basis == 800000
        assert h.cost_per_share == 16000

    def test_parenthesized_gain_loss(self):
        row = ["MSFT", "$140.00", "$0.10", "0.07%", "50", "$7,000.00", "($1,000.00)"]
        h = etrade.parse([row], ETRADE_HEADERS)[0]
        assert h.cost_basis == 800000

    def test_non_positive_derived_cost_falls_back_to_price(self):
        # gain larger than value: value - gain is negative
        row = ["GME", "$20.00", "$0.10", "0.50%", "10", "$200.00", "$500.00"]
        h = etrade.parse([row], ETRADE_HEADERS)[0]
        assert h.cost_per_share == 2000
        assert h.cost_basis == 20000

    def test_skips_cash_total_and_header_echo(self):
        rows = [
            ["Symbol", "Last Price", "$ Change", "% Change", "Shares", "Total Value", "Gain/Loss"],
            AAPL_ROW,
            ["CASH", "", "", "", "", "$1,234.56", ""],
            ["TOTAL", "", "", "", "", "$9,795.06", "$1,560.50"],
            ["", "", "", "", "", "", ""],
        ]
        holdings = etrade.parse(rows, ETRADE_HEADERS)
        assert [h.ticker for h in holdings] == ["AAPL"]

    def test_skips_zero_and_unparseable_shares(self):
        rows = [
            ["VTI", "$220.00", "$0.00", "0%", "0", "$0.00", "$0.00"],
            ["QQQ", "$400.00", "$0.00", "0%", "--", "$0.00", "$0.00"],
        ]
        assert etrade.parse(rows, ETRADE_HEADERS) == []

    def test_columns_found_by_name(self):
        headers = ["Symbol", "Last Price", "% Change", "Total Value", "Quantity", "Gain/Loss"]
        row = ["nvda", "$120.00", "1.0%", "$1,200.00", "10", "$200.00"]

        h = etrade.parse([row], headers)[0]
        assert h.ticker == "NVDA"
        assert h.shares == 100000
        assert h.cost_basis == 100000
        assert h.cost_per_share == 10000

    def test_fractional_shares(self):
        row = ["VOO", "$400.00", "$1.00", "0.25%", "2.5", "$1,000.00", "$100.00"]
        h = etrade.parse([row], ETRADE_HEADERS)[0]
        assert h.shares == 25000
        assert h.cost_basis == 90000
        assert h.cost_per_share == 36000

    def test_raw_row_keeps_original_cells(self):
        h = etrade.parse([AAPL_ROW], ETRADE_HEADERS)[0]
        assert h.raw_row == dict(zip(ETRADE_HEADERS, AAPL_ROW))

    def test_short_row(self):
        # Shares cell present, value and gain cells missing
        row = ["AAPL", "$171.21", "$0.45", "0.26%", "50"]
        h = etrade.parse([row], ETRADE_HEADERS)[0]
        assert h.shares == 500000
        assert h.cost_per_share == 17121
        assert h.raw_row["Total Value"] == ""
