from .holding import Holding, ColumnMapping, HoldingsParseResult
from .values import (
    clean_cell,
    normalize_ticker,
    parse_share_quantity,
    parse_currency_amount,
    cost_per_share_from_total,
    total_from_cost_per_share,
    SHARE_SCALE,
    CURRENCY_SCALE,
)
from .row_filter import classify_row, should_skip_row, SkipReason
from .generic import suggest_column_mapping, parse_generic
from .format_detector import (
    BrokerageFormat,
    BROKERAGE_FORMATS,
    detect_brokerage_format,
    get_format_display_name,
    list_brokerage_formats,
    parse_holdings,
    parse_holdings_with_mapping,
)
