"""Result rendering and trade-log export."""

from portfolio_sim.reporting.csv_export import (
    TRADE_COLUMNS,
    parse_trades_csv,
    read_trades_csv,
    trades_to_csv,
    write_trades_csv,
)
from portfolio_sim.reporting.renderer import JsonReportRenderer, ResultRenderer, result_to_dict
from portfolio_sim.reporting.trade_log import filter_trades, sort_trades

__all__ = [
    "JsonReportRenderer",
    "ResultRenderer",
    "TRADE_COLUMNS",
    "filter_trades",
    "parse_trades_csv",
    "read_trades_csv",
    "result_to_dict",
    "sort_trades",
    "trades_to_csv",
    "write_trades_csv",
]
