from datetime import date

from portfolio_sim.ledger import PortfolioLedger
from portfolio_sim.ledger.models import Order, OrderAction
from portfolio_sim.monitoring import AuditLog

DAY = date(2024, 1, 2)


def _order(ticker: str, action: OrderAction, quantity: float) -> Order:
    return Order(ticker=ticker, action=action, quantity=quantity, reason="test")


def test_buy_exceeding_cash_is_rejected(tmp_path):
    audit = AuditLog(tmp_path / "audit.log")
    ledger = PortfolioLedger(1000.0, audit_log=audit)

    trades = ledger.apply([_order("A", OrderAction.BUY, 11.0)], DAY, {"A": 100.0})

    assert trades == []
    assert ledger.state.cash == 1000.0
    assert ledger.state.holdings == {}
    record = audit.read()[-1]
    assert record["event"] == "order_rejected"
    assert record["payload"]["reason"] == "Insufficient cash"


def test_sell_exceeding_holding_is_rejected():
    ledger = PortfolioLedger(1000.0)
    ledger.apply([_order("A", OrderAction.BUY, 5.0)], DAY, {"A": 100.0})

    trades = ledger.apply([_order("A", OrderAction.SELL, 6.0)], DAY, {"A": 100.0})

    assert trades == []
    assert ledger.state.shares("A") == 5.0


def test_round_trip_conserves_value_and_numbers_trades():
    ledger = PortfolioLedger(1000.0)
    prices = {"A": 100.0, "B": 25.0}

    first = ledger.apply(
        [_order("A", OrderAction.BUY, 4.0), _order("B", OrderAction.BUY, 20.0)],
        DAY,
        prices,
    )
    second = ledger.apply([_order("A", OrderAction.SELL, 4.0)], date(2024, 1, 3), {"A": 120.0, "B": 25.0})

    assert [trade.id for trade in first + second] == [1, 2, 3]
    assert first[0].value == 400.0
    assert ledger.state.cash == 1000.0 - 400.0 - 500.0 + 480.0
    assert "A" not in ledger.state.holdings
    assert ledger.state.total_value({"B": 25.0}) == 1080.0


def test_mark_to_market_only_raises_peak():
    ledger = PortfolioLedger(1000.0)
    ledger.apply([_order("A", OrderAction.BUY, 10.0)], DAY, {"A": 100.0})

    up = ledger.mark_to_market(DAY, {"A": 120.0})
    down = ledger.mark_to_market(date(2024, 1, 3), {"A": 90.0})

    assert up.value == 1200.0
    assert down.value == 900.0
    assert ledger.state.peak_value == 1200.0

    ledger.reset_peak(900.0)
    assert ledger.state.peak_value == 900.0
