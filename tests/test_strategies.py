from datetime import date, timedelta

import pytest

from portfolio_sim.data import PriceSeries, align_series
from portfolio_sim.errors import ConfigError
from portfolio_sim.ledger.models import OrderAction
from portfolio_sim.strategy import (
    EqualWeightStrategy,
    MeanReversionParams,
    MeanReversionStrategy,
    MomentumParams,
    MomentumStrategy,
    RebalanceFrequency,
    RiskState,
    ScheduleParams,
    available_strategies,
    build_strategy,
)
from portfolio_sim.strategy.schedule import is_rebalance_day
from portfolio_sim.strategy.sizer import affordable_quantity

RISK = RiskState(halted=False, peak_value=0.0, drawdown=0.0)


def _history(closes_by_ticker: dict[str, list[float]], start: date = date(2024, 1, 2)):
    length = len(next(iter(closes_by_ticker.values())))
    days = [start + timedelta(days=offset) for offset in range(length)]
    series = {
        ticker: PriceSeries.from_pairs(ticker, zip(days, closes)) for ticker, closes in closes_by_ticker.items()
    }
    return align_series(series).history(length - 1)


def _orders_by_ticker(orders):
    return {order.ticker: order for order in orders}


def test_equal_weight_first_day_buys_equal_slices():
    strategy = EqualWeightStrategy(ScheduleParams())
    history = _history({"A": [100.0], "B": [50.0], "C": [25.0]})

    orders = strategy.decide({}, 90000.0, history, RISK)

    assert [order.action for order in orders] == [OrderAction.BUY] * 3
    assert {order.ticker: order.quantity for order in orders} == {"A": 300.0, "B": 600.0, "C": 1200.0}


def test_equal_weight_waits_for_next_month():
    strategy = EqualWeightStrategy(ScheduleParams(rebalance_frequency=RebalanceFrequency.MONTHLY))
    history = _history({"A": [100.0, 120.0], "B": [100.0, 80.0]})

    assert strategy.decide({"A": 10.0, "B": 10.0}, 0.0, history, RISK) == []


def test_equal_weight_sells_before_buying():
    strategy = EqualWeightStrategy(ScheduleParams(rebalance_frequency=RebalanceFrequency.DAILY))
    history = _history({"A": [100.0, 150.0], "B": [100.0, 50.0]})

    orders = strategy.decide({"A": 10.0, "B": 10.0}, 0.0, history, RISK)

    assert [(order.ticker, order.action) for order in orders] == [("A", OrderAction.SELL), ("B", OrderAction.BUY)]
    assert orders[0].quantity == 3.0
    assert orders[1].quantity == 9.0


def test_rebalance_calendar():
    days = [date(2024, 1, 31), date(2024, 2, 1), date(2024, 2, 2), date(2024, 2, 5)]
    assert is_rebalance_day(days, 0, RebalanceFrequency.MONTHLY)
    assert is_rebalance_day(days, 1, RebalanceFrequency.MONTHLY)
    assert not is_rebalance_day(days, 2, RebalanceFrequency.MONTHLY)
    assert not is_rebalance_day(days, 2, RebalanceFrequency.WEEKLY)
    assert is_rebalance_day(days, 3, RebalanceFrequency.WEEKLY)


def test_affordable_quantity_never_exceeds_budget():
    assert affordable_quantity(1000.0, 333.0, fractional=False) == 3.0
    quantity = affordable_quantity(1000.0, 3.0, fractional=True)
    assert quantity * 3.0 <= 1000.0
    assert quantity == pytest.approx(333.3333, rel=1e-6)
    assert affordable_quantity(0.0, 10.0, fractional=False) == 0.0


def test_momentum_buys_top_ranked_and_sells_the_rest():
    strategy = MomentumStrategy(MomentumParams(lookback=2, top_fraction=0.5), ScheduleParams())
    history = _history(
        {
            "A": [100.0, 110.0, 120.0],
            "B": [100.0, 105.0, 110.0],
            "C": [100.0, 98.0, 95.0],
            "D": [100.0, 100.0, 100.0],
        }
    )

    orders = strategy.decide({"C": 10.0}, 10000.0, history, RISK)
    by_ticker = _orders_by_ticker(orders)

    assert set(by_ticker) == {"A", "B", "C"}
    assert by_ticker["C"].action == OrderAction.SELL
    assert by_ticker["C"].quantity == 10.0
    assert by_ticker["A"].quantity == 45.0
    assert by_ticker["B"].quantity == 49.0


def test_momentum_needs_lookback_plus_one_closes():
    strategy = MomentumStrategy(MomentumParams(lookback=2), ScheduleParams())
    assert strategy.min_history == 3
    history = _history({"A": [100.0, 110.0], "B": [100.0, 90.0]})
    assert strategy.decide({}, 1000.0, history, RISK) == []


def test_momentum_ties_break_by_ticker():
    strategy = MomentumStrategy(MomentumParams(lookback=1, top_fraction=0.5), ScheduleParams())
    history = _history({"B": [10.0, 11.0], "A": [20.0, 22.0]})

    assert strategy.rank(history)[0][0] == "A"
    orders = strategy.decide({}, 1000.0, history, RISK)
    assert [order.ticker for order in orders] == ["A"]


def test_mean_reversion_buys_dips_and_sells_spikes():
    strategy = MeanReversionStrategy(
        MeanReversionParams(lookback=3, entry_zscore=1.0),
        ScheduleParams(rebalance_frequency=RebalanceFrequency.DAILY),
    )
    history = _history({"X": [10.0, 11.0, 9.0, 5.0], "Y": [10.0, 11.0, 9.0, 15.0]})

    orders = strategy.decide({"Y": 10.0}, 1000.0, history, RISK)
    by_ticker = _orders_by_ticker(orders)

    assert by_ticker["Y"].action == OrderAction.SELL
    assert by_ticker["Y"].quantity == 10.0
    assert by_ticker["X"].action == OrderAction.BUY
    assert by_ticker["X"].quantity == 115.0
    assert "z=" in by_ticker["X"].reason


def test_mean_reversion_flat_history_is_neutral():
    strategy = MeanReversionStrategy(
        MeanReversionParams(lookback=3),
        ScheduleParams(rebalance_frequency=RebalanceFrequency.DAILY),
    )
    history = _history({"X": [10.0, 10.0, 10.0, 10.0]})
    assert strategy.decide({}, 1000.0, history, RISK) == []


def test_registry_builds_by_identifier():
    assert build_strategy("equal-weight").strategy_id == "equal-weight"
    assert build_strategy("Mean_Reversion").schedule.rebalance_frequency == RebalanceFrequency.DAILY
    momentum = build_strategy("momentum", {"lookback": 5, "rebalance_frequency": "weekly"})
    assert momentum.min_history == 6
    assert momentum.schedule.rebalance_frequency == RebalanceFrequency.WEEKLY


def test_registry_rejects_unknown_and_bad_parameters():
    with pytest.raises(ConfigError, match="Unknown strategy"):
        build_strategy("buy-the-rumor")
    with pytest.raises(ConfigError, match="rebalance_frequency"):
        build_strategy("equal-weight", {"rebalance_frequency": "hourly"})
    with pytest.raises(ConfigError, match="lookback"):
        build_strategy("momentum", {"lookback": 0})


def test_mean_reversion_default_schedule_skips_mid_month_days():
    strategy = MeanReversionStrategy(MeanReversionParams(lookback=3), ScheduleParams())
    history = _history({"X": [10.0, 11.0, 9.0, 5.0]})
    assert strategy.decide({}, 1000.0, history, RISK) == []


def test_non_numeric_parameters_are_config_errors():
    with pytest.raises(ConfigError, match="lookback"):
        build_strategy("momentum", {"lookback": "ten"})
    with pytest.raises(ConfigError, match="top_fraction"):
        build_strategy("momentum", {"top_fraction": None})
    with pytest.raises(ConfigError, match="entry_zscore"):
        build_strategy("mean-reversion", {"entry_zscore": "wide"})
    with pytest.raises(ConfigError, match="entry_zscore"):
        build_strategy("mean-reversion", {"entry_zscore": float("nan")})


def test_fractional_shares_flag_parsing():
    assert build_strategy("equal-weight", {"fractional_shares": "false"}).fractional_shares is False
    assert build_strategy("equal-weight", {"fractional_shares": "TRUE"}).fractional_shares is True
    assert build_strategy("equal-weight", {"fractional_shares": True}).fractional_shares is True
    assert build_strategy("equal-weight").fractional_shares is False
    with pytest.raises(ConfigError, match="fractional_shares"):
        build_strategy("equal-weight", {"fractional_shares": "yes"})
    with pytest.raises(ConfigError, match="fractional_shares"):
        build_strategy("equal-weight", {"fractional_shares": 1})


def test_available_strategies_lists_every_builder():
    names = available_strategies()
    assert names == ["equal-weight", "mean-reversion", "momentum"]
    assert [build_strategy(name).strategy_id for name in names] == names
