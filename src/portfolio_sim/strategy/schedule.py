"""Rebalance calendar."""

from __future__ import annotations

from datetime import date
from typing import Sequence

from portfolio_sim.strategy.models import RebalanceFrequency


def is_rebalance_day(days: Sequence[date], index: int, frequency: RebalanceFrequency) -> bool:
    if index == 0 or frequency == RebalanceFrequency.DAILY:
        return True
    current = days[index]
    previous = days[index - 1]
    if frequency == RebalanceFrequency.WEEKLY:
        return current.isocalendar()[:2] != previous.isocalendar()[:2]
    return (current.year, current.month) != (previous.year, previous.month)
