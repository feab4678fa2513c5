"""Contract checks for provider output."""

from __future__ import annotations

import math

from portfolio_sim.data.models import PriceSeries
from portfolio_sim.errors import DataUnavailableError


def validate_series(series: PriceSeries, ticker: str) -> PriceSeries:
    """Reject a series that breaks the provider contract.

    The series must belong to ``ticker``, be non-empty, strictly ascending by
    date (which also rules out duplicates) and carry finite positive closes.
    """
    if series.ticker != ticker:
        raise DataUnavailableError(
            f"Provider returned series for {series.ticker!r}, expected {ticker!r}",
            ticker=ticker,
        )
    if not series.points:
        raise DataUnavailableError(f"No prices returned for {ticker}", ticker=ticker)

    previous = None
    for point in series.points:
        if previous is not None:
            if point.day == previous:
                raise DataUnavailableError(f"Duplicate date {point.day} in {ticker}", ticker=ticker)
            if point.day < previous:
                raise DataUnavailableError(f"Dates out of order at {point.day} in {ticker}", ticker=ticker)
        if not math.isfinite(point.close) or point.close <= 0:
            raise DataUnavailableError(
                f"Non-positive close {point.close} on {point.day} in {ticker}",
                ticker=ticker,
            )
        previous = point.day
    return series
