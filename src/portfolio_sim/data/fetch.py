"""Concurrent fan-out/fan-in fetch of a ticker universe."""

from __future__ import annotations

import asyncio
from datetime import date
from typing import Iterable, Optional

from portfolio_sim.data.models import PriceSeries
from portfolio_sim.data.provider import PriceProvider
from portfolio_sim.data.validation import validate_series
from portfolio_sim.errors import DataUnavailableError, ProviderError


async def fetch_one(provider: PriceProvider, ticker: str, start: date, end: date) -> PriceSeries:
    try:
        series = await asyncio.to_thread(provider.fetch_series, ticker, start, end)
    except ProviderError as exc:
        raise DataUnavailableError(f"Price data unavailable for {ticker}: {exc}", ticker=ticker) from exc
    return validate_series(series, ticker)


async def fetch_universe(
    provider: PriceProvider,
    tickers: Iterable[str],
    start: date,
    end: date,
    audit_log: Optional[object] = None,
) -> dict[str, PriceSeries]:
    """Fetch every ticker in parallel and join before returning.

    The first failure cancels the outstanding fetches and is re-raised as is,
    so a run never continues with a partial universe.
    """
    tickers = list(tickers)
    tasks: dict[str, asyncio.Task] = {}
    try:
        async with asyncio.TaskGroup() as group:
            for ticker in tickers:
                tasks[ticker] = group.create_task(fetch_one(provider, ticker, start, end))
    except BaseExceptionGroup as group_error:
        first = group_error.exceptions[0]
        if audit_log is not None:
            audit_log.log("fetch_failed", {"ticker": getattr(first, "ticker", None), "error": str(first)})
        raise first from None

    result = {ticker: tasks[ticker].result() for ticker in tickers}
    if audit_log is not None:
        audit_log.log(
            "data_loaded",
            {ticker: len(series) for ticker, series in result.items()},
        )
    return result
