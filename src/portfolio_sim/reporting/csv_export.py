"""CSV export of the trade log."""

from __future__ import annotations

import csv
import io
from datetime import date
from pathlib import Path
from typing import Iterable

from portfolio_sim.ledger.models import OrderAction, Trade

TRADE_COLUMNS = ("date", "ticker", "action", "quantity", "price", "value", "reason")


def _write(handle, trades: Iterable[Trade]) -> None:
    writer = csv.writer(handle, quoting=csv.QUOTE_NONNUMERIC, lineterminator="\n")
    writer.writerow(TRADE_COLUMNS)
    for trade in trades:
        writer.writerow(
            [
                trade.day.isoformat(),
                trade.ticker,
                trade.action.value,
                float(trade.quantity),
                float(trade.price),
                float(trade.value),
                trade.reason,
            ]
        )


def trades_to_csv(trades: Iterable[Trade]) -> str:
    buffer = io.StringIO()
    _write(buffer, trades)
    return buffer.getvalue()


def write_trades_csv(trades: Iterable[Trade], path: str | Path) -> Path:
    output = Path(path)
    output.parent.mkdir(parents=True, exist_ok=True)
    with output.open("w", encoding="utf-8", newline="") as handle:
        _write(handle, trades)
    return output


def parse_trades_csv(text: str) -> list[Trade]:
    """Parse CSV produced by :func:`trades_to_csv`. Ids are renumbered from 1."""
    reader = csv.DictReader(io.StringIO(text), quoting=csv.QUOTE_NONNUMERIC)
    missing = [column for column in TRADE_COLUMNS if column not in (reader.fieldnames or [])]
    if missing:
        raise ValueError(f"Trade CSV missing columns: {', '.join(missing)}")
    trades: list[Trade] = []
    for index, row in enumerate(reader, start=1):
        trades.append(
            Trade(
                id=index,
                day=date.fromisoformat(str(row["date"])),
                ticker=str(row["ticker"]),
                action=OrderAction(str(row["action"])),
                quantity=float(row["quantity"]),
                price=float(row["price"]),
                value=float(row["value"]),
                reason=str(row["reason"]),
            )
        )
    return trades


def read_trades_csv(path: str | Path) -> list[Trade]:
    return parse_trades_csv(Path(path).read_text(encoding="utf-8"))
