"""Alert routing for risk and run lifecycle events."""

from __future__ import annotations

from dataclasses import dataclass

from portfolio_sim.monitoring.notifier import Notifier


@dataclass
class Monitor:
    notifier: Notifier

    def stop_loss(self, reason: str) -> None:
        self.notifier.notify("STOP_LOSS", reason)

    def drawdown_limit(self, reason: str) -> None:
        self.notifier.notify("DRAWDOWN_LIMIT", reason)

    def volatility_throttle(self, reason: str) -> None:
        self.notifier.notify("VOLATILITY_CAP", reason)

    def run_failed(self, reason: str) -> None:
        self.notifier.notify("RUN_FAILED", reason)
