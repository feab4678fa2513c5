"""Monitoring exports."""

from portfolio_sim.monitoring.audit import AuditLog
from portfolio_sim.monitoring.monitor import Monitor
from portfolio_sim.monitoring.notifier import LogNotifier, MemoryNotifier, Notifier

__all__ = [
    "AuditLog",
    "LogNotifier",
    "MemoryNotifier",
    "Monitor",
    "Notifier",
]
