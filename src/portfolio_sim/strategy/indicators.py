"""Indicator helpers over close-price sequences."""

from __future__ import annotations

from typing import Optional, Sequence


def sma(values: Sequence[float], window: int) -> Optional[float]:
    if window <= 0 or len(values) < window:
        return None
    slice_ = values[-window:]
    return sum(slice_) / window


def stddev(values: Sequence[float], window: int) -> Optional[float]:
    if window <= 0 or len(values) < window:
        return None
    slice_ = values[-window:]
    mean = sum(slice_) / window
    variance = sum((value - mean) ** 2 for value in slice_) / window
    return variance**0.5


def trailing_return(values: Sequence[float], lookback: int) -> Optional[float]:
    if lookback <= 0 or len(values) < lookback + 1:
        return None
    base = values[-lookback - 1]
    if base <= 0:
        return None
    return values[-1] / base - 1.0


def zscore_vs_trailing(values: Sequence[float], lookback: int) -> Optional[float]:
    """Z-score of the latest value against the ``lookback`` values before it."""
    if lookback <= 0 or len(values) < lookback + 1:
        return None
    prior = values[-lookback - 1 : -1]
    mean = sma(prior, lookback)
    deviation = stddev(prior, lookback)
    if mean is None or deviation is None or deviation == 0:
        return None
    return (values[-1] - mean) / deviation
