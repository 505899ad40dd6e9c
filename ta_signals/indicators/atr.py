"""
ATR Indicator - Average True Range.

Measures market volatility by averaging true ranges over a period.
"""

from collections.abc import Sequence
from typing import Protocol


class CandleLike(Protocol):
    """Protocol for candle-like objects with OHLC data."""

    high: float
    low: float
    close: float


def true_range(current: CandleLike, previous_close: float | None = None) -> float:
    """
    Calculate True Range for a single candle.

    True Range is the greatest of:
    1. Current High - Current Low
    2. |Current High - Previous Close|
    3. |Current Low - Previous Close|

    Args:
        current: Current candle with high, low, close
        previous_close: Previous candle's close price (None for first candle)
    """
    high_low = current.high - current.low

    if previous_close is None:
        return high_low

    return max(high_low, abs(current.high - previous_close), abs(current.low - previous_close))


def atr_series(candles: Sequence[CandleLike], period: int = 14) -> list[float]:
    """
    Calculate ATR series with Wilder's smoothing.

    The first candle has no previous close, so true ranges start at the
    second candle. The first ATR is the SMA of the first `period` true
    ranges.

    Args:
        candles: Candles with high, low, close (most recent last)
        period: Lookback period (default 14)

    Returns:
        List of ATR values, len(candles) - period of them,
        or [] if insufficient data
    """
    if len(candles) < period + 1 or period <= 0:
        return []

    true_ranges = [
        true_range(candles[i], candles[i - 1].close) for i in range(1, len(candles))
    ]

    current_atr = sum(true_ranges[:period]) / period
    result = [current_atr]

    for tr in true_ranges[period:]:
        current_atr = (current_atr * (period - 1) + tr) / period
        result.append(current_atr)

    return result
