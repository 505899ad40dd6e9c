"""
CCI Indicator - Commodity Channel Index.

Measures how far the typical price has moved from its average,
scaled by the mean absolute deviation.
"""

from collections.abc import Sequence

from .atr import CandleLike
from .moving_averages import sma_series

CCI_CONSTANT = 0.015


def typical_price(candle: CandleLike) -> float:
    """(high + low + close) / 3"""
    return (candle.high + candle.low + candle.close) / 3


def cci_series(candles: Sequence[CandleLike], period: int = 20) -> list[float]:
    """
    Calculate CCI series.

    CCI = (typical price - SMA(typical price)) / (0.015 * mean deviation)

    A window whose typical prices are all equal has no deviation and
    scores 0.

    Args:
        candles: Candles with high, low, close (most recent last)
        period: Lookback period (default 20)

    Returns:
        List of CCI values, len(candles) - period + 1 of them,
        or [] if insufficient data
    """
    prices = [typical_price(c) for c in candles]
    averages = sma_series(prices, period)

    result: list[float] = []
    for offset, average in enumerate(averages):
        window = prices[offset : offset + period]
        mean_deviation = sum(abs(p - average) for p in window) / period
        if mean_deviation == 0:
            result.append(0.0)
            continue
        result.append((window[-1] - average) / (CCI_CONSTANT * mean_deviation))

    return result
