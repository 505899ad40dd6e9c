"""
SSL Channel - SMA of highs and SMA of lows, flipped by trend.

While price holds above the high average the channel is bullish
(ssl_up is the high average); a close below the low average flips it
bearish until a close above the high average flips it back.
"""

from collections.abc import Sequence
from dataclasses import dataclass

from .atr import CandleLike
from .moving_averages import sma_series


@dataclass
class SSLPoint:
    """One point of an SSL Channel series."""

    ssl_up: float
    ssl_down: float
    trend: int  # 1 bullish, -1 bearish, 0 before the first decisive close

    @property
    def is_bullish(self) -> bool:
        return self.ssl_up > self.ssl_down


def ssl_channel(candles: Sequence[CandleLike], period: int = 10) -> list[SSLPoint]:
    """
    Calculate SSL Channel series.

    Args:
        candles: Candles with high, low, close (most recent last)
        period: SMA period for highs and lows (default 10)

    Returns:
        List of SSLPoint, len(candles) - period + 1 of them,
        or [] if insufficient data
    """
    sma_high = sma_series([c.high for c in candles], period)
    sma_low = sma_series([c.low for c in candles], period)

    result: list[SSLPoint] = []
    trend = 0
    for offset, (high_avg, low_avg) in enumerate(zip(sma_high, sma_low, strict=True)):
        close = candles[offset + period - 1].close
        if close > high_avg:
            trend = 1
        elif close < low_avg:
            trend = -1

        if trend < 0:
            result.append(SSLPoint(ssl_up=low_avg, ssl_down=high_avg, trend=trend))
        else:
            result.append(SSLPoint(ssl_up=high_avg, ssl_down=low_avg, trend=trend))

    return result
