"""
Chandelier Exit - ATR trailing stops hung from recent extremes.
"""

from collections.abc import Sequence
from dataclasses import dataclass

from .atr import CandleLike, atr_series


@dataclass
class ChandelierPoint:
    """One point of a Chandelier Exit series."""

    long_stop: float
    short_stop: float
    direction: int  # 1 long, -1 short


def chandelier_exit(
    candles: Sequence[CandleLike],
    period: int = 22,
    multiplier: float = 3.0,
    use_close: bool = True,
) -> list[ChandelierPoint]:
    """
    Calculate Chandelier Exit series.

    long_stop = highest(period + 1) - multiplier * ATR
    short_stop = lowest(period + 1) + multiplier * ATR

    Each stop only ratchets in its favour while the previous close stays
    on the right side of it. Direction turns long on a close above the
    short stop and short on a close below the long stop.

    Args:
        candles: Candles with high, low, close (most recent last)
        period: ATR and extreme lookback period (default 22)
        multiplier: ATR multiplier (default 3.0)
        use_close: Take extremes from closes instead of highs/lows

    Returns:
        List of ChandelierPoint aligned with atr_series(candles, period),
        or [] if insufficient data
    """
    atr_values = atr_series(candles, period)

    result: list[ChandelierPoint] = []
    direction = 1
    for offset, atr in enumerate(atr_values):
        index = offset + period
        window = candles[index - period : index + 1]
        highest = max(c.close if use_close else c.high for c in window)
        lowest = min(c.close if use_close else c.low for c in window)

        long_stop = highest - multiplier * atr
        short_stop = lowest + multiplier * atr

        if result:
            previous = result[-1]
            previous_close = candles[index - 1].close
            if previous_close > previous.long_stop:
                long_stop = max(long_stop, previous.long_stop)
            if previous_close < previous.short_stop:
                short_stop = min(short_stop, previous.short_stop)

        close = candles[index].close
        if close > short_stop:
            direction = 1
        elif close < long_stop:
            direction = -1

        result.append(ChandelierPoint(long_stop=long_stop, short_stop=short_stop, direction=direction))

    return result
