"""
Heikin-Ashi - averaged candles that smooth out noise.
"""

from collections.abc import Sequence

from ta_signals.core.models import Candle


def heikin_ashi(candles: Sequence[Candle]) -> list[Candle]:
    """
    Convert candles to Heikin-Ashi candles.

    close = (open + high + low + close) / 4
    open  = (previous HA open + previous HA close) / 2, the raw open first
    high / low extend to include the HA open and close

    Returns:
        One Heikin-Ashi candle per input candle, same timestamps
    """
    result: list[Candle] = []
    for candle in candles:
        ha_close = (candle.open + candle.high + candle.low + candle.close) / 4
        ha_open = candle.open if not result else (result[-1].open + result[-1].close) / 2
        result.append(
            Candle(
                timestamp=candle.timestamp,
                open=ha_open,
                high=max(candle.high, ha_open, ha_close),
                low=min(candle.low, ha_open, ha_close),
                close=ha_close,
                volume=candle.volume,
            )
        )
    return result
