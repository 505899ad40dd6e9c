"""
Signal scanner - surfaces the freshest valid zone retest.
"""

from collections.abc import Sequence

from .models import AnnotatedCandle


def find_signal(candles: Sequence[AnnotatedCandle], look_back: int = 3) -> AnnotatedCandle | None:
    """
    Scan back from the last candle for a valid retest.

    Args:
        candles: Fully processed candles, oldest first
        look_back: Maximum number of candles to inspect (default 3)

    Returns:
        The most recent candle with a retest and a VALID zone, or None
    """
    if look_back <= 0:
        raise ValueError(f"look_back must be positive, got: {look_back}")

    start = max(len(candles) - look_back, 0)
    for i in range(len(candles) - 1, start - 1, -1):
        if candles[i].is_signal:
            return candles[i]
    return None
