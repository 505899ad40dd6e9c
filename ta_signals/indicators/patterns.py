"""
Candlestick Patterns - one, two and three candle formations.

Each detector returns the matching CandlePattern or None. When a
candle satisfies more than one rule, the later (more specific) rule in
each function wins.
"""

from enum import Enum
from typing import Protocol


class OHLCLike(Protocol):
    open: float
    high: float
    low: float
    close: float


class CandlePattern(Enum):
    """Recognised candlestick formations."""

    HAMMER = "Hammer"
    INVERTED_HAMMER = "Inverted Hammer"
    DOJI = "Doji"
    BULLISH_ENGULFING = "Bullish Engulfing"
    BEARISH_ENGULFING = "Bearish Engulfing"
    MORNING_STAR = "Morning Star"
    EVENING_STAR = "Evening Star"
    THREE_WHITE_SOLDIERS = "Three White Soldiers"
    THREE_BLACK_CROWS = "Three Black Crows"


def _bullish(c: OHLCLike) -> bool:
    return c.close > c.open


def _bearish(c: OHLCLike) -> bool:
    return c.close < c.open


def detect_single_pattern(candle: OHLCLike) -> CandlePattern | None:
    """
    Classify one candle as Doji, Inverted Hammer or Hammer.

    Hammer: body at most 30% of the range, lower shadow at least twice
    the body, almost no upper shadow. Inverted Hammer mirrors it.
    Doji: body under 10% of the range. Zero-range candles match nothing.
    """
    total_range = candle.high - candle.low
    if total_range <= 0:
        return None

    body = abs(candle.close - candle.open)
    upper_shadow = candle.high - max(candle.open, candle.close)
    lower_shadow = min(candle.open, candle.close) - candle.low

    if body / total_range < 0.1:
        return CandlePattern.DOJI
    if body <= total_range * 0.3 and upper_shadow >= body * 2 and lower_shadow < body * 0.18:
        return CandlePattern.INVERTED_HAMMER
    if body <= total_range * 0.3 and lower_shadow >= body * 2 and upper_shadow < body * 0.18:
        return CandlePattern.HAMMER
    return None


def detect_double_pattern(candle: OHLCLike, prev: OHLCLike) -> CandlePattern | None:
    """Bullish or bearish engulfing of the previous candle's body."""
    if _bearish(prev) and _bullish(candle) and candle.open < prev.close and candle.close > prev.open:
        return CandlePattern.BULLISH_ENGULFING
    if _bullish(prev) and _bearish(candle) and candle.open > prev.close and candle.close < prev.open:
        return CandlePattern.BEARISH_ENGULFING
    return None


def detect_triple_pattern(candle: OHLCLike, prev1: OHLCLike, prev2: OHLCLike) -> CandlePattern | None:
    """
    Three-candle reversal and continuation patterns.

    Args:
        candle: Latest candle
        prev1: Candle before it
        prev2: Candle two before it
    """
    if (
        _bearish(prev2)
        and _bearish(prev1)
        and _bearish(candle)
        and prev1.open < prev2.close
        and candle.open < prev1.close
    ):
        return CandlePattern.THREE_BLACK_CROWS
    if (
        _bullish(prev2)
        and _bullish(prev1)
        and _bullish(candle)
        and prev1.open > prev2.close
        and candle.open > prev1.close
    ):
        return CandlePattern.THREE_WHITE_SOLDIERS
    if _bearish(prev2) and _bullish(prev1) and _bearish(candle) and candle.close < prev1.open:
        return CandlePattern.EVENING_STAR
    if _bullish(prev2) and _bearish(prev1) and _bullish(candle) and candle.close > prev1.open:
        return CandlePattern.MORNING_STAR
    return None
