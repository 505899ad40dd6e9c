"""
Pivot (fractal) detection.

A candle is an UP pivot when its high dominates the `strength` candles
on each side, and a DOWN pivot when its low does. Ties with earlier
candles are allowed, ties with later candles are not, so a flat top is
credited to its last candle.
"""

from collections.abc import Sequence

from ta_signals.core.config import CloseType
from ta_signals.core.models import Candle

from .models import PivotType, StructureInvariantError


def _cmp_high(candle: Candle, close_type: CloseType) -> float:
    return candle.high if close_type is CloseType.HL else candle.close


def _cmp_low(candle: Candle, close_type: CloseType) -> float:
    return candle.low if close_type is CloseType.HL else candle.close


def classify_pivot(
    candles: Sequence[Candle],
    index: int,
    strength: int,
    close_type: CloseType = CloseType.HL,
) -> PivotType | None:
    """
    Classify a single candle.

    Args:
        candles: Full candle sequence
        index: Candle to classify
        strength: Candles compared on each side
        close_type: Price basis for comparison

    Returns:
        UP, DOWN, BOTH, or None (also None when the window does not fit)
    """
    if index < strength or index >= len(candles) - strength:
        return None

    current = candles[index]
    previous = candles[index - strength : index]
    following = candles[index + 1 : index + strength + 1]

    high = _cmp_high(current, close_type)
    is_up = high >= max(_cmp_high(c, close_type) for c in previous) and high > max(
        _cmp_high(c, close_type) for c in following
    )

    low = _cmp_low(current, close_type)
    is_down = low <= min(_cmp_low(c, close_type) for c in previous) and low < min(
        _cmp_low(c, close_type) for c in following
    )

    if is_up and is_down:
        return PivotType.BOTH
    if is_up:
        return PivotType.UP
    if is_down:
        return PivotType.DOWN
    return None


def detect_pivots(
    candles: Sequence[Candle],
    strength: int = 5,
    close_type: CloseType = CloseType.HL,
) -> list[PivotType | None]:
    """
    Tag every candle with its pivot type.

    Args:
        candles: Candles in chronological order
        strength: Candles compared on each side (default 5)
        close_type: Price basis for comparison (default HL)

    Returns:
        One entry per candle, None where the candle is not a pivot
    """
    if strength <= 0:
        raise ValueError(f"strength must be positive, got: {strength}")
    return [classify_pivot(candles, i, strength, close_type) for i in range(len(candles))]


def pivot_value(candle: Candle, direction: PivotType, close_type: CloseType = CloseType.HL) -> float:
    """
    Price level a pending pivot is broken against.

    HL: high for UP pivots, low for DOWN pivots. CLOSE: the close.
    """
    if direction not in (PivotType.UP, PivotType.DOWN):
        raise StructureInvariantError(f"No tracked value for pivot direction {direction}")
    if close_type is CloseType.CLOSE:
        return candle.close
    return candle.high if direction is PivotType.UP else candle.low
