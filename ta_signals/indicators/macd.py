"""
MACD Indicator - Moving Average Convergence Divergence.

Trend-following momentum indicator showing the relationship
between two exponential moving averages of price.
"""

from dataclasses import dataclass

from .moving_averages import ema_series


@dataclass
class MACDResult:
    """One point of a MACD series."""

    macd_line: float  # Fast EMA - Slow EMA
    signal_line: float  # EMA of MACD line
    histogram: float  # MACD line - Signal line

    @property
    def is_bullish(self) -> bool:
        """True if MACD is above signal line."""
        return self.histogram > 0


def macd_series(
    values: list[float],
    fast: int = 12,
    slow: int = 26,
    signal: int = 9,
) -> list[MACDResult]:
    """
    Calculate MACD series.

    MACD Line = Fast EMA - Slow EMA
    Signal Line = EMA of MACD Line
    Histogram = MACD Line - Signal Line

    Args:
        values: List of prices (most recent last)
        fast: Fast EMA period (default 12)
        slow: Slow EMA period (default 26)
        signal: Signal line EMA period (default 9)

    Returns:
        List of MACDResult, len(values) - slow - signal + 2 of them,
        or [] if insufficient data or fast >= slow
    """
    if fast <= 0 or slow <= 0 or signal <= 0 or fast >= slow:
        return []
    if len(values) < slow + signal - 1:
        return []

    # fast EMA starts (slow - fast) points earlier than slow EMA
    fast_ema = ema_series(values, fast)[slow - fast :]
    slow_ema = ema_series(values, slow)
    macd_line = [f - s for f, s in zip(fast_ema, slow_ema, strict=True)]

    signal_line = ema_series(macd_line, signal)
    aligned_macd = macd_line[signal - 1 :]

    return [
        MACDResult(macd_line=m, signal_line=s, histogram=m - s)
        for m, s in zip(aligned_macd, signal_line, strict=True)
    ]
