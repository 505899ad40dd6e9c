"""
Elliott Wave Oscillator - spread between a fast and a slow SMA.
"""

from .moving_averages import sma_series


def ewo_series(
    values: list[float],
    fast: int = 5,
    slow: int = 35,
    use_percent: bool = True,
) -> list[float]:
    """
    Calculate Elliott Wave Oscillator series.

    EWO = SMA(fast) - SMA(slow), optionally as a percentage of the
    current price. Positive values mark bullish momentum.

    Args:
        values: List of prices (most recent last)
        fast: Fast SMA period (default 5)
        slow: Slow SMA period (default 35)
        use_percent: Express the spread as % of price (default True)

    Returns:
        List of EWO values, len(values) - slow + 1 of them,
        or [] if insufficient data or fast >= slow
    """
    if fast <= 0 or fast >= slow:
        return []

    slow_sma = sma_series(values, slow)
    if not slow_sma:
        return []
    # fast SMA starts (slow - fast) points earlier than slow SMA
    fast_sma = sma_series(values, fast)[slow - fast :]

    result: list[float] = []
    for offset, (f, s) in enumerate(zip(fast_sma, slow_sma, strict=True)):
        spread = f - s
        if use_percent:
            price = values[offset + slow - 1]
            spread = spread / price * 100 if price else 0.0
        result.append(spread)

    return result
