"""
Moving Average Indicators - SMA, EMA and standard deviation series.

Pure math functions. Every series is aligned to the tail of its input:
the last output value corresponds to the last input value.
"""

import math


def sma_series(values: list[float], period: int) -> list[float]:
    """
    Calculate Simple Moving Average series.

    Args:
        values: List of values (most recent last)
        period: Number of periods to average

    Returns:
        List of SMA values (len(values) - period + 1 of them),
        or [] if insufficient data
    """
    if len(values) < period or period <= 0:
        return []

    window_sum = sum(values[:period])
    result = [window_sum / period]

    for i in range(period, len(values)):
        window_sum += values[i] - values[i - period]
        result.append(window_sum / period)

    return result


def ema_series(values: list[float], period: int) -> list[float]:
    """
    Calculate Exponential Moving Average series.

    Uses the standard multiplier 2 / (period + 1). The first value is
    seeded with the SMA of the first `period` values.

    Args:
        values: List of values (most recent last)
        period: Number of periods for EMA calculation

    Returns:
        List of EMA values (len(values) - period + 1 of them),
        or [] if insufficient data
    """
    if len(values) < period or period <= 0:
        return []

    multiplier = 2 / (period + 1)
    result = [sum(values[:period]) / period]

    for value in values[period:]:
        prev_ema = result[-1]
        result.append((value - prev_ema) * multiplier + prev_ema)

    return result


def stddev_series(values: list[float], period: int) -> list[float]:
    """
    Calculate rolling population standard deviation.

    Args:
        values: List of values (most recent last)
        period: Window size

    Returns:
        List of standard deviations aligned with sma_series(values, period)
    """
    if len(values) < period or period <= 0:
        return []

    result: list[float] = []
    for end in range(period, len(values) + 1):
        window = values[end - period : end]
        mean = sum(window) / period
        variance = sum((v - mean) ** 2 for v in window) / period
        result.append(math.sqrt(variance))

    return result
