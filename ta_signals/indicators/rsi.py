"""
RSI Indicator - Relative Strength Index series.

Measures the speed and magnitude of recent price changes
to evaluate overbought or oversold conditions.
"""


def _rsi_from_averages(avg_gain: float, avg_loss: float) -> float:
    # No losses in the window: 100 on gains, neutral on a flat window
    if avg_loss == 0:
        return 100.0 if avg_gain > 0 else 50.0
    rs = avg_gain / avg_loss
    return 100 - (100 / (1 + rs))


def rsi_series(values: list[float], period: int = 14) -> list[float]:
    """
    Calculate RSI series using Wilder's smoothing.

    The first value is built from the simple average of the first
    `period` changes; later values apply
    avg = (prev_avg * (period - 1) + current) / period.

    Args:
        values: List of prices (most recent last)
        period: Lookback period (default 14)

    Returns:
        List of RSI values (0-100), len(values) - period of them,
        or [] if insufficient data
    """
    if len(values) < period + 1 or period <= 0:
        return []

    changes = [values[i] - values[i - 1] for i in range(1, len(values))]

    avg_gain = sum(c for c in changes[:period] if c > 0) / period
    avg_loss = sum(-c for c in changes[:period] if c < 0) / period
    result = [_rsi_from_averages(avg_gain, avg_loss)]

    for change in changes[period:]:
        gain = change if change > 0 else 0.0
        loss = -change if change < 0 else 0.0
        avg_gain = (avg_gain * (period - 1) + gain) / period
        avg_loss = (avg_loss * (period - 1) + loss) / period
        result.append(_rsi_from_averages(avg_gain, avg_loss))

    return result
