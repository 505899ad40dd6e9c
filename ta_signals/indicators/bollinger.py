"""
Bollinger Bands - SMA basis with standard deviation envelopes.
"""

from dataclasses import dataclass

from .moving_averages import sma_series, stddev_series


@dataclass
class BollingerBand:
    """One point of a Bollinger Bands series."""

    upper: float
    basis: float
    lower: float

    @property
    def width(self) -> float:
        """Distance between the bands."""
        return self.upper - self.lower


def bollinger_bands(values: list[float], period: int = 20, mult: float = 2.0) -> list[BollingerBand]:
    """
    Calculate Bollinger Bands.

    basis = SMA(period), upper/lower = basis +/- mult * population stddev.

    Args:
        values: List of prices (most recent last)
        period: SMA / stddev window (default 20)
        mult: Standard deviation multiplier (default 2.0)

    Returns:
        List of BollingerBand aligned to the tail of values,
        or [] if insufficient data
    """
    basis = sma_series(values, period)
    deviations = stddev_series(values, period)

    return [
        BollingerBand(upper=b + mult * d, basis=b, lower=b - mult * d)
        for b, d in zip(basis, deviations, strict=True)
    ]
