"""
Bollinger Squeeze Signal Detector - band expansion after contraction.

Tracks the Bollinger bandwidth ((upper - lower) / basis, in percent)
smoothed by an EMA. An expansion opens when the smoothed bandwidth
turns up, either out of a trough or from inside a squeeze (within
`squeeze_tolerance` of the narrowest recent bandwidth and above its
SMA). It stays open while the smoothed bandwidth keeps rising.

Signals are non-directional: they flag volatility, not a side.
"""

from collections.abc import Sequence
from dataclasses import dataclass
from enum import Enum

from ta_signals.core.config import positive_int
from ta_signals.core.models import Candle
from ta_signals.indicators import bollinger_bands, ema_series, sma_series

from ..base import Signal, SignalType, pad_series


class BandState(Enum):
    """Phase of the bandwidth on a candle."""

    OPEN = "openSignal"
    RISING = "rising"
    FALLING = "falling"


@dataclass
class BollingerSqueezeConfig:
    """Configuration for Bollinger squeeze detection."""

    length: int = 20
    mult: float = 2.0
    lookback: int = 20  # Window for the narrowest bandwidth
    smooth_length: int = 10  # EMA / SMA of bandwidth
    squeeze_tolerance: float = 1.1

    def __post_init__(self) -> None:
        """Validate configuration."""
        positive_int("length", self.length)
        positive_int("lookback", self.lookback)
        positive_int("smooth_length", self.smooth_length)
        if self.mult <= 0:
            raise ValueError(f"mult must be positive, got: {self.mult}")
        if self.squeeze_tolerance < 1:
            raise ValueError(f"squeeze_tolerance must be >= 1, got: {self.squeeze_tolerance}")


def bandwidth_states(
    widths: list[float],
    smooth_length: int,
    lookback: int,
    squeeze_tolerance: float = 1.1,
) -> list[BandState | None]:
    """
    Classify each bandwidth value.

    Args:
        widths: Bandwidth series (most recent last)
        smooth_length: EMA / SMA period applied to the widths
        lookback: Window for the narrowest width
        squeeze_tolerance: Multiple of the narrowest width still counted as a squeeze

    Returns:
        One state per width, None until the smoothing has warmed up
    """
    ema = ema_series(widths, smooth_length)
    sma = sma_series(widths, smooth_length)
    states: list[BandState | None] = [None] * len(widths)

    active = False
    for k in range(len(ema)):
        index = k + smooth_length - 1
        rising = k > 0 and ema[k] > ema[k - 1]

        if rising and not active:
            trough = k > 1 and ema[k - 1] < ema[k - 2]
            squeeze = (
                index >= lookback - 1
                and ema[k] <= squeeze_tolerance * min(widths[index - lookback + 1 : index + 1])
                and ema[k] > sma[k]
            )
            if trough or squeeze:
                states[index] = BandState.OPEN
                active = True
                continue

        if rising and active:
            states[index] = BandState.RISING
        else:
            states[index] = BandState.FALLING
            active = False

    return states


class BollingerSqueezeSignalDetector:
    """Detects the start of a Bollinger band expansion."""

    def __init__(self, config: BollingerSqueezeConfig | None = None) -> None:
        self.config = config or BollingerSqueezeConfig()

    def states(self, candles: Sequence[Candle]) -> list[BandState | None]:
        """Band state per candle, None before enough data."""
        cfg = self.config
        bands = bollinger_bands([c.close for c in candles], cfg.length, cfg.mult)
        widths = [(b.width / b.basis) * 100 if b.basis else 0.0 for b in bands]
        states = bandwidth_states(widths, cfg.smooth_length, cfg.lookback, cfg.squeeze_tolerance)
        return pad_series(states, len(candles))

    def detect(self, candles: Sequence[Candle]) -> list[Signal]:
        """
        Detect every expansion opening in the series.

        Args:
            candles: List of candles, most recent last

        Returns:
            Signals in chronological order
        """
        return [
            Signal(
                signal_type=SignalType.BOLLINGER_SQUEEZE,
                direction=None,
                index=i,
                timestamp=candles[i].timestamp,
                price=candles[i].close,
            )
            for i, state in enumerate(self.states(candles))
            if state is BandState.OPEN
        ]
