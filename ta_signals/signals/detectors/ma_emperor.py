"""
MA Emperor Signal Detector - moving average crossover filtered by EWO.

The crossover is taken on Heikin-Ashi closes by default. A bullish
cross only counts while the Elliott Wave Oscillator of the raw closes
is positive, a bearish cross only while it is zero or negative.
"""

from collections.abc import Sequence
from dataclasses import dataclass
from enum import Enum

from ta_signals.core.config import positive_int
from ta_signals.core.models import Candle
from ta_signals.indicators import ema_series, ewo_series, heikin_ashi, sma_series

from ..base import Direction, Signal, SignalType, pad_series


class MAType(Enum):
    """Moving average flavour."""

    EMA = "EMA"
    SMA = "SMA"

    @classmethod
    def parse(cls, value: "MAType | str") -> "MAType":
        if isinstance(value, cls):
            return value
        try:
            return cls[str(value).strip().upper()]
        except KeyError:
            raise ValueError(f"ma_type must be EMA or SMA, got: {value!r}") from None


@dataclass
class MAEmperorConfig:
    """Configuration for MA Emperor signal detection."""

    # Crossing pair of averages
    fast_length: int = 18
    slow_length: int = 26
    ma_type: MAType = MAType.EMA
    use_heikin_ashi: bool = True
    # Elliott Wave Oscillator filter
    ewo_fast: int = 5
    ewo_slow: int = 35

    def __post_init__(self) -> None:
        """Validate configuration."""
        positive_int("fast_length", self.fast_length)
        positive_int("slow_length", self.slow_length)
        positive_int("ewo_fast", self.ewo_fast)
        positive_int("ewo_slow", self.ewo_slow)
        if self.fast_length >= self.slow_length:
            raise ValueError(f"fast_length ({self.fast_length}) must be below slow_length ({self.slow_length})")
        if self.ewo_fast >= self.ewo_slow:
            raise ValueError(f"ewo_fast ({self.ewo_fast}) must be below ewo_slow ({self.ewo_slow})")
        self.ma_type = MAType.parse(self.ma_type)


class MAEmperorSignalDetector:
    """Detects EWO-confirmed crossovers of a fast and a slow moving average."""

    def __init__(self, config: MAEmperorConfig | None = None) -> None:
        self.config = config or MAEmperorConfig()

    def _average(self, values: list[float], period: int) -> list[float]:
        if self.config.ma_type is MAType.SMA:
            return sma_series(values, period)
        return ema_series(values, period)

    def detect(self, candles: Sequence[Candle]) -> list[Signal]:
        """
        Detect every filtered crossover in the series.

        Args:
            candles: List of candles, most recent last

        Returns:
            Signals in chronological order
        """
        cfg = self.config
        source = heikin_ashi(candles) if cfg.use_heikin_ashi else candles
        closes = [c.close for c in source]

        fast = pad_series(self._average(closes, cfg.fast_length), len(candles))
        slow = pad_series(self._average(closes, cfg.slow_length), len(candles))
        ewo = pad_series(ewo_series([c.close for c in candles], cfg.ewo_fast, cfg.ewo_slow), len(candles))

        signals: list[Signal] = []
        for i in range(1, len(candles)):
            if None in (fast[i - 1], slow[i - 1], fast[i], slow[i], ewo[i]):
                continue

            direction: Direction | None = None
            if fast[i] > slow[i] and fast[i - 1] <= slow[i - 1] and ewo[i] > 0:
                direction = Direction.LONG
            elif fast[i] < slow[i] and fast[i - 1] >= slow[i - 1] and ewo[i] <= 0:
                direction = Direction.SHORT

            if direction is not None:
                signals.append(
                    Signal(
                        signal_type=SignalType.MA_EMPEROR,
                        direction=direction,
                        index=i,
                        timestamp=candles[i].timestamp,
                        price=candles[i].close,
                        metadata={"fast_ma": fast[i], "slow_ma": slow[i], "ewo": ewo[i]},
                    )
                )

        return signals
