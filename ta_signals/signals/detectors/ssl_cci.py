"""
SSL + CCI Signal Detector - SSL Channel crossovers confirmed by CCI.

An SSL crossover is only traded when CCI was stretched beyond one of
its bands shortly before the crossover, or becomes stretched right
after it. The after-window looks forward, so a crossover near the end
of the series is only confirmed once enough later candles exist.
"""

import logging
from collections.abc import Sequence
from dataclasses import dataclass

from ta_signals.core.config import positive_int
from ta_signals.core.models import Candle
from ta_signals.indicators import cci_series, ssl_channel

from ..base import Direction, Signal, SignalType, pad_series

logger = logging.getLogger(__name__)


@dataclass
class SSLCCIConfig:
    """Configuration for SSL + CCI signal detection."""

    period: int = 10  # SSL Channel SMA period
    cci_length: int = 20
    # Candles checked for a CCI extreme before / from the crossover
    cci_lookback_before: int = 5
    cci_lookback_after: int = 5
    cci_lower_band: float = -100.0
    cci_upper_band: float = 100.0

    def __post_init__(self) -> None:
        """Validate configuration."""
        positive_int("period", self.period)
        positive_int("cci_length", self.cci_length)
        positive_int("cci_lookback_before", self.cci_lookback_before)
        positive_int("cci_lookback_after", self.cci_lookback_after)
        if self.cci_lower_band >= self.cci_upper_band:
            raise ValueError(
                f"cci_lower_band ({self.cci_lower_band}) must be below cci_upper_band ({self.cci_upper_band})"
            )


class SSLCCISignalDetector:
    """
    Detects SSL Channel crossovers backed by a CCI extreme.

    LONG when ssl_up crosses above ssl_down, SHORT on the opposite cross.
    """

    def __init__(self, config: SSLCCIConfig | None = None) -> None:
        self.config = config or SSLCCIConfig()

    def crossovers(self, candles: Sequence[Candle]) -> list[Direction | None]:
        """SSL crossover direction per candle, None where the lines did not cross."""
        points = pad_series(ssl_channel(candles, self.config.period), len(candles))
        result: list[Direction | None] = [None] * len(candles)

        for i in range(1, len(candles)):
            previous, current = points[i - 1], points[i]
            if previous is None or current is None:
                continue
            if previous.ssl_up < previous.ssl_down and current.ssl_up > current.ssl_down:
                result[i] = Direction.LONG
            elif previous.ssl_up > previous.ssl_down and current.ssl_up < current.ssl_down:
                result[i] = Direction.SHORT

        return result

    def _is_stretched(self, values: list[float | None]) -> bool:
        return any(
            v is not None and (v < self.config.cci_lower_band or v > self.config.cci_upper_band)
            for v in values
        )

    def detect(self, candles: Sequence[Candle]) -> list[Signal]:
        """
        Detect every confirmed crossover in the series.

        Args:
            candles: List of candles, most recent last

        Returns:
            Signals in chronological order
        """
        cfg = self.config
        crossovers = self.crossovers(candles)
        cci = pad_series(cci_series(candles, cfg.cci_length), len(candles))

        signals: list[Signal] = []
        for i, direction in enumerate(crossovers):
            if direction is None:
                continue

            before = i >= cfg.cci_lookback_before and self._is_stretched(cci[i - cfg.cci_lookback_before : i])
            after = i + cfg.cci_lookback_after < len(candles) and self._is_stretched(
                cci[i : i + cfg.cci_lookback_after]
            )
            if not (before or after):
                logger.debug(f"SSL {direction.value} crossover at {candles[i].timestamp} not confirmed by CCI")
                continue

            signals.append(
                Signal(
                    signal_type=SignalType.SSL_CCI,
                    direction=direction,
                    index=i,
                    timestamp=candles[i].timestamp,
                    price=candles[i].close,
                    metadata={
                        "cci": cci[i],
                        "cci_before": before,
                        "cci_after": after,
                    },
                )
            )

        return signals
