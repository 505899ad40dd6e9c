"""
Pivot Breakout Signal Detector - swing highs/lows and their first break.

A swing high must have a strictly higher high than the `window` candles
on each side (swing lows mirror this). Once a swing level is set, the
first candle trading beyond the latest resistance or support is a
breakout; later breaks are ignored until a new swing forms. Every
candle is also tagged with its single-candle pattern.
"""

from collections.abc import Sequence
from dataclasses import dataclass
from enum import Enum

from ta_signals.core.config import positive_int
from ta_signals.core.models import Candle
from ta_signals.indicators import CandlePattern, detect_single_pattern

from ..base import Direction, Signal, SignalType

# Offset of the chart marker from the swing candle's extreme
MARKER_OFFSET = 0.001


class SwingType(Enum):
    HIGH = "HIGH"
    LOW = "LOW"


class BreakoutType(Enum):
    HIGH = "Breakout High"
    LOW = "Breakout Low"


@dataclass
class PivotBreakoutConfig:
    """Configuration for pivot breakout detection."""

    window: int = 3  # Candles on each side of a swing

    def __post_init__(self) -> None:
        """Validate configuration."""
        positive_int("window", self.window)


@dataclass
class PivotBreakoutPoint:
    """Analysis of one candle."""

    candle: Candle
    swing: SwingType | None = None
    breakout: BreakoutType | None = None
    pattern: CandlePattern | None = None

    @property
    def marker_position(self) -> float | None:
        """Where a swing marker is drawn: just above a high, just below a low."""
        if self.swing is SwingType.HIGH:
            return self.candle.high + MARKER_OFFSET
        if self.swing is SwingType.LOW:
            return self.candle.low - MARKER_OFFSET
        return None


class PivotBreakoutSignalDetector:
    """Detects breakouts of the latest swing high or swing low."""

    def __init__(self, config: PivotBreakoutConfig | None = None) -> None:
        self.config = config or PivotBreakoutConfig()

    def swings(self, candles: Sequence[Candle]) -> list[SwingType | None]:
        """Swing classification per candle. A candle that is both counts as a high."""
        window = self.config.window
        result: list[SwingType | None] = [None] * len(candles)

        for i in range(window, len(candles) - window):
            current = candles[i]
            neighbours = [*candles[i - window : i], *candles[i + 1 : i + window + 1]]
            if all(c.high < current.high for c in neighbours):
                result[i] = SwingType.HIGH
            elif all(c.low > current.low for c in neighbours):
                result[i] = SwingType.LOW

        return result

    def analyse(self, candles: Sequence[Candle]) -> list[PivotBreakoutPoint]:
        """
        Tag every candle with its swing, breakout and pattern.

        Args:
            candles: List of candles, most recent last

        Returns:
            One PivotBreakoutPoint per candle
        """
        resistance: float | None = None
        support: float | None = None
        broken = False

        points: list[PivotBreakoutPoint] = []
        for candle, swing in zip(candles, self.swings(candles), strict=True):
            point = PivotBreakoutPoint(candle=candle, swing=swing, pattern=detect_single_pattern(candle))

            if swing is SwingType.HIGH:
                resistance = candle.high
                broken = False
            elif swing is SwingType.LOW:
                support = candle.low
                broken = False

            if not broken and resistance is not None and candle.high > resistance:
                point.breakout = BreakoutType.HIGH
                broken = True
            if not broken and support is not None and candle.low < support:
                point.breakout = BreakoutType.LOW
                broken = True

            points.append(point)

        return points

    def detect(self, candles: Sequence[Candle]) -> list[Signal]:
        """
        Detect every breakout in the series.

        Returns:
            LONG signals for breakouts above resistance, SHORT below support
        """
        signals: list[Signal] = []
        for i, point in enumerate(self.analyse(candles)):
            if point.breakout is None:
                continue
            signals.append(
                Signal(
                    signal_type=SignalType.PIVOT_BREAKOUT,
                    direction=Direction.LONG if point.breakout is BreakoutType.HIGH else Direction.SHORT,
                    index=i,
                    timestamp=point.candle.timestamp,
                    price=point.candle.close,
                    metadata={"pattern": point.pattern.value if point.pattern else None},
                )
            )
        return signals
