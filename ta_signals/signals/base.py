"""
Signal base types shared by the indicator-driven detectors.
"""

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Any


class SignalType(Enum):
    """Detector that produced a signal."""

    SSL_CCI = "SSL_CCI"
    MA_EMPEROR = "MA_EMPEROR"
    RSI_CHANDELIER = "RSI_CHANDELIER"
    BOLLINGER_SQUEEZE = "BOLLINGER_SQUEEZE"
    PIVOT_BREAKOUT = "PIVOT_BREAKOUT"


class Direction(Enum):
    """Trade direction of a signal."""

    LONG = "LONG"
    SHORT = "SHORT"


@dataclass
class Signal:
    """A trading signal emitted on one candle of a series."""

    signal_type: SignalType
    direction: Direction | None  # None for non-directional signals (volatility expansion)
    index: int
    timestamp: datetime
    price: float
    metadata: dict[str, Any] = field(default_factory=dict)

    def to_dict(self) -> dict:
        """Convert to dictionary for serialization."""
        return {
            "signal_type": self.signal_type.value,
            "direction": self.direction.value if self.direction else None,
            "index": self.index,
            "timestamp": self.timestamp.isoformat(),
            "price": self.price,
            "metadata": self.metadata,
        }


def pad_series(series: list, length: int) -> list:
    """Left-pad a tail-aligned series with None so it lines up with its candles."""
    return [None] * (length - len(series)) + list(series)
