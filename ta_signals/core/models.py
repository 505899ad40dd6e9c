"""
Core market data models.

Contains the immutable OHLC candle consumed by every indicator and
signal detector in the package.
"""

import math
from dataclasses import dataclass
from datetime import datetime, timezone

REQUIRED_FIELDS = ("timestamp", "open", "high", "low", "close")


def parse_timestamp(value: datetime | str | int | float) -> datetime:
    """
    Parse a candle timestamp.

    Accepts datetimes, ISO-8601 strings, and epoch values in seconds or
    milliseconds (anything above 1e11 is treated as milliseconds).
    """
    if isinstance(value, datetime):
        return value
    if isinstance(value, bool):
        raise ValueError(f"Invalid timestamp: {value!r}")
    if isinstance(value, (int, float)):
        seconds = value / 1000 if value > 1e11 else value
        return datetime.fromtimestamp(seconds, tz=timezone.utc)
    if isinstance(value, str):
        text = value.strip()
        if text.lstrip("-").replace(".", "", 1).isdigit():
            return parse_timestamp(float(text))
        try:
            return datetime.fromisoformat(text.replace("Z", "+00:00"))
        except ValueError as e:
            raise ValueError(f"Invalid timestamp: {value!r}") from e
    raise ValueError(f"Invalid timestamp: {value!r}")


@dataclass(frozen=True)
class Candle:
    """A single OHLC candlestick."""

    timestamp: datetime
    open: float
    high: float
    low: float
    close: float
    volume: float = 0.0

    def __post_init__(self) -> None:
        """Validate prices and store them as floats."""
        for name in ("open", "high", "low", "close", "volume"):
            value = getattr(self, name)
            if isinstance(value, bool) or not isinstance(value, (int, float)):
                raise ValueError(f"Candle {name} must be a number, got {value!r}")
            if not math.isfinite(value):
                raise ValueError(f"Candle {name} must be finite, got {value!r}")
            object.__setattr__(self, name, float(value))
        if self.low > min(self.open, self.close) or self.high < max(self.open, self.close):
            raise ValueError(
                f"Inconsistent OHLC at {self.timestamp}: "
                f"o={self.open} h={self.high} l={self.low} c={self.close}"
            )

    @property
    def is_bullish(self) -> bool:
        """Returns True if close >= open (green candle)."""
        return self.close >= self.open

    @classmethod
    def from_dict(cls, data: dict) -> "Candle":
        """
        Create a candle from a mapping.

        Accepts "date" as an alias for "timestamp". Prices may be numeric
        strings (as read from CSV).

        Raises:
            ValueError: If a required field is missing or not numeric
        """
        if "timestamp" not in data and "date" in data:
            data = {**data, "timestamp": data["date"]}

        missing = [name for name in REQUIRED_FIELDS if data.get(name) in (None, "")]
        if missing:
            raise ValueError(f"Candle is missing required field(s): {', '.join(missing)}")

        try:
            prices = {name: float(data[name]) for name in ("open", "high", "low", "close")}
            volume = float(data.get("volume") or 0.0)
        except (TypeError, ValueError) as e:
            raise ValueError(f"Candle has a non-numeric price: {e}") from e

        return cls(timestamp=parse_timestamp(data["timestamp"]), volume=volume, **prices)

    def to_dict(self) -> dict:
        """Convert to dictionary for serialization."""
        return {
            "timestamp": self.timestamp.isoformat(),
            "open": self.open,
            "high": self.high,
            "low": self.low,
            "close": self.close,
            "volume": self.volume,
        }
