"""
RSI + Chandelier Exit Signal Detector.

Pairs two events:
1. RSI (of OHLC4 prices) crossing its own moving average
2. A Chandelier Exit direction flip (the trade)

A trade is signalled when an RSI crossover in the same direction
happens within `check_candles` candles of it. A crossover before the
trade signals on the trade candle; a crossover after it signals on the
crossover candle.
"""

from collections.abc import Sequence
from dataclasses import dataclass

from ta_signals.core.config import positive_int
from ta_signals.core.models import Candle
from ta_signals.indicators import chandelier_exit, rsi_series, sma_series

from ..base import Direction, Signal, SignalType, pad_series


@dataclass
class RSIChandelierConfig:
    """Configuration for RSI + Chandelier Exit signal detection."""

    rsi_length: int = 25
    ma_length: int = 150  # SMA of RSI
    atr_period: int = 1
    atr_multiplier: float = 2.0
    use_close_for_extremes: bool = True
    # Max distance in candles between crossover and trade
    check_candles: int = 2

    def __post_init__(self) -> None:
        """Validate configuration."""
        positive_int("rsi_length", self.rsi_length)
        positive_int("ma_length", self.ma_length)
        positive_int("atr_period", self.atr_period)
        positive_int("check_candles", self.check_candles)
        if self.atr_multiplier <= 0:
            raise ValueError(f"atr_multiplier must be positive, got: {self.atr_multiplier}")


def ohlc4(candle: Candle) -> float:
    return (candle.open + candle.high + candle.low + candle.close) / 4


def pair_trades(
    crossovers: Sequence[Direction | None],
    trades: Sequence[Direction | None],
    check_candles: int,
) -> dict[int, Direction]:
    """
    Match trades with nearby crossovers of the same direction.

    For each trade, distances 1..check_candles are tried nearest first,
    the earlier side before the later one at each distance.

    Returns:
        Signal direction keyed by the candle index it lands on
    """
    matched: dict[int, Direction] = {}
    for i, trade in enumerate(trades):
        if trade is None:
            continue
        for distance in range(1, check_candles + 1):
            before = i - distance
            if before >= 0 and crossovers[before] is trade:
                matched[i] = trade
                break
            after = i + distance
            if after < len(crossovers) and crossovers[after] is trade:
                matched[after] = trade
                break
    return matched


class RSIChandelierSignalDetector:
    """Detects Chandelier Exit flips confirmed by an RSI/MA crossover."""

    def __init__(self, config: RSIChandelierConfig | None = None) -> None:
        self.config = config or RSIChandelierConfig()

    def rsi_crossovers(self, candles: Sequence[Candle]) -> list[Direction | None]:
        """RSI crossing its moving average, per candle."""
        rsi_values = rsi_series([ohlc4(c) for c in candles], self.config.rsi_length)
        rsi = pad_series(rsi_values, len(candles))
        average = pad_series(sma_series(rsi_values, self.config.ma_length), len(candles))

        result: list[Direction | None] = [None] * len(candles)
        for i in range(1, len(candles)):
            if None in (rsi[i - 1], average[i - 1], rsi[i], average[i]):
                continue
            if rsi[i] > average[i] and rsi[i - 1] <= average[i - 1]:
                result[i] = Direction.LONG
            elif rsi[i] < average[i] and rsi[i - 1] >= average[i - 1]:
                result[i] = Direction.SHORT
        return result

    def trades(self, candles: Sequence[Candle]) -> list[Direction | None]:
        """Chandelier Exit direction flips, per candle."""
        cfg = self.config
        points = pad_series(
            chandelier_exit(candles, cfg.atr_period, cfg.atr_multiplier, cfg.use_close_for_extremes),
            len(candles),
        )

        result: list[Direction | None] = [None] * len(candles)
        previous_direction = 1
        for i, point in enumerate(points):
            if point is None:
                continue
            if point.direction != previous_direction:
                result[i] = Direction.LONG if point.direction == 1 else Direction.SHORT
            previous_direction = point.direction
        return result

    def detect(self, candles: Sequence[Candle]) -> list[Signal]:
        """
        Detect every confirmed trade in the series.

        Args:
            candles: List of candles, most recent last

        Returns:
            Signals in chronological order
        """
        matched = pair_trades(self.rsi_crossovers(candles), self.trades(candles), self.config.check_candles)
        return [
            Signal(
                signal_type=SignalType.RSI_CHANDELIER,
                direction=direction,
                index=index,
                timestamp=candles[index].timestamp,
                price=candles[index].close,
            )
            for index, direction in sorted(matched.items())
        ]
