#!/usr/bin/env python3
"""
Unit tests for the indicators module.

Run with:
    python -m pytest tests/test_indicators.py -v
"""

import math
import sys
from datetime import datetime
from pathlib import Path

import pytest

# Add project root to path for standalone execution
sys.path.insert(0, str(Path(__file__).parent.parent))

from ta_signals.core.models import Candle
from ta_signals.indicators import (
    CandlePattern,
    MACDResult,
    atr_series,
    bollinger_bands,
    cci_series,
    chandelier_exit,
    detect_double_pattern,
    detect_single_pattern,
    detect_triple_pattern,
    ema_series,
    ewo_series,
    heikin_ashi,
    macd_series,
    rsi_series,
    sma_series,
    ssl_channel,
    stddev_series,
    true_range,
)

NOW = datetime(2026, 1, 5, 9, 15)


def bar(high: float, low: float, close: float) -> Candle:
    return Candle(timestamp=NOW, open=close, high=high, low=low, close=close)


class TestSMA:
    """Tests for Simple Moving Average."""

    def test_sma_series_values(self):
        """Each value averages the trailing window."""
        assert sma_series([10.0, 11.0, 12.0, 13.0, 14.0], 3) == [11.0, 12.0, 13.0]

    def test_sma_tail_aligned(self):
        """The last value belongs to the last input."""
        prices = [10.0, 20.0, 30.0, 40.0]
        assert sma_series(prices, 2)[-1] == 35.0

    def test_sma_insufficient_data(self):
        """Too few values gives an empty series."""
        assert sma_series([10.0, 11.0], 3) == []
        assert sma_series([], 3) == []

    def test_sma_invalid_period(self):
        """Non-positive periods give an empty series."""
        assert sma_series([10.0, 11.0, 12.0], 0) == []
        assert sma_series([10.0, 11.0, 12.0], -1) == []


class TestEMA:
    """Tests for Exponential Moving Average."""

    def test_ema_series_length(self):
        """len(values) - period + 1 values."""
        assert len(ema_series([10.0, 11.0, 12.0, 13.0, 14.0], 3)) == 3

    def test_ema_first_value_is_sma(self):
        """The seed is the SMA of the first window."""
        assert ema_series([10.0, 11.0, 12.0, 13.0, 14.0], 3)[0] == 11.0

    def test_ema_recurrence(self):
        """Later values apply multiplier 2 / (period + 1)."""
        series = ema_series([10.0, 11.0, 12.0, 13.0], 3)
        assert series[1] == pytest.approx((13.0 - 11.0) * 0.5 + 11.0)

    def test_ema_insufficient_data(self):
        assert ema_series([10.0, 11.0], 3) == []


class TestStdDev:
    """Tests for rolling standard deviation."""

    def test_constant_series_has_zero_deviation(self):
        assert stddev_series([5.0] * 6, 3) == [0.0] * 4

    def test_population_deviation(self):
        """Population (not sample) standard deviation."""
        assert stddev_series([2.0, 4.0, 4.0, 4.0, 5.0, 5.0, 7.0, 9.0], 8) == [2.0]


class TestRSI:
    """Tests for Relative Strength Index."""

    def test_rsi_uptrend(self):
        """All gains = RSI 100."""
        prices = [100.0 + i for i in range(16)]
        assert rsi_series(prices, 14) == [100.0, 100.0]

    def test_rsi_downtrend(self):
        """All losses = RSI 0."""
        prices = [115.0 - i for i in range(16)]
        assert rsi_series(prices, 14)[-1] == 0.0

    def test_rsi_neutral(self):
        """Alternating +1/-1 stays close to 50."""
        prices = [100.0 if i % 2 == 0 else 101.0 for i in range(30)]
        assert all(40.0 < value < 60.0 for value in rsi_series(prices, 14))

    def test_rsi_flat(self):
        """No movement at all is neutral."""
        assert rsi_series([100.0] * 20, 14)[-1] == 50.0

    def test_rsi_series_length(self):
        assert len(rsi_series([100.0 + i for i in range(20)], 14)) == 6

    def test_rsi_insufficient_data(self):
        assert rsi_series([100.0, 101.0, 102.0], 14) == []


class TestMACD:
    """Tests for MACD indicator."""

    def test_macd_series_length(self):
        """len(values) - slow - signal + 2 points."""
        prices = [100.0 + i for i in range(50)]
        result = macd_series(prices, fast=12, slow=26, signal=9)
        assert len(result) == 50 - 26 - 9 + 2
        assert isinstance(result[-1], MACDResult)

    def test_macd_uptrend(self):
        """In a steady uptrend the fast EMA is above the slow EMA."""
        result = macd_series([100.0 + i for i in range(50)])
        assert result[-1].macd_line > 0
        assert result[-1].histogram == pytest.approx(result[-1].macd_line - result[-1].signal_line)

    def test_macd_insufficient_data(self):
        assert macd_series([100.0 + i for i in range(20)]) == []

    def test_macd_invalid_periods(self):
        """Fast period must be less than slow."""
        assert macd_series([100.0 + i for i in range(50)], fast=26, slow=12, signal=9) == []


class TestATR:
    """Tests for Average True Range."""

    def test_true_range_basic(self):
        assert true_range(bar(105.0, 95.0, 100.0)) == 10.0

    def test_true_range_with_gap_up(self):
        """|high - previous close| dominates on a gap up."""
        assert true_range(bar(115.0, 110.0, 112.0), previous_close=100.0) == 15.0

    def test_true_range_with_gap_down(self):
        """|low - previous close| dominates on a gap down."""
        assert true_range(bar(95.0, 90.0, 92.0), previous_close=100.0) == 10.0

    def test_atr_constant_range(self):
        """Candles with a constant $10 range and small drift give ATR 10."""
        candles = [bar(105.0 + i, 95.0 + i, 100.0 + i) for i in range(16)]
        result = atr_series(candles, 14)
        assert len(result) == 2
        assert result[-1] == pytest.approx(10.0)

    def test_atr_insufficient_data(self):
        candles = [bar(105.0, 95.0, 100.0) for _ in range(10)]
        assert atr_series(candles, 14) == []


class TestBollingerBands:
    """Tests for Bollinger Bands."""

    def test_flat_series_collapses_bands(self):
        bands = bollinger_bands([100.0] * 25, period=20)
        assert len(bands) == 6
        assert all(b.upper == b.basis == b.lower == 100.0 for b in bands)

    def test_bands_symmetric_around_basis(self):
        prices = [100.0 + math.sin(i) for i in range(30)]
        band = bollinger_bands(prices, period=20, mult=2.0)[-1]
        assert band.upper - band.basis == pytest.approx(band.basis - band.lower)
        assert band.width > 0

    def test_insufficient_data(self):
        assert bollinger_bands([100.0] * 5, period=20) == []


def ohlc(o: float, h: float, l: float, c: float) -> Candle:  # noqa: E741
    return Candle(timestamp=NOW, open=o, high=h, low=l, close=c)


class TestCCI:
    """Tests for Commodity Channel Index."""

    def test_cci_value(self):
        """Typical prices 1, 2, 3: mean deviation 2/3 puts the last at +100."""
        candles = [bar(p, p, p) for p in (1.0, 2.0, 3.0)]
        assert cci_series(candles, 3) == [pytest.approx(100.0)]

    def test_cci_flat_is_zero(self):
        """No deviation scores 0 instead of dividing by zero."""
        candles = [bar(100.0, 100.0, 100.0) for _ in range(5)]
        assert cci_series(candles, 3) == [0.0, 0.0, 0.0]

    def test_cci_insufficient_data(self):
        assert cci_series([bar(100.0, 99.0, 99.5)] * 2, 3) == []


class TestEWO:
    """Tests for Elliott Wave Oscillator."""

    def test_ewo_spread(self):
        """Linear prices keep a constant SMA spread."""
        values = [1.0, 2.0, 3.0, 4.0, 5.0, 6.0]
        assert ewo_series(values, fast=2, slow=4, use_percent=False) == [1.0, 1.0, 1.0]

    def test_ewo_percent(self):
        """Percent mode divides by the current price."""
        values = [1.0, 2.0, 3.0, 4.0, 5.0, 6.0]
        result = ewo_series(values, fast=2, slow=4)
        assert result[0] == pytest.approx(25.0)
        assert result[-1] == pytest.approx(100 / 6)

    def test_ewo_invalid_periods(self):
        assert ewo_series([1.0] * 50, fast=35, slow=5) == []

    def test_ewo_insufficient_data(self):
        assert ewo_series([1.0] * 10) == []


class TestSSLChannel:
    """Tests for the SSL Channel."""

    CANDLES = [
        bar(11.0, 9.0, 10.0),
        bar(11.0, 9.0, 10.0),
        bar(13.0, 11.0, 12.5),  # closes above the high average
        bar(9.0, 7.0, 7.5),  # closes below the low average
    ]

    def test_trend_flips(self):
        points = ssl_channel(self.CANDLES, 2)
        assert [p.trend for p in points] == [0, 1, -1]

    def test_lines_swap_when_bearish(self):
        """In a bearish channel ssl_up follows the low average."""
        point = ssl_channel(self.CANDLES, 2)[-1]
        assert point.ssl_up == 9.0
        assert point.ssl_down == 11.0
        assert not point.is_bullish

    def test_undecided_channel_is_bullish(self):
        """Before the first decisive close the high average is on top."""
        assert ssl_channel(self.CANDLES, 2)[0].is_bullish


class TestHeikinAshi:
    """Tests for Heikin-Ashi conversion."""

    def test_conversion(self):
        candles = [ohlc(10.0, 12.0, 9.0, 11.0), ohlc(11.0, 13.0, 10.0, 12.0)]
        first, second = heikin_ashi(candles)

        assert first.open == 10.0
        assert first.close == 10.5
        assert (first.high, first.low) == (12.0, 9.0)
        assert second.open == 10.25
        assert second.close == 11.5
        assert second.timestamp == candles[1].timestamp

    def test_empty(self):
        assert heikin_ashi([]) == []


class TestChandelierExit:
    """Tests for Chandelier Exit."""

    def test_flip_to_short(self):
        """A close below the ratcheted long stop turns the direction short."""
        candles = [bar(11.0, 9.0, 10.0), bar(11.0, 9.0, 10.0), bar(8.0, 6.0, 6.5)]
        points = chandelier_exit(candles, period=1, multiplier=1.0)

        assert [p.direction for p in points] == [1, -1]
        assert points[0].long_stop == 8.0
        assert points[0].short_stop == 12.0
        # Long stop held at its previous level, short stop tightened
        assert points[1].long_stop == 8.0
        assert points[1].short_stop == 10.5

    def test_insufficient_data(self):
        assert chandelier_exit([bar(11.0, 9.0, 10.0)], period=1) == []


class TestCandlePatterns:
    """Tests for candlestick pattern detection."""

    def test_doji(self):
        assert detect_single_pattern(ohlc(100.0, 102.0, 98.0, 100.1)) is CandlePattern.DOJI

    def test_hammer(self):
        assert detect_single_pattern(ohlc(99.0, 100.1, 96.0, 100.0)) is CandlePattern.HAMMER

    def test_inverted_hammer(self):
        assert detect_single_pattern(ohlc(100.0, 103.0, 98.9, 99.0)) is CandlePattern.INVERTED_HAMMER

    def test_zero_range_has_no_pattern(self):
        assert detect_single_pattern(ohlc(100.0, 100.0, 100.0, 100.0)) is None

    def test_bullish_engulfing(self):
        prev = ohlc(101.0, 101.5, 98.5, 99.0)
        candle = ohlc(98.5, 102.0, 98.0, 101.5)
        assert detect_double_pattern(candle, prev) is CandlePattern.BULLISH_ENGULFING

    def test_bearish_engulfing(self):
        prev = ohlc(99.0, 101.5, 98.5, 101.0)
        candle = ohlc(101.5, 102.0, 98.0, 98.5)
        assert detect_double_pattern(candle, prev) is CandlePattern.BEARISH_ENGULFING

    def test_three_white_soldiers(self):
        prev2 = ohlc(100.0, 102.5, 99.5, 102.0)
        prev1 = ohlc(102.5, 104.5, 102.0, 104.0)
        candle = ohlc(104.5, 106.5, 104.0, 106.0)
        assert detect_triple_pattern(candle, prev1, prev2) is CandlePattern.THREE_WHITE_SOLDIERS

    def test_morning_star(self):
        prev2 = ohlc(100.0, 101.5, 99.5, 101.0)
        prev1 = ohlc(101.0, 101.5, 99.5, 100.0)
        candle = ohlc(100.0, 102.5, 99.5, 102.0)
        assert detect_triple_pattern(candle, prev1, prev2) is CandlePattern.MORNING_STAR

    def test_no_triple_pattern(self):
        flat = ohlc(100.0, 101.0, 99.0, 100.0)
        assert detect_triple_pattern(flat, flat, flat) is None
