#!/usr/bin/env python3
"""
Unit tests for pivot detection.

Run with:
    python -m pytest tests/test_pivots.py -v
"""

import sys
from datetime import datetime, timedelta
from pathlib import Path

import pytest

# Add project root to path for standalone execution
sys.path.insert(0, str(Path(__file__).parent.parent))

from ta_signals.core.config import CloseType
from ta_signals.core.models import Candle
from ta_signals.signals.structural_sd import (
    PivotType,
    StructureInvariantError,
    classify_pivot,
    detect_pivots,
    pivot_value,
)

START = datetime(2026, 1, 5, 9, 15)


def make_candles(highs: list[float], lows: list[float] | None = None) -> list[Candle]:
    """Helper to create candles from highs (and optionally lows)."""
    if lows is None:
        lows = [5.0] * len(highs)
    candles = []
    for i, (high, low) in enumerate(zip(highs, lows, strict=True)):
        mid = (high + low) / 2
        candles.append(
            Candle(timestamp=START + timedelta(minutes=5 * i), open=mid, high=high, low=low, close=mid)
        )
    return candles


class TestDetectPivots:
    """Tests for fractal pivot classification."""

    def test_single_sharp_high(self):
        """Only the peak of a 2W+1 window is tagged."""
        candles = make_candles([10.0, 11.0, 12.0, 20.0, 12.0, 11.0, 10.0])
        pivots = detect_pivots(candles, strength=3)
        assert pivots == [None, None, None, PivotType.UP, None, None, None]

    def test_sharp_high_smaller_window(self):
        """With W=2 the edges are skipped and neighbours are not pivots."""
        candles = make_candles([10.0, 11.0, 12.0, 20.0, 12.0, 11.0, 10.0])
        pivots = detect_pivots(candles, strength=2)
        assert pivots[3] is PivotType.UP
        assert [p for i, p in enumerate(pivots) if i != 3] == [None] * 6

    def test_flat_top_credited_to_last_equal_candle(self):
        """Ties with earlier candles pass, ties with later candles fail."""
        candles = make_candles([10.0, 20.0, 20.0, 10.0, 10.0])
        pivots = detect_pivots(candles, strength=1)
        assert pivots[1] is None
        assert pivots[2] is PivotType.UP

    def test_sharp_low(self):
        """A local minimum of lows is a DOWN pivot."""
        candles = make_candles(
            highs=[30.0, 30.0, 30.0, 30.0, 30.0],
            lows=[9.0, 8.0, 5.0, 8.0, 9.0],
        )
        pivots = detect_pivots(candles, strength=2)
        assert pivots == [None, None, PivotType.DOWN, None, None]

    def test_outside_bar_is_both(self):
        """A candle with the highest high and lowest low is BOTH."""
        candles = make_candles(highs=[10.0, 15.0, 10.0], lows=[8.0, 2.0, 8.0])
        assert detect_pivots(candles, strength=1)[1] is PivotType.BOTH

    def test_close_mode_uses_closes(self):
        """CLOSE mode ignores wicks."""
        candles = [
            Candle(START, open=10.0, high=50.0, low=9.0, close=10.0),
            Candle(START, open=10.0, high=12.0, low=9.0, close=12.0),
            Candle(START, open=10.0, high=50.0, low=9.0, close=10.0),
        ]
        assert classify_pivot(candles, 1, 1, CloseType.CLOSE) is PivotType.UP
        assert classify_pivot(candles, 1, 1, CloseType.HL) is None

    def test_short_series_has_no_pivots(self):
        """Fewer than 2W+1 candles yields no pivots."""
        candles = make_candles([10.0, 20.0, 30.0, 20.0])
        assert detect_pivots(candles, strength=2) == [None] * 4

    def test_flat_series_has_no_pivots(self):
        """Equal candles never dominate their following window."""
        candles = [Candle(START, open=100.0, high=100.0, low=100.0, close=100.0) for _ in range(10)]
        assert detect_pivots(candles) == [None] * 10

    def test_invalid_strength(self):
        """Non-positive strength is rejected."""
        with pytest.raises(ValueError):
            detect_pivots(make_candles([1.0, 2.0, 1.0]), strength=0)


class TestPivotValue:
    """Tests for the tracked price of a pending pivot."""

    def setup_method(self):
        self.candle = Candle(START, open=10.0, high=12.0, low=8.0, close=11.0)

    def test_hl_mode(self):
        """HL tracks the high of UP pivots and the low of DOWN pivots."""
        assert pivot_value(self.candle, PivotType.UP, CloseType.HL) == 12.0
        assert pivot_value(self.candle, PivotType.DOWN, CloseType.HL) == 8.0

    def test_close_mode(self):
        """CLOSE tracks the close in both directions."""
        assert pivot_value(self.candle, PivotType.UP, CloseType.CLOSE) == 11.0
        assert pivot_value(self.candle, PivotType.DOWN, CloseType.CLOSE) == 11.0

    def test_both_has_no_single_value(self):
        """BOTH pivots have no tracked value."""
        with pytest.raises(StructureInvariantError):
            pivot_value(self.candle, PivotType.BOTH)
