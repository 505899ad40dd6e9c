"""
Technical Indicators Module - Pure math functions for market analysis.

All functions are stateless and return series aligned to the tail of
their input. Consumed by the detectors in ta_signals.signals.detectors;
the structural supply/demand detector works on raw candles instead.
"""

from .atr import atr_series, true_range
from .bollinger import BollingerBand, bollinger_bands
from .cci import cci_series, typical_price
from .chandelier import ChandelierPoint, chandelier_exit
from .ewo import ewo_series
from .heikin_ashi import heikin_ashi
from .macd import MACDResult, macd_series
from .moving_averages import ema_series, sma_series, stddev_series
from .patterns import CandlePattern, detect_double_pattern, detect_single_pattern, detect_triple_pattern
from .rsi import rsi_series
from .ssl_channel import SSLPoint, ssl_channel

__all__ = [
    # Moving Averages
    "sma_series",
    "ema_series",
    "stddev_series",
    # RSI
    "rsi_series",
    # MACD
    "macd_series",
    "MACDResult",
    # ATR
    "atr_series",
    "true_range",
    # Bollinger Bands
    "bollinger_bands",
    "BollingerBand",
    # CCI
    "cci_series",
    "typical_price",
    # Elliott Wave Oscillator
    "ewo_series",
    # SSL Channel
    "ssl_channel",
    "SSLPoint",
    # Chandelier Exit
    "chandelier_exit",
    "ChandelierPoint",
    # Heikin-Ashi
    "heikin_ashi",
    # Candlestick patterns
    "CandlePattern",
    "detect_single_pattern",
    "detect_double_pattern",
    "detect_triple_pattern",
]
