"""
ta_signals - Technical analysis indicators and structural trading signals.

Layers:
- core: candle model and configuration
- indicators: pure numeric series (SMA, EMA, RSI, ATR, MACD, Bollinger)
- signals: detectors that annotate candle series and surface signals
"""

from .core import Candle, CloseType, StructuralSDConfig
from .signals import StructuralSD, StructuralSDResult

__all__ = [
    "Candle",
    "CloseType",
    "StructuralSDConfig",
    "StructuralSD",
    "StructuralSDResult",
]

__version__ = "0.1.0"
