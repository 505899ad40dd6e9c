"""
Signals Module - Detectors that turn candle series into trading signals.
"""

from .base import Direction, Signal, SignalType
from .detectors import DETECTORS
from .structural_sd import StructuralSD, StructuralSDResult

__all__ = [
    "DETECTORS",
    "Direction",
    "Signal",
    "SignalType",
    "StructuralSD",
    "StructuralSDResult",
]
