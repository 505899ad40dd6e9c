"""
Core Module - Market data models and configuration.
"""

from .config import DEFAULT_CONFIG, CloseType, StructuralSDConfig
from .models import Candle, parse_timestamp

__all__ = [
    "Candle",
    "parse_timestamp",
    "CloseType",
    "StructuralSDConfig",
    "DEFAULT_CONFIG",
]
