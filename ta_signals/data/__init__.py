"""
Data Module - Candle loading from files.
"""

from .csv_source import CandleCSVSource

__all__ = ["CandleCSVSource"]
