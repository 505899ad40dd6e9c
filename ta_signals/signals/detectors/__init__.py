"""
Signal Detectors - Indicator-driven trading signal detection.

Each detector takes a candle series and returns the Signal objects
found in it, oldest first.
"""

from .bollinger_squeeze import BandState, BollingerSqueezeConfig, BollingerSqueezeSignalDetector
from .ma_emperor import MAEmperorConfig, MAEmperorSignalDetector, MAType
from .pivot_breakout import BreakoutType, PivotBreakoutConfig, PivotBreakoutSignalDetector, SwingType
from .rsi_chandelier import RSIChandelierConfig, RSIChandelierSignalDetector
from .ssl_cci import SSLCCIConfig, SSLCCISignalDetector

# Command-line names of the detectors
DETECTORS = {
    "ssl-cci": SSLCCISignalDetector,
    "ma-emperor": MAEmperorSignalDetector,
    "rsi-chandelier": RSIChandelierSignalDetector,
    "bollinger-squeeze": BollingerSqueezeSignalDetector,
    "pivot-breakout": PivotBreakoutSignalDetector,
}

__all__ = [
    "DETECTORS",
    "BandState",
    "BollingerSqueezeConfig",
    "BollingerSqueezeSignalDetector",
    "BreakoutType",
    "MAEmperorConfig",
    "MAEmperorSignalDetector",
    "MAType",
    "PivotBreakoutConfig",
    "PivotBreakoutSignalDetector",
    "RSIChandelierConfig",
    "RSIChandelierSignalDetector",
    "SSLCCIConfig",
    "SSLCCISignalDetector",
    "SwingType",
]
