"""
Structural Supply/Demand - pivot breakout zones and their retests.
"""

from .detector import StructuralSD
from .models import (
    AnnotatedCandle,
    CandleAnnotation,
    PendingPivot,
    PivotType,
    RetestType,
    StructuralSDResult,
    StructureInvariantError,
    Validity,
    Zone,
    ZoneState,
    ZoneType,
)
from .pivots import classify_pivot, detect_pivots, pivot_value
from .scanner import find_signal
from .zones import run_zones, step, zone_bounds

__all__ = [
    "StructuralSD",
    "StructuralSDResult",
    # Models
    "AnnotatedCandle",
    "CandleAnnotation",
    "PendingPivot",
    "Zone",
    "ZoneState",
    "PivotType",
    "ZoneType",
    "Validity",
    "RetestType",
    "StructureInvariantError",
    # Passes
    "classify_pivot",
    "detect_pivots",
    "pivot_value",
    "step",
    "run_zones",
    "zone_bounds",
    "find_signal",
]
