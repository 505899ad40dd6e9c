"""
Data models for structural supply/demand zone detection.

Contains:
- Closed enums for pivot, zone, validity and retest kinds
- PendingPivot / Zone records (referenced by candle index)
- Per-candle annotation records produced by the forward pass
- ZoneState, the explicit state threaded from one candle to the next
"""

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum

from ta_signals.core.models import Candle


class StructureInvariantError(ValueError):
    """Raised when a zone or pivot would violate a structural invariant."""


class PivotType(Enum):
    """Local extreme classification of a candle."""

    UP = "UP"
    DOWN = "DOWN"
    BOTH = "BOTH"


class ZoneType(Enum):
    """Side of the market a zone defends."""

    SUPPORT = "SUPPORT"
    RESISTANCE = "RESISTANCE"


class Validity(Enum):
    """Zone lifecycle state. Only ever moves VALID -> INVALID."""

    VALID = "VALID"
    INVALID = "INVALID"


class RetestType(Enum):
    """Kind of zone a candle traded back into."""

    SUPPORT = "RETEST_SUPPORT"
    RESISTANCE = "RETEST_RESISTANCE"


@dataclass(frozen=True)
class PendingPivot:
    """
    A pivot waiting for price to close beyond its tracked value.

    BOTH pivots carry no value. They never break and are dropped by the
    next breakout of either direction.
    """

    index: int
    timestamp: datetime
    direction: PivotType
    value: float | None = None

    def __post_init__(self) -> None:
        if self.direction is PivotType.BOTH:
            if self.value is not None:
                raise StructureInvariantError(f"BOTH pivot at index {self.index} cannot carry a value")
        elif self.value is None:
            raise StructureInvariantError(
                f"{self.direction.value} pivot at index {self.index} needs a tracked value"
            )

    @property
    def is_breakable(self) -> bool:
        return self.direction is not PivotType.BOTH

    def to_dict(self) -> dict:
        """Convert to dictionary for serialization."""
        return {
            "index": self.index,
            "timestamp": self.timestamp.isoformat(),
            "direction": self.direction.value,
            "value": self.value,
        }


@dataclass(frozen=True)
class Zone:
    """
    An active supply/demand zone.

    A zone is created when a pending pivot breaks and lives in the ledger
    until a later candle closes through its far boundary.
    """

    formed_at_index: int
    formed_at_timestamp: datetime
    zone_type: ZoneType
    high: float
    low: float
    valid: Validity = Validity.VALID

    def __post_init__(self) -> None:
        if not self.high > self.low:
            raise StructureInvariantError(
                f"Zone formed at index {self.formed_at_index} has high {self.high} <= low {self.low}"
            )

    def is_invalidated_by(self, close: float) -> bool:
        """True if a close goes through the zone's far boundary."""
        if self.zone_type is ZoneType.SUPPORT:
            return close < self.low
        return close > self.high

    def is_retested_by(self, candle: Candle) -> bool:
        """True if the candle trades into the zone without closing through it."""
        if self.zone_type is ZoneType.SUPPORT:
            return candle.close > self.low and candle.low <= self.high
        return candle.close < self.high and candle.high >= self.low

    @property
    def retest_type(self) -> RetestType:
        if self.zone_type is ZoneType.SUPPORT:
            return RetestType.SUPPORT
        return RetestType.RESISTANCE

    def to_dict(self) -> dict:
        """Convert to dictionary for serialization."""
        return {
            "formed_at_index": self.formed_at_index,
            "formed_at_timestamp": self.formed_at_timestamp.isoformat(),
            "zone_type": self.zone_type.value,
            "high": self.high,
            "low": self.low,
            "valid": self.valid.value,
        }


@dataclass
class CandleAnnotation:
    """Fields the forward pass derives for one candle."""

    pivot: PivotType | None = None
    zone_type: ZoneType | None = None
    range: float | None = None  # Signed gap size, negative on overlap
    pivot_date: datetime | None = None  # Timestamp of the pivot that formed the zone
    valid: Validity | None = None
    level_high: float | None = None
    level_low: float | None = None
    retest: RetestType | None = None
    retest_date: datetime | None = None  # Formation timestamp of the retested zone
    invalid_date: datetime | None = None

    def invalidate(self, timestamp: datetime) -> None:
        """Mark the zone formed on this candle as invalid."""
        if self.valid is None:
            raise StructureInvariantError("Cannot invalidate a candle that formed no zone")
        self.valid = Validity.INVALID
        self.invalid_date = timestamp

    def to_dict(self) -> dict:
        """Convert to dictionary for serialization."""

        def _value(item: object) -> object:
            if isinstance(item, Enum):
                return item.value
            if isinstance(item, datetime):
                return item.isoformat()
            return item

        return {
            "pivot": _value(self.pivot),
            "zone_type": _value(self.zone_type),
            "range": self.range,
            "pivot_date": _value(self.pivot_date),
            "valid": _value(self.valid),
            "level_high": self.level_high,
            "level_low": self.level_low,
            "retest": _value(self.retest),
            "retest_date": _value(self.retest_date),
            "invalid_date": _value(self.invalid_date),
        }


@dataclass
class AnnotatedCandle:
    """An input candle paired with its derived annotation."""

    candle: Candle
    annotation: CandleAnnotation = field(default_factory=CandleAnnotation)

    @property
    def timestamp(self) -> datetime:
        return self.candle.timestamp

    @property
    def is_signal(self) -> bool:
        """True if this candle is a retest that still holds a valid zone."""
        return self.annotation.retest is not None and self.annotation.valid is Validity.VALID

    def to_dict(self) -> dict:
        """Convert to dictionary for serialization."""
        return {**self.candle.to_dict(), **self.annotation.to_dict()}


@dataclass(frozen=True)
class ZoneState:
    """
    Zone detector state between two candles.

    pending: pivots not yet confirmed, in insertion order
    zones: active zones, in ledger (creation) order
    """

    pending: tuple[PendingPivot, ...] = ()
    zones: tuple[Zone, ...] = ()

    def to_dict(self) -> dict:
        """Convert to dictionary for checkpointing."""
        return {
            "pending": [p.to_dict() for p in self.pending],
            "zones": [z.to_dict() for z in self.zones],
        }


@dataclass
class StructuralSDResult:
    """Outcome of a full structural supply/demand run."""

    candles: list[AnnotatedCandle]
    state: ZoneState
    signal: AnnotatedCandle | None = None

    @property
    def has_signal(self) -> bool:
        return self.signal is not None

    @property
    def zones_formed(self) -> int:
        """Number of candles that formed at least one zone."""
        return sum(1 for c in self.candles if c.annotation.zone_type is not None)
