"""
Zone state machine - pending pivot queue and active zone ledger.

Each candle is processed by `step()` in four ordered passes:

1. Invalidation: active zones the close goes through are marked INVALID
   on their formation candle and leave the ledger.
2. Retest: every remaining zone the candle trades back into stamps a
   retest on the candle. When several match, the last zone in ledger
   order wins.
3. Breakout: pending pivots the close breaks (in insertion order) form
   new zones on the candle and prune the pivots they supersede.
4. Enqueue: if the candle is itself a pivot, it joins the pending queue.
   A BOTH pivot is queued without a value; it never breaks and the next
   breakout of either direction drops it.

`step()` reads the state it is given and returns a new one, so a single
transition can be exercised in isolation. The only side effect is on
the annotation records, which the formation candle of a zone owns.
"""

import logging
from collections.abc import Sequence

from ta_signals.core.config import CloseType
from ta_signals.core.models import Candle

from .models import (
    CandleAnnotation,
    PendingPivot,
    PivotType,
    StructureInvariantError,
    Validity,
    Zone,
    ZoneState,
    ZoneType,
)
from .pivots import pivot_value

logger = logging.getLogger(__name__)


def zone_bounds(direction: PivotType, current: Candle, previous: Candle) -> tuple[float, float, float]:
    """
    Gap size and boundaries of the zone a breakout leaves behind.

    UP breakouts measure the gap between the previous high and the
    current low; DOWN breakouts the previous low and the current high.
    The range is signed (negative when the two candles overlap); the
    boundaries are always ordered.

    Returns:
        (range, level_high, level_low)
    """
    if direction is PivotType.UP:
        gap_range = current.low - previous.high
        edges = (current.low, previous.high)
    else:
        gap_range = previous.low - current.high
        edges = (current.high, previous.low)
    return gap_range, max(edges), min(edges)


def survives_breakout(pivot: PendingPivot, consumed: PendingPivot) -> bool:
    """
    Whether a pending pivot outlives another pivot's breakout.

    An UP breakout supersedes every DOWN or BOTH pivot and every UP pivot
    at or below the broken level; DOWN breakouts mirror this.
    """
    if pivot.direction is not consumed.direction:
        return False
    if consumed.direction is PivotType.UP:
        return pivot.value > consumed.value
    return pivot.value < consumed.value


def is_broken(pivot: PendingPivot, close: float) -> bool:
    if not pivot.is_breakable:
        return False
    if pivot.direction is PivotType.UP:
        return close > pivot.value
    return close < pivot.value


def _invalidate(
    zones: tuple[Zone, ...],
    candle: Candle,
    annotations: Sequence[CandleAnnotation],
) -> list[Zone]:
    remaining: list[Zone] = []
    for zone in zones:
        if zone.is_invalidated_by(candle.close):
            annotations[zone.formed_at_index].invalidate(candle.timestamp)
            logger.debug(
                f"{zone.zone_type.value} zone from {zone.formed_at_timestamp} "
                f"[{zone.low}, {zone.high}] invalidated at {candle.timestamp}"
            )
        else:
            remaining.append(zone)
    return remaining


def _retest(zones: list[Zone], candle: Candle, annotation: CandleAnnotation) -> None:
    # Last matching zone in ledger order overwrites earlier matches
    for zone in zones:
        if zone.is_retested_by(candle):
            annotation.retest = zone.retest_type
            annotation.retest_date = zone.formed_at_timestamp


def step(
    state: ZoneState,
    candles: Sequence[Candle],
    index: int,
    pivots: Sequence[PivotType | None],
    annotations: Sequence[CandleAnnotation],
    close_type: CloseType = CloseType.HL,
) -> ZoneState:
    """
    Process one candle.

    Args:
        state: Pending pivots and active zones before this candle
        candles: Full candle sequence
        index: Candle to process
        pivots: Pivot tags for every candle (from detect_pivots)
        annotations: Annotation records for every candle, written in place
        close_type: Price basis used for pivot tracked values

    Returns:
        State after this candle
    """
    candle = candles[index]
    annotation = annotations[index]
    annotation.pivot = pivots[index]

    zones = _invalidate(state.zones, candle, annotations)
    _retest(zones, candle, annotation)

    pending = list(state.pending)
    for pivot in state.pending:
        if pivot not in pending or not is_broken(pivot, candle.close):
            continue

        if index == 0:
            raise StructureInvariantError(f"Pivot {pivot.value} broken on the first candle")

        gap_range, level_high, level_low = zone_bounds(pivot.direction, candle, candles[index - 1])
        zone_type = ZoneType.SUPPORT if pivot.direction is PivotType.UP else ZoneType.RESISTANCE
        zone = Zone(
            formed_at_index=index,
            formed_at_timestamp=candle.timestamp,
            zone_type=zone_type,
            high=level_high,
            low=level_low,
        )

        annotation.zone_type = zone_type
        annotation.range = gap_range
        annotation.pivot_date = pivot.timestamp
        annotation.valid = Validity.VALID
        annotation.level_high = level_high
        annotation.level_low = level_low

        zones.append(zone)
        pending = [p for p in pending if survives_breakout(p, pivot)]
        logger.debug(
            f"{zone_type.value} zone [{level_low}, {level_high}] formed at {candle.timestamp} "
            f"from {pivot.direction.value} pivot {pivot.value} ({pivot.timestamp})"
        )

    if annotation.pivot is not None:
        value = None
        if annotation.pivot is not PivotType.BOTH:
            value = pivot_value(candle, annotation.pivot, close_type)
        pending.append(
            PendingPivot(index=index, timestamp=candle.timestamp, direction=annotation.pivot, value=value)
        )

    return ZoneState(pending=tuple(pending), zones=tuple(zones))


def run_zones(
    candles: Sequence[Candle],
    pivots: Sequence[PivotType | None],
    close_type: CloseType = CloseType.HL,
) -> tuple[list[CandleAnnotation], ZoneState]:
    """
    Fold `step()` over the whole sequence.

    Args:
        candles: Candles in chronological order
        pivots: Pivot tags, one per candle
        close_type: Price basis used for pivot tracked values

    Returns:
        (annotations, final state)
    """
    if len(pivots) != len(candles):
        raise ValueError(f"Expected {len(candles)} pivot tags, got {len(pivots)}")

    annotations = [CandleAnnotation() for _ in candles]
    state = ZoneState()

    for index in range(len(candles)):
        state = step(state, candles, index, pivots, annotations, close_type)

    return annotations, state
