"""
Structural Supply/Demand detector.

Finds pivot highs and lows, turns them into support/resistance zones
when price closes beyond them, tracks each zone until price closes
through it, and reports the latest candle that retested a zone.

Usage:
    detector = StructuralSD(candles, StructuralSDConfig(pivot_strength=3))
    signal = detector.apply()
    if signal is not None:
        print(signal.annotation.retest, signal.annotation.retest_date)
"""

import logging
from collections.abc import Sequence

from rich.table import Table

from ta_signals.core.config import StructuralSDConfig
from ta_signals.core.models import Candle

from .models import AnnotatedCandle, StructuralSDResult, Validity, ZoneType
from .pivots import detect_pivots
from .scanner import find_signal
from .zones import run_zones

logger = logging.getLogger(__name__)

# Theme colors (Rich markup)
COLOR_UP = "#44ffaa"
COLOR_DOWN = "#ff7777"
COLOR_DIM = "#666666"


def _fmt(value: object) -> str:
    if value is None:
        return ""
    if isinstance(value, float):
        return f"{value:,.4f}".rstrip("0").rstrip(".")
    if hasattr(value, "value"):
        return str(value.value)
    return str(value)


class StructuralSD:
    """
    Structural supply/demand zone detector over a candle series.

    Each run works on its own annotation records, so the input candles
    are never modified and the same list can be analysed concurrently.
    """

    def __init__(
        self,
        candles: Sequence[Candle | dict],
        config: StructuralSDConfig | dict | None = None,
    ) -> None:
        """
        Initialize the detector.

        Args:
            candles: Candles (or candle dicts) in chronological order
            config: Detection parameters, as a config or a dict
                (uses defaults if None)

        Raises:
            ValueError: If the config is invalid or a candle is malformed
        """
        self.candles = [c if isinstance(c, Candle) else Candle.from_dict(c) for c in candles]
        if isinstance(config, dict):
            config = StructuralSDConfig.from_dict(config)
        self.config = config or StructuralSDConfig()
        self.result: StructuralSDResult | None = None

    def run(self) -> StructuralSDResult:
        """
        Run pivot detection, the zone pass and the signal scan.

        Returns:
            StructuralSDResult with every annotated candle, the final
            pending pivot / active zone state, and the signal (if any)
        """
        pivots = detect_pivots(self.candles, self.config.pivot_strength, self.config.close_type)
        annotations, state = run_zones(self.candles, pivots, self.config.close_type)

        annotated = [
            AnnotatedCandle(candle=candle, annotation=annotation)
            for candle, annotation in zip(self.candles, annotations, strict=True)
        ]
        signal = find_signal(annotated, self.config.look_back_candles_for_signal)

        self.result = StructuralSDResult(candles=annotated, state=state, signal=signal)
        logger.info(
            f"StructuralSD: {len(annotated)} candles, {self.result.zones_formed} zones formed, "
            f"{len(state.zones)} active, {len(state.pending)} pending pivots, "
            f"signal={'yes' if signal else 'no'}"
        )
        return self.result

    def apply(self) -> AnnotatedCandle | None:
        """Run the detector and return the latest valid retest, or None."""
        return self.run().signal

    def render_table(self) -> Table:
        """
        Render the annotated candles as a Rich table.

        Runs the detector first if it has not run yet.
        """
        result = self.result or self.run()

        table = Table(title="Structural Supply/Demand")
        for column in ("date", "range", "pivot", "type", "valid", "invalidDate", "retest", "retestDate"):
            table.add_column(column)

        for item in result.candles:
            a = item.annotation
            if a.valid is Validity.VALID:
                style = COLOR_UP if a.zone_type is ZoneType.SUPPORT else COLOR_DOWN
            elif a.valid is Validity.INVALID:
                style = COLOR_DIM
            else:
                style = None
            table.add_row(
                _fmt(item.timestamp),
                _fmt(a.range),
                _fmt(a.pivot),
                _fmt(a.zone_type),
                _fmt(a.valid),
                _fmt(a.invalid_date),
                _fmt(a.retest),
                _fmt(a.retest_date),
                style=style,
            )

        return table
