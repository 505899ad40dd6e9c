"""
CSV candle source.

Reads OHLC CSV files (timestamp/date, open, high, low, close, optional
volume columns) into Candle objects for analysis.
"""

import csv
import logging
from pathlib import Path

from ta_signals.core.models import Candle

logger = logging.getLogger(__name__)


class CandleCSVSource:
    """
    Loads a chronologically ordered candle series from CSV.

    Usage:
        source = CandleCSVSource("data/BTCUSDT_5m.csv")
        candles = source.candles
    """

    def __init__(self, filepath: str | Path):
        """
        Initialize with path to CSV file.

        Args:
            filepath: Path to CSV file

        Raises:
            FileNotFoundError: If the file does not exist
            ValueError: If the file is empty, a row is malformed, or the
                rows are not in chronological order
        """
        self.filepath = Path(filepath)
        if not self.filepath.exists():
            raise FileNotFoundError(f"Candle data file not found: {filepath}")

        self.candles: list[Candle] = []
        self._load_data()

    def _load_data(self) -> None:
        """Load CSV data into memory."""
        with self.filepath.open(newline="") as f:
            reader = csv.DictReader(f)
            # Header is line 1
            for line_number, row in enumerate(reader, start=2):
                try:
                    candle = Candle.from_dict(row)
                except ValueError as e:
                    raise ValueError(f"{self.filepath}:{line_number}: {e}") from e

                if self.candles and candle.timestamp < self.candles[-1].timestamp:
                    raise ValueError(
                        f"{self.filepath}:{line_number}: candles are not in chronological order"
                    )
                self.candles.append(candle)

        if not self.candles:
            raise ValueError(f"No data found in {self.filepath}")

        logger.info(f"Loaded {len(self.candles)} candles from {self.filepath}")

    @property
    def candle_count(self) -> int:
        """Get the number of candles in the data."""
        return len(self.candles)

    def __repr__(self) -> str:
        return (
            f"CandleCSVSource({self.filepath.name}, "
            f"{self.candle_count} candles, "
            f"{self.candles[0].timestamp:%Y-%m-%d %H:%M} to "
            f"{self.candles[-1].timestamp:%Y-%m-%d %H:%M})"
        )
