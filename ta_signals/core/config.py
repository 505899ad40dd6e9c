"""
Structural supply/demand configuration.

Centralizes the tunable parameters of the zone detector so they can be
supplied from code, a dict, or the environment.
"""

import os
from dataclasses import dataclass
from enum import Enum
from pathlib import Path

from dotenv import load_dotenv


class CloseType(Enum):
    """Which prices pivots and breakouts are measured on."""

    HL = "HL"  # Highs for up pivots, lows for down pivots
    CLOSE = "CLOSE"  # Closes for both

    @classmethod
    def parse(cls, value: "CloseType | str") -> "CloseType":
        """Parse an enum member or its name (case-insensitive)."""
        if isinstance(value, cls):
            return value
        if isinstance(value, str):
            try:
                return cls[value.strip().upper()]
            except KeyError:
                pass
        valid = ", ".join(member.value for member in cls)
        raise ValueError(f"close_type must be one of {valid}, got: {value!r}")


def positive_int(name: str, value: object) -> int:
    if isinstance(value, bool) or not isinstance(value, int) or value <= 0:
        raise ValueError(f"{name} must be a positive integer, got: {value!r}")
    return value


@dataclass
class StructuralSDConfig:
    """Configuration for structural supply/demand zone detection.

    TUNABLE PARAMETERS:
    - pivot_strength: candles on each side a pivot must dominate
    - close_type: HL (wick extremes) or CLOSE (closing prices)
    - look_back_candles_for_signal: how fresh a retest must be to signal
    """

    # Candles compared on each side of a pivot
    # Range: 2-10 | Higher = fewer, more significant pivots
    pivot_strength: int = 5

    close_type: CloseType = CloseType.HL

    # Candles scanned back from the last one for a valid retest
    # Range: 1-10 | Higher = older retests still count as signals
    look_back_candles_for_signal: int = 3

    def __post_init__(self) -> None:
        """Validate configuration."""
        positive_int("pivot_strength", self.pivot_strength)
        positive_int("look_back_candles_for_signal", self.look_back_candles_for_signal)
        self.close_type = CloseType.parse(self.close_type)

    @property
    def min_candles(self) -> int:
        """Shortest series that can contain a pivot."""
        return 2 * self.pivot_strength + 1

    @classmethod
    def from_dict(cls, data: dict) -> "StructuralSDConfig":
        """Create config from a dictionary (camelCase or snake_case keys)."""
        defaults = cls()
        return cls(
            pivot_strength=data.get("pivotStrength", data.get("pivot_strength", defaults.pivot_strength)),
            close_type=data.get("closeType", data.get("close_type", defaults.close_type)),
            look_back_candles_for_signal=data.get(
                "lookBackCandlesForSignal",
                data.get("look_back_candles_for_signal", defaults.look_back_candles_for_signal),
            ),
        )

    @classmethod
    def from_env(cls, env_path: str | Path | None = None) -> "StructuralSDConfig":
        """
        Create config from environment variables.

        Reads SD_PIVOT_STRENGTH, SD_CLOSE_TYPE and SD_LOOKBACK_CANDLES,
        after loading a .env file if one is found.

        Args:
            env_path: Optional path to .env file
        """
        if env_path:
            load_dotenv(env_path)
        else:
            load_dotenv()

        defaults = cls()
        try:
            pivot_strength = int(os.getenv("SD_PIVOT_STRENGTH", defaults.pivot_strength))
            look_back = int(os.getenv("SD_LOOKBACK_CANDLES", defaults.look_back_candles_for_signal))
        except ValueError as e:
            raise ValueError(f"Invalid integer in environment: {e}") from e

        return cls(
            pivot_strength=pivot_strength,
            close_type=os.getenv("SD_CLOSE_TYPE", defaults.close_type.value),
            look_back_candles_for_signal=look_back,
        )

    def to_dict(self) -> dict:
        """Convert to dictionary for serialization."""
        return {
            "pivot_strength": self.pivot_strength,
            "close_type": self.close_type.value,
            "look_back_candles_for_signal": self.look_back_candles_for_signal,
        }


# Default configuration instance
DEFAULT_CONFIG = StructuralSDConfig()
