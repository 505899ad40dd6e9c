#!/usr/bin/env python3
"""
CLI for running signal detectors on a CSV file.

Usage:
    python -m ta_signals.cli --data data/BTCUSDT_5m.csv
    python -m ta_signals.cli --data data/BTCUSDT_5m.csv --pivot-strength 3 --table
    python -m ta_signals.cli --data data/BTCUSDT_5m.csv --every 5 --start 09:16
    python -m ta_signals.cli --data data/BTCUSDT_5m.csv --strategy ssl-cci

Structural supply/demand parameters not given on the command line are read
from the environment (SD_PIVOT_STRENGTH, SD_CLOSE_TYPE, SD_LOOKBACK_CANDLES, optionally via .env).
The other strategies run with their default configuration.
"""

import argparse
import asyncio
import logging
import sys
from dataclasses import replace
from pathlib import Path

from rich.console import Console
from rich.table import Table

from ta_signals.core.config import CloseType, StructuralSDConfig
from ta_signals.data import CandleCSVSource
from ta_signals.scheduler import JobScheduler
from ta_signals.signals import DETECTORS, Signal
from ta_signals.signals.structural_sd import StructuralSD
from ta_signals.signals.structural_sd.detector import COLOR_DIM, COLOR_DOWN, COLOR_UP

logger = logging.getLogger(__name__)

console = Console()

STRUCTURAL_SD = "structural-sd"


def parse_start(value: str) -> tuple[int, int]:
    """
    Parse a daily start time from format hh:mm.

    Examples:
        09:16 -> (9, 16)
    """
    try:
        hour_text, minute_text = value.split(":")
        hour, minute = int(hour_text), int(minute_text)
    except ValueError as e:
        raise argparse.ArgumentTypeError(f"Invalid start time: '{value}'. Expected: hh:mm (e.g., 09:16)") from e
    if not (0 <= hour < 24 and 0 <= minute < 60):
        raise argparse.ArgumentTypeError(f"Start time out of range: '{value}'")
    return hour, minute


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Run structural supply/demand and indicator signal detectors",
    )
    parser.add_argument("--data", "-d", type=Path, required=True, help="OHLC CSV file")
    parser.add_argument(
        "--strategy",
        "-s",
        choices=[STRUCTURAL_SD, *DETECTORS],
        default=STRUCTURAL_SD,
        help="Detector to run (default: structural-sd)",
    )
    parser.add_argument("--pivot-strength", "-p", type=int, help="Candles on each side of a pivot (default: 5)")
    parser.add_argument(
        "--close-type",
        "-c",
        choices=[member.value for member in CloseType],
        help="Price basis for pivots and breakouts (default: HL)",
    )
    parser.add_argument("--lookback", "-l", type=int, help="Candles scanned for a fresh retest (default: 3)")
    parser.add_argument("--env-file", type=Path, help="Path to .env file")
    parser.add_argument("--table", "-t", action="store_true", help="Print every annotated candle or signal")
    parser.add_argument("--every", type=int, help="Re-run every N minutes")
    parser.add_argument("--start", type=parse_start, default=(9, 16), help="Daily start time hh:mm (default: 09:16)")
    parser.add_argument("--verbose", "-v", action="store_true", help="Log zone lifecycle events")
    return parser


def load_config(args: argparse.Namespace) -> StructuralSDConfig:
    """Environment config with command-line overrides applied."""
    config = StructuralSDConfig.from_env(args.env_file)
    overrides = {}
    if args.pivot_strength is not None:
        overrides["pivot_strength"] = args.pivot_strength
    if args.close_type is not None:
        overrides["close_type"] = args.close_type
    if args.lookback is not None:
        overrides["look_back_candles_for_signal"] = args.lookback
    return replace(config, **overrides)


def analyse(data_path: Path, config: StructuralSDConfig, show_table: bool = False) -> bool:
    """
    Load candles, run the detector and print the outcome.

    Returns:
        True if a signal was found
    """
    source = CandleCSVSource(data_path)
    detector = StructuralSD(source.candles, config)
    signal = detector.apply()

    if show_table:
        console.print(detector.render_table())

    if signal is None:
        console.print("No signal")
        return False

    a = signal.annotation
    console.print(
        f"[bold]{a.retest.value}[/bold] at {signal.timestamp} "
        f"(zone formed {a.retest_date}, close {signal.candle.close})"
    )
    return True


def render_signals(name: str, signals: list[Signal]) -> Table:
    """Rich table of detector signals, oldest first."""
    table = Table(title=name, show_header=True, header_style="bold")
    table.add_column("date")
    table.add_column("direction")
    table.add_column("price", justify="right")

    for signal in signals:
        direction = signal.direction.value if signal.direction else "-"
        style = {"LONG": COLOR_UP, "SHORT": COLOR_DOWN}.get(direction, COLOR_DIM)
        table.add_row(str(signal.timestamp), direction, f"{signal.price:g}", style=style)

    return table


def run_strategy(data_path: Path, name: str, show_table: bool = False) -> bool:
    """
    Run one of the indicator-driven detectors and print its latest signal.

    Returns:
        True if the last candle carries a signal
    """
    source = CandleCSVSource(data_path)
    candles = source.candles
    signals = DETECTORS[name]().detect(candles)
    logger.info(f"{name}: {len(signals)} signal(s) over {len(candles)} candles")

    if show_table:
        console.print(render_signals(name, signals))

    if not signals:
        console.print("No signal")
        return False

    latest = signals[-1]
    direction = latest.direction.value if latest.direction else "VOLATILITY"
    console.print(f"[bold]{direction}[/bold] at {latest.timestamp} (close {latest.price})")
    return latest.index == len(candles) - 1


def main():
    args = build_parser().parse_args()

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(asctime)s [%(name)s] %(levelname)s: %(message)s",
    )

    try:
        config = load_config(args)

        def job() -> bool:
            if args.strategy == STRUCTURAL_SD:
                return analyse(args.data, config, args.table)
            return run_strategy(args.data, args.strategy, args.table)

        if args.every is None:
            job()
            return

        hour, minute = args.start
        scheduler = JobScheduler(
            job,
            initial_hour=hour,
            initial_minute=minute,
            interval_minutes=args.every,
        )
        asyncio.run(scheduler.run())
    except (FileNotFoundError, ValueError) as e:
        console.print(f"[red]Error:[/red] {e}")
        sys.exit(1)
    except KeyboardInterrupt:
        console.print("Stopped")


if __name__ == "__main__":
    main()
