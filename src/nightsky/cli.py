"""Animated night sky for the terminal. Press q or Esc to quit."""

from __future__ import annotations

import argparse
import logging
import random
import sys
from pathlib import Path
from typing import Sequence

from .app import run, run_headless
from .config import DEFAULT_CONFIG
from .errors import NightSkyError
from .terminal import TerminalSession

logger = logging.getLogger(__name__)


def _grid_size(value: str) -> tuple[int, int]:
    try:
        width, height = (int(part) for part in value.lower().split("x"))
    except ValueError as exc:
        raise argparse.ArgumentTypeError(f"expected WIDTHxHEIGHT, got {value!r}") from exc
    if width <= 0 or height <= 0:
        raise argparse.ArgumentTypeError("grid size must be positive")
    return width, height


def parse_args(argv: Sequence[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(prog="nightsky", description=__doc__)
    parser.add_argument(
        "--fps",
        type=float,
        default=DEFAULT_CONFIG.frame_rate,
        help=f"Target frame rate (default: {DEFAULT_CONFIG.frame_rate:g}).",
    )
    parser.add_argument(
        "--stars",
        type=int,
        default=None,
        help="Number of stars (default: one per 20 cells, at most 300).",
    )
    parser.add_argument(
        "--satellites",
        type=int,
        default=0,
        help="Satellites already in flight at startup (default: 0).",
    )
    parser.add_argument("--seed", type=int, default=None, help="Random seed for a reproducible sky.")
    parser.add_argument(
        "--snapshot",
        type=Path,
        default=None,
        help="Render headlessly and write the final frame to this PNG instead of animating.",
    )
    parser.add_argument(
        "--ticks",
        type=int,
        default=120,
        help="Frames to simulate before taking a --snapshot (default: 120).",
    )
    parser.add_argument(
        "--size",
        type=_grid_size,
        default=(80, 24),
        help="Grid size for --snapshot as WIDTHxHEIGHT (default: 80x24).",
    )
    parser.add_argument("--log-file", type=Path, default=None, help="Write logs to this file.")
    parser.add_argument(
        "--log-level",
        default="INFO",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="Log level used with --log-file (default: INFO).",
    )
    args = parser.parse_args(argv)
    if args.fps <= 0:
        parser.error("--fps must be positive")
    if args.stars is not None and args.stars < 0:
        parser.error("--stars must be non-negative")
    if args.satellites < 0:
        parser.error("--satellites must be non-negative")
    if args.ticks < 0:
        parser.error("--ticks must be non-negative")
    return args


def configure_logging(log_file: Path | None, level: str) -> None:
    """Send logs to ``log_file``; without one they are discarded so the screen stays clean."""

    if log_file is None:
        return
    logging.basicConfig(
        filename=str(log_file),
        level=getattr(logging, level),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


def main(argv: Sequence[str] | None = None) -> int:
    args = parse_args(argv)
    configure_logging(args.log_file, args.log_level)
    config = DEFAULT_CONFIG.replace(frame_rate=args.fps)
    rng = random.Random(args.seed)

    if args.snapshot is not None:
        path = run_headless(
            args.snapshot,
            size=args.size,
            ticks=args.ticks,
            config=config,
            rng=rng,
            star_count=args.stars,
            initial_satellites=args.satellites,
        )
        print(path)
        return 0

    try:
        run(
            TerminalSession(),
            config=config,
            rng=rng,
            star_count=args.stars,
            initial_satellites=args.satellites,
        )
    except NightSkyError as exc:
        # The session has already restored the terminal at this point.
        logger.error("%s: %s", type(exc).__name__, exc)
        print(f"nightsky: {exc}", file=sys.stderr)
        return exc.exit_code
    except KeyboardInterrupt:
        logger.info("Interrupted")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
