"""Command-line arguments for blkinventory."""

import argparse
from pathlib import Path
from typing import List, Optional

from .executor import DEFAULT_TIMEOUT


def _positive_float(value: str) -> float:
    try:
        f = float(value)
    except ValueError:
        raise argparse.ArgumentTypeError(f"not a number: {value!r}") from None
    if f <= 0:
        raise argparse.ArgumentTypeError(f"must be greater than 0: {value!r}")
    return f


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="blkinventory",
        description="Show block devices reported by lsblk as a normalized tree.",
    )
    parser.add_argument(
        "--from-file",
        type=Path,
        default=None,
        metavar="PATH",
        help="Parse a saved `lsblk --json` document instead of running lsblk",
    )
    parser.add_argument(
        "--timeout",
        type=_positive_float,
        default=DEFAULT_TIMEOUT,
        metavar="SECONDS",
        help=f"Timeout for running lsblk (default: {DEFAULT_TIMEOUT})",
    )
    parser.add_argument(
        "--bytes",
        dest="in_bytes",
        action="store_true",
        help="Ask lsblk for sizes in bytes",
    )
    which = parser.add_mutually_exclusive_group()
    which.add_argument(
        "--system",
        action="store_true",
        help="Only top-level devices whose subtree mounts /",
    )
    which.add_argument(
        "--non-system",
        action="store_true",
        help="Only top-level devices with no / mount anywhere below them",
    )
    parser.add_argument(
        "--json",
        dest="as_json",
        action="store_true",
        help="Print the normalized lsblk document instead of a tree",
    )
    parser.add_argument(
        "--output-dir",
        type=Path,
        default=None,
        metavar="DIR",
        help="Also write block-devices.md and the normalized snapshot into DIR",
    )
    return parser


def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    return build_parser().parse_args(argv)
