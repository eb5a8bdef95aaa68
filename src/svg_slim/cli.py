# This file is part of svg-slim.
#
# This Source Code Form is subject to the terms of the Mozilla Public
# License, v. 2.0. If a copy of the MPL was not distributed with this
# file, You can obtain one at https://mozilla.org/MPL/2.0/.

"""Command-line front end: ``svg-slim INPUT [-o OUTPUT] [options]``."""

from __future__ import annotations

import argparse
import logging
import sys
from collections.abc import Sequence
from pathlib import Path

from . import __version__
from .diagnostics import Diagnostics
from .optimizer import NullOptimizer, ScourOptimizer
from .options import MinifyOptions
from .pipeline import optimize_svg


def _parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="svg-slim",
        description="Minify SVG documents and simplify their path data.",
    )
    parser.add_argument("input", help="SVG file to read, '-' for standard input")
    parser.add_argument(
        "-o",
        "--output",
        default="-",
        help="file to write, '-' for standard output (default)",
    )
    parser.add_argument(
        "--precision",
        type=int,
        default=2,
        help="decimal digits kept in coordinates, 0 to 10 (default: 2)",
    )
    parser.add_argument(
        "--no-round",
        action="store_true",
        help="keep coordinates at full precision",
    )
    parser.add_argument(
        "--simplify",
        action="store_true",
        help="flatten curves and drop points within the tolerance",
    )
    parser.add_argument(
        "--tolerance",
        type=float,
        default=1.0,
        help="simplification tolerance, 0.1 to 10 (default: 1)",
    )
    parser.add_argument(
        "--curve-segments",
        type=int,
        default=1,
        help="samples per curve when simplifying, 1 keeps endpoints only",
    )
    parser.add_argument(
        "--no-optimizer",
        action="store_true",
        help="skip the scour pass",
    )
    parser.add_argument(
        "--stats",
        action="store_true",
        help="print size and path statistics to standard error",
    )
    parser.add_argument("-v", "--verbose", action="count", default=0)
    parser.add_argument("--version", action="version", version=__version__)
    return parser


def _read(source: str) -> str:
    if source == "-":
        return sys.stdin.read()
    return Path(source).read_text(encoding="utf-8")


def _write(target: str, data: str) -> None:
    if target == "-":
        sys.stdout.write(data + "\n")
    else:
        Path(target).write_text(data, encoding="utf-8")


def main(argv: Sequence[str] | None = None) -> int:
    args = _parser().parse_args(argv)

    level = logging.WARNING - 10 * min(args.verbose, 2)
    logging.basicConfig(level=level, format="%(levelname)s %(name)s: %(message)s")

    try:
        options = MinifyOptions(
            round_coordinates=not args.no_round,
            coordinate_precision=args.precision,
            simplify_paths=args.simplify,
            simplify_tolerance=args.tolerance,
            curve_segments=args.curve_segments,
        )
    except ValueError as e:
        print(f"svg-slim: {e}", file=sys.stderr)
        return 2

    try:
        document = _read(args.input)
    except (OSError, UnicodeDecodeError) as e:
        print(f"svg-slim: cannot read {args.input}: {e}", file=sys.stderr)
        return 1

    diagnostics = Diagnostics()
    optimizer = NullOptimizer() if args.no_optimizer else ScourOptimizer()
    result = optimize_svg(
        document, options, optimizer=optimizer, diagnostics=diagnostics
    )
    _write(args.output, result.data)

    if args.stats:
        size = result.size
        print(
            f"{size.original} -> {size.optimized} bytes ({size.reduction}% smaller), "
            f"{diagnostics.paths} paths, {diagnostics.failed_paths} unchanged on error, "
            f"{diagnostics.points_removed} points removed",
            file=sys.stderr,
        )
    return 0
