# This file is part of svg-slim.
#
# This Source Code Form is subject to the terms of the Mozilla Public
# License, v. 2.0. If a copy of the MPL was not distributed with this
# file, You can obtain one at https://mozilla.org/MPL/2.0/.

from __future__ import annotations

import re
from collections.abc import Sequence
from decimal import ROUND_HALF_UP, Decimal, getcontext, localcontext
from typing import TYPE_CHECKING, Final

if TYPE_CHECKING:
    from .geometry import Subpath

_number_strip_trailing_zeros: Final = re.compile(r"^(-?[0-9]*\.([0-9]*[1-9])?)0*$")
_number_strip_dot: Final = re.compile(r"\.$")
_number_leading_zero: Final = re.compile(r"^(-?)0\.")
_number_negative_zero: Final = re.compile(r"^-0$")


def round_decimal(value: Decimal, precision: int) -> Decimal:
    """
    Round to ``precision`` fractional digits, ties away from zero.

    The working precision is widened as needed, so large magnitudes never
    raise :class:`decimal.InvalidOperation`.
    """
    with localcontext() as ctx:
        ctx.prec = max(getcontext().prec, value.adjusted() + precision + 2)
        return value.quantize(Decimal(1).scaleb(-precision), rounding=ROUND_HALF_UP)


def round_half_away(value: float, precision: int) -> float:
    """
    Round a float to ``precision`` decimal digits, ties away from zero.

    Rounding works on the shortest decimal representation of ``value``
    (``repr``), so ``2.675`` rounds to ``2.68`` at two digits even though the
    nearest double is slightly below ``2.675``.
    """
    return float(round_decimal(Decimal(repr(value)), precision))


def format_number(
    v: float, d: int | None = None, strip_leading_zero: bool = False
) -> str:
    """
    Format a float minimally, optionally rounded to ``d`` fractional digits.

    Trailing zeros and a trailing dot are removed and ``-0`` is written as
    ``0``. The leading zero of ``0.5`` is only dropped on request.
    """
    s = f"{round_half_away(v, d):.{d}f}" if d is not None else str(v)
    s = _number_strip_trailing_zeros.sub(r"\1", s)
    s = _number_strip_dot.sub("", s)
    s = _number_negative_zero.sub("0", s)
    if strip_leading_zero:
        s = _number_leading_zero.sub(r"\1.", s)
    return s


def serialize_subpaths(
    subpaths: Sequence[Subpath],
    precision: int | None = None,
    *,
    strip_leading_zero: bool = False,
) -> str:
    """
    Serialize flattened subpaths as minified absolute ``M``/``L``/``Z`` data.

    Consecutive lines share one ``L``; a closed subpath ends in ``Z`` rather
    than a line back to its start.
    """
    from .svg import SvgPath

    return SvgPath.from_polylines(subpaths).as_string(
        precision, minify=True, strip_leading_zero=strip_leading_zero
    )
