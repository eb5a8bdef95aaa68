# This file is part of svg-slim.
#
# This Source Code Form is subject to the terms of the Mozilla Public
# License, v. 2.0. If a copy of the MPL was not distributed with this
# file, You can obtain one at https://mozilla.org/MPL/2.0/.

from __future__ import annotations

import math
import re
import sys
from collections.abc import Sequence
from typing import ClassVar, Final, TypedDict, final

if sys.version_info >= (3, 12):
    from typing import override
else:
    from typing_extensions import override

from .errors import ArityError, ParseError, PathError
from .formatter import format_number, round_half_away
from .geometry import Point, Subpath
from .path_parser import ARITY, PathParser
from .resolver import annotate

_minify_cmd_space: Final = re.compile(r"^([a-zA-Z]) ")
_minify_dot_gap: Final = re.compile(r"(\.[0-9]+) (?=\.)")


class SvgItem:
    """Base class for a single SVG path command and its numeric values."""

    key: ClassVar[str] = ""

    def __init__(self, values: list[float], relative: bool) -> None:
        arity = ARITY[self.key] if self.key else len(values)
        if len(values) != arity:
            raise ArityError(
                f"Command {self.key!r} expects {arity} values, got {len(values)}"
            )
        self.relative: bool = relative
        self.values: list[float] = values
        self.previous_point: Point = Point(0, 0)
        self.absolute_points: list[Point] = []
        self.absolute_control_points: list[Point] = []

    @staticmethod
    def make(raw_item: Sequence[str]) -> SvgItem:
        """Construct an SvgItem from a parsed command and its parameter strings."""
        if not raw_item:
            raise ParseError("Empty SVG item")

        cmd = raw_item[0]
        relative = cmd.islower()
        values = [float(it) for it in raw_item[1:]]
        if not all(math.isfinite(v) for v in values):
            raise ParseError(f"Non-finite value in {' '.join(raw_item)!r}")

        mapping: dict[str, type[SvgItem]] = {
            MoveTo.key: MoveTo,
            LineTo.key: LineTo,
            HorizontalLineTo.key: HorizontalLineTo,
            VerticalLineTo.key: VerticalLineTo,
            ClosePath.key: ClosePath,
            CurveTo.key: CurveTo,
            SmoothCurveTo.key: SmoothCurveTo,
            QuadraticBezierCurveTo.key: QuadraticBezierCurveTo,
            SmoothQuadraticBezierCurveTo.key: SmoothQuadraticBezierCurveTo,
            EllipticalArcTo.key: EllipticalArcTo,
        }

        cls = mapping.get(cmd.upper())
        if not cls:
            raise ParseError(f"Invalid SVG item type: {cmd!r}")
        return cls(values, relative)

    def refresh_absolute_points(self, origin: Point, previous: SvgItem | None) -> None:
        """Recalculate absolute points from stored values and previous item."""
        self.previous_point = previous.target_location() if previous else Point(0, 0)
        self.absolute_points = []

        current = self.previous_point if self.relative else Point(0, 0)

        for i in range(0, len(self.values) - 1, 2):
            self.absolute_points.append(
                Point(current.x + self.values[i], current.y + self.values[i + 1])
            )

    def refresh_absolute_control_points(self, previous: SvgItem | None) -> None:
        """Recalculate absolute control points. Default: no control points."""
        self.absolute_control_points = []

    def refresh(self, origin: Point, previous: SvgItem | None) -> None:
        """
        Recompute all absolute points.

        :param origin: Start of the current subpath.
        :param previous: The preceding item, ``None`` for the first one.
        """
        self.refresh_absolute_points(origin, previous)
        self.refresh_absolute_control_points(previous)

    def clone(self) -> SvgItem:
        """Return a copy of this item (values and relativity)."""
        clone = self.__class__(self.values.copy(), self.relative)
        clone.previous_point = self.previous_point
        return clone

    def rounded(self, decimals: int) -> SvgItem:
        """Return a copy with every value rounded to ``decimals`` digits."""
        clone = self.clone()
        clone.values = [round_half_away(v, decimals) for v in self.values]
        return clone

    def target_location(self) -> Point:
        """Final absolute point reached by this item."""
        return self.absolute_points[-1]

    def get_type(self) -> str:
        """Return the SVG command letter for this item, respecting relativity."""
        if self.relative:
            return self.key.lower()
        return self.key

    def format_values(
        self, decimals: int | None = None, strip_leading_zero: bool = False
    ) -> list[str]:
        """Format the values of this item for serialization."""
        return [format_number(v, decimals, strip_leading_zero) for v in self.values]

    def as_string(
        self,
        decimals: int | None = None,
        minify: bool = False,
        trailing_items: list[SvgItem] | None = None,
        *,
        strip_leading_zero: bool = False,
        compact_flags: bool = False,
    ) -> str:
        """
        Serialize this command (optionally together with same-typed trailing items)
        into an SVG path fragment.
        """
        trailing_items = trailing_items or []
        str_values = [
            s
            for it in [self, *trailing_items]
            for s in it.format_values(decimals, strip_leading_zero)
        ]
        return " ".join([self.get_type(), *str_values])


@final
class MoveTo(SvgItem):
    key = "M"


@final
class LineTo(SvgItem):
    key = "L"


@final
class CurveTo(SvgItem):
    key = "C"

    @override
    def refresh_absolute_control_points(self, previous: SvgItem | None) -> None:
        self.absolute_control_points = [
            self.absolute_points[0],
            self.absolute_points[1],
        ]


@final
class SmoothCurveTo(SvgItem):
    key = "S"

    @override
    def refresh_absolute_control_points(self, previous: SvgItem | None) -> None:
        # The first control point mirrors the previous cubic's second one.
        if isinstance(previous, (CurveTo, SmoothCurveTo)):
            prev_control = previous.absolute_control_points[1]
            first = prev_control.reflect(previous.target_location())
        else:
            first = self.previous_point
        self.absolute_control_points = [first, self.absolute_points[0]]


@final
class QuadraticBezierCurveTo(SvgItem):
    key = "Q"

    @override
    def refresh_absolute_control_points(self, previous: SvgItem | None) -> None:
        self.absolute_control_points = [self.absolute_points[0]]


@final
class SmoothQuadraticBezierCurveTo(SvgItem):
    key = "T"

    @override
    def refresh_absolute_control_points(self, previous: SvgItem | None) -> None:
        if isinstance(previous, (QuadraticBezierCurveTo, SmoothQuadraticBezierCurveTo)):
            prev_control = previous.absolute_control_points[0]
            control = prev_control.reflect(previous.target_location())
        else:
            control = self.previous_point
        self.absolute_control_points = [control]


@final
class ClosePath(SvgItem):
    key = "Z"

    @override
    def refresh_absolute_points(self, origin: Point, previous: SvgItem | None) -> None:
        self.previous_point = previous.target_location() if previous else Point(0, 0)
        self.absolute_points = [origin]


@final
class HorizontalLineTo(SvgItem):
    key = "H"

    @override
    def refresh_absolute_points(self, origin: Point, previous: SvgItem | None) -> None:
        self.previous_point = previous.target_location() if previous else Point(0, 0)
        x = self.values[0] + self.previous_point.x if self.relative else self.values[0]
        self.absolute_points = [Point(x, self.previous_point.y)]


@final
class VerticalLineTo(SvgItem):
    key = "V"

    @override
    def refresh_absolute_points(self, origin: Point, previous: SvgItem | None) -> None:
        self.previous_point = previous.target_location() if previous else Point(0, 0)
        y = self.values[0] + self.previous_point.y if self.relative else self.values[0]
        self.absolute_points = [Point(self.previous_point.x, y)]


@final
class EllipticalArcTo(SvgItem):
    key = "A"

    @property
    def radii(self) -> tuple[float, float]:
        return abs(self.values[0]), abs(self.values[1])

    @property
    def rotation(self) -> float:
        return self.values[2]

    @property
    def large_arc(self) -> bool:
        return self.values[3] != 0

    @property
    def sweep(self) -> bool:
        return self.values[4] != 0

    @override
    def refresh_absolute_points(self, origin: Point, previous: SvgItem | None) -> None:
        self.previous_point = previous.target_location() if previous else Point(0, 0)
        if self.relative:
            x = self.values[5] + self.previous_point.x
            y = self.values[6] + self.previous_point.y
            self.absolute_points = [Point(x, y)]
        else:
            self.absolute_points = [Point(self.values[5], self.values[6])]

    @override
    def rounded(self, decimals: int) -> SvgItem:
        clone = super().rounded(decimals)
        # Flags are not coordinates.
        clone.values[3:5] = self.values[3:5]
        return clone

    @override
    def as_string(
        self,
        decimals: int | None = None,
        minify: bool = False,
        trailing_items: list[SvgItem] | None = None,
        *,
        strip_leading_zero: bool = False,
        compact_flags: bool = False,
    ) -> str:
        trailing_items = trailing_items or []
        if not compact_flags:
            return super().as_string(
                decimals,
                minify,
                trailing_items,
                strip_leading_zero=strip_leading_zero,
            )

        formatted_groups = [
            it.format_values(decimals, strip_leading_zero)
            for it in [self, *trailing_items]
        ]
        compact = [
            f"{v[0]} {v[1]} {v[2]} {v[3]}{v[4]}{v[5]} {v[6]}" for v in formatted_groups
        ]
        return " ".join([self.get_type(), *compact])


class _Grouped(TypedDict):
    type: str
    item: SvgItem
    trailing: list[SvgItem]


class SvgPath:
    """
    A parsed path-data attribute: an ordered list of :class:`SvgItem`.

    Parsing is lenient when an ``errors`` list is given: malformed runs are
    left out of :attr:`path` and reported in the list. Without it, the first
    malformed run raises.
    """

    def __init__(
        self, path: str | list[SvgItem], errors: list[PathError] | None = None
    ) -> None:
        if isinstance(path, str):
            self.path: list[SvgItem] = []
            for raw_item in PathParser.parse(path, errors):
                try:
                    self.path.append(SvgItem.make(raw_item))
                except PathError as err:
                    if errors is None:
                        raise
                    errors.append(err)
        else:
            self.path = path
        self.refresh_absolute_positions()

    @staticmethod
    def from_polylines(subpaths: Sequence[Subpath]) -> SvgPath:
        """
        Build an absolute ``M``/``L`` path from flattened subpaths.

        A closed subpath ends in ``Z`` instead of a line back to its start.
        """
        items: list[SvgItem] = []
        for sub in subpaths:
            points = sub.points
            if sub.closed and len(points) > 1 and points[-1] == points[0]:
                points = points[:-1]
            first, *rest = points
            items.append(MoveTo([first.x, first.y], relative=False))
            items.extend(LineTo([p.x, p.y], relative=False) for p in rest)
            if sub.closed:
                items.append(ClosePath([], relative=False))
        return SvgPath(items)

    def rounded(self, decimals: int) -> SvgPath:
        """Return a copy with every value rounded to ``decimals`` digits."""
        return SvgPath([it.rounded(decimals) for it in self.path])

    def as_string(
        self,
        decimals: int | None = None,
        minify: bool = False,
        *,
        strip_leading_zero: bool = False,
        compact_flags: bool = False,
    ) -> str:
        """
        Serialize the entire path to an SVG path string.

        With ``minify``, consecutive items of the same command share one
        letter and separators are dropped where the grammar allows it.
        Moves and closes are never merged: extra coordinate pairs after a
        move mean lines, and a repeated close is not a parameter group.
        """
        grouped: list[_Grouped] = []
        for it in self.path:
            t = it.get_type()
            if (
                minify
                and grouped
                and t not in ("M", "m", "Z", "z")
                and (last := grouped[-1])["type"] == t
            ):
                last["trailing"].append(it)
                continue
            grouped.append({"type": t, "item": it, "trailing": []})

        out_parts: list[str] = []
        for g in grouped:
            s = g["item"].as_string(
                decimals,
                minify,
                g["trailing"],
                strip_leading_zero=strip_leading_zero,
                compact_flags=compact_flags,
            )
            if minify:
                s = _minify_cmd_space.sub(r"\1", s)
                s = s.replace(" -", "-")
                s = _minify_dot_gap.sub(r"\1", s)
            out_parts.append(s)

        return "".join(out_parts) if minify else " ".join(out_parts)

    def refresh_absolute_positions(self) -> None:
        """Recompute absolute positions for all items in the path."""
        annotate(self.path)

    @override
    def __str__(self) -> str:
        return self.as_string()
