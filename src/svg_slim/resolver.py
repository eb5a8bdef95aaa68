# This file is part of svg-slim.
#
# This Source Code Form is subject to the terms of the Mozilla Public
# License, v. 2.0. If a copy of the MPL was not distributed with this
# file, You can obtain one at https://mozilla.org/MPL/2.0/.

"""Resolution of relative path coordinates into absolute subpaths."""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from .geometry import Point

if TYPE_CHECKING:
    from .svg import SvgItem


@dataclass
class ResolvedSubpath:
    """
    Items of one subpath, annotated with absolute positions.

    :ivar start: Absolute start point of the subpath.
    :ivar items: Items of the subpath in order, the leading move included.
    :ivar closed: Whether the subpath ends with a ``Z``.
    """

    start: Point
    items: list[SvgItem] = field(default_factory=list)
    closed: bool = False


def annotate(items: Sequence[SvgItem]) -> None:
    """
    Walk the items left to right and set their absolute positions.

    The current point is the target of the previous item; the subpath origin
    is updated by every move and kept by every close. A path that does not
    start with a move starts at ``(0, 0)``.
    """
    previous: SvgItem | None = None
    origin = Point(0, 0)
    for item in items:
        item.refresh(origin, previous)
        if item.key in ("M", "Z"):
            origin = item.target_location()
        previous = item


def resolve_path(items: Sequence[SvgItem]) -> list[ResolvedSubpath]:
    """
    Annotate ``items`` and partition them into subpaths.

    A move starts a new subpath. Drawing commands after a ``Z`` without an
    intervening move start another subpath at the closed subpath's start.
    """
    annotate(items)

    subpaths: list[ResolvedSubpath] = []
    current: ResolvedSubpath | None = None
    for item in items:
        if item.key == "M":
            current = ResolvedSubpath(start=item.target_location(), items=[item])
            subpaths.append(current)
            continue
        if current is None or current.closed:
            current = ResolvedSubpath(start=item.previous_point)
            subpaths.append(current)
        current.items.append(item)
        if item.key == "Z":
            current.closed = True
    return subpaths
