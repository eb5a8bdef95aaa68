# This file is part of svg-slim.
#
# This Source Code Form is subject to the terms of the Mozilla Public
# License, v. 2.0. If a copy of the MPL was not distributed with this
# file, You can obtain one at https://mozilla.org/MPL/2.0/.

from __future__ import annotations

from collections.abc import Sequence

from .geometry import Point, Subpath, perpendicular_distance


def _farthest(points: Sequence[Point], first: int, last: int) -> tuple[int, float]:
    """Index and distance of the interior point farthest from the chord."""
    a, b = points[first], points[last]
    index, distance = first, -1.0
    for i in range(first + 1, last):
        d = perpendicular_distance(points[i], a, b)
        if d > distance:
            index, distance = i, d
    return index, distance


def simplify_points(points: Sequence[Point], tolerance: float) -> list[Point]:
    """
    Douglas-Peucker reduction of a polyline.

    The interior point farthest from the line through the first and last
    point is kept if its perpendicular distance exceeds ``tolerance``, and
    both halves are reduced in turn; otherwise the whole range collapses to
    its endpoints. Ranges are processed from an explicit stack, so the input
    length does not bound the call depth.

    The endpoints are always kept, the result is never longer than the input,
    it only shrinks as ``tolerance`` grows, and simplifying it again with the
    same tolerance returns it unchanged.

    :raises ValueError: If ``tolerance`` is not positive.
    """
    if not tolerance > 0:
        raise ValueError(f"tolerance must be positive, got {tolerance}")

    count = len(points)
    if count <= 2:
        return list(points)

    keep = [False] * count
    keep[0] = keep[-1] = True

    stack = [(0, count - 1)]
    while stack:
        first, last = stack.pop()
        if last - first < 2:
            continue
        index, distance = _farthest(points, first, last)
        if distance > tolerance:
            keep[index] = True
            stack.append((index, last))
            stack.append((first, index))

    return [p for p, k in zip(points, keep) if k]


def simplify_subpath(sub: Subpath, tolerance: float) -> Subpath:
    """Simplify the points of a flattened subpath, keeping its closedness."""
    return Subpath(points=simplify_points(sub.points, tolerance), closed=sub.closed)
