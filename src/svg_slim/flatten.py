# This file is part of svg-slim.
#
# This Source Code Form is subject to the terms of the Mozilla Public
# License, v. 2.0. If a copy of the MPL was not distributed with this
# file, You can obtain one at https://mozilla.org/MPL/2.0/.

from __future__ import annotations

from .geometry import (
    ParametricEllipticalArc,
    Point,
    Subpath,
    cubic_point,
    quadratic_point,
)
from .resolver import ResolvedSubpath
from .svg import (
    CurveTo,
    EllipticalArcTo,
    QuadraticBezierCurveTo,
    SmoothCurveTo,
    SmoothQuadraticBezierCurveTo,
    SvgItem,
)


def _sample_item(item: SvgItem, segments: int) -> list[Point]:
    """Points approximating one curve item, ending at its exact target."""
    p0, target = item.previous_point, item.target_location()
    steps = [k / segments for k in range(1, segments)]

    if isinstance(item, (CurveTo, SmoothCurveTo)):
        c1, c2 = item.absolute_control_points
        points = [cubic_point(p0, c1, c2, target, t) for t in steps]
    elif isinstance(item, (QuadraticBezierCurveTo, SmoothQuadraticBezierCurveTo)):
        (c,) = item.absolute_control_points
        points = [quadratic_point(p0, c, target, t) for t in steps]
    elif isinstance(item, EllipticalArcTo):
        rx, ry = item.radii
        arc = ParametricEllipticalArc.from_endpoints(
            p0, target, rx, ry, item.rotation, item.large_arc, item.sweep
        )
        points = arc.sample(segments)[:-1] if arc is not None else []
    else:
        points = []

    return [*points, target]


def flatten_subpath(resolved: ResolvedSubpath, curve_segments: int = 1) -> Subpath:
    """
    Flatten a resolved subpath to a polyline.

    Lines contribute their target point. Curves and arcs contribute their
    target point only when ``curve_segments`` is ``1``; otherwise they are
    sampled at ``curve_segments`` equal steps. A ``Z`` appends a copy of the
    first point. Curvature is discarded either way.
    """
    if curve_segments < 1:
        raise ValueError(f"curve_segments must be at least 1, got {curve_segments}")

    sub = Subpath(points=[resolved.start], closed=resolved.closed)
    for item in resolved.items:
        match item.key:
            case "M":
                continue
            case "Z":
                sub.points.append(resolved.start)
            case "C" | "S" | "Q" | "T" | "A" if curve_segments > 1:
                sub.points.extend(_sample_item(item, curve_segments))
            case _:
                sub.points.append(item.target_location())
    return sub


def flatten_path(
    resolved: list[ResolvedSubpath], curve_segments: int = 1
) -> list[Subpath]:
    """Flatten every subpath of a resolved path."""
    return [flatten_subpath(sub, curve_segments) for sub in resolved]
