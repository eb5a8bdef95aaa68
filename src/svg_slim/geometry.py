# This file is part of svg-slim.
#
# This Source Code Form is subject to the terms of the Mozilla Public
# License, v. 2.0. If a copy of the MPL was not distributed with this
# file, You can obtain one at https://mozilla.org/MPL/2.0/.

from __future__ import annotations

import math
from dataclasses import dataclass, field

from .math import (
    FLOAT_PRECISION,
    Expr,
    Precision,
    as_bool,
    evalf,
    gt,
    is_zero,
    lt,
    to_rational,
)

# ------------------------------------------------------------------------------
# Numeric primitives
# ------------------------------------------------------------------------------


@dataclass(frozen=True)
class Point:
    """2D point with float coordinates, in absolute document space."""

    x: float
    y: float

    def reflect(self, center: Point) -> Point:
        """Point reflection through ``center``: :math:`2c - p`."""
        return Point(2 * center.x - self.x, 2 * center.y - self.y)


@dataclass
class Subpath:
    """
    Flattened subpath: the points of one contiguous run of instructions.

    :ivar points: At least one point; a closed subpath repeats its first point
                  at the end.
    :ivar closed: Whether the run ended with a ``Z``.
    """

    points: list[Point] = field(default_factory=list)
    closed: bool = False


def perpendicular_distance(p: Point, a: Point, b: Point) -> float:
    r"""
    Distance of ``p`` to the infinite line through ``a`` and ``b``.

    ``p`` is projected onto the line,

    .. math::

        t = \frac{(p - a) ⋅ (b - a)}{‖b - a‖^2}, \quad p' = a + t\,(b - a),

    and :math:`‖p - p'‖_2` is returned. Projections outside :math:`[a, b]`
    are not clamped. For :math:`a = b` the distance to ``a`` is returned.
    """
    dx, dy = b.x - a.x, b.y - a.y
    length_sq = dx * dx + dy * dy
    if length_sq == 0:
        return math.hypot(p.x - a.x, p.y - a.y)
    t = ((p.x - a.x) * dx + (p.y - a.y) * dy) / length_sq
    return math.hypot(p.x - (a.x + t * dx), p.y - (a.y + t * dy))


def cubic_point(p0: Point, p1: Point, p2: Point, p3: Point, t: float) -> Point:
    """Evaluate a cubic Bézier curve at ``t`` (Bernstein form)."""
    s = 1 - t
    a, b, c, d = s * s * s, 3 * s * s * t, 3 * s * t * t, t * t * t
    return Point(
        a * p0.x + b * p1.x + c * p2.x + d * p3.x,
        a * p0.y + b * p1.y + c * p2.y + d * p3.y,
    )


def quadratic_point(p0: Point, p1: Point, p2: Point, t: float) -> Point:
    """Evaluate a quadratic Bézier curve at ``t`` (Bernstein form)."""
    s = 1 - t
    a, b, c = s * s, 2 * s * t, t * t
    return Point(a * p0.x + b * p1.x + c * p2.x, a * p0.y + b * p1.y + c * p2.y)


# ------------------------------------------------------------------------------
# SymPy helpers
# ------------------------------------------------------------------------------


def _rotation_matrix(phi: Expr) -> Mat2:
    r"""
    Rotation matrix for angle :math:`φ` in degrees.

    Uses

    .. math::

        R(φ) = \begin{pmatrix}
            \cos φ & -\sin φ \\
            \sin φ &  \cos φ
        \end{pmatrix}.
    """
    import sympy as sp

    rad: sp.Expr = sp.rad(phi)
    c, s = sp.cos(rad), sp.sin(rad)
    return Mat2(c, -s, s, c)


@dataclass
class Vec2:
    """
    2D vector with SymPy coordinates.

    Supports exact arithmetic and simple linear operations.
    """

    x: Expr
    y: Expr

    @staticmethod
    def from_point(p: Point) -> Vec2:
        """
        Construct a :class:`Vec2` from a :class:`Point`.

        Coordinates are converted to SymPy rationals via :func:`to_rational`.
        """
        return Vec2(to_rational(p.x), to_rational(p.y))

    def point(self, *, n: Precision = FLOAT_PRECISION) -> Point:
        """Evaluate numerically and convert to a float :class:`Point`."""
        return Point(float(evalf(self.x, n=n)), float(evalf(self.y, n=n)))

    def evalf(self, *, n: Precision | None = None) -> Vec2:
        """
        Evaluate coordinates numerically.

        :param n: Optional precision passed to :func:`evalf`.
        """
        return Vec2(evalf(self.x, n=n), evalf(self.y, n=n))

    def __add__(self, other: Vec2) -> Vec2:
        """Vector addition :math:`v + w`."""
        return Vec2(self.x + other.x, self.y + other.y)

    def __sub__(self, other: Vec2) -> Vec2:
        """Vector subtraction :math:`v - w`."""
        return Vec2(self.x - other.x, self.y - other.y)

    def __truediv__(self, other: Expr) -> Vec2:
        """Scalar division :math:`v / λ`."""
        return Vec2(self.x / other, self.y / other)


@dataclass
class Mat2:
    r"""
    :math:`2×2` matrix

    .. math::

        M =
        \begin{pmatrix}
            a & b \\
            c & d
        \end{pmatrix}

    acting on :class:`Vec2` by standard matrix-vector multiplication.
    """

    a: Expr
    b: Expr
    c: Expr
    d: Expr

    def __matmul__(self, v: Vec2) -> Vec2:
        """Matrix-vector product ``M @ v``."""
        return Vec2(self.a * v.x + self.b * v.y, self.c * v.x + self.d * v.y)


# ------------------------------------------------------------------------------
# Elliptical arc
# ------------------------------------------------------------------------------


@dataclass
class ParametricEllipticalArc:
    r"""
    Elliptical arc in parametric form.

    The underlying full ellipse is

    .. math::

        E(θ) = R(φ) ⋅
        \begin{pmatrix}
            r_x \cos θ \\
            r_y \sin θ
        \end{pmatrix}
        +
        \begin{pmatrix}
            c_x \\
            c_y
        \end{pmatrix}

    where :math:`θ` and :math:`φ` are in degrees and :math:`(c_x, c_y)` is the center.

    This arc covers the interval :math:`[θ_0, θ_0 + Δθ]`.

    :ivar c: Center :math:`(c_x, c_y)`.
    :ivar r: Radii :math:`(r_x, r_y)`.
    :ivar theta0: Start angle :math:`θ_0` in degrees.
    :ivar dtheta: Sweep :math:`Δθ` in degrees (signed).
    :ivar phi: Rotation angle :math:`φ` in degrees.
    """

    c: Vec2
    r: Vec2
    theta0: Expr
    dtheta: Expr
    phi: Expr

    @staticmethod
    def from_endpoints(
        p0: Point,
        p1: Point,
        rx: float,
        ry: float,
        phi: float,
        large_arc: bool,
        sweep: bool,
        *,
        n: Precision = FLOAT_PRECISION,
    ) -> ParametricEllipticalArc | None:
        r"""
        Convert the endpoint parameterisation of an SVG ``A`` command.

        Follows the conversion of the SVG implementation notes (F.6.5),
        including the scaling of radii that are too small to span the
        endpoints (F.6.6). With

        .. math::

            (x_1', y_1') = R(-φ) ⋅ \tfrac12 (p_0 - p_1)

        the center is

        .. math::

            c = R(φ) ⋅ ± \sqrt{\frac{r_x^2 r_y^2 - r_x^2 y_1'^2 - r_y^2 x_1'^2}
            {r_x^2 y_1'^2 + r_y^2 x_1'^2}}
            \begin{pmatrix} r_x y_1' / r_y \\ -r_y x_1' / r_x \end{pmatrix}
            + \tfrac12 (p_0 + p_1),

        with the positive sign iff ``large_arc != sweep``.

        :return: The arc, or ``None`` for a degenerate arc (a zero radius or
                 identical endpoints), which renders as a straight line.
        """
        import sympy as sp

        a, b = Vec2.from_point(p0), Vec2.from_point(p1)
        rx_, ry_ = sp.Abs(to_rational(rx)), sp.Abs(to_rational(ry))
        if is_zero(rx_, n=n) or is_zero(ry_, n=n):
            return None
        if is_zero(a.x - b.x, n=n) and is_zero(a.y - b.y, n=n):
            return None

        phi_ = to_rational(phi)
        prime = (_rotation_matrix(-phi_) @ ((a - b) / 2)).evalf(n=n)

        lam = evalf(prime.x**2 / rx_**2 + prime.y**2 / ry_**2, n=n)
        if as_bool(gt(lam, sp.S.One, n=n)):
            scale = sp.sqrt(lam)
            rx_, ry_ = rx_ * scale, ry_ * scale

        num = rx_**2 * ry_**2 - rx_**2 * prime.y**2 - ry_**2 * prime.x**2
        den = rx_**2 * prime.y**2 + ry_**2 * prime.x**2
        ratio = evalf(num / den, n=n)
        if as_bool(lt(ratio, sp.S.Zero)):
            ratio = sp.S.Zero
        coef = sp.sqrt(ratio)
        if large_arc == sweep:
            coef = -coef

        c_prime = Vec2(coef * rx_ * prime.y / ry_, -coef * ry_ * prime.x / rx_)
        center = (_rotation_matrix(phi_) @ c_prime + (a + b) / 2).evalf(n=n)

        u = Vec2((prime.x - c_prime.x) / rx_, (prime.y - c_prime.y) / ry_)
        v = Vec2((-prime.x - c_prime.x) / rx_, (-prime.y - c_prime.y) / ry_)
        theta0 = evalf(sp.deg(sp.atan2(u.y, u.x)), n=n)
        dtheta = evalf(sp.deg(sp.atan2(v.y, v.x) - sp.atan2(u.y, u.x)), n=n) % 360
        if not sweep and as_bool(gt(dtheta, sp.S.Zero, n=n)):
            dtheta -= 360

        return ParametricEllipticalArc(
            c=center,
            r=Vec2(evalf(rx_, n=n), evalf(ry_, n=n)),
            theta0=theta0,
            dtheta=dtheta,
            phi=phi_,
        )

    def point(self, theta: Expr) -> Vec2:
        """Point :math:`E(θ)` of the underlying ellipse, ``theta`` in degrees."""
        import sympy as sp

        rtheta = sp.rad(theta)
        xy = Vec2(self.r.x * sp.cos(rtheta), self.r.y * sp.sin(rtheta))
        return _rotation_matrix(self.phi) @ xy + self.c

    def sample(self, segments: int, *, n: Precision = FLOAT_PRECISION) -> list[Point]:
        """
        Points at ``segments`` equal angle steps after the start.

        The last point is the end point :math:`E(θ_0 + Δθ)` of the arc.
        """
        return [
            self.point(self.theta0 + self.dtheta * k / segments).point(n=n)
            for k in range(1, segments + 1)
        ]
