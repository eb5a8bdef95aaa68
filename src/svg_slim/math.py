# This file is part of svg-slim.
#
# This Source Code Form is subject to the terms of the Mozilla Public
# License, v. 2.0. If a copy of the MPL was not distributed with this
# file, You can obtain one at https://mozilla.org/MPL/2.0/.

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, TypeAlias

if TYPE_CHECKING:
    import sympy as sp

Number = int | float | str

Expr: TypeAlias = "sp.Expr"
Boolean: TypeAlias = "sp.logic.boolalg.Boolean"


@dataclass(frozen=True)
class Precision:
    """
    Control numerical precision for mixed symbolic/numeric operations.

    ``baseline`` defines the primary target precision, while ``additional``
    can be used to carry extra guard digits during intermediate computations.

    :ivar baseline: Baseline number of significant digits.
    :ivar additional: Additional guard digits to be used internally.
    """

    baseline: int
    additional: int

    @property
    def full(self) -> int:
        """
        Full number of significant digits to use.

        :return: ``baseline + additional``.
        """
        return self.baseline + self.additional


FLOAT_PRECISION = Precision(15, 5)
"""Precision matching the coordinates of a parsed path (IEEE double)."""


def to_rational(x: Number) -> Expr:
    """
    Convert a number to a SymPy :class:`sympy.Rational`.

    Floats are converted through their shortest decimal representation, so
    ``0.1`` becomes exactly ``1/10``.
    """
    import sympy as sp

    return sp.Rational(repr(x) if isinstance(x, float) else str(x))


def as_bool(r: Boolean) -> bool:
    """
    Coerce a SymPy Boolean to builtin :class:`bool`.

    :raises ValueError: If ``r`` cannot be simplified to a definite Boolean.
    """
    import sympy as sp

    r = sp.simplify(r)
    if isinstance(r, sp.logic.boolalg.BooleanTrue):
        return True
    if isinstance(r, sp.logic.boolalg.BooleanFalse):
        return False
    raise ValueError(f"Cannot be evaluated to a Boolean: {r}")


def lt(a: Expr, b: Expr, *, n: Precision | None = None) -> Boolean:
    """
    Construct an (optionally relaxed) strict inequality :math:`a < b`.

    If ``n`` is ``None``, returns :class:`sympy.StrictLessThan(a, b)`.
    Otherwise compares ``a`` with :math:`b - 10^{-\\texttt{baseline}}`, so that
    values equal up to the precision are not reported as smaller.
    """
    import sympy as sp

    b = b - sp.Rational(1, 10**n.baseline) if n is not None else b
    return sp.StrictLessThan(a, b)


def gt(a: Expr, b: Expr, *, n: Precision | None = None) -> Boolean:
    """
    Construct an (optionally relaxed) strict inequality :math:`a > b`.

    See :func:`lt` for details.
    """
    return lt(b, a, n=n)


def is_zero(expr: Expr, *, n: Precision | None = None) -> bool:
    """
    Test whether an expression is zero.

    If ``n`` is ``None``, use exact symbolic comparison ``expr == 0``.
    Otherwise, evaluate numerically to ``n.full`` significant digits and
    test :math:`|\\mathtt{expr}| ≤ 10^{-\\texttt{baseline}}`.

    :return: ``True`` if ``expr`` is considered zero, otherwise ``False``.
    :raises ValueError: If the exact symbolic comparison cannot be decided.
    """
    import sympy as sp

    if n is None:
        eq = sp.Eq(expr, 0)
        assert isinstance(eq, sp.logic.boolalg.Boolean)
        return as_bool(eq)
    return bool(abs(expr.evalf(n=n.full)) <= sp.Float(10) ** (-n.baseline))


def evalf(expr: Expr, *, n: Precision | None) -> Expr:
    """
    Optionally evaluate an expression numerically.

    If ``n`` is ``None``, return ``expr`` unchanged.
    Otherwise, return ``expr.evalf(n=n.full)``; if the imaginary part is at most
    :math:`10^{-\\texttt{baseline}}`, the real part is returned.
    """
    import sympy as sp

    if n is None:
        return expr
    res = expr.evalf(n=n.full)
    return sp.re(res) if abs(sp.im(res)) <= 10 ** (-n.baseline) else res
