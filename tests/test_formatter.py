from decimal import Decimal

from svg_slim.formatter import (
    format_number,
    round_decimal,
    round_half_away,
    serialize_subpaths,
)
from svg_slim.geometry import Point, Subpath


def test_round_half_away() -> None:
    """Ties are rounded away from zero on the shortest decimal representation."""
    assert round_half_away(2.675, 2) == 2.68
    assert round_half_away(0.125, 2) == 0.13
    assert round_half_away(2.5, 0) == 3
    assert round_half_away(-2.5, 0) == -3
    assert round_half_away(1.2345, 3) == 1.235
    assert round_half_away(1e20, 2) == 1e20


def test_round_decimal() -> None:
    """Large magnitudes do not overflow the decimal context."""
    value = Decimal("123456789012345678901234567890.5")
    assert round_decimal(value, 0) == Decimal("123456789012345678901234567891")


def test_format_number() -> None:
    """Numbers are written minimally."""
    assert format_number(1.0) == "1"
    assert format_number(10.0) == "10"
    assert format_number(1.50) == "1.5"
    assert format_number(-0.0) == "0"
    assert format_number(12.3456, 2) == "12.35"
    assert format_number(100.0, 0) == "100"
    assert format_number(-0.001, 2) == "0"
    assert format_number(3.0001, 2) == "3"


def test_format_number_leading_zero() -> None:
    """The leading zero is only dropped on request."""
    assert format_number(0.5) == "0.5"
    assert format_number(0.5, strip_leading_zero=True) == ".5"
    assert format_number(-0.25, 2, strip_leading_zero=True) == "-.25"
    assert format_number(10.5, strip_leading_zero=True) == "10.5"


def test_format_number_idempotent() -> None:
    """Formatting an already formatted value at the same precision is stable."""
    for value in (0.004999, 1.005, -7.125, 3.14159, 123.456789, -0.5):
        for precision in range(0, 5):
            once = format_number(value, precision)
            assert format_number(float(once), precision) == once


def test_serialize_subpaths() -> None:
    """Subpaths become merged absolute lines, closed ones end in ``Z``."""
    subs = [
        Subpath([Point(0, 0), Point(1.004, 0), Point(1, 1), Point(0, 0)], closed=True),
        Subpath([Point(5, 5), Point(6.5, 6), Point(7, 7)]),
    ]
    assert serialize_subpaths(subs, 2) == "M0 0L1 0 1 1ZM5 5L6.5 6 7 7"
    assert serialize_subpaths(subs, 0) == "M0 0L1 0 1 1ZM5 5L7 6 7 7"
