from __future__ import annotations

import pytest

from svg_slim.errors import ArityError, ParseError, PathError
from svg_slim.path_parser import PathParser


def test_move_to() -> None:
    """``m`` command parsing and validation."""
    with pytest.raises(ArityError):
        PathParser.parse("m 10")
    assert PathParser.parse("m 10 20") == [["m", "10", "20"]]


def test_exponents() -> None:
    """Exponent notation is supported."""
    assert PathParser.parse("m 1e3 2e-3") == [["m", "1e3", "2e-3"]]
    assert PathParser.parse("M1E+2.5") == [["M", "1E+2", ".5"]]


def test_no_whitespace_between_negative_sign() -> None:
    """Allow negative sign to follow a number without whitespace."""
    assert PathParser.parse("M46-86") == [["M", "46", "-86"]]


def test_second_decimal_point_starts_number() -> None:
    """A second ``.`` starts a new number."""
    assert PathParser.parse("M0.5.5") == [["M", "0.5", ".5"]]


def test_comma_separators() -> None:
    """Commas with optional whitespace separate numbers."""
    assert PathParser.parse("M1,2 , 3 ,4") == [["M", "1", "2"], ["L", "3", "4"]]


def test_overloaded_move_to() -> None:
    """Implicit ``l`` following an ``m`` are expanded correctly."""
    assert PathParser.parse("m 12.5,52 39,0 0,-40 -39,0 z") == [
        ["m", "12.5", "52"],
        ["l", "39", "0"],
        ["l", "0", "-40"],
        ["l", "-39", "0"],
        ["z"],
    ]


def test_initial_move_missing() -> None:
    """A path without leading move is still parsed."""
    assert PathParser.parse("l 1 1") == [["l", "1", "1"]]


def test_curve_to() -> None:
    """``c`` command parsing and implicit repetition of command."""
    a = PathParser.parse("m0 0c 50,0 50,100 100,100 50,0 50,-100 100,-100")
    b = PathParser.parse("m0 0c 50,0 50,100 100,100 c 50,0 50,-100 100,-100")
    assert a == [
        ["m", "0", "0"],
        ["c", "50", "0", "50", "100", "100", "100"],
        ["c", "50", "0", "50", "-100", "100", "-100"],
    ]
    assert a == b


def test_line_to() -> None:
    """``l`` command parsing and validation."""
    with pytest.raises(ArityError):
        PathParser.parse("m0 0l 10 10 0")

    assert PathParser.parse("m0 0l 10,10") == [["m", "0", "0"], ["l", "10", "10"]]
    assert PathParser.parse("m0 0l10 10 10 10") == [
        ["m", "0", "0"],
        ["l", "10", "10"],
        ["l", "10", "10"],
    ]


def test_horizontal_and_vertical_to() -> None:
    """``h`` and ``v`` take one parameter each."""
    assert PathParser.parse("m0 0 h 10.5 v-2 3") == [
        ["m", "0", "0"],
        ["h", "10.5"],
        ["v", "-2"],
        ["v", "3"],
    ]


def test_arc_to() -> None:
    """``A`` command parsing."""
    assert PathParser.parse("M0 0A 30 50 0 0 1 162.55 162.45") == [
        ["M", "0", "0"],
        ["A", "30", "50", "0", "0", "1", "162.55", "162.45"],
    ]


def test_arc_flags_without_separators() -> None:
    """Arc flags are single characters and need no separator."""
    assert PathParser.parse("M0 0A60 60 0 01100 100") == [
        ["M", "0", "0"],
        ["A", "60", "60", "0", "0", "1", "100", "100"],
    ]
    with pytest.raises(ParseError):
        PathParser.parse("M0 0A60 60 0 2 1 100 100")


def test_close_path_takes_no_parameters() -> None:
    """Parameters after ``z`` are an arity error."""
    assert PathParser.parse("M0 0Zz") == [["M", "0", "0"], ["Z"], ["z"]]
    with pytest.raises(ArityError):
        PathParser.parse("M0 0 Z 1")


def test_unknown_command() -> None:
    """Unknown command letters raise in strict mode."""
    with pytest.raises(ParseError, match="Unknown command"):
        PathParser.parse("M0 0 X 1 1")


def test_garbage_parameters() -> None:
    """Unparsable parameter text raises in strict mode."""
    with pytest.raises(ParseError):
        PathParser.parse("M0 0 L1 #")


def test_lenient_drops_malformed_run() -> None:
    """With an error list, only the malformed run is dropped."""
    errors: list[PathError] = []
    assert PathParser.parse("M1,1 Q2,2 L3 3", errors) == [
        ["M", "1", "1"],
        ["L", "3", "3"],
    ]
    assert len(errors) == 1
    assert isinstance(errors[0], ArityError)
    assert errors[0].run == "Q2,2 "
    assert errors[0].offset == 5


def test_lenient_unknown_and_leading_text() -> None:
    """Leading text and unknown letters are recorded as parse errors."""
    errors: list[PathError] = []
    assert PathParser.parse("12 M0 0 X 1 L2 2", errors) == [
        ["M", "0", "0"],
        ["L", "2", "2"],
    ]
    assert [type(e) for e in errors] == [ParseError, ParseError]


def test_errors_are_value_errors() -> None:
    """Path errors can be caught as :class:`ValueError`."""
    with pytest.raises(ValueError):
        PathParser.parse("M 1")
