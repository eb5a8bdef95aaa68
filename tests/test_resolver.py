from svg_slim.geometry import Point
from svg_slim.resolver import resolve_path
from svg_slim.svg import SvgPath


def test_split_at_moves() -> None:
    """Each move starts a subpath."""
    subs = resolve_path(SvgPath("M0 0 L1 1 M5 5 l1 1 1 1").path)
    assert [s.start for s in subs] == [Point(0, 0), Point(5, 5)]
    assert [len(s.items) for s in subs] == [2, 3]
    assert subs[1].items[-1].target_location() == Point(7, 7)
    assert not any(s.closed for s in subs)


def test_drawing_after_close() -> None:
    """Drawing after a close without a move starts at the closed subpath's start."""
    subs = resolve_path(SvgPath("m1 1 l1 0 z l0 1 M5 5 L6 6").path)
    assert len(subs) == 3
    assert subs[0].closed
    assert subs[1].start == Point(1, 1)
    assert subs[1].items[0].target_location() == Point(1, 2)
    assert subs[2].start == Point(5, 5)


def test_missing_initial_move() -> None:
    """A path without leading move resolves from the origin."""
    (sub,) = resolve_path(SvgPath("l1 1 2 2").path)
    assert sub.start == Point(0, 0)
    assert [it.target_location() for it in sub.items] == [Point(1, 1), Point(3, 3)]


def test_empty_path() -> None:
    """An empty program has no subpaths."""
    assert resolve_path(SvgPath("").path) == []
