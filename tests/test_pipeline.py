from collections.abc import Collection

import pytest

from svg_slim.diagnostics import Diagnostics, PathReport
from svg_slim.errors import CollaboratorError
from svg_slim.optimizer import NullOptimizer
from svg_slim.options import MinifyOptions
from svg_slim.pipeline import (
    SizeInfo,
    optimize_svg,
    process_document_paths,
    process_path_data,
)

SIMPLIFY = MinifyOptions(simplify_paths=True, simplify_tolerance=0.5)


class FailingOptimizer:
    def optimize(self, document: str, plugins: Collection[str]) -> str:
        raise CollaboratorError("backend unavailable")


class BrokenOptimizer:
    def optimize(self, document: str, plugins: Collection[str]) -> str:
        raise RuntimeError("unexpected")


def test_simplify_keeps_outlier() -> None:
    """A near-collinear point is dropped and the outlier survives."""
    report = PathReport(index=0)
    d = "M0,0 L1,0.01 L2,0 L3,5 L4,0"
    assert process_path_data(d, SIMPLIFY, report) == "M0 0L2 0 3 5 4 0"
    assert report.points_before == 5
    assert report.points_after == 4
    assert report.changed


def test_round_coordinates() -> None:
    """Coordinates are rounded half away from zero."""
    options = MinifyOptions(coordinate_precision=0)
    assert process_path_data("M1.2345,6.789 L2.5,3.0001", options) == "M1 7L3 3"


def test_full_precision() -> None:
    """Without rounding the values are kept as they are."""
    options = MinifyOptions(round_coordinates=False)
    assert process_path_data("M1.23456 2 L3 4", options) == "M1.23456 2L3 4"


def test_relative_commands_kept() -> None:
    """Without simplification the instructions keep their kind and relativity."""
    d = "m0 0 l1.004 1 l2 2 c1 1 2 2 3 3"
    assert process_path_data(d) == "m0 0l1 1 2 2c1 1 2 2 3 3"


def test_arc_flags() -> None:
    """Arc flags are written compactly unless disabled."""
    d = "M0 0 A60 60 0 0 1 100 100"
    assert process_path_data(d) == "M0 0A60 60 0 01100 100"
    options = MinifyOptions(remove_space_after_flags=False)
    assert process_path_data(d, options) == "M0 0A60 60 0 0 1 100 100"


def test_simplify_flattens_curves() -> None:
    """Curves become lines to their endpoints when simplifying."""
    assert process_path_data("M0 0 C1 1 2 1 3 0", SIMPLIFY) == "M0 0L3 0"


def test_simplify_closed_subpath() -> None:
    """A closed subpath stays closed."""
    d = "M0 0 L10 0 L10 10 L0 10 Z"
    assert process_path_data(d, SIMPLIFY) == "M0 0L10 0 10 10 0 10Z"


def test_malformed_path_unchanged() -> None:
    """A path with a malformed run is returned as it was."""
    report = PathReport(index=0)
    assert process_path_data("M1,1 Q2,2", report=report) == "M1,1 Q2,2"
    assert report.instructions_parsed == 1
    assert report.instructions_dropped == 1
    assert report.errors
    assert not report.changed


def test_non_finite_values_unchanged() -> None:
    """Values that overflow a float leave the path data as it was."""
    d = "M0 0 L1e999 0"
    report = PathReport(index=0)
    options = MinifyOptions(round_coordinates=False)
    assert process_path_data(d, options, report) == d
    assert report.instructions_dropped == 1
    assert report.errors
    assert not report.changed
    assert process_path_data(d) == d


def test_empty_path_data() -> None:
    assert process_path_data("") == ""
    assert process_path_data("  ") == "  "


def test_document_paths_in_order() -> None:
    """Every ``d`` attribute is processed, other attributes are not."""
    document = (
        "<svg><path id='d' d='M0.004 0 L1 1'/>"
        '<g><path data-d="x" d="M 2 2 L 3 3"/></g>'
        '<path d="M1,1 Q2,2"/></svg>'
    )
    diagnostics = Diagnostics()
    result = process_document_paths(document, MinifyOptions(), diagnostics)
    assert result == (
        "<svg><path id='d' d='M0 0L1 1'/>"
        '<g><path data-d="x" d="M2 2L3 3"/></g>'
        '<path d="M1,1 Q2,2"/></svg>'
    )
    assert [r.index for r in diagnostics.reports] == [0, 1, 2]
    assert diagnostics.paths == 3
    assert diagnostics.failed_paths == 1


def test_optimize_simplify() -> None:
    """Simplification through the whole pipeline."""
    document = '<svg><path d="M0,0 L1,0.01 L2,0 L3,5 L4,0"/></svg>'
    diagnostics = Diagnostics()
    result = optimize_svg(
        document, SIMPLIFY, optimizer=NullOptimizer(), diagnostics=diagnostics
    )
    assert result.data == '<svg><path d="M0 0L2 0 3 5 4 0"/></svg>'
    assert diagnostics.points_removed == 1


def test_optimize_round() -> None:
    """Rounding shrinks the document."""
    document = '<svg><path d="M1.2345,6.789 L2.5,3.0001"/></svg>'
    options = MinifyOptions(coordinate_precision=0)
    result = optimize_svg(document, options, optimizer=NullOptimizer())
    assert result.data == '<svg><path d="M1 7L3 3"/></svg>'
    assert result.size.original == len(document)
    assert result.size.optimized < result.size.original
    assert result.size.reduction >= 0


def test_optimize_malformed_path() -> None:
    """A malformed path is kept and does not raise."""
    document = '<svg><path d="M1,1 Q2,2"/></svg>'
    result = optimize_svg(document, optimizer=NullOptimizer())
    assert 'd="M1,1 Q2,2"' in result.data


@pytest.mark.parametrize("document", ["", None, 42])
def test_optimize_empty(document: object) -> None:
    """Empty or non-string input gives an empty result."""
    result = optimize_svg(document)  # type: ignore[arg-type]
    assert result.as_dict() == {
        "data": "",
        "size": {"original": 0, "optimized": 0, "reduction": 0},
    }


def test_optimizer_failure() -> None:
    """A failing optimizer leaves the rewritten document."""
    document = '<svg>\n  <!-- c -->\n  <path d="M 0 0 L 1 1"/>\n</svg>'
    diagnostics = Diagnostics()
    result = optimize_svg(
        document, optimizer=FailingOptimizer(), diagnostics=diagnostics
    )
    assert result.data == '<svg><path d="M0 0L1 1"/></svg>'
    assert diagnostics.optimizer_error == "backend unavailable"


def test_total_failure() -> None:
    """An unexpected error returns the original document."""
    document = '<svg><path d="M 0 0 L 1 1"/></svg>'
    result = optimize_svg(document, optimizer=BrokenOptimizer())
    assert result.data == document
    assert result.size == SizeInfo(len(document), len(document), 0)


def test_optimize_with_scour() -> None:
    """The default optimizer produces a smaller valid document."""
    document = (
        '<?xml version="1.0"?>\n<svg xmlns="http://www.w3.org/2000/svg" '
        'viewBox="0 0 10 10">\n  <title>t</title>\n'
        '  <path d="M 0.0001 0 L 10.123456 10.98765"/>\n</svg>\n'
    )
    result = optimize_svg(document)
    assert result.data.startswith("<svg")
    assert "<title" not in result.data
    assert "<path" in result.data
    assert result.size.optimized < result.size.original


def test_size_info() -> None:
    """Sizes are UTF-8 bytes and the reduction is rounded and never negative."""
    assert SizeInfo.measure("a" * 8, "a") == SizeInfo(8, 1, 88)
    assert SizeInfo.measure("aa", "aaa") == SizeInfo(2, 3, 0)
    assert SizeInfo.measure("", "") == SizeInfo(0, 0, 0)
    assert SizeInfo.measure("é", "") == SizeInfo(2, 0, 100)
