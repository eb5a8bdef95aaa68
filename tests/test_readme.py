# This file is part of svg-slim.
#
# This Source Code Form is subject to the terms of the Mozilla Public
# License, v. 2.0. If a copy of the MPL was not distributed with this
# file, You can obtain one at https://mozilla.org/MPL/2.0/.

from typing import Final

from svg_slim import MinifyOptions, optimize_svg, process_path_data
from svg_slim.optimizer import NullOptimizer

base_svg: Final = (
    '<svg xmlns="http://www.w3.org/2000/svg" viewBox="0 0 10 10">'
    '<!-- icon --><path d="M 1.004 2 L 3.5 4.25 L 5 6"/></svg>'
)


def test_optimize_svg() -> None:
    """Document minification without the scour pass."""

    result = optimize_svg(base_svg, optimizer=NullOptimizer())
    assert result.data == (
        '<svg xmlns="http://www.w3.org/2000/svg" viewBox="0 0 10 10">'
        '<path d="M1 2L3.5 4.25 5 6"/></svg>'
    )
    assert result.size.as_dict() == {
        "original": 117,
        "optimized": 95,
        "reduction": 19,
    }


def test_process_path_data() -> None:
    """Simplification of a single path-data value."""

    options = MinifyOptions(simplify_paths=True, simplify_tolerance=0.5)
    d = "M0,0 L1,0.01 L2,0 L3,5 L4,0"
    assert process_path_data(d, options) == "M0 0L2 0 3 5 4 0"
