# This file is part of svg-slim.
#
# This Source Code Form is subject to the terms of the Mozilla Public
# License, v. 2.0. If a copy of the MPL was not distributed with this
# file, You can obtain one at https://mozilla.org/MPL/2.0/.

"""
Orchestration of the path engine and the document-level stages.

:func:`optimize_svg` is the entry point: every ``d`` attribute is run through
:func:`process_path_data`, then the structural rewriter and the generic
optimizer are applied to the whole document. No state is kept between calls.
"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass
from typing import Any, Final, Self

from .diagnostics import Diagnostics, PathReport
from .errors import CollaboratorError, EmptyInputError, PathError
from .flatten import flatten_path
from .formatter import round_half_away, serialize_subpaths
from .optimizer import Optimizer, ScourOptimizer, plugins_for
from .options import MinifyOptions
from .resolver import resolve_path
from .rewrite import normalize_whitespace, remove_xml_declaration, rewrite_document
from .simplify import simplify_subpath
from .svg import SvgPath

logger = logging.getLogger(__name__)

_tag: Final = re.compile(r"<[^!?/][^>]*>")
_d_attribute: Final = re.compile(r"(?<=\s)(d\s*=\s*)([\"'])(.*?)\2", re.DOTALL)


@dataclass(frozen=True)
class SizeInfo:
    """
    Byte sizes of a document before and after optimization.

    :ivar original: UTF-8 size of the input.
    :ivar optimized: UTF-8 size of the output.
    :ivar reduction: Saved share in whole percent, never negative.
    """

    original: int
    optimized: int
    reduction: int

    @classmethod
    def measure(cls, original: str, optimized: str) -> Self:
        before = len(original.encode("utf-8"))
        after = len(optimized.encode("utf-8"))
        if before == 0:
            return cls(before, after, 0)
        reduction = int(round_half_away((1 - after / before) * 100, 0))
        return cls(before, after, max(reduction, 0))

    def as_dict(self) -> dict[str, int]:
        return {
            "original": self.original,
            "optimized": self.optimized,
            "reduction": self.reduction,
        }


@dataclass(frozen=True)
class OptimizeResult:
    """Optimized document text and its size statistics."""

    data: str
    size: SizeInfo

    def as_dict(self) -> dict[str, Any]:
        return {"data": self.data, "size": self.size.as_dict()}


def process_path_data(
    d: str, options: MinifyOptions | None = None, report: PathReport | None = None
) -> str:
    """
    Rewrite one path-data attribute value.

    The value is parsed, resolved, optionally flattened and simplified, and
    serialized in minified form, rounded to ``coordinate_precision`` if
    ``round_coordinates`` is set. If any run of the value is malformed, or a
    later stage fails, the original text is returned unchanged.

    :param report: Receives statistics and error messages when given.
    """
    options = options or MinifyOptions()
    report = report if report is not None else PathReport(index=0)

    errors: list[PathError] = []
    try:
        path = SvgPath(d, errors)
        report.instructions_parsed = len(path.path)
        report.instructions_dropped = len(errors)
        if errors:
            report.errors.extend(str(e) for e in errors)
            logger.warning(
                "Keeping path data unchanged, %d malformed run(s): %s",
                len(errors),
                errors[0],
            )
            return d
        if not path.path:
            return d

        precision = options.coordinate_precision if options.round_coordinates else None
        if options.simplify_paths:
            tolerance = options.simplification.tolerance
            subpaths = flatten_path(resolve_path(path.path), options.curve_segments)
            report.points_before = sum(len(s.points) for s in subpaths)
            subpaths = [simplify_subpath(s, tolerance) for s in subpaths]
            report.points_after = sum(len(s.points) for s in subpaths)
            result = serialize_subpaths(subpaths, precision)
        else:
            if precision is not None:
                path = path.rounded(precision)
            result = path.as_string(
                precision,
                minify=True,
                compact_flags=options.remove_space_after_flags,
            )
    except Exception as e:
        logger.warning("Keeping path data unchanged: %s", e)
        report.errors.append(str(e))
        return d

    report.changed = result != d
    logger.debug(
        "Path %d: %d instructions, %d -> %d points",
        report.index,
        report.instructions_parsed,
        report.points_before,
        report.points_after,
    )
    return result


def process_document_paths(
    document: str,
    options: MinifyOptions | None = None,
    diagnostics: Diagnostics | None = None,
) -> str:
    """Apply :func:`process_path_data` to every ``d`` attribute, in document order."""
    options = options or MinifyOptions()
    diagnostics = diagnostics if diagnostics is not None else Diagnostics()

    def rewrite_attribute(m: re.Match[str]) -> str:
        prefix, quote, value = m.groups()
        value = process_path_data(value, options, diagnostics.new_report())
        return f"{prefix}{quote}{value}{quote}"

    def rewrite_tag(m: re.Match[str]) -> str:
        return _d_attribute.sub(rewrite_attribute, m.group(0))

    return _tag.sub(rewrite_tag, document)


def _check_input(document: object) -> str:
    if not isinstance(document, str) or not document:
        raise EmptyInputError("Expected a non-empty SVG document")
    return document


def optimize_svg(
    document: str,
    options: MinifyOptions | None = None,
    *,
    optimizer: Optimizer | None = None,
    diagnostics: Diagnostics | None = None,
) -> OptimizeResult:
    """
    Minify an SVG document.

    :param document: The document text. Empty or non-string input yields an
        empty result with zero sizes.
    :param options: Defaults to :class:`MinifyOptions()`.
    :param optimizer: Generic optimizer stage, :class:`ScourOptimizer` by
        default. If it fails, the document is kept as it was before the stage.
    :param diagnostics: Receives one :class:`PathReport` per ``d`` attribute.
    :return: The optimized text and its sizes. If processing fails as a whole,
        the original text with a reduction of ``0``.
    """
    try:
        document = _check_input(document)
    except EmptyInputError as e:
        logger.debug("%s", e)
        return OptimizeResult("", SizeInfo(0, 0, 0))

    options = options or MinifyOptions()
    optimizer = optimizer if optimizer is not None else ScourOptimizer()

    try:
        text = process_document_paths(document, options, diagnostics)
        text = rewrite_document(text, options)
        try:
            text = optimizer.optimize(text, plugins_for(options))
        except CollaboratorError as e:
            logger.warning("Optimizer failed, keeping the rewritten document: %s", e)
            if diagnostics is not None:
                diagnostics.optimizer_error = str(e)
        text = normalize_whitespace(remove_xml_declaration(text))
    except Exception:
        logger.exception("Optimization failed, returning the original document")
        size = len(document.encode("utf-8"))
        return OptimizeResult(document, SizeInfo(size, size, 0))

    return OptimizeResult(text, SizeInfo.measure(document, text))
