# This file is part of svg-slim.
#
# This Source Code Form is subject to the terms of the Mozilla Public
# License, v. 2.0. If a copy of the MPL was not distributed with this
# file, You can obtain one at https://mozilla.org/MPL/2.0/.

"""
Generic optimizer stage run after the path engine and the structural rewriter.

The stage is addressed with svgo-style plugin names, so the selection made for
a set of :class:`~svg_slim.options.MinifyOptions` reads the same whatever
backend runs it. :class:`ScourOptimizer` maps the names onto
`scour <https://github.com/scour-project/scour>`_ options.
"""

from __future__ import annotations

import logging
import sys
from collections.abc import Collection
from typing import Final, Protocol

if sys.version_info >= (3, 12):
    from typing import override
else:
    from typing_extensions import override

from .errors import CollaboratorError
from .options import MinifyOptions

logger = logging.getLogger(__name__)

ALWAYS_ENABLED: Final = (
    "removeDoctype",
    "removeXMLProcInst",
    "removeEmptyText",
    "removeEmptyContainers",
    "cleanupEnableBackground",
    "cleanupNumericValues",
    "cleanupListOfValues",
    "convertColors",
    "removeUnknownsAndDefaults",
    "removeNonInheritableGroupAttrs",
    "removeViewBox",
    "removeDimensions",
)

# Plugin names understood by ScourOptimizer and the scour switches they turn on.
# Switches whose plugin is absent are turned off explicitly where scour would
# otherwise apply them by default.
_ENABLING: Final[dict[str, tuple[str, ...]]] = {
    "removeTitle": ("--remove-titles",),
    "removeDesc": ("--remove-descriptions",),
    "removeMetadata": ("--remove-metadata",),
    "removeComments": ("--enable-comment-stripping",),
    "removeAttrs": ("--enable-id-stripping", "--shorten-ids"),
    "removeDimensions": ("--enable-viewboxing",),
}
_DISABLING: Final[dict[str, tuple[str, ...]]] = {
    "removeEditorsNSData": ("--keep-editor-data",),
    "collapseGroups": ("--disable-group-collapsing",),
    "removeUnusedDefs": ("--keep-unreferenced-defs",),
    "inlineStyles": ("--disable-style-to-xml",),
    "convertColors": ("--disable-simplify-colors",),
}
_BASE_ARGS: Final = (
    "--quiet",
    "--no-line-breaks",
    "--indent=none",
    "--strip-xml-prolog",
    "--set-precision=10",
)
KNOWN_PLUGINS: Final = frozenset(_ENABLING) | frozenset(_DISABLING)


def plugins_for(options: MinifyOptions) -> list[str]:
    """Optimizer plugin names selected by ``options``, in application order."""
    plugins: list[str] = []
    if options.remove_metadata:
        plugins += [
            "removeTitle",
            "removeDesc",
            "removeComments",
            "removeMetadata",
            "removeEditorsNSData",
        ]
    if options.inline_styles:
        plugins += ["inlineStyles", "removeUnusedNS"]
    if options.round_coordinates:
        plugins += ["convertPathData", "convertTransform"]
    if options.collapse_groups:
        plugins += ["collapseGroups"]
    if options.remove_unused_defs:
        plugins += ["removeUnusedDefs", "removeUselessDefs"]
    if options.merge_paths:
        plugins += ["convertPathData", "mergePaths"]
    if options.convert_shapes_to_paths:
        plugins += ["convertShapeToPath"]
    if options.smooth_curves:
        plugins += ["convertPathData"]
    if options.remove_ids:
        plugins += ["removeAttrs", "removeUselessStrokeAndFill", "removeEmptyAttrs"]
    plugins += ALWAYS_ENABLED

    # Keep the first occurrence of each name.
    return list(dict.fromkeys(plugins))


class Optimizer(Protocol):
    def optimize(self, document: str, plugins: Collection[str]) -> str:
        """
        Optimize ``document`` with the named plugins.

        :raises CollaboratorError: If the backend fails.
        """
        ...


class NullOptimizer:
    """Optimizer that returns the document unchanged."""

    def optimize(self, document: str, plugins: Collection[str]) -> str:
        return document

    @override
    def __repr__(self) -> str:
        return "NullOptimizer()"


class ScourOptimizer:
    """Optimizer backed by :func:`scour.scour.scourString`."""

    @staticmethod
    def scour_args(plugins: Collection[str]) -> list[str]:
        """Command-line style scour arguments for the given plugin names."""
        unknown = sorted(set(plugins) - KNOWN_PLUGINS)
        if unknown:
            logger.debug("Plugins without a scour counterpart: %s", ", ".join(unknown))

        args = list(_BASE_ARGS)
        for name, switches in _ENABLING.items():
            if name in plugins:
                args.extend(switches)
        for name, switches in _DISABLING.items():
            if name not in plugins:
                args.extend(switches)
        return args

    def optimize(self, document: str, plugins: Collection[str]) -> str:
        from scour import scour

        try:
            options = scour.parse_args(self.scour_args(plugins))
            result = scour.scourString(document, options)
        except Exception as e:
            raise CollaboratorError(f"scour failed: {e}") from e
        return result

    @override
    def __repr__(self) -> str:
        return "ScourOptimizer()"
