# This file is part of svg-slim.
#
# This Source Code Form is subject to the terms of the Mozilla Public
# License, v. 2.0. If a copy of the MPL was not distributed with this
# file, You can obtain one at https://mozilla.org/MPL/2.0/.

"""
Structural rewrite rules applied to the document text.

Every rule is a text-to-text function that is idempotent on its own output.
Rules are independent of the path engine and are selected by
:class:`~svg_slim.options.MinifyOptions`.
"""

from __future__ import annotations

import logging
import re
from collections.abc import Callable
from typing import Final, TypeAlias

from .options import MinifyOptions

logger = logging.getLogger(__name__)

Rule: TypeAlias = Callable[[str], str]

_upper_tag: Final = re.compile(r"<(/?)([A-Z][^>\s/]*)")
_xml_declaration: Final = re.compile(r"<\?xml[^>]*\?>")
_comment: Final = re.compile(r"<!--[\s\S]*?-->")
_metadata: Final = re.compile(
    r"<(title|desc|metadata)\b[^>]*>[\s\S]*?</\1\s*>|<(?:title|desc|metadata)\b[^>]*/>",
    re.IGNORECASE,
)
_editor_attr: Final = re.compile(
    r"\s(?:xmlns:)?(?:inkscape|sodipodi)(?::[^\s=]+)?\s*=\s*\"[^\"]*\""
)
_plain_attr: Final = re.compile(r"\s(?:class|data-[^\s=]*|xml:space)\s*=\s*\"[^\"]*\"")
_id_attr: Final = re.compile(r"\sid\s*=\s*\"([^\"]*)\"")
_empty_attr: Final = re.compile(r"\s[\w:.-]+=\"\"")
_style_attr: Final = re.compile(r"\bstyle=\"([^\"]*)\"")
_single_child_group: Final = re.compile(r"<g\s*>\s*(<(?!g[\s/>])[^>]+/>)\s*</g\s*>")
_open_close: Final = re.compile(r"<([\w:-]+)(\s[^>]*)?(?<!/)>\s*</\1\s*>")
_empty_group: Final = re.compile(r"<g\b[^>]*(?<!/)>\s*</g\s*>|<g\b[^>]*/>")
_empty_defs: Final = re.compile(r"<defs\b[^>]*(?<!/)>\s*</defs\s*>|<defs\b[^>]*/>")
_self_closed_path: Final = re.compile(r"<path\b[^>]*/>")
_d_attr: Final = re.compile(r"\sd\s*=\s*([\"'])(.*?)\1", re.DOTALL)
_duplicate_paths: Final = re.compile(r"(<path\b[^>]*/>)(?:\s*\1)+")
_multi_space: Final = re.compile(r"\s{2,}")
_between_tags: Final = re.compile(r">\s+<")


def _fixed_point(
    pattern: re.Pattern[str], repl: str | Callable[[re.Match[str]], str]
) -> Rule:
    """Rule applying ``pattern`` until the text no longer changes."""

    def rule(svg: str) -> str:
        while True:
            new = pattern.sub(repl, svg)
            if new == svg:
                return new
            svg = new

    return rule


def lowercase_tags(svg: str) -> str:
    """Lowercase tag names that start with an uppercase letter."""
    return _upper_tag.sub(lambda m: f"<{m.group(1)}{m.group(2).lower()}", svg)


def remove_xml_declaration(svg: str) -> str:
    return _xml_declaration.sub("", svg)


def remove_comments(svg: str) -> str:
    return _comment.sub("", svg)


def remove_metadata(svg: str) -> str:
    """Drop ``<title>``, ``<desc>`` and ``<metadata>`` elements."""
    return _metadata.sub("", svg)


def remove_ids(svg: str) -> str:
    """
    Drop editor attributes, classes, ``data-*`` and ``xml:space``, and every
    ``id`` that is not referenced as ``#id`` elsewhere in the document.
    """
    svg = _editor_attr.sub("", svg)
    svg = _plain_attr.sub("", svg)

    def drop_unreferenced(m: re.Match[str]) -> str:
        ref = "#" + m.group(1)
        return m.group(0) if ref in svg else ""

    return _id_attr.sub(drop_unreferenced, svg)


def remove_empty_attributes(svg: str) -> str:
    return _empty_attr.sub("", svg)


def inline_styles(svg: str) -> str:
    """Turn ``style="a: b; c: d"`` into presentation attributes ``a="b" c="d"``."""

    def to_attributes(m: re.Match[str]) -> str:
        attributes = []
        for rule in m.group(1).split(";"):
            key, sep, value = rule.partition(":")
            key, value = key.strip(), value.strip().replace('"', "'")
            if sep and key and value:
                attributes.append(f'{key}="{value}"')
        return " ".join(attributes)

    return _style_attr.sub(to_attributes, svg)


def self_close_empty_elements(svg: str) -> str:
    """``<path d="…"></path>`` → ``<path d="…" />``."""
    return _fixed_point(
        _open_close, lambda m: f"<{m.group(1)}{(m.group(2) or '').rstrip()} />"
    )(svg)


collapse_groups: Final[Rule] = _fixed_point(_single_child_group, r"\1")
"""Unwrap attribute-less groups around a single non-group element."""


def remove_unused_defs(svg: str) -> str:
    """Drop empty groups and empty ``<defs>``, including nested ones."""
    while True:
        new = _empty_defs.sub("", _empty_group.sub("", svg))
        if new == svg:
            return new
        svg = new


def remove_empty_paths(svg: str) -> str:
    """Drop self-closed ``<path>`` elements without drawing data."""

    def drop_if_empty(m: re.Match[str]) -> str:
        d = _d_attr.search(m.group(0))
        return m.group(0) if d and d.group(2).strip() else ""

    return _self_closed_path.sub(drop_if_empty, svg)


def remove_duplicate_paths(svg: str) -> str:
    """Collapse runs of identical adjacent self-closed ``<path>`` elements."""
    return _duplicate_paths.sub(r"\1", svg)


def normalize_whitespace(svg: str) -> str:
    """Collapse runs of whitespace and drop whitespace between tags."""
    svg = _multi_space.sub(" ", svg)
    svg = _between_tags.sub("><", svg)
    return svg.strip()


def rules_for(options: MinifyOptions) -> list[Rule]:
    """The rewrite rules selected by ``options``, in application order."""
    rules: list[Rule] = [lowercase_tags, remove_xml_declaration, remove_comments]
    if options.remove_metadata:
        rules.append(remove_metadata)
    if options.remove_ids:
        rules.append(remove_ids)
    rules.append(remove_empty_attributes)
    if options.inline_styles:
        rules.append(inline_styles)
    rules.append(self_close_empty_elements)
    if options.collapse_groups:
        rules.append(collapse_groups)
    if options.remove_unused_defs:
        rules.append(remove_unused_defs)
    if options.remove_empty_paths:
        rules.append(remove_empty_paths)
    if options.remove_duplicate_paths:
        rules.append(remove_duplicate_paths)
    rules.append(normalize_whitespace)
    return rules


def rewrite_document(svg: str, options: MinifyOptions) -> str:
    """Apply the structural rewrite rules selected by ``options``."""
    for rule in rules_for(options):
        svg = rule(svg)
    logger.debug("Structural rewrite: %d characters", len(svg))
    return svg
