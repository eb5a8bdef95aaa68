# This file is part of svg-slim.
#
# This Source Code Form is subject to the terms of the Mozilla Public
# License, v. 2.0. If a copy of the MPL was not distributed with this
# file, You can obtain one at https://mozilla.org/MPL/2.0/.

"""Optional per-path statistics collected while a document is processed."""

from __future__ import annotations

from dataclasses import dataclass, field


@dataclass
class PathReport:
    """
    What happened to one ``d`` attribute.

    :ivar index: Position of the attribute in document order.
    :ivar instructions_parsed: Instructions kept by the parser.
    :ivar instructions_dropped: Malformed runs dropped by the parser.
    :ivar points_before: Flattened points before simplification.
    :ivar points_after: Points left after simplification.
    :ivar errors: Messages of the errors met; the text is untouched if any.
    :ivar changed: Whether the attribute value was rewritten.
    """

    index: int
    instructions_parsed: int = 0
    instructions_dropped: int = 0
    points_before: int = 0
    points_after: int = 0
    errors: list[str] = field(default_factory=list)
    changed: bool = False


@dataclass
class Diagnostics:
    """Collector of :class:`PathReport` for one document, in document order."""

    reports: list[PathReport] = field(default_factory=list)
    optimizer_error: str | None = None

    def new_report(self) -> PathReport:
        report = PathReport(index=len(self.reports))
        self.reports.append(report)
        return report

    @property
    def paths(self) -> int:
        return len(self.reports)

    @property
    def failed_paths(self) -> int:
        return sum(1 for r in self.reports if r.errors)

    @property
    def points_removed(self) -> int:
        return sum(r.points_before - r.points_after for r in self.reports)
