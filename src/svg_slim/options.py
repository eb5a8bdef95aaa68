# This file is part of svg-slim.
#
# This Source Code Form is subject to the terms of the Mozilla Public
# License, v. 2.0. If a copy of the MPL was not distributed with this
# file, You can obtain one at https://mozilla.org/MPL/2.0/.

from __future__ import annotations

import re
from collections.abc import Mapping
from dataclasses import dataclass, fields
from typing import Any, Final, Self

MIN_PRECISION: Final = 0
MAX_PRECISION: Final = 10
MIN_TOLERANCE: Final = 0.1
MAX_TOLERANCE: Final = 10.0

_camel_boundary: Final = re.compile(r"(?<!^)(?=[A-Z])")


def _check_precision(precision: int) -> None:
    if isinstance(precision, bool) or not isinstance(precision, int):
        raise ValueError(f"precision must be an integer, got {precision!r}")
    if not MIN_PRECISION <= precision <= MAX_PRECISION:
        raise ValueError(
            f"precision must be in [{MIN_PRECISION}, {MAX_PRECISION}], got {precision}"
        )


@dataclass(frozen=True)
class SimplificationConfig:
    """
    Parameters of one simplification run.

    :ivar tolerance: Maximum perpendicular distance of a dropped point, > 0.
    :ivar precision: Decimal digits kept when serializing, 0 to 10.
    """

    tolerance: float
    precision: int

    def __post_init__(self) -> None:
        if not self.tolerance > 0:
            raise ValueError(f"tolerance must be positive, got {self.tolerance}")
        _check_precision(self.precision)


@dataclass(frozen=True)
class MinifyOptions:
    """
    Options of a document minification.

    Only the coordinate and simplification options drive the path engine;
    the remaining switches select structural rewrite rules and optimizer
    plugins. Everything but simplification is enabled by default.
    """

    remove_metadata: bool = True
    inline_styles: bool = True
    collapse_groups: bool = True
    remove_unused_defs: bool = True
    remove_ids: bool = True

    round_coordinates: bool = True
    coordinate_precision: int = 2
    remove_space_after_flags: bool = True
    convert_shapes_to_paths: bool = True
    merge_paths: bool = True
    remove_duplicate_paths: bool = True
    remove_empty_paths: bool = True
    smooth_curves: bool = True

    simplify_paths: bool = False
    simplify_tolerance: float = 1.0
    curve_segments: int = 1

    def __post_init__(self) -> None:
        _check_precision(self.coordinate_precision)
        if not MIN_TOLERANCE <= self.simplify_tolerance <= MAX_TOLERANCE:
            raise ValueError(
                f"simplify_tolerance must be in [{MIN_TOLERANCE}, {MAX_TOLERANCE}], "
                f"got {self.simplify_tolerance}"
            )
        if isinstance(self.curve_segments, bool) or self.curve_segments < 1:
            raise ValueError(
                f"curve_segments must be a positive integer, got {self.curve_segments}"
            )

    @classmethod
    def from_mapping(cls, options: Mapping[str, Any]) -> Self:
        """
        Build options from a mapping using either ``camelCase`` names
        (``simplifyTolerance``) or field names (``simplify_tolerance``).

        :raises ValueError: For unknown option names or invalid values.
        """
        names = {f.name for f in fields(cls)}
        kwargs: dict[str, Any] = {}
        for key, value in options.items():
            name = _camel_boundary.sub("_", key).lower()
            if name not in names:
                raise ValueError(f"Unknown option: {key!r}")
            kwargs[name] = value
        return cls(**kwargs)

    @property
    def simplification(self) -> SimplificationConfig:
        """The tolerance and precision used by the path engine."""
        return SimplificationConfig(
            tolerance=self.simplify_tolerance, precision=self.coordinate_precision
        )
