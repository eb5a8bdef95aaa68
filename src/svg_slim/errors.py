# This file is part of svg-slim.
#
# This Source Code Form is subject to the terms of the Mozilla Public
# License, v. 2.0. If a copy of the MPL was not distributed with this
# file, You can obtain one at https://mozilla.org/MPL/2.0/.

from __future__ import annotations


class SvgSlimError(Exception):
    """Base class of all errors raised by svg-slim."""


class PathError(SvgSlimError, ValueError):
    """
    A malformed run of path data.

    :ivar offset: Character offset of the run within the path string.
    :ivar run: Text of the offending run.
    """

    def __init__(self, message: str, *, offset: int = 0, run: str = "") -> None:
        super().__init__(message)
        self.offset: int = offset
        self.run: str = run


class ParseError(PathError):
    """Unknown command letter or unparsable parameter text."""


class ArityError(PathError):
    """Parameter count does not match the arity of the command."""


class EmptyInputError(SvgSlimError, ValueError):
    """The document is empty or not a string."""


class CollaboratorError(SvgSlimError):
    """The generic optimizer failed on a document."""
