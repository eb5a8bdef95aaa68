# This file is part of svg-slim.
#
# This Source Code Form is subject to the terms of the Mozilla Public
# License, v. 2.0. If a copy of the MPL was not distributed with this
# file, You can obtain one at https://mozilla.org/MPL/2.0/.

from __future__ import annotations

import logging
import re
from typing import Final

from .errors import ArityError, ParseError, PathError

logger = logging.getLogger(__name__)

ARITY: Final[dict[str, int]] = {
    "M": 2,
    "L": 2,
    "H": 1,
    "V": 1,
    "C": 6,
    "S": 4,
    "Q": 4,
    "T": 2,
    "A": 7,
    "Z": 0,
}
"""Number of parameters consumed by one instruction of each command."""

# Any letter except the exponent markers starts a new run.
_run_start: Final = re.compile(r"[A-DF-Za-df-z]")

_WHITESPACE: Final = frozenset(" \t\r\n\f")
_DIGITS: Final = frozenset("0123456789")


class _Scanner:
    """Character-level reader for the parameter text of one run."""

    def __init__(self, text: str, offset: int, run: str) -> None:
        self.text: str = text
        self.offset: int = offset
        self.run: str = run
        self.pos: int = 0

    def at_end(self) -> bool:
        return self.pos >= len(self.text)

    def _peek(self) -> str:
        return self.text[self.pos] if self.pos < len(self.text) else ""

    def _error(self, message: str) -> ParseError:
        return ParseError(
            f"{message} at offset {self.offset + 1 + self.pos}",
            offset=self.offset,
            run=self.run,
        )

    def skip_separators(self) -> None:
        """Skip ``wsp* ,? wsp*``."""
        while self._peek() in _WHITESPACE:
            self.pos += 1
        if self._peek() == ",":
            self.pos += 1
            while self._peek() in _WHITESPACE:
                self.pos += 1

    def _digits(self) -> int:
        start = self.pos
        while not self.at_end() and self.text[self.pos] in _DIGITS:
            self.pos += 1
        return self.pos - start

    def read_number(self) -> str:
        """
        Read one number.

        A sign, or a second decimal point, ends the number so that the next
        one can follow without a separator (``46-86``, ``0.5.5``).
        """
        start = self.pos
        if self._peek() in ("+", "-"):
            self.pos += 1
        int_digits = self._digits()
        frac_digits = 0
        if self._peek() == ".":
            self.pos += 1
            frac_digits = self._digits()
        if int_digits == 0 and frac_digits == 0:
            self.pos = start
            raise self._error(f"Expected a number, got {self.text[start:start + 8]!r}")
        if self._peek() in ("e", "E"):
            mark = self.pos
            self.pos += 1
            if self._peek() in ("+", "-"):
                self.pos += 1
            if self._digits() == 0:
                # Not an exponent after all; leave it to the caller.
                self.pos = mark
        return self.text[start : self.pos]

    def read_flag(self) -> str:
        """Read a single ``0``/``1`` arc flag."""
        c = self._peek()
        if c not in ("0", "1"):
            raise self._error(f"Expected an arc flag, got {c!r}")
        self.pos += 1
        return c


class PathParser:
    """Tokenizer for SVG path data."""

    @staticmethod
    def _parse_run(letter: str, body: str, offset: int) -> list[list[str]]:
        """Parse one command letter and its parameter text into raw items."""
        arity = ARITY[letter.upper()]
        run = letter + body
        scanner = _Scanner(body, offset, run)
        values: list[str] = []

        scanner.skip_separators()
        while not scanner.at_end():
            if arity == 7 and len(values) % 7 in (3, 4):
                values.append(scanner.read_flag())
            else:
                values.append(scanner.read_number())
            scanner.skip_separators()

        if arity == 0:
            if values:
                raise ArityError(
                    f"Command {letter!r} takes no parameters, got {len(values)}",
                    offset=offset,
                    run=run,
                )
            return [[letter]]

        if not values or len(values) % arity:
            raise ArityError(
                f"Command {letter!r} expects a multiple of {arity} parameters, "
                f"got {len(values)}",
                offset=offset,
                run=run,
            )

        items: list[list[str]] = []
        for i in range(0, len(values), arity):
            cmd = letter
            # Additional coordinate pairs after a move are implicit lines.
            if i > 0 and letter in ("M", "m"):
                cmd = "L" if letter == "M" else "l"
            items.append([cmd, *values[i : i + arity]])
        return items

    @staticmethod
    def parse(path: str, errors: list[PathError] | None = None) -> list[list[str]]:
        """
        Split a path-data string into raw items ``[letter, *parameters]``.

        Without ``errors`` the first malformed run raises. With an ``errors``
        list, malformed runs are dropped, their errors appended to the list,
        and parsing continues with the next command letter.

        :raises ParseError: Unknown command letter or bad parameter text.
        :raises ArityError: Parameter count does not fit the command.
        """
        items: list[list[str]] = []
        starts = [m.start() for m in _run_start.finditer(path)]

        leading = path[: starts[0]] if starts else path
        if leading.strip():
            err = ParseError(
                f"Path data must start with a command, got {leading.strip()[:8]!r}",
                offset=0,
                run=leading,
            )
            if errors is None:
                raise err
            errors.append(err)

        for idx, start in enumerate(starts):
            end = starts[idx + 1] if idx + 1 < len(starts) else len(path)
            letter, body = path[start], path[start + 1 : end]
            try:
                if letter.upper() not in ARITY:
                    raise ParseError(
                        f"Unknown command {letter!r}", offset=start, run=path[start:end]
                    )
                items.extend(PathParser._parse_run(letter, body, start))
            except PathError as err:
                if errors is None:
                    raise
                logger.debug("Dropping malformed run %r: %s", err.run, err)
                errors.append(err)

        return items
