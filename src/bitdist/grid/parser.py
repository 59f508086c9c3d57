"""Incremental parser for the bitmap text grammar.

Input grammar (newline-delimited UTF-8)::

    N                 number of grids
    W H               size of grid 1
    <H rows of W characters from {0, 1}>
    W H               size of grid 2
    ...

The parser is a pure state machine over bytes.  ``feed()`` accepts chunks
split at arbitrary positions and returns the grids completed by that chunk;
``finish()`` signals end of input.  Trailing bytes after the last expected
grid are ignored.
"""

from __future__ import annotations

import logging
import re
from collections.abc import Iterable

import numpy as np

from bitdist.grid.grid import Grid

logger = logging.getLogger(__name__)

ENCODING = "utf-8"

COUNT_RE = re.compile(r"\d+", re.ASCII)
SIZE_RE = re.compile(r"(\d+) (\d+)", re.ASCII)
ROW_RE = re.compile(r"[01]+")

EXPECTED_COUNT = "<numberOfGrids: number>"
EXPECTED_SIZE = "<x: number> <y: number>"
EXPECTED_ROW = "('0'|'1')+"


class GridParseError(ValueError):
    """Base class for all parse failures."""


class StreamTruncatedError(GridParseError):
    """Input ended while the grammar still expected a line."""

    def __init__(self, message: str = "Reached end of the stream too early") -> None:
        super().__init__(message)


class GridContentError(GridParseError):
    """A complete line violated the grammar for its position."""

    def __init__(self, line: str, expected: str) -> None:
        super().__init__(f"Invalid line received: '{line}' expected: {expected}")
        self.line = line
        self.expected = expected


class GridParser:
    """Turn a chunked byte stream into a sequence of boolean grids."""

    def __init__(self) -> None:
        self.reset()

    def reset(self) -> None:
        """Return to the initial empty state, ready for a new stream."""
        self._buffer = bytearray()
        self._expected: int | None = None
        self._completed = 0
        self._current: Grid | None = None
        self._rows_filled = 0
        self._failure: GridParseError | None = None

    # -- state --------------------------------------------------------------

    @property
    def expected_count(self) -> int | None:
        """Declared number of grids, or ``None`` before the count line."""
        return self._expected

    @property
    def remaining(self) -> int | None:
        if self._expected is None:
            return None
        return self._expected - self._completed

    @property
    def done(self) -> bool:
        return self._expected is not None and self._completed >= self._expected

    # -- public API ---------------------------------------------------------

    def feed(self, chunk: bytes) -> list[Grid]:
        """Consume *chunk* and return every grid it completed.

        Raises
        ------
        GridContentError
            A line does not match the grammar.  The parser stays failed until
            :meth:`reset` is called.
        """
        if self._failure is not None:
            raise self._failure
        if self.done:
            return []

        self._buffer += chunk
        grids: list[Grid] = []
        while not self.done:
            line = self._pop_line()
            if line is None:
                break
            try:
                grid = self._advance(line)
            except GridParseError as exc:
                self._failure = exc
                raise
            if grid is not None:
                grids.append(grid)

        if self.done:
            # Trailing data is never validated.
            self._buffer.clear()
        return grids

    def finish(self) -> None:
        """Signal end of input.

        Raises
        ------
        StreamTruncatedError
            The stream ended before all declared grids were complete.
        """
        if self._failure is not None:
            raise self._failure
        if not self.done:
            raise StreamTruncatedError()
        logger.debug("Parsed %d grid(s)", self._completed)

    # -- internal -----------------------------------------------------------

    def _pop_line(self) -> str | None:
        index = self._buffer.find(b"\n")
        if index < 0:
            return None
        raw = bytes(self._buffer[:index])
        del self._buffer[: index + 1]
        return raw.decode(ENCODING, errors="replace")

    def _advance(self, line: str) -> Grid | None:
        """Apply one grammar unit.  Returns a grid when *line* completed one."""
        if self._expected is None:
            if not COUNT_RE.fullmatch(line):
                raise GridContentError(line, EXPECTED_COUNT)
            try:
                self._expected = int(line)
            except ValueError:
                # Digit strings beyond the interpreter's int conversion limit.
                raise GridContentError(line, EXPECTED_COUNT) from None
            logger.debug("Expecting %d grid(s)", self._expected)
            return None

        if self._current is None:
            match = SIZE_RE.fullmatch(line)
            if not match:
                raise GridContentError(line, EXPECTED_SIZE)
            try:
                width, height = int(match.group(1)), int(match.group(2))
                self._current = Grid.filled(width, height, False, dtype=bool)
            except (ValueError, OverflowError, MemoryError):
                raise GridContentError(line, EXPECTED_SIZE) from None
            self._rows_filled = 0
            return self._complete_if_full()

        if not ROW_RE.fullmatch(line):
            raise GridContentError(line, EXPECTED_ROW)
        if len(line) != self._current.width:
            raise GridContentError(line, f"expected length {self._current.width}")
        for x, char in enumerate(line):
            self._current.set(x, self._rows_filled, char == "1")
        self._rows_filled += 1
        return self._complete_if_full()

    def _complete_if_full(self) -> Grid | None:
        assert self._current is not None
        if self._rows_filled < self._current.height:
            return None
        grid = self._current
        self._current = None
        self._rows_filled = 0
        self._completed += 1
        logger.debug(
            "Parsed grid %d/%d (%dx%d)",
            self._completed, self._expected, grid.width, grid.height,
        )
        return grid


def render_bitmap(grids: Iterable[Grid]) -> str:
    """Render boolean grids back into the input grammar."""
    grids = list(grids)
    lines = [str(len(grids))]
    for grid in grids:
        lines.append(f"{grid.width} {grid.height}")
        values = np.asarray(grid.values, dtype=bool)
        lines.extend("".join("1" if v else "0" for v in row) for row in values)
    return "\n".join(lines) + "\n"
