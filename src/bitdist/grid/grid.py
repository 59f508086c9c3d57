"""Fixed-size 2-D grid container.

A ``Grid`` wraps a numpy array indexed ``[y, x]`` and exposes bounds-checked
``(x, y)`` access.  Every cell is initialised at construction time, so a grid
never has holes.  Bitmaps use ``dtype=bool``; distance grids use ``float``
so that ``+inf`` can mark cells with no reachable "on" cell.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Iterator, Sequence
from typing import Any

import numpy as np

logger = logging.getLogger(__name__)


class CoordinateError(IndexError):
    """Out-of-bounds access on a :class:`Grid`."""

    def __init__(self, x: int, y: int, width: int, height: int) -> None:
        super().__init__(
            f"Invalid coordinate given: ({x}, {y}) for grid of size {width} x {height}"
        )
        self.x = x
        self.y = y
        self.width = width
        self.height = height


class Grid:
    """A ``width`` x ``height`` grid of values.

    Parameters
    ----------
    data:
        2-D array of shape ``(height, width)``.  The grid takes ownership of
        the array; callers should not keep mutating it afterwards.
    """

    __slots__ = ("_data",)

    def __init__(self, data: np.ndarray) -> None:
        if data.ndim != 2:
            raise ValueError(f"Grid data must be 2-D, got shape {data.shape}")
        self._data = data

    # -- construction -------------------------------------------------------

    @classmethod
    def filled(cls, width: int, height: int, value: Any, dtype: Any = None) -> Grid:
        """Create a grid with every cell set to *value*."""
        if width < 0 or height < 0:
            raise ValueError(f"Grid size must be non-negative, got {width} x {height}")
        return cls(np.full((height, width), value, dtype=dtype))

    @classmethod
    def from_rows(cls, rows: Sequence[Sequence[Any]], dtype: Any = None) -> Grid:
        """Build a grid from a list of equally long rows (top row first)."""
        if not rows:
            return cls(np.empty((0, 0), dtype=dtype))
        widths = {len(r) for r in rows}
        if len(widths) != 1:
            raise ValueError(f"Rows must have equal length, got lengths {sorted(widths)}")
        return cls(np.array(rows, dtype=dtype).reshape(len(rows), widths.pop()))

    # -- shape --------------------------------------------------------------

    @property
    def width(self) -> int:
        return int(self._data.shape[1])

    @property
    def height(self) -> int:
        return int(self._data.shape[0])

    @property
    def values(self) -> np.ndarray:
        """Read-only view of the backing array (``[y, x]`` indexed)."""
        view = self._data.view()
        view.flags.writeable = False
        return view

    # -- cell access --------------------------------------------------------

    def _check(self, x: int, y: int) -> None:
        if x < 0 or x >= self.width or y < 0 or y >= self.height:
            raise CoordinateError(x, y, self.width, self.height)

    def get(self, x: int, y: int) -> Any:
        """Return the value at column *x*, row *y*."""
        self._check(x, y)
        return self._data[y, x].item()

    def set(self, x: int, y: int, value: Any) -> Grid:
        """Set the value at column *x*, row *y*.  Returns ``self``."""
        self._check(x, y)
        self._data[y, x] = value
        return self

    def row(self, y: int) -> list[Any]:
        """All values of row *y* as plain Python scalars."""
        if y < 0 or y >= self.height:
            raise CoordinateError(0, y, self.width, self.height)
        return self._data[y].tolist()

    def rows(self) -> Iterator[list[Any]]:
        for y in range(self.height):
            yield self._data[y].tolist()

    def coordinates(self) -> Iterable[tuple[int, int]]:
        """All ``(x, y)`` pairs in row-major order."""
        return ((x, y) for y in range(self.height) for x in range(self.width))

    def to_lists(self) -> list[list[Any]]:
        return self._data.tolist()

    # -- dunder -------------------------------------------------------------

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Grid):
            return NotImplemented
        return self._data.shape == other._data.shape and bool(
            np.array_equal(self._data, other._data)
        )

    __hash__ = None  # type: ignore[assignment]

    def __repr__(self) -> str:
        return f"Grid({self.width}x{self.height}, dtype={self._data.dtype})"
