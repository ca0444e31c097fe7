"""Iterators over the cells, rows and columns of an image window.

Every iterator walks a ``(rows, cols, channels)`` numpy window captured at
construction time and knows how many items remain (``len()``).  Row and
column iterators can also be consumed from the back with
:meth:`DoubleEnded.next_back` or ``reversed()``.

Pixels yielded are live views into the window: writable when the window
is writable (the ``*_mut`` entry points), read-only otherwise.
"""

from __future__ import annotations

from typing import Any, Iterator

import numpy as np

from imagegrid.image2d.pixel import Pixel


class _ExactSizeIter:
    """Index-driven iterator over ``[front, back)``."""

    __slots__ = ("_front", "_back")

    def __init__(self, size: int) -> None:
        self._front = 0
        self._back = size

    def _item(self, index: int) -> Any:
        raise NotImplementedError

    def __iter__(self) -> Iterator[Any]:
        return self

    def __next__(self) -> Any:
        if self._front >= self._back:
            raise StopIteration
        index = self._front
        self._front += 1
        return self._item(index)

    def __len__(self) -> int:
        return self._back - self._front


class DoubleEnded:
    """Mixin for iterators whose index order is reversible."""

    __slots__ = ()

    def next_back(self) -> Any:
        """Consume and return the last remaining item."""
        if self._front >= self._back:  # type: ignore[attr-defined]
            raise StopIteration
        self._back -= 1  # type: ignore[attr-defined]
        return self._item(self._back)  # type: ignore[attr-defined]

    def __reversed__(self) -> Iterator[Any]:
        while len(self):  # type: ignore[arg-type]
            yield self.next_back()


class PixelIter(_ExactSizeIter):
    """Pixels of a window in scanline order."""

    __slots__ = ("_cells", "_pixel_type", "_cols")

    def __init__(self, cells: np.ndarray, pixel_type: type[Pixel]) -> None:
        rows, cols = cells.shape[:2]
        super().__init__(rows * cols)
        self._cells = cells
        self._pixel_type = pixel_type
        self._cols = cols

    def _position(self, index: int) -> tuple[int, int]:
        return divmod(index, self._cols)

    def _item(self, index: int) -> Any:
        row, col = self._position(index)
        return self._pixel_type._wrap(self._cells[row, col])


class IndexedPixelIter(PixelIter):
    """Pixels paired with their ``(row, col)`` index, i.e. ``(y, x)``."""

    __slots__ = ()

    def _item(self, index: int) -> Any:
        row, col = self._position(index)
        return (row, col), self._pixel_type._wrap(self._cells[row, col])


class LineIter(DoubleEnded, PixelIter):
    """Pixels of a single row (left to right) or column (top to bottom)."""

    __slots__ = ()


class LinesIter(DoubleEnded, _ExactSizeIter):
    """Rows in scanline order (axis 0) or columns left to right (axis 1)."""

    __slots__ = ("_cells", "_pixel_type", "_axis")

    def __init__(self, cells: np.ndarray, pixel_type: type[Pixel], axis: int) -> None:
        super().__init__(cells.shape[axis])
        self._cells = cells
        self._pixel_type = pixel_type
        self._axis = axis

    def _item(self, index: int) -> LineIter:
        if self._axis == 0:
            return LineIter(self._cells[index:index + 1], self._pixel_type)
        return LineIter(self._cells[:, index:index + 1], self._pixel_type)
