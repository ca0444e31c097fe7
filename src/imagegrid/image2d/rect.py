"""Axis-aligned rectangles addressing image regions."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Protocol, runtime_checkable


@runtime_checkable
class Region(Protocol):
    """Anything that can tell whether it contains a grid point."""

    def contains(self, x: int, y: int) -> bool: ...


class _Sized2D(Protocol):
    @property
    def width(self) -> int: ...

    @property
    def height(self) -> int: ...


@dataclass(frozen=True, slots=True)
class Rect:
    """Rectangle in unsigned grid coordinates.

    ``right`` and ``bottom`` are inclusive.  Zero-size rects are legal;
    they contain no point and iterate zero cells.
    """

    left: int
    top: int
    width: int
    height: int

    def __post_init__(self) -> None:
        for name in ("left", "top", "width", "height"):
            if getattr(self, name) < 0:
                raise ValueError(f"Rect {name} must be >= 0: {getattr(self, name)}")

    @property
    def right(self) -> int:
        return self.left + self.width - 1

    @property
    def bottom(self) -> int:
        return self.top + self.height - 1

    @property
    def size(self) -> tuple[int, int]:
        """``(width, height)`` of the rect."""
        return (self.width, self.height)

    @property
    def area(self) -> int:
        return self.width * self.height

    @property
    def is_empty(self) -> bool:
        return self.width == 0 or self.height == 0

    def contains(self, x: int, y: int) -> bool:
        return self.left <= x <= self.right and self.top <= y <= self.bottom

    def fits_image(self, img: _Sized2D) -> bool:
        """True if the rect lies entirely within ``[0, width) x [0, height)`` of *img*."""
        return self.left + self.width <= img.width and self.top + self.height <= img.height

    def as_slices(self) -> tuple[slice, slice]:
        """Row and column slices selecting the rect in a ``(row, col)`` array."""
        return (slice(self.top, self.top + self.height), slice(self.left, self.left + self.width))
