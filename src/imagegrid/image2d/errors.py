"""Recoverable image errors.

Structural misuse (bad pixel coordinates, a rect that does not fit when
slicing or iterating) raises builtin exceptions such as ``IndexError``.
The classes below cover the checked failures callers are expected to
handle: shape disagreements and blit preconditions.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from imagegrid.image2d.rect import Rect


class ImageError(ValueError):
    """Base class for recoverable image errors."""


class DimensionMismatchError(ImageError):
    """Two shapes (or a shape and a data length) disagree."""

    def __init__(self, message: str, expected: object = None, actual: object = None) -> None:
        super().__init__(message)
        self.expected = expected
        self.actual = actual


class RectSizeMismatchError(ImageError):
    """Source and destination rects of a blit differ in size."""

    def __init__(self, source: tuple[int, int], destination: tuple[int, int]) -> None:
        super().__init__(
            "Rects are not the same size. Source is (%d, %d), destination is (%d, %d)"
            % (*source, *destination)
        )
        self.source = source
        self.destination = destination


class RectOutOfBoundsError(ImageError):
    """A rect does not fit inside the image it addresses."""

    def __init__(self, rect: Rect, dimensions: tuple[int, int], role: str = "") -> None:
        label = f"{role.capitalize()} rect" if role else "Rect"
        super().__init__(
            f"{label} {rect} does not fit image of size {dimensions[0]}x{dimensions[1]}."
        )
        self.rect = rect
        self.dimensions = dimensions
        self.role = role
