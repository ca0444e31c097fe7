"""Generic 2D image type over owned, viewed and mutably viewed storage.

All three storage kinds hold a numpy array of shape
``(height, width, N_CHANNELS)`` and share one implementation:

* :class:`Image2D` implements every read-only algorithm.
* :class:`Image2DMut` adds every mutating algorithm.
* :class:`ImageBuffer2D` owns its array, :class:`Image2DView` and
  :class:`Image2DViewMut` are zero-copy windows over another image's array.

Coordinates are ``(x, y)`` with ``x`` the column; storage is row-major.
Out-of-range coordinates and rects that do not fit raise ``IndexError``.
Shape disagreements and blit preconditions raise :mod:`errors` classes.

Views keep their parent's array alive, but a writable view does not lock
the parent: callers must not write the same cells through two handles
while iterating one of them.
"""

from __future__ import annotations

import logging
from typing import Any, Callable, Iterable, Iterator

import numpy as np

from imagegrid.image2d.errors import (
    DimensionMismatchError,
    RectOutOfBoundsError,
    RectSizeMismatchError,
)
from imagegrid.image2d.geometry import translate_rect
from imagegrid.image2d.iterators import IndexedPixelIter, LineIter, LinesIter, PixelIter
from imagegrid.image2d.ops import apply_binary
from imagegrid.image2d.pixel import BitDepth, Pixel, PixelType
from imagegrid.image2d.rect import Rect

logger = logging.getLogger(__name__)


def _readonly(array: np.ndarray) -> np.ndarray:
    view = array.view()
    view.flags.writeable = False
    return view


class Image2D:
    """Read access to a 2D grid of pixels."""

    __slots__ = ("_buffer", "_pixel_type")

    def __init__(self, buffer: np.ndarray, pixel_type: type[Pixel]) -> None:
        if buffer.ndim != 3 or buffer.shape[2] != pixel_type.N_CHANNELS:
            raise ValueError(
                f"Backing array of shape {buffer.shape} does not hold "
                f"{pixel_type.__name__} pixels"
            )
        if buffer.dtype != pixel_type.SUBPIXEL:
            raise TypeError(
                f"Backing array dtype {buffer.dtype} does not match "
                f"{pixel_type.__name__} subpixel {pixel_type.SUBPIXEL}"
            )
        self._buffer = buffer
        self._pixel_type = pixel_type

    # -- Shape ----------------------------------------------------------------

    @property
    def width(self) -> int:
        return self._buffer.shape[1]

    @property
    def height(self) -> int:
        return self._buffer.shape[0]

    @property
    def dimensions(self) -> tuple[int, int]:
        """``(width, height)`` of the image."""
        return (self.width, self.height)

    @property
    def pixel_type(self) -> type[Pixel]:
        return self._pixel_type

    def __len__(self) -> int:
        return self.width * self.height

    def rect(self) -> Rect:
        """Return a Rect covering the whole image."""
        return Rect(0, 0, self.width, self.height)

    def image_type(self) -> tuple[PixelType, BitDepth]:
        return self._pixel_type.image_type()

    # -- Internal helpers -------------------------------------------------------

    def _cells(self) -> np.ndarray:
        """Read-only window over the whole backing array."""
        return _readonly(self._buffer)

    def _check_point(self, x: int, y: int) -> None:
        if not (0 <= x < self.width and 0 <= y < self.height):
            raise IndexError(
                f"Pixel ({x}, {y}) is out of bounds for image of size "
                f"{self.width}x{self.height}"
            )

    def _check_rect(self, rect: Rect) -> tuple[slice, slice]:
        if not rect.fits_image(self):
            raise IndexError(
                f"{rect} crosses the boundaries of image of size {self.width}x{self.height}"
            )
        return rect.as_slices()

    # -- Point access -----------------------------------------------------------

    def as_slice(self) -> np.ndarray | None:
        """Return the pixels as a flat ``(width * height, channels)`` view.

        Only available when the backing array is contiguous in row-major
        order; windows that skip columns return ``None``.
        """
        cells = self._cells()
        if not cells.flags.c_contiguous:
            return None
        return cells.reshape(-1, self._pixel_type.N_CHANNELS)

    def get_pixel(self, x: int, y: int) -> Pixel:
        """Return a read-only view of the pixel at ``(x, y)``."""
        self._check_point(x, y)
        return self._pixel_type._wrap(self._cells()[y, x])

    def __getitem__(self, index: tuple[int, int]) -> Pixel:
        x, y = index
        return self.get_pixel(x, y)

    # -- Iteration ---------------------------------------------------------------

    def iter(self) -> PixelIter:
        """Iterate over the pixels in scanline order."""
        return PixelIter(self._cells(), self._pixel_type)

    def __iter__(self) -> Iterator[Pixel]:
        return self.iter()

    def enumerate_pixels(self) -> IndexedPixelIter:
        """Iterate over ``((row, col), pixel)`` pairs in scanline order.

        The index is ``(y, x)``, not ``(x, y)``.
        """
        return IndexedPixelIter(self._cells(), self._pixel_type)

    def row(self, y: int) -> LineIter | None:
        if not 0 <= y < self.height:
            return None
        return LineIter(self._cells()[y:y + 1], self._pixel_type)

    def rows(self) -> LinesIter:
        return LinesIter(self._cells(), self._pixel_type, axis=0)

    def col(self, x: int) -> LineIter | None:
        if not 0 <= x < self.width:
            return None
        return LineIter(self._cells()[:, x:x + 1], self._pixel_type)

    def cols(self) -> LinesIter:
        return LinesIter(self._cells(), self._pixel_type, axis=1)

    def rect_iter(self, rect: Rect) -> PixelIter:
        """Iterate over the pixels of *rect* in scanline order."""
        rows, cols = self._check_rect(rect)
        return PixelIter(self._cells()[rows, cols], self._pixel_type)

    # -- Views and copies -------------------------------------------------------

    def get_view(self) -> Image2DView:
        return Image2DView(self._buffer, self._pixel_type)

    def sub_image(self, rect: Rect) -> Image2DView:
        """Return a read-only view over *rect*."""
        rows, cols = self._check_rect(rect)
        return Image2DView(self._buffer[rows, cols], self._pixel_type)

    def to_owned(self) -> ImageBuffer2D:
        """Return an independent copy of the image."""
        return ImageBuffer2D(self._buffer.copy(), self._pixel_type)

    def to_vec(self) -> list[Pixel]:
        """Return copies of the pixels in scanline order."""
        return [pixel.copy() for pixel in self.iter()]

    def to_ndarray(self) -> np.ndarray:
        """Return a ``(height, width, channels)`` copy of the pixel data."""
        return self._buffer.copy()

    # -- Geometry ---------------------------------------------------------------

    def translate_rect(self, rect: Rect, dx: int, dy: int) -> Rect | None:
        """Translate *rect* by ``(dx, dy)``, cropping what falls out of the image.

        Returns ``None`` if nothing of the translated rect is left.
        """
        return translate_rect(rect, dx, dy, self.width, self.height)

    # -- Comparison and arithmetic ---------------------------------------------

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Image2D):
            return NotImplemented
        return (
            self._pixel_type is other._pixel_type
            and self.dimensions == other.dimensions
            and bool(np.array_equal(self._buffer, other._buffer))
        )

    __hash__ = None  # type: ignore[assignment]

    def _combine(self, other: object, op: str) -> ImageBuffer2D:
        if not isinstance(other, Image2D) or other._pixel_type is not self._pixel_type:
            return NotImplemented
        if self.dimensions != other.dimensions:
            raise DimensionMismatchError(
                f"Image dimensions do not match: {self.dimensions} vs {other.dimensions}",
                expected=self.dimensions,
                actual=other.dimensions,
            )
        return ImageBuffer2D(apply_binary(op, self._buffer, other._buffer), self._pixel_type)

    def __add__(self, other: object) -> ImageBuffer2D:
        return self._combine(other, "add")

    def __sub__(self, other: object) -> ImageBuffer2D:
        return self._combine(other, "sub")

    def __mul__(self, other: object) -> ImageBuffer2D:
        return self._combine(other, "mul")

    def __truediv__(self, other: object) -> ImageBuffer2D:
        return self._combine(other, "div")

    def __mod__(self, other: object) -> ImageBuffer2D:
        return self._combine(other, "rem")

    def __repr__(self) -> str:
        return f"{type(self).__name__}<{self._pixel_type.__name__}>({self.width}x{self.height})"


class Image2DMut(Image2D):
    """Read and write access to a 2D grid of pixels."""

    __slots__ = ()

    def _check_pixel_type(self, pixel: Pixel) -> None:
        if type(pixel) is not self._pixel_type:
            raise TypeError(
                f"Cannot write {type(pixel).__name__} pixel into "
                f"{self._pixel_type.__name__} image"
            )

    def get_pixel_mut(self, x: int, y: int) -> Pixel:
        """Return a writable view of the pixel at ``(x, y)``."""
        self._check_point(x, y)
        return self._pixel_type._wrap(self._buffer[y, x])

    def put_pixel(self, x: int, y: int, pixel: Pixel) -> None:
        self._check_point(x, y)
        self._check_pixel_type(pixel)
        self._buffer[y, x] = pixel.channels()

    def __getitem__(self, index: tuple[int, int]) -> Pixel:
        x, y = index
        return self.get_pixel_mut(x, y)

    def __setitem__(self, index: tuple[int, int], pixel: Pixel) -> None:
        x, y = index
        self.put_pixel(x, y, pixel)

    def iter_mut(self) -> PixelIter:
        return PixelIter(self._buffer, self._pixel_type)

    def enumerate_pixels_mut(self) -> IndexedPixelIter:
        """Like :meth:`enumerate_pixels`, yielding writable pixels."""
        return IndexedPixelIter(self._buffer, self._pixel_type)

    def row_mut(self, y: int) -> LineIter | None:
        if not 0 <= y < self.height:
            return None
        return LineIter(self._buffer[y:y + 1], self._pixel_type)

    def rows_mut(self) -> LinesIter:
        return LinesIter(self._buffer, self._pixel_type, axis=0)

    def col_mut(self, x: int) -> LineIter | None:
        if not 0 <= x < self.width:
            return None
        return LineIter(self._buffer[:, x:x + 1], self._pixel_type)

    def cols_mut(self) -> LinesIter:
        return LinesIter(self._buffer, self._pixel_type, axis=1)

    def rect_iter_mut(self, rect: Rect) -> PixelIter:
        rows, cols = self._check_rect(rect)
        return PixelIter(self._buffer[rows, cols], self._pixel_type)

    def sub_image_mut(self, rect: Rect) -> Image2DViewMut:
        """Return a writable view over *rect*; writes land in this image."""
        rows, cols = self._check_rect(rect)
        return Image2DViewMut(self._buffer[rows, cols], self._pixel_type)

    def fill(self, value: Pixel) -> None:
        self._check_pixel_type(value)
        self._buffer[...] = value.channels()

    def fill_rect(self, rect: Rect, value: Pixel) -> None:
        rows, cols = self._check_rect(rect)
        self._check_pixel_type(value)
        self._buffer[rows, cols] = value.channels()

    def blit_rect(self, src_rect: Rect, dst_rect: Rect, img: Image2D) -> None:
        """Copy *src_rect* of *img* onto *dst_rect* of this image.

        Cells are paired in scanline order.  Every check runs before the
        first write, so a failed blit leaves the image untouched.

        Raises
        ------
        RectSizeMismatchError
            The two rects differ in size.
        RectOutOfBoundsError
            A rect does not fit its image.
        """
        if src_rect.size != dst_rect.size:
            raise RectSizeMismatchError(src_rect.size, dst_rect.size)
        if not src_rect.fits_image(img):
            raise RectOutOfBoundsError(src_rect, img.dimensions, role="source")
        if not dst_rect.fits_image(self):
            raise RectOutOfBoundsError(dst_rect, self.dimensions, role="destination")
        if img._pixel_type is not self._pixel_type:
            raise TypeError(
                f"Cannot blit {img._pixel_type.__name__} pixels onto "
                f"{self._pixel_type.__name__} image"
            )

        src_rows, src_cols = src_rect.as_slices()
        dst_rows, dst_cols = dst_rect.as_slices()
        # numpy buffers the source when both windows share memory
        self._buffer[dst_rows, dst_cols] = img._buffer[src_rows, src_cols]
        logger.debug("Blitted %s onto %s (%d cells)", src_rect, dst_rect, src_rect.area)


class ImageBuffer2D(Image2DMut):
    """Image owning its pixel storage."""

    __slots__ = ()

    @classmethod
    def new(cls, width: int, height: int, pixel_type: type[Pixel]) -> ImageBuffer2D:
        """Create an image of the given size filled with zeros."""
        if width < 0 or height < 0:
            raise ValueError(f"Image dimensions must be >= 0: {width}x{height}")
        buffer = np.zeros((height, width, pixel_type.N_CHANNELS), dtype=pixel_type.SUBPIXEL)
        return cls(buffer, pixel_type)

    @classmethod
    def from_vec(
        cls,
        width: int,
        height: int,
        pixels: Iterable[Pixel],
        pixel_type: type[Pixel] | None = None,
    ) -> ImageBuffer2D:
        """Create an image from pixels listed in scanline order.

        Raises
        ------
        DimensionMismatchError
            The number of pixels is not ``width * height``.
        """
        pixels = list(pixels)
        expected = width * height
        if len(pixels) != expected:
            raise DimensionMismatchError(
                f"Buffer has incorrect size {len(pixels)}, expected {expected}.",
                expected=expected,
                actual=len(pixels),
            )
        if pixel_type is None:
            if not pixels:
                raise ValueError("pixel_type is required to build an empty image")
            pixel_type = type(pixels[0])
        for pixel in pixels:
            if type(pixel) is not pixel_type:
                raise TypeError(
                    f"Expected {pixel_type.__name__} pixels, got {type(pixel).__name__}"
                )
        buffer = np.empty((height, width, pixel_type.N_CHANNELS), dtype=pixel_type.SUBPIXEL)
        if pixels:
            buffer[...] = np.stack([p.channels() for p in pixels]).reshape(buffer.shape)
        return cls(buffer, pixel_type)

    @classmethod
    def from_raw_vec(
        cls,
        width: int,
        height: int,
        values: Iterable[Any],
        pixel_type: type[Pixel],
    ) -> ImageBuffer2D:
        """Create an image from flat subpixel values, chunked into pixels.

        Raises
        ------
        DimensionMismatchError
            The value count is not a multiple of the channel count, or the
            resulting pixel count is not ``width * height``.
        """
        if not isinstance(values, np.ndarray):
            values = list(values)
        raw = np.asarray(values, dtype=pixel_type.SUBPIXEL).ravel()
        n_channels = pixel_type.N_CHANNELS
        if raw.size % n_channels:
            raise DimensionMismatchError(
                f"Buffer length {raw.size} is not a multiple of {n_channels} channels.",
                expected=n_channels,
                actual=raw.size,
            )
        n_pixels = raw.size // n_channels
        if n_pixels != width * height:
            raise DimensionMismatchError(
                f"Buffer has incorrect size {n_pixels}, expected {width * height}.",
                expected=width * height,
                actual=n_pixels,
            )
        return cls(raw.reshape(height, width, n_channels).copy(), pixel_type)

    @classmethod
    def from_ndarray(cls, array: np.ndarray, pixel_type: type[Pixel]) -> ImageBuffer2D:
        """Copy a ``(height, width)`` or ``(height, width, channels)`` array."""
        data = np.array(array, dtype=pixel_type.SUBPIXEL)
        if data.ndim == 2 and pixel_type.N_CHANNELS == 1:
            data = data[:, :, np.newaxis]
        if data.ndim != 3 or data.shape[2] != pixel_type.N_CHANNELS:
            raise DimensionMismatchError(
                f"Array of shape {np.shape(array)} does not hold {pixel_type.__name__} pixels.",
                expected=pixel_type.N_CHANNELS,
                actual=np.shape(array),
            )
        return cls(data, pixel_type)

    @classmethod
    def generate(
        cls,
        width: int,
        height: int,
        f: Callable[[int, int], Pixel],
        pixel_type: type[Pixel] | None = None,
    ) -> ImageBuffer2D:
        """Create an image by calling ``f(x, y)`` once per pixel.

        The pixel type is taken from the first generated pixel, so
        *pixel_type* is required for zero-area images.
        """
        pixels = [f(x, y) for y in range(height) for x in range(width)]
        return cls.from_vec(width, height, pixels, pixel_type)

    def into_raw_vec(self) -> list[Pixel]:
        """Return the owned pixels in scanline order, sharing this storage."""
        flat = self._buffer.reshape(-1, self._pixel_type.N_CHANNELS)
        return [self._pixel_type._wrap(cell) for cell in flat]


class Image2DView(Image2D):
    """Read-only window over another image's storage."""

    __slots__ = ()

    def __init__(self, buffer: np.ndarray, pixel_type: type[Pixel]) -> None:
        super().__init__(_readonly(buffer), pixel_type)
        logger.debug("View %dx%d over %s storage", self.width, self.height, pixel_type.__name__)

    def _cells(self) -> np.ndarray:
        return self._buffer


class Image2DViewMut(Image2DMut):
    """Writable window over another image's storage."""

    __slots__ = ()
