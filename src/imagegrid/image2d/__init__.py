"""Generic 2D image buffers.

Provides the pixel contract, rectangles, one image type over owned,
viewed and mutably viewed storage, and the row/column/rect iterators
shared by all three.
"""

from __future__ import annotations

from imagegrid.image2d.buffer import Image2D, Image2DMut, Image2DView, Image2DViewMut, ImageBuffer2D
from imagegrid.image2d.errors import (
    DimensionMismatchError,
    ImageError,
    RectOutOfBoundsError,
    RectSizeMismatchError,
)
from imagegrid.image2d.pixel import BitDepth, Luma, LumaA, Pixel, PixelType, Rgb, RgbA
from imagegrid.image2d.rect import Rect, Region

__all__ = [
    "BitDepth",
    "DimensionMismatchError",
    "Image2D",
    "Image2DMut",
    "Image2DView",
    "Image2DViewMut",
    "ImageBuffer2D",
    "ImageError",
    "Luma",
    "LumaA",
    "Pixel",
    "PixelType",
    "Rect",
    "RectOutOfBoundsError",
    "RectSizeMismatchError",
    "Region",
    "Rgb",
    "RgbA",
]
