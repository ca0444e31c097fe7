"""imagegrid: generic 2D image buffers with zero-copy views.

One image type over owned, read-only and writable storage, sharing
point access, row/column/rect iteration, blits and elementwise
arithmetic.
"""

from __future__ import annotations

from imagegrid.image2d import (
    BitDepth,
    DimensionMismatchError,
    Image2D,
    Image2DMut,
    Image2DView,
    Image2DViewMut,
    ImageBuffer2D,
    ImageError,
    Luma,
    LumaA,
    Pixel,
    PixelType,
    Rect,
    RectOutOfBoundsError,
    RectSizeMismatchError,
    Region,
    Rgb,
    RgbA,
)

__version__ = "0.1.0"

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
    "__version__",
]
