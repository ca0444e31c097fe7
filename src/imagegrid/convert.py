"""Pixel-format conversions between image types.

Conversions walk the source in scanline order and fill a freshly
allocated destination of the same dimensions, so the shapes always agree.
"""

from __future__ import annotations

import logging
from typing import Callable

from imagegrid.image2d import Image2D, ImageBuffer2D, Luma, LumaA, Pixel, Rgb, RgbA

logger = logging.getLogger(__name__)


def convert(
    img: Image2D,
    target_type: type[Pixel],
    fn: Callable[[Pixel], Pixel],
) -> ImageBuffer2D:
    """Map every pixel of *img* through *fn* into a new *target_type* image."""
    res = ImageBuffer2D.new(img.width, img.height, target_type)
    for src_pixel, dst_pixel in zip(img, res.iter_mut()):
        dst_pixel.set_to_slice(fn(src_pixel).channels())
    logger.debug(
        "Converted %s to %s (%dx%d)",
        img.pixel_type.__name__, target_type.__name__, img.width, img.height,
    )
    return res


def rgba_to_rgb(img: Image2D) -> ImageBuffer2D:
    """Discard the alpha component of an ``RgbA`` image."""
    if img.pixel_type.family() is not RgbA:
        raise TypeError(f"Expected an RgbA image, got {img.pixel_type.__name__}")
    target = Rgb.with_subpixel(img.pixel_type.SUBPIXEL)
    return convert(img, target, lambda p: target.from_slice(p.channels()))


def luma_alpha_to_luma(img: Image2D) -> ImageBuffer2D:
    """Discard the alpha component of a ``LumaA`` image."""
    if img.pixel_type.family() is not LumaA:
        raise TypeError(f"Expected a LumaA image, got {img.pixel_type.__name__}")
    target = Luma.with_subpixel(img.pixel_type.SUBPIXEL)
    return convert(img, target, lambda p: target.from_slice(p.channels()))
