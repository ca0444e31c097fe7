"""Random image content.

Images are built through :meth:`ImageBuffer2D.generate`, drawing one
pixel per coordinate.  Without an explicit generator the default is
seeded from ``IMAGEGRID_RANDOM_SEED``.
"""

from __future__ import annotations

import logging
from typing import Callable

import numpy as np

from imagegrid.config.settings import get_settings
from imagegrid.image2d import ImageBuffer2D, Pixel

logger = logging.getLogger(__name__)

Distribution = Callable[[np.random.Generator, int], np.ndarray]


def default_rng() -> np.random.Generator:
    return np.random.default_rng(get_settings().random_seed)


def standard(rng: np.random.Generator, n: int, dtype: np.dtype) -> np.ndarray:
    """Uniform over the full range of an integer dtype, ``[0, 1)`` for floats."""
    if np.issubdtype(dtype, np.integer):
        info = np.iinfo(dtype)
        return rng.integers(info.min, info.max, size=n, dtype=dtype, endpoint=True)
    if dtype in (np.float32, np.float64):
        return rng.random(n, dtype=dtype)
    if np.issubdtype(dtype, np.floating):
        return rng.random(n).astype(dtype)
    raise TypeError(f"No standard distribution for {dtype} subpixels")


def rand(
    width: int,
    height: int,
    pixel_type: type[Pixel],
    rng: np.random.Generator | None = None,
) -> ImageBuffer2D:
    """Generate a random image from the standard distribution."""
    if rng is None:
        rng = default_rng()
    dtype = pixel_type.SUBPIXEL
    return rand_with_distr(
        width, height, pixel_type, lambda r, n: standard(r, n, dtype), rng=rng,
    )


def rand_with_distr(
    width: int,
    height: int,
    pixel_type: type[Pixel],
    distr: Distribution,
    rng: np.random.Generator | None = None,
) -> ImageBuffer2D:
    """Generate a random image whose channels are drawn from *distr*.

    ``distr(rng, n)`` must return ``n`` channel values.
    """
    if rng is None:
        rng = default_rng()
    n = pixel_type.N_CHANNELS
    logger.debug("Sampling %dx%d %s image", width, height, pixel_type.__name__)
    return ImageBuffer2D.generate(
        width, height, lambda _x, _y: pixel_type(distr(rng, n)), pixel_type=pixel_type,
    )
