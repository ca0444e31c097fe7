"""Shared test fixtures for imagegrid.

Provides small pre-built images so individual test modules stay focused.
"""

from __future__ import annotations

import pytest

from imagegrid.image2d import ImageBuffer2D, Luma


# ---------------------------------------------------------------------------
# Image fixtures
# ---------------------------------------------------------------------------


@pytest.fixture()
def img3x3() -> ImageBuffer2D:
    """3x3 Luma image holding 0..8 in scanline order."""
    return ImageBuffer2D.from_raw_vec(3, 3, range(9), Luma)


@pytest.fixture()
def img5x3() -> ImageBuffer2D:
    """5x3 Luma image holding 1..15 in scanline order."""
    return ImageBuffer2D.from_vec(5, 3, [Luma([n]) for n in range(1, 16)])


@pytest.fixture()
def zeros5x5() -> ImageBuffer2D:
    return ImageBuffer2D.new(5, 5, Luma)


@pytest.fixture()
def gradient5x5() -> ImageBuffer2D:
    """5x5 image where pixel (x, y) is 2x + 3y."""
    return ImageBuffer2D.generate(5, 5, lambda x, y: Luma([2 * x + 3 * y]))
