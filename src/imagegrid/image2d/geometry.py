"""Rect arithmetic against image bounds.

Translation works in signed coordinates and clips the result back into
``[0, width) x [0, height)``, so a moved window may come back smaller
than it went in.
"""

from __future__ import annotations

from imagegrid.image2d.rect import Rect


def intersect(a: Rect, b: Rect) -> Rect | None:
    """Return the overlap of two rects, or ``None`` if they share no cell."""
    left = max(a.left, b.left)
    top = max(a.top, b.top)
    right = min(a.left + a.width, b.left + b.width)
    bottom = min(a.top + a.height, b.top + b.height)
    if right <= left or bottom <= top:
        return None
    return Rect(left, top, right - left, bottom - top)


def translate_rect(rect: Rect, dx: int, dy: int, width: int, height: int) -> Rect | None:
    """Move *rect* by ``(dx, dy)`` and clip it to a ``width x height`` image.

    Returns ``None`` when the moved rect falls entirely outside the image.
    An empty rect covers no cell, so it always translates to ``None``.
    """
    if rect.is_empty:
        return None
    left = rect.left + dx
    top = rect.top + dy
    right = rect.right + dx
    bottom = rect.bottom + dy

    if left < width and top < height and right >= 0 and bottom >= 0:
        x_left = max(left, 0)
        y_top = max(top, 0)
        return Rect(
            x_left,
            y_top,
            min(width, right + 1) - x_left,
            min(height, bottom + 1) - y_top,
        )
    return None
