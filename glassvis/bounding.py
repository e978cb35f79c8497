"""Reduce a set of defect pixels to one padded bounding rectangle."""
from typing import Iterable

from .errors import EmptyPointSetError
from .geometry import Point, Rect


# One pixel on each side so the outline does not cover the defects
BOX_PADDING = 1


def bounding_box(points: Iterable[Point]) -> Rect:
    """Smallest rectangle covering all points, grown by BOX_PADDING.

    Args:
        points: Defect coordinates, at least one

    Returns:
        Rect at (min_x - 1, min_y - 1) spanning to (max_x + 1, max_y + 1)

    Raises:
        EmptyPointSetError: if points is empty
    """
    points = list(points)
    if not points:
        raise EmptyPointSetError()

    left = min(p.x for p in points) - BOX_PADDING
    top = min(p.y for p in points) - BOX_PADDING
    right = max(p.x for p in points) + BOX_PADDING
    bottom = max(p.y for p in points) + BOX_PADDING

    return Rect(left, top, right - left, bottom - top)


def clamp_rect(rect: Rect, width: int, height: int) -> Rect:
    """Clip a rectangle to the pixel range of a width x height image.

    The result keeps the same edge convention as bounding_box: its right and
    bottom edges are at most width - 1 and height - 1.
    """
    left = min(max(rect.x, 0), width - 1)
    top = min(max(rect.y, 0), height - 1)
    right = min(max(rect.right, 0), width - 1)
    bottom = min(max(rect.bottom, 0), height - 1)
    return Rect(left, top, max(right - left, 0), max(bottom - top, 0))


__all__ = ['BOX_PADDING', 'bounding_box', 'clamp_rect']
