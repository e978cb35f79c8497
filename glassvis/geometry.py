"""Point and rectangle primitives shared by the detector and the overlay."""
from dataclasses import dataclass
from typing import Tuple


@dataclass(frozen=True)
class Point:
    """Pixel coordinate, x to the right and y downwards."""

    x: int
    y: int

    def as_tuple(self) -> Tuple[int, int]:
        return (self.x, self.y)


@dataclass(frozen=True)
class Rect:
    """Axis-aligned box given by its top-left corner and its extent.

    The corner may be negative after padding; width and height never are.
    """

    x: int
    y: int
    width: int
    height: int

    def __post_init__(self):
        if self.width < 0 or self.height < 0:
            raise ValueError(f"Rect extent must be non-negative, got {self.width}x{self.height}")

    @property
    def right(self) -> int:
        return self.x + self.width

    @property
    def bottom(self) -> int:
        return self.y + self.height

    def as_tuple(self) -> Tuple[int, int, int, int]:
        """Return (x, y, w, h), the ROI layout used across the package."""
        return (self.x, self.y, self.width, self.height)


__all__ = ['Point', 'Rect']
