"""Draw the aggregated defect region onto an image."""
from typing import Tuple

import cv2
import numpy as np

from .config import BOX_COLOR
from .geometry import Rect


def draw_outline(image: np.ndarray, rect: Rect,
                 color: Tuple[int, ...] = BOX_COLOR,
                 thickness: int = 1) -> np.ndarray:
    """Draw the four edges of rect on a copy of image.

    Edges lie on columns x and x + width and rows y and y + height. Parts
    outside the image are clipped. Outline pixels replace what was there,
    without blending.

    Args:
        image: HxWx3 or HxWx4 uint8 image, not modified
        rect: Region to outline
        color: Outline color
        thickness: Line thickness in pixels

    Returns:
        New image with the outline
    """
    result = np.ascontiguousarray(image).copy()
    channels = 1 if result.ndim == 2 else result.shape[2]
    fill = tuple(int(c) for c in color[:channels])

    cv2.rectangle(result, (rect.x, rect.y), (rect.right, rect.bottom),
                  fill, thickness, lineType=cv2.LINE_8)
    return result


__all__ = ['draw_outline']
