"""Pixel-level defect detection between a reference and a captured image.

Detection is split in two stages:
- find_diffs: pure search for pixels whose luma delta exceeds the threshold
- mark_points: paint a marker color at given coordinates, in place

detect() composes both and returns the marked captured image together with
the points, the image size and the defect count.
"""
from typing import List, NamedTuple, Sequence, Tuple

import cv2
import numpy as np

from .config import DIFF_COLOR, MAX_SIGNIFICANCE, MIN_SIGNIFICANCE, LumaMethod
from .errors import DimensionMismatchError, InvalidSignificanceError, PreconditionError
from .geometry import Point


# Rec. 709 weights scaled to integers, sum is LUMA_SCALE
LUMA_WEIGHTS = (2126, 7152, 722)
LUMA_SCALE = 10000


class DiffResult(NamedTuple):
    """Outcome of detect(). Unpacks as (image, points, width, height, count)."""
    marked_image: np.ndarray
    points: List[Point]
    width: int
    height: int
    count: int


def significance_threshold(significance: int) -> int:
    """Validate a significance level and return its per-pixel threshold."""
    if isinstance(significance, bool) or not isinstance(significance, (int, np.integer)):
        raise InvalidSignificanceError(significance)
    if not MIN_SIGNIFICANCE <= significance <= MAX_SIGNIFICANCE:
        raise InvalidSignificanceError(significance)
    return MAX_SIGNIFICANCE // int(significance)


def _check_pair(reference: np.ndarray, captured: np.ndarray) -> None:
    for name, image in (('reference', reference), ('captured', captured)):
        if not isinstance(image, np.ndarray):
            raise PreconditionError(f"{name} image must be a numpy array")
        if image.ndim != 3 or image.shape[2] not in (3, 4):
            raise PreconditionError(f"{name} image must be HxWx3 or HxWx4, got shape {image.shape}")

    if reference.shape[:2] != captured.shape[:2]:
        raise DimensionMismatchError(reference.shape, captured.shape)
    if reference.shape[2] != captured.shape[2]:
        raise PreconditionError(
            f"Channel count differs: reference {reference.shape[2]}, captured {captured.shape[2]}"
        )


def compute_luma(pixels: np.ndarray, method: LumaMethod = LumaMethod.REC709) -> np.ndarray:
    """Reduce RGB(A) pixels to intensities in 0..255.

    Args:
        pixels: Array whose last axis holds R, G, B (and optionally A)
        method: Luma formula

    Returns:
        int32 array with the last axis dropped
    """
    if method == LumaMethod.OPENCV:
        flat = np.ascontiguousarray(pixels, dtype=np.uint8).reshape(-1, 1, pixels.shape[-1])
        if flat.shape[0] == 0:
            return np.zeros(pixels.shape[:-1], dtype=np.int32)
        code = cv2.COLOR_RGBA2GRAY if pixels.shape[-1] == 4 else cv2.COLOR_RGB2GRAY
        gray = cv2.cvtColor(flat, code)
        return gray.reshape(pixels.shape[:-1]).astype(np.int32)

    rgb = pixels[..., :3].astype(np.int32)
    weighted = (rgb[..., 0] * LUMA_WEIGHTS[0]
                + rgb[..., 1] * LUMA_WEIGHTS[1]
                + rgb[..., 2] * LUMA_WEIGHTS[2])
    return weighted // LUMA_SCALE


def find_diffs(
    reference: np.ndarray,
    captured: np.ndarray,
    significance: int,
    luma_method: LumaMethod = LumaMethod.REC709
) -> List[Point]:
    """Find pixels whose luma differs by more than 255 // significance.

    Neither image is modified. Pixels that are byte-identical across all
    channels are skipped before the luma comparison.

    Args:
        reference: Reference image (HxWx4 RGBA or HxWx3 RGB, uint8)
        captured: Captured image, same shape as reference
        significance: Sensitivity level in 1..255
        luma_method: Luma formula

    Returns:
        Differing coordinates in row-major order
    """
    _check_pair(reference, captured)
    threshold = significance_threshold(significance)

    changed = np.any(reference != captured, axis=2)
    ys, xs = np.nonzero(changed)
    if ys.size == 0:
        return []

    ref_luma = compute_luma(reference[ys, xs], luma_method)
    capt_luma = compute_luma(captured[ys, xs], luma_method)
    significant = np.abs(ref_luma - capt_luma) > threshold

    return [Point(int(x), int(y)) for x, y in zip(xs[significant], ys[significant])]


def mark_points(
    image: np.ndarray,
    points: Sequence[Point],
    color: Tuple[int, ...] = DIFF_COLOR
) -> np.ndarray:
    """Overwrite the pixels at points with color, in place.

    Returns the same array for chaining.
    """
    if not points:
        return image

    xs = np.fromiter((p.x for p in points), dtype=np.intp, count=len(points))
    ys = np.fromiter((p.y for p in points), dtype=np.intp, count=len(points))
    image[ys, xs] = np.asarray(color[:image.shape[2]], dtype=image.dtype)
    return image


def detect(
    reference: np.ndarray,
    captured: np.ndarray,
    significance: int,
    color: Tuple[int, ...] = DIFF_COLOR,
    luma_method: LumaMethod = LumaMethod.REC709
) -> DiffResult:
    """Find significant diffs and mark them on the captured image.

    The captured buffer is mutated in place, and only once every point has
    been found. On a precondition failure neither buffer is touched.

    Args:
        reference: Reference image, read only
        captured: Captured image, receives the markers
        significance: Sensitivity level in 1..255
        color: Marker color
        luma_method: Luma formula

    Returns:
        DiffResult(marked_image, points, width, height, count)
    """
    points = find_diffs(reference, captured, significance, luma_method)
    marked = mark_points(captured, points, color)
    height, width = captured.shape[:2]
    return DiffResult(marked, points, int(width), int(height), len(points))


__all__ = [
    'DiffResult', 'LUMA_WEIGHTS', 'LUMA_SCALE',
    'significance_threshold', 'compute_luma',
    'find_diffs', 'mark_points', 'detect'
]
