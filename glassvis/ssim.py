"""SSIM summary of an image pair, reported next to the defect rate."""
import cv2
import numpy as np
from skimage.metrics import structural_similarity

from .config import LumaMethod
from .errors import DimensionMismatchError
from .pixel_diff import compute_luma


DEFAULT_WIN_SIZE = 7


def calc_ssim(image1: np.ndarray, image2: np.ndarray,
              luma_method: LumaMethod = LumaMethod.REC709) -> tuple:
    """Compute SSIM between the luma planes of two RGB(A) images.

    Args:
        image1: First image (RGBA or RGB)
        image2: Second image, same size

    Returns:
        Tuple of (score, heatmap):
        - score: float in range [-1, 1], where 1.0 means identical
        - heatmap: RGBA image, bright where the images disagree
    """
    if image1.shape[:2] != image2.shape[:2]:
        raise DimensionMismatchError(image1.shape, image2.shape)

    h, w = image1.shape[:2]
    gray1 = compute_luma(image1, luma_method).astype(np.uint8)
    gray2 = compute_luma(image2, luma_method).astype(np.uint8)

    win_size = min(DEFAULT_WIN_SIZE, h, w)
    if win_size % 2 == 0:
        win_size -= 1
    if win_size < 3:
        # Too small for a sliding window
        score = 1.0 if np.array_equal(gray1, gray2) else 0.0
        return score, np.zeros((h, w, 4), dtype=np.uint8)

    score, ssim_map = structural_similarity(gray1, gray2, full=True,
                                            win_size=win_size, data_range=255)

    # Invert so anomalies (low SSIM) are high values (bright)
    anomaly_map = 1.0 - np.clip(ssim_map, 0, 1)
    anomaly_map_uint8 = (anomaly_map * 255).astype(np.uint8)
    heatmap = cv2.applyColorMap(anomaly_map_uint8, cv2.COLORMAP_JET)

    return float(score), cv2.cvtColor(heatmap, cv2.COLOR_BGR2RGBA)


__all__ = ['calc_ssim']
