"""Core inspection pipeline logic.

Runs the full diff flow: detection, optional bounding box outline, defect
rate and SSIM summary. Used by both the GUI and the command line.
"""
import time
from typing import Optional

import numpy as np

from .bounding import bounding_box, clamp_rect
from .config import GlassvisConfig, get_default_config
from .errors import ImageReadError, ImageTooSmallError
from .io import fit_resize, is_image_file, output_path, read_image, save_image
from .overlay import draw_outline
from .pixel_diff import detect, significance_threshold
from .rate import defect_rate, format_defect_rate
from .session import DIFF_PREFIX, PREPARED_PREFIX
from .ssim import calc_ssim


def prepare_image(path: str, config: GlassvisConfig = None) -> str:
    """Load an image, fit it to the display box and store the working copy.

    Args:
        path: Source image chosen by the user
        config: Configuration (uses defaults if None)

    Returns:
        Path of the prepared copy under <data_dir>/output
    """
    if config is None:
        config = get_default_config()

    if not is_image_file(path):
        raise ImageReadError(f"Unsupported image file: {path}")

    image = fit_resize(read_image(path), config.display)
    prepared = output_path(PREPARED_PREFIX, path, config.display.data_dir)
    return save_image(image, prepared)


def run_diff(
    reference: np.ndarray,
    captured: np.ndarray,
    significance: Optional[int] = None,
    draw_bounding_box: Optional[bool] = None,
    config: GlassvisConfig = None,
    verbose: bool = True
) -> dict:
    """Run the diff pipeline on two in-memory images.

    The captured array receives the red diff markers in place. The returned
    'marked_image' additionally carries the bounding box outline when
    enabled; it is a new array in that case.

    Args:
        reference: Reference image (RGBA)
        captured: Captured image (RGBA), same size as reference
        significance: Sensitivity level 1..255 (config value if None)
        draw_bounding_box: Outline the defect region (config value if None)
        config: Configuration (uses defaults if None)
        verbose: Print progress messages

    Returns:
        Dictionary with the marked image, defect points, counts and metrics
    """
    if config is None:
        config = get_default_config()
    diff_config = config.diff
    if significance is None:
        significance = diff_config.significance
    if draw_bounding_box is None:
        draw_bounding_box = diff_config.draw_bounding_box

    start_time = time.time()
    threshold = significance_threshold(significance)

    # -------------------------------------------------------------------------
    # STEP 1: Structural similarity of the untouched pair
    # -------------------------------------------------------------------------
    ssim_score, ssim_heatmap = calc_ssim(reference, captured, diff_config.luma_method)

    # The rate needs an area of at least 100 pixels; check before marking
    height, width = captured.shape[:2]
    if (width * height) // 100 == 0:
        raise ImageTooSmallError(width, height)

    # -------------------------------------------------------------------------
    # STEP 2: Pixel diff
    # -------------------------------------------------------------------------
    if verbose:
        print(f"[1] Finding pixel diffs (significance={significance}, threshold={threshold})...")

    marked, points, width, height, count = detect(
        reference, captured, significance,
        color=diff_config.diff_color,
        luma_method=diff_config.luma_method
    )

    if verbose:
        print(f"    Defect pixels: {count}")

    # -------------------------------------------------------------------------
    # STEP 3: Bounding box
    # -------------------------------------------------------------------------
    rect = None
    if draw_bounding_box and points:
        rect = bounding_box(points)
        if diff_config.clamp_bounding_box:
            rect = clamp_rect(rect, width, height)
        marked = draw_outline(marked, rect, diff_config.box_color, diff_config.outline_thickness)

        if verbose:
            print(f"[2] Bounding box: x={rect.x}, y={rect.y}, w={rect.width}, h={rect.height}")

    # -------------------------------------------------------------------------
    # STEP 4: Defect rate
    # -------------------------------------------------------------------------
    rate = defect_rate(width, height, count)
    message = format_defect_rate(rate)
    processing_time = time.time() - start_time

    if verbose:
        print(f"    {message}")
        print(f"    SSIM Score: {ssim_score:.4f}")
        print(f"Processing time: {processing_time:.2f}s")

    return {
        'marked_image': marked,
        'points': points,
        'count': count,
        'width': width,
        'height': height,
        'significance': int(significance),
        'defect_rate': rate,
        'message': message,
        'bounding_box': rect,
        'ssim_score': ssim_score,
        'ssim_heatmap': ssim_heatmap,
        'processing_time': processing_time
    }


def run_diff_files(
    reference_path: str,
    captured_path: str,
    significance: Optional[int] = None,
    draw_bounding_box: Optional[bool] = None,
    config: GlassvisConfig = None,
    verbose: bool = True
) -> dict:
    """Run the diff pipeline on two image files and save the marked result.

    The source files are never modified; the marked image is written to
    <data_dir>/output/diff<captured name>.

    Returns:
        run_diff() result plus 'reference_path', 'captured_path', 'diff_path'
    """
    if config is None:
        config = get_default_config()

    if verbose:
        print(f"Reference: {reference_path}")
        print(f"Captured:  {captured_path}")

    reference = read_image(reference_path)
    captured = read_image(captured_path)

    result = run_diff(reference, captured, significance, draw_bounding_box,
                      config=config, verbose=verbose)

    diff_path = output_path(DIFF_PREFIX, captured_path, config.display.data_dir)
    result['diff_path'] = save_image(result['marked_image'], diff_path)
    result['reference_path'] = str(reference_path)
    result['captured_path'] = str(captured_path)

    if verbose:
        print(f"Diff saved to: {result['diff_path']}")

    return result


__all__ = ['prepare_image', 'run_diff', 'run_diff_files']
