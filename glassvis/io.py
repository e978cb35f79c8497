"""Image I/O helpers.

Buffers handed to the diff core are RGBA uint8 numpy arrays. read_image()
tries OpenCV first and Pillow as a fallback; save_image() encodes with
OpenCV. Also holds the display preparation applied to every loaded image.
"""
import os
from pathlib import Path
from typing import Union

import cv2
import numpy as np
from PIL import Image, ImageFilter

from .config import DisplayConfig
from .errors import ImageReadError, ImageWriteError


IMAGE_EXTS = (".bmp", ".gif", ".jpg", ".jpeg", ".png", ".pnm", ".tga", ".tiff", ".webp")

# Encoders without an alpha channel
OPAQUE_EXTS = {".jpg", ".jpeg", ".bmp", ".pnm", ".ppm", ".pgm"}


def is_image_file(path: Union[str, Path]) -> bool:
    """Check whether a path names one of the supported image formats."""
    return os.path.splitext(str(path))[1].lower() in IMAGE_EXTS


def to_rgba(image: np.ndarray) -> np.ndarray:
    """Convert an OpenCV-decoded array (gray, BGR or BGRA) to RGBA."""
    if image.ndim == 2:
        return cv2.cvtColor(image, cv2.COLOR_GRAY2RGBA)
    if image.shape[2] == 4:
        return cv2.cvtColor(image, cv2.COLOR_BGRA2RGBA)
    return cv2.cvtColor(image, cv2.COLOR_BGR2RGBA)


def read_image(path: Union[str, Path]) -> np.ndarray:
    """Read an image from disk and return an RGBA uint8 numpy array.

    Tries OpenCV first, then PIL (which also covers GIF and TGA).

    Args:
        path: Path to image file

    Returns:
        HxWx4 RGBA uint8 numpy array

    Raises:
        ImageReadError: if no reader can decode the file
    """
    path = str(path)
    if not os.path.exists(path):
        raise ImageReadError(f"No image found at {path}")

    img = cv2.imread(path, cv2.IMREAD_UNCHANGED)
    if img is not None:
        if img.dtype == np.uint16:
            img = cv2.convertScaleAbs(img, alpha=255.0 / 65535)
        elif img.dtype != np.uint8:
            img = (np.clip(img, 0, 1) * 255).astype(np.uint8)
        return to_rgba(img)

    # PIL fallback
    try:
        with Image.open(path) as pil:
            return np.array(pil.convert("RGBA"))
    except Exception as e:
        raise ImageReadError(f"Failed to read image {path} with available readers: {e}") from e


def save_image(image: np.ndarray, path: Union[str, Path]) -> str:
    """Encode an RGBA image to disk.

    Tries OpenCV first, then PIL for formats OpenCV has no writer for
    (TGA, and GIF on most builds). Alpha is dropped for formats that cannot
    store it.

    Args:
        image: RGBA (or RGB) numpy array
        path: Output path, parent directories are created

    Returns:
        The path written

    Raises:
        ImageWriteError: if no writer can encode the image
    """
    path = str(path)
    Path(path).parent.mkdir(parents=True, exist_ok=True)
    ext = os.path.splitext(path)[1].lower()

    if cv2.haveImageWriter(path):
        if image.ndim == 3 and image.shape[2] == 4:
            code = cv2.COLOR_RGBA2BGR if ext in OPAQUE_EXTS else cv2.COLOR_RGBA2BGRA
        else:
            code = cv2.COLOR_RGB2BGR
        bgr = cv2.cvtColor(image, code)
        try:
            ok = cv2.imwrite(path, bgr)
        except cv2.error as e:
            raise ImageWriteError(f"Failed to write image {path}: {e}") from e
        if not ok:
            raise ImageWriteError(f"Failed to write image {path}")
        return path

    # PIL fallback
    try:
        pil = Image.fromarray(image)
        if ext in OPAQUE_EXTS and pil.mode == "RGBA":
            pil = pil.convert("RGB")
        pil.save(path)
    except (OSError, ValueError, KeyError) as e:
        raise ImageWriteError(f"Failed to write image {path} with available writers: {e}") from e
    return path


def fit_resize(image: np.ndarray, config: DisplayConfig = None) -> np.ndarray:
    """Scale an image to fit the display box, keeping the aspect ratio.

    Upscales as well as downscales, then applies a light unsharp mask to
    recover edges softened by the interpolation.
    """
    if config is None:
        config = DisplayConfig()

    h, w = image.shape[:2]
    scale = min(config.max_width / w, config.max_height / h)
    new_w, new_h = max(int(w * scale), 1), max(int(h * scale), 1)

    resized = cv2.resize(image, (new_w, new_h), interpolation=cv2.INTER_CUBIC)

    pil = Image.fromarray(resized)
    sharpened = pil.filter(ImageFilter.UnsharpMask(
        radius=config.unsharpen_radius,
        percent=config.unsharpen_percent,
        threshold=config.unsharpen_threshold
    ))
    return np.array(sharpened)


def output_path(prefix: str, source: Union[str, Path], data_dir: Union[str, Path] = "data") -> Path:
    """Path under <data_dir>/output for a file derived from source.

    output_path("diff", "/tmp/board_capt.png") -> data/output/diffboard_capt.png
    """
    return Path(data_dir) / "output" / f"{prefix}{Path(source).name}"


__all__ = [
    'IMAGE_EXTS', 'is_image_file', 'to_rgba',
    'read_image', 'save_image', 'fit_resize', 'output_path'
]
