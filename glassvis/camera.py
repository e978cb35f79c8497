"""Single-frame capture from a camera device."""
import os
from datetime import datetime
from pathlib import Path

import cv2

from .config import CameraConfig
from .errors import CameraError


def capture_frame(config: CameraConfig = None, output_dir: str = ".") -> str:
    """Grab one frame and save it as frame-<timestamp>.jpg.

    Cameras often return empty frames while warming up, so reading is
    retried up to config.max_read_attempts times.

    Args:
        config: Camera configuration (uses defaults if None)
        output_dir: Directory for the saved frame

    Returns:
        Path of the saved JPEG

    Raises:
        CameraError: if the device cannot be opened, yields no frame, or
            the frame cannot be written
    """
    if config is None:
        config = CameraConfig()

    time_stamp = datetime.now().strftime("%Y%m%d_%H%M%S_%f")

    cap = cv2.VideoCapture(config.device)
    try:
        if not cap.isOpened():
            raise CameraError(f"Cannot open camera device {config.device}")

        width, height = config.resolution
        cap.set(cv2.CAP_PROP_FRAME_WIDTH, width)
        cap.set(cv2.CAP_PROP_FRAME_HEIGHT, height)
        cap.set(cv2.CAP_PROP_FPS, config.fps)

        frame = None
        for _ in range(config.max_read_attempts):
            ret, frame = cap.read()
            if ret and frame is not None and frame.size > 0:
                break
            frame = None

        if frame is None:
            raise CameraError(
                f"Camera {config.device} returned no frame after {config.max_read_attempts} attempts"
            )
    finally:
        cap.release()

    os.makedirs(output_dir, exist_ok=True)
    path = str(Path(output_dir) / f"frame-{time_stamp}.jpg")
    if not cv2.imwrite(path, frame):
        raise CameraError(f"Failed to write frame to {path}")
    return path


__all__ = ['capture_frame']
