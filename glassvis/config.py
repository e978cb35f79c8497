"""Centralized configuration for Glassvis.

Dataclass configs for the diff core, display preparation and camera capture.
JSON persistence of these settings lives in json_config.
"""
from enum import Enum
from dataclasses import dataclass, field
from typing import Tuple
import copy


# Marker colors are RGBA. Alpha is written as 0, the value the diff and
# outline markers have always carried.
DIFF_COLOR: Tuple[int, int, int, int] = (255, 0, 0, 0)
BOX_COLOR: Tuple[int, int, int, int] = (0, 255, 0, 0)

MIN_SIGNIFICANCE = 1
MAX_SIGNIFICANCE = 255
DEFAULT_SIGNIFICANCE = 10


class LumaMethod(Enum):
    """How a RGBA pixel is reduced to a single intensity."""
    REC709 = "rec709"    # Integer Rec. 709 weights (default)
    OPENCV = "opencv"    # cv2.cvtColor RGBA2GRAY, Rec. 601 weights


@dataclass
class DiffConfig:
    """Configuration for the diff core."""

    significance: int = DEFAULT_SIGNIFICANCE  # 1..255, threshold = 255 // significance
    draw_bounding_box: bool = True
    clamp_bounding_box: bool = False          # Clip the padded box to the image
    luma_method: LumaMethod = LumaMethod.REC709

    diff_color: Tuple[int, int, int, int] = DIFF_COLOR
    box_color: Tuple[int, int, int, int] = BOX_COLOR
    outline_thickness: int = 1


@dataclass
class DisplayConfig:
    """Configuration for preparing loaded images and the image views."""

    max_width: int = 600
    max_height: int = 800
    unsharpen_radius: float = 0.25
    unsharpen_percent: int = 100
    unsharpen_threshold: int = 0

    zoom_step: Tuple[int, int] = (60, 80)     # (width, height) per zoom click

    data_dir: str = "data"
    log_file: str = "inspection_log.csv"


@dataclass
class CameraConfig:
    """Configuration for single-frame capture."""

    device: int = 0
    resolution: Tuple[int, int] = (1280, 720)
    fps: int = 30
    max_read_attempts: int = 30


@dataclass
class GlassvisConfig:
    """Master configuration combining all sub-configs."""

    diff: DiffConfig = field(default_factory=DiffConfig)
    display: DisplayConfig = field(default_factory=DisplayConfig)
    camera: CameraConfig = field(default_factory=CameraConfig)


# Global default configuration
DEFAULT_CONFIG = GlassvisConfig()


def get_default_config() -> GlassvisConfig:
    """Get a copy of the default configuration."""
    return copy.deepcopy(DEFAULT_CONFIG)


__all__ = [
    'DIFF_COLOR', 'BOX_COLOR',
    'MIN_SIGNIFICANCE', 'MAX_SIGNIFICANCE', 'DEFAULT_SIGNIFICANCE',
    'LumaMethod', 'DiffConfig', 'DisplayConfig', 'CameraConfig',
    'GlassvisConfig', 'DEFAULT_CONFIG', 'get_default_config'
]
