"""Glassvis - visual quality control by reference/captured image diffing.

Main modules:
- pixel_diff: Luma diff with significance threshold, marking
- bounding: Padded bounding box of defect pixels
- overlay: Rectangle outline rendering
- rate: Defect rate reporting
- ssim: Structural similarity summary
- io: Image I/O and display preparation
- session: Per-window inspection state
- pipeline: Full diff flow on buffers or files
- analysis: JSON export and CSV log
- camera: Single-frame capture
- config / json_config: Dataclass configuration and JSON settings
"""

# Core
from .geometry import Point, Rect
from .errors import (
    GlassvisError,
    PreconditionError,
    DimensionMismatchError,
    InvalidSignificanceError,
    EmptyPointSetError,
    ImageTooSmallError,
    ConfigError,
    ImageIOError,
    ImageReadError,
    ImageWriteError,
    CameraError
)
from .config import (
    DIFF_COLOR,
    BOX_COLOR,
    LumaMethod,
    DiffConfig,
    DisplayConfig,
    CameraConfig,
    GlassvisConfig,
    get_default_config
)
from .pixel_diff import DiffResult, find_diffs, mark_points, detect
from .bounding import bounding_box, clamp_rect
from .overlay import draw_outline
from .rate import defect_rate, format_defect_rate

# Collaborators
from .io import read_image, save_image, fit_resize, is_image_file
from .ssim import calc_ssim
from .session import InspectionSession
from .pipeline import prepare_image, run_diff, run_diff_files
from .analysis import export_results_as_json, log_result
from .camera import capture_frame
from .json_config import load_glassvis_config, save_glassvis_config

__version__ = "1.0.0"
__all__ = [
    # Primitives
    'Point', 'Rect',
    # Errors
    'GlassvisError', 'PreconditionError', 'DimensionMismatchError',
    'InvalidSignificanceError', 'EmptyPointSetError', 'ImageTooSmallError', 'ConfigError',
    'ImageIOError', 'ImageReadError', 'ImageWriteError', 'CameraError',
    # Config
    'DIFF_COLOR', 'BOX_COLOR', 'LumaMethod', 'DiffConfig', 'DisplayConfig',
    'CameraConfig', 'GlassvisConfig', 'get_default_config',
    'load_glassvis_config', 'save_glassvis_config',
    # Core
    'DiffResult', 'find_diffs', 'mark_points', 'detect',
    'bounding_box', 'clamp_rect', 'draw_outline',
    'defect_rate', 'format_defect_rate',
    # Collaborators
    'read_image', 'save_image', 'fit_resize', 'is_image_file',
    'calc_ssim', 'InspectionSession',
    'prepare_image', 'run_diff', 'run_diff_files',
    'export_results_as_json', 'log_result', 'capture_frame',
    # GUI
    'InspectorApp'
]


# Lazy import for GUI to avoid tkinter dependency when not needed
def __getattr__(name):
    if name == 'InspectorApp':
        from .gui import InspectorApp
        return InspectorApp
    raise AttributeError(f"module {__name__!r} has no attribute {name!r}")
