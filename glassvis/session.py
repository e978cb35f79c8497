"""Per-window inspection state.

One InspectionSession is owned by each GUI window (or CLI run) and passed to
the handlers that need it: which files are loaded, which one the captured
view currently shows, the last diff output and the fullscreen flag.
"""
from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional

from .config import DEFAULT_SIGNIFICANCE


DIFF_PREFIX = "diff"
PREPARED_PREFIX = "_"
OUTPUT_DIR = "output"


@dataclass
class InspectionSession:
    """Mutable state shared by the handlers of one inspection window."""

    reference_path: Optional[str] = None
    captured_path: Optional[str] = None
    active_path: Optional[str] = None      # File currently shown in the captured view
    diff_path: Optional[str] = None
    fullscreen: bool = False

    significance: int = DEFAULT_SIGNIFICANCE
    draw_bounding_box: bool = True

    last_result: Optional[dict] = field(default=None, repr=False)

    @property
    def ready(self) -> bool:
        """Both images are loaded."""
        return bool(self.reference_path) and bool(self.captured_path)

    def set_reference(self, path: str) -> None:
        self.reference_path = path

    def set_captured(self, path: str) -> None:
        self.captured_path = path
        self.active_path = path

    def record_diff(self, diff_path: str, result: Optional[dict] = None) -> None:
        """Remember a diff output; the captured view switches to it."""
        self.diff_path = diff_path
        self.active_path = diff_path
        self.last_result = result

    def toggle_fullscreen(self) -> bool:
        self.fullscreen = not self.fullscreen
        return self.fullscreen

    def is_diff_output(self, path: str) -> bool:
        """A file written by a previous diff: the recorded one, or diff<name> in an output dir."""
        if self.diff_path and path == self.diff_path:
            return True
        p = Path(path)
        return p.name.startswith(DIFF_PREFIX) and p.parent.name == OUTPUT_DIR

    def normalized_captured_path(self) -> Optional[str]:
        """Captured file to diff against the reference.

        If the captured slot holds a previous diff output, diffing it again
        would compare against markers, so the captured file is derived from
        the reference name instead (``_ref`` replaced by ``_capt``). A
        reference without ``_ref`` in its name keeps the captured file.
        """
        if self.captured_path is None:
            return None
        if self.reference_path and self.is_diff_output(self.captured_path):
            derived = self.reference_path.replace("_ref", "_capt")
            if derived != self.reference_path:
                return derived
        return self.captured_path


__all__ = ['InspectionSession', 'DIFF_PREFIX', 'PREPARED_PREFIX', 'OUTPUT_DIR']
