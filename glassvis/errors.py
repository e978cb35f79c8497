"""Exception types raised by the inspection core and its collaborators.

Precondition failures derive from ValueError so callers that only know the
builtin hierarchy still catch them; I/O and camera failures derive from
RuntimeError like the readers they wrap.
"""


class GlassvisError(Exception):
    """Base class for all Glassvis errors."""


class PreconditionError(GlassvisError, ValueError):
    """An operation was called with inputs it cannot work on."""


class DimensionMismatchError(PreconditionError):
    """Reference and captured images do not share width and height."""

    def __init__(self, reference_shape, captured_shape):
        self.reference_shape = tuple(reference_shape)
        self.captured_shape = tuple(captured_shape)
        super().__init__(
            f"Image dimensions differ: reference {self.reference_shape[1]}x{self.reference_shape[0]}, "
            f"captured {self.captured_shape[1]}x{self.captured_shape[0]}"
        )


class InvalidSignificanceError(PreconditionError):
    """Significance level outside 1..255."""

    def __init__(self, significance):
        self.significance = significance
        super().__init__(f"Significance must be an integer in 1..255, got {significance!r}")


class EmptyPointSetError(PreconditionError):
    """Bounding box requested for an empty set of points."""

    def __init__(self):
        super().__init__("Cannot compute a bounding box of zero points")


class ImageTooSmallError(PreconditionError):
    """Image area is below 100 pixels, so the defect rate has no divisor."""

    def __init__(self, width, height):
        self.width = width
        self.height = height
        super().__init__(f"Image {width}x{height} is smaller than 100 pixels")


class ConfigError(PreconditionError):
    """Settings file is not valid JSON or holds a value of the wrong type."""


class ImageIOError(GlassvisError, RuntimeError):
    """Base for image decode/encode failures."""


class ImageReadError(ImageIOError):
    pass


class ImageWriteError(ImageIOError):
    pass


class CameraError(GlassvisError, RuntimeError):
    """Camera device could not be opened or returned no frame."""


__all__ = [
    'GlassvisError', 'PreconditionError',
    'DimensionMismatchError', 'InvalidSignificanceError',
    'EmptyPointSetError', 'ImageTooSmallError', 'ConfigError',
    'ImageIOError', 'ImageReadError', 'ImageWriteError',
    'CameraError'
]
