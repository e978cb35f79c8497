"""Defect rate shown to the operator after a diff."""
from .errors import ImageTooSmallError, PreconditionError


def defect_rate(width: int, height: int, count: int) -> float:
    """Defect pixels per 1% of the image area.

    The area is divided by 100 with integer division before the ratio is
    taken, so images below 100 pixels have no valid divisor.

    Args:
        width: Image width in pixels
        height: Image height in pixels
        count: Number of defect pixels

    Returns:
        count / ((width * height) // 100)

    Raises:
        ImageTooSmallError: if width * height < 100
    """
    if width < 0 or height < 0 or count < 0:
        raise PreconditionError(
            f"width, height and count must be non-negative, got {width}, {height}, {count}"
        )

    dim = (width * height) // 100
    if dim == 0:
        raise ImageTooSmallError(width, height)

    return count / dim


def format_defect_rate(rate: float) -> str:
    return f"Total Defect Rate = {rate}%"


__all__ = ['defect_rate', 'format_defect_rate']
