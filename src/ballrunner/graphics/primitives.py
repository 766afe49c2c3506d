"""Basic drawing primitives for BALLRUNNER framebuffers."""

from typing import Tuple
import numpy as np
from numpy.typing import NDArray

# Type aliases
Color = Tuple[int, int, int]
Buffer = NDArray[np.uint8]


def new_buffer(width: int, height: int, color: Color = (0, 0, 0)) -> Buffer:
    """Allocate a (height, width, 3) RGB buffer."""
    buffer = np.zeros((max(0, height), max(0, width), 3), dtype=np.uint8)
    if color != (0, 0, 0):
        buffer[:, :] = color
    return buffer


def fill(buffer: Buffer, color: Color) -> None:
    """Fill entire buffer with color."""
    buffer[:, :] = color


def draw_rect(
    buffer: Buffer,
    x: int,
    y: int,
    width: int,
    height: int,
    color: Color,
) -> None:
    """Fill a rectangle, clipped to the buffer.

    Args:
        buffer: Target numpy array (height, width, 3)
        x: Left edge x coordinate
        y: Top edge y coordinate
        width: Rectangle width
        height: Rectangle height
        color: RGB color tuple
    """
    h, w = buffer.shape[:2]

    # Clamp to buffer bounds
    x1 = max(0, min(x, w))
    y1 = max(0, min(y, h))
    x2 = max(0, min(x + width, w))
    y2 = max(0, min(y + height, h))

    if x2 <= x1 or y2 <= y1:
        return

    buffer[y1:y2, x1:x2] = color


def draw_circle(
    buffer: Buffer,
    cx: int,
    cy: int,
    radius: int,
    color: Color,
) -> None:
    """Draw a filled circle on the buffer.

    Args:
        buffer: Target numpy array (height, width, 3)
        cx: Center x coordinate
        cy: Center y coordinate
        radius: Circle radius in pixels
        color: RGB color tuple
    """
    h, w = buffer.shape[:2]
    y_indices, x_indices = np.ogrid[:h, :w]
    dist_sq = (x_indices - cx) ** 2 + (y_indices - cy) ** 2
    mask = dist_sq <= radius ** 2
    buffer[mask] = color
