"""Drawing primitives for numpy RGB buffers of shape (height, width, 3)."""

import numpy as np
from numpy.typing import NDArray

from pixeldino.core.character import Layout

# Type aliases
Color = tuple[int, int, int]
Buffer = NDArray[np.uint8]


def create_buffer(width: int, height: int, color: Color = (0, 0, 0)) -> Buffer:
    buffer = np.zeros((height, width, 3), dtype=np.uint8)
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
    """Draw a filled rectangle, clipped to the buffer."""
    h, w = buffer.shape[:2]

    x1 = max(0, min(x, w))
    y1 = max(0, min(y, h))
    x2 = max(0, min(x + width, w))
    y2 = max(0, min(y + height, h))

    buffer[y1:y2, x1:x2] = color


def paint_layout(
    buffer: Buffer,
    layout: Layout,
    row: float,
    col: float,
    palette: list[Color | None],
    cell_size: int,
) -> None:
    """Paint a layout grid with its top-left corner at pixel (row, col).

    Each cell becomes a ``cell_size`` square. Cells whose palette entry is
    None (or out of range) are left untouched. Parts outside the buffer are
    clipped.

    Args:
        buffer: Target numpy array (height, width, 3)
        layout: Grid of palette indices
        row: Top edge in pixels, may be fractional or negative
        col: Left edge in pixels, may be fractional or negative
        palette: RGB color per palette index
        cell_size: Size of one cell in pixels
    """
    h, w = buffer.shape[:2]
    grid = np.asarray(layout, dtype=np.int16)

    # Expand every cell to a cell_size x cell_size block
    pixels = np.repeat(np.repeat(grid, cell_size, axis=0), cell_size, axis=1)

    top = int(row)
    left = int(col)
    y1, x1 = max(0, top), max(0, left)
    y2, x2 = min(h, top + pixels.shape[0]), min(w, left + pixels.shape[1])
    if y1 >= y2 or x1 >= x2:
        return

    visible = pixels[y1 - top:y2 - top, x1 - left:x2 - left]
    target = buffer[y1:y2, x1:x2]
    for index, color in enumerate(palette):
        if color is None:
            continue
        target[visible == index] = color
