"""Graphics: numpy drawing primitives and the canvas renderer."""

from pixeldino.graphics.primitives import create_buffer, draw_rect, fill, paint_layout
from pixeldino.graphics.renderer import (
    CanvasRenderer,
    SurfaceError,
    TextItem,
    format_score_line,
)

__all__ = [
    "CanvasRenderer",
    "SurfaceError",
    "TextItem",
    "format_score_line",
    "create_buffer",
    "draw_rect",
    "fill",
    "paint_layout",
]
