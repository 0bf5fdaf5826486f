"""Canvas renderer: turns a FrameSnapshot into an RGB buffer.

Text is not rasterized here. ``text_items`` describes what to write and
where, and the host window draws it with its own font.
"""

from dataclasses import dataclass
import logging
import random

import numpy as np
from numpy.typing import NDArray

from pixeldino.animation.particles import ParticleEmitter, ParticlePresets
from pixeldino.config.themes import Theme
from pixeldino.core.state import Phase
from pixeldino.game.collaborators import CelebrationEffect
from pixeldino.game.engine import PROMPT_NEW_HIGH_SCORE, FrameSnapshot
from pixeldino.graphics.primitives import Color, create_buffer, draw_rect, fill, paint_layout

logger = logging.getLogger(__name__)

HIGH_SCORE_COLOR: Color = (0x22, 0xC5, 0x5E)
ROAD_THICKNESS = 1


class SurfaceError(Exception):
    """The drawing surface cannot be created."""


@dataclass
class TextItem:
    """A line of text to draw over the canvas.

    ``anchor`` is "center" (x, y is the text center) or "topright".
    """
    text: str
    x: float
    y: float
    color: Color
    size: int
    anchor: str = "center"


def format_score_line(high_score: int, score: int) -> str:
    """``H I     0 1 2 0     0 0 4 2`` style score card."""
    def spaced(value: int) -> str:
        return " ".join(str(int(value)).zfill(4))

    return f"H I     {spaced(high_score)}     {spaced(score)}"


class CanvasRenderer(CelebrationEffect):
    """Paints snapshots onto a (rows, columns, 3) numpy buffer."""

    def __init__(
        self,
        rows: int,
        columns: int,
        cell_size: int = 2,
        road_row: int = 232,
        rng: random.Random | None = None,
    ):
        self.cell_size = cell_size
        self.road_row = road_row
        self.rows = 0
        self.columns = 0
        self.buffer: NDArray[np.uint8] = np.zeros((0, 0, 3), dtype=np.uint8)
        self._confetti = ParticleEmitter(ParticlePresets.confetti(0, 0), rng=rng)
        self.resize(rows, columns)

    def resize(self, rows: int, columns: int) -> None:
        if rows <= 0 or columns <= 0:
            raise SurfaceError(f"Invalid canvas size {columns}x{rows}")
        if self.cell_size <= 0:
            raise SurfaceError(f"Invalid cell size {self.cell_size}")

        self.rows = rows
        self.columns = columns
        self.buffer = create_buffer(columns, rows)
        logger.debug(f"Canvas buffer {columns}x{rows}")

    def celebrate(self) -> None:
        """Confetti burst from the upper middle of the canvas."""
        self._confetti.set_position(self.columns / 2, self.rows / 3)
        self._confetti.burst()

    @property
    def confetti_active(self) -> int:
        return self._confetti.get_active_count()

    def update(self, delta_ms: float) -> None:
        """Advance time-based effects. Runs every frame, whatever the phase."""
        self._confetti.update(delta_ms)

    def render(self, snapshot: FrameSnapshot, theme: Theme) -> NDArray[np.uint8]:
        """Draw the frame and return the buffer."""
        buffer = self.buffer
        palette = theme.palette_rgb()

        fill(buffer, theme.rgb("background"))
        draw_rect(buffer, 0, self.road_row, self.columns, ROAD_THICKNESS, theme.rgb("road"))

        for sprite in snapshot.sprites:
            paint_layout(buffer, sprite.layout, sprite.row, sprite.col, palette, self.cell_size)

        if snapshot.retry is not None:
            retry = snapshot.retry
            paint_layout(buffer, retry.layout, retry.row, retry.col, palette, self.cell_size)

        self._confetti.render(buffer)
        return buffer

    def text_items(self, snapshot: FrameSnapshot, theme: Theme) -> list[TextItem]:
        """Score card, phase prompt and high score banner for this frame."""
        items = [
            TextItem(
                format_score_line(snapshot.high_score, snapshot.score),
                self.columns - 20,
                30,
                theme.rgb("score_text"),
                size=20,
                anchor="topright",
            )
        ]

        if snapshot.prompt:
            size = 15 if snapshot.phase == Phase.READY else 20
            items.append(TextItem(
                snapshot.prompt,
                self.columns / 2,
                self.rows / 2 - 50,
                theme.rgb("info_text"),
                size=size,
            ))

        if snapshot.phase == Phase.OVER and snapshot.new_high_score:
            items.append(TextItem(
                PROMPT_NEW_HIGH_SCORE,
                self.columns / 2,
                self.rows / 2 - 80,
                HIGH_SCORE_COLOR,
                size=14,
            ))

        return items
