"""
Vector primitives and collision test for the runner simulation.

Row is the vertical screen axis (gravity acts on it), column is the
horizontal scroll axis (the world scrolls with negative column velocity).
"""

from dataclasses import dataclass


@dataclass
class Vector:
    """A mutable (row, col) pair.

    ``add`` and ``sub`` mutate in place and return ``self`` so calls can be
    chained (``FLOOR.clone().add(Velocity(0, -1))``). Use ``clone`` whenever
    an independent copy is needed.
    """

    row: float = 0.0
    col: float = 0.0

    def add(self, other: "Vector") -> "Vector":
        self.row += other.row
        self.col += other.col
        return self

    def sub(self, other: "Vector") -> "Vector":
        self.row -= other.row
        self.col -= other.col
        return self

    def clone(self) -> "Vector":
        return type(self)(self.row, self.col)

    def get(self) -> tuple[float, float]:
        return (self.row, self.col)


class Position(Vector):
    """Top-left corner of a sprite on the canvas."""


class Velocity(Vector):
    """Per-tick displacement."""


def apply_velocity_to_position(position: Position, velocity: Velocity) -> Position:
    """Return ``position + velocity`` without touching ``position``."""
    return Position(position.row + velocity.row, position.col + velocity.col)


def is_collided(
    a_row: float,
    a_col: float,
    a_height: int,
    a_width: int,
    b_row: float,
    b_col: float,
    b_height: int,
    b_width: int,
) -> bool:
    """Axis-aligned bounding box overlap of two grid sprites.

    Rectangles are given as top-left corner plus grid dimensions. Touching
    edges do not count as a hit. The box ignores transparent cells, so sprites
    with empty corners can report a hit before their painted cells meet.
    """
    return (
        a_row < b_row + b_height
        and a_row + a_height > b_row
        and a_col < b_col + b_width
        and a_col + a_width > b_col
    )
