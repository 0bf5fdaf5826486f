"""Runner game: layouts, spawn tables, simulation and engine."""

from .simulation import GameRules, GameState, AllocatorGroups, TickReport, advance
from .allocators import build_allocators
from .engine import GameEngine, FrameSnapshot, Sprite

__all__ = [
    "GameRules",
    "GameState",
    "AllocatorGroups",
    "TickReport",
    "advance",
    "build_allocators",
    "GameEngine",
    "FrameSnapshot",
    "Sprite",
]
