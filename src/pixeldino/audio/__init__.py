"""
pixeldino audio - synthesized chiptune effects.
"""

from .engine import AudioEngine

__all__ = ["AudioEngine"]
