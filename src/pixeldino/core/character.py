"""
Characters and probabilistic character allocators.

A CharacterMeta is a read-only template; a Character is the live entity
instantiated from it. Allocators own a list of templates and, on a randomized
cooldown, may emit one Character through a single-slot handoff.
"""

import logging
import random
from dataclasses import dataclass, field
from typing import Sequence

from pixeldino.core.physics import Position, Velocity

logger = logging.getLogger(__name__)

# A layout is a rectangular grid of palette indices.
Layout = tuple[tuple[int, ...], ...]


def validate_layout(layout: Sequence[Sequence[int]]) -> None:
    """Raise ValueError for empty or ragged grids."""
    if not layout or not layout[0]:
        raise ValueError("Layout grid must have at least one cell")
    width = len(layout[0])
    for row in layout:
        if len(row) != width:
            raise ValueError("Layout grid rows must all have the same width")


@dataclass(frozen=True)
class CharacterMeta:
    """Immutable template for a Character.

    Attributes:
        layouts: Animation frames, played in order and wrapped
        frame_interval: Ticks between frame switches (0 = static sprite)
        position: Spawn position
        velocity: Initial velocity
    """

    layouts: tuple[Layout, ...]
    frame_interval: int
    position: Position
    velocity: Velocity

    def __post_init__(self) -> None:
        if not self.layouts:
            raise ValueError("CharacterMeta needs at least one layout frame")
        for layout in self.layouts:
            validate_layout(layout)
        if self.frame_interval < 0:
            raise ValueError("frame_interval must be >= 0")


class Character:
    """A live, animated entity on the canvas."""

    def __init__(self, meta: CharacterMeta):
        self._layouts = meta.layouts
        self._frame_interval = meta.frame_interval
        self._position = meta.position.clone()
        self._velocity = meta.velocity.clone()
        self._frame_index = 0
        self._ticks = 0

    def tick(self) -> None:
        """Advance the animation counter and move by the current velocity."""
        self._ticks += 1
        if self._frame_interval > 0 and self._ticks > self._frame_interval:
            self._ticks = 0
            self._frame_index = (self._frame_index + 1) % len(self._layouts)

        self._position.add(self._velocity)

    def get_layout(self) -> Layout:
        return self._layouts[self._frame_index]

    def get_position(self) -> Position:
        return self._position

    def set_position(self, position: Position) -> None:
        self._position = position

    def get_velocity(self) -> Velocity:
        return self._velocity

    @property
    def frame_index(self) -> int:
        return self._frame_index

    @property
    def height(self) -> int:
        return len(self.get_layout())

    @property
    def width(self) -> int:
        return len(self.get_layout()[0])


@dataclass
class AllocatorCharacterArray:
    """Ordered (template, threshold) entries tried one after another.

    Each entry is an independent trial: a fresh uniform draw above the
    entry's threshold selects it. The first success wins; if every trial
    fails nothing is spawned.
    """

    entries: list[tuple[CharacterMeta, float]] = field(default_factory=list)

    def add_character(self, meta: CharacterMeta, threshold: float) -> "AllocatorCharacterArray":
        if self.entries and threshold >= self.entries[-1][1]:
            raise ValueError("Thresholds must be strictly decreasing")
        self.entries.append((meta, threshold))
        return self

    def pick(self, rng: random.Random) -> CharacterMeta | None:
        for meta, threshold in self.entries:
            if rng.random() > threshold:
                return meta
        return None

    def __len__(self) -> int:
        return len(self.entries)


class CharacterAllocator:
    """Spawns characters from an AllocatorCharacterArray on a cooldown.

    The countdown is decremented once per tick. When it reaches zero the
    array is sampled, and the countdown is re-drawn uniformly from
    ``[min_cooldown, max_cooldown]`` whether or not something spawned.

    The spawned character waits in a single slot. ``get_character`` hands
    it over and clears the slot; a spawn that is not collected before the
    next spawn is lost.
    """

    def __init__(
        self,
        characters: AllocatorCharacterArray,
        max_cooldown: int,
        min_cooldown: int,
        rng: random.Random | None = None,
    ):
        if max_cooldown < 0 or min_cooldown < 0:
            raise ValueError("Cooldowns must be >= 0")

        self._characters = characters
        # Some tables list the bounds the other way round.
        self.min_cooldown, self.max_cooldown = sorted((min_cooldown, max_cooldown))
        self._rng = rng or random.Random()
        self._pending: Character | None = None
        self.countdown = 0
        self.reset()

    def reset(self) -> None:
        """Drop any pending spawn and draw a fresh countdown."""
        self._pending = None
        self.countdown = self._next_cooldown()

    def _next_cooldown(self) -> int:
        return self._rng.randint(self.min_cooldown, self.max_cooldown)

    def tick(self) -> None:
        self.countdown -= 1
        if self.countdown > 0:
            return

        meta = self._characters.pick(self._rng)
        if meta is not None:
            self._pending = Character(meta)
        self.countdown = self._next_cooldown()

    def get_character(self) -> Character | None:
        character, self._pending = self._pending, None
        return character
