"""Spawn tables for obstacles and decorations.

Each entry is ``(layouts, frame_interval, row, velocity, threshold)``. All
characters enter at the right edge of the canvas (``col = rules.columns``).
"""

import random

from pixeldino.core.character import (
    AllocatorCharacterArray,
    CharacterAllocator,
    CharacterMeta,
)
from pixeldino.core.physics import Position, Velocity
from pixeldino.game import layouts
from pixeldino.game.simulation import AllocatorGroups, GameRules


def _allocator(
    rules: GameRules,
    entries: list[tuple],
    max_cooldown: int,
    min_cooldown: int,
    rng: random.Random,
) -> CharacterAllocator:
    characters = AllocatorCharacterArray()
    for frames, frame_interval, row, velocity, threshold in entries:
        characters.add_character(
            CharacterMeta(
                layouts=frames,
                frame_interval=frame_interval,
                position=Position(row, rules.columns),
                velocity=velocity.clone(),
            ),
            threshold,
        )
    return CharacterAllocator(characters, max_cooldown, min_cooldown, rng=rng)


def build_allocators(rules: GameRules, rng: random.Random | None = None) -> AllocatorGroups:
    """Create the harmless and harmful allocator groups for a canvas."""
    rng = rng or random.Random()
    floor = rules.floor_velocity
    cloud_velocity = Velocity(0, -1)
    star_velocity = Velocity(0, -0.3)
    bird_velocity = floor.clone().add(Velocity(0, -1))

    stones = _allocator(rules, [
        ((layouts.STONE_LARGE,), 0, 240, floor, 0.9),
        ((layouts.STONE_MEDIUM,), 0, 243, floor, 0.75),
        ((layouts.STONE_SMALL,), 0, 241, floor, 0.6),
    ], 2, 0, rng)

    clouds = _allocator(rules, [
        ((layouts.CLOUD,), 0, 100, cloud_velocity, 0.9),
        ((layouts.CLOUD,), 0, 135, cloud_velocity, 0.85),
        ((layouts.CLOUD,), 0, 150, cloud_velocity, 0.8),
    ], 350, 300, rng)

    stars = _allocator(rules, [
        ((layouts.STAR_SMALL_S1,), 0, 90, star_velocity, 0.9),
        ((layouts.STAR_SMALL_S2,), 0, 125, star_velocity, 0.85),
        ((layouts.STAR_SMALL_S1,), 0, 140, star_velocity, 0.8),
    ], 350, 250, rng)

    pits = _allocator(rules, [
        ((layouts.PIT_LARGE,), 0, 223, floor, 0.97),
        ((layouts.PIT_UP,), 0, 227, floor, 0.9),
        ((layouts.PIT_DOWN,), 0, 230, floor, 0.85),
    ], 100, 50, rng)

    cacti = _allocator(rules, [
        ((layouts.CACTUS_SMALL_D1,), 0, 201, floor, 0.8),
        ((layouts.CACTUS_SMALL_S1,), 0, 201, floor, 0.7),
        ((layouts.CACTUS_SMALL_S2,), 0, 201, floor, 0.6),
        ((layouts.CACTUS_MEDIUM_D1,), 0, 193, floor, 0.5),
        ((layouts.CACTUS_MEDIUM_S1,), 0, 193, floor, 0.4),
        ((layouts.CACTUS_MEDIUM_S2,), 0, 193, floor, 0.3),
    ], rules.cactus_min_gap, 100, rng)

    birds = _allocator(rules, [
        (layouts.BIRD_FLY, 0, 170, bird_velocity, 0.98),
        (layouts.BIRD_FLY, 0, 190, bird_velocity, 0.9),
    ], 500, 50, rng)

    return AllocatorGroups(
        harmless=[stones, clouds, stars, pits],
        harmful=[cacti, birds],
    )
