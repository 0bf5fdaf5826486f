"""Core simulation primitives for pixeldino."""

from .physics import Vector, Position, Velocity, apply_velocity_to_position, is_collided
from .character import (
    Layout,
    CharacterMeta,
    Character,
    AllocatorCharacterArray,
    CharacterAllocator,
)
from .state import Phase, PhaseMachine
from .events import EventBus, Event, EventType
from .scheduler import TickScheduler

__all__ = [
    "Vector",
    "Position",
    "Velocity",
    "apply_velocity_to_position",
    "is_collided",
    "Layout",
    "CharacterMeta",
    "Character",
    "AllocatorCharacterArray",
    "CharacterAllocator",
    "Phase",
    "PhaseMachine",
    "EventBus",
    "Event",
    "EventType",
    "TickScheduler",
]
