"""Animation helpers: easing and particles."""

from pixeldino.animation.easing import Easing, get_easing, interpolate, interpolate_color
from pixeldino.animation.particles import (
    CONFETTI_COLORS,
    Particle,
    ParticleEmitter,
    EmitterConfig,
    ParticlePresets,
)

__all__ = [
    "Easing",
    "get_easing",
    "interpolate",
    "interpolate_color",
    "CONFETTI_COLORS",
    "Particle",
    "ParticleEmitter",
    "EmitterConfig",
    "ParticlePresets",
]
