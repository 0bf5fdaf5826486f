"""Easing functions for effect fades and banner pulses.

All functions take a normalized time t (0.0 to 1.0) and return a normalized value.
"""

from enum import Enum, auto
from typing import Callable
import math


class Easing(Enum):
    """Available easing function types."""

    LINEAR = auto()
    EASE_IN_QUAD = auto()
    EASE_IN_OUT_SINE = auto()


EasingFunc = Callable[[float], float]


def linear(t: float) -> float:
    """Linear interpolation (no easing)."""
    return t


def ease_in_quad(t: float) -> float:
    """Accelerate from zero velocity."""
    return t * t


def ease_in_out_sine(t: float) -> float:
    """Accelerate then decelerate using sine curve."""
    return -(math.cos(math.pi * t) - 1) / 2


_EASING_FUNCTIONS: dict[Easing, EasingFunc] = {
    Easing.LINEAR: linear,
    Easing.EASE_IN_QUAD: ease_in_quad,
    Easing.EASE_IN_OUT_SINE: ease_in_out_sine,
}


def get_easing(easing: Easing) -> EasingFunc:
    """Get the easing function for an Easing type."""
    return _EASING_FUNCTIONS[easing]


def interpolate(start: float, end: float, t: float, easing: Easing = Easing.LINEAR) -> float:
    """Interpolate between two values using an easing function."""
    easing_func = get_easing(easing)
    eased_t = easing_func(max(0.0, min(1.0, t)))
    return start + (end - start) * eased_t


def interpolate_color(
    start: tuple[int, int, int],
    end: tuple[int, int, int],
    t: float,
    easing: Easing = Easing.LINEAR
) -> tuple[int, int, int]:
    """Interpolate between two RGB colors."""
    return (
        int(interpolate(start[0], end[0], t, easing)),
        int(interpolate(start[1], end[1], t, easing)),
        int(interpolate(start[2], end[2], t, easing)),
    )
