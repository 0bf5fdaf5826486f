"""Particle system for the high score confetti."""

from dataclasses import dataclass, field
import math
import random

import numpy as np
from numpy.typing import NDArray

from pixeldino.animation.easing import Easing, interpolate
from pixeldino.config.themes import to_rgb

CONFETTI_COLORS = [
    "#F59E0B",
    "#10B981",
    "#3B82F6",
    "#EC4899",
    "#F43F5E",
    "#A855F7",
    "#22C55E",
    "#EAB308",
]


@dataclass
class Particle:
    """A single particle with physics properties."""

    x: float
    y: float
    vx: float = 0.0
    vy: float = 0.0
    ay: float = 0.0  # gravity, pixels per second squared
    size: float = 1.0
    color: tuple[int, int, int] = (255, 255, 255)
    alpha: float = 1.0
    alpha_end: float = 0.0
    lifetime: float = 1000.0  # milliseconds
    age: float = 0.0
    active: bool = True

    @property
    def progress(self) -> float:
        """Normalized lifetime progress (0.0 to 1.0)."""
        if self.lifetime <= 0:
            return 1.0
        return min(1.0, self.age / self.lifetime)

    @property
    def is_dead(self) -> bool:
        return self.age >= self.lifetime

    def update(self, delta_ms: float) -> None:
        if not self.active:
            return

        self.vy += self.ay * delta_ms / 1000
        self.x += self.vx * delta_ms / 1000
        self.y += self.vy * delta_ms / 1000

        self.age += delta_ms
        if self.is_dead:
            self.active = False

    def get_current_alpha(self) -> float:
        return interpolate(self.alpha, self.alpha_end, self.progress, Easing.EASE_IN_QUAD)


@dataclass
class EmitterConfig:
    """Configuration for a burst emitter. Angles in degrees, 0 points right, -90 up."""

    x: float = 0.0
    y: float = 0.0

    burst: int = 10
    max_particles: int = 200

    speed_min: float = 50.0
    speed_max: float = 100.0
    angle_min: float = 0.0
    angle_max: float = 360.0

    gravity: float = 0.0

    size_min: float = 2.0
    size_max: float = 4.0
    palette: list[tuple[int, int, int]] = field(default_factory=lambda: [(255, 255, 255)])
    alpha_start: float = 1.0
    alpha_end: float = 0.0

    lifetime_min: float = 500.0
    lifetime_max: float = 1000.0


class ParticleEmitter:
    """Emits and manages particles."""

    def __init__(self, config: EmitterConfig | None = None, rng: random.Random | None = None):
        self.config = config or EmitterConfig()
        self.particles: list[Particle] = []
        self._rng = rng or random.Random()

    def set_position(self, x: float, y: float) -> None:
        self.config.x = x
        self.config.y = y

    def emit(self, count: int = 1) -> None:
        """Emit up to ``count`` particles, recycling dead ones past the cap."""
        self.particles = [p for p in self.particles if p.active]
        room = self.config.max_particles - len(self.particles)
        for _ in range(min(count, max(0, room))):
            self.particles.append(self._create_particle())

    def burst(self, count: int | None = None) -> None:
        self.emit(count or self.config.burst)

    def _create_particle(self) -> Particle:
        cfg = self.config
        rng = self._rng

        angle = math.radians(rng.uniform(cfg.angle_min, cfg.angle_max))
        speed = rng.uniform(cfg.speed_min, cfg.speed_max)

        return Particle(
            x=cfg.x,
            y=cfg.y,
            vx=math.cos(angle) * speed,
            vy=math.sin(angle) * speed,
            ay=cfg.gravity,
            size=rng.uniform(cfg.size_min, cfg.size_max),
            color=rng.choice(cfg.palette),
            alpha=cfg.alpha_start,
            alpha_end=cfg.alpha_end,
            lifetime=rng.uniform(cfg.lifetime_min, cfg.lifetime_max),
        )

    def update(self, delta_ms: float) -> None:
        for particle in self.particles:
            particle.update(delta_ms)
        self.particles = [p for p in self.particles if p.active]

    def render(self, buffer: NDArray[np.uint8]) -> None:
        """Alpha-blend particles as squares onto an (h, w, 3) buffer."""
        h, w = buffer.shape[:2]

        for particle in self.particles:
            alpha = particle.get_current_alpha()
            if alpha <= 0 or particle.size <= 0:
                continue

            half = particle.size / 2
            x1 = max(0, int(particle.x - half))
            y1 = max(0, int(particle.y - half))
            x2 = min(w, int(particle.x + half) + 1)
            y2 = min(h, int(particle.y + half) + 1)
            if x1 >= x2 or y1 >= y2:
                continue

            region = buffer[y1:y2, x1:x2].astype(np.float32)
            color = np.array(particle.color, dtype=np.float32)
            buffer[y1:y2, x1:x2] = (region * (1 - alpha) + color * alpha).astype(np.uint8)

    def get_active_count(self) -> int:
        return sum(1 for p in self.particles if p.active)

    def clear(self) -> None:
        self.particles.clear()


class ParticlePresets:
    """Factory for particle effect configurations."""

    @staticmethod
    def confetti(x: float, y: float) -> EmitterConfig:
        """Upward confetti fountain that falls back under gravity."""
        return EmitterConfig(
            x=x, y=y,
            burst=120,
            max_particles=240,
            speed_min=180, speed_max=540,
            angle_min=-90 - 135, angle_max=-90 + 135,
            gravity=830,
            size_min=3, size_max=6,
            palette=[to_rgb(c) for c in CONFETTI_COLORS],
            alpha_start=1.0, alpha_end=0.0,
            lifetime_min=1500, lifetime_max=2200,
        )
