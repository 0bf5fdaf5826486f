"""
One discrete simulation step of a running game.

``advance`` mutates a GameState in place and reports what happened. It does
no I/O and touches no collaborators, so it can be driven directly from tests.
"""

from dataclasses import dataclass, field
import logging

from pixeldino.config.settings import GameSettings
from pixeldino.core.character import Character, CharacterAllocator, CharacterMeta
from pixeldino.core.physics import Position, Velocity, apply_velocity_to_position, is_collided
from pixeldino.game.layouts import DINO_RUN

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class GameRules:
    """Resolved simulation constants for a given canvas width.

    Vector fields are shared templates: always ``clone()`` before mutating.
    """
    columns: int
    floor_position: Position
    floor_velocity: Velocity
    jump_impulse: Velocity
    gravity: Velocity
    speedup_step: Velocity
    cactus_min_gap: int
    speedup_every: int = 100
    score_step: float = 0.15
    off_screen_col: float = -150.0
    player_frame_interval: int = 4
    restart_cooldown_ms: float = 1000.0

    @classmethod
    def from_settings(cls, game: GameSettings, columns: int | None = None) -> "GameRules":
        """
        Build rules for a canvas ``columns`` pixels wide.

        Canvases narrower than the configured width scroll slower and space
        cacti further apart.
        """
        if columns is None:
            columns = game.columns
        if columns <= 0:
            raise ValueError(f"Canvas width must be positive, got {columns}")

        floor_velocity = Velocity(*game.floor_velocity)
        cactus_min_gap = game.cactus_min_gap
        if columns < game.columns:
            floor_velocity.add(Velocity(*game.narrow_velocity_bonus))
            cactus_min_gap = game.narrow_cactus_min_gap

        return cls(
            columns=columns,
            floor_position=Position(*game.player_floor_position),
            floor_velocity=floor_velocity,
            jump_impulse=Velocity(*game.jump_impulse),
            gravity=Velocity(*game.gravity),
            speedup_step=Velocity(*game.speedup_step),
            cactus_min_gap=cactus_min_gap,
            speedup_every=game.speedup_every,
            score_step=game.score_step,
            off_screen_col=game.off_screen_col,
            player_frame_interval=game.player_frame_interval,
            restart_cooldown_ms=game.restart_cooldown_ms,
        )


@dataclass
class AllocatorGroups:
    """Allocators feeding the harmless and harmful pools."""
    harmless: list[CharacterAllocator] = field(default_factory=list)
    harmful: list[CharacterAllocator] = field(default_factory=list)

    def reset(self) -> None:
        for allocator in self.harmless + self.harmful:
            allocator.reset()


@dataclass
class GameState:
    """
    Everything that changes during a run.

    ``harmful[0]`` is always the player. ``player_velocity`` is the jump
    thrust integrated by ``advance``; the player's own Character velocity
    stays at zero so the scroll speed-up never reaches it.
    """
    player: Character
    harmless: list[Character] = field(default_factory=list)
    harmful: list[Character] = field(default_factory=list)
    score: int = 0
    score_fraction: float = 0.0
    cumulative_velocity: Velocity = field(default_factory=Velocity)
    player_velocity: Velocity = field(default_factory=Velocity)
    ready_to_jump: bool = True
    last_speedup_score: int = 0
    over_at: float | None = None

    @classmethod
    def fresh(cls, rules: GameRules) -> "GameState":
        """A new run: player on the floor, no obstacles, zero score."""
        player = Character(
            CharacterMeta(
                layouts=DINO_RUN,
                frame_interval=rules.player_frame_interval,
                position=rules.floor_position.clone(),
                velocity=Velocity(0, 0),
            )
        )
        return cls(player=player, harmful=[player])

    @property
    def obstacles(self) -> list[Character]:
        return self.harmful[1:]


@dataclass
class TickReport:
    """What a single ``advance`` call did."""
    collided: bool = False
    speedup_applied: bool = False
    spawned: int = 0
    evicted: int = 0


def _advance_score(state: GameState, rules: GameRules) -> None:
    state.score_fraction += rules.score_step
    if state.score_fraction > 1:
        state.score_fraction -= 1
        state.score += 1


def _apply_speedup(state: GameState, rules: GameRules) -> bool:
    """Add the speed-up step once per ``speedup_every`` boundary reached."""
    if (
        state.score <= 0
        or state.score % rules.speedup_every != 0
        or state.score == state.last_speedup_score
    ):
        return False

    state.last_speedup_score = state.score
    state.cumulative_velocity.add(rules.speedup_step)
    for character in state.harmless + state.obstacles:
        character.get_velocity().add(rules.speedup_step)

    logger.debug(f"Speed-up at score {state.score}: {state.cumulative_velocity.get()}")
    return True


def _spawn(state: GameState, allocators: AllocatorGroups) -> int:
    spawned = 0
    for group, pool in (
        (allocators.harmless, state.harmless),
        (allocators.harmful, state.harmful),
    ):
        for allocator in group:
            allocator.tick()
            character = allocator.get_character()
            if character is None:
                continue
            character.get_velocity().add(state.cumulative_velocity)
            pool.append(character)
            spawned += 1
    return spawned


def _move_and_evict(state: GameState, rules: GameRules) -> int:
    evicted = 0

    kept = []
    for character in state.harmless:
        character.tick()
        if character.get_position().col < rules.off_screen_col:
            evicted += 1
            continue
        kept.append(character)
    state.harmless[:] = kept

    state.player.tick()
    kept = [state.player]
    for character in state.obstacles:
        character.tick()
        if character.get_position().col < rules.off_screen_col:
            evicted += 1
            continue
        kept.append(character)
    state.harmful[:] = kept

    return evicted


def _apply_gravity(state: GameState, rules: GameRules) -> None:
    state.player_velocity.sub(rules.gravity)
    position = apply_velocity_to_position(state.player.get_position(), state.player_velocity)

    if position.row >= rules.floor_position.row:
        position = rules.floor_position.clone()
        state.player_velocity = Velocity(0, 0)
        state.ready_to_jump = True

    state.player.set_position(position)


def check_collision(state: GameState) -> Character | None:
    """Return the first obstacle overlapping the player, if any."""
    player = state.player
    row, col = player.get_position().get()
    for obstacle in state.obstacles:
        other_row, other_col = obstacle.get_position().get()
        if is_collided(
            row, col, player.height, player.width,
            other_row, other_col, obstacle.height, obstacle.width,
        ):
            return obstacle
    return None


def advance(state: GameState, allocators: AllocatorGroups, rules: GameRules) -> TickReport:
    """Run one tick of the Running phase."""
    report = TickReport()

    _advance_score(state, rules)
    report.speedup_applied = _apply_speedup(state, rules)
    report.spawned = _spawn(state, allocators)
    report.evicted = _move_and_evict(state, rules)
    _apply_gravity(state, rules)
    report.collided = check_collision(state) is not None

    return report
