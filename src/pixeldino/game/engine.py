"""
Game engine: drives the simulation through its phases.

The engine owns the GameState, the allocators and the phase machine. It
reacts to PRIMARY_ACTION events and advances one step per scheduled frame.
Collaborators (audio, storage, minting, leaderboard, effects) are called
synchronously but guarded, so a failing collaborator is logged and never
interrupts the run.
"""

from dataclasses import dataclass, field
from typing import Any, Callable
import logging
import random
import time

from pixeldino.config.settings import GameSettings
from pixeldino.core.character import Layout
from pixeldino.core.events import Event, EventBus, EventType
from pixeldino.core.scheduler import TickScheduler
from pixeldino.core.state import Phase, PhaseMachine
from pixeldino.game.allocators import build_allocators
from pixeldino.game.collaborators import (
    CelebrationEffect,
    Minter,
    ScoreReporter,
    ScoreStore,
    SoundPlayer,
)
from pixeldino.game.layouts import DINO_DEAD, DINO_STAND, RETRY
from pixeldino.game.simulation import GameRules, GameState, advance

logger = logging.getLogger(__name__)

PROMPT_START = "PRESS SPACE TO START AND JUMP"
PROMPT_GAME_OVER = "G A M E  O V E R"
PROMPT_NEW_HIGH_SCORE = "NEW HIGH SCORE!"

Clock = Callable[[], float]


def monotonic_ms() -> float:
    return time.monotonic() * 1000


@dataclass
class Sprite:
    """A layout to paint at a pixel position."""
    layout: Layout
    row: float
    col: float


@dataclass
class FrameSnapshot:
    """Everything a renderer needs to draw one frame."""
    phase: Phase
    score: int
    high_score: int
    sprites: list[Sprite] = field(default_factory=list)
    prompt: str | None = None
    new_high_score: bool = False
    retry: Sprite | None = None


class GameEngine:
    """
    Runner game state machine.

    Phases:
        READY: waiting for the first primary action
        RUNNING: one ``advance`` per scheduled frame, primary action jumps
        OVER: frozen, primary action restarts once the cooldown has passed

    Args:
        settings: Game constants
        event_bus: Source of PRIMARY_ACTION events, sink of game events
        scheduler: Frame scheduler driven by the host
        audio: Sound effects
        store: High score persistence
        minter: Reward for a new high score
        reporter: Optional leaderboard submission
        celebration: Optional visual effect for a new high score
        clock: Milliseconds source used for the restart cooldown
        rng: Random source for the allocators
        columns: Canvas width, defaults to ``settings.columns``
    """

    def __init__(
        self,
        settings: GameSettings,
        event_bus: EventBus,
        scheduler: TickScheduler,
        audio: SoundPlayer,
        store: ScoreStore,
        minter: Minter,
        reporter: ScoreReporter | None = None,
        celebration: CelebrationEffect | None = None,
        clock: Clock | None = None,
        rng: random.Random | None = None,
        columns: int | None = None,
    ) -> None:
        self._settings = settings
        self._event_bus = event_bus
        self._scheduler = scheduler
        self._audio = audio
        self._store = store
        self._minter = minter
        self._reporter = reporter
        self._celebration = celebration
        self._clock = clock or monotonic_ms
        self._rng = rng or random.Random()

        self._phases = PhaseMachine(Phase.READY)
        self.rules = GameRules.from_settings(settings, columns)
        self._allocators = build_allocators(self.rules, self._rng)
        self.state = GameState.fresh(self.rules)

        self._high_score = self._read_high_score() or 0
        self._new_high_score = False

        self._unsubscribe = event_bus.subscribe(
            EventType.PRIMARY_ACTION, self._on_primary_action
        )
        logger.info(f"GameEngine ready ({self.rules.columns}x{settings.rows})")

    @property
    def phase(self) -> Phase:
        return self._phases.phase

    @property
    def phases(self) -> PhaseMachine:
        return self._phases

    @property
    def high_score(self) -> int:
        return self._high_score

    @property
    def is_new_high_score(self) -> bool:
        return self._new_high_score

    # =========================================================================
    # Input
    # =========================================================================

    def _on_primary_action(self, event: Event) -> None:
        self.handle_primary_action()

    def handle_primary_action(self) -> None:
        """Start, jump or restart depending on the phase."""
        phase = self._phases.phase

        if phase == Phase.READY:
            self.start_run()
        elif phase == Phase.RUNNING:
            self.jump()
        elif phase == Phase.OVER:
            elapsed = self._clock() - (self.state.over_at or 0.0)
            if elapsed > self.rules.restart_cooldown_ms:
                self.start_run()
            else:
                logger.debug(f"Restart ignored, only {elapsed:.0f}ms since game over")

    def jump(self) -> bool:
        """Apply the jump impulse if the player is on the floor."""
        if self._phases.phase != Phase.RUNNING:
            return False
        if not self.state.ready_to_jump:
            logger.debug("Jump ignored while airborne")
            return False

        self.state.player_velocity = self.rules.jump_impulse.clone()
        self.state.ready_to_jump = False
        self._safe_call("jump sound", self._audio.play_jump)
        return True

    # =========================================================================
    # Lifecycle
    # =========================================================================

    def start_run(self) -> None:
        """Reset everything and enter RUNNING."""
        self._scheduler.cancel()
        self.state = GameState.fresh(self.rules)
        self._allocators.reset()
        stored = self._read_high_score()
        if stored is not None:
            self._high_score = stored
        self._new_high_score = False

        if not self._phases.transition(Phase.RUNNING):
            return

        self._safe_call("start track", self._audio.start_track)
        self._scheduler.request(self._frame)
        self._event_bus.emit(Event(EventType.GAME_STARTED, source="engine"))

    def _frame(self) -> None:
        if self._phases.phase != Phase.RUNNING:
            return

        report = advance(self.state, self._allocators, self.rules)

        if report.speedup_applied:
            self._event_bus.emit(Event(
                EventType.SPEEDUP,
                data={"score": self.state.score},
                source="engine",
            ))

        if report.collided:
            self._game_over()
            return

        self._scheduler.request(self._frame)

    def _game_over(self) -> None:
        state = self.state
        state.over_at = self._clock()
        self._phases.transition(Phase.OVER)
        self._scheduler.cancel()

        self._safe_call("stop track", self._audio.stop_track)
        self._safe_call("game over sound", self._audio.play_game_over)

        previous = self._read_high_score()
        if previous is None:
            logger.warning(f"High score unknown, not treating {state.score} as a record")
        elif state.score > previous:
            logger.info(f"New high score: {state.score} (was {previous})")
            self._new_high_score = True
            self._high_score = state.score
            self._safe_call("persist high score", self._store.set_high_score, state.score)
            if self._celebration is not None:
                self._safe_call("celebration", self._celebration.celebrate)
            self._safe_call("celebrate sound", self._audio.play_celebrate)
            self._safe_call("mint", self._minter.request_mint, state.score)
            self._event_bus.emit(Event(
                EventType.HIGH_SCORE,
                data={"score": state.score, "previous": previous},
                source="engine",
            ))

        if self._reporter is not None:
            self._safe_call("score report", self._reporter.report_score, state.score)

        self._event_bus.emit(Event(
            EventType.GAME_OVER,
            data={"score": state.score, "new_high_score": self._new_high_score},
            source="engine",
        ))

    def resize(self, columns: int) -> None:
        """
        Rebuild for a new canvas width.

        Any run in progress is torn down and the engine returns to READY.
        """
        if columns == self.rules.columns:
            return

        self._scheduler.cancel()
        self.rules = GameRules.from_settings(self._settings, columns)
        self._allocators = build_allocators(self.rules, self._rng)
        self.state = GameState.fresh(self.rules)
        self._new_high_score = False

        if self._phases.phase != Phase.READY:
            self._safe_call("stop track", self._audio.stop_track)
            self._phases.transition(Phase.READY)

        logger.info(f"Canvas resized to {columns} columns")

    def close(self) -> None:
        self._scheduler.cancel()
        self._unsubscribe()

    # =========================================================================
    # Rendering
    # =========================================================================

    def snapshot(self) -> FrameSnapshot:
        """Describe the current frame without mutating anything."""
        phase = self._phases.phase
        state = self.state

        sprites = []
        for character in state.harmless + state.harmful:
            row, col = character.get_position().get()
            layout = character.get_layout()
            if character is state.player:
                if phase == Phase.OVER:
                    layout = DINO_DEAD
                elif phase == Phase.READY or not state.ready_to_jump:
                    layout = DINO_STAND
            sprites.append(Sprite(layout, row, col))

        snapshot = FrameSnapshot(
            phase=phase,
            score=state.score,
            high_score=self._high_score,
            sprites=sprites,
            new_high_score=self._new_high_score,
        )

        if phase == Phase.READY:
            snapshot.prompt = PROMPT_START
        elif phase == Phase.OVER:
            snapshot.prompt = PROMPT_GAME_OVER
            snapshot.retry = Sprite(
                RETRY,
                self._settings.rows / 2 - len(RETRY),
                self.rules.columns / 2 - len(RETRY[0]),
            )

        return snapshot

    # =========================================================================
    # Helpers
    # =========================================================================

    def _read_high_score(self) -> int | None:
        try:
            return int(self._store.get_high_score())
        except Exception as e:
            logger.error(f"Failed to read high score: {e}")
            return None

    def _safe_call(self, what: str, func: Callable[..., Any], *args: Any) -> None:
        try:
            func(*args)
        except Exception as e:
            logger.error(f"{what} failed: {e}")
