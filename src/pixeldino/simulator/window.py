"""
Game window using pygame.

Hosts the engine: turns keyboard, mouse and touch input into events,
drives the frame scheduler once per display refresh and draws the canvas.
"""

import asyncio
import logging
import math
from dataclasses import dataclass
from pathlib import Path

import pygame

from pixeldino.animation.easing import Easing, interpolate_color
from pixeldino.audio.engine import AudioEngine
from pixeldino.chain.client import LeaderboardResult, MintResult
from pixeldino.chain.service import ChainService
from pixeldino.config.themes import Theme
from pixeldino.core.events import Event, EventBus, EventType, primary_action_event
from pixeldino.core.scheduler import TickScheduler
from pixeldino.game.engine import GameEngine
from pixeldino.graphics.renderer import CanvasRenderer, SurfaceError, TextItem
from pixeldino.storage.local_store import GameStorage

logger = logging.getLogger(__name__)

FONT_NAMES = ["Press Start 2P", "DejaVu Sans Mono", "Courier New"]
BANNER_DURATION_MS = 4000
BANNER_COLORS = ((0x22, 0xC5, 0x5E), (0xEA, 0xB3, 0x08))


@dataclass
class WindowConfig:
    """Game window configuration."""
    title: str = "pixeldino"
    scale: int = 1
    fullscreen: bool = False
    fps: int = 60
    screenshot_dir: Path = Path(".")


class GameWindow:
    """
    Desktop host for the runner.

    Keyboard Mapping:
        SPACE / UP / RETURN: Start, jump, restart
        Mouse click / touch: Same as SPACE
        T: Cycle theme
        M: Toggle mute
        L: Show leaderboard
        S: Capture screenshot
        ESC / Q: Exit
    """

    def __init__(
        self,
        engine: GameEngine,
        renderer: CanvasRenderer,
        event_bus: EventBus,
        scheduler: TickScheduler,
        audio: AudioEngine,
        storage: GameStorage,
        themes: list[Theme],
        theme: Theme | None = None,
        chain: ChainService | None = None,
        config: WindowConfig | None = None,
    ) -> None:
        if not themes and theme is None:
            raise ValueError("At least one theme is required")

        self.config = config or WindowConfig()
        self.engine = engine
        self.renderer = renderer
        self.event_bus = event_bus
        self.scheduler = scheduler
        self.audio = audio
        self.storage = storage
        self.chain = chain

        self.themes = list(themes)
        self.theme = theme or self.themes[0]
        if all(t.name != self.theme.name for t in self.themes):
            self.themes.insert(0, self.theme)

        self._screen: pygame.Surface | None = None
        self._clock: pygame.time.Clock | None = None
        self._fonts: dict[int, pygame.font.Font] = {}
        self._running = False
        self._frame_count = 0

        self._banner: str | None = None
        self._banner_ms = 0.0
        self._leaders: list[str] = []
        self._show_leaders = False

        event_bus.subscribe(EventType.CYCLE_THEME, lambda e: self.cycle_theme())
        event_bus.subscribe(EventType.TOGGLE_MUTE, lambda e: self.audio.toggle_mute())
        event_bus.subscribe(EventType.MINT_COMPLETE, self._on_mint_complete)
        event_bus.subscribe(EventType.SCORE_REPORTED, self._on_score_reported)

        logger.info("GameWindow created")

    # =========================================================================
    # Setup
    # =========================================================================

    def _init_pygame(self) -> None:
        pygame.init()
        pygame.display.set_caption(self.config.title)
        self._fit_to_display()

        size = self._window_size()
        flags = pygame.DOUBLEBUF | pygame.RESIZABLE
        if self.config.fullscreen:
            flags |= pygame.FULLSCREEN

        try:
            self._screen = pygame.display.set_mode(size, flags)
        except pygame.error as e:
            raise SurfaceError(f"Cannot create window {size}: {e}") from e

        self._clock = pygame.time.Clock()
        pygame.font.init()
        logger.info(f"Pygame initialized: {size[0]}x{size[1]}")

    def _fit_to_display(self) -> None:
        """Shrink the canvas to the display when it is narrower than the configured width."""
        info = pygame.display.Info()
        if 0 < info.current_w // self.config.scale < self.renderer.columns:
            logger.info(f"Display is {info.current_w}px wide, fitting canvas to it")
            self.resize(info.current_w, info.current_h)

    def _window_size(self) -> tuple[int, int]:
        return (
            self.renderer.columns * self.config.scale,
            self.renderer.rows * self.config.scale,
        )

    def _font(self, size: int) -> pygame.font.Font:
        font = self._fonts.get(size)
        if font is None:
            font = pygame.font.SysFont(FONT_NAMES, size * self.config.scale)
            self._fonts[size] = font
        return font

    # =========================================================================
    # Input
    # =========================================================================

    def _handle_events(self) -> None:
        for event in pygame.event.get():
            if event.type == pygame.QUIT:
                self._running = False

            elif event.type == pygame.KEYDOWN:
                self._handle_keydown(event)

            elif event.type == pygame.MOUSEBUTTONDOWN and event.button == 1:
                self.event_bus.emit(primary_action_event("mouse"))

            elif event.type == pygame.FINGERDOWN:
                self.event_bus.emit(primary_action_event("touch"))

            elif event.type == pygame.VIDEORESIZE:
                self.resize(event.w, event.h)

    def _handle_keydown(self, event: pygame.event.Event) -> None:
        key = event.key

        if key in (pygame.K_ESCAPE, pygame.K_q):
            self._running = False
        elif key in (pygame.K_SPACE, pygame.K_UP, pygame.K_RETURN):
            self._show_leaders = False
            self.event_bus.emit(primary_action_event("keyboard"))
        elif key == pygame.K_t:
            self.event_bus.emit(Event(EventType.CYCLE_THEME, source="keyboard"))
        elif key == pygame.K_m:
            self.event_bus.emit(Event(EventType.TOGGLE_MUTE, source="keyboard"))
        elif key == pygame.K_l:
            self.toggle_leaderboard()
        elif key == pygame.K_s:
            self._capture_screenshot()

    def resize(self, width: int, height: int) -> None:
        """Rebuild the canvas for a new window size. Tears down any running game."""
        columns = max(1, width // self.config.scale)
        if columns == self.renderer.columns:
            return

        self.renderer.resize(self.renderer.rows, columns)
        self.engine.resize(columns)

    # =========================================================================
    # Collaborator feedback
    # =========================================================================

    def cycle_theme(self) -> Theme:
        names = [t.name for t in self.themes]
        index = names.index(self.theme.name) if self.theme.name in names else -1
        self.theme = self.themes[(index + 1) % len(self.themes)]
        try:
            self.storage.save_theme(self.theme)
        except OSError as e:
            logger.error(f"Failed to save theme: {e}")
        logger.info(f"Theme: {self.theme.name}")
        return self.theme

    def show_banner(self, text: str) -> None:
        self._banner = text
        self._banner_ms = BANNER_DURATION_MS

    def _on_mint_complete(self, event: Event) -> None:
        result: MintResult = event.data["result"]
        if result.success:
            self.show_banner(f"NFT MINTED #{result.serial}")
        else:
            self.show_banner("MINT FAILED")

    def _on_score_reported(self, event: Event) -> None:
        result: LeaderboardResult = event.data["result"]
        if result.success and result.made_leaderboard:
            self.show_banner("YOU MADE THE LEADERBOARD!")
        if result.success:
            self._set_leaders(result)

    def _set_leaders(self, result: LeaderboardResult) -> None:
        self._leaders = [
            f"{i + 1}. {entry.name[:16]:<16} {entry.score:>5}"
            for i, entry in enumerate(result.leaders)
        ]

    def toggle_leaderboard(self) -> None:
        self._show_leaders = not self._show_leaders
        if self._show_leaders and self.chain is not None:
            self.chain.request_leaders(self._on_leaders)

    def _on_leaders(self, result: LeaderboardResult) -> None:
        if result.success:
            self._set_leaders(result)
        else:
            self._leaders = [f"LEADERBOARD UNAVAILABLE ({result.error})"]

    # =========================================================================
    # Rendering
    # =========================================================================

    def _render(self, delta_ms: float) -> None:
        if not self._screen:
            return

        snapshot = self.engine.snapshot()
        buffer = self.renderer.render(snapshot, self.theme)

        surface = pygame.surfarray.make_surface(buffer.swapaxes(0, 1))
        if self.config.scale != 1:
            surface = pygame.transform.scale(surface, self._window_size())
        self._screen.blit(surface, (0, 0))

        for item in self.renderer.text_items(snapshot, self.theme):
            self._draw_text(item)

        if self._banner:
            self._banner_ms -= delta_ms
            if self._banner_ms <= 0:
                self._banner = None
            else:
                pulse = (math.sin(self._banner_ms / 150) + 1) / 2
                color = interpolate_color(*BANNER_COLORS, pulse, Easing.EASE_IN_OUT_SINE)
                self._draw_text(TextItem(
                    self._banner, self.renderer.columns / 2, self.renderer.rows / 2 + 60,
                    color, size=12,
                ))

        if self._show_leaders:
            self._draw_leaderboard()

        pygame.display.flip()

    def _draw_text(self, item: TextItem) -> None:
        scale = self.config.scale
        text = self._font(item.size).render(item.text, True, item.color)
        rect = text.get_rect()
        if item.anchor == "topright":
            rect.topright = (int(item.x * scale), int(item.y * scale))
        else:
            rect.center = (int(item.x * scale), int(item.y * scale))
        self._screen.blit(text, rect)

    def _draw_leaderboard(self) -> None:
        lines = ["L E A D E R S"] + (self._leaders or ["LOADING..."])
        color = self.theme.rgb("info_text")
        top = 70
        for i, line in enumerate(lines):
            self._draw_text(TextItem(line, self.renderer.columns / 2, top + i * 18, color, size=12))

    def _capture_screenshot(self) -> None:
        if self._screen:
            filename = self.config.screenshot_dir / f"screenshot_{self._frame_count}.png"
            pygame.image.save(self._screen, str(filename))
            logger.info(f"Screenshot saved: {filename}")

    # =========================================================================
    # Main loop
    # =========================================================================

    async def run(self) -> None:
        """Main game loop."""
        self._init_pygame()
        self._running = True

        logger.info("Game window started")

        while self._running:
            self._handle_events()

            # One simulation step per display frame
            self.scheduler.run_pending()

            await self.event_bus.process_queue()

            delta_ms = float(self._clock.get_time()) if self._clock else 0.0
            self.renderer.update(delta_ms)
            self._render(delta_ms)

            if self._clock:
                self._clock.tick(self.config.fps)

            self._frame_count += 1

            # Yield to chain requests
            await asyncio.sleep(0)

        self._cleanup()

    def _cleanup(self) -> None:
        self.engine.close()
        pygame.quit()
        logger.info("Game window stopped")

    def stop(self) -> None:
        self._running = False
