"""
Main entry point for pixeldino.

Wires the engine to its collaborators and runs the game window.
"""

import asyncio
import json
import logging
import sys

from pixeldino.audio.engine import AudioEngine
from pixeldino.chain.client import ChainApiClient
from pixeldino.chain.service import ChainService
from pixeldino.config.settings import Settings, get_settings
from pixeldino.config.themes import Theme, list_themes, load_theme, theme_from_nft_metadata
from pixeldino.core.events import Event, EventBus, EventType
from pixeldino.core.scheduler import TickScheduler
from pixeldino.game.engine import GameEngine
from pixeldino.graphics.renderer import CanvasRenderer, SurfaceError
from pixeldino.storage.local_store import GameStorage, LocalStore

logger = logging.getLogger(__name__)


def setup_logging(debug: bool = False) -> None:
    """Configure logging."""
    level = logging.DEBUG if debug else logging.INFO
    logging.basicConfig(
        level=level,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%H:%M:%S"
    )


async def resolve_theme(
    settings: Settings,
    storage: GameStorage,
    client: ChainApiClient | None = None,
) -> Theme:
    """
    Pick the startup theme.

    Order: configured NFT metadata (file, then URI), the last stored theme,
    then the named theme from the themes directory. An NFT theme is stored
    so it survives restarts without the metadata source.
    """
    metadata = None

    if settings.nft_metadata_path is not None:
        try:
            with open(settings.nft_metadata_path, encoding="utf-8") as f:
                metadata = json.load(f)
        except (OSError, json.JSONDecodeError) as e:
            logger.error(f"Failed to load NFT metadata {settings.nft_metadata_path}: {e}")

    if metadata is None and settings.chain.nft_metadata_uri and client is not None:
        result = await client.fetch_metadata(settings.chain.nft_metadata_uri)
        if result.success:
            metadata = result.metadata

    if isinstance(metadata, dict):
        theme = theme_from_nft_metadata(metadata)
        logger.info(f"NFT theme applied: {theme.name}")
        try:
            storage.save_theme(theme)
        except OSError as e:
            logger.error(f"Failed to save theme: {e}")
        return theme

    stored = storage.load_theme()
    if stored is not None:
        return stored

    return load_theme(settings.theme, settings.themes_path)


async def run_game(settings: Settings) -> None:
    """Build all components and run the window until it closes."""
    from pixeldino.simulator.window import GameWindow, WindowConfig

    game = settings.game
    event_bus = EventBus()
    scheduler = TickScheduler()

    audio = AudioEngine(settings.audio)
    audio.init()

    storage = GameStorage(LocalStore(settings.data_path))

    def on_mint(result) -> None:
        event_bus.queue_event(Event(EventType.MINT_COMPLETE, data={"result": result}, source="chain"))

    def on_report(result) -> None:
        event_bus.queue_event(Event(EventType.SCORE_REPORTED, data={"result": result}, source="chain"))

    chain = ChainService(settings.chain, on_mint=on_mint, on_report=on_report)
    if not chain.enabled:
        logger.warning("No chain account configured, minting and leaderboard reports are disabled")

    metadata_client = ChainApiClient(settings.chain.api_url, timeout=settings.chain.timeout)
    try:
        theme = await resolve_theme(settings, storage, metadata_client)
    finally:
        await metadata_client.close()

    renderer = CanvasRenderer(game.rows, game.columns, game.cell_size, game.road_row)
    engine = GameEngine(
        settings=game,
        event_bus=event_bus,
        scheduler=scheduler,
        audio=audio,
        store=storage,
        minter=chain,
        reporter=chain,
        celebration=renderer,
    )

    themes = [load_theme(name, settings.themes_path) for name in list_themes(settings.themes_path)]
    window = GameWindow(
        engine=engine,
        renderer=renderer,
        event_bus=event_bus,
        scheduler=scheduler,
        audio=audio,
        storage=storage,
        themes=themes,
        theme=theme,
        chain=chain,
        config=WindowConfig(
            scale=settings.window_scale,
            fullscreen=settings.fullscreen,
            fps=game.fps,
        ),
    )

    try:
        await window.run()
    finally:
        await chain.close()
        audio.cleanup()


def main() -> None:
    """Main entry point."""
    from dotenv import load_dotenv

    # Load environment variables
    load_dotenv()

    settings = get_settings()
    setup_logging(settings.debug)

    logger.info("pixeldino starting...")

    try:
        asyncio.run(run_game(settings))
    except KeyboardInterrupt:
        logger.info("Interrupted by user")
    except SurfaceError as e:
        logger.error(f"Cannot create drawing surface: {e}")
        sys.exit(1)
    except Exception as e:
        logger.exception(f"Fatal error: {e}")
        sys.exit(1)

    logger.info("pixeldino stopped")


if __name__ == "__main__":
    main()
