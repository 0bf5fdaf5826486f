"""
Application settings using Pydantic.

Settings are loaded from environment variables with .env file support.
Nested sections are addressed with a double underscore, for example
``PIXELDINO_GAME__FPS=30`` or ``PIXELDINO_CHAIN__ACCOUNT_ID=0.0.1234``.
"""

from functools import lru_cache
from pathlib import Path

from pydantic import BaseModel, Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class GameSettings(BaseModel):
    """Simulation constants. Positions and velocities are (row, col) pairs in pixels."""

    # Canvas
    rows: int = Field(default=300, gt=0)
    columns: int = Field(default=1000, gt=0)
    cell_size: int = Field(default=2, gt=0)
    road_row: int = 232
    fps: int = 60

    # World scrolling
    floor_velocity: tuple[float, float] = (0.0, -7.0)
    narrow_velocity_bonus: tuple[float, float] = (0.0, 2.0)  # Slower world on narrow screens
    cactus_min_gap: int = 20
    narrow_cactus_min_gap: int = 50
    off_screen_col: float = -150.0

    # Player
    player_floor_position: tuple[float, float] = (200.0, 20.0)
    player_frame_interval: int = 4
    jump_impulse: tuple[float, float] = (-11.0, 0.0)
    gravity: tuple[float, float] = (-0.6, 0.0)

    # Scoring
    score_step: float = 0.15
    speedup_step: tuple[float, float] = (0.0, -0.1)
    speedup_every: int = Field(default=100, gt=0)

    # Over -> Running gate
    restart_cooldown_ms: float = 1000.0


class AudioSettings(BaseModel):
    """Sound effect settings."""

    enabled: bool = True
    volume: float = Field(default=0.3, ge=0.0, le=1.0)
    track_volume: float = Field(default=0.2, ge=0.0, le=1.0)


class ChainSettings(BaseModel):
    """Mint and leaderboard service settings."""

    api_url: str = "http://localhost:3000"
    account_id: str = ""  # Receiver of minted rewards, empty disables chain calls
    player_name: str = ""
    timeout: float = 30.0
    max_leaders: int = 5
    nft_metadata_uri: str = ""  # ipfs:// or https:// metadata used for the NFT theme


class Settings(BaseSettings):
    """Main application settings."""

    model_config = SettingsConfigDict(
        env_prefix="PIXELDINO_",
        env_file=".env",
        env_file_encoding="utf-8",
        env_nested_delimiter="__",
        extra="ignore",
    )

    debug: bool = False

    # Theme
    theme: str = "classic"
    themes_path: Path = Field(default_factory=lambda: Path(__file__).parent / "themes")
    nft_metadata_path: Path | None = None

    # Persistence (high score, selected theme)
    data_path: Path = Field(default_factory=lambda: Path.home() / ".pixeldino" / "store.json")

    # Window
    window_scale: int = Field(default=1, ge=1)
    fullscreen: bool = False

    # Nested settings
    game: GameSettings = Field(default_factory=GameSettings)
    audio: AudioSettings = Field(default_factory=AudioSettings)
    chain: ChainSettings = Field(default_factory=ChainSettings)

    @property
    def chain_enabled(self) -> bool:
        """Chain calls need a receiving account."""
        return bool(self.chain.account_id)


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
