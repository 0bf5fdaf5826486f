"""Configuration for pixeldino."""

from .settings import Settings, GameSettings, AudioSettings, ChainSettings, get_settings

__all__ = ["Settings", "GameSettings", "AudioSettings", "ChainSettings", "get_settings"]
