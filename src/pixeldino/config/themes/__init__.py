"""Canvas themes."""

from .base import (
    Theme,
    TRAIT_TO_COLOR,
    load_theme,
    list_themes,
    theme_from_nft_metadata,
    to_rgb,
)

__all__ = [
    "Theme",
    "TRAIT_TO_COLOR",
    "load_theme",
    "list_themes",
    "theme_from_nft_metadata",
    "to_rgb",
]
