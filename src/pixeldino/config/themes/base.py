"""
Theme dataclass and theme loading utilities.

A theme supplies the canvas colors and the palette used to paint layout
cells. ``layout[i]`` is the color for palette index ``i``; ``None`` means the
cell is transparent.
"""

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any
import logging

import yaml

logger = logging.getLogger(__name__)

RGB = tuple[int, int, int]

DEFAULT_LAYOUT: list[str | None] = [None, "#535353", "#333333", "#ffffff", "#ff0000", None]

TRAIT_TO_COLOR: dict[str, str] = {
    "purple": "#a855f7",
    "blue": "#3b82f6",
    "green": "#22c55e",
    "yellow": "#facc15",
    "red": "#ef4444",
    "black": "#111827",
    "white": "#ffffff",
}


def to_rgb(hex_color: str) -> RGB:
    """Convert ``#rrggbb`` to an RGB tuple."""
    hex_color = hex_color.lstrip("#")
    if len(hex_color) != 6:
        raise ValueError(f"Invalid hex color: #{hex_color}")
    return tuple(int(hex_color[i:i+2], 16) for i in (0, 2, 4))


@dataclass
class Theme:
    """Complete theme configuration."""
    name: str = "classic"
    background: str = "#ffffff"
    road: str = "#535353"
    score_text: str = "#535353"
    info_text: str = "#535353"
    layout: list[str | None] = field(default_factory=lambda: list(DEFAULT_LAYOUT))

    def __post_init__(self) -> None:
        for color in (self.background, self.road, self.score_text, self.info_text):
            to_rgb(color)
        # Palette slots given as false in stored themes are transparent
        self.layout = [color or None for color in self.layout]
        if not self.layout or self.layout[0] is not None:
            raise ValueError("Theme layout palette must start with a transparent slot")

    def rgb(self, attr: str) -> RGB:
        return to_rgb(getattr(self, attr))

    def palette_rgb(self) -> list[RGB | None]:
        """Layout palette as RGB tuples, None for transparent slots."""
        return [to_rgb(color) if color else None for color in self.layout]

    def to_dict(self) -> dict[str, Any]:
        return {
            "name": self.name,
            "background": self.background,
            "road": self.road,
            "score_text": self.score_text,
            "info_text": self.info_text,
            "layout": list(self.layout),
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Theme":
        """Create a theme from YAML or stored JSON data."""
        defaults = cls()
        return cls(
            name=data.get("name", defaults.name),
            background=data.get("background", defaults.background),
            road=data.get("road", defaults.road),
            score_text=data.get("score_text", defaults.score_text),
            info_text=data.get("info_text", defaults.info_text),
            layout=list(data.get("layout", defaults.layout)),
        )


def theme_from_nft_metadata(metadata: dict[str, Any], name: str = "nft") -> Theme:
    """
    Derive a theme from NFT metadata traits.

    The ``background`` trait picks the canvas color and the first word of the
    ``clothing`` trait picks the body color. Unknown traits fall back to the
    classic colors.
    """
    traits = {
        attr.get("trait_type"): str(attr.get("value", ""))
        for attr in metadata.get("attributes", [])
        if isinstance(attr, dict)
    }

    background = TRAIT_TO_COLOR.get(traits.get("background", ""), "#ffffff")
    clothing = traits.get("clothing", "").split(" ")[0]
    body = TRAIT_TO_COLOR.get(clothing, "#535353")

    return Theme(
        name=metadata.get("name", name),
        background=background,
        road="#7c3aed",
        score_text="#000000",
        info_text="#000000",
        layout=[None, body, "#333333", "#ffffff", "#ff0000", None],
    )


def load_theme(theme_name: str, themes_path: Path | None = None) -> Theme:
    """
    Load a theme from YAML file.

    Args:
        theme_name: Name of the theme (without .yaml extension)
        themes_path: Path to themes directory

    Returns:
        Theme instance, the default theme if the file does not exist
    """
    if themes_path is None:
        themes_path = Path(__file__).parent

    theme_file = themes_path / f"{theme_name}.yaml"

    if not theme_file.exists():
        logger.warning(f"Theme '{theme_name}' not found in {themes_path}, using default")
        return Theme(name=theme_name)

    with open(theme_file, encoding="utf-8") as f:
        data = yaml.safe_load(f) or {}

    data.setdefault("name", theme_name)
    return Theme.from_dict(data)


def list_themes(themes_path: Path | None = None) -> list[str]:
    """List available themes."""
    if themes_path is None:
        themes_path = Path(__file__).parent

    return sorted(f.stem for f in themes_path.glob("*.yaml"))
