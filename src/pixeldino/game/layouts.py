"""Pixel-art layout tables for every sprite in the game.

Sprites are authored as strings and converted to grids of palette indices.
Index 0 is always transparent; the others are resolved through the active
theme's layout palette:

    '.' -> 0  transparent
    'X' -> 1  body
    'd' -> 2  dark detail
    'w' -> 3  highlight
    'r' -> 4  accent
"""

from pixeldino.core.character import Layout

PALETTE_CODES = {".": 0, "X": 1, "d": 2, "w": 3, "r": 4}


def _grid(*rows: str) -> Layout:
    """Build a rectangular layout, padding short rows with transparent cells."""
    width = max(len(row) for row in rows)
    return tuple(
        tuple(PALETTE_CODES[ch] for ch in row.ljust(width, "."))
        for row in rows
    )


# =============================================================================
# Player
# =============================================================================

_DINO_HEAD = (
    "..........XXXXXXXX",
    ".........XXwXXXXXXX",
    ".........XXXXXXXXXX",
    ".........XXXXXXXXXX",
    ".........XXXXX",
    ".........XXXXXXXX",
    "X.......XXXXX",
    "X.....XXXXXXXXXX",
    "XX..XXXXXXXXX..X",
    "XXXXXXXXXXXXX",
    ".XXXXXXXXXXXX",
    "..XXXXXXXXXX",
)

DINO_RUN = (
    _grid(
        *_DINO_HEAD,
        "...XXXXXXXX",
        "....XXX..XX",
        "....XX....X",
        "....X.....XX",
    ),
    _grid(
        *_DINO_HEAD,
        "...XXXXXXXX",
        "....XX..XXX",
        "....X....XX",
        "....XX......",
    ),
)

DINO_STAND = _grid(
    *_DINO_HEAD,
    "...XXXXXXXX",
    "....XXX.XX",
    "....XX...X",
    "....XX...XX",
)

DINO_DEAD = _grid(
    "..........XXXXXXXX",
    ".........XdwdXXXXXX",
    ".........XwdwXXXXXX",
    ".........XdwdXXXXXX",
    ".........XXXXXXXXXX",
    ".........XXXXrrr",
    "X.......XXXXX",
    "X.....XXXXXXXXXX",
    "XX..XXXXXXXXX..X",
    "XXXXXXXXXXXXX",
    ".XXXXXXXXXXXX",
    "..XXXXXXXXXX",
    "...XXXXXXXX",
    "....XXX.XX",
    "....XX...X",
    "....XX...XX",
)

# =============================================================================
# Harmful obstacles
# =============================================================================

CACTUS_SMALL_S1 = _grid(
    "...XX",
    "..XXXX",
    "..XXXX",
    "X.XXXX",
    "X.XXXX.X",
    "X.XXXX.X",
    "XXXXXX.X",
    ".XXXXXXX",
    "..XXXXX",
    "..XXXX",
    "..XXXX",
    "..XXXX",
    "..XXXX",
    "..XXXX",
    "..XXXX",
)

CACTUS_SMALL_S2 = _grid(
    "....XX",
    "...XXXX",
    ".X.XXXX",
    ".X.XXXX.X",
    ".X.XXXX.X",
    ".XXXXXXXX",
    "...XXXXX",
    "...XXXX",
    "...XXXX",
    "...XXXX",
    "...XXXX",
    "...XXXX",
    "...XXXX",
    "...XXXX",
    "...XXXX",
)

CACTUS_SMALL_D1 = _grid(
    "...XX.......XX",
    "..XXXX.....XXXX",
    "X.XXXX.....XXXX.X",
    "X.XXXX.X.X.XXXX.X",
    "X.XXXX.X.X.XXXX.X",
    "XXXXXX.X.XXXXXXXX",
    ".XXXXXXX..XXXXX",
    "..XXXXX...XXXX",
    "..XXXX....XXXX",
    "..XXXX....XXXX",
    "..XXXX....XXXX",
    "..XXXX....XXXX",
    "..XXXX....XXXX",
    "..XXXX....XXXX",
    "..XXXX....XXXX",
)

CACTUS_MEDIUM_S1 = _grid(
    "....XXX",
    "...XXXXX",
    "...XXXXX",
    "X..XXXXX",
    "XX.XXXXX..X",
    "XX.XXXXX.XX",
    "XX.XXXXX.XX",
    "XX.XXXXX.XX",
    "XXXXXXXX.XX",
    ".XXXXXXXXXX",
    "...XXXXXXX",
    "...XXXXX",
    "...XXXXX",
    "...XXXXX",
    "...XXXXX",
    "...XXXXX",
    "...XXXXX",
    "...XXXXX",
    "...XXXXX",
)

CACTUS_MEDIUM_S2 = _grid(
    "....XXX",
    "...XXXXX",
    "...XXXXX..X",
    "...XXXXX.XX",
    "X..XXXXX.XX",
    "XX.XXXXX.XX",
    "XX.XXXXXXXX",
    "XX.XXXXXXX",
    "XXXXXXXX",
    ".XXXXXXX",
    "...XXXXX",
    "...XXXXX",
    "...XXXXX",
    "...XXXXX",
    "...XXXXX",
    "...XXXXX",
    "...XXXXX",
    "...XXXXX",
    "...XXXXX",
)

CACTUS_MEDIUM_D1 = _grid(
    "....XXX..........XXX",
    "...XXXXX........XXXXX",
    "...XXXXX........XXXXX",
    "X..XXXXX........XXXXX..X",
    "XX.XXXXX..X.....XXXXX.XX",
    "XX.XXXXX.XX..X..XXXXX.XX",
    "XX.XXXXX.XX.XX..XXXXX.XX",
    "XX.XXXXX.XX.XX.XXXXXXXXX",
    "XXXXXXXX.XXXXX.XXXXXXXX",
    ".XXXXXXXXXX.XX..XXXXX",
    "...XXXXXXX..XXXXXXXXX",
    "...XXXXX.....XXXXXXXX",
    "...XXXXX........XXXXX",
    "...XXXXX........XXXXX",
    "...XXXXX........XXXXX",
    "...XXXXX........XXXXX",
    "...XXXXX........XXXXX",
    "...XXXXX........XXXXX",
    "...XXXXX........XXXXX",
)

BIRD_FLY = (
    _grid(
        ".....X",
        ".....XX",
        ".....XXX",
        "...X.XXXX",
        "..XXXXXXXX",
        ".XXwXXXXXXX",
        "XXXXXXXXXXXXXXXXX",
        "......XXXXXXXXXXXXXX",
        ".......XXXXXXXXXXX",
        "........XXXXXXXXXXXXX",
        "..........XXXXXXX",
    ),
    _grid(
        "",
        "",
        "",
        "...X",
        "..XXXX",
        ".XXwXXXX",
        "XXXXXXXXXXXXXXXXX",
        "......XXXXXXXXXXXXXX",
        ".......XXXXXXXXXXX",
        "........XXXXXXXXXXXXX",
        "........XXXXX",
        "........XXXX",
        "........XXX",
        "........XX",
    ),
)

# =============================================================================
# Harmless decorations
# =============================================================================

CLOUD = _grid(
    "..........dddddd",
    "........dd......dd",
    "......dd..........d",
    "..dddd............ddd",
    ".d...................dd",
    "d.....................d",
    "ddddddddddddddddddddddd",
)

STONE_LARGE = _grid(
    "..XXX",
    "XXXXXXX",
)

STONE_MEDIUM = _grid(
    ".XX",
    "XXXX",
)

STONE_SMALL = _grid(
    "XX",
)

PIT_LARGE = _grid(
    "XXXXXXXXXX",
    ".XXXXXXXX",
    "...XXXX",
)

PIT_UP = _grid(
    "...XXXX",
    "XXXXXXXXXX",
)

PIT_DOWN = _grid(
    "XXXXXXXX",
    "..XXX",
)

STAR_SMALL_S1 = _grid(
    ".d",
    "ddd",
    ".d",
)

STAR_SMALL_S2 = _grid(
    "d.d",
    ".d",
    "d.d",
)

# =============================================================================
# UI
# =============================================================================

RETRY = _grid(
    "....XXXXXXXX",
    "..XXXXXXXXXXXX",
    ".XXXX......XXXX",
    "XXX..........X",
    "XXX",
    "XXX.......XXXXXXX",
    "XXX........XXXXX",
    ".XXX........XXX",
    "..XXXX.......X",
    "...XXXXXXXXXX",
    ".....XXXXXX",
)
