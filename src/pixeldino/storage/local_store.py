"""Persistent key/value store backed by a single JSON file.

Values are strings, like browser local storage. A missing or corrupt file
is treated as an empty store so a bad write never bricks the game.
"""

import json
import logging
from pathlib import Path
from typing import Any

from pixeldino.config.themes import Theme
from pixeldino.game.collaborators import ScoreStore

logger = logging.getLogger(__name__)

HIGH_SCORE_KEY = "pixeldino.high_score"
THEME_KEY = "pixeldino.theme"


class LocalStore:
    """String key/value pairs persisted to ``path`` on every write."""

    def __init__(self, path: Path):
        self.path = Path(path)
        self._data: dict[str, str] = self._load()

    def _load(self) -> dict[str, str]:
        if not self.path.exists():
            return {}
        try:
            with open(self.path, encoding="utf-8") as f:
                data = json.load(f)
        except (OSError, json.JSONDecodeError) as e:
            logger.error(f"Failed to read store {self.path}: {e}")
            return {}

        if not isinstance(data, dict):
            logger.error(f"Ignoring store {self.path}: expected an object")
            return {}
        return {str(k): str(v) for k, v in data.items()}

    def _flush(self) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        tmp_path = self.path.with_suffix(self.path.suffix + ".tmp")
        with open(tmp_path, "w", encoding="utf-8") as f:
            json.dump(self._data, f, ensure_ascii=False, indent=2)
        tmp_path.replace(self.path)

    def get_item(self, key: str) -> str | None:
        return self._data.get(key)

    def set_item(self, key: str, value: str) -> None:
        self._data[key] = value
        self._flush()

    def remove_item(self, key: str) -> None:
        if self._data.pop(key, None) is not None:
            self._flush()

    def __contains__(self, key: str) -> bool:
        return key in self._data


class GameStorage(ScoreStore):
    """High score and selected theme on top of a LocalStore."""

    def __init__(self, store: LocalStore):
        self._store = store

    def get_high_score(self) -> int:
        raw = self._store.get_item(HIGH_SCORE_KEY)
        if raw is None:
            return 0
        try:
            return int(float(raw))
        except (ValueError, OverflowError):
            logger.warning(f"Ignoring invalid stored high score: {raw!r}")
            return 0

    def set_high_score(self, score: int) -> None:
        self._store.set_item(HIGH_SCORE_KEY, str(int(score)))

    def load_theme(self) -> Theme | None:
        """The last applied theme, or None if nothing valid is stored."""
        raw = self._store.get_item(THEME_KEY)
        if raw is None:
            return None
        try:
            data: Any = json.loads(raw)
            return Theme.from_dict(data)
        except (json.JSONDecodeError, TypeError, ValueError, AttributeError) as e:
            logger.warning(f"Ignoring invalid stored theme: {e}")
            return None

    def save_theme(self, theme: Theme) -> None:
        self._store.set_item(THEME_KEY, json.dumps(theme.to_dict()))
