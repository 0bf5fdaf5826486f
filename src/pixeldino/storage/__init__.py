"""Local persistence."""

from .local_store import LocalStore, GameStorage, HIGH_SCORE_KEY, THEME_KEY

__all__ = ["LocalStore", "GameStorage", "HIGH_SCORE_KEY", "THEME_KEY"]
