"""
Abstract interfaces for the engine's collaborators.

The engine only calls these methods; audio, persistence, the chain service
and visual effects each provide a concrete implementation. Every call is made
from inside the frame step, so implementations must return quickly and push
slow work (network, disk flushes) elsewhere.
"""

from abc import ABC, abstractmethod


class SoundPlayer(ABC):
    """Game sound effects and the background track."""

    @abstractmethod
    def play_jump(self) -> None:
        ...

    @abstractmethod
    def play_game_over(self) -> None:
        """Play the game-over sting followed by the voice line."""
        ...

    @abstractmethod
    def play_celebrate(self) -> None:
        """Play the celebration sound once the game-over voice has finished."""
        ...

    @abstractmethod
    def start_track(self) -> None:
        """Start the looping background track. Idempotent."""
        ...

    @abstractmethod
    def stop_track(self) -> None:
        """Stop the background track. Idempotent."""
        ...


class ScoreStore(ABC):
    """Persisted high score."""

    @abstractmethod
    def get_high_score(self) -> int:
        ...

    @abstractmethod
    def set_high_score(self, score: int) -> None:
        ...


class Minter(ABC):
    """Rewards a new high score."""

    @abstractmethod
    def request_mint(self, score: int) -> None:
        """Start a mint without waiting for the outcome."""
        ...


class ScoreReporter(ABC):
    """Submits finished runs to a leaderboard."""

    @abstractmethod
    def report_score(self, score: int) -> None:
        """Start a submission without waiting for the outcome."""
        ...


class CelebrationEffect(ABC):
    """Visual effect shown for a new high score."""

    @abstractmethod
    def celebrate(self) -> None:
        ...
