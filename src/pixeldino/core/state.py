"""
Phase machine for a single game session.

Phases:
    READY: Nothing running, waiting for the first primary action
    RUNNING: Simulation advancing one step per frame
    OVER: Simulation frozen after a collision, restart is gated by a cooldown
"""

from enum import Enum, auto
from typing import Callable
import logging

logger = logging.getLogger(__name__)


class Phase(Enum):
    """Game phases."""
    READY = auto()
    RUNNING = auto()
    OVER = auto()


PhaseListener = Callable[["Phase", "Phase"], None]


class PhaseMachine:
    """
    Tracks the current phase and guards transitions.

    Listeners are notified after every successful transition; a failing
    listener is logged and does not stop the others.
    """

    VALID_TRANSITIONS: list[tuple[Phase, Phase]] = [
        (Phase.READY, Phase.RUNNING),
        (Phase.RUNNING, Phase.OVER),
        (Phase.OVER, Phase.RUNNING),  # Restart after cooldown

        # Teardown on surface resize
        (Phase.RUNNING, Phase.READY),
        (Phase.OVER, Phase.READY),
    ]

    def __init__(self, initial_phase: Phase = Phase.READY) -> None:
        self._phase = initial_phase
        self._listeners: list[PhaseListener] = []
        self._valid_transitions = set(self.VALID_TRANSITIONS)
        logger.debug(f"PhaseMachine initialized with phase: {initial_phase.name}")

    @property
    def phase(self) -> Phase:
        return self._phase

    def can_transition(self, to_phase: Phase) -> bool:
        return (self._phase, to_phase) in self._valid_transitions

    def transition(self, to_phase: Phase) -> bool:
        """
        Attempt to move to a new phase.

        Returns:
            True if the transition happened, False if it is not allowed
        """
        if not self.can_transition(to_phase):
            logger.warning(
                f"Invalid transition: {self._phase.name} -> {to_phase.name}"
            )
            return False

        old_phase = self._phase
        self._phase = to_phase
        logger.info(f"Phase transition: {old_phase.name} -> {to_phase.name}")

        for listener in self._listeners:
            try:
                listener(old_phase, to_phase)
            except Exception as e:
                logger.error(f"Error in phase listener: {e}")

        return True

    def add_listener(self, callback: PhaseListener) -> None:
        self._listeners.append(callback)

    def remove_listener(self, callback: PhaseListener) -> None:
        if callback in self._listeners:
            self._listeners.remove(callback)
