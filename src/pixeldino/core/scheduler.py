"""
Frame scheduler.

The host drives ``run_pending`` once per display refresh; the engine asks
for its next step with ``request`` and stops the loop by not asking again
(or with ``cancel``).
"""

from typing import Callable
import logging

logger = logging.getLogger(__name__)

FrameCallback = Callable[[], None]


class TickScheduler:
    """Single-slot, non re-entrant frame callback holder."""

    def __init__(self) -> None:
        self._callback: FrameCallback | None = None
        self._running = False
        self.frames_run = 0

    @property
    def pending(self) -> bool:
        return self._callback is not None

    def request(self, callback: FrameCallback) -> None:
        """Schedule ``callback`` for the next frame, replacing any earlier request."""
        self._callback = callback

    def cancel(self) -> None:
        if self._callback is not None:
            logger.debug("Pending frame cancelled")
        self._callback = None

    def run_pending(self) -> bool:
        """
        Run the scheduled callback, if any.

        The slot is cleared before the callback runs, so a callback that
        wants another frame must request it again.

        Returns:
            True if a callback ran
        """
        if self._running:
            raise RuntimeError("run_pending called from inside a frame callback")

        callback, self._callback = self._callback, None
        if callback is None:
            return False

        self._running = True
        try:
            callback()
        finally:
            self._running = False
        self.frames_run += 1
        return True
