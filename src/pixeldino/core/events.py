"""
Event bus for pixeldino.

Decouples input sources (keyboard, mouse, touch) from the engine and lets
the UI react to engine milestones without the engine knowing about it.
"""

from dataclasses import dataclass, field
from typing import Any, Callable, Awaitable
from enum import Enum, auto
from collections import defaultdict
import asyncio
import logging
import time

logger = logging.getLogger(__name__)


class EventType(Enum):
    """Built-in event types."""
    # Input events
    PRIMARY_ACTION = auto()  # Space / Up / Enter / click / tap
    CYCLE_THEME = auto()
    TOGGLE_MUTE = auto()

    # Game events
    GAME_STARTED = auto()
    GAME_OVER = auto()
    HIGH_SCORE = auto()
    SPEEDUP = auto()

    # Collaborator events
    MINT_COMPLETE = auto()
    SCORE_REPORTED = auto()


@dataclass
class Event:
    """
    Event data container.

    Attributes:
        type: Event type (EventType enum or custom string)
        data: Event payload
        source: Component that emitted the event
        timestamp: Wall-clock time the event was created
    """
    type: EventType | str
    data: dict[str, Any] = field(default_factory=dict)
    source: str = "system"
    timestamp: float = field(default_factory=time.time)


SyncHandler = Callable[[Event], None]
AsyncHandler = Callable[[Event], Awaitable[None]]
Handler = SyncHandler | AsyncHandler


class EventBus:
    """
    Central event bus for component communication.

    Supports both synchronous and asynchronous handlers.
    Events can be emitted immediately or queued for the next frame.
    """

    def __init__(self) -> None:
        self._handlers: dict[EventType | str, list[Handler]] = defaultdict(list)
        self._queue: list[Event] = []

    def subscribe(
        self,
        event_type: EventType | str,
        handler: Handler
    ) -> Callable[[], None]:
        """
        Subscribe to an event type.

        Returns:
            Unsubscribe function
        """
        self._handlers[event_type].append(handler)
        logger.debug(f"Handler subscribed to {event_type}")

        def unsubscribe() -> None:
            if handler in self._handlers[event_type]:
                self._handlers[event_type].remove(handler)
                logger.debug(f"Handler unsubscribed from {event_type}")

        return unsubscribe

    def emit(self, event: Event) -> None:
        """
        Emit an event immediately (synchronous handlers only).

        For async handlers, use queue_event.
        """
        self._dispatch_sync(event)

    def queue_event(self, event: Event) -> None:
        """Queue an event for the next process_queue call."""
        self._queue.append(event)

    async def process_queue(self) -> None:
        """Process all queued events in arrival order."""
        pending, self._queue = self._queue, []
        for event in pending:
            await self._dispatch_async(event)

    def _dispatch_sync(self, event: Event) -> None:
        for handler in list(self._handlers.get(event.type, [])):
            if asyncio.iscoroutinefunction(handler):
                continue  # Skip async handlers
            try:
                handler(event)
            except Exception as e:
                logger.error(f"Error in event handler: {e}")

    async def _dispatch_async(self, event: Event) -> None:
        tasks = []
        for handler in list(self._handlers.get(event.type, [])):
            if asyncio.iscoroutinefunction(handler):
                tasks.append(asyncio.create_task(handler(event)))
            else:
                try:
                    handler(event)
                except Exception as e:
                    logger.error(f"Error in sync handler: {e}")

        if tasks:
            results = await asyncio.gather(*tasks, return_exceptions=True)
            for result in results:
                if isinstance(result, Exception):
                    logger.error(f"Error in async handler: {result}")


def primary_action_event(source: str = "keyboard") -> Event:
    """Create a primary action (start / jump / restart) event."""
    return Event(EventType.PRIMARY_ACTION, source=source)

