"""
Event bus system for BALLRUNNER.

Provides pub/sub messaging between the game session and its shells
(renderer, simulator window, headless runner).
"""

from dataclasses import dataclass, field
from typing import Any, Callable
from enum import Enum, auto
import logging
import time
from collections import defaultdict

logger = logging.getLogger(__name__)


class EventType(Enum):
    """Built-in event types."""
    # Commands (shell -> session)
    START = auto()
    JUMP = auto()
    RESTART = auto()
    RESIZE = auto()

    # Outputs (session -> shell)
    SESSION_STARTED = auto()
    SCORE_CHANGED = auto()
    BALL_MOVED = auto()
    OBSTACLES_CHANGED = auto()
    SESSION_ENDED = auto()


@dataclass
class Event:
    """
    Event data container.

    Attributes:
        type: Event type (EventType enum or custom string)
        data: Event payload
        source: Component that emitted the event
        timestamp: When event was created
    """
    type: EventType | str
    data: dict[str, Any] = field(default_factory=dict)
    source: str = "system"
    timestamp: float = field(default_factory=time.monotonic)


Handler = Callable[[Event], None]


class EventBus:
    """
    Central event bus for component communication.

    Handlers run synchronously in subscription order, on the thread
    that emits. A failing handler is logged and skipped.
    """

    def __init__(self, history_limit: int = 100) -> None:
        self._handlers: dict[EventType | str, list[Handler]] = defaultdict(list)
        self._global_handlers: list[Handler] = []
        self._event_history: list[Event] = []
        self._history_limit = history_limit

    def subscribe(
        self,
        event_type: EventType | str,
        handler: Handler
    ) -> Callable[[], None]:
        """
        Subscribe to an event type.

        Args:
            event_type: Type of event to listen for
            handler: Callback function

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

    def subscribe_all(self, handler: Handler) -> Callable[[], None]:
        """
        Subscribe to all events.

        Args:
            handler: Callback function

        Returns:
            Unsubscribe function
        """
        self._global_handlers.append(handler)

        def unsubscribe() -> None:
            if handler in self._global_handlers:
                self._global_handlers.remove(handler)

        return unsubscribe

    def emit(self, event: Event) -> None:
        """Emit an event immediately."""
        self._add_to_history(event)
        self._dispatch(event)

    def _dispatch(self, event: Event) -> None:
        """Dispatch event to its handlers, then to global handlers."""
        # Copy so handlers may unsubscribe while being called
        handlers = list(self._handlers.get(event.type, [])) + list(self._global_handlers)

        for handler in handlers:
            try:
                handler(event)
            except Exception as e:
                logger.error(f"Error in event handler for {event.type}: {e}")

    def _add_to_history(self, event: Event) -> None:
        """Add event to history, maintaining limit."""
        self._event_history.append(event)
        if len(self._event_history) > self._history_limit:
            self._event_history.pop(0)

    def get_history(
        self,
        event_type: EventType | str | None = None,
        limit: int = 10
    ) -> list[Event]:
        """Get recent events from history."""
        history = self._event_history
        if event_type is not None:
            history = [e for e in history if e.type == event_type]
        return history[-limit:]

    def clear_history(self) -> None:
        """Clear event history."""
        self._event_history.clear()


# Convenience functions for creating command events
def jump_event(source: str = "keyboard") -> Event:
    """Create a jump command."""
    return Event(EventType.JUMP, source=source)


def start_event(source: str = "keyboard") -> Event:
    """Create a start command."""
    return Event(EventType.START, source=source)


def restart_event(source: str = "keyboard") -> Event:
    """Create a restart command."""
    return Event(EventType.RESTART, source=source)


def resize_event(width: float, source: str = "window") -> Event:
    """Create a viewport resize notification."""
    return Event(EventType.RESIZE, data={"width": width}, source=source)
