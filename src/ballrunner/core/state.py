"""
State machine for a BALLRUNNER play-through.

States:
    IDLE: Session built, waiting for a start command
    RUNNING: Ticks are advancing the simulation
    ENDED: Collision, victory or abort, waiting for restart
"""

from enum import Enum, auto
from dataclasses import dataclass
from typing import Callable, Any
import logging

logger = logging.getLogger(__name__)


class SessionStatus(Enum):
    """Session lifecycle states."""
    IDLE = auto()
    RUNNING = auto()
    ENDED = auto()


class EndReason(str, Enum):
    """Why a session ended."""
    COLLISION = "collision"
    VICTORY = "victory"
    ABORTED = "aborted"


@dataclass
class StateContext:
    """Context data attached to the current state."""
    end_reason: EndReason | None = None
    final_score: int | None = None


Listener = Callable[[SessionStatus, SessionStatus, StateContext], None]


class StateMachine:
    """
    Manages session state and transitions.

    Rejects transitions that are not listed in VALID_TRANSITIONS and
    notifies listeners of the ones that go through.
    """

    # Valid state transitions
    VALID_TRANSITIONS: list[tuple[SessionStatus, SessionStatus]] = [
        (SessionStatus.IDLE, SessionStatus.RUNNING),
        (SessionStatus.RUNNING, SessionStatus.ENDED),
        (SessionStatus.ENDED, SessionStatus.IDLE),  # Restart
    ]

    def __init__(self, initial_state: SessionStatus = SessionStatus.IDLE) -> None:
        self._state = initial_state
        self._context = StateContext()
        self._listeners: list[Listener] = []
        self._valid_transitions = set(self.VALID_TRANSITIONS)
        logger.info(f"StateMachine initialized with state: {initial_state.name}")

    @property
    def state(self) -> SessionStatus:
        """Get current state."""
        return self._state

    @property
    def context(self) -> StateContext:
        """Get current context."""
        return self._context

    def can_transition(self, to_state: SessionStatus) -> bool:
        """Check if transition to given state is valid."""
        return (self._state, to_state) in self._valid_transitions

    def transition(self, to_state: SessionStatus, **context_updates: Any) -> bool:
        """
        Attempt to transition to a new state.

        Leaving ENDED clears the context; entering ENDED applies
        context_updates.

        Returns:
            True if transition successful, False otherwise
        """
        if not self.can_transition(to_state):
            logger.warning(
                f"Invalid transition: {self._state.name} -> {to_state.name}"
            )
            return False

        old_state = self._state
        self._state = to_state

        if old_state == SessionStatus.ENDED:
            self._context = StateContext()

        for key, value in context_updates.items():
            if hasattr(self._context, key):
                setattr(self._context, key, value)

        logger.info(f"State transition: {old_state.name} -> {to_state.name}")

        # Notify listeners
        for listener in self._listeners:
            try:
                listener(old_state, to_state, self._context)
            except Exception as e:
                logger.error(f"Error in state listener: {e}")

        return True

    def add_listener(self, callback: Listener) -> None:
        """Add a state change listener."""
        self._listeners.append(callback)

    def remove_listener(self, callback: Listener) -> None:
        """Remove a state change listener."""
        if callback in self._listeners:
            self._listeners.remove(callback)
