"""Core framework components for BALLRUNNER."""

from .state import SessionStatus, EndReason, StateMachine
from .events import EventBus, Event, EventType

__all__ = ["SessionStatus", "EndReason", "StateMachine", "EventBus", "Event", "EventType"]
