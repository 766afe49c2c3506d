"""Tests for core/events.py and core/state.py."""
import pytest

from ballrunner.core.events import Event, EventBus, EventType, resize_event
from ballrunner.core.state import EndReason, SessionStatus, StateMachine


@pytest.mark.unit
class TestEventBus:
    """Unit tests for EventBus."""

    def test_event_types_are_commands_and_outputs(self):
        assert {t.name for t in EventType} == {
            "START", "JUMP", "RESTART", "RESIZE",
            "SESSION_STARTED", "SCORE_CHANGED", "BALL_MOVED",
            "OBSTACLES_CHANGED", "SESSION_ENDED",
        }

    def test_subscribe_and_emit(self):
        bus = EventBus()
        received = []
        bus.subscribe(EventType.JUMP, received.append)
        bus.emit(Event(EventType.JUMP))
        bus.emit(Event(EventType.RESTART))
        assert [e.type for e in received] == [EventType.JUMP]

    def test_unsubscribe(self):
        bus = EventBus()
        received = []
        unsubscribe = bus.subscribe(EventType.JUMP, received.append)
        unsubscribe()
        bus.emit(Event(EventType.JUMP))
        assert received == []

    def test_subscribe_all(self):
        bus = EventBus()
        received = []
        bus.subscribe_all(received.append)
        bus.emit(Event(EventType.JUMP))
        bus.emit(Event("custom"))
        assert [e.type for e in received] == [EventType.JUMP, "custom"]

    def test_failing_handler_is_isolated(self):
        bus = EventBus()
        received = []

        def broken(event):
            raise RuntimeError("boom")

        bus.subscribe(EventType.JUMP, broken)
        bus.subscribe(EventType.JUMP, received.append)
        bus.emit(Event(EventType.JUMP))
        assert len(received) == 1

    def test_history_limit(self):
        bus = EventBus(history_limit=3)
        for i in range(5):
            bus.emit(resize_event(i))
        history = bus.get_history(limit=10)
        assert [e.data["width"] for e in history] == [2, 3, 4]

    def test_history_filter_and_clear(self):
        bus = EventBus()
        bus.emit(Event(EventType.JUMP))
        bus.emit(Event(EventType.RESTART))
        assert len(bus.get_history(EventType.JUMP)) == 1
        bus.clear_history()
        assert bus.get_history() == []


@pytest.mark.unit
class TestStateMachine:
    """Unit tests for the session StateMachine."""

    def test_valid_cycle(self):
        sm = StateMachine()
        assert sm.transition(SessionStatus.RUNNING)
        assert sm.transition(SessionStatus.ENDED, end_reason=EndReason.VICTORY, final_score=10000)
        assert sm.context.end_reason == EndReason.VICTORY
        assert sm.context.final_score == 10000
        assert sm.transition(SessionStatus.IDLE)
        assert sm.context.end_reason is None

    def test_invalid_transition_rejected(self):
        sm = StateMachine()
        assert not sm.transition(SessionStatus.ENDED)
        assert sm.state == SessionStatus.IDLE

    def test_listeners_notified(self):
        sm = StateMachine()
        seen = []
        sm.add_listener(lambda old, new, ctx: seen.append((old, new)))
        sm.transition(SessionStatus.RUNNING)
        assert seen == [(SessionStatus.IDLE, SessionStatus.RUNNING)]

    def test_failing_listener_does_not_block(self):
        sm = StateMachine()

        def broken(old, new, ctx):
            raise RuntimeError("boom")

        sm.add_listener(broken)
        assert sm.transition(SessionStatus.RUNNING)
        sm.remove_listener(broken)
        assert sm.transition(SessionStatus.ENDED)

    def test_end_reason_values(self):
        assert EndReason("collision") is EndReason.COLLISION
        assert EndReason.VICTORY.value == "victory"
