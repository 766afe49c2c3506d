"""GameSession - one play-through of BALLRUNNER.

Owns the ball and the obstacle field, drives them from a tick
scheduler, keeps score and decides when the run is over.

Per tick, in order:
    1. field.replenish()
    2. field.tick()       (scroll + recycle)
    3. ball.tick()
    4. score += score_increment, state events emitted
    5. victory check, then collision check

Victory is checked before collision, so a run that reaches the winning
score on the same tick it hits an obstacle counts as a win.
"""

import logging
import random
from typing import Any, Dict, Optional

from ballrunner.config.settings import Settings, get_settings
from ballrunner.core.events import Event, EventBus, EventType
from ballrunner.core.state import EndReason, SessionStatus, StateMachine
from ballrunner.game.ball import Ball
from ballrunner.game.geometry import overlaps
from ballrunner.game.obstacles import ObstacleField
from ballrunner.game.scheduler import ManualTickScheduler, TickScheduler

logger = logging.getLogger(__name__)


class GameSession:
    """Orchestrates ball, obstacles, score and the tick loop.

    Lifecycle:
        IDLE --start()--> RUNNING --end()/abort()--> ENDED --restart()--> RUNNING

    Every output is emitted on the event bus with source "session".
    """

    def __init__(
        self,
        settings: Optional[Settings] = None,
        event_bus: Optional[EventBus] = None,
        scheduler: Optional[TickScheduler] = None,
        rng: Optional[random.Random] = None,
        viewport_width: Optional[float] = None,
    ):
        self.settings = settings or get_settings()
        self.event_bus = event_bus or EventBus()
        self.scheduler = scheduler or ManualTickScheduler()
        self.state_machine = StateMachine()

        if rng is None:
            rng = random.Random(self.settings.seed)
        self._rng = rng

        if viewport_width is None:
            viewport_width = self.settings.session.viewport_width
        self.viewport_width = max(0.0, float(viewport_width))

        self.ball: Optional[Ball] = None
        self.field: Optional[ObstacleField] = None
        self.score = 0
        self.ticks = 0

    # State
    @property
    def status(self) -> SessionStatus:
        return self.state_machine.state

    @property
    def is_running(self) -> bool:
        return self.status == SessionStatus.RUNNING

    @property
    def end_reason(self) -> Optional[EndReason]:
        return self.state_machine.context.end_reason

    # Commands
    def start(self) -> bool:
        """Begin a fresh run. Only valid from IDLE."""
        if self.status != SessionStatus.IDLE:
            logger.debug(f"Start ignored in {self.status.name}")
            return False

        # Never leave a previous tick chain alive
        self.scheduler.stop()

        self.score = 0
        self.ticks = 0
        self.ball = Ball(self.settings.physics)
        self.field = ObstacleField(self.viewport_width, self.settings.obstacles, self._rng)
        self.field.replenish()

        self.state_machine.transition(SessionStatus.RUNNING)
        logger.info(
            f"Session started: viewport {self.viewport_width:.0f}, "
            f"{len(self.field)} obstacles (capacity {self.field.capacity})"
        )

        self._emit(EventType.SESSION_STARTED, {"viewport_width": self.viewport_width})
        self._emit_state()

        self.scheduler.start(self.tick)
        return True

    def restart(self) -> bool:
        """Start over after a finished run. Ignored unless ENDED."""
        if self.status != SessionStatus.ENDED:
            logger.debug(f"Restart ignored in {self.status.name}")
            return False

        self.state_machine.transition(SessionStatus.IDLE)
        return self.start()

    def jump(self) -> bool:
        """Make the ball jump. Ignored unless RUNNING and grounded."""
        if not self.is_running or self.ball is None:
            return False
        return self.ball.jump()

    def on_resize(self, new_width: float) -> bool:
        """Track a new viewport width. Ignored if the width did not change.

        Negative widths are clamped to 0.
        """
        new_width = max(0.0, float(new_width))
        if new_width == self.viewport_width:
            return False

        logger.info(f"Viewport resized: {self.viewport_width:.0f} -> {new_width:.0f}")
        self.viewport_width = new_width
        if self.field is not None:
            self.field.set_capacity(new_width)
        return True

    def handle_input(self, event: Event) -> bool:
        """Dispatch a command event.

        Returns:
            True if the command changed anything
        """
        if event.type == EventType.JUMP:
            return self.jump()
        if event.type == EventType.START:
            return self.start()
        if event.type == EventType.RESTART:
            return self.restart()
        if event.type == EventType.RESIZE:
            width = event.data.get("width")
            if width is None:
                return False
            return self.on_resize(width)
        return False

    def bind(self, event_bus: Optional[EventBus] = None) -> None:
        """Subscribe to command events on the bus."""
        bus = event_bus or self.event_bus
        for event_type in (EventType.START, EventType.JUMP, EventType.RESTART, EventType.RESIZE):
            bus.subscribe(event_type, self.handle_input)

    # Loop
    def tick(self) -> None:
        """Advance the simulation by one tick."""
        if not self.is_running or self.ball is None or self.field is None:
            return

        try:
            self._step()
        except Exception:
            logger.exception(f"Tick {self.ticks + 1} failed, aborting session")
            self.abort()
            raise

    def _step(self) -> None:
        self.field.replenish()
        self.field.tick()
        self.ball.tick()

        self.ticks += 1
        self.score += self.settings.session.score_increment
        self._emit_state()

        if self.score >= self.settings.session.win_score:
            self.end(EndReason.VICTORY)
        elif self.collides():
            self.end(EndReason.COLLISION)

    def collides(self) -> bool:
        """Check the ball against every obstacle."""
        if self.ball is None or self.field is None:
            return False
        ball_rect = self.ball.bounding_rect()
        return any(overlaps(ball_rect, rect) for rect in self.field.rects())

    def end(self, reason: EndReason) -> None:
        """Stop the loop and freeze the scene."""
        if self.status != SessionStatus.RUNNING:
            return

        self.scheduler.stop()
        if self.ball is not None:
            self.ball.stop()

        reason = EndReason(reason)
        self.state_machine.transition(
            SessionStatus.ENDED, end_reason=reason, final_score=self.score
        )
        logger.info(f"Session ended: {reason.value} at score {self.score} after {self.ticks} ticks")

        self._emit(EventType.SESSION_ENDED, {"reason": reason.value, "score": self.score})

    def abort(self) -> None:
        """End a run that can no longer tick (failed tick, runner timeout).

        Leaves the session ENDED so restart() works again.
        """
        self.end(EndReason.ABORTED)

    # Output
    def snapshot(self) -> Dict[str, Any]:
        """Public state for shells and logging."""
        return {
            "status": self.status.name,
            "score": self.score,
            "ticks": self.ticks,
            "viewport_width": self.viewport_width,
            "ball": None if self.ball is None else {
                "vertical_offset": self.ball.vertical_offset,
                "phase": self.ball.phase.name,
            },
            "obstacles": [] if self.field is None else self.field.to_list(),
            "end_reason": None if self.end_reason is None else self.end_reason.value,
        }

    def _emit_state(self) -> None:
        self._emit(EventType.SCORE_CHANGED, {"score": self.score})
        self._emit(EventType.BALL_MOVED, {
            "vertical_offset": self.ball.vertical_offset,
            "phase": self.ball.phase.name,
        })
        self._emit(EventType.OBSTACLES_CHANGED, {"obstacles": self.field.to_list()})

    def _emit(self, event_type: EventType, data: Dict[str, Any]) -> None:
        self.event_bus.emit(Event(event_type, data=data, source="session"))
