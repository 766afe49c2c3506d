"""
Headless runner for BALLRUNNER.

Plays a session without a window, stepping the ticks by hand. An
optional autopilot jumps when the next obstacle gets close, which is
handy for smoke runs and for watching the logs.
"""

import logging
from dataclasses import dataclass
from typing import Any, Dict, Optional

from .config.settings import Settings, get_settings
from .core.events import EventBus, EventType, Event
from .game.scheduler import ManualTickScheduler
from .game.session import GameSession

logger = logging.getLogger(__name__)


@dataclass
class HeadlessConfig:
    """Headless run configuration."""
    max_ticks: int = 5000
    autopilot: bool = True

    # Jump once the gap to the next obstacle is at most this many units
    jump_distance: float = 120.0

    # Log a progress line every N ticks (0 disables)
    log_every: int = 500


class HeadlessRunner:
    """Runs one session to completion (or max_ticks) on a manual scheduler."""

    def __init__(
        self,
        config: HeadlessConfig | None = None,
        settings: Settings | None = None,
        event_bus: EventBus | None = None,
    ) -> None:
        self.settings = settings or get_settings()
        self.config = config or HeadlessConfig(max_ticks=self.settings.headless_max_ticks)
        self.event_bus = event_bus or EventBus()
        self.scheduler = ManualTickScheduler()
        self.session = GameSession(
            settings=self.settings,
            event_bus=self.event_bus,
            scheduler=self.scheduler,
        )
        self.jumps = 0
        self._result: Optional[Dict[str, Any]] = None

        self.event_bus.subscribe(EventType.SESSION_ENDED, self._on_ended)

    def _on_ended(self, event: Event) -> None:
        self._result = dict(event.data)

    def should_jump(self) -> bool:
        """Autopilot rule: jump when the next obstacle ahead is close."""
        ball = self.session.ball
        field = self.session.field
        if ball is None or field is None or ball.is_airborne:
            return False

        ball_rect = ball.bounding_rect()
        for obstacle in field:
            if obstacle.x + obstacle.width <= ball_rect.x:
                continue  # already passed
            gap = obstacle.x - ball_rect.right
            return gap <= self.config.jump_distance
        return False

    def run(self) -> Dict[str, Any]:
        """Play until the session ends or max_ticks is reached.

        Returns:
            Summary with reason ("collision", "victory" or "timeout"),
            score, ticks and jumps
        """
        self.session.start()
        logger.info(f"Headless run started (autopilot={self.config.autopilot})")

        while self.session.is_running and self.session.ticks < self.config.max_ticks:
            if self.config.autopilot and self.should_jump():
                if self.session.jump():
                    self.jumps += 1
            self.scheduler.advance(1)

            if self.config.log_every and self.session.ticks % self.config.log_every == 0:
                logger.info(f"tick {self.session.ticks}: score {self.session.score}")

        if self.session.is_running:
            self.session.abort()
            self._result = {"reason": "timeout", "score": self.session.score}

        summary = {**self._result, "ticks": self.session.ticks, "jumps": self.jumps}
        logger.info(f"Headless run finished: {summary}")
        return summary
