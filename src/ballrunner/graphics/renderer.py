"""Scene renderer for BALLRUNNER.

Listens to session output events and projects the last reported state
into an RGB framebuffer. It never reads the session directly, so what
is drawn is exactly what was emitted.
"""

import logging
from dataclasses import dataclass, field
from typing import Any, Callable, Dict, List, Optional

from ballrunner.config.settings import Settings, get_settings
from ballrunner.core.events import Event, EventBus, EventType
from ballrunner.graphics.primitives import Buffer, draw_circle, draw_rect, fill

logger = logging.getLogger(__name__)

END_MESSAGES = {
    "collision": "Game Over.",
    "victory": "You Won!",
    "aborted": "Game stopped.",
}
PLAY_AGAIN = "Press Space to play again"
PRESS_START = "Press Space to start"


@dataclass
class SceneState:
    """Last state reported by the session."""

    started: bool = False
    score: int = 0
    ball_offset: float = 0.0
    ball_phase: str = "GROUNDED"
    obstacles: List[Dict[str, Any]] = field(default_factory=list)
    end_reason: Optional[str] = None


class SceneRenderer:
    """Draws ground, obstacles and ball from emitted session events."""

    def __init__(self, event_bus: EventBus, settings: Optional[Settings] = None):
        self.settings = settings or get_settings()
        self.state = SceneState()
        self._unsubscribers: List[Callable[[], None]] = [
            event_bus.subscribe(EventType.SESSION_STARTED, self._on_started),
            event_bus.subscribe(EventType.SCORE_CHANGED, self._on_score),
            event_bus.subscribe(EventType.BALL_MOVED, self._on_ball),
            event_bus.subscribe(EventType.OBSTACLES_CHANGED, self._on_obstacles),
            event_bus.subscribe(EventType.SESSION_ENDED, self._on_ended),
        ]

    def close(self) -> None:
        """Stop listening to the bus."""
        for unsubscribe in self._unsubscribers:
            unsubscribe()
        self._unsubscribers.clear()

    # Event handlers
    def _on_started(self, event: Event) -> None:
        self.state = SceneState(started=True)

    def _on_score(self, event: Event) -> None:
        self.state.score = event.data["score"]

    def _on_ball(self, event: Event) -> None:
        self.state.ball_offset = event.data["vertical_offset"]
        self.state.ball_phase = event.data.get("phase", self.state.ball_phase)

    def _on_obstacles(self, event: Event) -> None:
        self.state.obstacles = list(event.data["obstacles"])

    def _on_ended(self, event: Event) -> None:
        self.state.end_reason = event.data["reason"]
        self.state.score = event.data.get("score", self.state.score)
        logger.debug(f"Renderer saw session end: {self.state.end_reason}")

    # Projection
    def ground_y(self, buffer: Buffer) -> int:
        """Pixel row of the ground baseline."""
        return buffer.shape[0] - self.settings.display.ground_margin

    def to_screen_y(self, buffer: Buffer, scene_y: float, height: float) -> int:
        """Top pixel row of a scene rectangle (scene y grows upward)."""
        return int(round(self.ground_y(buffer) - (scene_y + height)))

    def render(self, buffer: Buffer) -> None:
        """Draw the current scene into buffer."""
        display = self.settings.display
        fill(buffer, display.sky_color)

        ground_y = self.ground_y(buffer)
        draw_rect(buffer, 0, ground_y, buffer.shape[1], display.ground_margin, display.ground_color)

        if not self.state.started:
            return

        obstacle_width = self.settings.obstacles.width
        for obstacle in self.state.obstacles:
            height = obstacle["height"]
            draw_rect(
                buffer,
                int(round(obstacle["x"])),
                self.to_screen_y(buffer, 0.0, height),
                int(round(obstacle_width)),
                int(round(height)),
                display.obstacle_color,
            )

        physics = self.settings.physics
        radius = physics.ball_size / 2
        top = self.to_screen_y(buffer, self.state.ball_offset, physics.ball_size)
        draw_circle(
            buffer,
            int(round(physics.ball_x + radius)),
            int(round(top + radius)),
            int(radius),
            display.ball_color,
        )

    def status_text(self) -> List[str]:
        """Overlay lines for the current phase (empty while playing)."""
        if not self.state.started:
            return [PRESS_START]
        if self.state.end_reason is not None:
            return [END_MESSAGES.get(self.state.end_reason, self.state.end_reason), PLAY_AGAIN]
        return []
