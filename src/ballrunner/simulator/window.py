"""
Main simulator window using pygame.

Runs a GameSession on the asyncio loop and shows it in a resizable
desktop window.
"""

import pygame
import asyncio
import logging
from dataclasses import dataclass
from typing import Optional

from ..config.settings import Settings, get_settings
from ..core.events import EventBus, Event, EventType, jump_event, restart_event, resize_event, start_event
from ..core.state import SessionStatus
from ..game.scheduler import AsyncioTickScheduler
from ..game.session import GameSession
from ..graphics.primitives import new_buffer
from ..graphics.renderer import SceneRenderer

logger = logging.getLogger(__name__)


@dataclass
class WindowConfig:
    """Simulator window configuration."""
    width: int = 1280
    height: int = 720
    title: str = "BALLRUNNER"
    fps: int = 60
    font_size: int = 28
    small_font_size: int = 18

    @classmethod
    def from_settings(cls, settings: Settings) -> "WindowConfig":
        display = settings.display
        return cls(width=display.window_width, height=display.window_height, fps=display.fps)


class SimulatorWindow:
    """
    Desktop shell around a GameSession.

    Keyboard Mapping:
        SPACE / UP: Jump while running, otherwise start or restart
        ESC / Q: Exit simulator
    """

    def __init__(
        self,
        config: WindowConfig | None = None,
        settings: Settings | None = None,
        event_bus: EventBus | None = None,
    ) -> None:
        self.settings = settings or get_settings()
        self.config = config or WindowConfig.from_settings(self.settings)
        self.event_bus = event_bus or EventBus()

        # Pygame setup
        self._screen: pygame.Surface | None = None
        self._clock: pygame.time.Clock | None = None
        self._font: pygame.font.Font | None = None
        self._small_font: pygame.font.Font | None = None
        self._running = False
        self._frame_count = 0

        # Game
        self.session = GameSession(
            settings=self.settings,
            event_bus=self.event_bus,
            scheduler=AsyncioTickScheduler(self.settings.session.tick_interval),
            viewport_width=self.config.width,
        )
        self.session.bind()
        self.renderer = SceneRenderer(self.event_bus, self.settings)
        self._buffer = new_buffer(self.config.width, self.config.height)

        self.event_bus.subscribe(EventType.SESSION_ENDED, self._on_session_ended)

        logger.info("SimulatorWindow created")

    def _init_pygame(self) -> None:
        """Initialize pygame and create window."""
        pygame.init()
        pygame.display.set_caption(self.config.title)

        self._screen = pygame.display.set_mode(
            (self.config.width, self.config.height),
            pygame.RESIZABLE | pygame.DOUBLEBUF,
        )
        self._clock = pygame.time.Clock()

        pygame.font.init()
        self._font = pygame.font.SysFont(None, self.config.font_size)
        self._small_font = pygame.font.SysFont(None, self.config.small_font_size)

        logger.info(f"Pygame initialized: {self.config.width}x{self.config.height}")

    def _handle_events(self) -> None:
        """Process pygame events."""
        for event in pygame.event.get():
            if event.type == pygame.QUIT:
                self._running = False

            elif event.type == pygame.KEYDOWN:
                self._handle_keydown(event)

            elif event.type == pygame.VIDEORESIZE:
                self._handle_resize(event.w, event.h)

    def _handle_keydown(self, event: pygame.event.Event) -> None:
        """Handle key press."""
        key = event.key

        if key in (pygame.K_ESCAPE, pygame.K_q):
            self._running = False
        elif key in (pygame.K_SPACE, pygame.K_UP):
            status = self.session.status
            if status == SessionStatus.RUNNING:
                self.event_bus.emit(jump_event())
            elif status == SessionStatus.IDLE:
                self.event_bus.emit(start_event())
            else:
                self.event_bus.emit(restart_event())

    def _handle_resize(self, width: int, height: int) -> None:
        """Reallocate the framebuffer and tell the session."""
        self.config.width = max(1, width)
        self.config.height = max(1, height)
        self._buffer = new_buffer(self.config.width, self.config.height)
        self.event_bus.emit(resize_event(self.config.width))

    def _on_session_ended(self, event: Event) -> None:
        logger.info(f"Run over ({event.data['reason']}), score {event.data['score']}")

    def _render(self) -> None:
        """Render the scene and text overlays."""
        if not self._screen:
            return

        self.renderer.render(self._buffer)
        surface = pygame.surfarray.make_surface(self._buffer.swapaxes(0, 1))
        self._screen.blit(surface, (0, 0))

        self._render_score()
        self._render_status()

        pygame.display.flip()

    def _render_score(self) -> None:
        if not self._font:
            return
        text_color = self.settings.display.text_color
        score_surface = self._font.render(str(self.renderer.state.score), True, text_color)
        self._screen.blit(score_surface, (self.config.width - score_surface.get_width() - 20, 16))

    def _render_status(self) -> None:
        """Center end-screen / start prompt lines on the window."""
        lines = self.renderer.status_text()
        if not lines or not self._font or not self._small_font:
            return

        text_color = self.settings.display.text_color
        y = self.config.height // 3
        for index, line in enumerate(lines):
            font = self._font if index == 0 else self._small_font
            surface = font.render(line, True, text_color)
            rect = surface.get_rect(center=(self.config.width // 2, y))
            self._screen.blit(surface, rect)
            y += rect.height + 12

    async def run(self) -> None:
        """Main simulator loop."""
        self._init_pygame()
        self._running = True

        logger.info("Simulator started")

        self.event_bus.emit(start_event(source="simulator"))

        while self._running:
            self._handle_events()
            self._render()

            # Frame timing
            if self._clock:
                self._clock.tick(self.config.fps)

            self._frame_count += 1

            # Let the tick scheduler run
            await asyncio.sleep(0)

        self._cleanup()

    def _cleanup(self) -> None:
        """Stop ticking and release pygame."""
        self.session.scheduler.stop()
        self.renderer.close()
        pygame.quit()
        logger.info(f"Simulator stopped after {self._frame_count} frames")

    def stop(self) -> None:
        """Stop the simulator."""
        self._running = False
