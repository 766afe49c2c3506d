"""Ball vertical motion.

The ball never moves horizontally. A jump runs a rise/fall curve whose
per-tick step shrinks as the ball gains height:

    step = base_speed - vertical_offset / damping

which gives a fast takeoff, a slow apex and a fast landing.
"""

import logging
from enum import Enum, auto
from typing import Optional

from ballrunner.config.settings import PhysicsSettings
from ballrunner.game.geometry import Rect

logger = logging.getLogger(__name__)


class BallPhase(Enum):
    """Where the ball is in its jump."""

    GROUNDED = auto()
    RISING = auto()
    FALLING = auto()


class Ball:
    """Player-controlled ball with a grounded/rising/falling state machine."""

    def __init__(self, physics: Optional[PhysicsSettings] = None):
        self.physics = physics or PhysicsSettings()
        self.vertical_offset: float = 0.0
        self.phase = BallPhase.GROUNDED
        self._stopped = False

    @property
    def is_airborne(self) -> bool:
        return self.phase != BallPhase.GROUNDED

    @property
    def is_stopped(self) -> bool:
        return self._stopped

    def jump(self) -> bool:
        """Start a jump. Ignored unless the ball rests on the ground.

        Returns:
            True if the jump started
        """
        if self._stopped or self.phase != BallPhase.GROUNDED or self.vertical_offset != 0:
            return False

        self.phase = BallPhase.RISING
        return True

    def step_size(self) -> float:
        """Current per-tick step, derived from the current height."""
        return self.physics.base_speed - self.vertical_offset / self.physics.damping

    def tick(self) -> None:
        """Advance the jump by one tick."""
        if self._stopped or self.phase == BallPhase.GROUNDED:
            return

        step = self.step_size()

        if self.phase == BallPhase.RISING:
            self.vertical_offset += step
            if self.vertical_offset >= self.physics.apex_height:
                self.phase = BallPhase.FALLING
        else:
            self.vertical_offset -= step
            if self.vertical_offset <= 0:
                self.vertical_offset = 0.0
                self.phase = BallPhase.GROUNDED

    def stop(self) -> None:
        """Freeze the ball where it is."""
        if not self._stopped:
            logger.debug(f"Ball stopped at offset {self.vertical_offset:.2f} ({self.phase.name})")
        self._stopped = True

    def bounding_rect(self) -> Rect:
        size = self.physics.ball_size
        return Rect(self.physics.ball_x, self.vertical_offset, size, size)
