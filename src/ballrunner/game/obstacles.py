"""Scrolling obstacles and the field that spawns and recycles them."""

import itertools
import logging
import math
import random
from dataclasses import dataclass
from typing import Any, Dict, List, Optional

from ballrunner.config.settings import ObstacleSettings
from ballrunner.game.geometry import Rect

logger = logging.getLogger(__name__)


@dataclass
class Obstacle:
    """A block standing on the ground, scrolling left at a constant speed."""

    id: int
    height: float
    x: float
    width: float = 50.0
    scroll_speed: float = 7.5

    def tick(self) -> None:
        self.x -= self.scroll_speed

    def is_offscreen(self) -> bool:
        """True once the right edge has passed the left side of the scene."""
        return self.x + self.width <= 0

    def bounding_rect(self) -> Rect:
        return Rect(self.x, 0.0, self.width, self.height)

    def to_dict(self) -> Dict[str, Any]:
        return {"id": self.id, "x": self.x, "height": self.height}


class ObstacleField:
    """Ordered, capacity-bounded set of obstacles.

    Obstacles are kept left to right; list order is spatial order
    because every spawn lands to the right of the previous one.
    """

    def __init__(
        self,
        viewport_width: float,
        settings: Optional[ObstacleSettings] = None,
        rng: Optional[random.Random] = None,
    ):
        self.settings = settings or ObstacleSettings()
        self.obstacles: List[Obstacle] = []
        self.capacity = 1
        self.viewport_width = 0.0
        self._rng = rng or random.Random()
        self._ids = itertools.count(1)
        self.set_capacity(viewport_width)

    def __len__(self) -> int:
        return len(self.obstacles)

    def __iter__(self):
        return iter(self.obstacles)

    def set_capacity(self, viewport_width: float) -> None:
        """Recompute capacity from the viewport width.

        Existing obstacles are kept even if there are now more than
        capacity; spawning just pauses until the count drops.
        """
        self.viewport_width = max(0.0, float(viewport_width))
        self.capacity = max(1, math.ceil(self.viewport_width / self.settings.min_spacing))
        logger.debug(f"Obstacle capacity {self.capacity} for viewport {self.viewport_width}")

    def _next_x(self) -> float:
        if not self.obstacles:
            return self.viewport_width
        previous = self.obstacles[-1]
        return previous.x + self.settings.min_spacing + self._rng.uniform(0, self.settings.jitter)

    def spawn(self) -> Obstacle:
        """Append one obstacle right of the last one (or at the viewport edge)."""
        obstacle = Obstacle(
            id=next(self._ids),
            height=self._rng.uniform(self.settings.min_height, self.settings.max_height),
            x=self._next_x(),
            width=self.settings.width,
            scroll_speed=self.settings.scroll_speed,
        )
        self.obstacles.append(obstacle)
        return obstacle

    def replenish(self) -> int:
        """Spawn until the field is at capacity.

        Returns:
            Number of obstacles spawned
        """
        spawned = 0
        while len(self.obstacles) < self.capacity:
            self.spawn()
            spawned += 1
        return spawned

    def tick(self) -> int:
        """Scroll every obstacle, drop the ones that left the scene, refill.

        Returns:
            Number of obstacles removed
        """
        for obstacle in self.obstacles:
            obstacle.tick()

        survivors = [o for o in self.obstacles if not o.is_offscreen()]
        removed = len(self.obstacles) - len(survivors)
        self.obstacles = survivors

        self.replenish()
        return removed

    def rects(self) -> List[Rect]:
        return [o.bounding_rect() for o in self.obstacles]

    def to_list(self) -> List[Dict[str, Any]]:
        return [o.to_dict() for o in self.obstacles]
