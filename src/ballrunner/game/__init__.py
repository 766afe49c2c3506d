"""Simulation core: geometry, ball physics, obstacles and the session loop."""

from ballrunner.game.geometry import Rect, overlaps
from ballrunner.game.ball import Ball, BallPhase
from ballrunner.game.obstacles import Obstacle, ObstacleField
from ballrunner.game.scheduler import TickScheduler, AsyncioTickScheduler, ManualTickScheduler
from ballrunner.game.session import GameSession

__all__ = [
    "Rect",
    "overlaps",
    "Ball",
    "BallPhase",
    "Obstacle",
    "ObstacleField",
    "TickScheduler",
    "AsyncioTickScheduler",
    "ManualTickScheduler",
    "GameSession",
]
