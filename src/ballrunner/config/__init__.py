"""Configuration for BALLRUNNER."""

from .settings import (
    DisplaySettings,
    ObstacleSettings,
    PhysicsSettings,
    SessionSettings,
    Settings,
    get_settings,
)

__all__ = [
    "Settings",
    "PhysicsSettings",
    "ObstacleSettings",
    "SessionSettings",
    "DisplaySettings",
    "get_settings",
]
