"""
Application settings using Pydantic.

Settings are loaded from environment variables with .env file support.
Nested groups use a double underscore, e.g. BALLRUNNER_SESSION__WIN_SCORE=500.
"""

from functools import lru_cache
from typing import Literal, Optional

from pydantic import BaseModel, Field, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class PhysicsSettings(BaseModel):
    """Ball geometry and jump curve."""

    # Ball sits at a fixed x, only its height changes
    ball_x: float = 100.0
    ball_size: float = Field(default=50.0, ge=0.0)

    # Step per tick = base_speed - offset / damping
    base_speed: float = Field(default=20.0, gt=0.0)
    damping: float = Field(default=22.5, gt=0.0)
    apex_height: float = Field(default=300.0, gt=0.0)

    @model_validator(mode="after")
    def _check_apex_reachable(self) -> "PhysicsSettings":
        # The rise stalls at base_speed * damping, the apex must sit below it
        if self.apex_height >= self.base_speed * self.damping:
            raise ValueError(
                f"apex_height {self.apex_height} unreachable, "
                f"must be below base_speed * damping ({self.base_speed * self.damping})"
            )
        return self


class ObstacleSettings(BaseModel):
    """Obstacle sizes, spacing and scroll speed."""

    width: float = Field(default=50.0, ge=0.0)
    min_height: float = Field(default=50.0, ge=0.0)
    max_height: float = Field(default=150.0, ge=0.0)

    # Gap between consecutive obstacles is min_spacing + uniform(0, jitter)
    min_spacing: float = Field(default=400.0, gt=0.0)
    jitter: float = Field(default=300.0, ge=0.0)

    scroll_speed: float = Field(default=7.5, ge=0.0)  # scene units per tick

    @model_validator(mode="after")
    def _check_height_range(self) -> "ObstacleSettings":
        if self.max_height < self.min_height:
            raise ValueError("max_height must be >= min_height")
        return self


class SessionSettings(BaseModel):
    """Tick cadence and scoring."""

    tick_interval_ms: float = Field(default=16.67, gt=0.0)  # ~60 Hz
    score_increment: int = Field(default=5, ge=0)
    win_score: int = Field(default=10000, gt=0)

    # Scene width used until the shell reports a real one
    viewport_width: float = 1280.0

    @property
    def tick_interval(self) -> float:
        """Tick interval in seconds."""
        return self.tick_interval_ms / 1000.0


class DisplaySettings(BaseModel):
    """Simulator window settings."""

    window_width: int = 1280
    window_height: int = 720
    fps: int = 60

    # Baseline distance from the bottom edge, in pixels
    ground_margin: int = 40

    # Colors
    sky_color: tuple[int, int, int] = (12, 14, 28)
    ground_color: tuple[int, int, int] = (60, 44, 30)
    ball_color: tuple[int, int, int] = (255, 210, 60)
    obstacle_color: tuple[int, int, int] = (80, 200, 120)
    text_color: tuple[int, int, int] = (230, 230, 240)


class Settings(BaseSettings):
    """Main application settings."""

    model_config = SettingsConfigDict(
        env_prefix="BALLRUNNER_",
        env_file=".env",
        env_file_encoding="utf-8",
        env_nested_delimiter="__",
        extra="ignore",
    )

    # Environment
    env: Literal["simulator", "headless"] = "simulator"
    debug: bool = False

    # Fixed seed makes obstacle layouts reproducible
    seed: Optional[int] = None

    # Headless runs stop here if nobody won or lost yet
    headless_max_ticks: int = Field(default=5000, gt=0)

    # Nested settings
    physics: PhysicsSettings = Field(default_factory=PhysicsSettings)
    obstacles: ObstacleSettings = Field(default_factory=ObstacleSettings)
    session: SessionSettings = Field(default_factory=SessionSettings)
    display: DisplaySettings = Field(default_factory=DisplaySettings)

    @property
    def is_simulator(self) -> bool:
        """Check if running in the pygame simulator."""
        return self.env == "simulator"

    @property
    def is_headless(self) -> bool:
        """Check if running without a window."""
        return self.env == "headless"


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
