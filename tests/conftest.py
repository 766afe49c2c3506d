"""Root conftest for all tests - shared fixtures and configuration."""
import random
import sys
from pathlib import Path

import pytest

# Add src/ to path so tests run without an install
ROOT = Path(__file__).resolve().parents[1]
SRC = ROOT / "src"
if str(SRC) not in sys.path:
    sys.path.insert(0, str(SRC))

from ballrunner.config.settings import Settings  # noqa: E402
from ballrunner.core.events import EventBus  # noqa: E402
from ballrunner.game.scheduler import ManualTickScheduler  # noqa: E402
from ballrunner.game.session import GameSession  # noqa: E402


@pytest.fixture
def settings():
    """Default settings, ignoring any local .env file."""
    return Settings(_env_file=None)


@pytest.fixture
def bus():
    return EventBus(history_limit=10000)


@pytest.fixture
def scheduler():
    return ManualTickScheduler()


@pytest.fixture
def rng():
    """Seeded RNG so obstacle layouts are reproducible."""
    return random.Random(1234)


@pytest.fixture
def session(settings, bus, scheduler, rng):
    """Idle session on a 1280-wide viewport driven by a manual scheduler."""
    return GameSession(
        settings=settings,
        event_bus=bus,
        scheduler=scheduler,
        rng=rng,
        viewport_width=1280,
    )
