"""
Fixed-cadence tick schedulers.

A scheduler owns at most one pending timer. start() always cancels the
previous one first, so restarting a session can never leave a second
tick chain running.
"""

from abc import ABC, abstractmethod
import asyncio
import logging
from typing import Callable, Optional

logger = logging.getLogger(__name__)

TickCallback = Callable[[], None]


class TickScheduler(ABC):
    """Abstract base class for tick sources."""

    @property
    @abstractmethod
    def is_running(self) -> bool:
        """Whether a callback is currently scheduled."""
        ...

    @abstractmethod
    def start(self, callback: TickCallback) -> None:
        """Begin calling callback once per tick, replacing any previous one."""
        ...

    @abstractmethod
    def stop(self) -> None:
        """Cancel the pending tick. Safe to call when not running."""
        ...


class AsyncioTickScheduler(TickScheduler):
    """
    Periodic callback on an asyncio event loop.

    Deadlines are chained at a fixed rate (deadline += interval) so the
    cadence does not drift with callback duration. The next tick is
    armed before the callback runs; a stop() from inside the callback
    cancels it.
    """

    def __init__(self, interval: float, loop: Optional[asyncio.AbstractEventLoop] = None) -> None:
        if interval <= 0:
            raise ValueError(f"interval must be positive, got {interval}")
        self.interval = interval
        self._loop = loop
        self._callback: Optional[TickCallback] = None
        self._handle: Optional[asyncio.TimerHandle] = None
        self._deadline = 0.0
        self.ticks = 0

    @property
    def is_running(self) -> bool:
        return self._handle is not None

    def start(self, callback: TickCallback) -> None:
        self.stop()
        loop = self._loop or asyncio.get_running_loop()
        self._loop = loop
        self._callback = callback
        self._deadline = loop.time() + self.interval
        self._handle = loop.call_at(self._deadline, self._fire)
        logger.info(f"Tick scheduler started ({1.0 / self.interval:.1f} Hz)")

    def stop(self) -> None:
        if self._handle is None:
            return
        self._handle.cancel()
        self._handle = None
        self._callback = None
        logger.info(f"Tick scheduler stopped after {self.ticks} ticks")

    def _fire(self) -> None:
        callback = self._callback
        if callback is None or self._loop is None:
            return

        # Skip missed deadlines instead of bursting to catch up
        now = self._loop.time()
        self._deadline += self.interval
        if self._deadline < now:
            self._deadline = now + self.interval
        self._handle = self._loop.call_at(self._deadline, self._fire)

        self.ticks += 1
        try:
            callback()
        except Exception:
            logger.exception("Tick callback failed, stopping scheduler")
            self.stop()


class ManualTickScheduler(TickScheduler):
    """Scheduler stepped by hand. Used by tests and the headless runner."""

    def __init__(self) -> None:
        self._callback: Optional[TickCallback] = None
        self.ticks = 0

    @property
    def is_running(self) -> bool:
        return self._callback is not None

    def start(self, callback: TickCallback) -> None:
        self.stop()
        self._callback = callback

    def stop(self) -> None:
        self._callback = None

    def advance(self, ticks: int = 1) -> int:
        """Fire up to `ticks` ticks, stopping early if the callback stops us.

        Returns:
            Number of ticks actually fired
        """
        fired = 0
        for _ in range(ticks):
            callback = self._callback
            if callback is None:
                break
            callback()
            fired += 1
            self.ticks += 1
        return fired
