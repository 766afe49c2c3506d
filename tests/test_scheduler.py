"""Tests for game/scheduler.py - manual and asyncio tick sources."""
import asyncio

import pytest

from ballrunner.game.scheduler import AsyncioTickScheduler, ManualTickScheduler


@pytest.mark.unit
class TestManualTickScheduler:
    """Unit tests for the hand-stepped scheduler."""

    def test_advance_requires_start(self):
        scheduler = ManualTickScheduler()
        assert scheduler.advance(5) == 0
        assert not scheduler.is_running

    def test_advance_fires_callback(self):
        scheduler = ManualTickScheduler()
        calls = []
        scheduler.start(lambda: calls.append(1))
        assert scheduler.advance(3) == 3
        assert len(calls) == 3
        assert scheduler.ticks == 3

    def test_stop_from_callback_ends_advance(self):
        scheduler = ManualTickScheduler()
        calls = []

        def callback():
            calls.append(1)
            if len(calls) == 4:
                scheduler.stop()

        scheduler.start(callback)
        assert scheduler.advance(100) == 4
        assert not scheduler.is_running

    def test_start_replaces_previous_callback(self):
        scheduler = ManualTickScheduler()
        first, second = [], []
        scheduler.start(lambda: first.append(1))
        scheduler.start(lambda: second.append(1))
        scheduler.advance(2)
        assert first == []
        assert second == [1, 1]


@pytest.mark.unit
class TestAsyncioTickScheduler:
    """Unit tests for the asyncio scheduler."""

    def test_rejects_bad_interval(self):
        with pytest.raises(ValueError):
            AsyncioTickScheduler(0)

    def test_ticks_until_stopped(self):
        async def scenario():
            scheduler = AsyncioTickScheduler(0.001)
            calls = []
            scheduler.start(lambda: calls.append(1))
            assert scheduler.is_running
            await asyncio.sleep(0.05)
            scheduler.stop()
            seen = len(calls)
            await asyncio.sleep(0.02)
            return seen, len(calls), scheduler.is_running

        seen, after, running = asyncio.run(scenario())
        assert seen > 0
        assert after == seen
        assert not running

    def test_stop_inside_callback_cancels_next_tick(self):
        async def scenario():
            scheduler = AsyncioTickScheduler(0.001)
            calls = []

            def callback():
                calls.append(1)
                if len(calls) == 3:
                    scheduler.stop()

            scheduler.start(callback)
            await asyncio.sleep(0.05)
            return len(calls), scheduler.is_running

        count, running = asyncio.run(scenario())
        assert count == 3
        assert not running

    def test_restart_leaves_single_chain(self):
        async def scenario():
            scheduler = AsyncioTickScheduler(0.005)
            first, second = [], []
            scheduler.start(lambda: first.append(1))
            await asyncio.sleep(0.02)
            scheduler.start(lambda: second.append(1))
            frozen = len(first)
            await asyncio.sleep(0.03)
            scheduler.stop()
            return frozen, len(first), len(second)

        frozen, first_total, second_total = asyncio.run(scenario())
        assert first_total == frozen
        assert second_total > 0

    def test_failing_callback_stops_scheduler(self):
        async def scenario():
            scheduler = AsyncioTickScheduler(0.001)

            def callback():
                raise RuntimeError("boom")

            scheduler.start(callback)
            await asyncio.sleep(0.02)
            return scheduler.is_running, scheduler.ticks

        running, ticks = asyncio.run(scenario())
        assert not running
        assert ticks == 1
