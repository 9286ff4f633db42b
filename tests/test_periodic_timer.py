"""Tests for the interval timer behind the background loops."""

import asyncio

import pytest

from core.helpers.timer import PeriodicTimer


async def wait_for(predicate, timeout: float = 1.0):
    deadline = asyncio.get_running_loop().time() + timeout
    while not predicate():
        if asyncio.get_running_loop().time() > deadline:
            raise AssertionError("condition not reached")
        await asyncio.sleep(0.005)


def test_rejects_non_positive_interval():
    with pytest.raises(ValueError):
        PeriodicTimer("bad", 0, lambda: None)


@pytest.mark.asyncio
async def test_fires_repeatedly():
    ticks = []
    timer = PeriodicTimer("tick", 0.01, lambda: ticks.append(1))
    timer.start()
    await wait_for(lambda: len(ticks) >= 3)
    await timer.stop()

    assert not timer.running
    assert timer.fired >= 3


@pytest.mark.asyncio
async def test_run_immediately_fires_before_first_interval():
    ticks = []
    timer = PeriodicTimer("now", 10.0, lambda: ticks.append(1), run_immediately=True)
    timer.start()
    await wait_for(lambda: ticks)
    await timer.stop()

    assert ticks == [1]


@pytest.mark.asyncio
async def test_failing_firing_does_not_stop_the_timer():
    calls = []

    async def flaky():
        calls.append(1)
        if len(calls) == 1:
            raise RuntimeError("first firing fails")

    timer = PeriodicTimer("flaky", 0.01, flaky)
    timer.start()
    await wait_for(lambda: len(calls) >= 3)
    await timer.stop()

    assert timer.errors == 1


@pytest.mark.asyncio
async def test_slow_firing_overlaps_next_one():
    release = asyncio.Event()
    started = []

    async def slow():
        started.append(1)
        await release.wait()

    timer = PeriodicTimer("slow", 0.01, slow)
    timer.start()
    await wait_for(lambda: len(started) >= 2)

    assert timer.inflight >= 2
    release.set()
    await timer.stop()
    assert timer.inflight == 0


@pytest.mark.asyncio
async def test_stop_cancels_inflight_firings():
    cancelled = []

    async def hang():
        try:
            await asyncio.sleep(10)
        except asyncio.CancelledError:
            cancelled.append(1)
            raise

    timer = PeriodicTimer("hang", 10.0, hang, run_immediately=True)
    timer.start()
    await wait_for(lambda: timer.inflight == 1)
    await timer.stop()

    assert cancelled == [1]
    assert timer.errors == 0


@pytest.mark.asyncio
async def test_start_twice_is_harmless():
    ticks = []
    timer = PeriodicTimer("once", 10.0, lambda: ticks.append(1), run_immediately=True)
    timer.start()
    timer.start()
    await wait_for(lambda: ticks)
    await asyncio.sleep(0.02)
    await timer.stop()

    assert ticks == [1]
