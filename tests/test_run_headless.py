"""Tests for the headless runner."""

import asyncio

import pytest

from desk_fakes import full_backend, make_desk
from run_headless import run_headless


@pytest.mark.asyncio
async def test_start_bot_waits_for_the_first_scheduled_refresh():
    backend = full_backend()
    desk = make_desk(backend, refresh_interval_ms=60000)

    runner = asyncio.create_task(run_headless(start_bot=True, container=desk))
    for _ in range(200):
        if desk.session.is_active:
            break
        await asyncio.sleep(0.01)
    runner.cancel()
    with pytest.raises(asyncio.CancelledError):
        await runner

    assert desk.session.is_active
    assert desk.state.cycles == 1
    assert len(desk.state.chart) == 1
    assert backend.count("/portfolio") == 2
    assert backend.count("/start", "POST") == 1
    desk.notifier.clear()
