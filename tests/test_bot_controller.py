"""Tests for bot start/stop, manual scan and square-off."""

import json

import pytest

from core.models import Severity
from core.session import SessionState
from desk_fakes import (
    FAIL,
    MARKET_CLOSED,
    MARKET_OPEN,
    ScriptedBackend,
    make_desk,
    notes_of,
)


@pytest.mark.asyncio
async def test_start_refused_when_market_closed():
    backend = ScriptedBackend({"/market-status": MARKET_CLOSED})
    desk = make_desk(backend)

    result = await desk.controller.request_start()

    assert result["success"] is False
    assert result["error"] == "market_closed"
    assert desk.session.state == SessionState.INACTIVE
    assert backend.count("/start") == 0

    errors = notes_of(desk, Severity.ERROR)
    assert len(errors) == 1
    assert errors[0].title == "🚫 Market Closed"
    assert "09:15" in errors[0].message
    assert "15:25" in errors[0].message
    desk.notifier.clear()


@pytest.mark.asyncio
async def test_closed_market_message_uses_backend_hours():
    backend = ScriptedBackend({"/market-status": {"is_open": False, "start_time": "10:00", "end_time": "14:00"}})
    desk = make_desk(backend)

    await desk.controller.request_start()

    [note] = notes_of(desk, Severity.ERROR)
    assert note.message == "The market is currently closed.\nTrading hours: 10:00 - 14:00"
    desk.notifier.clear()


@pytest.mark.asyncio
async def test_start_activates_on_open_market():
    backend = ScriptedBackend({"/market-status": MARKET_OPEN, "/start": {"status": "started"}})
    desk = make_desk(backend)

    result = await desk.controller.request_start()

    assert result["success"] is True
    assert desk.session.state == SessionState.ACTIVE
    assert desk.controller.is_running
    assert backend.calls == [("GET", "/market-status"), ("POST", "/start")]

    [note] = notes_of(desk, Severity.SUCCESS)
    assert note.title == "✅ Bot Started"
    assert note.message == "Auto-trading is now active!"
    desk.notifier.clear()


@pytest.mark.asyncio
async def test_start_goes_active_even_if_start_command_fails():
    backend = ScriptedBackend({"/market-status": MARKET_OPEN, "/start": FAIL})
    desk = make_desk(backend)

    await desk.controller.request_start()

    assert desk.session.state == SessionState.ACTIVE
    assert len(notes_of(desk, Severity.ERROR)) == 1
    assert len(notes_of(desk, Severity.SUCCESS)) == 1
    desk.notifier.clear()


@pytest.mark.asyncio
async def test_unreachable_market_check_blocks_start():
    backend = ScriptedBackend({"/market-status": FAIL})
    desk = make_desk(backend)

    result = await desk.controller.request_start()

    assert result["success"] is False
    assert desk.session.state == SessionState.INACTIVE
    assert backend.count("/start") == 0
    titles = [n.title for n in notes_of(desk, Severity.ERROR)]
    assert titles == ["Error", "🚫 Market Closed"]
    assert "09:15 - 15:25" in notes_of(desk, Severity.ERROR)[1].message
    desk.notifier.clear()


@pytest.mark.asyncio
async def test_stop_goes_inactive_even_if_backend_unreachable():
    backend = ScriptedBackend({"/market-status": MARKET_OPEN, "/stop": FAIL})
    desk = make_desk(backend)
    await desk.controller.request_start()

    result = await desk.controller.request_stop()

    assert result["success"] is True
    assert desk.session.state == SessionState.INACTIVE
    assert desk.session.stop_reason == "user"
    [stopped] = notes_of(desk, Severity.WARNING)
    assert stopped.title == "⏹️ Bot Stopped"
    assert stopped.message == "Auto-trading has been stopped."
    desk.notifier.clear()


@pytest.mark.asyncio
async def test_toggle_starts_then_stops():
    backend = ScriptedBackend({"/market-status": MARKET_OPEN})
    desk = make_desk(backend)

    await desk.controller.toggle()
    assert desk.controller.state == SessionState.ACTIVE

    await desk.controller.toggle()
    assert desk.controller.state == SessionState.INACTIVE
    assert backend.paths("POST") == ["/start", "/stop"]
    desk.notifier.clear()


@pytest.mark.asyncio
async def test_start_while_active_is_a_no_op():
    backend = ScriptedBackend({"/market-status": MARKET_OPEN})
    desk = make_desk(backend)
    await desk.controller.request_start()
    calls_before = len(backend.calls)

    result = await desk.controller.request_start()

    assert result["success"] is True
    assert len(backend.calls) == calls_before
    assert len(notes_of(desk, Severity.SUCCESS)) == 1
    desk.notifier.clear()


@pytest.mark.asyncio
async def test_manual_scan_notifies_info():
    backend = ScriptedBackend({"/scan": {"status": "scanning"}})
    desk = make_desk(backend)

    result = await desk.controller.manual_scan()

    assert result["success"] is True
    assert backend.calls == [("GET", "/scan")]
    [note] = notes_of(desk, Severity.INFO)
    assert note.title == "Manual Scan"
    assert note.message == "Triggered live signal scan."
    assert desk.session.state == SessionState.INACTIVE
    desk.notifier.clear()


@pytest.mark.asyncio
async def test_square_off_posts_and_warns():
    backend = ScriptedBackend({"/squareoff": {"status": "closed"}})
    desk = make_desk(backend)

    result = await desk.controller.square_off_all()

    assert result["success"] is True
    assert backend.calls == [("POST", "/squareoff")]
    [note] = notes_of(desk, Severity.WARNING)
    assert note.title == "Square Off"
    assert note.message == "All positions closed."
    desk.notifier.clear()


@pytest.mark.asyncio
async def test_square_off_notifies_even_when_backend_fails():
    backend = ScriptedBackend({"/squareoff": FAIL})
    desk = make_desk(backend)

    result = await desk.controller.square_off_all()

    assert result["success"] is False
    assert [n.title for n in desk.notifier.history] == ["Error", "Square Off"]
    desk.notifier.clear()


@pytest.mark.asyncio
async def test_control_actions_are_recorded(isolated_logs_dir):
    backend = ScriptedBackend({"/market-status": MARKET_CLOSED})
    desk = make_desk(backend)

    await desk.controller.request_start()

    [path] = isolated_logs_dir.glob("control_*.jsonl")
    record = json.loads(path.read_text(encoding="utf-8").splitlines()[-1])
    assert record["action"] == "start"
    assert record["success"] is False
    assert record["window"] == "09:15 - 15:25"
    desk.notifier.clear()
