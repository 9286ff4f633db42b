"""Tests for the bot session state."""

import pytest

from core.models import MarketStatus
from core.session import BotSession, SessionState

OPEN = MarketStatus(is_open=True, start_time="09:15", end_time="15:25")


def test_starts_inactive():
    session = BotSession()
    assert session.state == SessionState.INACTIVE
    assert not session.is_active


def test_activate_requires_open_market():
    session = BotSession()
    with pytest.raises(ValueError):
        session.activate(MarketStatus(is_open=False))
    assert session.state == SessionState.INACTIVE
    assert session.transitions == 0


def test_activate_and_deactivate():
    session = BotSession()
    session.activate(OPEN)
    assert session.is_active
    assert session.activated_on is OPEN

    session.deactivate("market_closed")
    assert session.state == SessionState.INACTIVE
    assert session.stop_reason == "market_closed"
    assert session.transitions == 2


def test_reactivation_clears_stop_reason():
    session = BotSession()
    session.activate(OPEN)
    session.deactivate()
    session.activate(OPEN)
    assert session.stop_reason == ""


def test_callbacks_see_new_state():
    session = BotSession()
    seen = []

    def broken(_session):
        raise RuntimeError("boom")

    session.register_callback(broken)
    session.register_callback(lambda s: seen.append(s.state))
    session.activate(OPEN)
    session.deactivate()

    assert seen == [SessionState.ACTIVE, SessionState.INACTIVE]


def test_to_dict():
    session = BotSession()
    session.activate(OPEN)
    data = session.to_dict()
    assert data["state"] == "active"
    assert data["transitions"] == 1
    assert data["stop_reason"] == ""
