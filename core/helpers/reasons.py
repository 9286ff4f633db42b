"""Standardized failure reasons for consistency across logging and UI."""

from enum import Enum


class FailureKind(str, Enum):
    UNREACHABLE = "unreachable"
    MARKET_CLOSED = "market_closed"
    STALE_MARKET_STATUS = "stale_market_status"

