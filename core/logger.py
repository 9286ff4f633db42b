"""JSON lines logger for dashboard session capture.

Records are grouped into three families:
- control: start/stop requests, forced stops, manual scans, square-offs
- refresh: one summary per refresh cycle
- notifications: every user-facing notification

Control records are fsync'd so an operator can reconstruct what the
dashboard asked the bot to do even if the process dies right after.
"""

import json
import os
from datetime import datetime, timezone
from pathlib import Path

from core.config import settings

FAMILIES = ("control", "refresh", "notifications")


def get_logs_dir() -> Path:
    return Path(settings.logs_dir)


def utc_date_str(ts: datetime = None) -> str:
    """Return YYYY-MM-DD in UTC."""
    if ts is None:
        ts = datetime.now(timezone.utc)
    elif ts.tzinfo is None:
        ts = ts.replace(tzinfo=timezone.utc)
    return ts.strftime("%Y-%m-%d")


def utc_iso_str(ts: datetime = None) -> str:
    """Return ISO 8601 timestamp with Z suffix."""
    if ts is None:
        ts = datetime.now(timezone.utc)
    elif ts.tzinfo is None:
        ts = ts.replace(tzinfo=timezone.utc)
    return ts.strftime("%Y-%m-%dT%H:%M:%S.%f")[:-3] + "Z"


def log_path(family: str, ts: datetime = None) -> Path:
    """Return path for logs/{family}_{date}.jsonl."""
    if family not in FAMILIES:
        raise ValueError(f"Unknown log family: {family}")
    return get_logs_dir() / f"{family}_{utc_date_str(ts)}.jsonl"


def append_jsonl(path: Path, record: dict, critical: bool = False):
    """
    Append a JSON record as a single line.

    Args:
        path: Target log file path
        record: Dictionary to log as JSON
        critical: If True, fsync after writing (slower but crash-safe)
    """
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
    except OSError:
        pass

    record = {"ts": utc_iso_str(), **record}
    line = json.dumps(record, separators=(",", ":"), default=str) + "\n"

    if critical:
        try:
            fd = os.open(path, os.O_WRONLY | os.O_CREAT | os.O_APPEND, 0o644)
            try:
                os.write(fd, line.encode("utf-8"))
                os.fsync(fd)
            finally:
                os.close(fd)
        except OSError:
            with open(path, "a", encoding="utf-8") as f:
                f.write(line)
    else:
        with open(path, "a", encoding="utf-8") as f:
            f.write(line)


def log_control(record: dict, ts: datetime = None):
    """Log a bot control action (critical - uses fsync)."""
    append_jsonl(log_path("control", ts), record, critical=True)


def log_refresh(record: dict, ts: datetime = None):
    """Log a refresh cycle summary."""
    append_jsonl(log_path("refresh", ts), record)


def log_notification(record: dict, ts: datetime = None):
    """Log a user-facing notification."""
    append_jsonl(log_path("notifications", ts), record)
