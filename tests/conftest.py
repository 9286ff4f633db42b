import os
import sys

import pytest

ROOT = os.path.abspath(os.path.join(os.path.dirname(__file__), ".."))
if ROOT not in sys.path:
    sys.path.insert(0, ROOT)


@pytest.fixture(autouse=True)
def isolated_logs_dir(tmp_path, monkeypatch):
    """Send JSONL session logs to a per-test directory."""
    from core.config import settings

    logs_dir = tmp_path / "logs"
    monkeypatch.setattr(settings, "logs_dir", logs_dir)
    yield logs_dir
