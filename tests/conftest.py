import io
import os
import sys
import time

PROJECT_ROOT = os.path.dirname(os.path.dirname(os.path.abspath(__file__)))
if PROJECT_ROOT not in sys.path:
    sys.path.insert(0, PROJECT_ROOT)

import pytest
from rich.console import Console

from hoist.models.logs import LogEntry


@pytest.fixture(autouse=True)
def utc_timezone(monkeypatch):
    """Render timestamps in UTC so expected output is stable."""
    monkeypatch.setenv("TZ", "UTC")
    if hasattr(time, "tzset"):
        time.tzset()
    yield
    monkeypatch.undo()
    if hasattr(time, "tzset"):
        time.tzset()


@pytest.fixture
def console():
    return Console(file=io.StringIO(), width=200, color_system=None, highlight=False)


@pytest.fixture
def output_lines(console):
    def _lines():
        return [line for line in console.file.getvalue().splitlines() if line.strip()]

    return _lines


@pytest.fixture
def make_entry():
    def _make(app="api", timestamp="2024-01-01T00:00:00Z", message="hello"):
        return LogEntry(app=app, timestamp=timestamp, message=message)

    return _make


@pytest.fixture
def hoist_env(monkeypatch, tmp_path):
    """Isolated configuration: no config file, no .env, logs under tmp_path."""
    for name in list(os.environ):
        if name.startswith("HOIST_"):
            monkeypatch.delenv(name, raising=False)
    monkeypatch.chdir(tmp_path)
    monkeypatch.setenv("HOIST_CONFIG", str(tmp_path / "missing-config.yml"))
    monkeypatch.setenv("HOIST_LOG_DIR", str(tmp_path / "logs"))
    monkeypatch.setenv("HOIST_USERNAME", "alice")
    monkeypatch.setenv("HOIST_API_URL", "https://api.example.test")
    return tmp_path
