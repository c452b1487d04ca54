import sys
from datetime import datetime, timedelta, timezone
from pathlib import Path

import pytest

ROOT = Path(__file__).resolve().parents[1]
SRC = ROOT / "src"
if str(SRC) not in sys.path:
    sys.path.insert(0, str(SRC))

from todo_mcp.server import create_handler  # noqa: E402
from todo_mcp.store import TaskStore  # noqa: E402


class StepClock:
    """Deterministic clock advancing one second per call."""

    def __init__(self) -> None:
        self.current = datetime(2025, 1, 1, tzinfo=timezone.utc)

    def __call__(self) -> datetime:
        self.current += timedelta(seconds=1)
        return self.current


@pytest.fixture(autouse=True)
def _isolate_env(monkeypatch):
    monkeypatch.delenv("TODO_MCP_CONFIG", raising=False)
    monkeypatch.delenv("LOG_LEVEL", raising=False)


@pytest.fixture
def clock():
    return StepClock()


@pytest.fixture
def store(clock):
    return TaskStore(clock=clock)


@pytest.fixture
def handler(store):
    return create_handler(store=store)
