"""Shared fixtures: fixed clock, in-memory storage, fake AI client, API client."""

from datetime import datetime, timedelta
from types import SimpleNamespace

import pytest
import pytz
from fastapi.testclient import TestClient

from config import Settings
from core.storage import MemoryStorage
from services.ai_service import AIService
from utils.datetime_utils import Clock
from web.app import create_app


class FixedClock(Clock):
    """Clock that returns a settable instant."""

    def __init__(self, current: datetime, timezone: str = "UTC"):
        super().__init__(timezone)
        self.current = current

    def now(self) -> datetime:
        return self.current

    def advance(self, **kwargs) -> None:
        self.current = self.current + timedelta(**kwargs)


class FakeCompletions:
    def __init__(self, replies):
        self.replies = list(replies)
        self.calls = []

    async def create(self, **kwargs):
        self.calls.append(kwargs)
        reply = self.replies.pop(0) if self.replies else ""
        if isinstance(reply, Exception):
            raise reply
        message = SimpleNamespace(content=reply)
        return SimpleNamespace(choices=[SimpleNamespace(message=message)])


class FakeAIClient:
    """Stands in for AsyncOpenAI: only chat.completions.create is used."""

    def __init__(self, *replies):
        self.completions = FakeCompletions(replies)
        self.chat = SimpleNamespace(completions=self.completions)
        self.closed = False

    async def close(self):
        self.closed = True


def local(tz_name: str, *args) -> datetime:
    return pytz.timezone(tz_name).localize(datetime(*args))


@pytest.fixture()
def utc_now():
    return local("UTC", 2025, 3, 11, 10, 0, 0)


@pytest.fixture()
def clock(utc_now):
    return FixedClock(utc_now)


@pytest.fixture()
def storage():
    return MemoryStorage()


@pytest.fixture()
def settings(tmp_path):
    return Settings(
        _env_file=None,
        STORAGE_BACKEND="memory",
        DATA_DIR=tmp_path / "data",
        TIMEZONE="UTC",
        OPENAI_API_KEY=None,
    )


@pytest.fixture()
def fake_ai():
    return FakeAIClient()


@pytest.fixture()
def app(settings, storage, clock, fake_ai):
    return create_app(settings, storage=storage, clock=clock, ai_service=AIService(client=fake_ai))


@pytest.fixture()
def client(app):
    with TestClient(app) as test_client:
        yield test_client
