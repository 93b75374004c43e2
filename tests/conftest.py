import itertools
import json

import pytest
from fastapi.testclient import TestClient

from voxroom.core.config import Settings
from voxroom.main import create_app
from voxroom.runtime.registry import RoomRegistry

_ids = itertools.count(1)


class FakeConnection:
    """Stands in for runtime.Connection: records every frame it is handed."""

    def __init__(self, display_name: str, room_id: str = "r1", *, fail: bool = False):
        self.id = f"fake-{next(_ids)}"
        self.display_name = display_name
        self.room_id = room_id
        self.fail = fail
        self.sent: list[str] = []

    def send(self, payload: str) -> bool:
        if self.fail:
            return False
        self.sent.append(payload)
        return True

    def frames(self) -> list[dict]:
        return [json.loads(p) for p in self.sent]

    def clear(self) -> None:
        self.sent.clear()


class FakeClock:
    def __init__(self, start: int = 1_700_000_000_000):
        self.now = start

    def __call__(self) -> int:
        return self.now

    def advance(self, ms: int) -> None:
        self.now += ms


@pytest.fixture
def anyio_backend():
    return "asyncio"


@pytest.fixture
def make_conn():
    return FakeConnection


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def registry(clock):
    return RoomRegistry(clock=clock)


@pytest.fixture
def test_settings():
    return Settings(_env_file=None, ADMIN_KEY="s3cret", LOG_LEVEL="DEBUG")


@pytest.fixture
def client(test_settings, registry):
    app = create_app(test_settings, registry=registry)
    with TestClient(app) as c:
        yield c
