from __future__ import annotations

import asyncio
from typing import AsyncIterator, Optional

import pytest
from fastapi import FastAPI
from httpx import ASGITransport, AsyncClient
from redis.exceptions import ConnectionError as RedisConnectionError

from tally.database import ScoreManager, get_optional_score_manager, get_score_manager
from tally.main import create_app


class FakePipeline:
    """Buffers commands and applies them back to back on execute()"""

    def __init__(self, redis: "FakeRedis"):
        self.redis = redis
        self.commands = []

    async def __aenter__(self) -> "FakePipeline":
        return self

    async def __aexit__(self, *exc_info) -> None:
        self.commands = []

    def incrby(self, key, amount):
        self.commands.append(("incrby", (key, amount)))
        return self

    def zincrby(self, name, amount, value):
        self.commands.append(("zincrby", (name, amount, value)))
        return self

    async def execute(self):
        self.redis.transactions += 1
        results = []
        for command, args in self.commands:
            results.append(await getattr(self.redis, command)(*args))
        return results


class FakeRedis:
    """In-memory stand-in for the handful of Redis commands the service issues.

    Replies follow redis-py with decode_responses=True: GET returns strings,
    INCRBY ints and sorted set scores floats.
    """

    def __init__(
        self,
        fail_on: tuple[str, ...] = (),
        fail_keys: tuple[str, ...] = (),
        slow_keys: tuple[str, ...] = (),
    ):
        self.values: dict[str, str] = {}
        self.sorted_sets: dict[str, dict[str, float]] = {}
        self.calls: list[str] = []
        self.fail_on = set(fail_on)
        self.fail_keys = set(fail_keys)
        self.slow_keys = set(slow_keys)
        self.transactions = 0

    def _record(self, command: str) -> None:
        self.calls.append(command)
        if command in self.fail_on:
            raise RedisConnectionError("Connection refused")

    async def incrby(self, key: str, amount: int) -> int:
        self._record("incrby")
        if key in self.slow_keys:
            await asyncio.sleep(0.01)
        if key in self.fail_keys:
            raise RedisConnectionError("Connection reset by peer")
        value = int(self.values.get(key, 0)) + int(amount)
        self.values[key] = str(value)
        return value

    async def get(self, key: str) -> Optional[str]:
        self._record("get")
        return self.values.get(key)

    async def zincrby(self, name: str, amount: float, value: str) -> float:
        self._record("zincrby")
        zset = self.sorted_sets.setdefault(name, {})
        zset[value] = zset.get(value, 0.0) + float(amount)
        return zset[value]

    async def zrevrange(self, name: str, start: int, end: int, withscores: bool = False):
        self._record("zrevrange")
        zset = self.sorted_sets.get(name, {})
        ordered = sorted(zset.items(), key=lambda item: (item[1], item[0]), reverse=True)
        stop = None if end == -1 else end + 1
        rows = ordered[start:stop]
        return rows if withscores else [member for member, _ in rows]

    async def ping(self) -> bool:
        self._record("ping")
        return True

    def pipeline(self, transaction: bool = True) -> FakePipeline:
        return FakePipeline(self)


@pytest.fixture
def fake_redis() -> FakeRedis:
    return FakeRedis()


@pytest.fixture
def manager(fake_redis: FakeRedis) -> ScoreManager:
    return ScoreManager(fake_redis)


def build_app(manager: Optional[ScoreManager]) -> FastAPI:
    app = create_app(use_lifespan=False)

    async def override() -> Optional[ScoreManager]:
        return manager

    app.dependency_overrides[get_score_manager] = override
    app.dependency_overrides[get_optional_score_manager] = override
    return app


@pytest.fixture
def app(manager: ScoreManager) -> FastAPI:
    return build_app(manager)


@pytest.fixture
async def client(app: FastAPI) -> AsyncIterator[AsyncClient]:
    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as ac:
        yield ac
