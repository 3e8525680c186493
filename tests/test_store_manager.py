import pytest
from httpx import ASGITransport, AsyncClient
from redis.exceptions import ConnectionError as RedisConnectionError

from tally.config import TallyConfig
from tally.core import events
from tally.core.exceptions import StoreUnavailable
from tally.database import StoreManager, get_optional_score_manager, get_score_manager
from tally.database.connection import RedisConnection
from tally.main import create_app, lifespan


@pytest.fixture(autouse=True)
def reset_singleton():
    StoreManager._instance = None
    yield
    StoreManager._instance = None


@pytest.fixture
def redis_down(monkeypatch):
    async def refuse(self):
        raise RedisConnectionError("Error 111 connecting to localhost:6379. Connection refused.")

    monkeypatch.setattr(RedisConnection, "initialize", refuse)


async def test_singleton():
    first = await StoreManager.get_instance()
    second = await StoreManager.get_instance()
    assert first is second
    assert StoreManager() is first


async def test_unreachable_store_raises_store_unavailable(redis_down):
    with pytest.raises(StoreUnavailable, match="Connection refused"):
        await get_score_manager()
    assert StoreManager._instance is None


async def test_optional_dependency_yields_none(redis_down):
    assert await get_optional_score_manager() is None


async def test_app_serves_while_store_is_down(redis_down):
    app = create_app()
    async with lifespan(app):
        async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as client:
            resp = await client.get("/health")
            assert resp.status_code == 200
            assert resp.json()["store"] == "down"

            resp = await client.get("/stats")
            assert resp.json() == {"total": 0, "userTotal": 0}

            resp = await client.post("/incr", json={"userId": "amy"})
            assert resp.status_code == 500
            assert resp.json() == {"error": "Score store unavailable"}


async def test_startup_tolerates_unreachable_store(redis_down):
    await events.startup_event()
    assert StoreManager._instance is None


async def test_shutdown_without_connection():
    await events.shutdown_event()
    assert StoreManager._instance is None


def test_settings_from_environment(monkeypatch):
    monkeypatch.setenv("TALLY_COUNTER_NAME", "clicks")
    monkeypatch.setenv("TALLY_TRANSACTIONAL", "true")
    settings = TallyConfig()
    assert settings.counter_name == "clicks"
    assert settings.transactional is True
    assert settings.leaderboard_size == 20
