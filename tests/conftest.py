import os

os.environ.setdefault("REDIS_URL", "redis://localhost:6379/15")
os.environ.pop("RABBIT_URL", None)

import fakeredis
import httpx
import pytest

from booking_core.database import get_engine, get_session

from booking_service import locks, middleware, payments
from booking_service.db import Base
from booking_service.main import app
from booking_service.routes import get_db


@pytest.fixture
def fake_redis(monkeypatch):
    client = fakeredis.FakeAsyncRedis(decode_responses=True)
    for module in (locks, middleware, payments):
        monkeypatch.setattr(module, "redis_client", client)
    return client


@pytest.fixture
async def session_factory(tmp_path):
    engine = get_engine(f"sqlite+aiosqlite:///{tmp_path / 'bookings.db'}")
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield get_session(engine)
    await engine.dispose()


@pytest.fixture
async def db(session_factory):
    async with session_factory() as session:
        yield session


@pytest.fixture
async def client(session_factory, fake_redis):
    async def override_get_db():
        async with session_factory() as session:
            yield session

    app.dependency_overrides[get_db] = override_get_db
    transport = httpx.ASGITransport(app=app)
    async with httpx.AsyncClient(transport=transport, base_url="http://test") as c:
        yield c
    app.dependency_overrides.clear()
