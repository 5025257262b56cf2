import os

# Must be set before the app modules build their global engine
os.environ.setdefault("DATABASE_URL", "sqlite+aiosqlite://")
os.environ.setdefault("RUN_SCHEMA_BOOTSTRAP", "0")

import pytest
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker
from sqlalchemy.pool import StaticPool

from pokemon_review.db import build_engine, get_db
from pokemon_review.main import app
from pokemon_review.models import Base


# Fresh in-memory database per test; StaticPool keeps the single
# connection (and so the schema) alive for the whole test.
@pytest.fixture
async def engine():
    eng = build_engine("sqlite+aiosqlite://", poolclass=StaticPool)
    async with eng.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield eng
    await eng.dispose()


@pytest.fixture
def session_factory(engine):
    return async_sessionmaker(engine, expire_on_commit=False, class_=AsyncSession)


@pytest.fixture
async def db_session(session_factory):
    async with session_factory() as session:
        yield session


# FastAPI dependency override so endpoints use the test database,
# still with one session per request
@pytest.fixture
async def client(session_factory):
    async def _override_get_db():
        async with session_factory() as session:
            yield session

    app.dependency_overrides[get_db] = _override_get_db
    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as ac:
        yield ac
    app.dependency_overrides.clear()


# ---- API factories ----

@pytest.fixture
def make_country(client):
    async def _make(name="Kanto"):
        resp = await client.post("/api/country", json={"name": name})
        assert resp.status_code == 201, resp.text
        return resp.json()
    return _make


@pytest.fixture
def make_category(client):
    async def _make(name="Electric"):
        resp = await client.post("/api/category", json={"name": name})
        assert resp.status_code == 201, resp.text
        return resp.json()
    return _make


@pytest.fixture
def make_owner(client, make_country):
    async def _make(first_name="Ash", last_name="Ketchum", country_id=None):
        if country_id is None:
            country_id = (await make_country(f"Country of {last_name}"))["id"]
        resp = await client.post(
            "/api/owner",
            params={"country_id": country_id},
            json={"first_name": first_name, "last_name": last_name},
        )
        assert resp.status_code == 201, resp.text
        return resp.json()
    return _make


@pytest.fixture
def make_pokemon(client):
    async def _make(owner_id, category_id, name="Pikachu", birth_date="1996-02-27"):
        resp = await client.post(
            "/api/pokemon",
            params={"owner_id": owner_id, "category_id": category_id},
            json={"name": name, "birth_date": birth_date},
        )
        assert resp.status_code == 201, resp.text
        return resp.json()
    return _make


@pytest.fixture
def make_reviewer(client):
    async def _make(first_name="Gary", last_name="Oak"):
        resp = await client.post(
            "/api/reviewer",
            json={"first_name": first_name, "last_name": last_name},
        )
        assert resp.status_code == 201, resp.text
        return resp.json()
    return _make


@pytest.fixture
def make_review(client):
    async def _make(pokemon_id, reviewer_id, rating=5, title="Great", text="Very good pokemon"):
        resp = await client.post(
            "/api/review",
            params={"pokemon_id": pokemon_id, "reviewer_id": reviewer_id},
            json={"title": title, "text": text, "rating": rating},
        )
        assert resp.status_code == 201, resp.text
        return resp.json()
    return _make
