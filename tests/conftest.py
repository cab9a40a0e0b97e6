"""Pytest configuration and fixtures for API tests."""
import os
import uuid

# Point the app at SQLite before app.config is imported anywhere.
os.environ.setdefault("DATABASE_URL", "sqlite://")
os.environ.setdefault("APP_ENV", "test")

import httpx
import pytest
from httpx import AsyncClient, ASGITransport
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool
from tenacity import wait_none

from app.db.base_class import Base

# --- Constants ---
SUPERUSER_EMAIL = "superuser@scanstreet.io"
SUPERUSER_PASSWORD = "Super123!"

OVERPASS_ELEMENTS = [
    {
        "type": "way",
        "id": 4242,
        "tags": {"highway": "primary", "name": "East High Street", "lanes": "4", "surface": "asphalt"},
        "geometry": [{"lat": 39.9200, "lon": -83.8100}, {"lat": 39.9210, "lon": -83.8000}],
    },
    {
        "type": "way",
        "id": 1337,
        "tags": {"highway": "residential"},
        "geometry": [{"lat": 39.9300, "lon": -83.8050}, {"lat": 39.9310, "lon": -83.8050}],
    },
]


def overpass_transport(status_code: int = 200) -> httpx.MockTransport:
    def handler(request: httpx.Request) -> httpx.Response:
        if status_code != 200:
            return httpx.Response(status_code, text="Overpass busy")
        return httpx.Response(200, json={"version": 0.6, "elements": OVERPASS_ELEMENTS})
    return httpx.MockTransport(handler)


# --- Session-level fixtures ---

@pytest.fixture(scope="session")
def test_engine():
    """In-memory SQLite shared across threads (session scope)."""
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    yield engine
    engine.dispose()


@pytest.fixture
def session_factory(test_engine):
    # Import all models so Base.metadata knows every table
    import app.models  # noqa: F401

    Base.metadata.create_all(bind=test_engine)
    yield sessionmaker(autocommit=False, autoflush=False, bind=test_engine)
    Base.metadata.drop_all(bind=test_engine)


# --- Per-test fixtures ---

@pytest.fixture(scope="function")
async def client(session_factory):
    """
    Async HTTP client against the ASGI app.
    Each test gets:
      - Fresh tables
      - get_db overridden to use the test database
      - Fresh services (memory cache, feature matrix, mocked Overpass)
      - A pre-seeded platform organization and superuser
    """
    from app.main import app as fastapi_app, init_services
    from app.api.deps import get_db
    from app.core.security import get_password_hash
    from app.models.organization import Organization
    from app.models.user import User
    from app.services.cache import MemoryCache
    from app.services.overpass import OverpassClient

    def _override_get_db():
        db = session_factory()
        try:
            yield db
        finally:
            db.close()

    fastapi_app.dependency_overrides[get_db] = _override_get_db

    cache = MemoryCache()
    init_services(fastapi_app, cache=cache)
    fastapi_app.state.overpass = OverpassClient(cache, transport=overpass_transport(), wait=wait_none())

    db = session_factory()
    try:
        platform = Organization(id=uuid.uuid4(), name="Scan Street HQ", slug="scan-street-hq", plan="premium")
        db.add(platform)
        db.flush()
        db.add(User(
            id=uuid.uuid4(),
            email=SUPERUSER_EMAIL,
            hashed_password=get_password_hash(SUPERUSER_PASSWORD),
            name="Platform Admin",
            role="admin",
            is_superuser=True,
            organization_id=platform.id,
        ))
        db.commit()
    finally:
        db.close()

    transport = ASGITransport(app=fastapi_app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac

    fastapi_app.dependency_overrides.clear()


@pytest.fixture
async def superuser_headers(client: AsyncClient):
    """Authorization headers for the pre-seeded superuser."""
    return await login_user(client, SUPERUSER_EMAIL, SUPERUSER_PASSWORD)


# --- Helpers ---

async def create_organization(client: AsyncClient, headers: dict, data: dict) -> dict:
    resp = await client.post("/api/admin/organizations", json=data, headers=headers)
    assert resp.status_code == 201, f"Create organization failed: {resp.text}"
    return resp.json()


async def create_user(client: AsyncClient, headers: dict, data: dict) -> dict:
    resp = await client.post("/api/admin/users", json=data, headers=headers)
    assert resp.status_code == 201, f"Create user failed: {resp.text}"
    return resp.json()


async def login_user(client: AsyncClient, email: str, password: str) -> dict:
    resp = await client.post("/api/auth/signin", json={"email": email, "password": password})
    assert resp.status_code == 200, f"Login failed for {email}: {resp.text}"
    return {"Authorization": f"Bearer {resp.json()['access_token']}"}


async def org_admin_headers(client: AsyncClient, superuser_headers: dict, *, plan: str,
                            email: str = None, role: str = "admin") -> tuple:
    """Create an organization on ``plan`` with one user; return (org, headers)."""
    suffix = uuid.uuid4().hex[:8]
    org = await create_organization(
        client, superuser_headers, {"name": f"City {suffix}", "plan": plan},
    )
    email = email or f"{role}-{suffix}@springfield-city.com"
    await create_user(client, superuser_headers, {
        "email": email,
        "password": "Passw0rd!",
        "name": "City Staff",
        "organization_id": org["id"],
        "role": role,
    })
    return org, await login_user(client, email, "Passw0rd!")
