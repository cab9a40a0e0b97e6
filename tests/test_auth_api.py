"""Sign-in, sign-up and token verification."""
import pytest
from httpx import AsyncClient

from tests.conftest import SUPERUSER_EMAIL, login_user


@pytest.mark.asyncio
async def test_signup_creates_free_organization(client: AsyncClient):
    resp = await client.post("/api/auth/signup", json={
        "email": "clerk@springfield-city.com",
        "password": "Passw0rd!",
        "name": "City Clerk",
        "organization_name": "City of Springfield",
    })
    assert resp.status_code == 201, resp.text
    body = resp.json()
    assert body["access_token"]
    assert body["organization"]["plan"] == "free"
    assert body["organization"]["slug"] == "city-of-springfield"
    assert body["user"]["role"] == "admin"
    assert body["user"]["is_superuser"] is False


@pytest.mark.asyncio
async def test_signup_duplicate_email(client: AsyncClient):
    payload = {
        "email": "dupe@springfield-city.com",
        "password": "Passw0rd!",
        "organization_name": "Dupe Town",
    }
    assert (await client.post("/api/auth/signup", json=payload)).status_code == 201
    resp = await client.post("/api/auth/signup", json=payload)
    assert resp.status_code == 409


@pytest.mark.asyncio
async def test_signup_rejects_short_password(client: AsyncClient):
    resp = await client.post("/api/auth/signup", json={
        "email": "short@springfield-city.com",
        "password": "abc",
        "organization_name": "Short Town",
    })
    assert resp.status_code == 422


@pytest.mark.asyncio
async def test_signin_wrong_password(client: AsyncClient):
    resp = await client.post("/api/auth/signin", json={"email": SUPERUSER_EMAIL, "password": "nope-nope"})
    assert resp.status_code == 401


@pytest.mark.asyncio
async def test_signin_is_case_insensitive_on_email(client: AsyncClient):
    headers = await login_user(client, SUPERUSER_EMAIL.upper(), "Super123!")
    assert headers["Authorization"].startswith("Bearer ")


@pytest.mark.asyncio
async def test_verify_returns_session(client: AsyncClient, superuser_headers):
    resp = await client.get("/api/auth/verify", headers=superuser_headers)
    assert resp.status_code == 200
    body = resp.json()
    assert body["user"]["email"] == SUPERUSER_EMAIL
    assert body["organization"]["slug"] == "scan-street-hq"


@pytest.mark.asyncio
async def test_verify_without_token(client: AsyncClient):
    assert (await client.get("/api/auth/verify")).status_code == 401


@pytest.mark.asyncio
async def test_verify_with_garbage_token(client: AsyncClient):
    resp = await client.get("/api/auth/verify", headers={"Authorization": "Bearer not-a-jwt"})
    assert resp.status_code == 401
