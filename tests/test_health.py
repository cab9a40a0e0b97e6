"""Service wiring: health and metrics."""
import pytest
from httpx import AsyncClient


@pytest.mark.asyncio
async def test_health(client: AsyncClient):
    body = (await client.get("/health")).json()
    assert body["status"] == "ok"
    assert body["cache"] == "memory"
    assert len(body["feature_matrix_version"]) == 12


@pytest.mark.asyncio
async def test_request_id_is_echoed(client: AsyncClient):
    resp = await client.get("/health", headers={"X-Request-ID": "req-123"})
    assert resp.headers["x-request-id"] == "req-123"


@pytest.mark.asyncio
async def test_metrics_endpoint(client: AsyncClient):
    await client.get("/api/feature-matrix/plan/free")
    resp = await client.get("/metrics")
    assert resp.status_code == 200
    assert "http_requests_total" in resp.text


def test_init_services_keeps_injected_cache(monkeypatch):
    from fastapi import FastAPI

    from app.main import init_services
    from app.services.cache import MemoryCache

    def _no_build(url=""):
        raise AssertionError("build_cache must not run when a cache is injected")

    monkeypatch.setattr("app.main.build_cache", _no_build)
    app = FastAPI()
    cache = MemoryCache()
    assert len(cache) == 0

    init_services(app, cache=cache)

    assert app.state.cache is cache
    assert app.state.overpass.cache is cache
    app.state.feature_matrix.get_matrix_for_plan("free")
    assert len(cache) == 1
