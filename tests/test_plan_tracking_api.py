"""Plan implementation tracking endpoints."""
import pytest
from httpx import AsyncClient

from app.crud.crud_plan_tracking import SEED_PAGES
from tests.conftest import org_admin_headers


@pytest.mark.asyncio
async def test_tracking_requires_superuser(client: AsyncClient, superuser_headers):
    _, headers = await org_admin_headers(client, superuser_headers, plan="premium")
    assert (await client.get("/api/plan-tracking/all", headers=headers)).status_code == 403
    assert (await client.post("/api/plan-tracking/seed", headers=headers)).status_code == 403


@pytest.mark.asyncio
async def test_seed_is_idempotent(client: AsyncClient, superuser_headers):
    assert (await client.post("/api/plan-tracking/init", headers=superuser_headers)).status_code == 200
    assert (await client.get("/api/plan-tracking/all", headers=superuser_headers)).json() == []

    for _ in range(2):
        resp = await client.post("/api/plan-tracking/seed", headers=superuser_headers)
        assert resp.status_code == 200
        assert resp.json()["pages"] == len(SEED_PAGES)

    rows = (await client.get("/api/plan-tracking/all", headers=superuser_headers)).json()
    assert len(rows) == len(SEED_PAGES)
    names = [r["page_name"] for r in rows]
    assert names == sorted(names)


@pytest.mark.asyncio
async def test_update_tracking_row(client: AsyncClient, superuser_headers):
    await client.post("/api/plan-tracking/seed", headers=superuser_headers)
    rows = (await client.get("/api/plan-tracking/all", headers=superuser_headers)).json()
    pending = next(r for r in rows if r["page_name"] == "Contractors")
    assert pending["implementation_status"] == "pending"

    resp = await client.put(f"/api/plan-tracking/update/{pending['id']}", json={
        "implementation_status": "completed",
        "plan_restrictions_implemented": True,
        "implemented_by": "roads-team",
    }, headers=superuser_headers)
    assert resp.status_code == 200
    body = resp.json()
    assert body["implementation_status"] == "completed"
    assert body["plan_restrictions_implemented"] is True
    assert body["free_plan_behavior"] == "Paywall"


@pytest.mark.asyncio
async def test_update_missing_row(client: AsyncClient, superuser_headers):
    resp = await client.put("/api/plan-tracking/update/9999", json={"implementation_status": "completed"},
                            headers=superuser_headers)
    assert resp.status_code == 404
