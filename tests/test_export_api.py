"""Admin CSV / JSON exports."""
import csv
import io

import pytest
from httpx import AsyncClient

from tests.conftest import create_organization, org_admin_headers


def _csv_rows(text: str):
    return list(csv.DictReader(io.StringIO(text)))


@pytest.mark.asyncio
async def test_export_requires_superuser(client: AsyncClient, superuser_headers):
    _, headers = await org_admin_headers(client, superuser_headers, plan="premium")
    for entity in ("organizations", "users", "transactions", "analytics"):
        resp = await client.get(f"/api/export/{entity}", headers=headers)
        assert resp.status_code == 403, entity


@pytest.mark.asyncio
async def test_export_organizations_csv(client: AsyncClient, superuser_headers):
    await create_organization(client, superuser_headers, {"name": "Yellow Springs", "plan": "basic"})
    resp = await client.get("/api/export/organizations", headers=superuser_headers)
    assert resp.status_code == 200
    assert resp.headers["content-type"].startswith("text/csv")
    assert resp.headers["content-disposition"].startswith("attachment; filename=organizations_export_")
    rows = _csv_rows(resp.text)
    assert {r["name"]: r["plan"] for r in rows} == {"Scan Street HQ": "premium", "Yellow Springs": "basic"}


@pytest.mark.asyncio
async def test_export_users_json(client: AsyncClient, superuser_headers):
    resp = await client.get("/api/export/users", params={"format": "json"}, headers=superuser_headers)
    assert resp.status_code == 200
    assert resp.headers["content-type"].startswith("application/json")
    rows = resp.json()
    assert [r["email"] for r in rows] == ["superuser@scanstreet.io"]
    assert rows[0]["organization"] == "Scan Street HQ"


@pytest.mark.asyncio
async def test_export_transactions_in_dollars(client: AsyncClient, superuser_headers):
    org = await create_organization(client, superuser_headers, {"name": "Tipp City", "plan": "pro"})
    await client.post("/api/admin/transactions", json={
        "organization_id": org["id"], "amount": 1250, "type": "upgrade", "status": "completed",
    }, headers=superuser_headers)

    rows = (await client.get("/api/export/transactions", params={"format": "json"},
                             headers=superuser_headers)).json()
    assert len(rows) == 1
    assert rows[0]["amount"] == 12.5
    assert rows[0]["type"] == "upgrade"
    assert rows[0]["completed_at"]

    analytics = _csv_rows((await client.get("/api/export/analytics", headers=superuser_headers)).text)
    tipp = next(r for r in analytics if r["organization"] == "Tipp City")
    assert tipp["revenue"] == "12.5"
    assert tipp["transactions"] == "1"
    assert tipp["list_price_monthly"] == "199"


@pytest.mark.asyncio
async def test_export_rejects_unknown_format(client: AsyncClient, superuser_headers):
    resp = await client.get("/api/export/users", params={"format": "xlsx"}, headers=superuser_headers)
    assert resp.status_code == 422
