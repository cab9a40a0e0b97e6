"""Platform admin endpoints: organizations, users, transactions, settings, analytics."""
import pytest
from httpx import AsyncClient

from tests.conftest import create_organization, create_user, org_admin_headers


@pytest.mark.asyncio
async def test_admin_endpoints_require_superuser(client: AsyncClient, superuser_headers):
    _, headers = await org_admin_headers(client, superuser_headers, plan="premium")
    for path in ("/api/admin/stats", "/api/admin/organizations", "/api/admin/users",
                 "/api/admin/transactions", "/api/admin/settings"):
        resp = await client.get(path, headers=headers)
        assert resp.status_code == 403, path


@pytest.mark.asyncio
async def test_admin_endpoints_require_token(client: AsyncClient):
    assert (await client.get("/api/admin/stats")).status_code == 401


@pytest.mark.asyncio
async def test_stats(client: AsyncClient, superuser_headers):
    await create_organization(client, superuser_headers, {"name": "Basic Town", "plan": "basic"})
    await create_organization(client, superuser_headers, {"name": "Pro City", "plan": "pro"})

    resp = await client.get("/api/admin/stats", headers=superuser_headers)
    assert resp.status_code == 200
    stats = resp.json()
    assert stats["total_organizations"] == 3
    assert stats["total_users"] == 1
    assert stats["active_users"] == 1
    assert stats["plan_distribution"] == {"premium": 1, "basic": 1, "pro": 1}
    assert stats["monthly_revenue"] == 999 + 99 + 199


@pytest.mark.asyncio
async def test_create_organization_generates_unique_slug(client: AsyncClient, superuser_headers):
    first = await create_organization(client, superuser_headers, {"name": "Dayton Streets"})
    second = await create_organization(client, superuser_headers, {"name": "Dayton Streets"})
    assert first["slug"] == "dayton-streets"
    assert second["slug"] == "dayton-streets-2"
    assert first["plan"] == "free"


@pytest.mark.asyncio
async def test_create_organization_invalid_plan(client: AsyncClient, superuser_headers):
    resp = await client.post("/api/admin/organizations", json={"name": "Gold", "plan": "gold"},
                             headers=superuser_headers)
    assert resp.status_code == 400


@pytest.mark.asyncio
async def test_update_plan(client: AsyncClient, superuser_headers):
    org = await create_organization(client, superuser_headers, {"name": "Xenia"})
    resp = await client.put(f"/api/admin/organizations/{org['id']}/plan", json={"plan": "pro"},
                            headers=superuser_headers)
    assert resp.status_code == 200
    assert resp.json()["plan"] == "pro"

    listing = await client.get("/api/admin/organizations", params={"plan": "pro"}, headers=superuser_headers)
    assert [o["name"] for o in listing.json()] == ["Xenia"]


@pytest.mark.asyncio
async def test_update_plan_rejects_unassignable(client: AsyncClient, superuser_headers):
    org = await create_organization(client, superuser_headers, {"name": "Fairborn"})
    for plan in ("gold", "satellite_enterprise", "driving"):
        resp = await client.put(f"/api/admin/organizations/{org['id']}/plan", json={"plan": plan},
                                headers=superuser_headers)
        assert resp.status_code == 400, plan
        assert resp.json()["detail"] == "Invalid plan specified"


@pytest.mark.asyncio
async def test_update_plan_unknown_organization(client: AsyncClient, superuser_headers):
    resp = await client.put("/api/admin/organizations/00000000-0000-0000-0000-000000000000/plan",
                            json={"plan": "pro"}, headers=superuser_headers)
    assert resp.status_code == 404


@pytest.mark.asyncio
async def test_organization_list_counts_users(client: AsyncClient, superuser_headers):
    org, _ = await org_admin_headers(client, superuser_headers, plan="basic")
    resp = await client.get("/api/admin/organizations", params={"search": org["name"]},
                            headers=superuser_headers)
    rows = resp.json()
    assert len(rows) == 1
    assert rows[0]["user_count"] == 1


@pytest.mark.asyncio
async def test_delete_organization_removes_users(client: AsyncClient, superuser_headers):
    org, _ = await org_admin_headers(client, superuser_headers, plan="basic")
    resp = await client.delete(f"/api/admin/organizations/{org['id']}", headers=superuser_headers)
    assert resp.status_code == 200

    users = await client.get("/api/admin/users", params={"organization_id": org["id"]},
                             headers=superuser_headers)
    assert users.json() == []


@pytest.mark.asyncio
async def test_cannot_delete_own_organization(client: AsyncClient, superuser_headers):
    me = (await client.get("/api/auth/verify", headers=superuser_headers)).json()
    resp = await client.delete(f"/api/admin/organizations/{me['organization']['id']}",
                               headers=superuser_headers)
    assert resp.status_code == 400


@pytest.mark.asyncio
async def test_user_listing_falls_back_to_email_name(client: AsyncClient, superuser_headers):
    org = await create_organization(client, superuser_headers, {"name": "Urbana"})
    await create_user(client, superuser_headers, {
        "email": "roads.dept@urbana-city.com",
        "password": "Passw0rd!",
        "organization_id": org["id"],
    })
    resp = await client.get("/api/admin/users", params={"search": "urbana"}, headers=superuser_headers)
    rows = resp.json()
    assert len(rows) == 1
    assert rows[0]["name"] == "roads.dept"
    assert rows[0]["role"] == "member"
    assert rows[0]["organization"]["name"] == "Urbana"


@pytest.mark.asyncio
async def test_create_user_validation(client: AsyncClient, superuser_headers):
    org = await create_organization(client, superuser_headers, {"name": "Enon"})
    base = {"email": "ops@enon-city.com", "password": "Passw0rd!", "organization_id": org["id"]}

    bad_role = await client.post("/api/admin/users", json={**base, "role": "owner"}, headers=superuser_headers)
    assert bad_role.status_code == 400

    await create_user(client, superuser_headers, base)
    dupe = await client.post("/api/admin/users", json=base, headers=superuser_headers)
    assert dupe.status_code == 409

    missing_org = await client.post("/api/admin/users", json={
        **base, "email": "other@enon-city.com",
        "organization_id": "00000000-0000-0000-0000-000000000000",
    }, headers=superuser_headers)
    assert missing_org.status_code == 404


@pytest.mark.asyncio
async def test_update_role_and_delete_user(client: AsyncClient, superuser_headers):
    org = await create_organization(client, superuser_headers, {"name": "Medway"})
    user = await create_user(client, superuser_headers, {
        "email": "crew@medway-city.com", "password": "Passw0rd!", "organization_id": org["id"],
    })

    bad = await client.put(f"/api/admin/users/{user['id']}/role", json={"role": "root"},
                           headers=superuser_headers)
    assert bad.status_code == 400

    resp = await client.put(f"/api/admin/users/{user['id']}/role", json={"role": "manager"},
                            headers=superuser_headers)
    assert resp.status_code == 200
    assert resp.json()["role"] == "manager"

    assert (await client.delete(f"/api/admin/users/{user['id']}", headers=superuser_headers)).status_code == 200
    assert (await client.delete(f"/api/admin/users/{user['id']}", headers=superuser_headers)).status_code == 404


@pytest.mark.asyncio
async def test_cannot_delete_self(client: AsyncClient, superuser_headers):
    me = (await client.get("/api/auth/verify", headers=superuser_headers)).json()
    resp = await client.delete(f"/api/admin/users/{me['user']['id']}", headers=superuser_headers)
    assert resp.status_code == 400


@pytest.mark.asyncio
async def test_transactions_and_revenue(client: AsyncClient, superuser_headers):
    org = await create_organization(client, superuser_headers, {"name": "Springfield", "plan": "basic"})
    for amount, status in ((9900, "completed"), (19900, "completed"), (500, "failed")):
        resp = await client.post("/api/admin/transactions", json={
            "organization_id": org["id"], "amount": amount, "type": "payment", "status": status,
        }, headers=superuser_headers)
        assert resp.status_code == 201
        assert resp.json()["organization_name"] == "Springfield"

    page = (await client.get("/api/admin/transactions", params={"limit": 2}, headers=superuser_headers)).json()
    assert page["total"] == 3
    assert len(page["transactions"]) == 2

    completed = (await client.get("/api/admin/transactions", params={"status": "completed"},
                                  headers=superuser_headers)).json()
    assert completed["total"] == 2

    bad = await client.get("/api/admin/transactions", params={"status": "lost"}, headers=superuser_headers)
    assert bad.status_code == 422

    stats = (await client.get("/api/admin/stats", headers=superuser_headers)).json()
    assert stats["revenue_this_month"] == 298.0
    assert stats["total_transactions"] == 3

    analytics = (await client.get("/api/admin/revenue-analytics", params={"months": 3},
                                  headers=superuser_headers)).json()
    assert len(analytics["monthly_trend"]) == 3
    assert analytics["monthly_trend"][-1]["revenue"] == 298.0
    assert analytics["monthly_trend"][-1]["transactions"] == 2
    assert analytics["plan_revenue"] == [{"plan": "basic", "revenue": 298.0, "transactions": 2}]
    assert analytics["top_customers"][0]["name"] == "Springfield"


@pytest.mark.asyncio
async def test_transaction_for_unknown_organization(client: AsyncClient, superuser_headers):
    resp = await client.post("/api/admin/transactions", json={
        "organization_id": "00000000-0000-0000-0000-000000000000", "amount": 100, "type": "payment",
    }, headers=superuser_headers)
    assert resp.status_code == 404


@pytest.mark.asyncio
async def test_settings_seed_and_update(client: AsyncClient, superuser_headers):
    resp = await client.get("/api/admin/settings", headers=superuser_headers)
    assert resp.status_code == 200
    keys = {row["key"] for row in resp.json()}
    assert "maintenance_mode" in keys

    resp = await client.put("/api/admin/settings/maintenance_mode", json={"value": "true"},
                            headers=superuser_headers)
    assert resp.status_code == 200
    assert resp.json()["value"] == "true"

    again = await client.get("/api/admin/settings", headers=superuser_headers)
    assert len(again.json()) == len(keys)
