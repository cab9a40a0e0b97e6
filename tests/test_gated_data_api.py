"""Plan-gated assets, roads, maintenance, inspections and dashboard cards."""
import uuid

import pytest
from httpx import AsyncClient
from tenacity import wait_none

from app.services.overpass import OverpassClient
from tests.conftest import org_admin_headers, overpass_transport

ASSET = {"name": "Main St Bridge", "type": "bridge", "address": "E Main St", "pci": 30, "cost": 150000}


# ── Assets ──

@pytest.mark.asyncio
async def test_free_plan_sees_locked_sample_assets(client: AsyncClient, superuser_headers):
    _, headers = await org_admin_headers(client, superuser_headers, plan="free")
    resp = await client.get("/api/assets/", headers=headers)
    assert resp.status_code == 200
    body = resp.json()
    assert body["state"] == "paywall"
    assert body["locked"] is True
    assert body["data_source"] == "sample"
    assert body["items"] and all(i["is_sample_data"] for i in body["items"])
    assert body["upgrade_message"] == "Upgrade to Basic Plan to unlock Asset manager page"


@pytest.mark.asyncio
async def test_free_plan_cannot_create_assets(client: AsyncClient, superuser_headers):
    _, headers = await org_admin_headers(client, superuser_headers, plan="free")
    resp = await client.post("/api/assets/", json=ASSET, headers=headers)
    assert resp.status_code == 403
    detail = resp.json()["detail"]
    assert detail["error"] == "upgrade_required"
    assert detail["feature"] == "assetManager"
    assert detail["current_plan"] == "free"
    assert detail["upgrade_to"] == "basic"


@pytest.mark.asyncio
async def test_paid_plan_reads_live_assets(client: AsyncClient, superuser_headers):
    _, headers = await org_admin_headers(client, superuser_headers, plan="basic")

    empty = (await client.get("/api/assets/", headers=headers)).json()
    assert empty["state"] == "shown"
    assert empty["data_source"] == "live"
    assert empty["items"] == []

    created = await client.post("/api/assets/", json=ASSET, headers=headers)
    assert created.status_code == 201, created.text

    body = (await client.get("/api/assets/", headers=headers)).json()
    assert [a["name"] for a in body["items"]] == ["Main St Bridge"]
    assert "is_sample_data" not in body["items"][0]


@pytest.mark.asyncio
async def test_assets_are_scoped_to_organization(client: AsyncClient, superuser_headers):
    _, headers_a = await org_admin_headers(client, superuser_headers, plan="pro")
    _, headers_b = await org_admin_headers(client, superuser_headers, plan="pro")
    await client.post("/api/assets/", json=ASSET, headers=headers_a)
    body = (await client.get("/api/assets/", headers=headers_b)).json()
    assert body["items"] == []


@pytest.mark.asyncio
async def test_downgrade_takes_effect_on_next_read(client: AsyncClient, superuser_headers):
    org, headers = await org_admin_headers(client, superuser_headers, plan="basic")
    await client.post("/api/assets/", json=ASSET, headers=headers)
    assert (await client.get("/api/assets/", headers=headers)).json()["data_source"] == "live"

    resp = await client.put(f"/api/admin/organizations/{org['id']}/plan", json={"plan": "free"},
                            headers=superuser_headers)
    assert resp.status_code == 200

    body = (await client.get("/api/assets/", headers=headers)).json()
    assert body["state"] == "paywall"
    assert all(i["is_sample_data"] for i in body["items"])


@pytest.mark.asyncio
async def test_invalid_asset_payload(client: AsyncClient, superuser_headers):
    _, headers = await org_admin_headers(client, superuser_headers, plan="pro")
    resp = await client.post("/api/assets/", json={**ASSET, "pci": 140}, headers=headers)
    assert resp.status_code == 422


# ── Roads ──

@pytest.mark.asyncio
async def test_roads_sample_data_below_enterprise(client: AsyncClient, superuser_headers):
    _, headers = await org_admin_headers(client, superuser_headers, plan="premium")
    body = (await client.get("/api/roads/", headers=headers)).json()
    assert body["state"] == "sample_data"
    assert body["locked"] is False
    assert len(body["items"]) == 5
    assert body["upgrade_message"].startswith("Contact sales")


@pytest.mark.asyncio
async def test_roads_live_for_enterprise(client: AsyncClient, superuser_headers):
    from app.main import app as fastapi_app

    _, headers = await org_admin_headers(client, superuser_headers, plan="satellite_enterprise")
    body = (await client.get("/api/roads/", headers=headers)).json()
    assert body["state"] == "shown"
    assert body["data_source"] == "live"
    assert [r["name"] for r in body["items"]] == ["East High Street", "Unnamed Local"]
    assert body["items"][0]["pci"] == 68

    fastapi_app.state.cache.clear()
    fastapi_app.state.overpass = OverpassClient(
        fastapi_app.state.cache, transport=overpass_transport(status_code=503), wait=wait_none(),
    )
    fallback = (await client.get("/api/roads/", headers=headers)).json()
    assert fallback["data_source"] == "live"
    assert [r["id"] for r in fallback["items"]] == [900001, 900002, 900003, 900004, 900005]


# ── Dashboard ──

@pytest.mark.asyncio
async def test_free_dashboard_uses_sample_cards(client: AsyncClient, superuser_headers):
    _, headers = await org_admin_headers(client, superuser_headers, plan="free")
    body = (await client.get("/api/dashboard/", headers=headers)).json()
    assert body["organization"]["plan"] == "free"
    assert body["matrix"]["dashboard"]["exportPDF"] == "paywall"
    for key in ("averagePCIScore", "criticalIssues", "monthlyBudget"):
        card = body["cards"][key]
        assert card["state"] == "sample_data", key
        assert card["items"] and all(i["is_sample_data"] for i in card["items"])


@pytest.mark.asyncio
async def test_pro_dashboard_live_critical_issues(client: AsyncClient, superuser_headers):
    _, headers = await org_admin_headers(client, superuser_headers, plan="pro")
    await client.post("/api/assets/", json=ASSET, headers=headers)
    await client.post("/api/assets/", json={**ASSET, "name": "Fountain Ave", "pci": 82}, headers=headers)

    body = (await client.get("/api/dashboard/", headers=headers)).json()
    critical = body["cards"]["criticalIssues"]
    assert critical["state"] == "shown"
    assert [i["title"] for i in critical["items"]] == ["Main St Bridge"]
    assert body["cards"]["monthlyBudget"]["items"] == []
    assert body["cards"]["averagePCIScore"]["state"] == "sample_data"


# ── Asset edits ──

@pytest.mark.asyncio
async def test_update_and_delete_asset_refresh_cached_list(client: AsyncClient, superuser_headers):
    _, headers = await org_admin_headers(client, superuser_headers, plan="basic")
    asset_id = (await client.post("/api/assets/", json=ASSET, headers=headers)).json()["id"]
    assert (await client.get("/api/assets/", headers=headers)).json()["items"][0]["pci"] == 30

    resp = await client.put(f"/api/assets/{asset_id}", json={"pci": 55, "condition": "fair"}, headers=headers)
    assert resp.status_code == 200, resp.text
    assert resp.json()["name"] == "Main St Bridge"

    item = (await client.get("/api/assets/", headers=headers)).json()["items"][0]
    assert (item["pci"], item["condition"]) == (55, "fair")

    resp = await client.delete(f"/api/assets/{asset_id}", headers=headers)
    assert resp.status_code == 200
    assert (await client.get("/api/assets/", headers=headers)).json()["items"] == []
    assert (await client.delete(f"/api/assets/{asset_id}", headers=headers)).status_code == 404


@pytest.mark.asyncio
async def test_asset_writes_stay_inside_organization(client: AsyncClient, superuser_headers):
    _, headers_a = await org_admin_headers(client, superuser_headers, plan="pro")
    _, headers_b = await org_admin_headers(client, superuser_headers, plan="pro")
    asset_id = (await client.post("/api/assets/", json=ASSET, headers=headers_a)).json()["id"]

    assert (await client.put(f"/api/assets/{asset_id}", json={"pci": 90}, headers=headers_b)).status_code == 404
    assert (await client.delete(f"/api/assets/{asset_id}", headers=headers_b)).status_code == 404
    assert (await client.get("/api/assets/", headers=headers_a)).json()["items"][0]["pci"] == 30


@pytest.mark.asyncio
async def test_free_plan_cannot_edit_assets(client: AsyncClient, superuser_headers):
    _, headers = await org_admin_headers(client, superuser_headers, plan="free")
    resp = await client.put(f"/api/assets/{uuid.uuid4()}", json={"pci": 90}, headers=headers)
    assert resp.status_code == 403
    assert resp.json()["detail"]["feature"] == "assetManager"


# ── Maintenance ──

TASK = {
    "title": "Pothole repair",
    "asset_id": "ROAD-17",
    "asset_name": "East Main Street",
    "contractor": "Buckeye Paving Co.",
    "priority": "high",
    "scheduled_date": "2024-06-18",
    "estimated_cost": 850,
    "materials": ["Hot mix asphalt", "Tack coat"],
    "weather_sensitive": True,
}


@pytest.mark.asyncio
async def test_maintenance_locked_below_pro(client: AsyncClient, superuser_headers):
    _, headers = await org_admin_headers(client, superuser_headers, plan="basic")
    body = (await client.get("/api/maintenance/", headers=headers)).json()
    assert body["state"] == "paywall"
    assert body["locked"] is True
    assert body["items"] and all(i["is_sample_data"] for i in body["items"])
    assert body["upgrade_message"] == "Upgrade to Pro Plan to unlock Maintenance scheduling functionality"

    resp = await client.post("/api/maintenance/", json=TASK, headers=headers)
    assert resp.status_code == 403
    assert resp.json()["detail"]["upgrade_to"] == "pro"


@pytest.mark.asyncio
async def test_maintenance_task_lifecycle(client: AsyncClient, superuser_headers):
    org, headers = await org_admin_headers(client, superuser_headers, plan="pro")
    assert (await client.get("/api/maintenance/", headers=headers)).json()["items"] == []

    created = await client.post("/api/maintenance/", json=TASK, headers=headers)
    assert created.status_code == 201, created.text
    task = created.json()
    assert task["organization_id"] == org["id"]
    assert task["status"] == "scheduled"
    assert task["progress"] == 0

    resp = await client.put(f"/api/maintenance/{task['id']}",
                            json={"status": "in_progress", "progress": 50}, headers=headers)
    assert resp.status_code == 200, resp.text
    assert (resp.json()["status"], resp.json()["progress"]) == ("in_progress", 50)
    assert resp.json()["materials"] == ["Hot mix asphalt", "Tack coat"]

    body = (await client.get("/api/maintenance/", headers=headers)).json()
    assert body["data_source"] == "live"
    assert [t["title"] for t in body["items"]] == ["Pothole repair"]

    assert (await client.delete(f"/api/maintenance/{task['id']}", headers=headers)).status_code == 200
    assert (await client.get("/api/maintenance/", headers=headers)).json()["items"] == []


@pytest.mark.asyncio
async def test_maintenance_rejects_bad_payload_and_foreign_task(client: AsyncClient, superuser_headers):
    _, headers_a = await org_admin_headers(client, superuser_headers, plan="premium")
    _, headers_b = await org_admin_headers(client, superuser_headers, plan="premium")
    assert (await client.post("/api/maintenance/", json={**TASK, "priority": "urgent"},
                              headers=headers_a)).status_code == 422

    task_id = (await client.post("/api/maintenance/", json=TASK, headers=headers_a)).json()["id"]
    resp = await client.put(f"/api/maintenance/{task_id}", json={"progress": 100}, headers=headers_b)
    assert resp.status_code == 404


# ── Road inspections ──

INSPECTION = {
    "road_id": "4242",
    "road_name": "East High Street",
    "location": "E High St at Burnett Rd",
    "coordinates": {"lat": 39.92, "lng": -83.81},
    "inspector": "J. Alvarez",
    "inspection_date": "2024-03-01",
    "status": "completed",
    "priority": "medium",
    "pci_score": 68,
    "distress_types": ["Cracking"],
}


@pytest.mark.asyncio
async def test_free_plan_reads_sample_inspections(client: AsyncClient, superuser_headers):
    _, headers = await org_admin_headers(client, superuser_headers, plan="free")
    body = (await client.get("/api/road-inspections/", headers=headers)).json()
    assert body["state"] == "sample_data"
    assert body["locked"] is False
    assert body["data_source"] == "sample"
    assert {i["id"] for i in body["items"]} == {"INS-SAMPLE-001", "INS-SAMPLE-002"}

    resp = await client.post("/api/road-inspections/", json=INSPECTION, headers=headers)
    assert resp.status_code == 403
    assert resp.json()["detail"]["feature"] == "roadInspection"


@pytest.mark.asyncio
async def test_road_inspection_lifecycle(client: AsyncClient, superuser_headers):
    _, headers = await org_admin_headers(client, superuser_headers, plan="basic")
    created = await client.post("/api/road-inspections/", json=INSPECTION, headers=headers)
    assert created.status_code == 201, created.text
    inspection = created.json()
    assert inspection["coordinates"] == {"lat": 39.92, "lng": -83.81}

    resp = await client.put(f"/api/road-inspections/{inspection['id']}",
                            json={"pci_score": 61, "findings": "New transverse cracks"}, headers=headers)
    assert resp.status_code == 200, resp.text
    assert resp.json()["pci_score"] == 61
    assert resp.json()["inspection_date"] == "2024-03-01"

    body = (await client.get("/api/road-inspections/", headers=headers)).json()
    assert body["state"] == "shown"
    assert [i["findings"] for i in body["items"]] == ["New transverse cracks"]

    assert (await client.delete(f"/api/road-inspections/{inspection['id']}", headers=headers)).status_code == 200
    resp = await client.delete(f"/api/road-inspections/{inspection['id']}", headers=headers)
    assert resp.status_code == 404
