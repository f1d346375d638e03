"""Route tests for the CRM agency and location endpoints."""

from __future__ import annotations

from unittest.mock import AsyncMock, patch

import pytest
from httpx import AsyncClient

from onmcp.config import settings


@pytest.mark.asyncio
async def test_get_agency_before_setup(client: AsyncClient, monkeypatch):
    monkeypatch.setattr(settings, "crm_agency_api_key", "")
    monkeypatch.setattr(settings, "crm_pit_key", "pit-abcdefghijk")

    resp = await client.get("/api/crm/agency")
    assert resp.status_code == 200
    data = resp.json()
    assert data["config"] is None
    assert data["configured"] is True
    assert data["keys"]["agency_api_key"] is False
    assert data["keys"]["pit_value"] == "pit-abcd..."


@pytest.mark.asyncio
async def test_save_agency_runs_health_check(client: AsyncClient):
    health = {"online": True, "error": None, "status": 200, "hasLocations": True}
    with patch("onmcp.services.crm_svc.check_crm_health", AsyncMock(return_value=health)):
        resp = await client.post("/api/crm/agency", json={"agency_name": "Acme", "agency_id": "comp_1"})

    assert resp.status_code == 200
    data = resp.json()
    assert data["success"] is True
    assert data["config"]["agency_name"] == "Acme"
    assert data["config"]["agency_id"] == "comp_1"
    assert data["config"]["status"] == "active"
    assert data["health"] == health

    resp = await client.get("/api/crm/agency")
    assert resp.json()["config"]["agency_name"] == "Acme"


@pytest.mark.asyncio
async def test_save_agency_without_body(client: AsyncClient):
    health = {"online": False, "error": "No CRM API key configured"}
    with patch("onmcp.services.crm_svc.check_crm_health", AsyncMock(return_value=health)):
        resp = await client.post("/api/crm/agency")

    assert resp.status_code == 200
    assert resp.json()["config"]["agency_name"] == "0nORK Agency"
    assert resp.json()["health"]["online"] is False


@pytest.mark.asyncio
async def test_save_agency_error(client: AsyncClient):
    with patch("onmcp.services.crm_svc.check_crm_health", AsyncMock(side_effect=RuntimeError("boom"))):
        resp = await client.post("/api/crm/agency", json={})

    assert resp.status_code == 500
    assert resp.json() == {"error": "boom"}


@pytest.mark.asyncio
async def test_list_locations_empty(client: AsyncClient):
    resp = await client.get("/api/crm/locations")
    assert resp.status_code == 200
    assert resp.json() == {"locations": [], "count": 0}


@pytest.mark.asyncio
async def test_sync_then_list(client: AsyncClient, fake_crm, make_location):
    api = fake_crm([make_location(2), make_location(1)])
    with patch("onmcp.services.crm_svc.get_crm_client", return_value=api.client()):
        resp = await client.post("/api/crm/locations")

    assert resp.status_code == 200
    data = resp.json()
    assert data["success"] is True
    assert data["total"] == 2
    assert data["added"] == 2
    assert data["updated"] == 0
    assert data["duration_ms"] >= 0

    resp = await client.get("/api/crm/locations")
    data = resp.json()
    assert data["count"] == 2
    assert [loc["name"] for loc in data["locations"]] == ["Location 0001", "Location 0002"]
    assert data["locations"][0]["location_id"] == "loc_0001"
    assert data["locations"][0]["crm_metadata"]["postalCode"] == "78701"


@pytest.mark.asyncio
async def test_sync_failure_marks_agency_error(client: AsyncClient, fake_crm):
    api = fake_crm([], fail_on_call=1)
    with patch("onmcp.services.crm_svc.get_crm_client", return_value=api.client()):
        resp = await client.post("/api/crm/locations")

    assert resp.status_code == 500
    assert resp.json() == {"error": "Invalid API key"}

    resp = await client.get("/api/crm/agency")
    assert resp.json()["config"]["status"] == "error"
