"""Test catalog stats and the public stats/badge route."""

from __future__ import annotations

import pytest
from httpx import AsyncClient

from onmcp import catalog


def test_stats_are_derived_from_services():
    stats = catalog.compute_stats()
    assert stats["services"] == len(catalog.SERVICES) == 26
    assert stats["categories"] == len(catalog.CATEGORIES) == 13
    assert stats["tools"] == sum(s.tools for s in catalog.SERVICES)
    assert stats["total"] == stats["tools"] + stats["actions"] + stats["triggers"]
    assert stats["version"] == "1.7.0"


def test_every_service_has_a_known_category():
    category_ids = {c.id for c in catalog.CATEGORIES}
    assert all(s.category in category_ids for s in catalog.SERVICES)


def test_badge_payload():
    assert catalog.badge("services") == {
        "schemaVersion": 1,
        "label": "services",
        "message": "26",
        "color": "00d4ff",
    }
    assert catalog.badge("bogus") is None


@pytest.mark.asyncio
async def test_total_badge(client: AsyncClient):
    resp = await client.get("/api/stats", params={"badge": "total"})
    assert resp.status_code == 200
    assert resp.json() == {
        "schemaVersion": 1,
        "label": "total",
        "message": str(catalog.STATS["total"]),
        "color": "00ff88",
    }
    assert resp.headers["cache-control"] == "public, max-age=300"
    assert resp.headers["access-control-allow-origin"] == "*"


@pytest.mark.asyncio
async def test_unknown_badge(client: AsyncClient):
    resp = await client.get("/api/stats", params={"badge": "bogus"})
    assert resp.status_code == 404
    assert resp.json() == {"schemaVersion": 1, "label": "error", "message": "unknown", "color": "red"}


@pytest.mark.asyncio
async def test_full_stats(client: AsyncClient):
    resp = await client.get("/api/stats")
    assert resp.status_code == 200
    data = resp.json()
    assert data["tools"] == catalog.STATS["tools"]
    assert len(data["services_list"]) == 26
    assert data["services_list"][0] == {"id": "stripe", "name": "Stripe", "category": "payments", "tools": 16}
    assert data["categories_list"][0] == {"id": "payments", "label": "Payments"}
    assert "generated" in data
    assert resp.headers["access-control-allow-origin"] == "*"
