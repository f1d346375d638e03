"""Public stats route - live catalog counts and shields.io badges."""

from __future__ import annotations

from datetime import datetime, timezone

from fastapi import APIRouter
from fastapi.responses import JSONResponse

from .. import catalog

router = APIRouter(prefix="/api", tags=["stats"])

PUBLIC_CACHE = {
    "Cache-Control": "public, max-age=300",
    "Access-Control-Allow-Origin": "*",
}

UNKNOWN_BADGE = {"schemaVersion": 1, "label": "error", "message": "unknown", "color": "red"}


@router.get("/stats")
async def stats(badge: str | None = None):
    if badge:
        payload = catalog.badge(badge)
        if payload is None:
            return JSONResponse(UNKNOWN_BADGE, status_code=404)
        return JSONResponse(payload, headers=PUBLIC_CACHE)

    return JSONResponse({
        **catalog.STATS,
        "services_list": [
            {"id": s.id, "name": s.name, "category": s.category, "tools": s.tools}
            for s in catalog.SERVICES
        ],
        "categories_list": [{"id": c.id, "label": c.label} for c in catalog.CATEGORIES],
        "generated": datetime.now(timezone.utc).isoformat(),
    }, headers=PUBLIC_CACHE)
