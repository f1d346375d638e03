"""Health routes - 0nMCP liveness proxy and database readiness."""

from __future__ import annotations

import logging
from datetime import datetime, timezone

import httpx
from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse
from sqlalchemy import text
from sqlalchemy.ext.asyncio import AsyncSession

from ..database import get_db
from ..services import mcp_svc

logger = logging.getLogger(__name__)

router = APIRouter()

NO_CACHE = {"Cache-Control": "no-cache"}


@router.get("/api/health")
async def onmcp_health():
    timestamp = datetime.now(timezone.utc).isoformat()
    try:
        data = await mcp_svc.onmcp_health()
    except (httpx.HTTPError, ValueError) as e:
        logger.debug("0nMCP health probe failed: %s", e)
        return JSONResponse(
            {"online": False, "hint": mcp_svc.ONMCP_HINT, "timestamp": timestamp},
            headers=NO_CACHE,
        )

    return JSONResponse({"online": True, **data, "timestamp": timestamp}, headers=NO_CACHE)


@router.get("/ready")
async def readiness_check(db: AsyncSession = Depends(get_db)):
    await db.execute(text("SELECT 1"))
    return {"status": "ready", "service": "onmcp"}
