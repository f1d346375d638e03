"""CRM location routes - list synced locations, trigger a full sync."""

from __future__ import annotations

import logging

from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse
from sqlalchemy.ext.asyncio import AsyncSession

from ..database import get_db
from ..schemas.crm import CRMLocationOut
from ..services import crm_svc, location_svc

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/crm", tags=["crm"])


@router.get("/locations")
async def list_locations(db: AsyncSession = Depends(get_db)):
    try:
        locations = await location_svc.list_locations(db)
    except Exception as e:
        logger.exception("Failed to list locations")
        return JSONResponse({"error": str(e)}, status_code=500)

    return {
        "locations": [CRMLocationOut.model_validate(loc) for loc in locations],
        "count": len(locations),
    }


@router.post("/locations")
async def sync_locations(db: AsyncSession = Depends(get_db)):
    try:
        result = await crm_svc.run_location_sync(db)
    except Exception as e:
        # sync has already marked the agency config and sync log as failed
        return JSONResponse({"error": str(e)}, status_code=500)

    return {
        "success": True,
        "total": result.total,
        "added": result.added,
        "updated": result.updated,
        "duration_ms": result.duration_ms,
    }
