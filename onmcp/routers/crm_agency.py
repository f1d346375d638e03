"""CRM agency config routes - connection settings and credential status."""

from __future__ import annotations

import logging

from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse
from sqlalchemy.ext.asyncio import AsyncSession

from ..config import settings
from ..database import get_db
from ..schemas.crm import AgencyConfigIn, AgencyConfigOut
from ..services import agency_svc, crm_svc

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/crm", tags=["crm"])


@router.get("/agency")
async def get_agency(db: AsyncSession = Depends(get_db)):
    try:
        config = await agency_svc.get_agency_config(db)
    except Exception as e:
        logger.exception("Failed to load agency config")
        return JSONResponse({"error": str(e)}, status_code=500)

    return {
        "config": AgencyConfigOut.model_validate(config) if config else None,
        "keys": agency_svc.key_summary(),
        "configured": settings.crm_configured,
    }


@router.post("/agency")
async def save_agency(
    data: AgencyConfigIn | None = None,
    db: AsyncSession = Depends(get_db),
):
    try:
        config = await agency_svc.save_agency_config(db, data or AgencyConfigIn())
        health = await crm_svc.check_crm_health()
    except Exception as e:
        logger.exception("Failed to save agency config")
        return JSONResponse({"error": str(e)}, status_code=500)

    return {
        "success": True,
        "config": AgencyConfigOut.model_validate(config),
        "health": health,
    }
