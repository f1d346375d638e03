"""MCP server routes - live status across all servers, tool execution."""

from __future__ import annotations

import logging

from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse
from sqlalchemy.ext.asyncio import AsyncSession

from ..database import get_db
from ..errors import UnknownServerError
from ..schemas.mcp import ToolExecuteRequest
from ..services import mcp_svc

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/mcp", tags=["mcp"])


@router.get("/status")
async def mcp_status(db: AsyncSession = Depends(get_db)):
    try:
        health = await mcp_svc.check_all_health(db)
        servers = await mcp_svc.get_servers(db)
    except Exception as e:
        logger.exception("MCP status check failed")
        return JSONResponse({"error": str(e)}, status_code=500)

    return mcp_svc.summarize(servers, health)


@router.post("/execute")
async def mcp_execute(data: ToolExecuteRequest, db: AsyncSession = Depends(get_db)):
    try:
        return await mcp_svc.execute(data.server, data.tool, data.input, token=data.token, db=db)
    except UnknownServerError as e:
        return JSONResponse({"error": str(e)}, status_code=400)
