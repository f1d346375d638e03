"""0nMCP command proxy - forwards natural-language tasks to the orchestrator."""

from __future__ import annotations

import logging
from datetime import datetime, timezone

import httpx
from fastapi import APIRouter
from fastapi.responses import JSONResponse

from ..schemas.mcp import ExecuteRequest
from ..services import mcp_svc

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api", tags=["0nmcp"])

SERVE_HINT = "Run: npx 0nmcp serve --port 3001"


@router.post("/execute")
async def execute(data: ExecuteRequest):
    if not data.task and not data.tool:
        return JSONResponse({"error": "task or tool required"}, status_code=400)

    task = data.task or f"Execute {data.tool} on {data.service}"
    try:
        response = await mcp_svc.onmcp_run_task(task)
        if not response.is_success:
            return JSONResponse({"error": "execution failed", "status": "offline"}, status_code=502)
        payload = response.json()
    except (httpx.HTTPError, ValueError):
        logger.warning("0nMCP execute proxy failed", exc_info=True)
        return JSONResponse(
            {"error": "0nMCP server unreachable", "status": "offline", "hint": SERVE_HINT},
            status_code=502,
        )

    if not isinstance(payload, dict):
        payload = {"result": payload}
    return {
        **payload,
        "source": "0nmcp",
        "timestamp": datetime.now(timezone.utc).isoformat(),
    }
