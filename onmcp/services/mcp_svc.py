"""MCP connection manager - health, registry and tool execution for the three
MCP servers the console fronts:

1. 0nMCP       - universal AI API orchestrator
2. Rocket+     - CRM enhancements
3. CRM         - direct Rocket CRM API
"""

from __future__ import annotations

import asyncio
import logging
import time
from datetime import datetime, timezone
from typing import Any

import httpx
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from ..config import settings
from ..models.mcp_server import MCPExecutionLog, MCPServer
from ..schemas.mcp import ExecuteResult, HealthResult
from ..errors import UnknownServerError
from . import crm_svc

logger = logging.getLogger(__name__)

SERVER_KEYS = ("0nmcp", "rocket_plus", "crm")

ONMCP_HINT = "Start 0nMCP: npx 0nmcp serve --port 3001"


def http_client(timeout: float) -> httpx.AsyncClient:
    """HTTP client for calls to MCP servers."""
    return httpx.AsyncClient(timeout=timeout)


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


def _elapsed_ms(started: float) -> int:
    return int((time.monotonic() - started) * 1000)


def _json_or_empty(response: httpx.Response) -> dict[str, Any]:
    try:
        data = response.json()
    except ValueError:
        return {}
    return data if isinstance(data, dict) else {}


def _count(value: Any, default: int) -> int:
    if isinstance(value, int) and not isinstance(value, bool) and value > 0:
        return value
    return default


def default_servers() -> list[dict[str, Any]]:
    """Registry entries used until health checks have written real rows."""
    endpoints = settings.mcp_endpoints
    base = {
        "transport": "http",
        "online": False,
        "last_health_check": None,
        "version": None,
        "status": "configured",
        "error_message": None,
    }
    return [
        {
            **base,
            "server_key": "0nmcp",
            "name": "0nMCP Orchestrator",
            "description": "545 tools, 26 services",
            "endpoint_url": endpoints["0nmcp"],
            "auth_type": "none",
            "tools_count": 545,
            "services_count": 26,
        },
        {
            **base,
            "server_key": "rocket_plus",
            "name": "Rocket+",
            "description": "50+ tools",
            "endpoint_url": endpoints["rocket_plus"],
            "auth_type": "bearer",
            "tools_count": 50,
            "services_count": 1,
        },
        {
            **base,
            "server_key": "crm",
            "name": "CRM Direct",
            "description": "245 tools, 12 modules",
            "endpoint_url": endpoints["crm"],
            "auth_type": "bearer",
            "tools_count": 245,
            "services_count": 12,
        },
    ]


def _server_to_dict(server: MCPServer) -> dict[str, Any]:
    return {
        "server_key": server.server_key,
        "name": server.name,
        "description": server.description,
        "endpoint_url": server.endpoint_url,
        "transport": server.transport,
        "auth_type": server.auth_type,
        "online": server.online,
        "last_health_check": server.last_health_check,
        "version": server.version,
        "tools_count": server.tools_count,
        "services_count": server.services_count,
        "status": server.status,
        "error_message": server.error_message,
    }


# =========================================================================
# Health
# =========================================================================

async def _check_onmcp(endpoint: str, started: float) -> HealthResult:
    async with http_client(settings.mcp_health_timeout_seconds) as client:
        response = await client.get(f"{endpoint}/api/health")
    data = _json_or_empty(response)
    return HealthResult(
        server_key="0nmcp",
        online=response.is_success,
        version=str(data.get("version") or "unknown"),
        tools=_count(data.get("tools"), 545),
        services=_count(data.get("services"), 26),
        latency_ms=_elapsed_ms(started),
    )


async def _check_rocket_plus(endpoint: str, started: float) -> HealthResult:
    async with http_client(settings.mcp_health_timeout_seconds) as client:
        response = await client.get(f"{endpoint}/health")
    return HealthResult(
        server_key="rocket_plus",
        online=response.is_success,
        version="1.0.0",
        tools=50,
        services=1,
        latency_ms=_elapsed_ms(started),
    )


async def _check_crm(started: float) -> HealthResult:
    async with crm_svc.get_crm_client(timeout=settings.mcp_health_timeout_seconds) as crm:
        health = await crm.agency.check_health()

    if "status" not in health:
        return HealthResult(
            server_key="crm", online=False, latency_ms=_elapsed_ms(started),
            error=health.get("error"),
        )

    online = bool(health["online"])
    error = None
    if not online:
        error = health.get("error") if health["status"] == 0 else f"HTTP {health['status']}"
    return HealthResult(
        server_key="crm",
        online=online,
        version=settings.crm_api_version,
        tools=245,
        services=12,
        latency_ms=_elapsed_ms(started),
        error=error,
    )


async def check_health(server_key: str) -> HealthResult:
    """Live health probe for one server. Never raises."""
    started = time.monotonic()
    endpoint = settings.mcp_endpoints.get(server_key)

    try:
        if server_key == "0nmcp":
            return await _check_onmcp(endpoint, started)
        if server_key == "rocket_plus":
            return await _check_rocket_plus(endpoint, started)
        if server_key == "crm":
            return await _check_crm(started)
    except httpx.HTTPError as e:
        return HealthResult(
            server_key=server_key, online=False, latency_ms=_elapsed_ms(started),
            error=str(e) or "Connection failed",
        )
    except Exception as e:
        logger.warning("Health check for %s failed", server_key, exc_info=True)
        return HealthResult(
            server_key=server_key, online=False, latency_ms=_elapsed_ms(started),
            error=str(e) or "Health check failed",
        )

    return HealthResult(
        server_key=server_key, online=False, latency_ms=_elapsed_ms(started),
        error="Unknown server",
    )


async def _persist_health(db: AsyncSession, results: list[HealthResult]) -> None:
    defaults = {s["server_key"]: s for s in default_servers()}
    checked_at = _utcnow()

    for result in results:
        server = await db.get(MCPServer, result.server_key)
        if server is None:
            seed = defaults[result.server_key]
            server = MCPServer(
                server_key=seed["server_key"],
                name=seed["name"],
                description=seed["description"],
                endpoint_url=seed["endpoint_url"],
                transport=seed["transport"],
                auth_type=seed["auth_type"],
            )
            db.add(server)

        server.online = result.online
        server.last_health_check = checked_at
        server.last_health_response = result.model_dump()
        server.version = result.version
        server.tools_count = result.tools or 0
        server.services_count = result.services or 0
        server.status = "connected" if result.online else "disconnected"
        server.error_message = result.error

    await db.commit()


async def check_all_health(db: AsyncSession | None = None) -> list[HealthResult]:
    """Probe every server concurrently and, with a session, record the results."""
    results = list(await asyncio.gather(*(check_health(key) for key in SERVER_KEYS)))

    if db is not None:
        try:
            await _persist_health(db, results)
        except Exception:
            logger.warning("Could not persist MCP health results", exc_info=True)
            await db.rollback()

    return results


async def get_servers(db: AsyncSession) -> list[dict[str, Any]]:
    """Registered servers, falling back to defaults when none are stored."""
    try:
        rows = (await db.execute(select(MCPServer).order_by(MCPServer.server_key))).scalars().all()
    except Exception:
        logger.warning("Could not read MCP server registry", exc_info=True)
        await db.rollback()
        return default_servers()

    if not rows:
        return default_servers()
    return [_server_to_dict(row) for row in rows]


def summarize(servers: list[dict[str, Any]], health: list[HealthResult]) -> dict[str, Any]:
    """Merge registry rows with live health and compute the status summary."""
    by_key = {h.server_key: h for h in health}
    checked_at = _utcnow().isoformat()

    merged = []
    for server in servers:
        live = by_key.get(server["server_key"])
        merged.append({
            **server,
            "online": live.online if live else server["online"],
            "latency_ms": live.latency_ms if live else None,
            "live_error": live.error if live else None,
            "last_health_check": checked_at,
        })

    online = sum(1 for s in merged if s["online"])
    return {
        "servers": merged,
        "summary": {
            "total": len(merged),
            "online": online,
            "offline": len(merged) - online,
            "total_tools": sum(s.get("tools_count") or 0 for s in merged),
            "total_services": sum(s.get("services_count") or 0 for s in merged),
        },
    }


# =========================================================================
# Execution
# =========================================================================

async def _log_execution(db: AsyncSession | None, result: ExecuteResult, tool_input: dict[str, Any]) -> None:
    if db is None:
        return
    output = result.data if isinstance(result.data, dict) else {"result": result.data}
    db.add(MCPExecutionLog(
        server_key=result.server_key,
        tool_name=result.tool,
        input=tool_input,
        output=output,
        status="success" if result.success else "error",
        duration_ms=result.duration_ms,
    ))
    try:
        await db.commit()
    except Exception:
        logger.warning("Could not write MCP execution log", exc_info=True)
        await db.rollback()


async def _execute_onmcp(tool: str, tool_input: dict[str, Any], started: float) -> ExecuteResult:
    async with http_client(settings.onmcp_execute_timeout_seconds) as client:
        response = await client.post(
            f"{settings.onmcp_url}/api/execute", json={"tool": tool, "input": tool_input},
        )
    data = _json_or_empty(response)
    return ExecuteResult(
        server_key="0nmcp",
        tool=tool,
        success=response.is_success,
        data=data,
        duration_ms=_elapsed_ms(started),
        error=None if response.is_success else (data.get("error") or f"HTTP {response.status_code}"),
    )


async def _execute_crm(
    tool: str, tool_input: dict[str, Any], token: str | None, started: float,
) -> ExecuteResult | None:
    async with crm_svc.get_crm_client(timeout=settings.crm_execute_timeout_seconds) as crm:
        resolved = token or crm.resolve_token("agency") or crm.resolve_token("pit")
        if not resolved:
            return None
        body = tool_input.get("body")
        result = await crm.request(
            str(tool_input.get("endpoint") or "/"),
            resolved,
            method=str(tool_input.get("method") or "GET"),
            body=body if isinstance(body, dict) else None,
        )

    error = None
    if not result.ok:
        error = result.error if result.unreachable else f"CRM API {result.status}"
    return ExecuteResult(
        server_key="crm",
        tool=tool,
        success=result.ok,
        data=result.data,
        duration_ms=_elapsed_ms(started),
        error=error,
    )


async def execute(
    server_key: str,
    tool: str,
    tool_input: dict[str, Any] | None = None,
    token: str | None = None,
    db: AsyncSession | None = None,
) -> ExecuteResult:
    """Run one tool on an MCP server. Failures come back as success=False.

    Raises UnknownServerError for a key outside the registry.
    """
    if server_key not in SERVER_KEYS:
        raise UnknownServerError(f"Unknown MCP server: {server_key}")
    tool_input = tool_input or {}
    started = time.monotonic()

    def failed(error: str) -> ExecuteResult:
        return ExecuteResult(
            server_key=server_key, tool=tool, success=False,
            duration_ms=_elapsed_ms(started), error=error,
        )

    try:
        if server_key == "0nmcp":
            result = await _execute_onmcp(tool, tool_input, started)
        elif server_key == "crm":
            result = await _execute_crm(tool, tool_input, token, started)
            if result is None:
                return failed("No CRM API key")
        else:
            return failed(f"Server {server_key} execution not implemented")
    except httpx.HTTPError as e:
        return failed(str(e) or "Execution failed")
    except Exception as e:
        logger.warning("MCP %s tool %s failed", server_key, tool, exc_info=True)
        return failed(str(e) or "Execution failed")

    await _log_execution(db, result, tool_input)
    return result


# =========================================================================
# 0nMCP proxy
# =========================================================================

async def onmcp_health() -> dict[str, Any]:
    """Upstream 0nMCP health payload.

    Raises httpx.HTTPError when unhealthy and ValueError when the body is not
    a JSON object.
    """
    async with http_client(settings.onmcp_health_timeout_seconds) as client:
        response = await client.get(f"{settings.onmcp_url}/api/health")
        response.raise_for_status()
    data = response.json()
    if not isinstance(data, dict):
        raise ValueError("0nMCP health payload is not a JSON object")
    return data


async def onmcp_run_task(task: str) -> httpx.Response:
    async with http_client(settings.onmcp_execute_timeout_seconds) as client:
        return await client.post(f"{settings.onmcp_url}/api/execute", json={"task": task})
