"""MCP proxy / status schemas."""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel


class ExecuteRequest(BaseModel):
    task: str | None = None
    service: str | None = None
    tool: str | None = None


class ToolExecuteRequest(BaseModel):
    server: str
    tool: str
    input: dict[str, Any] = {}
    token: str | None = None


class HealthResult(BaseModel):
    server_key: str
    online: bool
    version: str | None = None
    tools: int | None = None
    services: int | None = None
    latency_ms: int
    error: str | None = None


class ExecuteResult(BaseModel):
    server_key: str
    tool: str
    success: bool
    data: Any = None
    error: str | None = None
    duration_ms: int
