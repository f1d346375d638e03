"""MCP server registry and tool execution log."""

from __future__ import annotations

from datetime import datetime

from sqlalchemy import JSON, Boolean, DateTime, Integer, String, Text, func
from sqlalchemy.orm import Mapped, mapped_column

from .base import Base, UUIDMixin, TimestampMixin


class MCPServer(TimestampMixin, Base):
    __tablename__ = "mcp_servers"

    server_key: Mapped[str] = mapped_column(String(50), primary_key=True)
    name: Mapped[str] = mapped_column(String(100))
    description: Mapped[str] = mapped_column(String(255), default="")
    endpoint_url: Mapped[str] = mapped_column(String(500))
    transport: Mapped[str] = mapped_column(String(20), default="http")
    auth_type: Mapped[str] = mapped_column(String(20), default="none")
    online: Mapped[bool] = mapped_column(Boolean, default=False)
    last_health_check: Mapped[datetime | None] = mapped_column(
        DateTime(timezone=True), default=None
    )
    last_health_response: Mapped[dict | None] = mapped_column(JSON, default=None)
    version: Mapped[str | None] = mapped_column(String(50), default=None)
    tools_count: Mapped[int] = mapped_column(Integer, default=0)
    services_count: Mapped[int] = mapped_column(Integer, default=0)
    status: Mapped[str] = mapped_column(
        String(20), default="configured"
    )  # configured/connected/disconnected
    error_message: Mapped[str | None] = mapped_column(Text, default=None)

    def __repr__(self) -> str:
        return f"<MCPServer {self.server_key} {self.status}>"


class MCPExecutionLog(UUIDMixin, Base):
    __tablename__ = "mcp_execution_log"

    server_key: Mapped[str] = mapped_column(String(50), index=True)
    tool_name: Mapped[str] = mapped_column(String(200))
    input: Mapped[dict | None] = mapped_column(JSON, default=None)
    output: Mapped[dict | None] = mapped_column(JSON, default=None)
    status: Mapped[str] = mapped_column(String(20))  # success/error
    duration_ms: Mapped[int] = mapped_column(Integer, default=0)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), server_default=func.now()
    )
