"""Append-only audit trail of sync runs."""

from __future__ import annotations

from datetime import datetime

from sqlalchemy import DateTime, Integer, String, Text, func
from sqlalchemy.orm import Mapped, mapped_column

from .base import Base, UUIDMixin


class CRMSyncLog(UUIDMixin, Base):
    __tablename__ = "crm_sync_log"

    sync_type: Mapped[str] = mapped_column(String(20), default="full")
    status: Mapped[str] = mapped_column(
        String(20), default="running"
    )  # running/completed/failed
    locations_synced: Mapped[int] = mapped_column(Integer, default=0)
    locations_added: Mapped[int] = mapped_column(Integer, default=0)
    locations_updated: Mapped[int] = mapped_column(Integer, default=0)
    duration_ms: Mapped[int | None] = mapped_column(Integer, default=None)
    error_message: Mapped[str | None] = mapped_column(Text, default=None)
    started_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), server_default=func.now()
    )
    completed_at: Mapped[datetime | None] = mapped_column(
        DateTime(timezone=True), default=None
    )

    def __repr__(self) -> str:
        return f"<CRMSyncLog {self.sync_type} {self.status}>"
