"""Agency CRM connection - a single-row table."""

from __future__ import annotations

from datetime import datetime

from sqlalchemy import CheckConstraint, DateTime, Integer, String
from sqlalchemy.orm import Mapped, mapped_column

from .base import Base, TimestampMixin

AGENCY_CONFIG_ID = 1

AGENCY_STATUSES = ("active", "syncing", "error")


class AgencyConfig(TimestampMixin, Base):
    __tablename__ = "crm_agency_config"
    __table_args__ = (
        CheckConstraint(f"id = {AGENCY_CONFIG_ID}", name="ck_agency_config_singleton"),
    )

    id: Mapped[int] = mapped_column(Integer, primary_key=True, default=AGENCY_CONFIG_ID)
    agency_name: Mapped[str] = mapped_column(String(200))
    agency_id: Mapped[str | None] = mapped_column(String(100), default=None)
    api_base_url: Mapped[str] = mapped_column(String(500))
    api_version: Mapped[str] = mapped_column(String(50))
    status: Mapped[str] = mapped_column(String(20), default="active")  # active/syncing/error
    last_sync_at: Mapped[datetime | None] = mapped_column(
        DateTime(timezone=True), default=None
    )
    locations_count: Mapped[int] = mapped_column(Integer, default=0)

    def __repr__(self) -> str:
        return f"<AgencyConfig {self.agency_name!r} {self.status}>"
