"""Synced CRM sub-account (location)."""

from __future__ import annotations

from datetime import datetime

from sqlalchemy import JSON, DateTime, String
from sqlalchemy.orm import Mapped, mapped_column

from .base import Base, UUIDMixin, TimestampMixin


class CRMLocation(UUIDMixin, TimestampMixin, Base):
    __tablename__ = "crm_locations"

    # External CRM id - the natural key for reconciliation
    location_id: Mapped[str] = mapped_column(String(100), unique=True, index=True)
    name: Mapped[str] = mapped_column(String(200), index=True)
    address: Mapped[str | None] = mapped_column(String(255), default=None)
    city: Mapped[str | None] = mapped_column(String(100), default=None)
    state: Mapped[str | None] = mapped_column(String(100), default=None)
    country: Mapped[str | None] = mapped_column(String(50), default=None)
    postal_code: Mapped[str | None] = mapped_column(String(20), default=None)
    phone: Mapped[str | None] = mapped_column(String(50), default=None)
    email: Mapped[str | None] = mapped_column(String(255), default=None)
    website: Mapped[str | None] = mapped_column(String(500), default=None)
    timezone: Mapped[str | None] = mapped_column(String(50), default=None)
    logo_url: Mapped[str | None] = mapped_column(String(1000), default=None)
    crm_metadata: Mapped[dict | None] = mapped_column(JSON, default=None)
    last_sync_at: Mapped[datetime | None] = mapped_column(
        DateTime(timezone=True), default=None
    )

    def __repr__(self) -> str:
        return f"<CRMLocation {self.location_id!r} {self.name!r}>"
