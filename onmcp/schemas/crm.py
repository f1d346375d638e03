"""CRM agency / location sync schemas."""

from __future__ import annotations

import uuid
from datetime import datetime

from pydantic import BaseModel, ConfigDict


class AgencyConfigIn(BaseModel):
    agency_name: str | None = None
    agency_id: str | None = None
    api_base_url: str | None = None
    api_version: str | None = None


class AgencyConfigOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    agency_name: str
    agency_id: str | None = None
    api_base_url: str
    api_version: str
    status: str
    last_sync_at: datetime | None = None
    locations_count: int = 0


class KeySummary(BaseModel):
    agency_api_key: bool
    pit_key: bool
    client_id: bool
    client_secret: bool
    pit_value: str | None = None


class CRMLocationOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: uuid.UUID
    location_id: str
    name: str
    address: str | None = None
    city: str | None = None
    state: str | None = None
    country: str | None = None
    postal_code: str | None = None
    phone: str | None = None
    email: str | None = None
    website: str | None = None
    timezone: str | None = None
    logo_url: str | None = None
    crm_metadata: dict | None = None
    last_sync_at: datetime | None = None


class LocationSyncResult(BaseModel):
    total: int = 0
    added: int = 0
    updated: int = 0
    skipped: int = 0
    duration_ms: int = 0
