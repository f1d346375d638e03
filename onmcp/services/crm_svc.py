"""CRM service - builds the Rocket CRM client for app code."""

from __future__ import annotations

from dataclasses import replace
from typing import Any

from sqlalchemy.ext.asyncio import AsyncSession

from rocket_crm import CRMClient

from ..config import settings
from ..schemas.crm import LocationSyncResult


def get_crm_client(timeout: float | None = None) -> CRMClient:
    """Rocket CRM client as async context manager.

    Usage:
        async with get_crm_client() as crm:
            page = await crm.agency.list_locations(limit=100)
    """
    config = settings.crm_config()
    if timeout is not None:
        config = replace(config, timeout=timeout)
    return CRMClient(config)


async def check_crm_health() -> dict[str, Any]:
    async with get_crm_client() as crm:
        return await crm.agency.check_health()


async def run_location_sync(db: AsyncSession) -> LocationSyncResult:
    """Run a full location sync against the configured agency."""
    from ..sync.location_sync import sync_locations

    async with get_crm_client() as crm:
        return await sync_locations(db, crm)
