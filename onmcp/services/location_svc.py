"""Synced location queries."""

from __future__ import annotations

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from ..models.location import CRMLocation


async def list_locations(db: AsyncSession) -> list[CRMLocation]:
    stmt = select(CRMLocation).order_by(CRMLocation.name)
    return list((await db.execute(stmt)).scalars().all())


async def get_by_external_id(db: AsyncSession, location_id: str) -> CRMLocation | None:
    stmt = select(CRMLocation).where(CRMLocation.location_id == location_id)
    return (await db.execute(stmt)).scalar_one_or_none()
