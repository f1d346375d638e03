"""Agency config service - the singleton CRM connection/status row."""

from __future__ import annotations

from datetime import datetime, timezone

from sqlalchemy.ext.asyncio import AsyncSession

from ..config import ConsoleSettings, settings
from ..models.agency_config import AGENCY_CONFIG_ID, AGENCY_STATUSES, AgencyConfig
from ..schemas.crm import AgencyConfigIn, KeySummary


async def get_agency_config(db: AsyncSession) -> AgencyConfig | None:
    return await db.get(AgencyConfig, AGENCY_CONFIG_ID)


def _new_config() -> AgencyConfig:
    return AgencyConfig(
        id=AGENCY_CONFIG_ID,
        agency_name=settings.crm_default_agency_name,
        api_base_url=settings.crm_api_base,
        api_version=settings.crm_api_version,
        status="active",
        locations_count=0,
    )


async def _get_or_create(db: AsyncSession) -> AgencyConfig:
    config = await get_agency_config(db)
    if config is None:
        config = _new_config()
        db.add(config)
    return config


async def save_agency_config(db: AsyncSession, data: AgencyConfigIn) -> AgencyConfig:
    """Create or overwrite the agency config. Blank fields fall back to defaults."""
    values = {
        "agency_name": data.agency_name or settings.crm_default_agency_name,
        "agency_id": data.agency_id or None,
        "api_base_url": data.api_base_url or settings.crm_api_base,
        "api_version": data.api_version or settings.crm_api_version,
        "status": "active",
    }
    config = await _get_or_create(db)
    for key, value in values.items():
        setattr(config, key, value)
    await db.commit()
    await db.refresh(config)
    return config


async def set_agency_status(db: AsyncSession, status: str) -> AgencyConfig:
    if status not in AGENCY_STATUSES:
        raise ValueError(f"Invalid agency status: {status!r}")
    config = await _get_or_create(db)
    config.status = status
    await db.commit()
    return config


async def record_sync_success(
    db: AsyncSession, locations_count: int, synced_at: datetime | None = None,
) -> AgencyConfig:
    config = await _get_or_create(db)
    config.status = "active"
    config.last_sync_at = synced_at or datetime.now(timezone.utc)
    config.locations_count = locations_count
    await db.commit()
    return config


def key_summary(cfg: ConsoleSettings | None = None) -> KeySummary:
    """Which CRM credentials are present. Only a PIT prefix is ever echoed."""
    cfg = cfg or settings
    return KeySummary(
        agency_api_key=bool(cfg.crm_agency_api_key),
        pit_key=bool(cfg.crm_pit_key),
        client_id=bool(cfg.crm_client_id),
        client_secret=bool(cfg.crm_client_secret),
        pit_value=f"{cfg.crm_pit_key[:8]}..." if cfg.crm_pit_key else None,
    )
