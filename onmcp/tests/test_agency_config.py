"""Test the singleton agency config store."""

from __future__ import annotations

import pytest
from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from onmcp.config import ConsoleSettings, settings
from onmcp.models.agency_config import AGENCY_CONFIG_ID, AgencyConfig
from onmcp.schemas.crm import AgencyConfigIn
from onmcp.services import agency_svc


@pytest.mark.asyncio
async def test_no_config_until_first_write(db: AsyncSession):
    assert await agency_svc.get_agency_config(db) is None


@pytest.mark.asyncio
async def test_save_applies_defaults(db: AsyncSession):
    config = await agency_svc.save_agency_config(db, AgencyConfigIn())

    assert config.id == AGENCY_CONFIG_ID
    assert config.agency_name == "0nORK Agency"
    assert config.agency_id is None
    assert config.api_base_url == settings.crm_api_base
    assert config.api_version == settings.crm_api_version
    assert config.status == "active"
    assert config.locations_count == 0


@pytest.mark.asyncio
async def test_save_twice_keeps_one_row(db: AsyncSession):
    await agency_svc.save_agency_config(db, AgencyConfigIn(agency_name="First"))
    config = await agency_svc.save_agency_config(
        db, AgencyConfigIn(agency_name="Second", agency_id="comp_1"),
    )

    count = (await db.execute(select(func.count()).select_from(AgencyConfig))).scalar_one()
    assert count == 1
    assert config.agency_name == "Second"
    assert config.agency_id == "comp_1"


@pytest.mark.asyncio
async def test_status_touch_creates_row(db: AsyncSession):
    config = await agency_svc.set_agency_status(db, "syncing")
    assert config.id == AGENCY_CONFIG_ID
    assert config.status == "syncing"


@pytest.mark.asyncio
async def test_invalid_status(db: AsyncSession):
    with pytest.raises(ValueError):
        await agency_svc.set_agency_status(db, "paused")


@pytest.mark.asyncio
async def test_save_resets_error_status(db: AsyncSession):
    await agency_svc.set_agency_status(db, "error")
    config = await agency_svc.save_agency_config(db, AgencyConfigIn())
    assert config.status == "active"


@pytest.mark.asyncio
async def test_record_sync_success(db: AsyncSession):
    await agency_svc.set_agency_status(db, "syncing")
    config = await agency_svc.record_sync_success(db, 42)

    assert config.status == "active"
    assert config.locations_count == 42
    assert config.last_sync_at is not None


def test_key_summary_previews_only_pit_prefix():
    cfg = ConsoleSettings(crm_pit_key="pit-1234567890abcdef", crm_agency_api_key="secret-agency")
    summary = agency_svc.key_summary(cfg)

    assert summary.pit_key is True
    assert summary.agency_api_key is True
    assert summary.client_id is False
    assert summary.pit_value == "pit-1234..."
    assert "secret-agency" not in summary.model_dump_json()


def test_key_summary_without_keys():
    summary = agency_svc.key_summary(ConsoleSettings(crm_pit_key="", crm_agency_api_key=""))
    assert summary.pit_value is None
    assert summary.agency_api_key is False
