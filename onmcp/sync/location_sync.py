"""Location sync orchestrator - full CRM -> local reconciliation pass.

One run:
1. open a sync-log row (``running``) and flip the agency config to ``syncing``
2. page through the agency location listing until a short page
3. upsert every fetched location by its external id, in arrival order
4. mark the agency ``active`` and close the log as ``completed``

Any failure marks the agency ``error``, closes the log as ``failed`` and
re-raises. Upserts already committed stay committed.
"""

from __future__ import annotations

import logging
import time
from datetime import datetime, timezone
from typing import Any

from sqlalchemy.ext.asyncio import AsyncSession

from rocket_crm import CRMClient

from ..config import settings
from ..errors import LocationSyncError
from ..models.location import CRMLocation
from ..models.sync_log import CRMSyncLog
from ..schemas.crm import LocationSyncResult
from ..services import agency_svc, location_svc
from .field_mapper import crm_location_to_local

logger = logging.getLogger(__name__)


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


def _elapsed_ms(started: float) -> int:
    return int((time.monotonic() - started) * 1000)


async def fetch_all_locations(
    crm: CRMClient,
    page_size: int = 100,
    max_pages: int = 500,
    company_id: str | None = None,
) -> list[dict[str, Any]]:
    """Offset-paginate the agency location listing.

    Stops on the first page shorter than ``page_size``. A CRM error on any
    page aborts the whole fetch, as does running past ``max_pages``.
    """
    all_locations: list[dict[str, Any]] = []
    skip = 0

    for page in range(max_pages):
        result = await crm.agency.list_locations(limit=page_size, skip=skip, company_id=company_id)
        if not result.ok or not isinstance(result.data, dict):
            raise LocationSyncError(
                result.error or "Failed to fetch locations from CRM", status=result.status,
            )

        batch = result.data.get("locations") or []
        logger.debug("Fetched location page %d (skip=%d): %d rows", page + 1, skip, len(batch))
        all_locations.extend(batch)
        skip += page_size

        if len(batch) < page_size:
            return all_locations

    raise LocationSyncError(
        f"Location listing exceeded {max_pages} pages of {page_size}; "
        "the CRM may be ignoring the skip parameter"
    )


async def upsert_location(db: AsyncSession, payload: dict[str, Any]) -> str | None:
    """Insert or fully overwrite one location. Returns "added", "updated" or None."""
    fields = crm_location_to_local(payload)
    external_id = fields["location_id"]
    if not external_id:
        return None

    existing = await location_svc.get_by_external_id(db, external_id)
    if existing is not None:
        for key, value in fields.items():
            setattr(existing, key, value)
        outcome = "updated"
    else:
        db.add(CRMLocation(**fields))
        outcome = "added"

    await db.commit()
    return outcome


async def _record_failure(db: AsyncSession, log_id, started: float, error: Exception) -> None:
    await db.rollback()
    await agency_svc.set_agency_status(db, "error")

    sync_log = await db.get(CRMSyncLog, log_id)
    if sync_log is not None:
        sync_log.status = "failed"
        sync_log.error_message = str(error) or error.__class__.__name__
        sync_log.duration_ms = _elapsed_ms(started)
        sync_log.completed_at = _utcnow()
        await db.commit()


async def sync_locations(
    db: AsyncSession,
    crm: CRMClient,
    page_size: int | None = None,
    max_pages: int | None = None,
    company_id: str | None = None,
) -> LocationSyncResult:
    """Run one full location sync. Raises on failure after recording it."""
    page_size = page_size or settings.crm_sync_page_size
    max_pages = max_pages or settings.crm_sync_max_pages
    started = time.monotonic()

    sync_log = CRMSyncLog(sync_type="full", status="running", started_at=_utcnow())
    db.add(sync_log)
    await db.commit()
    log_id = sync_log.id
    logger.info("Location sync %s started", log_id)

    try:
        config = await agency_svc.set_agency_status(db, "syncing")
        if company_id is None:
            company_id = config.agency_id

        payloads = await fetch_all_locations(
            crm, page_size=page_size, max_pages=max_pages, company_id=company_id,
        )

        added = updated = skipped = 0
        for payload in payloads:
            outcome = await upsert_location(db, payload) if isinstance(payload, dict) else None
            if outcome == "added":
                added += 1
            elif outcome == "updated":
                updated += 1
            else:
                skipped += 1
                logger.warning("Skipping location payload without an id: %r", payload)

        await agency_svc.record_sync_success(db, len(payloads), synced_at=_utcnow())

        result = LocationSyncResult(
            total=len(payloads),
            added=added,
            updated=updated,
            skipped=skipped,
            duration_ms=_elapsed_ms(started),
        )
        sync_log.status = "completed"
        sync_log.locations_synced = result.total
        sync_log.locations_added = result.added
        sync_log.locations_updated = result.updated
        sync_log.duration_ms = result.duration_ms
        sync_log.completed_at = _utcnow()
        await db.commit()
    except Exception as e:
        logger.exception("Location sync %s failed", log_id)
        try:
            await _record_failure(db, log_id, started, e)
        except Exception:
            logger.exception("Could not record failure of location sync %s", log_id)
        raise

    logger.info(
        "Location sync %s completed: %d total, %d added, %d updated in %d ms",
        log_id, result.total, result.added, result.updated, result.duration_ms,
    )
    return result
