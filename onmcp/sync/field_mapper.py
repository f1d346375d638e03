"""Rocket CRM location payload -> local column mapping."""

from __future__ import annotations

from datetime import datetime, timezone
from typing import Any

UNNAMED_LOCATION = "Unnamed Location"

# local column -> CRM payload key
LOCATION_FIELD_MAP = {
    "address": "address",
    "city": "city",
    "state": "state",
    "country": "country",
    "postal_code": "postalCode",
    "phone": "phone",
    "email": "email",
    "website": "website",
    "timezone": "timezone",
    "logo_url": "logoUrl",
}


def _text(value: Any) -> str | None:
    if value is None or value == "":
        return None
    return value if isinstance(value, str) else str(value)


def external_location_id(payload: dict[str, Any]) -> str | None:
    for key in ("id", "_id"):
        value = payload.get(key)
        if isinstance(value, str) and value:
            return value
    return None


def crm_location_to_local(
    payload: dict[str, Any], synced_at: datetime | None = None,
) -> dict[str, Any]:
    """Map a raw location payload to CRMLocation columns.

    Every mapped column is always present: keys missing from the payload map
    to None, so applying the result to an existing row fully replaces it.
    """
    fields: dict[str, Any] = {
        "location_id": external_location_id(payload),
        "name": _text(payload.get("name")) or UNNAMED_LOCATION,
    }
    for column, key in LOCATION_FIELD_MAP.items():
        fields[column] = _text(payload.get(key))
    fields["crm_metadata"] = payload
    fields["last_sync_at"] = synced_at or datetime.now(timezone.utc)
    return fields
