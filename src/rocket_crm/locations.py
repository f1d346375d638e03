"""Location-scoped API - reads that need a per-location (or OAuth) token."""

from __future__ import annotations

from typing import TYPE_CHECKING

from .client import CRMResponse

if TYPE_CHECKING:
    from .client import CRMClient


class LocationAPI:
    """Read-only access to one sub-account's data."""

    def __init__(self, client: "CRMClient"):
        self._client = client

    async def _get(self, endpoint: str, token: str, params: dict[str, str]) -> CRMResponse:
        resolved = self._client.resolve_token("location", token)
        if not resolved:
            return CRMResponse.failure("Location token required")
        return await self._client.request(endpoint, resolved, params=params)

    async def get_contacts(
        self, location_id: str, token: str, params: dict[str, str] | None = None,
    ) -> CRMResponse:
        """List contacts ({"contacts": [...], "meta": {...}})."""
        return await self._get("/contacts/", token, {**(params or {}), "locationId": location_id})

    async def get_opportunities(
        self, location_id: str, token: str, pipeline_id: str | None = None,
    ) -> CRMResponse:
        """Search opportunities, optionally within one pipeline."""
        params = {"location_id": location_id}
        if pipeline_id:
            params["pipeline_id"] = pipeline_id
        return await self._get("/opportunities/search", token, params)

    async def get_conversations(self, location_id: str, token: str) -> CRMResponse:
        return await self._get("/conversations/search", token, {"locationId": location_id})

    async def get_calendars(self, location_id: str, token: str) -> CRMResponse:
        return await self._get("/calendars/", token, {"locationId": location_id})

    async def get_pipelines(self, location_id: str, token: str) -> CRMResponse:
        return await self._get("/opportunities/pipelines", token, {"locationId": location_id})

    async def get_users(self, location_id: str, token: str) -> CRMResponse:
        return await self._get("/users/", token, {"locationId": location_id})
