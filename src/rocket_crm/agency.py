"""Agency API - sub-account (location) listing under the agency key."""

from __future__ import annotations

from typing import Any, TYPE_CHECKING

from .client import CRMResponse

if TYPE_CHECKING:
    from .client import CRMClient


class AgencyAPI:
    """Agency-level API.

    Usage:
        async with CRMClient(config) as crm:
            page = await crm.agency.list_locations(limit=100, skip=200)
            detail = await crm.agency.get_location("location_id")
    """

    def __init__(self, client: "CRMClient"):
        self._client = client

    async def list_locations(
        self,
        limit: int | None = None,
        skip: int | None = None,
        search: str | None = None,
        company_id: str | None = None,
    ) -> CRMResponse:
        """Fetch one page of sub-accounts.

        Args:
            limit: Page size
            skip: Offset into the full listing
            search: Filter by location name
            company_id: Agency (company) ID, when the account requires it

        Returns:
            CRMResponse whose data is {"locations": [...], "count": N, "total": N}
        """
        token = self._client.resolve_token("agency")
        if not token:
            return CRMResponse.failure("Agency API key not configured")

        params: dict[str, str] = {}
        if company_id:
            params["companyId"] = company_id
        if limit:
            params["limit"] = str(limit)
        if skip:
            params["skip"] = str(skip)
        if search:
            params["search"] = search

        return await self._client.request("/locations/search", token, params=params)

    async def get_location(self, location_id: str) -> CRMResponse:
        """Get a single sub-account's details ({"location": {...}})."""
        token = self._client.resolve_token("agency")
        if not token:
            return CRMResponse.failure("Agency API key not configured")
        return await self._client.request(f"/locations/{location_id}", token)

    async def check_health(self) -> dict[str, Any]:
        """Probe the API with whichever agency-level key is configured."""
        token = self._client.resolve_token("agency") or self._client.resolve_token("pit")
        if not token:
            return {"online": False, "error": "No CRM API key configured"}

        result = await self._client.request("/locations/search", token, params={"limit": "1"})
        data = result.data if isinstance(result.data, dict) else {}
        return {
            "online": result.status == 200,
            "error": result.error,
            "status": result.status,
            "hasLocations": isinstance(data.get("locations"), list),
        }
